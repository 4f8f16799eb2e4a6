"""Logging formatters for console output.

- ColoredConsoleFormatter: wraps the level name in ANSI colour codes
- SimpleConsoleFormatter: message only
- HybridConsoleFormatter: simple for INFO, coloured and structured otherwise

INFO is what ``--verbose`` prints as progress, so it stays free of
timestamps; warnings and errors keep their context.
"""

import logging

from release_installer.constants import LOG_COLORS


class ColoredConsoleFormatter(logging.Formatter):
    """Console formatter with ANSI colour support for level names."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the record with a coloured level name.

        The record's levelname is swapped only for the duration of the
        call so other handlers see the original value.
        """
        if record.levelname in LOG_COLORS:
            color = LOG_COLORS[record.levelname]
            reset = LOG_COLORS["RESET"]
            original_levelname = record.levelname
            record.levelname = f"{color}{original_levelname}{reset}"
            try:
                return super().format(record)
            finally:
                record.levelname = original_levelname

        return super().format(record)


class SimpleConsoleFormatter(logging.Formatter):
    """Formatter that outputs only the message content."""

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


class HybridConsoleFormatter(logging.Formatter):
    """Console formatter with simple format for INFO, structured for others.

    Example Output:
        INFO:     "Downloading zola-v0.20.0-x86_64-unknown-linux-gnu.tar.gz..."
        WARNING:  "12:30:45 - release_installer.core.download - WARNING - ..."

    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
    ) -> None:
        """Initialize hybrid formatter.

        Args:
            fmt: Format string for structured messages
            datefmt: Date format string for timestamps

        """
        super().__init__(fmt, datefmt)
        self._simple_formatter = SimpleConsoleFormatter()
        self._colored_formatter = ColoredConsoleFormatter(fmt, datefmt)

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno == logging.INFO:
            return self._simple_formatter.format(record)
        return self._colored_formatter.format(record)
