"""Logging utilities for release-installer.

This package provides structured logging with:
- Colored console output (plain messages for INFO)
- File rotation using RotatingFileHandler
- QueueHandler/QueueListener so the event loop never blocks on log I/O
- Hierarchical logger naming (e.g. release_installer.core.extract.tar)

Architecture:
    Application → QueueHandler → Queue → QueueListener Thread
                                              ↓
                                    Console + File Handlers

Usage:
    >>> from release_installer.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Extracting %s", archive_name)  # %-style formatting

Environment Variables:
    RELEASE_INSTALLER_LOG_DIR: Override the log directory (used by tests).

Rules for contributors:
    1. Always use: logger = get_logger(__name__)
    2. Never call logging.basicConfig()
    3. Never attach handlers to child loggers
    4. Never use f-strings in log calls
"""

from release_installer.logger.config import (
    set_console_level as _set_console_level,
)
from release_installer.logger.config import (
    update_logger_from_config as _update_config,
)
from release_installer.logger.formatters import (
    ColoredConsoleFormatter,
    HybridConsoleFormatter,
    SimpleConsoleFormatter,
)
from release_installer.logger.handlers import ConfigurationError
from release_installer.logger.logger import (
    flush_all_handlers,
    get_logger,
    setup_logging,
)
from release_installer.logger.state import get_state
from release_installer.types import GlobalConfig

__all__ = [
    "ColoredConsoleFormatter",
    "ConfigurationError",
    "HybridConsoleFormatter",
    "SimpleConsoleFormatter",
    "flush_all_handlers",
    "get_logger",
    "set_console_level",
    "setup_logging",
    "update_logger_from_config",
]


def update_logger_from_config(config: GlobalConfig) -> None:
    """Apply log levels from the loaded global configuration."""
    _update_config(get_state(), config)


def set_console_level(level: str) -> None:
    """Change the console handler level (e.g. "INFO" for --verbose)."""
    _set_console_level(get_state(), level)
