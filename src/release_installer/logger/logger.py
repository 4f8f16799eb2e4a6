"""Main logger module providing the public logging API.

- setup_logging(): one-time QueueListener setup, returns a named logger
- get_logger(): convenience wrapper used by every module
- flush_all_handlers(): wait until queued records reach their handlers
"""

import atexit
import contextlib
import logging
import time
from pathlib import Path

from release_installer.logger.config import load_log_settings
from release_installer.logger.handlers import (
    ROOT_LOGGER_NAME,
    setup_root_logger,
)
from release_installer.logger.state import get_state

FLUSH_TIMEOUT_SECONDS = 5.0


def flush_all_handlers() -> None:
    """Flush all handlers in the QueueListener so writes complete.

    QueueListener does not use task_done(), so the queue is polled until
    it drains (bounded by FLUSH_TIMEOUT_SECONDS).
    """
    state = get_state()
    if state.queue_listener is None or state.log_queue is None:
        return

    start_time = time.time()
    while not state.log_queue.empty():
        if time.time() - start_time > FLUSH_TIMEOUT_SECONDS:
            break
        time.sleep(0.01)

    # Give the listener thread time to hand over the last record
    time.sleep(0.1)

    for handler in state.queue_listener.handlers:
        with contextlib.suppress(OSError, ValueError):
            handler.flush()


def _cleanup_logging() -> None:
    """Stop the QueueListener on interpreter exit."""
    state = get_state()
    if state.queue_listener is not None:
        flush_all_handlers()
        state.queue_listener.stop()
        state.queue_listener = None


atexit.register(_cleanup_logging)


def setup_logging(
    name: str = ROOT_LOGGER_NAME,
    console_level: str | None = None,
    file_level: str | None = None,
    log_file: Path | None = None,
    enable_file_logging: bool = True,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Configure logging with the QueueHandler architecture.

    The root "release_installer" logger is initialized exactly once; child
    loggers such as "release_installer.core.download" propagate to it.

    Args:
        name: Logger name, typically __name__
        console_level: Console log level (default: WARNING)
        file_level: File log level (default: INFO)
        log_file: Path to log file
            (default: ~/.config/release-installer/logs/release-installer.log)
        enable_file_logging: Whether to enable file logging

    Returns:
        Logger instance for ``name``

    Raises:
        ConfigurationError: If file logging setup fails

    """
    state = get_state()
    with state.lock:
        if not state.root_initialized:
            cfg_console, cfg_file, cfg_path = load_log_settings()
            setup_root_logger(
                state,
                console_level or cfg_console,
                file_level or cfg_file,
                log_file or cfg_path,
                enable_file_logging,
            )

    return logging.getLogger(name)


def get_logger(
    name: str = ROOT_LOGGER_NAME,
    enable_file_logging: bool = True,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Get a logger, initializing the root logger on first use.

    Example:
        >>> from release_installer.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Selected asset: %s", asset_name)

    """
    return setup_logging(name=name, enable_file_logging=enable_file_logging)
