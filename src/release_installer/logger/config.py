"""Configuration loading and updating for the logging system.

The logger is needed before settings.conf has been read, so bootstrap
defaults come from constants and the environment. The CLI applies the
configured levels afterwards with ``update_logger_from_config``.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from release_installer.constants import (
    CONFIG_DIR_NAME,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    ENV_LOG_DIR,
    LOG_FILE_NAME,
)

if TYPE_CHECKING:
    from release_installer.logger.state import _LoggerState
    from release_installer.types import GlobalConfig


def load_log_settings() -> tuple[str, str, Path]:
    """Load bootstrap console level, file level, and log file path.

    Environment Variable Override:
        RELEASE_INSTALLER_LOG_DIR: Overrides the log directory. The test
        suite points it at a temporary directory so test runs never write
        to ~/.config/release-installer/logs.

    Returns:
        Tuple of (console_level, file_level, log_path)

    """
    env_log_dir = os.getenv(ENV_LOG_DIR)
    if env_log_dir:
        log_dir = Path(env_log_dir).expanduser()
    else:
        log_dir = (
            Path.home() / CONFIG_DIR_NAME / DEFAULT_CONFIG_SUBDIR / "logs"
        )

    log_path = log_dir / LOG_FILE_NAME
    return DEFAULT_CONSOLE_LOG_LEVEL, DEFAULT_LOG_LEVEL, log_path


def _iter_handlers(state: "_LoggerState") -> list[logging.Handler]:
    if state.queue_listener is None:
        return []
    return list(state.queue_listener.handlers)


def set_console_level(state: "_LoggerState", level: str) -> None:
    """Change the level of the console handler only.

    Args:
        state: Logger state object
        level: New console level name (e.g. "INFO" for --verbose)

    """
    console_level = getattr(logging, level.upper(), logging.WARNING)
    for handler in _iter_handlers(state):
        if isinstance(handler, logging.StreamHandler) and not isinstance(
            handler, RotatingFileHandler
        ):
            handler.setLevel(console_level)


def update_logger_from_config(
    state: "_LoggerState", config: "GlobalConfig"
) -> None:
    """Apply console and file levels from the loaded global config.

    Only handler levels change; handlers are never added or removed.

    Args:
        state: Logger state object
        config: Loaded global configuration

    """
    file_level = getattr(logging, config["log_level"], logging.INFO)
    set_console_level(state, config["console_log_level"])
    for handler in _iter_handlers(state):
        if isinstance(handler, RotatingFileHandler):
            handler.setLevel(file_level)

    state.config_applied = True
