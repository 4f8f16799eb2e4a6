"""Centralized constants module for release-installer.

This module serves as the single source of truth for shared constants
across the release-installer codebase. Constants are organized by logical
categories and use typing.Final annotations to ensure immutability.

Usage:
    from release_installer.constants import TAR_BLOCK_SIZE
"""

from typing import Final

# =============================================================================
# Configuration Constants
# =============================================================================

CONFIG_FILE_NAME: Final[str] = "settings.conf"
CONFIG_DIR_NAME: Final[str] = ".config"
DEFAULT_CONFIG_SUBDIR: Final[str] = "release-installer"

# Environment overrides (used by tests to isolate from the user's home)
ENV_CONFIG_DIR: Final[str] = "RELEASE_INSTALLER_CONFIG_DIR"
ENV_LOG_DIR: Final[str] = "RELEASE_INSTALLER_LOG_DIR"

DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL: Final[str] = "WARNING"
DEFAULT_OUTPUT_DIR: Final[str] = "./bin"
DEFAULT_RETRY_ATTEMPTS: Final[int] = 3
DEFAULT_TIMEOUT_SECONDS: Final[int] = 10

SECTION_DEFAULT: Final[str] = "DEFAULT"
SECTION_NETWORK: Final[str] = "network"

KEY_LOG_LEVEL: Final[str] = "log_level"
KEY_CONSOLE_LOG_LEVEL: Final[str] = "console_log_level"
KEY_OUTPUT_DIR: Final[str] = "output_dir"
KEY_RETRY_ATTEMPTS: Final[str] = "retry_attempts"
KEY_TIMEOUT_SECONDS: Final[str] = "timeout_seconds"

VALID_LOG_LEVELS: Final[frozenset[str]] = frozenset(
    {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
)

# =============================================================================
# GitHub / HTTP Constants
# =============================================================================

GITHUB_API_BASE: Final[str] = "https://api.github.com"
USER_AGENT: Final[str] = "release-installer"
GITHUB_ACCEPT_HEADER: Final[str] = "application/vnd.github.v3+json"
HTTP_NOT_FOUND: Final[int] = 404

DOWNLOAD_CHUNK_SIZE: Final[int] = 8192
CONNECTOR_LIMIT: Final[int] = 10

# =============================================================================
# Archive Constants
# =============================================================================

TAR_BLOCK_SIZE: Final[int] = 512
TAR_NAME_FIELD: Final[slice] = slice(0, 100)
TAR_SIZE_FIELD: Final[slice] = slice(124, 136)
TAR_TYPE_FLAG_OFFSET: Final[int] = 156

TAR_GZ_SUFFIXES: Final[tuple[str, ...]] = (".tar.gz", ".tgz")
ZIP_SUFFIX: Final[str] = ".zip"

# Extraction reads the archive from disk in chunks of this size
EXTRACT_READ_CHUNK_SIZE: Final[int] = 64 * 1024

EXECUTABLE_MODE: Final[int] = 0o755

# =============================================================================
# Logging Constants
# =============================================================================

LOG_FILE_NAME: Final[str] = "release-installer.log"

# Rotate the log file once it reaches this size (bytes)
LOG_ROTATION_THRESHOLD_BYTES: Final[int] = 1024 * 1024  # 1 MB
LOG_BACKUP_COUNT: Final[int] = 3

LOG_CONSOLE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(funcName)s:%(lineno)d - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Color mapping for console output levels
LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}
