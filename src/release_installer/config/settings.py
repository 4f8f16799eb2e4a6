"""Global configuration manager for INI settings."""

import configparser
from datetime import UTC, datetime
from pathlib import Path

from release_installer.config.paths import Paths
from release_installer.constants import (
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_TIMEOUT_SECONDS,
    KEY_CONSOLE_LOG_LEVEL,
    KEY_LOG_LEVEL,
    KEY_OUTPUT_DIR,
    KEY_RETRY_ATTEMPTS,
    KEY_TIMEOUT_SECONDS,
    SECTION_DEFAULT,
    SECTION_NETWORK,
    VALID_LOG_LEVELS,
)
from release_installer.logger import get_logger
from release_installer.types import GlobalConfig, NetworkConfig

logger = get_logger(__name__)

FILE_HEADER = """\
# release-installer configuration
# Generated: {timestamp}
#
# Edit values below; unknown keys are ignored.

"""

KEY_COMMENTS: dict[str, str] = {
    KEY_LOG_LEVEL: "# DEBUG, INFO, WARNING, ERROR, CRITICAL (log file)",
    KEY_CONSOLE_LOG_LEVEL: "# console output level (--verbose forces INFO)",
    KEY_OUTPUT_DIR: "# default install directory (--output overrides)",
    KEY_RETRY_ATTEMPTS: "# attempts per HTTP request",
    KEY_TIMEOUT_SECONDS: "# base network timeout in seconds",
}


def _strip_inline_comment(value: str) -> str:
    """Strip inline comments (anything after '  #') from a value."""
    if "  #" in value:
        return value.split("  #")[0].strip()
    return value.strip()


class GlobalConfigManager:
    """Manages the global settings.conf file."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize global config manager.

        Args:
            config_dir: Configuration directory path
                (defaults to Paths.config_dir())

        """
        self.config_dir = config_dir or Paths.config_dir()
        self.settings_file = Paths.settings_file(self.config_dir)

    @staticmethod
    def get_default_global_config() -> GlobalConfig:
        """Return built-in defaults."""
        return GlobalConfig(
            log_level=DEFAULT_LOG_LEVEL,
            console_log_level=DEFAULT_CONSOLE_LOG_LEVEL,
            output_dir=Path(DEFAULT_OUTPUT_DIR),
            network=NetworkConfig(
                retry_attempts=DEFAULT_RETRY_ATTEMPTS,
                timeout_seconds=DEFAULT_TIMEOUT_SECONDS,
            ),
        )

    def load_global_config(self) -> GlobalConfig:
        """Load global configuration, creating the file on first use.

        Returns:
            Loaded global configuration

        """
        if not self.settings_file.exists():
            defaults = self.get_default_global_config()
            self.save_global_config(defaults)
            return defaults

        parser = configparser.ConfigParser(
            inline_comment_prefixes=("#", ";"),
            interpolation=None,
        )
        parser.read(self.settings_file, encoding="utf-8")
        return self._convert_to_global_config(parser)

    def save_global_config(self, config: GlobalConfig) -> None:
        """Write configuration to settings.conf with explanatory comments.

        Args:
            config: Global configuration to save

        """
        self.config_dir.mkdir(parents=True, exist_ok=True)
        default_data = {
            KEY_LOG_LEVEL: config["log_level"],
            KEY_CONSOLE_LOG_LEVEL: config["console_log_level"],
            KEY_OUTPUT_DIR: str(config["output_dir"]),
        }
        network_data = {
            KEY_RETRY_ATTEMPTS: str(config["network"]["retry_attempts"]),
            KEY_TIMEOUT_SECONDS: str(config["network"]["timeout_seconds"]),
        }

        timestamp = datetime.now(tz=UTC).strftime("%Y-%m-%d %H:%M:%S")
        with self.settings_file.open("w", encoding="utf-8") as f:
            f.write(FILE_HEADER.format(timestamp=timestamp))
            for section, data in (
                (SECTION_DEFAULT, default_data),
                (SECTION_NETWORK, network_data),
            ):
                f.write(f"[{section}]\n")
                for key, value in data.items():
                    f.write(f"{key} = {value}  {KEY_COMMENTS[key]}\n")
                f.write("\n")

        logger.debug("Saved configuration: %s", self.settings_file)

    def _convert_to_global_config(
        self, parser: configparser.ConfigParser
    ) -> GlobalConfig:
        """Convert a parsed INI file to a typed GlobalConfig.

        Invalid values are replaced by their defaults with a warning.
        """
        defaults = self.get_default_global_config()
        section = parser[SECTION_DEFAULT]

        def get_level(key: str, default: str) -> str:
            value = _strip_inline_comment(section.get(key, default)).upper()
            if value not in VALID_LOG_LEVELS:
                logger.warning(
                    "Invalid %s %r in %s; using %s",
                    key,
                    value,
                    self.settings_file,
                    default,
                )
                return default
            return value

        def get_int(key: str, default: int) -> int:
            if not parser.has_section(SECTION_NETWORK):
                return default
            raw = parser.get(SECTION_NETWORK, key, fallback=str(default))
            try:
                value = int(_strip_inline_comment(raw))
            except ValueError:
                value = 0
            if value < 1:
                logger.warning(
                    "Invalid %s %r in %s; using %s",
                    key,
                    raw,
                    self.settings_file,
                    default,
                )
                return default
            return value

        output_dir = _strip_inline_comment(
            section.get(KEY_OUTPUT_DIR, DEFAULT_OUTPUT_DIR)
        )

        return GlobalConfig(
            log_level=get_level(KEY_LOG_LEVEL, defaults["log_level"]),
            console_log_level=get_level(
                KEY_CONSOLE_LOG_LEVEL, defaults["console_log_level"]
            ),
            output_dir=Paths.expand_path(output_dir or DEFAULT_OUTPUT_DIR),
            network=NetworkConfig(
                retry_attempts=get_int(
                    KEY_RETRY_ATTEMPTS,
                    defaults["network"]["retry_attempts"],
                ),
                timeout_seconds=get_int(
                    KEY_TIMEOUT_SECONDS,
                    defaults["network"]["timeout_seconds"],
                ),
            ),
        )
