"""Path helpers for release-installer configuration."""

import os
from pathlib import Path

from release_installer.constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG_SUBDIR,
    ENV_CONFIG_DIR,
)


class Paths:
    """Application paths."""

    HOME_DIR = Path.home()
    DEFAULT_CONFIG_DIR = HOME_DIR / CONFIG_DIR_NAME / DEFAULT_CONFIG_SUBDIR

    @classmethod
    def config_dir(cls) -> Path:
        """Return the configuration directory.

        RELEASE_INSTALLER_CONFIG_DIR takes precedence over
        ~/.config/release-installer.
        """
        env_dir = os.getenv(ENV_CONFIG_DIR)
        if env_dir:
            return Path(env_dir).expanduser()
        return cls.DEFAULT_CONFIG_DIR

    @classmethod
    def settings_file(cls, config_dir: Path | None = None) -> Path:
        """Return the settings.conf path inside ``config_dir``."""
        return (config_dir or cls.config_dir()) / CONFIG_FILE_NAME

    @staticmethod
    def expand_path(path_str: str | Path) -> Path:
        """Expand ``~`` and environment variables in a path.

        Relative paths stay relative so "./bin" keeps meaning "relative to
        the working directory at install time".
        """
        return Path(os.path.expandvars(str(path_str))).expanduser()
