"""Configuration management - global settings and path utilities."""

from release_installer.config.paths import Paths
from release_installer.config.settings import GlobalConfigManager
from release_installer.types import GlobalConfig, NetworkConfig

# The global settings file is the only configuration source
ConfigManager = GlobalConfigManager

__all__ = [
    "ConfigManager",
    "GlobalConfig",
    "GlobalConfigManager",
    "NetworkConfig",
    "Paths",
]
