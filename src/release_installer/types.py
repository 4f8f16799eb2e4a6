"""Centralized type definitions for release-installer.

This module contains the TypedDict definitions shared across the
application to keep configuration shapes consistent.
"""

from pathlib import Path
from typing import TypedDict


class NetworkConfig(TypedDict):
    """Network configuration options."""

    retry_attempts: int
    timeout_seconds: int


class GlobalConfig(TypedDict):
    """Global application configuration."""

    log_level: str
    console_log_level: str
    output_dir: Path
    network: NetworkConfig
