"""Command-line interface for release-installer."""

from release_installer.cli.parser import CLIParser
from release_installer.cli.runner import CLIRunner

__all__ = ["CLIParser", "CLIRunner"]
