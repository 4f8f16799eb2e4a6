"""CLI argument parser for release-installer.

Handles parsing of command-line arguments for the single install
command: ``release-installer <owner/repo> <version> [options]``.
"""

import argparse
from argparse import Namespace

from release_installer.types import GlobalConfig


class CLIParser:
    """Command-line argument parser for release-installer."""

    def __init__(self, global_config: GlobalConfig) -> None:
        """Initialize the CLI parser with global configuration.

        Args:
            global_config (GlobalConfig): Loaded global configuration,
                used for option defaults.

        """
        self.global_config = global_config

    def parse_args(self) -> Namespace:
        """Parse command-line arguments.

        Returns:
            Namespace: Parsed arguments namespace.

        """
        parser = self._create_main_parser()
        self._add_global_options(parser)
        self._add_install_arguments(parser)
        return parser.parse_args()

    def _create_main_parser(self) -> argparse.ArgumentParser:
        """Create the main argument parser.

        Returns:
            argparse.ArgumentParser: The configured main ArgumentParser
                instance.

        """
        return argparse.ArgumentParser(
            prog="release-installer",
            description="Download and install binaries from GitHub releases",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Install a release into ./bin
  %(prog)s getzola/zola v0.20.0

  # Binary name differs from the repository name
  %(prog)s BurntSushi/ripgrep 14.1.1 --bin-name rg

  # Custom output directory, overwrite an existing install
  %(prog)s sharkdp/fd v10.2.0 -o ~/.local/bin --force

  # Explicit asset names per platform ({version} is substituted)
  %(prog)s owner/tool v1.0.0 -p '{"linux-x64": "tool-{version}-linux.tar.gz"}'
  %(prog)s owner/tool v1.0.0 -p platform-map.json

Platform keys: darwin-x64, darwin-arm64, linux-x64, linux-arm64,
linux-arm, windows-x64, windows-arm64
            """,
        )

    def _add_global_options(self, parser: argparse.ArgumentParser) -> None:
        """Add global options to the main parser.

        Args:
            parser (argparse.ArgumentParser): The main parser to add
                options to.

        """
        # Long form only; -v is --verbose
        parser.add_argument(
            "--version",
            action="store_true",
            help="Show release-installer version and exit",
        )
        parser.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Show progress messages",
        )

    def _add_install_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add positional arguments and install options.

        The positionals are optional at parse time so ``--version`` works
        on its own; the runner reports them as missing otherwise.

        Args:
            parser (argparse.ArgumentParser): The main parser to add
                arguments to.

        """
        parser.add_argument(
            "repo",
            nargs="?",
            help="GitHub repository in owner/repo form",
        )
        parser.add_argument(
            "release_version",
            nargs="?",
            metavar="version",
            help="Release tag to install (e.g. v1.2.3)",
        )
        parser.add_argument(
            "-b",
            "--bin-name",
            help="Name of the binary (default: repository name)",
        )
        parser.add_argument(
            "-o",
            "--output",
            default=str(self.global_config["output_dir"]),
            help="Output directory (default: %(default)s)",
        )
        parser.add_argument(
            "-p",
            "--platform-map",
            help="JSON object or path to a JSON file mapping platform keys "
            "to asset names",
        )
        parser.add_argument(
            "-f",
            "--force",
            action="store_true",
            help="Overwrite an existing installation",
        )
