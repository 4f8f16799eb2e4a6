"""CLI runner for release-installer.

Loads configuration, parses arguments and drives one installation,
turning failures into an error message and exit status 1.
"""

import sys
from argparse import Namespace

import orjson

from release_installer import __version__
from release_installer.cli.parser import CLIParser
from release_installer.config import ConfigManager, Paths
from release_installer.core.download import DownloadError
from release_installer.core.http_session import create_http_session
from release_installer.core.installer import (
    InstallOptions,
    InstallResult,
    ReleaseInstaller,
)
from release_installer.exceptions import (
    NoMatchingAssetError,
    ReleaseInstallerError,
    ValidationError,
)
from release_installer.logger import (
    get_logger,
    set_console_level,
    update_logger_from_config,
)

logger = get_logger(__name__)


def load_platform_map(value: str) -> dict[str, str]:
    """Load a platform map from inline JSON or a JSON file.

    Args:
        value: JSON object text, or a path to a file containing one

    Returns:
        Mapping of combined platform key to asset name template

    Raises:
        ValidationError: If the value is not a JSON object of strings

    """
    path = Paths.expand_path(value)
    try:
        if value.lstrip().startswith("{") or not path.is_file():
            data = orjson.loads(value)
        else:
            data = orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as e:
        msg = f"Invalid platform map: {e}"
        raise ValidationError(msg) from e
    except OSError as e:
        msg = f"Cannot read platform map {path}: {e}"
        raise ValidationError(msg) from e

    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        msg = "Invalid platform map: expected a JSON object of strings"
        raise ValidationError(msg)
    return data


class CLIRunner:
    """CLI runner and orchestrator."""

    def __init__(self) -> None:
        """Initialize CLI runner.

        Loads the global configuration and applies its log levels.
        """
        self.config_manager = ConfigManager()
        self.global_config = self.config_manager.load_global_config()
        update_logger_from_config(self.global_config)

    async def run(self) -> None:
        """Run the CLI application.

        Raises:
            SystemExit: With status 1 on any failure.

        """
        try:
            parser = CLIParser(self.global_config)
            args = parser.parse_args()

            if args.version:
                print(__version__)
                return

            if not args.repo or not args.release_version:
                print(
                    "Error: Both repository and version are required",
                    file=sys.stderr,
                )
                print(
                    "Usage: release-installer <owner/repo> <version>",
                    file=sys.stderr,
                )
                sys.exit(1)

            if args.verbose:
                set_console_level("INFO")

            result = await self._install(args)
            print(
                f"✓ Successfully installed {result.repo} "
                f"{result.tag_name} to {result.output_dir}"
            )

        except NoMatchingAssetError as e:
            logger.error("%s", e)
            print(f"Error: {e}", file=sys.stderr)
            print("Available assets:", file=sys.stderr)
            for name in e.available_assets:
                print(f"  - {name}", file=sys.stderr)
            sys.exit(1)
        except (ReleaseInstallerError, DownloadError) as e:
            logger.error("%s", e)
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except KeyboardInterrupt:
            print("\nOperation cancelled by user", file=sys.stderr)
            sys.exit(1)
        except Exception as e:
            logger.exception("Unexpected error")
            print(f"Error: Unexpected error: {e}", file=sys.stderr)
            sys.exit(1)

    async def _install(self, args: Namespace) -> InstallResult:
        """Build install options from ``args`` and run the installer."""
        platform_map = None
        if args.platform_map:
            platform_map = load_platform_map(args.platform_map)

        options = InstallOptions(
            bin_name=args.bin_name,
            output_dir=Paths.expand_path(args.output),
            platform_map=platform_map,
            force=args.force,
        )

        async with create_http_session(self.global_config) as session:
            installer = ReleaseInstaller(
                session, network=self.global_config["network"]
            )
            return await installer.install(
                args.repo, args.release_version, options
            )
