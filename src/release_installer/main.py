"""Main CLI entry point for release-installer.

This module provides the minimal entry point for the command-line
interface, delegating all work to the CLI runner.
"""

import asyncio
import sys

from release_installer.cli import CLIRunner
from release_installer.logger import get_logger

# uvloop does not support Windows
if sys.platform != "win32":
    import uvloop

logger = get_logger(__name__)


async def async_main() -> None:
    """Run the CLI asynchronously."""
    logger.debug("CLI started")
    runner = CLIRunner()
    try:
        await runner.run()
        logger.debug("CLI completed successfully")
    except Exception:
        logger.exception("CLI encountered an error")
        raise


def main() -> None:
    """Run the CLI application on uvloop (asyncio's loop on Windows).

    Raises:
        SystemExit: With status 1 on cancellation or unexpected errors.

    """
    try:
        if sys.platform == "win32":
            asyncio.run(async_main())
        else:
            uvloop.run(async_main())
    except KeyboardInterrupt:
        logger.info("CLI cancelled by user")
        print("\nOperation cancelled by user", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        print(f"Error: Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
