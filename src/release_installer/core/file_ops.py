"""File operations applied after extraction.

Release archives rarely agree on layout: the binary may sit at the top
level or inside a versioned directory. Binaries are therefore picked by
name from the extracted files, wherever they landed.
"""

import contextlib
from pathlib import Path

from release_installer.constants import EXECUTABLE_MODE
from release_installer.logger import get_logger

logger = get_logger(__name__)

WINDOWS_EXECUTABLE_SUFFIX = ".exe"


def is_binary_candidate(path: Path, bin_name: str) -> bool:
    """Check whether a file name looks like the binary ``bin_name``.

    The name must contain ``bin_name`` and carry no extension other than
    ".exe", so "zola" and "zola.exe" qualify but "zola.1" or "README.md"
    do not.
    """
    name = path.name
    if bin_name not in name:
        return False
    if name.lower().endswith(WINDOWS_EXECUTABLE_SUFFIX):
        name = name[: -len(WINDOWS_EXECUTABLE_SUFFIX)]
    return "." not in name


def is_exact_binary(path: Path, bin_name: str) -> bool:
    """Check whether a file is named ``bin_name`` or ``bin_name``.exe."""
    return path.name in {bin_name, bin_name + WINDOWS_EXECUTABLE_SUFFIX}


def find_installed(root: Path, bin_name: str) -> list[Path]:
    """Find files under ``root`` named exactly like the binary.

    Used to detect a previous installation, so unrelated files whose
    names merely contain ``bin_name`` are not reported.
    """
    return sorted(
        path
        for path in root.rglob("*")
        if path.is_file() and is_exact_binary(path, bin_name)
    )


def select_binaries(paths: list[Path], bin_name: str) -> list[Path]:
    """Filter extracted files down to binary candidates, keeping order."""
    return [path for path in paths if is_binary_candidate(path, bin_name)]


def make_executable(path: Path) -> bool:
    """Make file executable (mode 0o755).

    Permission changes can fail on some filesystems (and are meaningless
    on Windows); failures are logged and reported as False.

    Returns:
        True if the mode was changed

    """
    try:
        path.chmod(EXECUTABLE_MODE)
    except OSError as e:
        logger.debug("Could not chmod %s: %s", path, e)
        return False
    logger.debug("File permissions updated: %s", path.name)
    return True


def remove_file(path: Path) -> None:
    """Remove a file, ignoring errors (used for archive cleanup)."""
    with contextlib.suppress(OSError):
        path.unlink()
        logger.debug("Removed %s", path)
