"""Platform detection and release asset matching.

Matching is plain, case-insensitive text containment: an asset belongs to
a platform when its filename mentions at least one of the OS aliases and
at least one of the architecture aliases for that platform. There are no
negative patterns, so callers must query with the exact architecture
family ("arm" also occurs inside "arm64").
"""

from __future__ import annotations

import platform as _platform
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum

from release_installer.exceptions import UnsupportedPlatformError
from release_installer.logger import get_logger

logger = get_logger(__name__)

TAR_GZ_SUFFIX = ".tar.gz"
VERSION_PLACEHOLDER = "{version}"


class OSFamily(StrEnum):
    """Operating system families with published release assets."""

    DARWIN = "darwin"
    LINUX = "linux"
    WINDOWS = "windows"


class ArchFamily(StrEnum):
    """CPU architecture families with published release assets."""

    X64 = "x64"
    ARM64 = "arm64"
    ARM = "arm"


OS_PATTERNS: Mapping[OSFamily, tuple[str, ...]] = {
    OSFamily.DARWIN: ("apple-darwin", "macos", "darwin", "apple"),
    OSFamily.LINUX: ("linux-gnu", "linux", "unknown-linux"),
    OSFamily.WINDOWS: (
        "windows-msvc",
        "windows",
        "win64",
        "win32",
        "pc-windows",
    ),
}

ARCH_PATTERNS: Mapping[ArchFamily, tuple[str, ...]] = {
    ArchFamily.X64: ("x86_64", "x64", "amd64"),
    ArchFamily.ARM64: ("aarch64", "arm64"),
    ArchFamily.ARM: ("armv7", "arm"),
}

# platform.system() / platform.machine() spellings, lower-cased
_SYSTEM_ALIASES: Mapping[str, OSFamily] = {
    "darwin": OSFamily.DARWIN,
    "linux": OSFamily.LINUX,
    "windows": OSFamily.WINDOWS,
}

_MACHINE_ALIASES: Mapping[str, ArchFamily] = {
    "x86_64": ArchFamily.X64,
    "amd64": ArchFamily.X64,
    "x64": ArchFamily.X64,
    "aarch64": ArchFamily.ARM64,
    "arm64": ArchFamily.ARM64,
    "armv6l": ArchFamily.ARM,
    "armv7l": ArchFamily.ARM,
    "armv7": ArchFamily.ARM,
    "arm": ArchFamily.ARM,
}


@dataclass(slots=True, frozen=True)
class PlatformDescriptor:
    """OS family and CPU architecture of a (real or synthetic) host.

    Attributes:
        os_family: Operating system family
        arch_family: CPU architecture family
        combined_key: "<os>-<arch>", the key used by platform maps

    """

    os_family: OSFamily
    arch_family: ArchFamily
    combined_key: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "combined_key", f"{self.os_family}-{self.arch_family}"
        )

    @property
    def is_windows(self) -> bool:
        return self.os_family is OSFamily.WINDOWS


def detect_platform(
    system: str | None = None, machine: str | None = None
) -> PlatformDescriptor:
    """Classify the host (or the given system/machine strings).

    Args:
        system: Value like platform.system() returns (default: the host's)
        machine: Value like platform.machine() returns (default: the host's)

    Returns:
        Descriptor for the platform

    Raises:
        UnsupportedPlatformError: If the OS or architecture is unknown

    """
    system_name = (system or _platform.system()).lower()
    machine_name = (machine or _platform.machine()).lower()

    os_family = _SYSTEM_ALIASES.get(system_name)
    if os_family is None:
        msg = f"operating system {system_name!r} is not supported"
        raise UnsupportedPlatformError(msg)

    arch_family = _MACHINE_ALIASES.get(machine_name)
    if arch_family is None:
        msg = f"architecture {machine_name!r} is not supported"
        raise UnsupportedPlatformError(msg)

    descriptor = PlatformDescriptor(os_family, arch_family)
    logger.debug(
        "Detected platform %s (system=%s, machine=%s)",
        descriptor.combined_key,
        system_name,
        machine_name,
    )
    return descriptor


def matches_asset(asset_name: str, platform: PlatformDescriptor) -> bool:
    """Check whether an asset filename targets the given platform.

    Args:
        asset_name: Release asset filename
        platform: Platform to match against

    Returns:
        True if the name contains an OS alias and an arch alias

    """
    name = asset_name.lower()
    os_match = any(
        pattern in name for pattern in OS_PATTERNS[platform.os_family]
    )
    arch_match = any(
        pattern in name for pattern in ARCH_PATTERNS[platform.arch_family]
    )
    return os_match and arch_match


def select_best_asset(
    asset_names: Iterable[str], platform: PlatformDescriptor
) -> str | None:
    """Pick the asset to install for a platform.

    Among matching assets, non-Windows platforms prefer the first one ending
    in ".tar.gz"; otherwise the first match in listing order wins.

    Args:
        asset_names: Asset filenames in release listing order
        platform: Platform to select for

    Returns:
        Selected filename, or None when nothing matches

    """
    matches = [name for name in asset_names if matches_asset(name, platform)]

    if not matches:
        return None
    if len(matches) == 1:
        return matches[0]

    logger.debug(
        "%d assets match %s: %s",
        len(matches),
        platform.combined_key,
        ", ".join(matches),
    )

    if not platform.is_windows:
        for name in matches:
            if name.endswith(TAR_GZ_SUFFIX):
                return name

    return matches[0]


def resolve_platform_map(
    platform_map: Mapping[str, str] | None,
    platform: PlatformDescriptor,
    version: str,
) -> str | None:
    """Resolve a user-supplied asset name template for this platform.

    Args:
        platform_map: Mapping of combined keys to asset name templates
        platform: Platform to resolve for
        version: Release version substituted for "{version}"

    Returns:
        Asset filename, or None when the map has no entry for the platform

    """
    if not platform_map:
        return None
    template = platform_map.get(platform.combined_key)
    if not template:
        return None
    return template.replace(VERSION_PLACEHOLDER, version)
