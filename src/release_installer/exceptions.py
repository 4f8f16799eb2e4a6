"""Exception classes for release-installer operations."""

from collections.abc import Sequence


class ReleaseInstallerError(Exception):
    """Base exception for release-installer operations."""

    error_prefix: str = "Operation failed"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional name of the target that failed.

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class InstallationError(ReleaseInstallerError):
    """Raised when installation fails."""

    error_prefix = "Installation failed"


class ValidationError(ReleaseInstallerError):
    """Raised when user input validation fails."""

    error_prefix = "Validation failed"


class ReleaseNotFoundError(ReleaseInstallerError):
    """Raised when the requested release tag does not exist."""

    error_prefix = "Release lookup failed"


class GitHubAPIError(ReleaseInstallerError):
    """Raised when the GitHub API cannot be queried."""

    error_prefix = "GitHub API request failed"


class UnsupportedPlatformError(ReleaseInstallerError):
    """Raised when the host OS or CPU architecture is not recognised."""

    error_prefix = "Unsupported platform"


class ExtractionError(ReleaseInstallerError):
    """Raised when an archive cannot be extracted."""

    error_prefix = "Extraction failed"


class UnsafeArchiveEntryError(ExtractionError):
    """Raised when an archive entry would be written outside the target."""

    error_prefix = "Unsafe archive entry"


class NoMatchingAssetError(ReleaseInstallerError):
    """Raised when no release asset matches the current platform.

    Carries the complete asset list so callers can show it to the user.
    """

    error_prefix = "No matching asset found"

    def __init__(
        self, platform_key: str, available_assets: Sequence[str]
    ) -> None:
        """Initialize error with the platform and the assets considered.

        Args:
            platform_key: Combined platform key (e.g. "linux-x64").
            available_assets: Every asset name in the release.

        """
        super().__init__(f"no asset for platform {platform_key}")
        self.platform_key = platform_key
        self.available_assets = list(available_assets)
