"""GitHub release metadata - models and API client."""

from release_installer.core.github.client import ReleaseAPIClient
from release_installer.core.github.models import (
    ReleaseAsset,
    ReleaseInfo,
    parse_repo,
)

__all__ = [
    "ReleaseAPIClient",
    "ReleaseAsset",
    "ReleaseInfo",
    "parse_repo",
]
