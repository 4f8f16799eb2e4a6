"""GitHub release models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from release_installer.exceptions import ValidationError


@dataclass(slots=True, frozen=True)
class ReleaseAsset:
    """A downloadable file attached to a release.

    Attributes:
        name: Asset filename
        download_url: Direct download URL (browser_download_url)
        size: Asset size in bytes

    """

    name: str
    download_url: str
    size: int

    @classmethod
    def from_api_response(
        cls, asset_data: dict[str, Any]
    ) -> ReleaseAsset | None:
        """Create a ReleaseAsset from GitHub API asset data.

        Returns:
            Asset instance or None if required fields are missing

        """
        try:
            name = asset_data.get("name", "")
            download_url = asset_data.get("browser_download_url", "")
            size = asset_data.get("size", 0)

            if not name or not download_url:
                return None

            return cls(name=name, download_url=download_url, size=int(size))
        except (AttributeError, TypeError, ValueError):
            return None


@dataclass(slots=True, frozen=True)
class ReleaseInfo:
    """A published release and its assets.

    Attributes:
        tag_name: Release tag (e.g. "v0.20.0")
        assets: Release assets in listing order

    """

    tag_name: str
    assets: list[ReleaseAsset]

    @classmethod
    def from_api_response(cls, api_data: dict[str, Any]) -> ReleaseInfo:
        """Create ReleaseInfo from a GitHub "get release" response."""
        assets = []
        for asset_data in api_data.get("assets") or []:
            asset = ReleaseAsset.from_api_response(asset_data)
            if asset:
                assets.append(asset)
        return cls(tag_name=api_data.get("tag_name", ""), assets=assets)

    @property
    def asset_names(self) -> list[str]:
        return [asset.name for asset in self.assets]

    def get_asset(self, name: str) -> ReleaseAsset | None:
        """Return the asset named ``name``, if the release has one."""
        for asset in self.assets:
            if asset.name == name:
                return asset
        return None


def parse_repo(repo: str) -> tuple[str, str]:
    """Split an "owner/repo" slug.

    Raises:
        ValidationError: If the slug is not exactly two non-empty parts

    """
    parts = repo.strip().split("/")
    if len(parts) != 2 or not all(parts):  # noqa: PLR2004
        msg = f"expected <owner/repo>, got {repo!r}"
        raise ValidationError(msg)
    return parts[0], parts[1]
