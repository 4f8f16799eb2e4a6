"""Release installation workflow.

fetch release → pick asset for this platform → download → extract →
mark binaries executable → remove the archive.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

import aiohttp

from release_installer.constants import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_TIMEOUT_SECONDS,
)
from release_installer.core.download import DownloadService
from release_installer.core.extract import extract_archive
from release_installer.core.file_ops import (
    find_installed,
    make_executable,
    remove_file,
    select_binaries,
)
from release_installer.core.github import ReleaseAPIClient, parse_repo
from release_installer.core.platform import (
    PlatformDescriptor,
    detect_platform,
    resolve_platform_map,
    select_best_asset,
)
from release_installer.exceptions import (
    InstallationError,
    NoMatchingAssetError,
)
from release_installer.logger import get_logger
from release_installer.types import NetworkConfig

logger = get_logger(__name__)


@dataclass(slots=True)
class InstallOptions:
    """Options for a single installation.

    Attributes:
        bin_name: Binary name inside the archive (default: repo name)
        output_dir: Install directory
        platform_map: Combined platform key → asset name template
        force: Overwrite an existing installation

    """

    bin_name: str | None = None
    output_dir: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT_DIR))
    platform_map: Mapping[str, str] | None = None
    force: bool = False


@dataclass(slots=True, frozen=True)
class InstallResult:
    """Outcome of a successful installation."""

    repo: str
    tag_name: str
    asset_name: str
    output_dir: Path
    extracted_files: list[Path]
    binaries: list[Path]


class ReleaseInstaller:
    """Install a binary from a GitHub release."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        network: NetworkConfig | None = None,
        platform: PlatformDescriptor | None = None,
        api_client: ReleaseAPIClient | None = None,
        download_service: DownloadService | None = None,
    ) -> None:
        """Initialize the installer.

        Args:
            session: aiohttp session shared by API and download calls
            network: Retry and timeout settings
            platform: Target platform (default: detected from the host)
            api_client: Optional preconfigured API client
            download_service: Optional preconfigured download service

        """
        retry_attempts = DEFAULT_RETRY_ATTEMPTS
        timeout_seconds = DEFAULT_TIMEOUT_SECONDS
        if network is not None:
            retry_attempts = network["retry_attempts"]
            timeout_seconds = network["timeout_seconds"]

        self._platform = platform
        self.api_client = api_client or ReleaseAPIClient(
            session, retry_attempts, timeout_seconds
        )
        self.download_service = download_service or DownloadService(
            session, retry_attempts, timeout_seconds
        )

    @property
    def platform(self) -> PlatformDescriptor:
        if self._platform is None:
            self._platform = detect_platform()
        return self._platform

    async def install(
        self, repo: str, version: str, options: InstallOptions | None = None
    ) -> InstallResult:
        """Install ``repo`` at ``version``.

        Args:
            repo: Repository slug "owner/repo"
            version: Release tag
            options: Installation options

        Returns:
            Details of what was installed

        Raises:
            ValidationError: If ``repo`` is malformed
            ReleaseNotFoundError: If the tag does not exist
            NoMatchingAssetError: If no asset fits this platform
            InstallationError: If the chosen asset is missing or the binary
                is already installed and ``force`` is not set
            DownloadError: If the asset cannot be downloaded
            ExtractionError: If the archive cannot be extracted

        """
        options = options or InstallOptions()
        _, repo_name = parse_repo(repo)
        bin_name = options.bin_name or repo_name

        logger.info("Installing %s %s...", repo, version)
        release = await self.api_client.fetch_release(repo, version)
        logger.info(
            "Found %d assets for %s", len(release.assets), release.tag_name
        )

        platform = self.platform
        logger.info("Platform: %s", platform.combined_key)

        asset_name = self.select_asset(
            release.asset_names, version, options.platform_map
        )
        asset = release.get_asset(asset_name)
        if asset is None:
            msg = f"Asset {asset_name} not found in release"
            raise InstallationError(msg, target=repo)
        logger.info("Selected asset: %s", asset_name)

        output_dir = options.output_dir.resolve()
        existing = []
        if output_dir.is_dir():
            existing = find_installed(output_dir, bin_name)
        if existing and not options.force:
            msg = f"{existing[0]} already exists; use --force to overwrite"
            raise InstallationError(msg, target=repo)

        output_dir.mkdir(parents=True, exist_ok=True)
        archive_path = output_dir / asset_name

        logger.info("Downloading %s...", asset_name)
        await self.download_service.download_file(
            asset.download_url, archive_path
        )

        try:
            logger.info("Extracting %s...", asset_name)
            extracted = await extract_archive(archive_path, output_dir)
        finally:
            remove_file(archive_path)

        binaries = select_binaries(extracted, bin_name)
        if not binaries:
            logger.warning(
                "No binary named %r found in %s", bin_name, asset_name
            )
        for binary in binaries:
            if make_executable(binary):
                logger.info("Made %s executable", binary)

        logger.info(
            "Successfully installed %s %s to %s", repo, version, output_dir
        )
        return InstallResult(
            repo=repo,
            tag_name=release.tag_name,
            asset_name=asset_name,
            output_dir=output_dir,
            extracted_files=extracted,
            binaries=binaries,
        )

    def select_asset(
        self,
        asset_names: list[str],
        version: str,
        platform_map: Mapping[str, str] | None = None,
    ) -> str:
        """Choose the asset for this platform.

        A platform map entry wins over automatic matching.

        Raises:
            NoMatchingAssetError: If nothing fits the platform

        """
        platform = self.platform
        selected = resolve_platform_map(platform_map, platform, version)
        if selected is None:
            selected = select_best_asset(asset_names, platform)
        if selected is None:
            raise NoMatchingAssetError(platform.combined_key, asset_names)
        return selected
