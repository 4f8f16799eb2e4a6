"""Tests for the ReleaseInstaller workflow."""

import stat
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from release_installer.core.download import DownloadError
from release_installer.core.github import ReleaseAsset, ReleaseInfo
from release_installer.core.installer import (
    InstallOptions,
    ReleaseInstaller,
)
from release_installer.core.platform import (
    ArchFamily,
    OSFamily,
    PlatformDescriptor,
)
from release_installer.exceptions import (
    ExtractionError,
    InstallationError,
    NoMatchingAssetError,
    ValidationError,
)

LINUX_X64 = PlatformDescriptor(OSFamily.LINUX, ArchFamily.X64)

ASSET_NAMES = [
    "tool-v1.0.0-x86_64-apple-darwin.tar.gz",
    "tool-v1.0.0-x86_64-unknown-linux-gnu.zip",
    "tool-v1.0.0-x86_64-unknown-linux-gnu.tar.gz",
    "checksums.txt",
]


def make_release(names: list[str] = ASSET_NAMES) -> ReleaseInfo:
    return ReleaseInfo(
        tag_name="v1.0.0",
        assets=[
            ReleaseAsset(
                name=name, download_url=f"https://example.com/{name}", size=1
            )
            for name in names
        ],
    )


@pytest.fixture
def api_client() -> MagicMock:
    client = MagicMock()
    client.fetch_release = AsyncMock(return_value=make_release())
    return client


@pytest.fixture
def archive_bytes(tar_gz_factory) -> bytes:
    return tar_gz_factory(
        {
            "tool-v1.0.0/tool": b"#!/bin/sh\necho tool\n",
            "tool-v1.0.0/tool.1": b"man page",
            "tool-v1.0.0/LICENSE": b"MIT",
        }
    )


@pytest.fixture
def download_service(archive_bytes: bytes) -> MagicMock:
    async def fake_download(url: str, dest: Path) -> Path:
        dest.write_bytes(archive_bytes)
        return dest

    service = MagicMock()
    service.download_file = AsyncMock(side_effect=fake_download)
    return service


@pytest.fixture
def installer(api_client, download_service) -> ReleaseInstaller:
    return ReleaseInstaller(
        MagicMock(),
        platform=LINUX_X64,
        api_client=api_client,
        download_service=download_service,
    )


@pytest.mark.asyncio
async def test_install_success(installer, download_service, tmp_path: Path):
    output_dir = tmp_path / "bin"

    result = await installer.install(
        "owner/tool", "v1.0.0", InstallOptions(output_dir=output_dir)
    )

    out = output_dir.resolve()
    assert result.asset_name == "tool-v1.0.0-x86_64-unknown-linux-gnu.tar.gz"
    assert result.tag_name == "v1.0.0"
    assert result.output_dir == out
    assert result.binaries == [out / "tool-v1.0.0" / "tool"]
    assert len(result.extracted_files) == 3
    download_service.download_file.assert_awaited_once_with(
        f"https://example.com/{result.asset_name}", out / result.asset_name
    )
    # Archive is removed after extraction
    assert not (out / result.asset_name).exists()


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
@pytest.mark.asyncio
async def test_install_marks_binary_executable(installer, tmp_path: Path):
    result = await installer.install(
        "owner/tool", "v1.0.0", InstallOptions(output_dir=tmp_path)
    )

    mode = stat.S_IMODE(result.binaries[0].stat().st_mode)
    assert mode == 0o755


@pytest.mark.asyncio
async def test_install_custom_bin_name(installer, tmp_path: Path):
    result = await installer.install(
        "owner/tool",
        "v1.0.0",
        InstallOptions(bin_name="LICENSE", output_dir=tmp_path),
    )

    assert [p.name for p in result.binaries] == ["LICENSE"]


@pytest.mark.asyncio
async def test_install_uses_platform_map(
    installer, download_service, tmp_path: Path
):
    options = InstallOptions(
        output_dir=tmp_path,
        platform_map={
            "linux-x64": "tool-{version}-x86_64-apple-darwin.tar.gz"
        },
    )

    result = await installer.install("owner/tool", "v1.0.0", options)

    assert result.asset_name == "tool-v1.0.0-x86_64-apple-darwin.tar.gz"


@pytest.mark.asyncio
async def test_install_platform_map_names_missing_asset(
    installer, download_service, tmp_path: Path
):
    options = InstallOptions(
        output_dir=tmp_path,
        platform_map={"linux-x64": "tool-{version}-custom.tar.gz"},
    )

    with pytest.raises(InstallationError, match="not found in release"):
        await installer.install("owner/tool", "v1.0.0", options)

    download_service.download_file.assert_not_awaited()


@pytest.mark.asyncio
async def test_install_no_matching_asset(
    installer, api_client, download_service, tmp_path: Path
):
    api_client.fetch_release.return_value = make_release(
        ["tool-freebsd.tar.gz", "checksums.txt"]
    )

    with pytest.raises(NoMatchingAssetError) as exc_info:
        await installer.install(
            "owner/tool", "v1.0.0", InstallOptions(output_dir=tmp_path)
        )

    assert exc_info.value.platform_key == "linux-x64"
    assert exc_info.value.available_assets == [
        "tool-freebsd.tar.gz",
        "checksums.txt",
    ]
    download_service.download_file.assert_not_awaited()


@pytest.mark.asyncio
async def test_install_invalid_repo(installer, api_client):
    with pytest.raises(ValidationError):
        await installer.install("tool", "v1.0.0")

    api_client.fetch_release.assert_not_awaited()


@pytest.mark.asyncio
async def test_install_refuses_to_overwrite(installer, tmp_path: Path):
    (tmp_path / "tool").write_bytes(b"old")

    with pytest.raises(InstallationError, match="--force"):
        await installer.install(
            "owner/tool", "v1.0.0", InstallOptions(output_dir=tmp_path)
        )

    assert (tmp_path / "tool").read_bytes() == b"old"


@pytest.mark.asyncio
async def test_install_refuses_to_overwrite_windows_binary(
    installer, tmp_path: Path
):
    (tmp_path / "tool.exe").write_bytes(b"MZ")

    with pytest.raises(InstallationError, match="tool.exe already exists"):
        await installer.install(
            "owner/tool", "v1.0.0", InstallOptions(output_dir=tmp_path)
        )


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
@pytest.mark.asyncio
async def test_install_leaves_similarly_named_files_alone(
    installer, tmp_path: Path
):
    toolbox = tmp_path / "toolbox"
    toolbox.write_bytes(b"unrelated")
    toolbox.chmod(0o644)

    result = await installer.install(
        "owner/tool", "v1.0.0", InstallOptions(output_dir=tmp_path)
    )

    assert result.binaries == [tmp_path.resolve() / "tool-v1.0.0" / "tool"]
    assert toolbox.read_bytes() == b"unrelated"
    assert stat.S_IMODE(toolbox.stat().st_mode) == 0o644


@pytest.mark.asyncio
async def test_install_force_overwrites(installer, tmp_path: Path):
    (tmp_path / "tool-v1.0.0").mkdir()
    (tmp_path / "tool-v1.0.0" / "tool").write_bytes(b"old")

    await installer.install(
        "owner/tool",
        "v1.0.0",
        InstallOptions(output_dir=tmp_path, force=True),
    )

    assert (tmp_path / "tool-v1.0.0" / "tool").read_bytes() == (
        b"#!/bin/sh\necho tool\n"
    )


@pytest.mark.asyncio
async def test_install_removes_archive_when_extraction_fails(
    installer, download_service, tmp_path: Path
):
    async def corrupt_download(url: str, dest: Path) -> Path:
        dest.write_bytes(b"not a gzip file")
        return dest

    download_service.download_file.side_effect = corrupt_download

    with pytest.raises(ExtractionError):
        await installer.install(
            "owner/tool", "v1.0.0", InstallOptions(output_dir=tmp_path)
        )

    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_install_download_error_propagates(
    installer, download_service, tmp_path: Path
):
    download_service.download_file.side_effect = DownloadError("offline")

    with pytest.raises(DownloadError):
        await installer.install(
            "owner/tool", "v1.0.0", InstallOptions(output_dir=tmp_path)
        )


@pytest.mark.asyncio
async def test_install_without_binary_warns(
    installer, tmp_path: Path, caplog
):
    result = await installer.install(
        "owner/tool",
        "v1.0.0",
        InstallOptions(bin_name="missing", output_dir=tmp_path),
    )

    assert result.binaries == []
    assert "No binary named 'missing'" in caplog.text


def test_select_asset_prefers_tar_gz(installer):
    assert installer.select_asset(ASSET_NAMES, "v1.0.0") == (
        "tool-v1.0.0-x86_64-unknown-linux-gnu.tar.gz"
    )


def test_platform_is_detected_lazily(monkeypatch):
    detected = PlatformDescriptor(OSFamily.DARWIN, ArchFamily.ARM64)
    detect = MagicMock(return_value=detected)
    monkeypatch.setattr(
        "release_installer.core.installer.detect_platform", detect
    )
    installer = ReleaseInstaller(MagicMock())

    assert installer.platform is detected
    assert installer.platform is detected
    detect.assert_called_once_with()


def test_network_settings_are_applied():
    installer = ReleaseInstaller(
        MagicMock(),
        network={"retry_attempts": 5, "timeout_seconds": 2},
        platform=LINUX_X64,
    )

    assert installer.api_client.retry_attempts == 5
    assert installer.download_service.retry_attempts == 5
