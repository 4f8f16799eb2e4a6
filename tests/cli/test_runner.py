"""Tests for CLIRunner."""

from contextlib import asynccontextmanager
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import orjson
import pytest

from release_installer.cli.runner import CLIRunner, load_platform_map
from release_installer.core.download import DownloadError
from release_installer.core.installer import InstallResult
from release_installer.exceptions import (
    NoMatchingAssetError,
    ReleaseNotFoundError,
    ValidationError,
)


@asynccontextmanager
async def fake_session(global_config):
    yield MagicMock()


@pytest.fixture
def mock_installer():
    installer = MagicMock()
    installer.install = AsyncMock(
        return_value=InstallResult(
            repo="owner/tool",
            tag_name="v1.0.0",
            asset_name="tool-linux-x64.tar.gz",
            output_dir=Path("/tmp/bin"),
            extracted_files=[Path("/tmp/bin/tool")],
            binaries=[Path("/tmp/bin/tool")],
        )
    )
    with (
        patch(
            "release_installer.cli.runner.ReleaseInstaller",
            return_value=installer,
        ),
        patch(
            "release_installer.cli.runner.create_http_session",
            fake_session,
        ),
    ):
        yield installer


@pytest.fixture
def runner() -> CLIRunner:
    return CLIRunner()


class TestLoadPlatformMap:
    """Test platform map parsing."""

    def test_inline_json(self):
        assert load_platform_map('{"linux-x64": "a-{version}.tar.gz"}') == {
            "linux-x64": "a-{version}.tar.gz"
        }

    def test_json_file(self, tmp_path: Path):
        path = tmp_path / "map.json"
        path.write_bytes(orjson.dumps({"darwin-arm64": "a-mac.zip"}))

        assert load_platform_map(str(path)) == {"darwin-arm64": "a-mac.zip"}

    @pytest.mark.parametrize(
        "value", ["{not json", "[]", '{"linux-x64": 1}', "missing.json"]
    )
    def test_invalid(self, value):
        with pytest.raises(ValidationError, match="Invalid platform map"):
            load_platform_map(value)


@pytest.mark.asyncio
async def test_run_installs(runner, mock_installer, capsys):
    argv = ["release-installer", "owner/tool", "v1.0.0", "-o", "out", "-f"]
    with patch("sys.argv", argv):
        await runner.run()

    args, _ = mock_installer.install.call_args
    repo, version, options = args
    assert (repo, version) == ("owner/tool", "v1.0.0")
    assert options.output_dir == Path("out")
    assert options.force
    assert options.bin_name is None
    assert options.platform_map is None
    out = capsys.readouterr().out
    assert "Successfully installed owner/tool v1.0.0 to /tmp/bin" in out


@pytest.mark.asyncio
async def test_run_passes_platform_map(runner, mock_installer):
    argv = [
        "release-installer",
        "owner/tool",
        "v1.0.0",
        "-b",
        "tl",
        "-p",
        '{"linux-x64": "tool.tar.gz"}',
    ]
    with patch("sys.argv", argv):
        await runner.run()

    options = mock_installer.install.call_args.args[2]
    assert options.bin_name == "tl"
    assert options.platform_map == {"linux-x64": "tool.tar.gz"}


@pytest.mark.asyncio
async def test_run_version(runner, mock_installer, capsys):
    with patch("sys.argv", ["release-installer", "--version"]):
        await runner.run()

    assert capsys.readouterr().out.strip()
    mock_installer.install.assert_not_called()


@pytest.mark.asyncio
async def test_run_missing_arguments(runner, mock_installer, capsys):
    with patch("sys.argv", ["release-installer", "owner/tool"]):
        with pytest.raises(SystemExit) as exc_info:
            await runner.run()

    assert exc_info.value.code == 1
    assert "Both repository and version are required" in (
        capsys.readouterr().err
    )


@pytest.mark.asyncio
async def test_run_verbose_raises_console_level(runner, mock_installer):
    with (
        patch("sys.argv", ["release-installer", "a/b", "v1", "--verbose"]),
        patch(
            "release_installer.cli.runner.set_console_level"
        ) as mock_set_level,
    ):
        await runner.run()

    mock_set_level.assert_called_once_with("INFO")


@pytest.mark.asyncio
async def test_run_lists_assets_when_nothing_matches(
    runner, mock_installer, capsys
):
    mock_installer.install.side_effect = NoMatchingAssetError(
        "linux-x64", ["tool-mac.zip", "tool-win.zip"]
    )
    with patch("sys.argv", ["release-installer", "owner/tool", "v1.0.0"]):
        with pytest.raises(SystemExit) as exc_info:
            await runner.run()

    assert exc_info.value.code == 1
    err = capsys.readouterr().err
    assert "Error: No matching asset found" in err
    assert "Available assets:\n  - tool-mac.zip\n  - tool-win.zip\n" in err


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (
            ReleaseNotFoundError(
                "Release v9 not found for repository owner/tool"
            ),
            "Release v9 not found for repository owner/tool",
        ),
        (DownloadError("Failed to download asset x"), "Failed to download"),
        (RuntimeError("kaboom"), "Unexpected error: kaboom"),
    ],
)
async def test_run_reports_errors(
    runner, mock_installer, capsys, error, expected
):
    mock_installer.install.side_effect = error
    with patch("sys.argv", ["release-installer", "owner/tool", "v9"]):
        with pytest.raises(SystemExit) as exc_info:
            await runner.run()

    assert exc_info.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: ")
    assert expected in err


@pytest.mark.asyncio
async def test_run_invalid_platform_map(runner, mock_installer, capsys):
    argv = ["release-installer", "a/b", "v1", "-p", "{oops"]
    with patch("sys.argv", argv):
        with pytest.raises(SystemExit):
            await runner.run()

    assert "Invalid platform map" in capsys.readouterr().err
    mock_installer.install.assert_not_called()
