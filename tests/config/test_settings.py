"""Tests for the global settings.conf manager."""

from pathlib import Path

import pytest

from release_installer.config import ConfigManager, Paths


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    return tmp_path / "config"


@pytest.fixture
def config_manager(config_dir: Path) -> ConfigManager:
    return ConfigManager(config_dir)


def test_defaults_written_on_first_load(
    config_manager: ConfigManager, config_dir: Path
) -> None:
    config = config_manager.load_global_config()

    assert config == ConfigManager.get_default_global_config()
    settings = (config_dir / "settings.conf").read_text(encoding="utf-8")
    assert "[DEFAULT]" in settings
    assert "[network]" in settings
    assert "retry_attempts = 3" in settings


def test_round_trip(config_manager: ConfigManager) -> None:
    config = ConfigManager.get_default_global_config()
    config["log_level"] = "DEBUG"
    config["output_dir"] = Path("/opt/tools")
    config["network"]["retry_attempts"] = 5

    config_manager.save_global_config(config)
    loaded = config_manager.load_global_config()

    assert loaded["log_level"] == "DEBUG"
    assert loaded["output_dir"] == Path("/opt/tools")
    assert loaded["network"]["retry_attempts"] == 5
    assert loaded["network"]["timeout_seconds"] == 10


def test_invalid_values_fall_back_to_defaults(
    config_manager: ConfigManager, config_dir: Path, caplog
) -> None:
    config_dir.mkdir(parents=True)
    (config_dir / "settings.conf").write_text(
        "[DEFAULT]\n"
        "log_level = LOUD\n"
        "console_log_level = error\n"
        "[network]\n"
        "retry_attempts = many\n"
        "timeout_seconds = -1\n",
        encoding="utf-8",
    )

    config = config_manager.load_global_config()

    assert config["log_level"] == "INFO"
    assert config["console_log_level"] == "ERROR"
    assert config["network"]["retry_attempts"] == 3
    assert config["network"]["timeout_seconds"] == 10
    assert "Invalid log_level" in caplog.text


def test_missing_sections_use_defaults(
    config_manager: ConfigManager, config_dir: Path
) -> None:
    config_dir.mkdir(parents=True)
    (config_dir / "settings.conf").write_text(
        "[DEFAULT]\noutput_dir = ~/bin\n", encoding="utf-8"
    )

    config = config_manager.load_global_config()

    assert config["output_dir"] == Path.home() / "bin"
    assert config["network"]["retry_attempts"] == 3


def test_config_dir_env_override(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("RELEASE_INSTALLER_CONFIG_DIR", str(tmp_path / "c"))

    assert Paths.config_dir() == tmp_path / "c"
    assert ConfigManager().settings_file == tmp_path / "c" / "settings.conf"


def test_config_dir_default(monkeypatch) -> None:
    monkeypatch.delenv("RELEASE_INSTALLER_CONFIG_DIR", raising=False)

    assert Paths.config_dir() == (
        Path.home() / ".config" / "release-installer"
    )


def test_expand_path_keeps_relative_paths() -> None:
    assert Paths.expand_path("./bin") == Path("bin")
    assert Paths.expand_path("~/bin") == Path.home() / "bin"
