"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from vidlens.config import (
    ConfigError,
    ConfigManager,
    VidlensConfig,
    parse_setting,
    resolve,
    setting_types,
)


def _fresh_manager(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ConfigManager:
    monkeypatch.setenv("HOME", str(tmp_path))
    return ConfigManager()


def test_ensure_exists_creates_default_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)

    path = manager.ensure_exists()

    assert path == tmp_path / ".vidlens" / "config.yaml"
    text = path.read_text(encoding="utf-8")
    assert text.startswith("# vidlens configuration file")
    assert "VIDLENS__SECTION__NAME" in text

    config = manager.load(include_env=False)
    assert config == VidlensConfig()


def test_environment_overrides_file(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "probe:\n  binary: /opt/ffprobe\nui:\n  notification_seconds: 5\n  title: From file\n",
        encoding="utf-8",
    )
    manager = ConfigManager(
        config_path=path,
        env={"VIDLENS__UI__NOTIFICATION_SECONDS": "4.5", "VIDLENS__UI__TITLE": "42"},
    )

    config = manager.load()

    assert config.probe.binary == "/opt/ffprobe"
    assert config.ui.notification_seconds == pytest.approx(4.5)
    assert config.ui.title == "42"
    assert manager.load(include_env=False).ui.title == "From file"


def test_environment_lists_accept_yaml_and_shorthand(tmp_path: Path) -> None:
    manager = ConfigManager(
        config_path=tmp_path / "config.yaml",
        env={
            "VIDLENS__FILTERS__CODECS": "[VP9, AV1]",
            "VIDLENS__FILTERS__CONTAINERS": "mxf, webm",
            "VIDLENS__PROBE__EXTRA_ARGS": "-v 'error'",
            "OTHER": "ignored",
        },
    )

    config = manager.load()

    assert config.filters.codecs == ["VP9", "AV1"]
    assert config.filters.containers == ["mxf", "webm"]
    assert config.probe.extra_args == ["-v", "error"]


def test_unknown_environment_setting_names_the_variable(tmp_path: Path) -> None:
    manager = ConfigManager(config_path=tmp_path / "config.yaml", env={"VIDLENS__UI__COLOUR": "red"})

    with pytest.raises(ConfigError, match="VIDLENS__UI__COLOUR"):
        manager.load()


def test_invalid_yaml_raises_config_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)
    manager.ensure_exists()

    manager.config_path.write_text("- not-a-mapping", encoding="utf-8")

    with pytest.raises(ConfigError):
        manager.load()


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(ConfigError, match="ui.colour"):
        resolve({"ui": {"colour": "red"}})


def test_section_must_be_mapping() -> None:
    with pytest.raises(ConfigError, match="Section 'probe' in the config file"):
        resolve({"probe": "ffprobe"})


def test_non_positive_notification_lifetime_is_rejected() -> None:
    with pytest.raises(ConfigError, match="notification_seconds must be positive"):
        resolve({"ui": {"notification_seconds": 0}})


def test_log_level_is_normalized_and_checked() -> None:
    assert resolve({"logging": {"level": " debug "}}).logging.level == "DEBUG"

    with pytest.raises(ConfigError, match="logging.level"):
        resolve({"logging": {"level": "LOUD"}})


def test_parse_setting_keeps_list_items_as_text() -> None:
    assert parse_setting("filters.frame_rates", "[24, 30]") == ["24", "30"]
    assert parse_setting("filters.bitrates", "12") == ["12"]
    assert parse_setting("probe.extra_args", "") == []
    assert parse_setting("ui.notification_seconds", "2.5") == 2.5
    assert "logging.backup_count" in setting_types()


def test_set_value_writes_only_real_changes(tmp_path: Path) -> None:
    manager = ConfigManager(config_path=tmp_path / "config.yaml", env={})
    manager.ensure_exists()
    before = manager.config_path.read_text(encoding="utf-8")

    assert manager.set_value("ui.title", "Video Analyzer") == ("Video Analyzer", "Video Analyzer")
    assert manager.config_path.read_text(encoding="utf-8") == before

    assert manager.set_value("probe.binary", "/usr/bin/ffprobe") == ("ffprobe", "/usr/bin/ffprobe")
    assert manager.load().probe.binary == "/usr/bin/ffprobe"


def test_set_value_rejects_invalid_value_without_writing(tmp_path: Path) -> None:
    manager = ConfigManager(config_path=tmp_path / "config.yaml", env={})
    manager.ensure_exists()
    before = manager.config_path.read_text(encoding="utf-8")

    with pytest.raises(ConfigError):
        manager.set_value("logging.max_size_mb", "huge")

    assert manager.config_path.read_text(encoding="utf-8") == before
