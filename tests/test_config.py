from __future__ import annotations

from pathlib import Path

import pytest

from claimlens.config import ConfigError, Settings, load_settings


def test_defaults():
    assert load_settings(env={}) == Settings(data_dir=Path("data"), log_level="WARNING")


def test_environment_overrides():
    settings = load_settings(
        env={"CLAIMLENS_DATA_DIR": "/srv/fixtures", "CLAIMLENS_LOG_LEVEL": "debug"}
    )
    assert settings == Settings(data_dir=Path("/srv/fixtures"), log_level="DEBUG")


def test_yaml_file_is_read(tmp_path):
    config = tmp_path / "claimlens.yaml"
    config.write_text("data_dir: fixtures\nlog_level: info\n")
    settings = load_settings(env={"CLAIMLENS_CONFIG": str(config)})
    assert settings == Settings(data_dir=Path("fixtures"), log_level="INFO")


def test_environment_beats_file(tmp_path):
    config = tmp_path / "claimlens.yaml"
    config.write_text("data_dir: fixtures\n")
    settings = load_settings(env={"CLAIMLENS_DATA_DIR": "other"}, config_path=config)
    assert settings.data_dir == Path("other")


def test_missing_file_falls_back_to_defaults(tmp_path, caplog):
    settings = load_settings(env={}, config_path=tmp_path / "absent.yaml")
    assert settings == Settings()
    assert "not found" in caplog.text


def test_non_mapping_file_is_rejected(tmp_path):
    config = tmp_path / "claimlens.yaml"
    config.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError, match="mapping"):
        load_settings(env={}, config_path=config)


def test_unknown_log_level_falls_back_to_default(caplog):
    settings = load_settings(env={"CLAIMLENS_LOG_LEVEL": "chatty"})
    assert settings.log_level == "WARNING"
    assert "Unknown log level" in caplog.text


def test_unreadable_yaml_is_a_config_error(tmp_path):
    config = tmp_path / "claimlens.yaml"
    config.write_text("data_dir: [unclosed\n")
    with pytest.raises(ConfigError, match="cannot read"):
        load_settings(env={}, config_path=config)
