import pytest

from workout_map.utils.config import WorkoutMapConfig, get_config, reset_config


def test_defaults(config):
    assert config.map.zoom == 13
    assert config.storage.storage_key == "workouts"
    assert config.validate_configuration()


def test_update_settings_are_recorded(config):
    config.update_map_settings(zoom=10)
    config.update_storage_settings(data_dir="/tmp/elsewhere")
    summary = config.get_summary()
    assert summary['map_settings']['zoom'] == 10
    assert summary['user_inputs'] == {'map_zoom': 10, 'storage_data_dir': "/tmp/elsewhere"}


def test_unknown_setting_rejected(config):
    with pytest.raises(ValueError, match="Unknown storage setting"):
        config.update_storage_settings(bucket="s3://nope")


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("WORKOUT_MAP_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("WORKOUT_MAP_ZOOM", "15")
    config = WorkoutMapConfig()
    assert config.storage.data_dir == str(tmp_path)
    assert config.map.zoom == 15


def test_bad_zoom_environment(monkeypatch):
    monkeypatch.setenv("WORKOUT_MAP_ZOOM", "close")
    with pytest.raises(ValueError, match="WORKOUT_MAP_ZOOM"):
        WorkoutMapConfig()


def test_validation_collects_errors(config):
    config.update_map_settings(zoom=40)
    config.update_popup_settings(min_width=500)
    with pytest.raises(ValueError) as excinfo:
        config.validate_configuration()
    assert "zoom" in str(excinfo.value)
    assert "Popup" in str(excinfo.value)


def test_popup_options(config):
    options = config.popup_options("cycling-popup")
    assert options['class_name'] == "cycling-popup"
    assert options['auto_close'] is False


def test_reset_config_replaces_global():
    before = get_config()
    after = reset_config()
    assert after is get_config()
    assert after is not before
