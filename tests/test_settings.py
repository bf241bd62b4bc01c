import json
import logging

import pytest

from core.settings import DEFAULT_SETTINGS, SettingsManager


def test_defaults_without_file(tmp_path):
    settings = SettingsManager(str(tmp_path / "settings.json"))

    assert settings.data == DEFAULT_SETTINGS
    assert settings.get("window_opacity") == 1.0
    assert settings.get("overlay_mode") is True


def test_loaded_values_override_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"ui_scale": 1.5, "extra": "kept"}))

    settings = SettingsManager(str(path))

    assert settings.get("ui_scale") == 1.5
    assert settings.get("log_level") == "INFO"
    assert settings.get("extra") == "kept"


def test_broken_file_falls_back_to_defaults(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text("{not json")

    with caplog.at_level(logging.WARNING):
        settings = SettingsManager(str(path))

    assert settings.data == DEFAULT_SETTINGS
    assert "Could not read settings" in caplog.text


def test_non_object_file_is_ignored(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2]")

    assert SettingsManager(str(path)).data == DEFAULT_SETTINGS


def test_set_saves_to_disk(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    settings = SettingsManager(str(path))

    settings.set("window_opacity", 0.7)

    assert json.loads(path.read_text())["window_opacity"] == 0.7
    assert SettingsManager(str(path)).get("window_opacity") == 0.7


def test_unknown_key_returns_none(tmp_path):
    assert SettingsManager(str(tmp_path / "s.json")).get("missing") is None


@pytest.mark.parametrize("content, key", [
    ({"ui_scale": "big", "log_level": "DEBUG"}, "ui_scale"),
    ({"window_opacity": None, "log_level": "DEBUG"}, "window_opacity"),
    ({"overlay_mode": "yes", "log_level": "DEBUG"}, "overlay_mode"),
    ({"ui_scale": True, "log_level": "DEBUG"}, "ui_scale"),
    ({"log_level": 10, "ui_scale": 1.5}, "log_level"),
])
def test_wrong_typed_value_falls_back_to_default(tmp_path, caplog, content, key):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(content))

    with caplog.at_level(logging.WARNING):
        settings = SettingsManager(str(path))

    assert settings.get(key) == DEFAULT_SETTINGS[key]
    assert "invalid value" in caplog.text

    # Остальные корректные ключи из файла применяются
    for other, value in content.items():
        if other != key:
            assert settings.get(other) == value


def test_integer_accepted_for_float_setting(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"ui_scale": 2}))

    assert SettingsManager(str(path)).get("ui_scale") == 2


def test_wrong_typed_settings_do_not_break_window(qapp, tmp_path):
    from main import build_game

    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"ui_scale": "big", "window_opacity": None}))

    window, logic = build_game(SettingsManager(str(path)))
    try:
        assert window.windowOpacity() == pytest.approx(1.0)
        assert window.width() == 400
    finally:
        window.close()
        window.deleteLater()
