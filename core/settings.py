import json
import logging
import os
import sys

logger = logging.getLogger(__name__)

APP_NAME = "tictactoe-overlay"

SETTINGS_FILE = "settings.json"

DEFAULT_SETTINGS = {
    "window_opacity": 1.0,  # Непрозрачность (1.0 = полностью видно)
    "ui_scale": 1.0,
    "overlay_mode": True,  # Поверх всех окон, без панели задач
    "log_level": "INFO",
}


def default_settings_path():
    """Системная папка для настроек"""
    if sys.platform == "win32":
        # Windows: C:\Users\User\AppData\Roaming
        base_path = os.getenv('APPDATA') or os.path.expanduser("~")
    elif sys.platform == "darwin":
        base_path = os.path.expanduser("~/Library/Application Support")
    else:
        base_path = os.path.expanduser("~/.config")

    return os.path.join(base_path, APP_NAME, SETTINGS_FILE)


def value_matches_default(key, value):
    """Тип значения совпадает с типом значения по умолчанию. Неизвестные ключи пропускаем как есть"""
    if key not in DEFAULT_SETTINGS:
        return True

    default = DEFAULT_SETTINGS[key]
    # bool - подкласс int, проверяем отдельно
    if isinstance(default, bool) or isinstance(value, bool):
        return isinstance(default, bool) and isinstance(value, bool)
    if isinstance(default, float):
        return isinstance(value, (int, float))
    return isinstance(value, type(default))


class SettingsManager:
    def __init__(self, file_path=None):
        self.data = DEFAULT_SETTINGS.copy()
        self.file_path = file_path or default_settings_path()
        self.load()

    def load(self):
        if not os.path.exists(self.file_path):
            return

        try:
            with open(self.file_path, "r") as f:
                loaded = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read settings from %s, using defaults: %s", self.file_path, e)
            self.data = DEFAULT_SETTINGS.copy()
            return

        if not isinstance(loaded, dict):
            logger.warning("Settings file %s is not a JSON object, using defaults", self.file_path)
            return

        # Ключи, которых нет в файле, остаются по умолчанию
        for key, value in loaded.items():
            if not value_matches_default(key, value):
                logger.warning("Setting %r in %s has invalid value %r, using default %r",
                               key, self.file_path, value, DEFAULT_SETTINGS[key])
                continue
            self.data[key] = value

    def save(self):
        try:
            os.makedirs(os.path.dirname(self.file_path) or ".", exist_ok=True)
            with open(self.file_path, "w") as f:
                json.dump(self.data, f, indent=4)
        except OSError as e:
            logger.error("Could not save settings to %s: %s", self.file_path, e)

    def get(self, key):
        return self.data.get(key, DEFAULT_SETTINGS.get(key))

    def set(self, key, value):
        self.data[key] = value
        self.save()
