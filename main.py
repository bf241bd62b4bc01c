import logging
import sys

from PyQt6.QtWidgets import QApplication

from core.settings import SettingsManager
from games.tic_tac_toe.logic import TicTacToeLogic
from games.tic_tac_toe.ui import TicTacToeGame, QtDisplay, QtScheduler

logger = logging.getLogger(__name__)


def setup_logging(level_name):
    level = logging.getLevelName(str(level_name).upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def build_game(settings):
    """Собирает окно, отображение и движок. Возвращает (window, logic)"""
    window = TicTacToeGame(overlay_mode=bool(settings.get("overlay_mode")),
                           ui_scale=float(settings.get("ui_scale")))
    window.setWindowOpacity(float(settings.get("window_opacity")))

    display = QtDisplay(window)
    logic = TicTacToeLogic(display, QtScheduler(window))
    window.closed.connect(logic.end_session)
    return window, logic


def main():
    settings = SettingsManager()
    setup_logging(settings.get("log_level"))

    app = QApplication(sys.argv)
    window, logic = build_game(settings)
    logic.start_session()
    window.show()
    logger.info("Window shown, settings from %s", settings.file_path)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
