import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from games.tic_tac_toe.display import Display  # noqa: E402
from games.tic_tac_toe.logic import TicTacToeLogic  # noqa: E402


class RecordingDisplay(Display):
    """Отображение без окна: запоминает все вызовы движка"""

    def __init__(self):
        self.calls = []
        self.cells = {}
        self.score = None
        self.message = None
        self.message_shown = False
        self.turn = None
        self.highlighted = ()
        self.callback = None

    def _record(self, name, *args):
        self.calls.append((name,) + args)

    def names(self):
        return [c[0] for c in self.calls]

    def render_board(self, board):
        self._record("render_board")
        self.cells = {(r, c): board.get(r, c) for r in range(3) for c in range(3)}

    def mark_cell(self, row, col, player):
        self._record("mark_cell", row, col, player)
        self.cells[(row, col)] = player.cell

    def clear_board(self):
        self._record("clear_board")
        self.cells = {pos: type(cell).EMPTY for pos, cell in self.cells.items()}
        self.highlighted = ()

    def render_score(self, score):
        self._record("render_score", dict(score))
        self.score = dict(score)

    def update_score(self, score, player):
        self._record("update_score", dict(score), player)
        self.score[player] = score[player]

    def show_message(self, winner):
        self._record("show_message", winner)
        self.message = winner
        self.message_shown = True

    def clear_message(self):
        self._record("clear_message")
        self.message = None
        self.message_shown = False

    def show_turn(self, player):
        self._record("show_turn", player)
        self.turn = player

    def highlight_line(self, cells):
        self._record("highlight_line", tuple(cells))
        self.highlighted = tuple(cells)

    def on_cell_activated(self, callback):
        self.callback = callback

    def click(self, row, col):
        self.callback(row, col)


class ManualHandle:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Отложенные вызовы срабатывают только по команде теста"""

    def __init__(self):
        self.handles = []

    def call_later(self, delay, callback):
        handle = ManualHandle(delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self):
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def fire_all(self):
        for handle in self.pending:
            handle.fired = True
            handle.callback()


@pytest.fixture
def display():
    return RecordingDisplay()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def make_logic():
    """Фабрика независимых сессий: возвращает (logic, display, scheduler)"""
    def factory(display=None, scheduler=None):
        display = display or RecordingDisplay()
        scheduler = scheduler or ManualScheduler()
        game = TicTacToeLogic(display, scheduler)
        game.start_session()
        return game, display, scheduler

    return factory


@pytest.fixture
def logic(make_logic, display, scheduler):
    game, _, _ = make_logic(display, scheduler)
    return game


@pytest.fixture(scope="session")
def qapp():
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
