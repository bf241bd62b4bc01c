import logging
from enum import Enum

logger = logging.getLogger(__name__)

BOARD_SIZE = 3
RESET_DELAY = 1500  # мс между концом раунда и очисткой поля


class Cell(Enum):
    EMPTY = ''
    X = 'x'
    O = 'o'


class Player(Enum):
    FIRST = 'x'
    SECOND = 'o'

    @property
    def cell(self):
        return Cell(self.value)

    @property
    def other(self):
        return Player.SECOND if self is Player.FIRST else Player.FIRST


class RoundPhase(Enum):
    ACTIVE = 'active'
    AWAITING_RESET = 'awaiting_reset'


# Все 8 линий: 3 строки, 3 столбца, 2 диагонали
LINES = (
    tuple(tuple((r, c) for c in range(BOARD_SIZE)) for r in range(BOARD_SIZE))
    + tuple(tuple((r, c) for r in range(BOARD_SIZE)) for c in range(BOARD_SIZE))
    + (
        tuple((i, i) for i in range(BOARD_SIZE)),
        tuple((i, BOARD_SIZE - 1 - i) for i in range(BOARD_SIZE)),
    )
)


class Board:
    def __init__(self):
        self._cells = [[Cell.EMPTY for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]

    @staticmethod
    def in_bounds(row, col):
        # bool - подкласс int, но координатой не является
        for v in (row, col):
            if isinstance(v, bool) or not isinstance(v, int):
                return False
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    def get(self, row, col):
        return self._cells[row][col]

    def is_empty(self, row, col):
        return self._cells[row][col] is Cell.EMPTY

    def place(self, row, col, cell):
        self._cells[row][col] = cell

    def is_full(self):
        return all(cell is not Cell.EMPTY for row in self._cells for cell in row)

    def winning_line(self, cell):
        """Первая линия, целиком занятая знаком cell, или None"""
        for line in LINES:
            if all(self._cells[r][c] is cell for r, c in line):
                return line
        return None

    def rows(self):
        return [list(row) for row in self._cells]

    def __repr__(self):
        rows = ['|'.join(cell.value or ' ' for cell in row) for row in self._cells]
        return f"Board({' / '.join(rows)})"


class TicTacToeLogic:
    """Правила и жизненный цикл раундов.

    display - реализация Display (см. display.py), scheduler - объект с методом
    call_later(delay_ms, callback), возвращающим хэндл с cancel().
    """

    def __init__(self, display, scheduler, wait=RESET_DELAY):
        self.display = display
        self.scheduler = scheduler
        self.wait = wait

        self._board = Board()
        self._score = {Player.FIRST: 0, Player.SECOND: 0}
        self._current = Player.FIRST  # первый игрок всегда начинает сессию
        self._phase = RoundPhase.ACTIVE
        self._winning_line = ()
        self._pending_reset = None
        self._started = False

        self.display.on_cell_activated(self.handle_cell_activation)

    @property
    def board(self):
        return self._board

    @property
    def score(self):
        return dict(self._score)

    @property
    def current_player(self):
        return self._current

    @property
    def phase(self):
        return self._phase

    @property
    def winning_line(self):
        return self._winning_line

    def start_session(self):
        if self._started:
            return
        self._started = True

        self.display.render_score(self.score)
        self.display.render_board(self._board)
        self.display.show_turn(self._current)
        logger.info("Session started, %s moves first", self._current.name)

    def end_session(self):
        if self._pending_reset is None:
            return
        self._pending_reset.cancel()
        self._pending_reset = None
        logger.debug("Session ended, pending board reset cancelled")

    def handle_cell_activation(self, row, col):
        if not Board.in_bounds(row, col):
            logger.debug("Ignoring click outside the board: (%r, %r)", row, col)
            return

        if self._phase is not RoundPhase.ACTIVE:
            logger.debug("Ignoring click at (%d, %d) while awaiting reset", row, col)
            return

        if not self._board.is_empty(row, col):
            logger.debug("Ignoring click on occupied cell (%d, %d)", row, col)
            return

        player = self._current

        # Сначала ставим знак, потом проверяем: победа, ничья, смена хода
        self._board.place(row, col, player.cell)
        self.display.mark_cell(row, col, player)

        line = self._board.winning_line(player.cell)
        if line is not None:
            self._win(player, line)
        elif self._board.is_full():
            self._draw()
        else:
            self._current = player.other
            self.display.show_turn(self._current)

    def _win(self, player, line):
        self._score[player] += 1
        self.display.update_score(self.score, player)

        self._winning_line = line
        self.display.highlight_line(line)

        logger.info("%s wins the round along %s, score %d:%d", player.name, line,
                    self._score[Player.FIRST], self._score[Player.SECOND])
        self._game_over(player)

    def _draw(self):
        logger.info("Round ended in a draw")
        self._game_over(None)

    def _game_over(self, winner):
        self._phase = RoundPhase.AWAITING_RESET
        self.display.show_message(winner)
        self._pending_reset = self.scheduler.call_later(self.wait, self._reset_board)

    def _reset_board(self):
        # Срабатывает один раз на каждый конец раунда
        if self._phase is not RoundPhase.AWAITING_RESET:
            return

        self.display.clear_message()
        self.display.clear_board()
        self._board = Board()
        self._winning_line = ()
        self._phase = RoundPhase.ACTIVE

        # Ход не сбрасывается: новый раунд начинает тот, кто сделал последний ход
        self.display.show_turn(self._current)
        logger.debug("Board reset, %s to move", self._current.name)
