import logging

from PyQt6.QtWidgets import QWidget, QLabel, QGridLayout, QVBoxLayout, QHBoxLayout
from PyQt6.QtGui import QPixmap, QPainter, QPen, QColor, QFont
from PyQt6.QtCore import Qt, QTimer, QRect, pyqtSignal

from core.base_window import OverlayWindow
from games.tic_tac_toe.display import Display
from games.tic_tac_toe.logic import BOARD_SIZE, Cell, Player

logger = logging.getLogger(__name__)

PLAYER_NAMES = {
    Player.FIRST: "Игрок 1",
    Player.SECOND: "Игрок 2",
}

SYMBOL_COLORS = {
    Cell.X: "#4FC3F7",  # Голубой для X
    Cell.O: "#FF5252",  # Красный для O
}

STATUS_STYLE = "color: white; background-color: rgba(0, 0, 0, 150); border-radius: 10px; padding: 5px;"
WIN_STYLE = "color: #76FF03; background-color: rgba(0, 0, 0, 180); border-radius: 10px; padding: 5px;"
DRAW_STYLE = "color: yellow; background-color: rgba(0, 0, 0, 180); border-radius: 10px; padding: 5px;"
CELL_STYLE = "background-color: rgba(0, 0, 0, 50); border: 2px solid rgba(255, 255, 255, 100);"


def cell_from_position(x, y, width, height):
    """Клетка (row, col) под точкой на поле размером width x height, или None"""
    if width <= 0 or height <= 0:
        return None
    if x < 0 or y < 0 or x >= width or y >= height:
        return None

    col = int(x // (width / BOARD_SIZE))
    row = int(y // (height / BOARD_SIZE))
    if 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE:
        return row, col
    return None


def paint_symbol(painter, w, h, symbol, progress=1.0):
    """Рисует X или O в прямоугольнике w x h. progress 0..1 - доля нарисованного"""
    if symbol is Cell.EMPTY or progress <= 0:
        return

    painter.setRenderHint(QPainter.RenderHint.Antialiasing)

    # Толщина линии зависит от размера клетки
    pen = QPen(QColor(SYMBOL_COLORS[symbol]))
    pen.setWidth(max(3, min(w, h) // 15))
    margin = int(min(w, h) * 0.25)

    if symbol is Cell.X:
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        painter.setPen(pen)

        # Первая линия \ рисуется за 0.0 - 0.5, вторая / за 0.5 - 1.0
        p1 = min(progress * 2, 1.0)
        x2 = margin + (w - 2 * margin) * p1
        y2 = margin + (h - 2 * margin) * p1
        painter.drawLine(margin, margin, int(x2), int(y2))

        if progress > 0.5:
            p2 = min((progress - 0.5) * 2, 1.0)
            x2 = (w - margin) - (w - 2 * margin) * p2
            y2 = margin + (h - 2 * margin) * p2
            painter.drawLine(w - margin, margin, int(x2), int(y2))

    else:
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)

        # Угол в 1/16 градуса, полный круг = 5760. Начинаем сверху (90 град)
        rect = QRect(margin, margin, w - 2 * margin, h - 2 * margin)
        painter.drawArc(rect, 90 * 16, -int(5760 * min(progress, 1.0)))


class DrawingAnimation(QWidget):
    def __init__(self, parent, rect, symbol, on_finish):
        super().__init__(parent)
        self.setGeometry(rect)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.symbol = symbol
        self.on_finish = on_finish
        self.progress = 0.0
        self.show()

        self.timer = QTimer(self)
        self.timer.timeout.connect(self.animate)
        self.timer.start(16)  # ~60 FPS

    def animate(self):
        self.progress += 0.05
        if self.progress >= 1.0:
            self.progress = 1.0
            self.stop()
            self.on_finish(self)
            return
        self.update()

    def stop(self):
        self.timer.stop()
        self.deleteLater()

    def paintEvent(self, event):
        painter = QPainter(self)
        paint_symbol(painter, self.width(), self.height(), self.symbol, self.progress)
        painter.end()


class CellLabel(QLabel):
    def __init__(self, row, col):
        super().__init__()
        self.row = row
        self.col = col
        self.symbol = Cell.EMPTY
        self.highlighted = False
        self.hidden_symbol = False  # пока поверх клетки идёт анимация

        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setScaledContents(True)
        self.setStyleSheet(CELL_STYLE)
        # Клики обрабатывает BoardWidget
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)

    def set_symbol(self, symbol, hidden=False):
        self.symbol = symbol
        self.hidden_symbol = hidden
        self.redraw()

    def reveal(self):
        self.hidden_symbol = False
        self.redraw()

    def set_highlighted(self, highlighted):
        self.highlighted = highlighted
        self.redraw()

    def clear(self):
        self.symbol = Cell.EMPTY
        self.highlighted = False
        self.hidden_symbol = False
        self.redraw()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.redraw()

    def redraw(self):
        w = max(1, self.width())
        h = max(1, self.height())

        pixmap = QPixmap(w, h)
        pixmap.fill(Qt.GlobalColor.transparent)

        painter = QPainter(pixmap)
        if self.highlighted:
            painter.fillRect(0, 0, w, h, QColor(0, 255, 0, 50))
        if not self.hidden_symbol:
            paint_symbol(painter, w, h, self.symbol)
        painter.end()

        self.setPixmap(pixmap)


class BoardWidget(QWidget):
    cell_clicked = pyqtSignal(int, int)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.grid_layout = QGridLayout(self)
        self.grid_layout.setSpacing(0)
        self.grid_layout.setContentsMargins(0, 0, 0, 0)

    def mousePressEvent(self, event):
        # Shift+клик отдаём окну: это перемещение/ресайз, а не ход
        if event.modifiers() & Qt.KeyboardModifier.ShiftModifier:
            event.ignore()
            return

        if event.button() != Qt.MouseButton.LeftButton:
            event.ignore()
            return

        pos = event.position()
        cell = cell_from_position(pos.x(), pos.y(), self.width(), self.height())
        event.accept()
        if cell is None:
            return
        self.cell_clicked.emit(*cell)


class TicTacToeGame(OverlayWindow):
    closed = pyqtSignal()

    def __init__(self, overlay_mode=True, ui_scale=1.0):
        super().__init__(overlay_mode=overlay_mode)
        self.setWindowTitle("Крестики-Нолики")
        self.resize(int(400 * ui_scale), int(480 * ui_scale))

        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.main_layout = QVBoxLayout(self.central_widget)
        self.main_layout.setContentsMargins(20, 20, 20, 20)

        # Табло счёта
        self.score_layout = QHBoxLayout()
        self.main_layout.addLayout(self.score_layout)

        # Статус бар
        self.status_label = QLabel()
        self.status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.status_label.setFont(QFont("Arial", 16, QFont.Weight.Bold))
        self.status_label.setStyleSheet(STATUS_STYLE)
        self.status_label.setFixedHeight(40)
        self.main_layout.addWidget(self.status_label)

        # Место под поле, его создаёт QtDisplay.render_board
        self.board_layout = QVBoxLayout()
        self.main_layout.addLayout(self.board_layout, 1)

        # Место под сообщение о конце раунда
        self.message_layout = QVBoxLayout()
        self.main_layout.addLayout(self.message_layout)

    def closeEvent(self, event):
        self.closed.emit()
        super().closeEvent(event)


class QtDisplay(Display):
    def __init__(self, window):
        self.window = window
        self.board_widget = None
        self.cells = {}
        self.score_labels = {}
        self.message_label = None
        self.animations = []
        self._callback = None

    def on_cell_activated(self, callback):
        self._callback = callback

    def _on_cell_clicked(self, row, col):
        if self._callback is not None:
            self._callback(row, col)

    def render_board(self, board):
        if self.board_widget is not None:
            return

        self.board_widget = BoardWidget()
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                label = CellLabel(row, col)
                label.set_symbol(board.get(row, col))
                self.board_widget.grid_layout.addWidget(label, row, col)
                self.cells[(row, col)] = label

        self.board_widget.cell_clicked.connect(self._on_cell_clicked)
        self.window.board_layout.addWidget(self.board_widget)

    def mark_cell(self, row, col, player):
        label = self.cells[(row, col)]
        label.set_symbol(player.cell, hidden=True)

        # Анимация рисуется поверх клетки, потом клетка показывает знак сама
        anim = DrawingAnimation(self.board_widget, label.geometry(), player.cell,
                                lambda finished: self._finish_animation(finished, label))
        self.animations.append(anim)

    def _finish_animation(self, anim, label):
        if anim in self.animations:
            self.animations.remove(anim)
        label.reveal()

    def clear_board(self):
        for anim in self.animations:
            anim.stop()
        self.animations = []

        for label in self.cells.values():
            label.clear()

    def render_score(self, score):
        if self.score_labels:
            return

        for player in (Player.FIRST, Player.SECOND):
            label = QLabel(self._score_text(player, score[player]))
            label.setAlignment(Qt.AlignmentFlag.AlignCenter)
            label.setFont(QFont("Arial", 12, QFont.Weight.Bold))
            label.setStyleSheet(
                f"color: {SYMBOL_COLORS[player.cell]}; background-color: rgba(0, 0, 0, 150); "
                "border-radius: 8px; padding: 3px;")
            self.window.score_layout.addWidget(label)
            self.score_labels[player] = label

    def update_score(self, score, player):
        self.score_labels[player].setText(self._score_text(player, score[player]))

    @staticmethod
    def _score_text(player, value):
        return f"{PLAYER_NAMES[player]}: {value}"

    def show_message(self, winner):
        self.clear_message()

        if winner is None:
            text, style = "Ничья!", DRAW_STYLE
        else:
            text, style = f"{PLAYER_NAMES[winner]} победил!", WIN_STYLE

        self.message_label = QLabel(text)
        self.message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.message_label.setFont(QFont("Arial", 16, QFont.Weight.Bold))
        self.message_label.setStyleSheet(style)
        self.window.message_layout.addWidget(self.message_label)

        self.window.status_label.setText("Раунд окончен")
        logger.debug("Message shown: %s", text)

    def clear_message(self):
        if self.message_label is None:
            return
        self.window.message_layout.removeWidget(self.message_label)
        self.message_label.deleteLater()
        self.message_label = None

    def show_turn(self, player):
        symbol = player.cell.value.upper()
        self.window.status_label.setText(f"Ход: {PLAYER_NAMES[player]} ({symbol})")

    def highlight_line(self, cells):
        for pos in cells:
            self.cells[pos].set_highlighted(True)


class _TimerHandle:
    def __init__(self, timer):
        self.timer = timer
        self.done = False
        timer.timeout.connect(self._on_timeout)

    def _on_timeout(self):
        self.done = True
        self.timer.deleteLater()

    def cancel(self):
        if self.done:
            return
        self.done = True
        self.timer.stop()
        self.timer.deleteLater()


class QtScheduler:
    """Отложенный вызов через одноразовый QTimer"""

    def __init__(self, parent=None):
        self.parent = parent

    def call_later(self, delay, callback):
        timer = QTimer(self.parent)
        timer.setSingleShot(True)
        timer.timeout.connect(callback)
        handle = _TimerHandle(timer)
        timer.start(delay)
        return handle
