from PyQt6.QtWidgets import QMainWindow, QApplication
from PyQt6.QtCore import Qt, QPoint, QRect

MIN_SIDE = 200


def scaled_size(width, height, dx, dy, aspect_ratio):
    """Новый размер при ресайзе с сохранением пропорций, или None если окно станет слишком маленьким.

    Берём большую из дельт, чтобы движение было плавным.
    """
    if abs(dx) > abs(dy):
        new_width = width + dx
        new_height = int(new_width / aspect_ratio)
    else:
        new_height = height + dy
        new_width = int(new_height * aspect_ratio)

    if new_width < MIN_SIDE or new_height < MIN_SIDE:
        return None
    return new_width, new_height


class OverlayWindow(QMainWindow):
    """Окно без рамок. Shift+ЛКМ - перемещение, Shift+ПКМ - ресайз"""

    def __init__(self, overlay_mode=True):
        super().__init__()

        self._action = None
        self._start_pos = QPoint()
        self._start_frame = QRect()
        self._aspect_ratio = 1.0

        self.setMinimumSize(MIN_SIDE, MIN_SIDE)

        flags = Qt.WindowType.FramelessWindowHint
        if overlay_mode:
            # Поверх окон, нет в панели задач
            flags |= Qt.WindowType.WindowStaysOnTopHint | Qt.WindowType.Tool

        self.setWindowFlags(flags)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)

    def mousePressEvent(self, event):
        if QApplication.keyboardModifiers() == Qt.KeyboardModifier.ShiftModifier:
            self._start_pos = event.globalPosition().toPoint()
            self._start_frame = self.frameGeometry()

            if event.button() == Qt.MouseButton.LeftButton:
                self._action = 'move'
                event.accept()
                return

            if event.button() == Qt.MouseButton.RightButton:
                self._action = 'resize'
                h = self._start_frame.height()
                self._aspect_ratio = self._start_frame.width() / h if h > 0 else 1.0
                event.accept()
                return

        self._action = None
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self._action is None:
            super().mouseMoveEvent(event)
            return

        delta = event.globalPosition().toPoint() - self._start_pos

        if self._action == 'move':
            self.move(self._start_frame.topLeft() + delta)

        elif self._action == 'resize':
            size = scaled_size(self._start_frame.width(), self._start_frame.height(),
                               delta.x(), delta.y(), self._aspect_ratio)
            if size is not None:
                self.resize(*size)

    def mouseReleaseEvent(self, event):
        self._action = None
        super().mouseReleaseEvent(event)
