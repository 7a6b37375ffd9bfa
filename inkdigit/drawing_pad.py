"""
Drawing Pad Module for Ink Digit

A square PyQt5 surface that forwards pointer input to a GestureCapture and
paints the ink incrementally while the user draws.
"""

import logging
from typing import List, Optional, Sequence

from PyQt5.QtCore import QEvent, QPointF, Qt, pyqtSignal
from PyQt5.QtGui import QColor, QPainter, QPen
from PyQt5.QtWidgets import QWidget

from inkdigit.gesture import GestureCapture, PointerKind
from inkdigit.recognizer import DigitRecognizer, GestureConfig, Point


logger = logging.getLogger(__name__)

# Ink styling
INK_COLOR = QColor("#4f46e5")
INK_WIDTH = 3
BACKGROUND_COLOR = QColor("#ffffff")
BORDER_COLOR = QColor("#cbd5e1")


class DrawingPad(QWidget):
    """
    Square handwriting surface.

    Owns one GestureCapture; mouse, touch (synthesized mouse) and tablet
    events are translated into press/move/release calls.

    Signals:
        digit_recognized(object): Digit 0-9 or None once a gesture settles
        tapped(): The surface was tapped without drawing
    """

    digit_recognized = pyqtSignal(object)
    tapped = pyqtSignal()

    def __init__(
        self,
        size: int = 240,
        recognizer: Optional[DigitRecognizer] = None,
        gesture_config: Optional[GestureConfig] = None,
        parent: Optional[QWidget] = None
    ):
        super().__init__(parent)
        self.setFixedSize(size, size)
        self.setAttribute(Qt.WA_AcceptTouchEvents, False)
        self.setCursor(Qt.CrossCursor)

        self.capture = GestureCapture(recognizer=recognizer, config=gesture_config, parent=self)
        self.capture.stroke_appended.connect(self._on_stroke_appended)
        self.capture.stroke_discarded.connect(self.update)
        self.capture.tapped.connect(self._on_tapped)
        self.capture.gesture_settled.connect(self._on_gesture_settled)

    # --- Pointer input ---

    def mousePressEvent(self, event):
        if event.button() != Qt.LeftButton:
            return
        self.capture.press(event.x(), event.y(), kind=self._mouse_kind(event))

    def mouseMoveEvent(self, event):
        self.capture.move(event.x(), event.y())

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.LeftButton:
            return
        self.capture.release()

    def leaveEvent(self, event):
        # Leaving the surface ends the contact
        self.capture.release()
        super().leaveEvent(event)

    def tabletEvent(self, event):
        pos = event.posF()
        if event.type() == QEvent.TabletPress:
            self.capture.press(pos.x(), pos.y(), kind=PointerKind.PEN)
        elif event.type() == QEvent.TabletMove:
            self.capture.move(pos.x(), pos.y())
        elif event.type() == QEvent.TabletRelease:
            self.capture.release()
        event.accept()

    @staticmethod
    def _mouse_kind(event) -> PointerKind:
        if event.source() == Qt.MouseEventSynthesizedBySystem:
            return PointerKind.TOUCH
        return PointerKind.MOUSE

    def clear(self):
        """Drop any ink on the surface."""
        self.capture.cancel()
        self.update()

    # --- Capture callbacks ---

    def _on_stroke_appended(self, point: Point):
        self.update()

    def _on_tapped(self):
        self.update()
        self.tapped.emit()

    def _on_gesture_settled(self, digit):
        self.update()
        self.digit_recognized.emit(digit)

    # --- Painting ---

    def paintEvent(self, event):
        """Paint pending strokes and the stroke in progress."""
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)

        painter.fillRect(self.rect(), BACKGROUND_COLOR)
        border = QPen(BORDER_COLOR)
        border.setWidth(1)
        painter.setPen(border)
        painter.drawRect(self.rect().adjusted(0, 0, -1, -1))

        pen = QPen(INK_COLOR)
        pen.setWidth(INK_WIDTH)
        pen.setCapStyle(Qt.RoundCap)
        pen.setJoinStyle(Qt.RoundJoin)
        painter.setPen(pen)

        for stroke in self.capture.pending_ink.strokes:
            self._draw_polyline(painter, stroke.points)
        self._draw_polyline(painter, self.capture.current_stroke)

        painter.end()

    @staticmethod
    def _draw_polyline(painter: QPainter, points: Sequence[Point]):
        qpoints: List[QPointF] = [QPointF(p.x, p.y) for p in points]
        for a, b in zip(qpoints, qpoints[1:]):
            painter.drawLine(a, b)
