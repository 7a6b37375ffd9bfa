"""
Gesture Capture Module for Ink Digit

Turns raw pointer samples on one drawing surface into ink and hands the
ink to the recognizer once the user stops drawing.

State machine:
    IDLE -> PRESSED -> (tap | DRAWING) -> COMMITTED -> (quiet period) -> IDLE

A press only becomes a drawing once it moves past a small threshold (pens
start drawing immediately). Released strokes accumulate until a quiet period
passes without a new press, so multi-stroke digits such as a two-stroke "4"
are classified as one ink.
"""

import logging
import math
import time
from enum import Enum, auto
from typing import List, Optional

from PyQt5.QtCore import QObject, QTimer, pyqtSignal

from inkdigit.recognizer import (
    DigitRecognizer,
    GestureConfig,
    Ink,
    Point,
    RecognitionResult,
    Stroke,
    get_default_recognizer,
)


logger = logging.getLogger(__name__)


class PointerKind(Enum):
    """Input device behind a pointer event."""
    MOUSE = auto()
    TOUCH = auto()
    PEN = auto()


class GestureState(Enum):
    """Gesture capture states."""
    IDLE = auto()       # Nothing pending
    PRESSED = auto()    # Contact down, not yet moved past the threshold
    DRAWING = auto()    # Contact down, samples recorded as ink
    COMMITTED = auto()  # Ink pending, waiting for the quiet period


class GestureCapture(QObject):
    """
    Per-surface gesture state machine.

    One instance owns one drawing surface. While a contact is held, samples
    from any other pointer are ignored. Instances share nothing but the
    read-only template library, so several surfaces can capture side by side.

    Signals:
        tapped(): Press and release without movement (a selection, not ink)
        stroke_appended(Point): A sample was added to the current stroke
        stroke_discarded(): A released stroke was too short to keep
        gesture_settled(object): Quiet period elapsed; carries the digit or None

    Example:
        capture = GestureCapture()
        capture.gesture_settled.connect(on_digit)
        capture.press(10, 10)
        capture.move(12, 30)
        ...
        capture.release()
    """

    tapped = pyqtSignal()
    stroke_appended = pyqtSignal(object)
    stroke_discarded = pyqtSignal()
    gesture_settled = pyqtSignal(object)

    def __init__(
        self,
        recognizer: Optional[DigitRecognizer] = None,
        config: Optional[GestureConfig] = None,
        parent: Optional[QObject] = None
    ):
        """
        Initialize gesture capture.

        Args:
            recognizer: Recognizer used when the quiet period elapses;
                        defaults to the shared default recognizer
            config: Gesture thresholds; defaults to GestureConfig()
            parent: Optional Qt parent
        """
        super().__init__(parent)
        self._recognizer = recognizer or get_default_recognizer()
        self._config = config or GestureConfig()

        self._state = GestureState.IDLE
        self._strokes: List[Stroke] = []
        self._current: List[Point] = []

        # Active contact
        self._pointer_id: Optional[int] = None
        self._start: Optional[Point] = None
        self._pressed_at: float = 0.0

        # Diagnostics for the most recent settled gesture
        self.last_ink: Optional[Ink] = None
        self.last_result: Optional[RecognitionResult] = None

        # Quiet period before classification
        self._quiet_timer = QTimer(self)
        self._quiet_timer.setSingleShot(True)
        self._quiet_timer.setInterval(self._config.debounce_ms)
        self._quiet_timer.timeout.connect(self._on_quiet_period_elapsed)

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def config(self) -> GestureConfig:
        return self._config

    @property
    def pending_ink(self) -> Ink:
        """Strokes committed but not yet classified."""
        return Ink(strokes=tuple(self._strokes))

    @property
    def current_stroke(self) -> List[Point]:
        """Copy of the stroke being drawn (empty when not drawing)."""
        if self._state is not GestureState.DRAWING:
            return []
        return list(self._current)

    def is_settle_pending(self) -> bool:
        """True while the quiet-period timer is armed."""
        return self._quiet_timer.isActive()

    def press(
        self,
        x: float,
        y: float,
        kind: PointerKind = PointerKind.MOUSE,
        pointer_id: int = 0,
        timestamp: Optional[float] = None
    ) -> bool:
        """
        Begin a contact.

        Cancels any pending classification so a further stroke can join the
        current ink.

        Args:
            x, y: Surface-local position
            kind: Input device; pens skip the movement threshold
            pointer_id: Identifier of the contacting pointer
            timestamp: Press time in seconds (defaults to time.monotonic())

        Returns:
            True if this surface took ownership of the contact
        """
        if self._state in (GestureState.PRESSED, GestureState.DRAWING):
            logger.debug(f"Ignoring press from pointer {pointer_id}, surface busy")
            return False

        self._quiet_timer.stop()

        self._pointer_id = pointer_id
        self._start = Point(float(x), float(y))
        self._pressed_at = time.monotonic() if timestamp is None else timestamp
        self._current = [self._start]

        if kind is PointerKind.PEN:
            self._state = GestureState.DRAWING
        else:
            self._state = GestureState.PRESSED
        return True

    def move(self, x: float, y: float, pointer_id: int = 0) -> None:
        """Feed a movement sample for the active contact."""
        if not self._owns(pointer_id):
            return

        if self._state is GestureState.PRESSED:
            moved = math.hypot(x - self._start.x, y - self._start.y)
            if moved > self._config.movement_threshold_px:
                self._state = GestureState.DRAWING

        if self._state is GestureState.DRAWING:
            point = Point(float(x), float(y))
            self._current.append(point)
            self.stroke_appended.emit(point)

    def release(self, pointer_id: int = 0, timestamp: Optional[float] = None) -> None:
        """
        End the active contact.

        A contact that never moved is a tap. A drawn stroke with enough points
        joins the pending ink and arms the quiet-period timer; shorter strokes
        are dropped as accidental.
        """
        if not self._owns(pointer_id):
            return

        released_at = time.monotonic() if timestamp is None else timestamp
        duration_ms = (released_at - self._pressed_at) * 1000
        was_drawing = self._state is GestureState.DRAWING
        stroke = self._current

        self._current = []
        self._pointer_id = None
        self._start = None

        if not was_drawing:
            logger.debug(f"Tap after {duration_ms:.0f}ms")
            self.tapped.emit()
            self._resume_pending()
            return

        if len(stroke) >= self._config.min_stroke_points:
            self._strokes.append(Stroke(points=tuple(stroke)))
            logger.debug(
                f"Stroke committed: {len(stroke)} points in {duration_ms:.0f}ms, "
                f"{len(self._strokes)} pending"
            )
        else:
            logger.debug(f"Discarding {len(stroke)}-point stroke")
            self.stroke_discarded.emit()

        self._resume_pending()

    def cancel(self) -> None:
        """Abort the current contact and drop all pending ink."""
        self._quiet_timer.stop()
        dropped = len(self._strokes)
        self._strokes = []
        self._current = []
        self._pointer_id = None
        self._start = None
        self._state = GestureState.IDLE
        if dropped:
            logger.debug(f"Gesture cancelled, dropped {dropped} strokes")

    def settle(self) -> Optional[int]:
        """
        Classify pending ink now instead of waiting for the quiet period.

        Does nothing while a contact is held.

        Returns:
            Recognized digit, or None
        """
        if self._state is not GestureState.COMMITTED:
            return None
        self._quiet_timer.stop()
        return self._on_quiet_period_elapsed()

    def _owns(self, pointer_id: int) -> bool:
        """Check that a sample belongs to the contact this surface holds."""
        if self._state not in (GestureState.PRESSED, GestureState.DRAWING):
            return False
        return pointer_id == self._pointer_id

    def _resume_pending(self) -> None:
        """Re-arm the quiet period if ink is waiting, otherwise go idle."""
        if self._strokes:
            self._state = GestureState.COMMITTED
            self._quiet_timer.start()
        else:
            self._state = GestureState.IDLE

    def _on_quiet_period_elapsed(self) -> Optional[int]:
        """Classify the accumulated ink and clear it whatever the outcome."""
        if not self._strokes:
            self._state = GestureState.IDLE
            return None

        ink = Ink(strokes=tuple(self._strokes))
        self._strokes = []
        self._state = GestureState.IDLE

        result = self._recognizer.classify(ink)
        self.last_ink = ink
        self.last_result = result

        logger.info(
            f"Gesture settled: {len(ink.strokes)} strokes, {ink.point_count} points -> "
            f"{result.digit if result.accepted else 'no match'}"
        )
        self.gesture_settled.emit(result.digit)
        return result.digit
