"""
Tests for the gesture capture state machine.

Covers:
1. Tap vs draw detection (movement threshold, pens)
2. Stroke commit and short-stroke discard
3. Debounced multi-stroke settling
4. Pointer ownership and cancellation

Usage:
    pytest tests/test_gesture.py
"""

import sys
from pathlib import Path

import pytest
from PyQt5.QtTest import QTest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from inkdigit.gesture import GestureCapture, GestureState, PointerKind
from inkdigit.recognizer import GestureConfig, Point, RecognitionResult


class RecordingRecognizer:
    """Recognizer stand-in that records every ink it is asked to classify."""

    def __init__(self, digit=4):
        self.digit = digit
        self.calls = []

    def classify(self, ink):
        self.calls.append(ink)
        return RecognitionResult(digit=self.digit, point_count=ink.point_count)


class SignalLog:
    """Collects emissions from a capture's signals."""

    def __init__(self, capture: GestureCapture):
        self.taps = 0
        self.appended = []
        self.discarded = 0
        self.settled = []
        capture.tapped.connect(self._on_tap)
        capture.stroke_appended.connect(self.appended.append)
        capture.stroke_discarded.connect(self._on_discard)
        capture.gesture_settled.connect(self.settled.append)

    def _on_tap(self):
        self.taps += 1

    def _on_discard(self):
        self.discarded += 1


@pytest.fixture
def recognizer():
    return RecordingRecognizer()


@pytest.fixture
def capture(qapp, recognizer):
    return GestureCapture(recognizer=recognizer)


def draw(capture, points, kind=PointerKind.MOUSE):
    """Press at the first point, move through the rest, release."""
    (x0, y0), rest = points[0], points[1:]
    capture.press(x0, y0, kind=kind)
    for x, y in rest:
        capture.move(x, y)
    capture.release()


# ---------------------------------------------------------------------------
# Tap vs draw
# ---------------------------------------------------------------------------

def test_tap_without_movement(capture):
    log = SignalLog(capture)
    capture.press(10, 10)
    capture.release()

    assert log.taps == 1
    assert capture.state is GestureState.IDLE
    assert capture.pending_ink.is_empty()
    assert not capture.is_settle_pending()


def test_jitter_within_threshold_is_a_tap(capture):
    log = SignalLog(capture)
    capture.press(10, 10)
    capture.move(15, 10)
    capture.move(10, 18)  # exactly 8px away, not beyond
    capture.release()

    assert log.taps == 1
    assert log.appended == []
    assert capture.pending_ink.is_empty()


def test_movement_past_threshold_starts_drawing(capture):
    log = SignalLog(capture)
    capture.press(0, 0)
    assert capture.state is GestureState.PRESSED

    capture.move(9, 0)
    assert capture.state is GestureState.DRAWING
    assert log.appended == [Point(9.0, 0.0)]
    assert capture.current_stroke == [Point(0.0, 0.0), Point(9.0, 0.0)]


def test_pen_draws_immediately(capture):
    log = SignalLog(capture)
    capture.press(0, 0, kind=PointerKind.PEN)
    assert capture.state is GestureState.DRAWING

    capture.move(1, 0)
    capture.move(2, 1)
    capture.release()

    assert log.taps == 0
    assert len(log.appended) == 2
    assert capture.pending_ink.point_count == 3


# ---------------------------------------------------------------------------
# Stroke commit
# ---------------------------------------------------------------------------

def test_release_commits_stroke_and_arms_timer(capture):
    draw(capture, [(0, 0), (0, 20), (0, 40), (0, 60)])

    assert capture.state is GestureState.COMMITTED
    assert capture.is_settle_pending()
    ink = capture.pending_ink
    assert len(ink.strokes) == 1
    assert ink.strokes[0].points[0] == Point(0.0, 0.0)
    assert ink.point_count == 4


def test_two_point_stroke_is_discarded(capture):
    log = SignalLog(capture)
    draw(capture, [(0, 0), (20, 0)])

    assert log.discarded == 1
    assert capture.state is GestureState.IDLE
    assert capture.pending_ink.is_empty()
    assert not capture.is_settle_pending()


def test_new_press_cancels_pending_settle(capture):
    draw(capture, [(0, 0), (0, 20), (0, 40)])
    assert capture.is_settle_pending()

    capture.press(30, 30)
    assert not capture.is_settle_pending()
    assert capture.state is GestureState.PRESSED
    assert len(capture.pending_ink.strokes) == 1


def test_tap_keeps_pending_ink(capture):
    draw(capture, [(0, 0), (0, 20), (0, 40)])
    capture.press(5, 5)
    capture.release()

    assert capture.state is GestureState.COMMITTED
    assert capture.is_settle_pending()
    assert len(capture.pending_ink.strokes) == 1


# ---------------------------------------------------------------------------
# Settling
# ---------------------------------------------------------------------------

def test_multi_stroke_digit_settles_once(capture, recognizer, two_stroke_four):
    log = SignalLog(capture)
    first, second = two_stroke_four

    draw(capture, first)
    draw(capture, second)
    digit = capture.settle()

    assert digit == 4
    assert log.settled == [4]
    assert len(recognizer.calls) == 1
    ink = recognizer.calls[0]
    assert len(ink.strokes) == 2
    assert ink.point_count == len(first) + len(second)
    assert capture.last_ink is ink


def test_ink_is_cleared_after_rejection(qapp):
    recognizer = RecordingRecognizer(digit=None)
    capture = GestureCapture(recognizer=recognizer)
    log = SignalLog(capture)

    draw(capture, [(0, 0), (0, 20), (0, 40)])
    assert capture.settle() is None

    assert log.settled == [None]
    assert capture.state is GestureState.IDLE
    assert capture.pending_ink.is_empty()
    assert capture.last_result.digit is None


def test_settle_does_nothing_mid_contact(capture, recognizer):
    capture.press(0, 0)
    capture.move(0, 20)
    assert capture.settle() is None
    assert recognizer.calls == []


def test_quiet_period_timer_fires(qapp, recognizer):
    capture = GestureCapture(recognizer=recognizer, config=GestureConfig(debounce_ms=20))
    log = SignalLog(capture)

    draw(capture, [(0, 0), (0, 20), (0, 40)])
    QTest.qWait(200)

    assert log.settled == [4]
    assert capture.state is GestureState.IDLE
    assert not capture.is_settle_pending()


def test_two_stroke_four_with_real_recognizer(qapp, two_stroke_four):
    capture = GestureCapture()
    log = SignalLog(capture)

    for stroke in two_stroke_four:
        draw(capture, stroke)
    capture.settle()

    # One classification for the whole ink, never one per stroke
    assert len(log.settled) == 1
    assert capture.last_ink.point_count == sum(len(s) for s in two_stroke_four)
    assert capture.last_result.point_count == capture.last_ink.point_count
    assert capture.last_result.digit == 4
    assert log.settled == [4]


# ---------------------------------------------------------------------------
# Ownership and cancellation
# ---------------------------------------------------------------------------

def test_other_pointers_are_ignored_during_contact(capture):
    log = SignalLog(capture)
    assert capture.press(0, 0, pointer_id=1)
    assert not capture.press(50, 50, pointer_id=2)

    capture.move(0, 30, pointer_id=2)
    assert capture.state is GestureState.PRESSED

    capture.release(pointer_id=2)
    assert capture.state is GestureState.PRESSED

    capture.move(0, 30, pointer_id=1)
    assert log.appended == [Point(0.0, 30.0)]


def test_samples_without_contact_are_ignored(capture):
    log = SignalLog(capture)
    capture.move(10, 10)
    capture.release()
    assert log.appended == []
    assert log.taps == 0
    assert capture.state is GestureState.IDLE


def test_cancel_drops_pending_ink(capture, recognizer):
    draw(capture, [(0, 0), (0, 20), (0, 40)])
    capture.cancel()

    assert capture.state is GestureState.IDLE
    assert capture.pending_ink.is_empty()
    assert not capture.is_settle_pending()
    assert capture.settle() is None
    assert recognizer.calls == []


def test_surfaces_are_independent(qapp):
    left = GestureCapture(recognizer=RecordingRecognizer(digit=1))
    right = GestureCapture(recognizer=RecordingRecognizer(digit=7))

    draw(left, [(0, 0), (0, 20), (0, 40)])
    right.press(5, 5)

    assert left.state is GestureState.COMMITTED
    assert right.state is GestureState.PRESSED
    assert left.settle() == 1
    assert right.pending_ink.is_empty()


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
