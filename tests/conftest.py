"""Shared pytest fixtures for the Ink Digit test suite.

Fixtures:
    qapp: QCoreApplication instance for QObject/QTimer based tests
    circle_ink: Closed round shape drawn from the top, clockwise
    vertical_line_ink: Near-vertical straight stroke
    two_stroke_four: A "4" drawn as a vertical+diagonal stroke and a crossbar
"""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from PyQt5.QtCore import QCoreApplication

from inkdigit.recognizer import Ink


@pytest.fixture(scope="session")
def qapp():
    """Qt application needed for signals and timers."""
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def circle_ink():
    return Ink.from_strokes([
        [(20, 0), (40, 10), (40, 30), (20, 40), (0, 30), (0, 10), (20, 0)]
    ])


@pytest.fixture
def vertical_line_ink():
    # (40, 0) -> (42, 80): height 80, width 2, ratio 0.025
    return Ink.from_strokes([
        [(40 + i * 0.25, i * 10) for i in range(9)]
    ])


@pytest.fixture
def two_stroke_four():
    return [
        [(60, 80), (60, 60), (60, 40), (60, 20), (60, 0), (40, 17), (20, 33), (0, 50)],
        [(0, 50), (20, 50), (40, 50), (60, 50), (80, 50)],
    ]
