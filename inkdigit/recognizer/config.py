"""
Recognizer Configuration

Tunable constants for the handwriting recognizer and gesture layer.
All heuristic thresholds live here so tuning can be audited in one place.
"""

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Tuple

logger = logging.getLogger(__name__)


# Normalization
RESAMPLE_POINTS_COUNT = 64
MIN_SCALE_DIMENSION = 0.01  # Floor for near-straight strokes

# Confidence gate
MAX_DISTANCE_THRESHOLD = 0.50
CONFIDENCE_GAP_THRESHOLD = 0.05

# Input sanity
MIN_INK_POINTS = 5

# Digit "1" fast path (raw pixel space)
VERTICAL_LINE_MAX_RATIO = 0.20
VERTICAL_LINE_MIN_HEIGHT = 20

# Gesture layer
MOVEMENT_THRESHOLD_PX = 8
DEBOUNCE_DELAY_MS = 600
MIN_STROKE_POINTS = 3  # Strokes of 2 points or fewer are accidental taps


# Zones in normalized space: (min_x, max_x, min_y, max_y), bounds inclusive
Zone = Tuple[float, float, float, float]

TOP_HALF: Zone = (0.0, 1.0, 0.0, 0.5)
BOTTOM_HALF: Zone = (0.0, 1.0, 0.5, 1.0)
LEFT_HALF: Zone = (0.0, 0.5, 0.0, 1.0)
RIGHT_HALF: Zone = (0.5, 1.0, 0.0, 1.0)
CENTER_BOX: Zone = (0.3, 0.7, 0.3, 0.7)
TOP_LEFT_QUADRANT: Zone = (0.0, 0.5, 0.0, 0.5)
TOP_RIGHT_QUADRANT: Zone = (0.5, 1.0, 0.0, 0.5)

# Structural critic - digit 0: closed loop, hollow center
ZERO_MAX_CLOSURE_GAP = 0.35
ZERO_OPEN_LOOP_PENALTY = 1.0
ZERO_MAX_CENTER_DENSITY = 0.15
ZERO_FILLED_CENTER_PENALTY = 0.8

# Digit 1: narrow, not lopsided
ONE_MAX_ASPECT_RATIO = 0.5
ONE_TOO_WIDE_PENALTY = 1.0
ONE_MAX_SIDE_DENSITY = 0.8
ONE_LOPSIDED_PENALTY = 0.5

# Digit 2: flat base, starts top-left
TWO_BASE_ZONE: Zone = (0.0, 1.0, 0.85, 1.0)
TWO_MIN_BASE_DENSITY = 0.15
TWO_MISSING_BASE_PENALTY = 0.5
TWO_HOOK_ZONE: Zone = (0.0, 0.5, 0.0, 0.3)
TWO_MIN_HOOK_DENSITY = 0.05
TWO_MISSING_HOOK_PENALTY = 0.3

# Digit 3: open on the left, pinched in the middle
THREE_LEFT_ZONE: Zone = (0.0, 0.25, 0.3, 0.7)
THREE_MAX_LEFT_DENSITY = 0.05
THREE_CLOSED_LEFT_PENALTY = 0.8
THREE_MIN_CENTER_DENSITY = 0.1
THREE_EMPTY_CENTER_PENALTY = 0.4

# Digit 4: crossbar through the middle, does not start on the right edge
FOUR_MIN_CENTER_DENSITY = 0.1
FOUR_EMPTY_CENTER_PENALTY = 0.3
FOUR_SUSPECT_START = (1.0, 0.5)
FOUR_SUSPECT_START_RADIUS = 0.3
FOUR_SUSPECT_START_PENALTY = 0.5

# Digit 5: sharp top-left corner early in the stroke
FIVE_CORNER_WINDOW = (0.0, 0.4)
FIVE_CORNER_MAX_ANGLE = 110.0
FIVE_NO_CORNER_PENALTY = 0.4

# Digit 6: ends low, loops at the bottom, starts top-right
SIX_MIN_END_Y = 0.5
SIX_HIGH_END_PENALTY = 1.0
SIX_LOOP_ZONE: Zone = (0.2, 0.8, 0.6, 0.9)
SIX_MIN_LOOP_DENSITY = 0.1
SIX_MISSING_LOOP_PENALTY = 0.5
SIX_LOW_LEFT_START_MAX_X = 0.2
SIX_LOW_LEFT_START_MIN_Y = 0.2
SIX_LOW_LEFT_START_PENALTY = 0.5

# Digit 7: top bar, empty bottom-left
SEVEN_BAR_ZONE: Zone = (0.0, 1.0, 0.0, 0.15)
SEVEN_MIN_BAR_DENSITY = 0.1
SEVEN_MISSING_BAR_PENALTY = 0.7
SEVEN_FOOT_ZONE: Zone = (0.0, 0.4, 0.6, 1.0)
SEVEN_MAX_FOOT_DENSITY = 0.1
SEVEN_FOOT_PENALTY = 0.5

# Digit 8: crossing in the center, mass on top and bottom
EIGHT_MIN_CENTER_DENSITY = 0.15
EIGHT_EMPTY_CENTER_PENALTY = 0.8
EIGHT_MIN_HALF_DENSITY = 0.2
EIGHT_UNBALANCED_PENALTY = 0.5

# Digit 9: loop on top, tail ending low
NINE_MIN_QUADRANT_DENSITY = 0.1
NINE_EMPTY_QUADRANT_PENALTY = 0.5
NINE_MIN_END_Y = 0.6
NINE_HIGH_END_PENALTY = 1.0
NINE_MIN_TOP_DENSITY = 0.2
NINE_LIGHT_TOP_PENALTY = 0.5


def _filter_known(cls, values: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys that are not dataclass fields, logging each one."""
    known = {f.name for f in fields(cls)}
    filtered = {}
    for key, value in values.items():
        if key in known:
            filtered[key] = value
        else:
            logger.warning(f"Ignoring unknown {cls.__name__} option: {key}")
    return filtered


@dataclass(frozen=True)
class RecognizerConfig:
    """
    Classifier tuning parameters.

    Attributes:
        resample_points: Fixed point count after resampling
        max_distance: Absolute gate; best score must not exceed this
        confidence_gap: Relative gate; runner-up must trail by at least this
        min_points: Raw ink with fewer points is rejected outright
        vertical_line_max_ratio: Width/height below this is a "1"
        vertical_line_min_height: Minimum pixel height for the "1" fast path
    """
    resample_points: int = RESAMPLE_POINTS_COUNT
    max_distance: float = MAX_DISTANCE_THRESHOLD
    confidence_gap: float = CONFIDENCE_GAP_THRESHOLD
    min_points: int = MIN_INK_POINTS
    vertical_line_max_ratio: float = VERTICAL_LINE_MAX_RATIO
    vertical_line_min_height: float = VERTICAL_LINE_MIN_HEIGHT

    def __post_init__(self):
        if self.resample_points < 2:
            raise ValueError(f"resample_points must be >= 2, got {self.resample_points}")

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'RecognizerConfig':
        """Build a config from a settings dictionary, ignoring unknown keys."""
        return cls(**_filter_known(cls, values))


@dataclass(frozen=True)
class GestureConfig:
    """
    Gesture segmentation parameters.

    Attributes:
        movement_threshold_px: Drag distance separating a draw from a tap
        debounce_ms: Quiet period after the last stroke before classifying
        min_stroke_points: Shorter strokes are discarded
    """
    movement_threshold_px: float = MOVEMENT_THRESHOLD_PX
    debounce_ms: int = DEBOUNCE_DELAY_MS
    min_stroke_points: int = MIN_STROKE_POINTS

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'GestureConfig':
        """Build a config from a settings dictionary, ignoring unknown keys."""
        return cls(**_filter_known(cls, values))
