"""
Structural Critic

Digit-specific sanity checks layered on top of the raw shape distance.

Pure point-cloud distance confuses digits that resample to similar shapes
(0 vs 6, 8 vs 9, 4 vs 9). Each rule below encodes a necessary condition for
one digit and returns an additive penalty instead of a hard rejection, so a
borderline stroke can still win when nothing fits better.
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from . import config as cfg
from .geometry import Bounds, distance
from .ink import Point


def zone_density(points: np.ndarray, zone: cfg.Zone) -> float:
    """Fraction of points inside an inclusive axis-aligned zone."""
    min_x, max_x, min_y, max_y = zone
    xs, ys = points[:, 0], points[:, 1]
    inside = (xs >= min_x) & (xs <= max_x) & (ys >= min_y) & (ys <= max_y)
    return float(inside.mean())


def _turn_cosine(v1: np.ndarray, v2: np.ndarray) -> Optional[float]:
    """Cosine of the angle between two vectors, None if either has zero length."""
    magnitude = float(np.linalg.norm(v1) * np.linalg.norm(v2))
    if magnitude == 0:
        return None
    return float(np.dot(v1, v2)) / magnitude


def has_sharp_turn(
    points: np.ndarray,
    min_index_pct: float,
    max_index_pct: float,
    angle_threshold: float
) -> bool:
    """
    Check a window of the polyline for a corner.

    Scans every other point between the two index fractions and measures the
    angle between the incoming and outgoing vectors at each.

    Args:
        points: Normalized polyline
        min_index_pct: Window start as a fraction of the point count
        max_index_pct: Window end as a fraction of the point count
        angle_threshold: Angles below this (degrees) count as sharp

    Returns:
        True if any sampled angle is below the threshold
    """
    start = math.floor(len(points) * min_index_pct)
    end = math.floor(len(points) * max_index_pct)

    for i in range(start, end - 2, 2):  # Step by 2 to ride over jitter
        v1 = points[i] - points[i + 1]
        v2 = points[i + 2] - points[i + 1]
        cosine = _turn_cosine(v1, v2)
        # Rounding can leave the cosine just outside [-1, 1]; such samples are not corners
        if cosine is None or not -1.0 <= cosine <= 1.0:
            continue
        if math.degrees(math.acos(cosine)) < angle_threshold:
            return True
    return False


@dataclass(frozen=True)
class StrokeFeatures:
    """
    Geometric features of a normalized candidate.

    Computed once per classification and shared by every digit's rules.

    Attributes:
        points: Normalized polyline in the unit box
        start: First point
        end: Last point
        aspect_ratio: Width / height of the raw, unnormalized ink
        top, bottom, left, right, center: Common zone densities
    """
    points: np.ndarray
    start: Point
    end: Point
    aspect_ratio: float
    top: float
    bottom: float
    left: float
    right: float
    center: float

    @classmethod
    def extract(cls, points: np.ndarray, raw_bounds: Bounds) -> 'StrokeFeatures':
        return cls(
            points=points,
            start=Point(float(points[0, 0]), float(points[0, 1])),
            end=Point(float(points[-1, 0]), float(points[-1, 1])),
            aspect_ratio=raw_bounds.aspect_ratio,
            top=zone_density(points, cfg.TOP_HALF),
            bottom=zone_density(points, cfg.BOTTOM_HALF),
            left=zone_density(points, cfg.LEFT_HALF),
            right=zone_density(points, cfg.RIGHT_HALF),
            center=zone_density(points, cfg.CENTER_BOX),
        )

    def density(self, zone: cfg.Zone) -> float:
        return zone_density(self.points, zone)


CriticRule = Callable[[StrokeFeatures], float]

# Registry of per-digit rule sets
_RULES: Dict[int, CriticRule] = {}


def critic_rule(digit: int) -> Callable[[CriticRule], CriticRule]:
    """
    Decorator registering the rule set for a digit.

    Usage:
        @critic_rule(0)
        def _zero(f: StrokeFeatures) -> float:
            ...
    """
    def decorator(func: CriticRule) -> CriticRule:
        _RULES[digit] = func
        return func
    return decorator


def structural_penalty(digit: int, features: StrokeFeatures) -> float:
    """
    Total penalty for reading the candidate as the given digit.

    Digits without registered rules get no penalty.
    """
    rule = _RULES.get(digit)
    if rule is None:
        return 0.0
    return rule(features)


def registered_digits() -> Tuple[int, ...]:
    return tuple(sorted(_RULES))


@critic_rule(0)
def _zero(f: StrokeFeatures) -> float:
    penalty = 0.0
    # Ending away from the start means an open curve, often a 6
    if distance(f.start, f.end) > cfg.ZERO_MAX_CLOSURE_GAP:
        penalty += cfg.ZERO_OPEN_LOOP_PENALTY
    if f.center > cfg.ZERO_MAX_CENTER_DENSITY:
        penalty += cfg.ZERO_FILLED_CENTER_PENALTY
    return penalty


@critic_rule(1)
def _one(f: StrokeFeatures) -> float:
    penalty = 0.0
    if f.aspect_ratio > cfg.ONE_MAX_ASPECT_RATIO:
        penalty += cfg.ONE_TOO_WIDE_PENALTY
    if f.left > cfg.ONE_MAX_SIDE_DENSITY or f.right > cfg.ONE_MAX_SIDE_DENSITY:
        penalty += cfg.ONE_LOPSIDED_PENALTY
    return penalty


@critic_rule(2)
def _two(f: StrokeFeatures) -> float:
    penalty = 0.0
    if f.density(cfg.TWO_BASE_ZONE) < cfg.TWO_MIN_BASE_DENSITY:
        penalty += cfg.TWO_MISSING_BASE_PENALTY
    if f.density(cfg.TWO_HOOK_ZONE) < cfg.TWO_MIN_HOOK_DENSITY:
        penalty += cfg.TWO_MISSING_HOOK_PENALTY
    return penalty


@critic_rule(3)
def _three(f: StrokeFeatures) -> float:
    penalty = 0.0
    if f.density(cfg.THREE_LEFT_ZONE) > cfg.THREE_MAX_LEFT_DENSITY:
        penalty += cfg.THREE_CLOSED_LEFT_PENALTY
    if f.center < cfg.THREE_MIN_CENTER_DENSITY:
        penalty += cfg.THREE_EMPTY_CENTER_PENALTY
    return penalty


@critic_rule(4)
def _four(f: StrokeFeatures) -> float:
    penalty = 0.0
    if f.center < cfg.FOUR_MIN_CENTER_DENSITY:
        penalty += cfg.FOUR_EMPTY_CENTER_PENALTY
    if distance(f.start, cfg.FOUR_SUSPECT_START) < cfg.FOUR_SUSPECT_START_RADIUS:
        penalty += cfg.FOUR_SUSPECT_START_PENALTY
    return penalty


@critic_rule(5)
def _five(f: StrokeFeatures) -> float:
    lo, hi = cfg.FIVE_CORNER_WINDOW
    if not has_sharp_turn(f.points, lo, hi, cfg.FIVE_CORNER_MAX_ANGLE):
        return cfg.FIVE_NO_CORNER_PENALTY
    return 0.0


@critic_rule(6)
def _six(f: StrokeFeatures) -> float:
    penalty = 0.0
    if f.end.y < cfg.SIX_MIN_END_Y:
        penalty += cfg.SIX_HIGH_END_PENALTY
    if f.density(cfg.SIX_LOOP_ZONE) < cfg.SIX_MIN_LOOP_DENSITY:
        penalty += cfg.SIX_MISSING_LOOP_PENALTY
    # A 6 starts top-right or top-middle, not low on the left
    if f.start.x < cfg.SIX_LOW_LEFT_START_MAX_X and f.start.y > cfg.SIX_LOW_LEFT_START_MIN_Y:
        penalty += cfg.SIX_LOW_LEFT_START_PENALTY
    return penalty


@critic_rule(7)
def _seven(f: StrokeFeatures) -> float:
    penalty = 0.0
    if f.density(cfg.SEVEN_BAR_ZONE) < cfg.SEVEN_MIN_BAR_DENSITY:
        penalty += cfg.SEVEN_MISSING_BAR_PENALTY
    if f.density(cfg.SEVEN_FOOT_ZONE) > cfg.SEVEN_MAX_FOOT_DENSITY:
        penalty += cfg.SEVEN_FOOT_PENALTY
    return penalty


@critic_rule(8)
def _eight(f: StrokeFeatures) -> float:
    penalty = 0.0
    if f.center < cfg.EIGHT_MIN_CENTER_DENSITY:
        penalty += cfg.EIGHT_EMPTY_CENTER_PENALTY
    if f.top < cfg.EIGHT_MIN_HALF_DENSITY or f.bottom < cfg.EIGHT_MIN_HALF_DENSITY:
        penalty += cfg.EIGHT_UNBALANCED_PENALTY
    return penalty


@critic_rule(9)
def _nine(f: StrokeFeatures) -> float:
    penalty = 0.0
    if f.density(cfg.TOP_LEFT_QUADRANT) < cfg.NINE_MIN_QUADRANT_DENSITY:
        penalty += cfg.NINE_EMPTY_QUADRANT_PENALTY
    if f.density(cfg.TOP_RIGHT_QUADRANT) < cfg.NINE_MIN_QUADRANT_DENSITY:
        penalty += cfg.NINE_EMPTY_QUADRANT_PENALTY
    # Tail must finish low; curling back up makes it an 8 or 0
    if f.end.y < cfg.NINE_MIN_END_Y:
        penalty += cfg.NINE_HIGH_END_PENALTY
    if f.top < cfg.NINE_MIN_TOP_DENSITY:
        penalty += cfg.NINE_LIGHT_TOP_PENALTY
    return penalty
