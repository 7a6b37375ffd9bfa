"""
Geometry Kernel

Pure polyline helpers used to normalize ink and templates.
Polylines are (N, 2) float arrays; anything array-like (lists of Point,
lists of (x, y) pairs) is accepted on input.
"""

import math
from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from .config import MIN_SCALE_DIMENSION, RESAMPLE_POINTS_COUNT
from .ink import Point, PointLike, to_point


PolylineLike = Union[np.ndarray, Sequence[PointLike]]


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box."""
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def aspect_ratio(self) -> float:
        """Width / height; infinite for a zero-height box."""
        if self.height == 0:
            return math.inf
        return self.width / self.height


def as_polyline(points: PolylineLike) -> np.ndarray:
    """Convert points to an (N, 2) float array."""
    if isinstance(points, np.ndarray):
        arr = points.astype(float, copy=False)
    else:
        arr = np.array([to_point(p).as_tuple() for p in points], dtype=float)
    return arr.reshape(-1, 2)


def distance(p1: PointLike, p2: PointLike) -> float:
    """Euclidean distance between two points."""
    a, b = to_point(p1), to_point(p2)
    return math.hypot(a.x - b.x, a.y - b.y)


def path_length(points: PolylineLike) -> float:
    """Sum of consecutive segment lengths; 0 for a single point."""
    pts = as_polyline(points)
    if len(pts) < 2:
        return 0.0
    return float(np.linalg.norm(np.diff(pts, axis=0), axis=1).sum())


def resample(points: PolylineLike, n: int = RESAMPLE_POINTS_COUNT) -> np.ndarray:
    """
    Resample a polyline to exactly n points evenly spaced by arc length.

    Raw ink has point spacing that depends on drawing speed; resampling
    makes point i of two polylines comparable.

    Args:
        points: Non-empty polyline
        n: Output point count, at least 2

    Returns:
        (n, 2) array starting at the first and ending at the last input point.
        A zero-length path yields n copies of its first point.

    Raises:
        ValueError: If n < 2 or points is empty
    """
    if n < 2:
        raise ValueError(f"resample needs n >= 2, got {n}")

    pts = as_polyline(points)
    if len(pts) == 0:
        raise ValueError("Cannot resample an empty polyline")

    segments = np.linalg.norm(np.diff(pts, axis=0), axis=1)
    if segments.sum() == 0:
        return np.repeat(pts[:1], n, axis=0)

    # Drop repeated samples so cumulative length is strictly increasing
    keep = np.concatenate(([True], segments > 0))
    pts = pts[keep]
    cumulative = np.concatenate(([0.0], np.cumsum(segments[segments > 0])))

    targets = np.linspace(0.0, cumulative[-1], n)
    xs = np.interp(targets, cumulative, pts[:, 0])
    ys = np.interp(targets, cumulative, pts[:, 1])
    return np.column_stack((xs, ys))


def centroid(points: PolylineLike) -> Point:
    """Arithmetic mean of all points."""
    cx, cy = as_polyline(points).mean(axis=0)
    return Point(float(cx), float(cy))


def translate_to_origin(points: PolylineLike) -> np.ndarray:
    """Shift points so their centroid sits at (0, 0)."""
    pts = as_polyline(points)
    return pts - pts.mean(axis=0)


def get_bounds(points: PolylineLike) -> Bounds:
    """Bounding box of a non-empty polyline."""
    pts = as_polyline(points)
    min_x, min_y = pts.min(axis=0)
    max_x, max_y = pts.max(axis=0)
    return Bounds(float(min_x), float(max_x), float(min_y), float(max_y))


def normalize_scale(points: PolylineLike, min_dimension: float = MIN_SCALE_DIMENSION) -> np.ndarray:
    """
    Rescale each axis independently into [0, 1].

    Axes are stretched separately, so aspect ratio is lost; the classifier's
    vertical-line fast path and the critic's aspect check compensate.
    Dimensions below min_dimension are floored to avoid dividing by zero.
    """
    pts = as_polyline(points)
    bounds = get_bounds(pts)
    width = max(bounds.width, min_dimension)
    height = max(bounds.height, min_dimension)
    return (pts - (bounds.min_x, bounds.min_y)) / (width, height)


def normalize(points: PolylineLike, n: int = RESAMPLE_POINTS_COUNT) -> np.ndarray:
    """Resample, translate to origin, then scale into the unit box."""
    return normalize_scale(translate_to_origin(resample(points, n)))
