"""
Ink Dataclasses

Point, stroke and ink containers shared by the gesture layer and the recognizer.
"""

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np


@dataclass(frozen=True)
class Point:
    """Surface-local pixel coordinate."""
    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


PointLike = Union[Point, Sequence[float]]


def to_point(value: PointLike) -> Point:
    """Coerce a Point or an (x, y) pair to a Point."""
    if isinstance(value, Point):
        return value
    x, y = value
    return Point(float(x), float(y))


@dataclass(frozen=True)
class Stroke:
    """Points from one continuous contact (press -> move -> release)."""
    points: Tuple[Point, ...]

    @classmethod
    def from_points(cls, points: Iterable[PointLike]) -> 'Stroke':
        return cls(points=tuple(to_point(p) for p in points))

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class Ink:
    """
    All strokes gathered for one recognition attempt.

    Stroke boundaries carry no meaning for classification; the recognizer
    works on the flattened point sequence.
    """
    strokes: Tuple[Stroke, ...] = ()

    @classmethod
    def from_strokes(cls, strokes: Iterable[Union[Stroke, Iterable[PointLike]]]) -> 'Ink':
        """
        Build Ink from strokes given as Stroke objects or point sequences.

        Example:
            ink = Ink.from_strokes([[(40, 0), (40, 40)], [(20, 20), (60, 20)]])
        """
        return cls(strokes=tuple(
            s if isinstance(s, Stroke) else Stroke.from_points(s)
            for s in strokes
        ))

    def flatten(self) -> List[Point]:
        """Concatenate all strokes into one point list."""
        return [p for stroke in self.strokes for p in stroke.points]

    @property
    def point_count(self) -> int:
        return sum(len(s) for s in self.strokes)

    def is_empty(self) -> bool:
        return self.point_count == 0

    def to_array(self) -> np.ndarray:
        """Flattened points as an (N, 2) float array."""
        points = self.flatten()
        if not points:
            return np.empty((0, 2), dtype=float)
        return np.array([p.as_tuple() for p in points], dtype=float)

    def to_list(self) -> List[List[List[float]]]:
        """Plain nested lists, suitable for json.dump()."""
        return [[[p.x, p.y] for p in s.points] for s in self.strokes]
