"""
Digit Template Library

Hand-authored reference polylines for digits 0-9, normalized once per
process and shared read-only by every recognizer.
"""

import logging
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .config import RESAMPLE_POINTS_COUNT
from .geometry import normalize


logger = logging.getLogger(__name__)


# Authored in a unit box, y pointing down. Several variants per digit cover
# common handwriting styles; the best-scoring variant wins.
RAW_TEMPLATES: Dict[int, List[List[Tuple[float, float]]]] = {
    0: [
        [(0.5, 0), (1, 0.5), (0.5, 1), (0, 0.5), (0.5, 0)],  # Circle
    ],
    1: [
        [(0.5, 0), (0.5, 1)],  # Stick
        [(0.4, 0), (0.5, 0), (0.5, 1)],  # Hook
    ],
    2: [
        [(0, 0.2), (0.5, 0), (1, 0.2), (1, 0.4), (0, 1), (1, 1)],  # Standard
        [(0.1, 0.3), (0.5, 0), (0.9, 0.3), (0.2, 0.9), (1, 0.9)],  # Loopy base
    ],
    3: [
        [(0.1, 0.2), (0.5, 0), (0.9, 0.2), (0.5, 0.5), (0.9, 0.8), (0.5, 1), (0.1, 0.8)],
    ],
    4: [
        [(0.8, 1), (0.8, 0), (0, 0.6), (1, 0.6)],  # Standard
        [(0.7, 1), (0.7, 0), (0, 0.5), (0.7, 0.5)],  # Open top
        [(1, 1), (1, 0), (0, 0.7), (1, 0.7)],  # L-shape
    ],
    5: [
        [(1, 0), (0, 0), (0, 0.4), (1, 0.6), (0.5, 1), (0, 0.9)],  # Standard
        [(0.9, 0), (0.2, 0), (0.2, 0.4), (1, 0.7), (0.1, 0.9)],  # S-like
    ],
    6: [
        [(0.8, 0), (0.1, 0.4), (0.1, 0.9), (0.9, 0.9), (0.9, 0.5), (0.2, 0.5)],  # Spiral
        [(0.7, 0), (0.2, 0.8), (0.5, 1), (0.9, 0.8), (0.7, 0.6), (0.3, 0.7)],  # Straight back
        [(0.5, 0), (0, 0.5), (0.2, 0.9), (0.8, 0.9), (0.8, 0.6), (0.2, 0.6)],  # Big loop
    ],
    7: [
        [(0, 0), (1, 0), (0.4, 1)],
        [(0, 0.15), (1, 0.15), (0.5, 1)],
        [(0, 0.2), (0.1, 0), (1, 0), (0.5, 1)],  # Serif
    ],
    8: [
        [(0.5, 0.5), (0.9, 0.2), (0.5, 0), (0.1, 0.2), (0.5, 0.5),
         (0.9, 0.8), (0.5, 1), (0.1, 0.8), (0.5, 0.5)],  # Cross
        [(0.5, 0.5), (0.1, 0.2), (0.5, 0), (0.9, 0.2), (0.5, 0.5),
         (0.1, 0.8), (0.5, 1), (0.9, 0.8), (0.5, 0.5)],  # Reverse cross
        [(0.5, 0.5), (1, 0.25), (0.5, 0), (0, 0.25), (0.5, 0.5),
         (1, 0.75), (0.5, 1), (0, 0.75), (0.5, 0.5)],  # Snowman
    ],
    9: [
        [(1, 0.5), (0.5, 0), (0, 0.5), (1, 0.5), (1, 1)],  # Stick
        [(1, 0.5), (0.5, 0), (0, 0.5), (1, 0.5), (0.8, 1)],  # Slanted
        [(1, 0.6), (0.5, 0.2), (0, 0.6), (1, 0.6), (0.5, 1), (0.1, 0.9)],  # Curly
    ],
}


class TemplateLibrary:
    """
    Normalized digit templates.

    Every raw polyline is resampled to the fixed point count, translated to
    the origin and scaled into the unit box. The resulting arrays are marked
    read-only; the library never changes after construction.
    """

    def __init__(
        self,
        raw_templates: Dict[int, Sequence[Sequence[Tuple[float, float]]]] = RAW_TEMPLATES,
        resample_points: int = RESAMPLE_POINTS_COUNT
    ):
        self._resample_points = resample_points
        self._templates: Dict[int, Tuple[np.ndarray, ...]] = {}

        for digit, variants in sorted(raw_templates.items()):
            normalized = []
            for raw in variants:
                points = normalize(raw, resample_points)
                points.setflags(write=False)
                normalized.append(points)
            self._templates[digit] = tuple(normalized)

        variant_count = sum(len(v) for v in self._templates.values())
        logger.debug(
            f"Template library built: {len(self._templates)} digits, "
            f"{variant_count} variants, {resample_points} points each"
        )

    @property
    def resample_points(self) -> int:
        return self._resample_points

    def digits(self) -> List[int]:
        """Digits with at least one template, ascending."""
        return list(self._templates.keys())

    def templates_for(self, digit: int) -> Tuple[np.ndarray, ...]:
        """
        Normalized template variants for a digit.

        Raises:
            KeyError: If the digit has no templates
        """
        return self._templates[digit]

    def __len__(self) -> int:
        return len(self._templates)


# Libraries keyed by resample point count, built on first use
_LIBRARY_CACHE: Dict[int, TemplateLibrary] = {}


def get_template_library(resample_points: int = RESAMPLE_POINTS_COUNT) -> TemplateLibrary:
    """
    Shared template library for a resample point count.

    Built lazily on first request and reused for the rest of the process.
    """
    if resample_points not in _LIBRARY_CACHE:
        _LIBRARY_CACHE[resample_points] = TemplateLibrary(resample_points=resample_points)
    return _LIBRARY_CACHE[resample_points]
