"""
Shape Scorer

Point-wise distance between a normalized candidate and normalized templates.
"""

import math
from typing import Iterable

import numpy as np


def path_distance(a: np.ndarray, b: np.ndarray) -> float:
    """
    Mean Euclidean distance between corresponding points.

    Raises:
        ValueError: If the polylines differ in length
    """
    if len(a) != len(b):
        raise ValueError(f"Point count mismatch: {len(a)} vs {len(b)}")
    return float(np.linalg.norm(a - b, axis=1).mean())


def best_match_distance(candidate: np.ndarray, template: np.ndarray) -> float:
    """
    Distance to a template traversed in either direction.

    Makes the score independent of whether the digit was drawn
    start-to-end or end-to-start.
    """
    forward = path_distance(candidate, template)
    backward = path_distance(candidate, template[::-1])
    return min(forward, backward)


def template_distance(candidate: np.ndarray, variants: Iterable[np.ndarray]) -> float:
    """Best distance over all template variants of one digit."""
    best = math.inf
    for template in variants:
        best = min(best, best_match_distance(candidate, template))
    return best
