"""
Digit Classifier

Turns raw ink into a digit 0-9 or a rejection.

Pipeline:
    1. Fast path - too little ink is rejected, a tall thin stroke is a "1"
    2. Normalize - resample, translate to origin, scale into the unit box
    3. Score - best template distance plus structural penalty per digit
    4. Rank - ascending by total score
    5. Gate - absolute distance threshold and relative confidence gap

Rejection is an ordinary outcome ("please redraw"), never an exception.
"""

import logging
import time
from typing import Iterable, List, Optional, Union

import numpy as np

from .config import RecognizerConfig
from .critic import StrokeFeatures, structural_penalty
from .geometry import Bounds, get_bounds, normalize
from .ink import Ink
from .result import Candidate, RecognitionResult, RejectReason
from .scorer import template_distance
from .templates import TemplateLibrary, get_template_library


logger = logging.getLogger(__name__)

InkLike = Union[Ink, Iterable[Iterable]]


def _as_ink(ink: InkLike) -> Ink:
    if isinstance(ink, Ink):
        return ink
    return Ink.from_strokes(ink)


def apply_confidence_gate(
    candidates: List[Candidate],
    max_distance: float,
    confidence_gap: float
) -> Optional[RejectReason]:
    """
    Check ranked candidates against both confidence conditions.

    Args:
        candidates: Candidates sorted ascending by score
        max_distance: Best score must not exceed this
        confidence_gap: Runner-up must trail the best by at least this

    Returns:
        None if the best candidate is accepted, otherwise the reason for rejection
    """
    if not candidates:
        return RejectReason.ABOVE_DISTANCE_THRESHOLD

    best = candidates[0]
    if best.score > max_distance:
        return RejectReason.ABOVE_DISTANCE_THRESHOLD

    if len(candidates) > 1:
        gap = candidates[1].score - best.score
        if gap < confidence_gap:
            return RejectReason.AMBIGUOUS

    return None


class DigitRecognizer:
    """
    Freehand single-digit recognizer.

    Stateless between calls: the same ink always yields the same result.
    Instances share the process-wide template library.

    Example:
        recognizer = DigitRecognizer()
        digit = recognizer.recognize([[(20, 0), (40, 10), (40, 30), ...]])
        if digit is None:
            ...  # ask the user to redraw
    """

    def __init__(
        self,
        config: Optional[RecognizerConfig] = None,
        library: Optional[TemplateLibrary] = None
    ):
        """
        Args:
            config: Tuning parameters; defaults to RecognizerConfig()
            library: Template library; defaults to the shared library
                     for the configured resample point count
        """
        self._config = config or RecognizerConfig()
        if library is None:
            library = get_template_library(self._config.resample_points)
        self._library = library

        if self._library.resample_points != self._config.resample_points:
            raise ValueError(
                f"Template library uses {self._library.resample_points} points, "
                f"config expects {self._config.resample_points}"
            )

    @property
    def config(self) -> RecognizerConfig:
        return self._config

    @property
    def library(self) -> TemplateLibrary:
        return self._library

    def recognize(self, ink: InkLike) -> Optional[int]:
        """Classify ink, returning a digit or None."""
        return self.classify(ink).digit

    def classify(self, ink: InkLike) -> RecognitionResult:
        """
        Classify ink and report how the decision was made.

        Args:
            ink: Ink, or a sequence of strokes of (x, y) pairs

        Returns:
            RecognitionResult with the digit (or None) and ranked candidates
        """
        start_time = time.perf_counter()
        ink = _as_ink(ink)
        raw = ink.to_array()
        point_count = len(raw)

        if point_count < self._config.min_points:
            logger.debug(f"Rejected: only {point_count} points")
            return RecognitionResult(
                digit=None,
                reject_reason=RejectReason.TOO_FEW_POINTS,
                point_count=point_count,
                processing_time_ms=(time.perf_counter() - start_time) * 1000
            )

        bounds = get_bounds(raw)
        if self._is_vertical_line(bounds):
            logger.debug(
                f"Fast path: vertical line {bounds.width:.1f}x{bounds.height:.1f} -> 1"
            )
            return RecognitionResult(
                digit=1,
                fast_path=True,
                point_count=point_count,
                processing_time_ms=(time.perf_counter() - start_time) * 1000
            )

        points = normalize(raw, self._config.resample_points)
        candidates = self.score_candidates(points, bounds)

        reason = apply_confidence_gate(
            candidates, self._config.max_distance, self._config.confidence_gap
        )
        digit = None if reason else candidates[0].digit

        result = RecognitionResult(
            digit=digit,
            candidates=candidates,
            reject_reason=reason,
            point_count=point_count,
            processing_time_ms=(time.perf_counter() - start_time) * 1000
        )

        best = result.best
        gap = result.gap if result.gap is not None else float("nan")
        if best is None:
            logger.debug(f"Rejected ({reason.value}): library has no templates")
        elif reason:
            logger.debug(
                f"Rejected ({reason.value}): best {best.digit} "
                f"score={best.score:.3f} gap={gap:.3f}"
            )
        else:
            logger.debug(f"Recognized {digit} score={best.score:.3f} gap={gap:.3f}")

        return result

    def score_candidates(self, points: np.ndarray, raw_bounds: Bounds) -> List[Candidate]:
        """
        Score every digit against a normalized candidate.

        Args:
            points: Normalized candidate polyline
            raw_bounds: Bounding box of the raw ink (for aspect checks)

        Returns:
            Candidates sorted ascending by total score; ties keep digit order
        """
        features = StrokeFeatures.extract(points, raw_bounds)
        candidates = []

        for digit in self._library.digits():
            candidates.append(Candidate(
                digit=digit,
                distance=template_distance(points, self._library.templates_for(digit)),
                penalty=structural_penalty(digit, features),
            ))

        candidates.sort(key=lambda c: c.score)
        return candidates

    def _is_vertical_line(self, bounds: Bounds) -> bool:
        """Tall, thin ink is a "1"; shape scoring is unreliable when near 1D."""
        if bounds.height <= self._config.vertical_line_min_height:
            return False
        return bounds.aspect_ratio < self._config.vertical_line_max_ratio


_default_recognizer: Optional[DigitRecognizer] = None


def get_default_recognizer() -> DigitRecognizer:
    """Shared recognizer with default configuration, created on first use."""
    global _default_recognizer
    if _default_recognizer is None:
        _default_recognizer = DigitRecognizer()
    return _default_recognizer


def recognize(ink: InkLike) -> Optional[int]:
    """
    Classify ink with the default recognizer.

    Returns:
        Digit 0-9, or None when the ink is too short or ambiguous
    """
    return get_default_recognizer().recognize(ink)
