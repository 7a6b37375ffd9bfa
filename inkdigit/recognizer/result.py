"""
Recognition Result Dataclasses

Shared data structures describing one classification attempt.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class RejectReason(Enum):
    """Why an attempt produced no digit."""
    TOO_FEW_POINTS = "too_few_points"
    ABOVE_DISTANCE_THRESHOLD = "above_distance_threshold"
    AMBIGUOUS = "ambiguous"


@dataclass(frozen=True)
class Candidate:
    """Score of one digit for one attempt (lower is better)."""
    digit: int
    distance: float  # Best template distance
    penalty: float   # Structural critic penalty

    @property
    def score(self) -> float:
        return self.distance + self.penalty


@dataclass
class RecognitionResult:
    """Complete result of one classification attempt."""
    digit: Optional[int]                 # 0-9, or None when rejected
    candidates: List[Candidate] = field(default_factory=list)  # Ascending by score
    fast_path: bool = False              # Decided by the vertical-line shortcut
    reject_reason: Optional[RejectReason] = None
    point_count: int = 0                 # Raw points in the ink
    processing_time_ms: float = 0.0

    @property
    def accepted(self) -> bool:
        return self.digit is not None

    @property
    def best(self) -> Optional[Candidate]:
        return self.candidates[0] if self.candidates else None

    @property
    def gap(self) -> Optional[float]:
        """Margin between the runner-up and the best candidate."""
        if len(self.candidates) < 2:
            return None
        return self.candidates[1].score - self.candidates[0].score
