"""
Expression scores and the turbulence signal.

A detected face is reduced to four intensities which are then folded into a
single scalar, "turbulence", that drives every visual parameter:

- Happy   → calmer (negative weight)
- Neutral → slightly calmer
- Angry   → more turbulent
- Sad     → more turbulent
"""

import threading
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")

HAPPY_WEIGHT = -0.5
NEUTRAL_WEIGHT = -0.25
ANGRY_WEIGHT = 0.5
SAD_WEIGHT = 0.5
TURBULENCE_BIAS = 0.5


@dataclass(frozen=True)
class ExpressionScores:
    """Per-face expression intensities, each in [0, 1]."""
    happy: float = 0.0
    neutral: float = 0.0
    angry: float = 0.0
    sad: float = 0.0

    @classmethod
    def from_mapping(cls, emotions: dict, scale: float = 1.0) -> "ExpressionScores":
        """
        Build scores from a detector's emotion dict.

        Args:
            emotions: Mapping of label to score. Missing labels count as 0.
            scale: Divisor applied to every value (100 for percentages).

        Returns:
            ExpressionScores with the four consumed categories.
        """
        return cls(
            happy=float(emotions.get("happy", 0.0)) / scale,
            neutral=float(emotions.get("neutral", 0.0)) / scale,
            angry=float(emotions.get("angry", 0.0)) / scale,
            sad=float(emotions.get("sad", 0.0)) / scale,
        )


def compute_turbulence(scores: ExpressionScores) -> float:
    """Fold the four scores into turbulence. Not clamped."""
    return (
        HAPPY_WEIGHT * scores.happy
        + NEUTRAL_WEIGHT * scores.neutral
        + ANGRY_WEIGHT * scores.angry
        + SAD_WEIGHT * scores.sad
        + TURBULENCE_BIAS
    )


@dataclass(frozen=True)
class ExpressionSnapshot:
    """
    One published sample of expression state.

    Holds the raw scores, their weighted components and the resulting
    turbulence, all derived from a single detection.
    """
    scores: ExpressionScores
    happy: float
    neutral: float
    angry: float
    sad: float
    turbulence: float

    @classmethod
    def from_scores(cls, scores: ExpressionScores) -> "ExpressionSnapshot":
        happy = HAPPY_WEIGHT * scores.happy
        neutral = NEUTRAL_WEIGHT * scores.neutral
        angry = ANGRY_WEIGHT * scores.angry
        sad = SAD_WEIGHT * scores.sad
        return cls(
            scores=scores,
            happy=happy,
            neutral=neutral,
            angry=angry,
            sad=sad,
            turbulence=happy + neutral + angry + sad + TURBULENCE_BIAS,
        )

    def describe(self) -> str:
        s = self.scores
        return (
            f"happy={s.happy:.3f} neutral={s.neutral:.3f} angry={s.angry:.3f} "
            f"sad={s.sad:.3f} turbulence={self.turbulence:.3f}"
        )


class LatestValue(Generic[T]):
    """
    Single-slot, overwrite-on-write cell shared between threads.

    Writers replace the stored reference wholesale; readers get whatever was
    written last, or None if nothing has been published yet.
    """

    def __init__(self, initial: Optional[T] = None):
        self._value = initial
        self._lock = threading.Lock()
        self._version = 0

    def publish(self, value: T) -> None:
        with self._lock:
            self._value = value
            self._version += 1

    def latest(self) -> Optional[T]:
        with self._lock:
            return self._value

    @property
    def version(self) -> int:
        """Number of publishes so far."""
        with self._lock:
            return self._version
