"""
Numeric helpers shared by the evaluator and the session manager.
"""
import math
from typing import Iterable


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, round_half_up(value)))


def mean_score(scores: Iterable[float]) -> int:
    """Rounded arithmetic mean; 0 for no scores."""
    scores = list(scores)
    if not scores:
        return 0
    return round_half_up(sum(scores) / len(scores))
