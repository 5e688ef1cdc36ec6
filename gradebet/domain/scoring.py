"""Scoring engine - turns a bet and an actual grade into a point award"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from gradebet.domain.models import HistoryEntry, Outcome, Prediction

MAX_AWARD = 10


def _to_decimal(grade: float) -> Decimal:
    # str() keeps the grade as typed, 4.6 stays 4.6 instead of 4.5999...
    return Decimal(str(grade))


def compute_award(predicted: float, actual: float) -> int:
    """
    Award points for a bet from its distance to the actual grade.

    Formula: max(0, 10 - round(2 * |predicted - actual|))

    Rounding is half-up on the scaled difference: a 0.25 grade miss scales
    to 0.5 and costs one point. Python's round() would round it to 0.

    Examples:
        4.0 vs 4.0 → 10
        4.0 vs 4.6 → 2 * 0.6 = 1.2 → 1 → 9
        4.0 vs 5.0 → 2 * 1.0 = 2 → 8
        1.0 vs 6.0 → 10 - 10 → 0
    """
    distance = abs(_to_decimal(predicted) - _to_decimal(actual)) * 2
    penalty = int(distance.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return max(0, MAX_AWARD - penalty)


def award_for_outcome(prediction: Optional[Prediction], outcome: Outcome) -> int:
    """
    Award for a recorded outcome, 0 when the user did not bet on the exam.

    Whether a zero award is written back to the user's score is up to the caller.
    """
    if prediction is None:
        return 0

    if (prediction.exam_id, prediction.username) != (outcome.exam_id, outcome.username):
        raise ValueError(
            f"Bet on exam {prediction.exam_id} by {prediction.username} "
            f"does not match result on exam {outcome.exam_id} by {outcome.username}"
        )

    return compute_award(prediction.grade, outcome.grade)


def award_for_entry(entry: HistoryEntry) -> int:
    """Award for a history entry, 0 when no bet was placed"""
    if entry.predicted is None:
        return 0
    return compute_award(entry.predicted, entry.actual)


def total_score(history: Iterable[HistoryEntry]) -> int:
    """Total score earned over a result history (0 for no results)"""
    return sum(award_for_entry(entry) for entry in history)
