"""Grade distribution and bet accuracy statistics"""

from typing import Dict, Iterable, List, Tuple

from gradebet.domain.exceptions import NoDataError
from gradebet.domain.models import MIN_GRADE, UserStats, validate_grade

# (label, upper bound) - each bucket is (previous upper bound, upper bound]
GRADE_BUCKETS: List[Tuple[str, float]] = [
    ("1.0-2.0", 2.0),
    ("2.1-3.0", 3.0),
    ("3.1-4.0", 4.0),
    ("4.1-5.0", 5.0),
    ("5.1-6.0", 6.0),
]


def bucket_for_grade(grade: float) -> str:
    """Label of the bucket a grade falls in (1.0 belongs to the first one)"""
    grade = validate_grade(grade)
    if grade == MIN_GRADE:
        return GRADE_BUCKETS[0][0]

    for label, upper in GRADE_BUCKETS:
        if grade <= upper:
            return label

    # validate_grade caps grades at the last upper bound
    raise AssertionError(f"Grade {grade} fits no bucket")


def build_distribution(grades: Iterable[float]) -> Dict[str, int]:
    """
    Count results per grade bucket.

    Every bucket is present in the output, empty ones with 0.

    Example:
        [1.0, 2.0, 2.5, 6.0] → {"1.0-2.0": 2, "2.1-3.0": 1, "3.1-4.0": 0, "4.1-5.0": 0, "5.1-6.0": 1}

    Raises:
        NoDataError: no grades given
    """
    grades = list(grades)
    if not grades:
        raise NoDataError("No results found for this user")

    distribution = {label: 0 for label, _ in GRADE_BUCKETS}
    for grade in grades:
        distribution[bucket_for_grade(grade)] += 1

    return distribution


def build_user_stats(bets_count: int, results_count: int, exact_bets_count: int) -> UserStats:
    """Assemble the per-user counters into one UserStats"""
    for name, value in (
        ("bets_count", bets_count),
        ("results_count", results_count),
        ("exact_bets_count", exact_bets_count),
    ):
        if value < 0:
            raise ValueError(f"{name} cannot be negative, got {value}")

    return UserStats(
        bets_count=bets_count,
        results_count=results_count,
        exact_bets_count=exact_bets_count,
    )
