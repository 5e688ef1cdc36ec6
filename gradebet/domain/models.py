"""Domain models - pure Python dataclasses representing business entities"""

import math
from dataclasses import dataclass
from datetime import date
from typing import Optional

from gradebet.domain.exceptions import InvalidGradeError

MIN_GRADE = 1.0
MAX_GRADE = 6.0


def validate_grade(value: float) -> float:
    """
    Check that a value is a grade on the Swiss 1.0 - 6.0 scale.

    Returns the grade as a float, raises InvalidGradeError otherwise.
    """
    if isinstance(value, bool):
        raise InvalidGradeError(f"Grade must be a number, got {value!r}")
    try:
        grade = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidGradeError(f"Grade must be a number, got {value!r}") from e

    if math.isnan(grade) or not MIN_GRADE <= grade <= MAX_GRADE:
        raise InvalidGradeError(f"Grade {value!r} is outside {MIN_GRADE}-{MAX_GRADE}")
    return grade


@dataclass(frozen=True)
class Prediction:
    """Bet placed by a user on an exam before the grade is known"""

    exam_id: int
    username: str
    grade: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "grade", validate_grade(self.grade))


@dataclass(frozen=True)
class Outcome:
    """Actual grade recorded for a user on an exam"""

    exam_id: int
    username: str
    grade: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "grade", validate_grade(self.grade))


@dataclass(frozen=True)
class HistoryEntry:
    """One recorded result, paired with the bet on the same exam if there was one"""

    exam_id: int
    date: date
    actual: float
    predicted: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "actual", validate_grade(self.actual))
        if self.predicted is not None:
            object.__setattr__(self, "predicted", validate_grade(self.predicted))


@dataclass(frozen=True)
class ScoreEvolutionPoint:
    """Cumulative score reached on an exam date"""

    date: date
    cumulative_score: int


@dataclass(frozen=True)
class UserStats:
    """Bet and result counters for a user"""

    bets_count: int
    results_count: int
    exact_bets_count: int
