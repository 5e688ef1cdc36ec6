"""Score evolution - cumulative score series over exam dates"""

from datetime import date
from typing import Dict, List, Sequence

from gradebet.domain.exceptions import NoDataError
from gradebet.domain.models import HistoryEntry, ScoreEvolutionPoint
from gradebet.domain.scoring import award_for_entry


def build_evolution(history: Sequence[HistoryEntry]) -> List[ScoreEvolutionPoint]:
    """
    Build the cumulative score series of a user, one point per exam date.

    Steps:
    1. Stable sort by date (same-day exams keep retrieval order)
    2. Running total of awards, a missing bet adds 0
    3. Collapse same-day points, the larger cumulative value wins

    Raises:
        NoDataError: history is empty
        TypeError: an entry date is not a datetime.date
    """
    if not history:
        raise NoDataError("No results found for this user")

    for entry in history:
        if not isinstance(entry.date, date):
            raise TypeError(f"Exam {entry.exam_id} has invalid date {entry.date!r}")

    sorted_entries = sorted(history, key=lambda e: e.date)

    best_by_date: Dict[date, int] = {}
    running_total = 0
    for entry in sorted_entries:
        running_total += award_for_entry(entry)
        best_by_date[entry.date] = max(best_by_date.get(entry.date, running_total), running_total)

    return [
        ScoreEvolutionPoint(date=day, cumulative_score=best_by_date[day])
        for day in sorted(best_by_date)
    ]
