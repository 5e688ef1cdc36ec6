"""Integration tests for the data access layer"""

from datetime import date, datetime
from unittest.mock import MagicMock
from sqlalchemy.orm import Session
from gradebet.domain.evolution import build_evolution
from gradebet.infrastructure.database.models import Result
from gradebet.infrastructure.database.repositories import (
    BetRepository,
    ClassroomRepository,
    ExamRepository,
    ResultRepository,
    UserRepository,
)


def _same_day_exams(db: Session, count: int) -> list[int]:
    classroom = ClassroomRepository(db).create_classroom("3M2")
    UserRepository(db).create_user("alice", "Alice", "alice@edu.hefr.ch", classroom.id)
    exam_repo = ExamRepository(db)
    return [exam_repo.create_exam(f"Quiz {i}", date(2024, 1, 10), classroom.id).id for i in range(count)]


def test_get_results_by_username_entry_order(db: Session):
    """History comes back in entry order, whatever the exam ids are"""
    first, second, third = _same_day_exams(db, 3)
    entered = [
        (third, datetime(2024, 1, 11, 8, 0)),
        (first, datetime(2024, 1, 11, 9, 0)),
        (second, datetime(2024, 1, 11, 10, 0)),
    ]
    for exam_id, created_at in entered:
        db.add(Result(exam_id=exam_id, username="alice", grade=4.0, created_at=created_at))
    db.commit()

    history = ResultRepository(db).get_results_by_username("alice")

    assert [entry.exam_id for entry in history] == [third, first, second]


def test_get_results_by_username_same_entry_time_uses_exam_id(db: Session):
    first, second = _same_day_exams(db, 2)
    created_at = datetime(2024, 1, 11, 8, 0)
    db.add(Result(exam_id=second, username="alice", grade=4.0, created_at=created_at))
    db.add(Result(exam_id=first, username="alice", grade=4.0, created_at=created_at))
    db.commit()

    history = ResultRepository(db).get_results_by_username("alice")

    assert [entry.exam_id for entry in history] == [first, second]


def test_get_results_by_username_pairs_bets(db: Session):
    first, second = _same_day_exams(db, 2)
    BetRepository(db).create_bet(first, "alice", 4.0)
    result_repo = ResultRepository(db)
    result_repo.create_result(first, "alice", 4.6)
    result_repo.create_result(second, "alice", 5.0)
    db.commit()

    history = {entry.exam_id: entry for entry in result_repo.get_results_by_username("alice")}

    assert history[first].predicted == 4.0
    assert history[second].predicted is None
    assert build_evolution(list(history.values()))[-1].cumulative_score == 9


def test_lock_user_selects_for_update():
    db = MagicMock()

    UserRepository(db).lock_user("alice")

    db.query.return_value.filter.return_value.with_for_update.assert_called_once_with()


def test_lock_user_unknown(db: Session):
    assert UserRepository(db).lock_user("nobody") is None
