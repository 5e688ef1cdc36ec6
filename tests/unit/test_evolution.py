"""Unit tests for the cumulative score series"""

import pytest
from datetime import date
from gradebet.domain.evolution import build_evolution
from gradebet.domain.exceptions import NoDataError
from gradebet.domain.models import HistoryEntry, ScoreEvolutionPoint


def test_build_evolution_missing_bet_keeps_total():
    """Result without a bet adds 0 but still gets a point"""
    history = [
        HistoryEntry(exam_id=1, date=date(2024, 1, 10), actual=4.0, predicted=4.0),
        HistoryEntry(exam_id=2, date=date(2024, 3, 1), actual=5.0, predicted=None),
    ]

    assert build_evolution(history) == [
        ScoreEvolutionPoint(date=date(2024, 1, 10), cumulative_score=10),
        ScoreEvolutionPoint(date=date(2024, 3, 1), cumulative_score=10),
    ]


def test_build_evolution_sorts_by_date(sample_history):
    points = build_evolution(sample_history)

    assert [p.date for p in points] == [date(2024, 1, 10), date(2024, 2, 5), date(2024, 3, 1)]
    assert [p.cumulative_score for p in points] == [10, 18, 18]


def test_build_evolution_same_date_keeps_max():
    """Two exams on one day collapse into a single point with the larger total"""
    history = [
        HistoryEntry(exam_id=1, date=date(2024, 1, 10), actual=4.0, predicted=6.0),  # 6
        HistoryEntry(exam_id=2, date=date(2024, 1, 10), actual=2.0, predicted=5.5),  # 3
    ]

    points = build_evolution(history)

    assert points == [ScoreEvolutionPoint(date=date(2024, 1, 10), cumulative_score=9)]


def test_build_evolution_same_date_between_other_dates():
    history = [
        HistoryEntry(exam_id=3, date=date(2024, 2, 1), actual=5.0, predicted=5.0),
        HistoryEntry(exam_id=1, date=date(2024, 1, 10), actual=4.0, predicted=4.5),
        HistoryEntry(exam_id=4, date=date(2024, 3, 1), actual=3.0, predicted=None),
        HistoryEntry(exam_id=2, date=date(2024, 2, 1), actual=4.0, predicted=3.0),
    ]

    points = build_evolution(history)

    assert points == [
        ScoreEvolutionPoint(date=date(2024, 1, 10), cumulative_score=9),
        ScoreEvolutionPoint(date=date(2024, 2, 1), cumulative_score=27),
        ScoreEvolutionPoint(date=date(2024, 3, 1), cumulative_score=27),
    ]


def test_build_evolution_is_monotonic(sample_history):
    points = build_evolution(sample_history * 3)

    dates = [p.date for p in points]
    scores = [p.cumulative_score for p in points]
    assert dates == sorted(set(dates))
    assert scores == sorted(scores)


def test_build_evolution_empty_history():
    with pytest.raises(NoDataError):
        build_evolution([])


def test_build_evolution_rejects_string_dates():
    """Malformed dates are a programmer error and fail loudly"""
    history = [HistoryEntry(exam_id=1, date="2024-01-10", actual=4.0, predicted=4.0)]

    with pytest.raises(TypeError):
        build_evolution(history)
