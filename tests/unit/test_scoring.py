"""Unit tests for the award formula"""

import pytest
from gradebet.domain.models import HistoryEntry, Outcome, Prediction
from gradebet.domain.scoring import award_for_outcome, compute_award, total_score
from gradebet.domain.evolution import build_evolution

GRADES = [1.0, 1.5, 2.0, 2.9, 3.5, 4.0, 4.6, 5.25, 6.0]


def test_compute_award_exact_bet():
    """Exact bet earns the full 10 points"""
    for grade in GRADES:
        assert compute_award(grade, grade) == 10


def test_compute_award_is_symmetric():
    for predicted in GRADES:
        for actual in GRADES:
            assert compute_award(predicted, actual) == compute_award(actual, predicted)


def test_compute_award_examples():
    assert compute_award(4.0, 5.0) == 8  # 10 - round(2.0)
    assert compute_award(4.0, 4.6) == 9  # 10 - round(1.2)
    assert compute_award(4.0, 4.8) == 8  # 10 - round(1.6)
    assert compute_award(3.0, 5.5) == 5  # 10 - round(5.0)


def test_compute_award_clamps_at_zero():
    """Maximum divergence gives 0, never negative"""
    assert compute_award(1.0, 6.0) == 0
    assert compute_award(6.0, 1.0) == 0
    assert compute_award(1.0, 5.9) == 0  # 10 - round(9.8)


def test_compute_award_rounds_half_up():
    """0.25 miss scales to 0.5 and costs one point"""
    assert compute_award(1.0, 1.25) == 9
    assert compute_award(4.0, 4.75) == 8  # 2 * 0.75 = 1.5 → 2


def test_compute_award_range():
    for predicted in GRADES:
        for actual in GRADES:
            assert 0 <= compute_award(predicted, actual) <= 10


def test_award_for_outcome_without_bet():
    """Missing bet is worth 0, not an error"""
    outcome = Outcome(exam_id=1, username="alice", grade=4.5)
    assert award_for_outcome(None, outcome) == 0


def test_award_for_outcome_with_bet():
    prediction = Prediction(exam_id=1, username="alice", grade=4.0)
    outcome = Outcome(exam_id=1, username="alice", grade=4.6)
    assert award_for_outcome(prediction, outcome) == 9


def test_award_for_outcome_mismatched_exam():
    prediction = Prediction(exam_id=1, username="alice", grade=4.0)
    outcome = Outcome(exam_id=2, username="alice", grade=4.0)
    with pytest.raises(ValueError):
        award_for_outcome(prediction, outcome)


def test_total_score(sample_history):
    # 10 (exact) + 8 (4.0 vs 5.0) + 0 (no bet)
    assert total_score(sample_history) == 18


def test_total_score_empty_history():
    assert total_score([]) == 0


def test_total_score_matches_last_evolution_point(sample_history):
    assert total_score(sample_history) == build_evolution(sample_history)[-1].cumulative_score
