"""GET /v1/stats/* - score evolution, grade distribution and bet counters"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from gradebet.api.dependencies import get_existing_user
from gradebet.api.v1.schemas import DistributionResponse, EvolutionPoint, EvolutionResponse, SummaryResponse
from gradebet.domain.evolution import build_evolution
from gradebet.domain.exceptions import NoDataError
from gradebet.domain.statistics import build_distribution, build_user_stats
from gradebet.infrastructure.database.models import User
from gradebet.infrastructure.database.session import get_db
from gradebet.infrastructure.database.repositories import BetRepository, ResultRepository

router = APIRouter()


@router.get("/stats/evolution", response_model=EvolutionResponse)
def get_score_evolution(user: User = Depends(get_existing_user), db: Session = Depends(get_db)):
    """
    Cumulative score per exam date.

    Returns 404 when the user has no results yet.
    """
    history = ResultRepository(db).get_results_by_username(user.username)

    try:
        points = build_evolution(history)
    except NoDataError as e:
        logging.warning(f"No evolution data: {e}", extra={"username": user.username})
        raise HTTPException(status_code=404, detail=str(e))

    return EvolutionResponse(
        username=user.username,
        evolution=[EvolutionPoint(date=p.date, cumulative_score=p.cumulative_score) for p in points],
    )


@router.get("/stats/distribution", response_model=DistributionResponse)
def get_grade_distribution(user: User = Depends(get_existing_user), db: Session = Depends(get_db)):
    """Number of results per grade bucket, 404 when the user has no results yet"""
    grades = ResultRepository(db).get_grades_by_username(user.username)

    try:
        distribution = build_distribution(grades)
    except NoDataError as e:
        logging.warning(f"No distribution data: {e}", extra={"username": user.username})
        raise HTTPException(status_code=404, detail=str(e))

    return DistributionResponse(username=user.username, distribution=distribution)


@router.get("/stats/summary", response_model=SummaryResponse)
def get_summary(user: User = Depends(get_existing_user), db: Session = Depends(get_db)):
    bet_repo = BetRepository(db)
    stats = build_user_stats(
        bets_count=bet_repo.get_bet_count_by_username(user.username),
        results_count=ResultRepository(db).get_result_count_by_username(user.username),
        exact_bets_count=bet_repo.get_exact_bet_count_by_username(user.username),
    )
    return SummaryResponse(
        username=user.username,
        bets_count=stats.bets_count,
        results_count=stats.results_count,
        exact_bets_count=stats.exact_bets_count,
    )
