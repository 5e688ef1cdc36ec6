"""POST /v1/bets - place a bet on an exam grade"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gradebet.api.dependencies import get_request_id, get_user_exam
from gradebet.api.v1.schemas import BetResponse, GradeRequest
from gradebet.infrastructure.database.session import get_db
from gradebet.infrastructure.database.repositories import BetRepository, ResultRepository
from gradebet.infrastructure.observability.metrics import bet_counter

router = APIRouter()


@router.post("/bets", response_model=BetResponse, status_code=201)
def create_bet(request_body: GradeRequest, request: Request, db: Session = Depends(get_db)):
    """
    Record a user's predicted grade, one bet per exam.

    Bets are closed once the user has entered the result of the exam.
    """
    request_id = get_request_id(request)
    get_user_exam(db, request_body.username, request_body.exam_id)

    bet_repo = BetRepository(db)
    if bet_repo.get_bet_by_exam_id_and_username(request_body.exam_id, request_body.username) is not None:
        raise HTTPException(status_code=409, detail="Bet already placed for this exam")
    if ResultRepository(db).get_result_by_exam_id_and_username(request_body.exam_id, request_body.username) is not None:
        raise HTTPException(status_code=409, detail="Result already entered for this exam")

    try:
        bet = bet_repo.create_bet(request_body.exam_id, request_body.username, request_body.grade)
        db.commit()

    except IntegrityError as e:
        db.rollback()
        logging.warning(f"Duplicate bet: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail="Bet already placed for this exam")

    except Exception as e:
        db.rollback()
        logging.error(f"Error creating bet: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    bet_counter.inc()
    logging.info(
        "Bet created",
        extra={"request_id": request_id, "username": bet.username, "exam_id": bet.exam_id, "grade": bet.grade},
    )
    return BetResponse(exam_id=bet.exam_id, username=bet.username, grade=bet.grade)
