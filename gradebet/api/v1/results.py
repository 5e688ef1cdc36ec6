"""POST /v1/results - enter an exam result and score the matching bet"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gradebet.api.dependencies import get_request_id, get_user_exam
from gradebet.api.v1.schemas import GradeRequest, ResultResponse
from gradebet.config import settings
from gradebet.domain.exceptions import InvalidGradeError
from gradebet.domain.models import Outcome
from gradebet.domain.scoring import award_for_outcome
from gradebet.infrastructure.database.session import get_db
from gradebet.infrastructure.database.repositories import (
    BetRepository,
    ResultRepository,
    UserRepository,
)
from gradebet.infrastructure.observability.logging import log_award
from gradebet.infrastructure.observability.metrics import record_result

router = APIRouter()


@router.post("/results", response_model=ResultResponse, status_code=201)
def create_result(request_body: GradeRequest, request: Request, db: Session = Depends(get_db)):
    """
    Record the actual grade of an exam and award points for the bet.

    Flow:
    1. Persist the result
    2. Fetch the user's bet on the exam (may be missing)
    3. Compute the award, 0 without a bet
    4. Add the award to the user's score in one atomic UPDATE
    5. Return the award and the new score
    """
    start_time = time.time()
    request_id = get_request_id(request)
    user_repo = UserRepository(db)

    get_user_exam(db, request_body.username, request_body.exam_id)

    result_repo = ResultRepository(db)
    if result_repo.get_result_by_exam_id_and_username(request_body.exam_id, request_body.username) is not None:
        raise HTTPException(status_code=409, detail="Result already entered for this exam")

    try:
        # 1. Persist result
        result_repo.create_result(request_body.exam_id, request_body.username, request_body.grade)

        # 2. Matching bet
        prediction = BetRepository(db).get_bet_by_exam_id_and_username(request_body.exam_id, request_body.username)

        # 3. Award
        outcome = Outcome(exam_id=request_body.exam_id, username=request_body.username, grade=request_body.grade)
        award = award_for_outcome(prediction, outcome)

        # 4. Atomic score increment
        if award > 0 or settings.persist_zero_awards:
            user_repo.increment_user_score(request_body.username, award)

        db.commit()
        new_score = user_repo.get_user_score(request_body.username)

    except IntegrityError as e:
        db.rollback()
        logging.warning(f"Duplicate result: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail="Result already entered for this exam")

    except InvalidGradeError as e:
        db.rollback()
        logging.warning(f"Invalid grade: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    # Record metrics and logs
    duration_ms = (time.time() - start_time) * 1000
    record_result(prediction is not None, award)
    log_award(request_id, request_body.username, request_body.exam_id, award, new_score, duration_ms)

    return ResultResponse(
        exam_id=request_body.exam_id,
        username=request_body.username,
        grade=request_body.grade,
        award=award,
        score=new_score,
    )
