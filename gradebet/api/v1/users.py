"""User endpoints - join a classroom, read a user, recompute a score"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gradebet.api.dependencies import get_request_id
from gradebet.api.v1.schemas import UserRequest, UserResponse
from gradebet.domain.scoring import total_score
from gradebet.infrastructure.database.session import get_db
from gradebet.infrastructure.database.repositories import ClassroomRepository, ResultRepository, UserRepository

router = APIRouter()


def _to_response(user) -> UserResponse:
    return UserResponse(
        username=user.username,
        name=user.name,
        email=user.email,
        score=user.score,
        class_id=user.classroom_id,
    )


@router.post("/users", response_model=UserResponse, status_code=201)
def create_user(request_body: UserRequest, request: Request, db: Session = Depends(get_db)):
    """Register a user into an existing classroom"""
    request_id = get_request_id(request)
    user_repo = UserRepository(db)

    if ClassroomRepository(db).get_classroom_by_id(request_body.class_id) is None:
        raise HTTPException(status_code=404, detail="Classroom not found")
    if user_repo.get_user_by_username(request_body.username) is not None:
        raise HTTPException(status_code=409, detail="Username is already taken")
    if user_repo.get_user_by_email(request_body.email) is not None:
        raise HTTPException(status_code=409, detail="Email is already registered")

    try:
        user = user_repo.create_user(
            username=request_body.username,
            name=request_body.name,
            email=request_body.email,
            classroom_id=request_body.class_id,
        )
        db.commit()

    except IntegrityError as e:
        db.rollback()
        logging.warning(f"Duplicate user: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail="User already exists")

    except Exception as e:
        db.rollback()
        logging.error(f"Error creating user: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    logging.info("User created", extra={"request_id": request_id, "username": user.username})
    return _to_response(user)


@router.get("/users/{username}", response_model=UserResponse)
def get_user(username: str, db: Session = Depends(get_db)):
    user = UserRepository(db).get_user_by_username(username)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return _to_response(user)


@router.post("/users/{username}/score/recompute", response_model=UserResponse)
def recompute_score(username: str, request: Request, db: Session = Depends(get_db)):
    """
    Rebuild a user's score from the full result history.

    Repairs scores that drifted from the awards, e.g. after a bet was corrected.
    The user row stays locked from the history read to the commit, so a result
    submitted meanwhile adds its award after the rebuilt score.
    """
    request_id = get_request_id(request)
    user_repo = UserRepository(db)

    user = user_repo.lock_user(username)
    if user is None:
        db.rollback()
        raise HTTPException(status_code=404, detail="User not found")

    try:
        history = ResultRepository(db).get_results_by_username(username)
        score = total_score(history)
        user_repo.set_user_score(username, score)
        db.commit()
        db.refresh(user)

    except Exception as e:
        db.rollback()
        logging.error(f"Error recomputing score: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    logging.info(
        "Score recomputed",
        extra={"request_id": request_id, "username": username, "score": score, "results": len(history)},
    )
    return _to_response(user)
