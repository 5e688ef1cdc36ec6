"""Dependency injection for FastAPI endpoints"""

from typing import Tuple

from fastapi import Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from gradebet.infrastructure.database.models import Exam, User
from gradebet.infrastructure.database.repositories import ExamRepository, UserRepository
from gradebet.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_existing_user(
    username: str = Query(..., min_length=1, description="Username"),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the ?username= query parameter to a user, 404 if unknown"""
    user = UserRepository(db).get_user_by_username(username)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def get_user_exam(db: Session, username: str, exam_id: int) -> Tuple[User, Exam]:
    """
    Look up the user and the exam a bet or result refers to.

    Raises:
        HTTPException: 404 if either is unknown or the exam belongs to another classroom
    """
    user = UserRepository(db).get_user_by_username(username)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")

    exam = ExamRepository(db).get_exam_by_id(exam_id)
    if exam is None or exam.classroom_id != user.classroom_id:
        raise HTTPException(status_code=404, detail="Exam not found")

    return user, exam
