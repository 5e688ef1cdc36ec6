"""Classroom endpoints - create a classroom and read its leaderboard"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from gradebet.api.v1.schemas import ClassroomRequest, ClassroomResponse, LeaderboardEntry, LeaderboardResponse
from gradebet.config import settings
from gradebet.infrastructure.database.session import get_db
from gradebet.infrastructure.database.repositories import ClassroomRepository, UserRepository

router = APIRouter()


@router.post("/classrooms", response_model=ClassroomResponse, status_code=201)
def create_classroom(request_body: ClassroomRequest, db: Session = Depends(get_db)):
    """Create a classroom and hand back its 6-digit join code"""
    try:
        classroom = ClassroomRepository(db).create_classroom(request_body.name)
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Error creating classroom: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    logging.info("Classroom created", extra={"class_id": classroom.id})
    return ClassroomResponse(class_id=classroom.id, name=classroom.name)


@router.get("/classrooms/{class_id}/leaderboard", response_model=LeaderboardResponse)
def get_leaderboard(class_id: str, db: Session = Depends(get_db)):
    """
    Rank the users of a classroom by score.

    Users with the same score share a rank.
    """
    classroom = ClassroomRepository(db).get_classroom_by_id(class_id)
    if classroom is None:
        raise HTTPException(status_code=404, detail="Classroom not found")

    users = UserRepository(db).get_users_by_class_id(class_id, limit=settings.leaderboard_limit)

    entries = []
    for position, user in enumerate(users, start=1):
        rank = entries[-1].rank if entries and entries[-1].score == user.score else position
        entries.append(LeaderboardEntry(rank=rank, username=user.username, score=user.score))

    return LeaderboardResponse(class_id=classroom.id, name=classroom.name, users=entries)
