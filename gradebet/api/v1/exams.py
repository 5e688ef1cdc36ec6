"""Exam endpoints - schedule exams and list what a user still has to bet or report"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from gradebet.api.dependencies import get_existing_user
from gradebet.api.v1.schemas import ExamListResponse, ExamRequest, ExamSchema
from gradebet.infrastructure.database.models import User
from gradebet.infrastructure.database.session import get_db
from gradebet.infrastructure.database.repositories import ClassroomRepository, ExamRepository

router = APIRouter()


@router.post("/exams", response_model=ExamSchema, status_code=201)
def create_exam(request_body: ExamRequest, db: Session = Depends(get_db)):
    """Schedule an exam for a classroom"""
    if ClassroomRepository(db).get_classroom_by_id(request_body.class_id) is None:
        raise HTTPException(status_code=404, detail="Classroom not found")

    try:
        exam = ExamRepository(db).create_exam(request_body.name, request_body.date, request_body.class_id)
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Error creating exam: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    logging.info("Exam created", extra={"exam_id": exam.id, "class_id": exam.classroom_id})
    return ExamSchema(exam_id=exam.id, name=exam.name, date=exam.date)


@router.get("/exams/upcoming", response_model=ExamListResponse)
def get_upcoming_exams(user: User = Depends(get_existing_user), db: Session = Depends(get_db)):
    """Exams of the user's classroom without a bet from the user"""
    exams = ExamRepository(db).get_upcoming_exams(user.username, user.classroom_id)
    return ExamListResponse(
        username=user.username,
        exams=[ExamSchema(exam_id=e.id, name=e.name, date=e.date) for e in exams],
    )


@router.get("/exams/pending-results", response_model=ExamListResponse)
def get_pending_results(user: User = Depends(get_existing_user), db: Session = Depends(get_db)):
    """Exams the user bet on but has not entered a result for"""
    exams = ExamRepository(db).get_past_exams_without_results(user.username)
    return ExamListResponse(
        username=user.username,
        exams=[ExamSchema(exam_id=e.id, name=e.name, date=e.date) for e in exams],
    )
