"""Data access layer for classrooms, users, exams, bets and results"""

import random
from datetime import date
from typing import List, Optional
from sqlalchemy import and_, func, update
from sqlalchemy.orm import Session
from gradebet.infrastructure.database.models import Bet, Classroom, Exam, Result, User
from gradebet.domain.models import HistoryEntry, Prediction


class ClassroomRepository:
    """Repository for classrooms"""

    def __init__(self, db: Session):
        self.db = db

    def create_classroom(self, name: str) -> Classroom:
        """Create classroom with a fresh random 6-digit join code"""
        class_id = self._new_class_id()
        db_classroom = Classroom(id=class_id, name=name)
        self.db.add(db_classroom)
        self.db.flush()
        return db_classroom

    def get_classroom_by_id(self, class_id: str) -> Optional[Classroom]:
        return self.db.get(Classroom, class_id)

    def _new_class_id(self) -> str:
        while True:
            class_id = str(random.randint(100000, 999999))
            if self.get_classroom_by_id(class_id) is None:
                return class_id


class UserRepository:
    """Repository for users and their scores"""

    def __init__(self, db: Session):
        self.db = db

    def create_user(self, username: str, name: str, email: str, classroom_id: str) -> User:
        db_user = User(
            username=username,
            name=name,
            email=email,
            score=0,
            classroom_id=classroom_id,
        )
        self.db.add(db_user)
        self.db.flush()
        return db_user

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.get(User, username)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_users_by_class_id(self, class_id: str, limit: int = 50) -> List[User]:
        """Users of a classroom, best score first"""
        return (
            self.db.query(User)
            .filter(User.classroom_id == class_id)
            .order_by(User.score.desc(), User.username)
            .limit(limit)
            .all()
        )

    def lock_user(self, username: str) -> Optional[User]:
        """
        Load a user with SELECT ... FOR UPDATE.

        Holds the user row until commit, so score increments from result
        submissions wait for the lock holder. SQLite has no row locks and
        serializes writers instead.
        """
        return (
            self.db.query(User)
            .filter(User.username == username)
            .with_for_update()
            .one_or_none()
        )

    def get_user_score(self, username: str) -> Optional[int]:
        """Read the stored score straight from the database"""
        return self.db.query(User.score).filter(User.username == username).scalar()

    def increment_user_score(self, username: str, award: int) -> bool:
        """
        Add an award to the user's score in a single UPDATE.

        The increment happens in SQL (score = score + award), so concurrent
        result submissions for the same user cannot overwrite each other.

        Returns:
            True if the user exists and was updated
        """
        result = self.db.execute(
            update(User)
            .where(User.username == username)
            .values(score=User.score + award)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    def set_user_score(self, username: str, score: int) -> bool:
        """Overwrite the user's score, used when recomputing from history"""
        result = self.db.execute(
            update(User)
            .where(User.username == username)
            .values(score=score)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0


class ExamRepository:
    """Repository for exams"""

    def __init__(self, db: Session):
        self.db = db

    def create_exam(self, name: str, exam_date: date, classroom_id: str) -> Exam:
        db_exam = Exam(name=name, date=exam_date, classroom_id=classroom_id)
        self.db.add(db_exam)
        self.db.flush()
        return db_exam

    def get_exam_by_id(self, exam_id: int) -> Optional[Exam]:
        return self.db.get(Exam, exam_id)

    def get_upcoming_exams(self, username: str, classroom_id: str) -> List[Exam]:
        """Exams of the user's classroom the user has not bet on yet"""
        return (
            self.db.query(Exam)
            .outerjoin(Bet, and_(Bet.exam_id == Exam.id, Bet.username == username))
            .filter(Exam.classroom_id == classroom_id, Bet.username.is_(None))
            .order_by(Exam.date, Exam.id)
            .all()
        )

    def get_past_exams_without_results(self, username: str) -> List[Exam]:
        """Exams the user bet on but has no result for yet"""
        return (
            self.db.query(Exam)
            .join(Bet, and_(Bet.exam_id == Exam.id, Bet.username == username))
            .outerjoin(Result, and_(Result.exam_id == Exam.id, Result.username == username))
            .filter(Result.username.is_(None))
            .order_by(Exam.date, Exam.id)
            .all()
        )


class BetRepository:
    """Repository for bets"""

    def __init__(self, db: Session):
        self.db = db

    def create_bet(self, exam_id: int, username: str, grade: float) -> Bet:
        db_bet = Bet(exam_id=exam_id, username=username, grade=grade)
        self.db.add(db_bet)
        self.db.flush()
        return db_bet

    def get_bet_by_exam_id_and_username(self, exam_id: int, username: str) -> Optional[Prediction]:
        """The user's bet on an exam, None if the user did not bet"""
        db_bet = self.db.get(Bet, (exam_id, username))
        if db_bet is None:
            return None
        return Prediction(exam_id=db_bet.exam_id, username=db_bet.username, grade=db_bet.grade)

    def get_bet_count_by_username(self, username: str) -> int:
        return self.db.query(func.count()).select_from(Bet).filter(Bet.username == username).scalar() or 0

    def get_exact_bet_count_by_username(self, username: str) -> int:
        """Number of bets that matched the actual grade exactly"""
        return (
            self.db.query(func.count())
            .select_from(Bet)
            .join(Result, and_(Result.exam_id == Bet.exam_id, Result.username == Bet.username))
            .filter(Bet.username == username, Bet.grade == Result.grade)
            .scalar()
        ) or 0


class ResultRepository:
    """Repository for results"""

    def __init__(self, db: Session):
        self.db = db

    def create_result(self, exam_id: int, username: str, grade: float) -> Result:
        db_result = Result(exam_id=exam_id, username=username, grade=grade)
        self.db.add(db_result)
        self.db.flush()
        return db_result

    def get_results_by_username(self, username: str) -> List[HistoryEntry]:
        """
        Full result history of a user with exam dates and matching bets.

        Exams without a bet come back with predicted=None. Rows are in entry
        order (exam id breaks ties), which decides the order of same-day exams
        in the score evolution.
        """
        rows = (
            self.db.query(Result.exam_id, Exam.date, Result.grade, Bet.grade)
            .join(Exam, Exam.id == Result.exam_id)
            .outerjoin(Bet, and_(Bet.exam_id == Result.exam_id, Bet.username == Result.username))
            .filter(Result.username == username)
            .order_by(Result.created_at, Result.exam_id)
            .all()
        )
        return [
            HistoryEntry(exam_id=exam_id, date=exam_date, actual=actual, predicted=predicted)
            for exam_id, exam_date, actual, predicted in rows
        ]

    def get_result_by_exam_id_and_username(self, exam_id: int, username: str) -> Optional[Result]:
        return self.db.get(Result, (exam_id, username))

    def get_grades_by_username(self, username: str) -> List[float]:
        return [grade for (grade,) in self.db.query(Result.grade).filter(Result.username == username).all()]

    def get_result_count_by_username(self, username: str) -> int:
        return self.db.query(func.count()).select_from(Result).filter(Result.username == username).scalar() or 0
