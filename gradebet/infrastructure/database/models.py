"""SQLAlchemy ORM models for classrooms, users, exams, bets and results"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class Classroom(Base):
    """Class a group of students bets in"""

    __tablename__ = "classroom"

    id = Column(Text, primary_key=True)  # 6-digit join code
    name = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    users = relationship("User", back_populates="classroom")
    exams = relationship("Exam", back_populates="classroom", cascade="all, delete-orphan")


class User(Base):
    """Student with a running score"""

    __tablename__ = "user"

    username = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    score = Column(Integer, nullable=False, default=0, server_default="0")
    classroom_id = Column(Text, ForeignKey("classroom.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    classroom = relationship("Classroom", back_populates="users")


class Exam(Base):
    """Exam scheduled for a classroom"""

    __tablename__ = "exam"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    date = Column(Date, nullable=False)
    classroom_id = Column(Text, ForeignKey("classroom.id", ondelete="CASCADE"), nullable=False, index=True)

    classroom = relationship("Classroom", back_populates="exams")


class Bet(Base):
    """Grade predicted by a user for an exam, one per (exam, user)"""

    __tablename__ = "bet"
    __table_args__ = (CheckConstraint("grade >= 1.0 AND grade <= 6.0", name="bet_grade_range"),)

    exam_id = Column(Integer, ForeignKey("exam.id", ondelete="CASCADE"), primary_key=True)
    username = Column(Text, ForeignKey("user.username", ondelete="CASCADE"), primary_key=True)
    grade = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class Result(Base):
    """Actual grade obtained by a user on an exam, one per (exam, user)"""

    __tablename__ = "result"
    __table_args__ = (CheckConstraint("grade >= 1.0 AND grade <= 6.0", name="result_grade_range"),)

    exam_id = Column(Integer, ForeignKey("exam.id", ondelete="CASCADE"), primary_key=True)
    username = Column(Text, ForeignKey("user.username", ondelete="CASCADE"), primary_key=True)
    grade = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
