"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date
from typing import Dict, List

from gradebet.domain.models import MIN_GRADE, MAX_GRADE


class ClassroomRequest(BaseModel):
    """Request body for POST /v1/classrooms"""

    name: str = Field(..., min_length=1, max_length=100, description="Classroom name")


class ClassroomResponse(BaseModel):
    """Response for POST /v1/classrooms"""

    class_id: str
    name: str


class UserRequest(BaseModel):
    """Request body for POST /v1/users"""

    username: str = Field(..., min_length=1, max_length=50, description="Unique username")
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., pattern=r".+@.+\..+", max_length=254)
    class_id: str = Field(..., min_length=1, description="Classroom join code")


class UserResponse(BaseModel):
    """Single user with current score"""

    username: str
    name: str
    email: str
    score: int
    class_id: str | None = None


class LeaderboardEntry(BaseModel):
    rank: int
    username: str
    score: int


class LeaderboardResponse(BaseModel):
    """Response for GET /v1/classrooms/{class_id}/leaderboard"""

    class_id: str
    name: str
    users: List[LeaderboardEntry]


class ExamRequest(BaseModel):
    """Request body for POST /v1/exams"""

    name: str = Field(..., min_length=1, max_length=100)
    date: date
    class_id: str = Field(..., min_length=1)


class ExamSchema(BaseModel):
    """Single exam"""

    exam_id: int
    name: str
    date: date


class ExamListResponse(BaseModel):
    username: str
    exams: List[ExamSchema]


class GradeRequest(BaseModel):
    """Request body for POST /v1/bets and POST /v1/results"""

    exam_id: int = Field(..., gt=0)
    username: str = Field(..., min_length=1)
    grade: float = Field(..., ge=MIN_GRADE, le=MAX_GRADE, description="Grade on the 1.0 - 6.0 scale")


class BetResponse(BaseModel):
    """Response for POST /v1/bets"""

    exam_id: int
    username: str
    grade: float


class ResultResponse(BaseModel):
    """Response for POST /v1/results"""

    exam_id: int
    username: str
    grade: float
    award: int
    score: int


class EvolutionPoint(BaseModel):
    date: date
    cumulative_score: int


class EvolutionResponse(BaseModel):
    """Response for GET /v1/stats/evolution"""

    username: str
    evolution: List[EvolutionPoint]


class DistributionResponse(BaseModel):
    """Response for GET /v1/stats/distribution"""

    username: str
    distribution: Dict[str, int]


class SummaryResponse(BaseModel):
    """Response for GET /v1/stats/summary"""

    username: str
    bets_count: int
    results_count: int
    exact_bets_count: int
