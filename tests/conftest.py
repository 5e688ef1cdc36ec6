"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from gradebet.api.main import create_app
from gradebet.infrastructure.database.models import Base
from gradebet.infrastructure.database.session import get_db
from gradebet.domain.models import HistoryEntry


# Test database, one in-memory connection shared by every session
TEST_DATABASE_URL = "sqlite://"
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def classroom(client: TestClient) -> dict:
    """Classroom with two students and two exams"""
    class_id = client.post("/v1/classrooms", json={"name": "3M2"}).json()["class_id"]

    for username in ("alice", "bob"):
        client.post(
            "/v1/users",
            json={
                "username": username,
                "name": username.title(),
                "email": f"{username}@edu.hefr.ch",
                "class_id": class_id,
            },
        )

    exam_ids = [
        client.post(
            "/v1/exams",
            json={"name": name, "date": exam_date, "class_id": class_id},
        ).json()["exam_id"]
        for name, exam_date in (("Maths", "2024-01-10"), ("Physics", "2024-03-01"))
    ]

    return {"class_id": class_id, "exam_ids": exam_ids}


@pytest.fixture
def sample_history() -> list[HistoryEntry]:
    """Three results over two months, one without a bet"""
    return [
        HistoryEntry(exam_id=3, date=date(2024, 3, 1), actual=5.0, predicted=None),
        HistoryEntry(exam_id=1, date=date(2024, 1, 10), actual=4.0, predicted=4.0),
        HistoryEntry(exam_id=2, date=date(2024, 2, 5), actual=5.0, predicted=4.0),
    ]
