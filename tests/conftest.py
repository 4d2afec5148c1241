"""
Thesis Portal - test configuration and fixtures
"""
import os
from datetime import date
from typing import AsyncGenerator, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set testing environment before the application reads its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["SMTP_HOST"] = "smtp.test"

from thesis_portal.main import app
from thesis_portal.db.base import Base
from thesis_portal.core.deps import get_db, get_email_notifier
from thesis_portal.models.people import Student, Teacher
from thesis_portal.models.proposal import Proposal
from thesis_portal.models.application import Application
from thesis_portal.models.virtual_clock import VirtualClock
from thesis_portal.notifiers.email_notifier import EmailNotifier
from tests.factories import (
    auth_headers_for, make_application, make_proposal, make_student, make_teacher,
)

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(bind=test_engine, autoflush=False, expire_on_commit=False)

TODAY = date(2024, 1, 20)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Fresh schema and session for each test"""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    session.add(VirtualClock(id=1, virtual_date=TODAY))
    session.commit()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def email_notifier() -> MagicMock:
    """Email transport that accepts every message unless a test says otherwise"""
    notifier = MagicMock(spec=EmailNotifier)
    notifier.send_email_notification = AsyncMock(return_value=True)
    return notifier


@pytest.fixture
async def client(db: Session, email_notifier: MagicMock) -> AsyncGenerator[AsyncClient, None]:
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_notifier] = lambda: email_notifier

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def teacher(db: Session) -> Teacher:
    return make_teacher(db, "T003")


@pytest.fixture
def other_teacher(db: Session) -> Teacher:
    return make_teacher(db, "T001")


@pytest.fixture
def student(db: Session) -> Student:
    return make_student(db, "S001")


@pytest.fixture
def proposal(db: Session, teacher: Teacher) -> Proposal:
    return make_proposal(db, "P19", teacher.id, title="Graph neural networks for chemistry")


@pytest.fixture
def application(db: Session, proposal: Proposal, student: Student) -> Application:
    return make_application(db, "A42", proposal.proposal_id, student.id)


@pytest.fixture
def teacher_headers(teacher: Teacher) -> dict:
    return auth_headers_for(teacher)


@pytest.fixture
def student_headers(student: Student) -> dict:
    return auth_headers_for(student)
