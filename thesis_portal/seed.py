import logging
from datetime import date, datetime
from sqlalchemy.orm import Session
from sqlalchemy import select

from thesis_portal.db.session import SessionLocal, engine
from thesis_portal.db.base import Base
from thesis_portal.core.logging_config import setup_logging
from thesis_portal.core.security import hash_password

from thesis_portal.models.user import User, Role
from thesis_portal.models.people import Student, Teacher
from thesis_portal.models.proposal import Proposal
from thesis_portal.models.application import Application, PENDING
from thesis_portal.models.virtual_clock import VirtualClock
import thesis_portal.models.registry  # noqa: F401

logger = logging.getLogger("thesis_portal.seed")

TEACHERS = [
    ("T001", "Wilson", "Michael", "michael.wilson@example.com", "G001", "D001"),
    ("T002", "Brown", "Sarah", "sarah.brown@example.com", "G002", "D002"),
    ("T003", "Taylor", "Robert", "robert.taylor@example.com", "G001", "D001"),
]

STUDENTS = [
    ("S001", "Smith", "John", "john.smith@example.com", "CD008", 2021),
    ("S002", "Johnson", "Emily", "emily.johnson@example.com", "CD008", 2022),
    ("S003", "Garcia", "Luis", "luis.garcia@example.com", "CD009", 2021),
]

PROPOSALS = [
    {
        "proposal_id": "P001",
        "title": "Machine learning for traffic forecasting",
        "supervisor_id": "T001",
        "keywords": ["machine learning", "time series"],
        "type": "Research",
        "groups": ["Group A"],
        "description": "Forecast urban traffic with recurrent models.",
        "required_knowledge": "Python, PyTorch, statistics",
        "notes": None,
        "expiration_date": date(2025, 6, 30),
        "level": "Master",
        "programmes": ["CD008"],
    },
    {
        "proposal_id": "P002",
        "title": "Formal verification of smart contracts",
        "supervisor_id": "T002",
        "keywords": ["verification", "blockchain"],
        "type": "Company",
        "groups": ["Group B"],
        "description": "Model checking of Solidity contracts.",
        "required_knowledge": "Logic, Solidity",
        "notes": "In collaboration with an external company",
        "expiration_date": date(2025, 3, 31),
        "level": "Master",
        "programmes": ["CD008", "CD009"],
    },
    {
        "proposal_id": "P003",
        "title": "Accessible web interfaces for public services",
        "supervisor_id": "T003",
        "keywords": ["accessibility", "web"],
        "type": "Experimental",
        "groups": ["Group A", "Group C"],
        "description": "Evaluate and redesign public service portals.",
        "required_knowledge": "HTML, CSS, React",
        "notes": None,
        "expiration_date": date(2025, 9, 15),
        "level": "Bachelor",
        "programmes": ["CD009"],
    },
]

APPLICATIONS = [
    ("A1", "P001", "S002"),
    ("A2", "P003", "S003"),
]


def ensure_user(db: Session, email: str, pwd: str, role: Role) -> User:
    u = db.scalar(select(User).where(User.email == email))
    if not u:
        u = User(email=email, password_hash=hash_password(pwd), role=role, is_active=True)
        db.add(u)
        db.flush()
    return u


def ensure(db: Session):
    # Demo password of every account is its profile id (T001, S001, ...)
    for tid, surname, name, email, group, department in TEACHERS:
        user = ensure_user(db, email, tid, Role.TEACHER)
        if not db.get(Teacher, tid):
            db.add(Teacher(id=tid, user_id=user.id, surname=surname, name=name, email=email,
                           cod_group=group, cod_department=department))

    for sid, surname, name, email, degree, year in STUDENTS:
        user = ensure_user(db, email, sid, Role.STUDENT)
        if not db.get(Student, sid):
            db.add(Student(id=sid, user_id=user.id, surname=surname, name=name, email=email,
                           cod_degree=degree, enrollment_year=year))
    db.flush()

    for p in PROPOSALS:
        if not db.get(Proposal, p["proposal_id"]):
            db.add(Proposal(archived=False, **p))
    db.flush()

    for aid, proposal_id, student_id in APPLICATIONS:
        if not db.get(Application, aid):
            db.add(Application(id=aid, proposal_id=proposal_id, student_id=student_id,
                               status=PENDING, application_date=datetime(2024, 1, 15, 10, 30)))

    if not db.scalar(select(VirtualClock).limit(1)):
        db.add(VirtualClock(id=1, virtual_date=date(2024, 1, 20)))

def main():
    setup_logging()
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        ensure(db)
        db.commit()
    logger.info("[seed] done.")

if __name__ == "__main__":
    main()
