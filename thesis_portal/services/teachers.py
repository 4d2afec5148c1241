from sqlalchemy.orm import Session
from thesis_portal.core.errors import NotFound
from thesis_portal.models.people import Teacher
from thesis_portal.services.base import ServiceResult


class TeachersService:
    def __init__(self, db: Session):
        self.db = db

    def get_teacher_by_id(self, teacher_id: str) -> ServiceResult:
        teacher = self.db.get(Teacher, teacher_id)
        if not teacher:
            raise NotFound(f"Teacher {teacher_id} not found")
        return ServiceResult(200, teacher)
