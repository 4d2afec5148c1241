from sqlalchemy.orm import Session
from thesis_portal.core.errors import NotFound
from thesis_portal.models.people import Student
from thesis_portal.services.base import ServiceResult


class StudentsService:
    def __init__(self, db: Session):
        self.db = db

    def get_student_by_id(self, student_id: str) -> ServiceResult:
        student = self.db.get(Student, student_id)
        if not student:
            raise NotFound(f"Student {student_id} not found")
        return ServiceResult(200, student)
