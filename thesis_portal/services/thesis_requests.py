import logging
from sqlalchemy import select
from sqlalchemy.orm import Session
from thesis_portal.core.errors import Conflict
from thesis_portal.models.thesis_request import ThesisRequest, REQUEST_PENDING
from thesis_portal.schemas.thesis_request import ThesisRequestCreate
from thesis_portal.services.base import ServiceResult, next_identifier
from thesis_portal.services.students import StudentsService
from thesis_portal.services.teachers import TeachersService

logger = logging.getLogger(__name__)


class ThesisRequestsService:
    def __init__(self, db: Session):
        self.db = db

    def insert_thesis_request(self, payload: ThesisRequestCreate, student_id: str) -> ServiceResult:
        """Store a student's own thesis request for the chosen supervisor.

        The supervisor must exist, and a student keeps at most one pending request.
        """
        StudentsService(self.db).get_student_by_id(student_id)
        TeachersService(self.db).get_teacher_by_id(payload.supervisor_id)

        pending = self.db.scalar(
            select(ThesisRequest.id)
            .where(ThesisRequest.student_id == student_id, ThesisRequest.status == REQUEST_PENDING)
            .limit(1)
        )
        if pending:
            raise Conflict("You already have a pending thesis request")

        request = ThesisRequest(
            id=next_identifier(self.db, ThesisRequest.id, "R"),
            student_id=student_id,
            status=REQUEST_PENDING,
            **payload.model_dump(),
        )
        self.db.add(request)
        self.db.commit()
        self.db.refresh(request)
        logger.info("Student %s sent thesis request %s to %s", student_id, request.id, payload.supervisor_id)
        return ServiceResult(201, request)

    def get_thesis_requests_by_student_id(self, student_id: str) -> ServiceResult:
        requests = self.db.scalars(
            select(ThesisRequest)
            .where(ThesisRequest.student_id == student_id)
            .order_by(ThesisRequest.request_date.desc(), ThesisRequest.id.desc())
        ).all()
        return ServiceResult(200, requests)
