import logging
from datetime import datetime, timezone
from sqlalchemy import select, update
from sqlalchemy.orm import Session, joinedload
from thesis_portal.core.errors import Conflict, Forbidden, InvalidArgument, NotFound
from thesis_portal.models.application import Application, PENDING, ACCEPTED, CANCELLED
from thesis_portal.models.people import Student
from thesis_portal.models.proposal import Proposal
from thesis_portal.services.base import ServiceResult, next_identifier
from thesis_portal.services.virtual_clock import VirtualClockService

logger = logging.getLogger(__name__)


class ApplicationsService:
    def __init__(self, db: Session):
        self.db = db

    def get_application_by_id(self, application_id: str) -> ServiceResult:
        """Application together with its proposal; ``data`` is None when absent."""
        application = self.db.scalar(
            select(Application)
            .options(joinedload(Application.proposal))
            .where(Application.id == application_id)
        )
        return ServiceResult(200 if application else 404, application)

    def get_supervised_application(self, application_id: str | None, teacher_id: str) -> Application:
        """Application with its proposal, visible only to the proposal's supervisor."""
        if not application_id:
            raise InvalidArgument("Invalid application id parameter")

        application = self.get_application_by_id(application_id).data
        if application is None:
            raise NotFound("Application not found!")
        if application.proposal.supervisor_id != teacher_id:
            raise Forbidden("Not authorized!")
        return application

    def get_all_applications_by_student_id(self, student_id: str) -> ServiceResult:
        if not self.db.get(Student, student_id):
            raise NotFound(f"Student {student_id} not found")

        applications = self.db.scalars(
            select(Application)
            .options(joinedload(Application.proposal).joinedload(Proposal.supervisor))
            .where(Application.student_id == student_id)
            .order_by(Application.application_date.desc())
        ).all()
        return ServiceResult(200, [
            {
                "application_id": a.id,
                "proposal_id": a.proposal_id,
                "title": a.proposal.title,
                "student_id": a.student_id,
                "status": a.status,
                "application_date": a.application_date,
                "supervisor_name": a.proposal.supervisor.name,
                "supervisor_surname": a.proposal.supervisor.surname,
            }
            for a in applications
        ])

    def get_all_applications_by_teacher_id(self, teacher_id: str) -> ServiceResult:
        """The teacher's proposals that received applications, each with its applicants."""
        proposals = self.db.scalars(
            select(Proposal)
            .where(Proposal.supervisor_id == teacher_id, Proposal.deleted.is_(False))
            .order_by(Proposal.proposal_id)
        ).all()

        items = []
        for proposal in proposals:
            applications = self.db.scalars(
                select(Application)
                .options(joinedload(Application.student))
                .where(Application.proposal_id == proposal.proposal_id)
                .order_by(Application.application_date)
            ).all()
            if not applications:
                continue
            items.append({
                "proposal_id": proposal.proposal_id,
                "title": proposal.title,
                "type": proposal.type,
                "description": proposal.description,
                "expiration_date": proposal.expiration_date.isoformat(),
                "level": proposal.level,
                "applications": [
                    {
                        "application_id": a.id,
                        "status": a.status,
                        "application_date": a.application_date,
                        "student_id": a.student_id,
                        "surname": a.student.surname,
                        "name": a.student.name,
                        "email": a.student.email,
                        "enrollment_year": a.student.enrollment_year,
                        "cod_degree": a.student.cod_degree,
                    }
                    for a in applications
                ],
            })

        if not items:
            raise NotFound("No applications were found for your thesis proposals")
        return ServiceResult(200, items)

    def insert_new_application(self, proposal_id: str, student_id: str) -> ServiceResult:
        proposal = self.db.get(Proposal, proposal_id)
        if not proposal or proposal.deleted:
            raise NotFound("Proposal not found")
        if proposal.archived:
            raise Conflict("The proposal is archived and no longer accepts applications")
        if proposal.expiration_date < VirtualClockService(self.db).today():
            raise Conflict("The proposal is expired")

        open_application = self.db.scalar(
            select(Application.id)
            .where(Application.student_id == student_id, Application.status.in_([PENDING, ACCEPTED]))
            .limit(1)
        )
        if open_application:
            raise Conflict("You already have a pending or accepted application")

        application = Application(
            id=next_identifier(self.db, Application.id, "A"),
            proposal_id=proposal_id,
            student_id=student_id,
            status=PENDING,
            application_date=datetime.now(timezone.utc),
        )
        self.db.add(application)
        self.db.commit()
        self.db.refresh(application)
        logger.info("Student %s applied to %s (%s)", student_id, proposal_id, application.id)
        return ServiceResult(200, application)

    def set_application_status(self, application_id: str, status: str) -> ServiceResult:
        """Move a Pending application to ``status``. ``data`` is None when nothing changed.

        Does not commit: the decision workflow owns the transaction.
        """
        result = self.db.execute(
            update(Application)
            .where(Application.id == application_id, Application.status == PENDING)
            .values(status=status)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return ServiceResult(500, None)
        application = self.db.get(Application, application_id, populate_existing=True)
        return ServiceResult(200, application if application.status == status else None)

    def cancel_pending_applications_by_proposal_id(self, proposal_id: str) -> ServiceResult:
        result = self.db.execute(
            update(Application)
            .where(Application.proposal_id == proposal_id, Application.status == PENDING)
            .values(status=CANCELLED)
            .execution_options(synchronize_session=False)
        )
        return ServiceResult(200, result.rowcount)
