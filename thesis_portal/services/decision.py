"""
Accept / reject workflow for thesis applications.

The decision and, on acceptance, the cancellation of sibling applications and
the archival of the proposal are committed together or not at all. The email
to the student comes afterwards and is best effort: its failure is reported
as ``email_notification_sent = False`` and never undoes the decision.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from thesis_portal.core.errors import (
    Conflict, InternalError, InvalidArgument, ServiceError,
)
from thesis_portal.models.application import Application, ACCEPTED, REJECTED, PENDING
from thesis_portal.notifiers import templates
from thesis_portal.notifiers.email_notifier import EmailNotifier
from thesis_portal.schemas.notification import DecisionNoticeContent
from thesis_portal.services.applications import ApplicationsService
from thesis_portal.services.notifications import Notifier
from thesis_portal.services.proposals import ProposalsService
from thesis_portal.services.students import StudentsService
from thesis_portal.services.teachers import TeachersService

logger = logging.getLogger(__name__)

DECISIONS = (ACCEPTED, REJECTED)
NOTIFICATION_CATEGORY = "Application Decision"


@dataclass
class DecisionOutcome:
    application: Application
    email_notification_sent: bool


class DecisionWorkflow:
    def __init__(self, db: Session, email_notifier: EmailNotifier):
        self.db = db
        self.applications = ApplicationsService(db)
        self.proposals = ProposalsService(db)
        self.students = StudentsService(db)
        self.teachers = TeachersService(db)
        self.notifier = Notifier(db, email_notifier)

    async def decide(self, application_id: str | None, status, teacher_id: str) -> DecisionOutcome:
        if not isinstance(status, str) or status not in DECISIONS:
            raise InvalidArgument("Invalid status field value in request body")

        application = self.applications.get_supervised_application(application_id, teacher_id)
        if application.status != PENDING:
            raise Conflict(f"Application already {application.status.lower()}")

        proposal = application.proposal
        updated = self._apply(application.id, proposal.proposal_id, status)
        logger.info("Application %s %s by %s", updated.id, status.lower(), teacher_id)

        sent = await self._notify_student(updated, proposal, teacher_id)
        return DecisionOutcome(application=updated, email_notification_sent=sent)

    def _apply(self, application_id: str, proposal_id: str, status: str) -> Application:
        try:
            updated = self.applications.set_application_status(application_id, status).data
            if updated is None:
                raise InternalError("Some error occurred in the database: application status not updated")

            if status == ACCEPTED:
                cancelled = self.applications.cancel_pending_applications_by_proposal_id(proposal_id).data
                archived = self.proposals.set_proposal_archived(proposal_id)
                if archived.status == 409:
                    raise Conflict("The proposal has already been assigned to another application")
                if not (archived.data and archived.data.archived):
                    raise InternalError("Some error occurred in the database: proposal not archived")
                logger.info("Proposal %s archived, %d pending application(s) cancelled", proposal_id, cancelled)

            self.db.commit()
        except ServiceError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Decision on application %s failed", application_id)
            raise InternalError(str(e)) from e

        self.db.refresh(updated)
        return updated

    async def _notify_student(self, application: Application, proposal, teacher_id: str) -> bool:
        try:
            student = self.students.get_student_by_id(application.student_id).data
            teacher = self.teachers.get_teacher_by_id(teacher_id).data

            decision = application.status
            application_date = templates.format_application_date(application.application_date)
            subject = templates.get_email_subject(decision)
            content = DecisionNoticeContent(
                application_id=application.id,
                application_decision=decision,
                proposal_id=proposal.proposal_id,
                proposal_title=proposal.title,
                application_date=application_date,
                student=student.full_name,
                supervisor=teacher.full_name,
            ).model_dump()
            body = templates.get_email_body(
                decision, proposal.proposal_id, proposal.title,
                application_date, student.full_name, teacher.full_name,
            )

            await self.notifier.notify(student.id, NOTIFICATION_CATEGORY, subject, content, body)
            return True
        except Exception as e:
            self.db.rollback()
            logger.error("Cannot send application decision email for %s: %s", application.id, e)
            return False
