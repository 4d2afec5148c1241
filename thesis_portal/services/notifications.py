import logging
from sqlalchemy import select, update
from sqlalchemy.orm import Session
from thesis_portal.core.errors import DeliveryError, NotFound
from thesis_portal.models.notification import (
    StudentNotification, NOT_SENT, SMTP_ACCEPTED, SMTP_REJECTED,
)
from thesis_portal.notifiers.email_notifier import EmailNotifier
from thesis_portal.services.base import ServiceResult
from thesis_portal.services.students import StudentsService

logger = logging.getLogger(__name__)


class StudentNotificationsService:
    def __init__(self, db: Session):
        self.db = db

    def create_new_student_notification(self, student_id: str, channel: str,
                                        subject: str, content: dict) -> int:
        notification = StudentNotification(
            student_id=student_id,
            channel=channel,
            subject=subject,
            content=content,
            status=NOT_SENT,
        )
        self.db.add(notification)
        self.db.commit()
        self.db.refresh(notification)
        return notification.id

    def update_student_notification_status(self, notification_id: int, status: str) -> ServiceResult:
        result = self.db.execute(
            update(StudentNotification)
            .where(StudentNotification.id == notification_id)
            .values(status=status)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            self.db.rollback()
            raise NotFound(f"Notification {notification_id} not found")
        self.db.commit()
        return ServiceResult(200, status)

    def get_notifications_by_student_id(self, student_id: str) -> ServiceResult:
        notifications = self.db.scalars(
            select(StudentNotification)
            .where(StudentNotification.student_id == student_id)
            .order_by(StudentNotification.creation_date.desc(), StudentNotification.id.desc())
        ).all()
        return ServiceResult(200, notifications)


class Notifier:
    """Records a student notification, tries to deliver it, records the outcome.

    The row is committed before the delivery attempt so the intent survives a
    crash mid-send. Status goes Pending -> SMTP Accepted | SMTP Rejected.
    """

    def __init__(self, db: Session, email_notifier: EmailNotifier):
        self.db = db
        self.email_notifier = email_notifier
        self.notifications = StudentNotificationsService(db)

    async def notify(self, student_id: str, category: str, subject: str,
                     content: dict, body: str) -> int:
        student = StudentsService(self.db).get_student_by_id(student_id).data
        notification_id = self.notifications.create_new_student_notification(
            student_id, category, subject, content
        )

        try:
            sent = await self.email_notifier.send_email_notification(
                notification_id, student.email, subject, body
            )
        except Exception as e:
            logger.error("Email transport failed for notification %s: %s", notification_id, e)
            sent = False

        if sent:
            self.notifications.update_student_notification_status(notification_id, SMTP_ACCEPTED)
            return notification_id

        self.notifications.update_student_notification_status(notification_id, SMTP_REJECTED)
        raise DeliveryError(f"Notification {notification_id} was not delivered to {student.email}")
