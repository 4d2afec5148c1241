from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from thesis_portal.core.deps import get_db, require_student, Actor
from thesis_portal.schemas.notification import StudentNotificationOut
from thesis_portal.services.notifications import StudentNotificationsService

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=list[StudentNotificationOut])
def my_notifications(db: Session = Depends(get_db), student: Actor = Depends(require_student)):
    return StudentNotificationsService(db).get_notifications_by_student_id(student.id).data
