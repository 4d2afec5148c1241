from typing import Any
from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session
from thesis_portal.core.deps import (
    get_db, get_current_actor, get_email_notifier, require_student, require_teacher, Actor,
)
from thesis_portal.core.errors import Unauthorized
from thesis_portal.notifiers.email_notifier import EmailNotifier
from thesis_portal.schemas.application import (
    ApplicationCreate, ApplicationOut, ApplicationWithProposalOut, DecisionOut,
    StudentApplicationOut, TeacherProposalApplicationsOut,
)
from thesis_portal.services.applications import ApplicationsService
from thesis_portal.services.decision import DecisionWorkflow

router = APIRouter(prefix="/api/applications", tags=["applications"])


@router.post("", response_model=ApplicationOut)
async def insert_new_application(
    data: ApplicationCreate,
    db: Session = Depends(get_db),
    student: Actor = Depends(require_student),
):
    """Apply to a thesis proposal"""
    return ApplicationsService(db).insert_new_application(data.proposal_id, student.id).data


@router.get("/student/{student_id}", response_model=list[StudentApplicationOut])
async def applications_by_student(
    student_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    if not actor.is_student or actor.id != student_id:
        raise Unauthorized("You cannot get applications of another student")
    result = ApplicationsService(db).get_all_applications_by_student_id(student_id)
    items = [StudentApplicationOut(**a) for a in result.data]
    return JSONResponse(status_code=result.status, content=jsonable_encoder(items))


@router.get("/teacher", response_model=list[TeacherProposalApplicationsOut])
async def applications_by_teacher(
    db: Session = Depends(get_db),
    teacher: Actor = Depends(require_teacher),
):
    result = ApplicationsService(db).get_all_applications_by_teacher_id(teacher.id)
    items = [TeacherProposalApplicationsOut(**p) for p in result.data]
    return JSONResponse(status_code=result.status, content=jsonable_encoder(items))


@router.get("/{application_id}")
async def get_application(
    application_id: str,
    db: Session = Depends(get_db),
    teacher: Actor = Depends(require_teacher),
):
    application = ApplicationsService(db).get_supervised_application(application_id, teacher.id)
    return {"application": ApplicationWithProposalOut.model_validate(application)}


@router.post("/{application_id}", response_model=DecisionOut)
async def accept_or_reject_application(
    application_id: str,
    body: Any = Body(None),
    db: Session = Depends(get_db),
    teacher: Actor = Depends(require_teacher),
    email_notifier: EmailNotifier = Depends(get_email_notifier),
):
    """Accept or reject an application and notify the student.

    The body is read as-is: a missing, non-object or mistyped ``status`` is a 400.
    """
    status = body.get("status") if isinstance(body, dict) else None
    outcome = await DecisionWorkflow(db, email_notifier).decide(application_id, status, teacher.id)
    return DecisionOut(
        application=ApplicationOut.model_validate(outcome.application),
        emailNotificationSent=outcome.email_notification_sent,
    )
