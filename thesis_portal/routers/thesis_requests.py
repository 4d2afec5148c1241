from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from thesis_portal.core.deps import get_db, require_student, Actor
from thesis_portal.schemas.thesis_request import ThesisRequestCreate, ThesisRequestOut
from thesis_portal.services.thesis_requests import ThesisRequestsService

router = APIRouter(prefix="/api/thesis-requests", tags=["thesis-requests"])


@router.post("", response_model=ThesisRequestOut, status_code=201)
def insert_thesis_request(
    payload: ThesisRequestCreate,
    db: Session = Depends(get_db),
    student: Actor = Depends(require_student),
):
    """Propose a thesis to a chosen supervisor"""
    return ThesisRequestsService(db).insert_thesis_request(payload, student.id).data


@router.get("", response_model=list[ThesisRequestOut])
def my_thesis_requests(db: Session = Depends(get_db), student: Actor = Depends(require_student)):
    return ThesisRequestsService(db).get_thesis_requests_by_student_id(student.id).data
