from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from thesis_portal.core.deps import get_db, get_current_actor, require_teacher, Actor
from thesis_portal.schemas.proposal import ProposalCreate, ProposalOut, ProposalListItem
from thesis_portal.services.proposals import ProposalsService, search_proposals

router = APIRouter(prefix="/api/proposals", tags=["proposals"])


@router.get("", response_model=list[ProposalListItem], dependencies=[Depends(get_current_actor)])
def list_proposals(
    db: Session = Depends(get_db),
    field: Optional[str] = Query(None),
    value: Optional[str] = Query(None),
):
    """Open proposals, optionally filtered on one field."""
    proposals = ProposalsService(db).get_active_proposals().data
    if field:
        proposals = search_proposals(proposals, field, value or "")
    return proposals


@router.get("/teacher", response_model=list[ProposalListItem])
def teacher_proposals(db: Session = Depends(get_db), teacher: Actor = Depends(require_teacher)):
    """Proposals supervised by the caller, archived and expired ones included."""
    return ProposalsService(db).get_proposals_by_teacher_id(teacher.id).data


@router.get("/{proposal_id}", response_model=ProposalOut, dependencies=[Depends(get_current_actor)])
def get_proposal(proposal_id: str, db: Session = Depends(get_db)):
    return ProposalsService(db).get_proposal_by_id(proposal_id).data


@router.post("", status_code=201)
def insert_proposal(
    payload: ProposalCreate,
    db: Session = Depends(get_db),
    teacher: Actor = Depends(require_teacher),
):
    result = ProposalsService(db).insert_proposal(payload, teacher.id)
    return {"proposal": ProposalOut.model_validate(result.data)}


@router.delete("/{proposal_id}")
def delete_proposal(
    proposal_id: str,
    db: Session = Depends(get_db),
    teacher: Actor = Depends(require_teacher),
):
    return ProposalsService(db).delete_proposal(proposal_id, teacher.id).data
