import logging
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from thesis_portal.core.errors import (
    Conflict, Forbidden, InternalError, InvalidArgument, NotFound, ServiceError,
)
from thesis_portal.models.application import Application, ACCEPTED
from thesis_portal.models.proposal import Proposal
from thesis_portal.schemas.proposal import ProposalCreate
from thesis_portal.services.applications import ApplicationsService
from thesis_portal.services.base import ServiceResult, next_identifier
from thesis_portal.services.virtual_clock import VirtualClockService

logger = logging.getLogger(__name__)

SEARCH_FIELDS = (
    "title", "supervisor", "keywords", "type", "groups",
    "required_knowledge", "level", "programmes",
)


def _field_values(item: dict, field: str) -> list[str]:
    if field == "supervisor":
        return [f"{item['supervisor_surname']} {item['supervisor_name']}"]
    if field == "required_knowledge":
        return [k.strip() for k in (item.get("required_knowledge") or "").split(",")]
    value = item.get(field)
    if value is None:
        return []
    return list(value) if isinstance(value, list) else [str(value)]


def search_proposals(proposals: list[dict], field: str, value: str) -> list[dict]:
    """Case-insensitive substring filter over one searchable field."""
    if field not in SEARCH_FIELDS:
        raise InvalidArgument(f"Unknown search field {field!r}")
    needle = value.strip().lower()
    if not needle:
        return proposals
    return [
        p for p in proposals
        if any(needle in v.lower() for v in _field_values(p, field))
    ]


def proposal_as_dict(proposal: Proposal) -> dict:
    return {
        "proposal_id": proposal.proposal_id,
        "title": proposal.title,
        "supervisor_id": proposal.supervisor_id,
        "keywords": proposal.keywords or [],
        "type": proposal.type,
        "groups": proposal.groups or [],
        "description": proposal.description,
        "required_knowledge": proposal.required_knowledge,
        "notes": proposal.notes,
        "expiration_date": proposal.expiration_date,
        "level": proposal.level,
        "programmes": proposal.programmes or [],
        "archived": proposal.archived,
    }


class ProposalsService:
    def __init__(self, db: Session):
        self.db = db

    def get_proposal_by_id(self, proposal_id: str) -> ServiceResult:
        proposal = self.db.get(Proposal, proposal_id)
        if not proposal or proposal.deleted:
            raise NotFound("Proposal not found")
        return ServiceResult(200, proposal)

    def _with_supervisor(self, query) -> list[dict]:
        items = []
        for p in self.db.scalars(query.options(selectinload(Proposal.supervisor))).all():
            item = proposal_as_dict(p)
            item["supervisor_name"] = p.supervisor.name
            item["supervisor_surname"] = p.supervisor.surname
            items.append(item)
        return items

    def get_active_proposals(self) -> ServiceResult:
        """Non-archived proposals not yet expired according to the virtual clock."""
        today = VirtualClockService(self.db).today()
        return ServiceResult(200, self._with_supervisor(
            select(Proposal)
            .where(
                Proposal.deleted.is_(False),
                Proposal.archived.is_(False),
                Proposal.expiration_date >= today,
            )
            .order_by(Proposal.proposal_id)
        ))

    def get_proposals_by_teacher_id(self, teacher_id: str) -> ServiceResult:
        """Every proposal the teacher supervises, archived and expired ones included."""
        return ServiceResult(200, self._with_supervisor(
            select(Proposal)
            .where(Proposal.supervisor_id == teacher_id, Proposal.deleted.is_(False))
            .order_by(Proposal.proposal_id)
        ))

    def insert_proposal(self, payload: ProposalCreate, supervisor_id: str) -> ServiceResult:
        proposal_id = next_identifier(self.db, Proposal.proposal_id, "P", width=3)
        proposal = Proposal(
            proposal_id=proposal_id,
            supervisor_id=supervisor_id,
            archived=False,
            **payload.model_dump(),
        )
        self.db.add(proposal)
        self.db.commit()
        self.db.refresh(proposal)
        logger.info("Proposal %s created by %s", proposal_id, supervisor_id)
        return ServiceResult(201, proposal)

    def set_proposal_archived(self, proposal_id: str) -> ServiceResult:
        """Archive a proposal that is still open.

        The write is conditional on ``archived = false`` so that two concurrent
        acceptances cannot both archive it. The caller owns the transaction.
        ``data`` is the refreshed proposal, ``status`` is 200 when this call
        archived it and 409 when it already was.
        """
        result = self.db.execute(
            update(Proposal)
            .where(Proposal.proposal_id == proposal_id, Proposal.archived.is_(False))
            .values(archived=True)
            .execution_options(synchronize_session=False)
        )
        proposal = self.db.get(Proposal, proposal_id, populate_existing=True)
        return ServiceResult(200 if result.rowcount == 1 else 409, proposal)

    def delete_proposal(self, proposal_id: str, teacher_id: str) -> ServiceResult:
        """Delete a proposal on behalf of its supervisor.

        The row is kept and flagged ``deleted`` so that its id is never reused.
        Pending applications to it are cancelled in the same transaction. A
        proposal with an accepted application is assigned and cannot be deleted.
        """
        proposal = self.get_proposal_by_id(proposal_id).data
        if proposal.supervisor_id != teacher_id:
            raise Forbidden("Not authorized!")

        accepted = self.db.scalar(
            select(Application.id)
            .where(Application.proposal_id == proposal_id, Application.status == ACCEPTED)
            .limit(1)
        )
        if accepted:
            raise Conflict("The proposal has an accepted application and cannot be deleted")

        try:
            result = self.db.execute(
                update(Proposal)
                .where(Proposal.proposal_id == proposal_id, Proposal.deleted.is_(False))
                .values(deleted=True)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise NotFound("Proposal not found")
            self.db.refresh(proposal)
            cancelled = ApplicationsService(self.db).cancel_pending_applications_by_proposal_id(proposal_id).data
            self.db.commit()
        except ServiceError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Deleting proposal %s failed", proposal_id)
            raise InternalError(str(e)) from e

        logger.info("Proposal %s deleted by %s, %d pending application(s) cancelled",
                    proposal_id, teacher_id, cancelled)
        return ServiceResult(200, {"proposal_id": proposal_id, "cancelled_applications": cancelled})
