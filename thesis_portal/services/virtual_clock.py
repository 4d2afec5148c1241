import logging
from datetime import date
from sqlalchemy import select, update
from sqlalchemy.orm import Session
from thesis_portal.core.errors import InvalidArgument, InternalError
from thesis_portal.models.virtual_clock import VirtualClock
from thesis_portal.services.base import ServiceResult

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"


class VirtualClockService:
    """Application-wide "today", used to decide whether a proposal has expired."""

    def __init__(self, db: Session):
        self.db = db

    def today(self) -> date:
        current = self.db.scalar(select(VirtualClock.virtual_date).limit(1))
        if current is None:
            raise InternalError("Virtual clock is not initialised")
        return current

    def get_virtual_date(self) -> ServiceResult:
        return ServiceResult(200, self.today().strftime(DATE_FORMAT))

    def update_virtual_date(self, new_date: date) -> ServiceResult:
        """Move the clock forward; going back in time is refused."""
        result = self.db.execute(
            update(VirtualClock)
            .where(VirtualClock.virtual_date < new_date)
            .values(virtual_date=new_date)
        )
        if result.rowcount == 0:
            self.db.rollback()
            raise InvalidArgument("New virtual date can't be before the current one!")
        self.db.commit()
        logger.info("Virtual clock moved to %s", new_date)
        return ServiceResult(200, new_date.strftime(DATE_FORMAT))
