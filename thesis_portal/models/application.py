from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Enum, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from thesis_portal.db.base import Base

PENDING = "Pending"
ACCEPTED = "Accepted"
REJECTED = "Rejected"
CANCELLED = "Cancelled"

ApplicationStatusEnum = Enum(
    PENDING,
    ACCEPTED,
    REJECTED,
    CANCELLED,
    name="application_status_enum"
)


class Application(Base):
    __tablename__ = "applications"

    id: Mapped[str] = mapped_column(String(10), primary_key=True)
    proposal_id: Mapped[str] = mapped_column(ForeignKey("proposals.proposal_id"), index=True)
    student_id: Mapped[str] = mapped_column(ForeignKey("students.id"), index=True)
    status: Mapped[str] = mapped_column(ApplicationStatusEnum, default=PENDING, index=True)
    application_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    proposal = relationship("Proposal", back_populates="applications")
    student = relationship("Student", back_populates="applications")
