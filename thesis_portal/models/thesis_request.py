from datetime import datetime, timezone
from sqlalchemy import String, Text, DateTime, Enum, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from thesis_portal.db.base import Base

REQUEST_PENDING = "Pending"
REQUEST_ACCEPTED = "Accepted"
REQUEST_REJECTED = "Rejected"

ThesisRequestStatusEnum = Enum(
    REQUEST_PENDING,
    REQUEST_ACCEPTED,
    REQUEST_REJECTED,
    name="thesis_request_status_enum"
)


class ThesisRequest(Base):
    """A thesis the student proposes on their own, addressed to one supervisor."""
    __tablename__ = "thesis_requests"

    id: Mapped[str] = mapped_column(String(10), primary_key=True)
    student_id: Mapped[str] = mapped_column(ForeignKey("students.id", ondelete="CASCADE"), index=True)
    supervisor_id: Mapped[str] = mapped_column(ForeignKey("teachers.id"), index=True)
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text)
    status: Mapped[str] = mapped_column(ThesisRequestStatusEnum, default=REQUEST_PENDING, index=True)
    request_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    student = relationship("Student")
    supervisor = relationship("Teacher")
