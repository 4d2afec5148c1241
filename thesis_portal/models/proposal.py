from datetime import date
from sqlalchemy import String, Text, Date, Boolean, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from thesis_portal.db.base import Base


class Proposal(Base):
    __tablename__ = "proposals"

    proposal_id: Mapped[str] = mapped_column(String(10), primary_key=True)
    title: Mapped[str] = mapped_column(String(255))
    supervisor_id: Mapped[str] = mapped_column(ForeignKey("teachers.id"), index=True)
    keywords: Mapped[list[str]] = mapped_column(JSON, default=list)
    type: Mapped[str] = mapped_column(String(100))
    groups: Mapped[list[str]] = mapped_column(JSON, default=list)
    description: Mapped[str] = mapped_column(Text)
    required_knowledge: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    expiration_date: Mapped[date] = mapped_column(Date)
    level: Mapped[str] = mapped_column(String(50))
    programmes: Mapped[list[str]] = mapped_column(JSON, default=list)
    archived: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    deleted: Mapped[bool] = mapped_column(Boolean, default=False, index=True)

    supervisor = relationship("Teacher", back_populates="proposals")
    applications = relationship(
        "Application",
        back_populates="proposal",
        cascade="all, delete-orphan"
    )
