import enum
from datetime import datetime
from sqlalchemy import String, Boolean, Integer, DateTime, Enum, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from thesis_portal.db.base import Base


class Role(str, enum.Enum):
    TEACHER = "teacher"
    STUDENT = "student"


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    role: Mapped[Role] = mapped_column(Enum(Role, name="user_role_enum", values_callable=lambda e: [m.value for m in e]))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    last_login: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, index=True)

    student = relationship("Student", back_populates="user", uselist=False, passive_deletes=True)
    teacher = relationship("Teacher", back_populates="user", uselist=False, passive_deletes=True)
