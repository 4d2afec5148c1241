from sqlalchemy import Integer, String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from thesis_portal.db.base import Base


class Student(Base):
    __tablename__ = "students"

    id: Mapped[str] = mapped_column(String(10), primary_key=True)
    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=True
    )
    surname: Mapped[str] = mapped_column(String(100))
    name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255), unique=True)
    cod_degree: Mapped[str | None] = mapped_column(String(20), nullable=True)
    enrollment_year: Mapped[int | None] = mapped_column(Integer, nullable=True)

    user = relationship("User", back_populates="student", passive_deletes=True)

    applications = relationship(
        "Application",
        back_populates="student",
        cascade="all, delete-orphan"
    )

    notifications = relationship(
        "StudentNotification",
        back_populates="student",
        cascade="all, delete-orphan"
    )

    @property
    def full_name(self) -> str:
        return f"{self.surname} {self.name}"


class Teacher(Base):
    __tablename__ = "teachers"

    id: Mapped[str] = mapped_column(String(10), primary_key=True)
    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=True
    )
    surname: Mapped[str] = mapped_column(String(100))
    name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255), unique=True)
    cod_group: Mapped[str | None] = mapped_column(String(20), nullable=True)
    cod_department: Mapped[str | None] = mapped_column(String(20), nullable=True)

    user = relationship("User", back_populates="teacher", passive_deletes=True)
    proposals = relationship("Proposal", back_populates="supervisor")

    @property
    def full_name(self) -> str:
        return f"{self.surname} {self.name}"
