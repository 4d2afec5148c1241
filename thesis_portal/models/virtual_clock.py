from datetime import date
from sqlalchemy import Integer, Date
from sqlalchemy.orm import Mapped, mapped_column
from thesis_portal.db.base import Base


class VirtualClock(Base):
    __tablename__ = "virtual_clock"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    virtual_date: Mapped[date] = mapped_column(Date)
