import re
from dataclasses import dataclass
from typing import Any
from sqlalchemy import select
from sqlalchemy.orm import Session


@dataclass
class ServiceResult:
    status: int
    data: Any


def max_identifier_number(db: Session, column, prefix: str) -> int:
    """Largest numeric suffix among ids like ``P019`` / ``A42``; 0 when there are none."""
    pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")
    numbers = [int(m.group(1)) for v in db.scalars(select(column)).all() if (m := pattern.match(v))]
    return max(numbers, default=0)


def next_identifier(db: Session, column, prefix: str, width: int = 0) -> str:
    return f"{prefix}{max_identifier_number(db, column, prefix) + 1:0{width}d}"
