from __future__ import annotations
from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator


class ProposalCreate(BaseModel):
    title: str
    keywords: list[str] = []
    type: str
    groups: list[str]
    description: str
    required_knowledge: Optional[str] = None
    notes: Optional[str] = None
    expiration_date: date
    level: str
    programmes: list[str] = []

    @field_validator("title", "type", "description", "level")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be empty")
        return v

    @field_validator("expiration_date", mode="before")
    @classmethod
    def iso_date_only(cls, v):
        # YYYY-MM-DD only; "20-10-2023" or "2023-02-29" are rejected
        if isinstance(v, str):
            if len(v) != 10:
                raise ValueError(f"Invalid date {v!r}, expected YYYY-MM-DD")
            return date.fromisoformat(v)
        return v

    @field_validator("groups")
    @classmethod
    def groups_not_empty(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("At least one group is required")
        return v


class ProposalOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    proposal_id: str
    title: str
    supervisor_id: str
    keywords: list[str]
    type: str
    groups: list[str]
    description: str
    required_knowledge: Optional[str] = None
    notes: Optional[str] = None
    expiration_date: date
    level: str
    programmes: list[str]
    archived: bool


class ProposalListItem(ProposalOut):
    supervisor_name: str
    supervisor_surname: str
