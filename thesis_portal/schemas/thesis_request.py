from __future__ import annotations
from datetime import datetime
from typing import Literal
from pydantic import BaseModel, ConfigDict, field_validator


class ThesisRequestCreate(BaseModel):
    title: str
    description: str
    supervisor_id: str

    @field_validator("title", "description", "supervisor_id")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be empty")
        return v


class ThesisRequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str
    supervisor_id: str
    title: str
    description: str
    status: Literal["Pending", "Accepted", "Rejected"]
    request_date: datetime
