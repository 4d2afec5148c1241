from __future__ import annotations
from datetime import datetime
from typing import Literal
from pydantic import BaseModel, ConfigDict, field_validator

ApplicationStatus = Literal["Pending", "Accepted", "Rejected", "Cancelled"]


class ApplicationCreate(BaseModel):
    proposal_id: str

    @field_validator("proposal_id")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("proposal_id cannot be empty")
        return v


class ApplicationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    proposal_id: str
    student_id: str
    status: ApplicationStatus
    application_date: datetime


class ProposalBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    proposal_id: str
    title: str
    supervisor_id: str
    archived: bool


class ApplicationWithProposalOut(ApplicationOut):
    proposal: ProposalBrief


class DecisionOut(BaseModel):
    application: ApplicationOut
    emailNotificationSent: bool


class StudentApplicationOut(BaseModel):
    application_id: str
    proposal_id: str
    title: str
    student_id: str
    status: ApplicationStatus
    application_date: datetime
    supervisor_name: str
    supervisor_surname: str


class ApplicantOut(BaseModel):
    application_id: str
    status: ApplicationStatus
    application_date: datetime
    student_id: str
    surname: str
    name: str
    email: str
    enrollment_year: int | None = None
    cod_degree: str | None = None


class TeacherProposalApplicationsOut(BaseModel):
    proposal_id: str
    title: str
    type: str
    description: str
    expiration_date: str
    level: str
    applications: list[ApplicantOut]
