from datetime import datetime
from pydantic import BaseModel, ConfigDict


class DecisionNoticeContent(BaseModel):
    application_id: str
    application_decision: str
    proposal_id: str
    proposal_title: str
    application_date: str
    student: str
    supervisor: str


class StudentNotificationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    student_id: str
    channel: str
    subject: str
    content: dict
    status: str
    creation_date: datetime
