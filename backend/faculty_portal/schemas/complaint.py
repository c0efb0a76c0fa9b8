from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

from faculty_portal.models.complaint import ComplaintStatus
from faculty_portal.models.user import UserRole


class ComplaintCreate(BaseModel):
    complaint_against_id: int
    report_id: Optional[int] = None
    complaint_text: str = Field(..., min_length=1)


class ComplaintRespond(BaseModel):
    complaint_id: int
    response_text: str = Field(..., min_length=1)


class ComplaintResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    complainant_id: int
    complaint_against_id: int
    report_id: Optional[int] = None
    complaint_text: str
    status: ComplaintStatus
    recipient_role: UserRole
    response_text: Optional[str] = None
    responded_by: Optional[int] = None
    responded_at: Optional[datetime] = None
    created_at: datetime


class ComplaintDetail(ComplaintResponse):
    complainant_name: Optional[str] = None
    complaint_against_name: Optional[str] = None
    report_topic: Optional[str] = None
    class_name: Optional[str] = None
    responder_name: Optional[str] = None


class ComplaintEnvelope(BaseModel):
    message: str
    complaint: ComplaintResponse
