from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

from faculty_portal.models.user import UserRole


class RatingCreate(BaseModel):
    """Target exactly one of report_id / lecturer_id"""
    report_id: Optional[int] = None
    lecturer_id: Optional[int] = None
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None


class RatingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    report_id: Optional[int] = None
    lecturer_id: Optional[int] = None
    student_id: int
    rating: int
    comment: Optional[str] = None
    created_at: datetime
    rating_type: str


class RatingDetail(RatingResponse):
    student_name: Optional[str] = None
    topic_taught: Optional[str] = None
    class_name: Optional[str] = None
    lecturer_name: Optional[str] = None


class RatingEnvelope(BaseModel):
    message: str
    rating: RatingResponse


class RateableLecturer(BaseModel):
    id: int
    name: str
    email: str
    role: UserRole
