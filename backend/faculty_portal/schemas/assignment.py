from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class AssignmentCreate(BaseModel):
    lecturer_id: int
    course_id: int
    class_id: int


class AssignmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    lecturer_id: int
    course_id: int
    class_id: int
    assigned_by: int
    assigned_at: datetime


class AssignmentDetail(AssignmentResponse):
    lecturer_name: Optional[str] = None
    course_name: Optional[str] = None
    course_code: Optional[str] = None
    class_name: Optional[str] = None
    assigned_by_name: Optional[str] = None


class AssignmentEnvelope(BaseModel):
    message: str
    assignment: AssignmentResponse
