from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import date, datetime

from faculty_portal.models.report import ReportStatus


class ReportCreate(BaseModel):
    class_id: int
    course_id: int
    week_number: int = Field(..., ge=1)
    date_of_lecture: date
    students_present: int = Field(..., ge=0)
    venue: str = Field(..., min_length=1, max_length=255)
    scheduled_time: str = Field(..., min_length=1, max_length=50)
    topic_taught: str = Field(..., min_length=1)
    learning_outcomes: str = Field(..., min_length=1)
    recommendations: Optional[str] = None


class ReportSign(BaseModel):
    report_id: int
    signature: str = Field(..., min_length=1)


class ReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    faculty_id: int
    class_id: int
    course_id: int
    lecturer_id: int
    week_number: int
    date_of_lecture: date
    students_present: int
    venue: str
    scheduled_time: str
    topic_taught: str
    learning_outcomes: str
    recommendations: Optional[str] = None
    status: ReportStatus
    student_signature: Optional[str] = None
    signed_at: Optional[datetime] = None
    created_at: datetime


class ReportDetail(ReportResponse):
    """Report joined with the names the dashboards display"""
    class_name: Optional[str] = None
    course_name: Optional[str] = None
    course_code: Optional[str] = None
    faculty_name: Optional[str] = None
    lecturer_name: Optional[str] = None


class MonitoringReport(ReportDetail):
    rating_count: int = 0
    average_rating: Optional[float] = None


class ReportEnvelope(BaseModel):
    message: str
    report: ReportResponse


class PublicReport(BaseModel):
    id: int
    week_number: int
    date_of_lecture: date
    topic_taught: str
    status: ReportStatus
    class_name: Optional[str] = None
    course_name: Optional[str] = None
    course_code: Optional[str] = None
    faculty_name: Optional[str] = None
    lecturer_name: Optional[str] = None
