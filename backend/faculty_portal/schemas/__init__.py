from faculty_portal.schemas.auth import UserRegister, UserLogin, UserPublic, AuthResponse
from faculty_portal.schemas.academic import (
    FacultyResponse,
    CourseResponse,
    ClassCreate,
    ClassResponse,
    ClassCreatedResponse,
    StaffMember,
    ProfileResponse,
    ProfileUpdate,
    ProfileUpdateResponse,
)
from faculty_portal.schemas.report import (
    ReportCreate,
    ReportSign,
    ReportResponse,
    ReportDetail,
    MonitoringReport,
    ReportEnvelope,
)
from faculty_portal.schemas.rating import RatingCreate, RatingResponse, RatingDetail, RatingEnvelope
from faculty_portal.schemas.complaint import (
    ComplaintCreate,
    ComplaintRespond,
    ComplaintResponse,
    ComplaintDetail,
    ComplaintEnvelope,
)
from faculty_portal.schemas.assignment import (
    AssignmentCreate,
    AssignmentResponse,
    AssignmentDetail,
    AssignmentEnvelope,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserPublic",
    "AuthResponse",
    "FacultyResponse",
    "CourseResponse",
    "ClassCreate",
    "ClassResponse",
    "ClassCreatedResponse",
    "StaffMember",
    "ProfileResponse",
    "ProfileUpdate",
    "ProfileUpdateResponse",
    "ReportCreate",
    "ReportSign",
    "ReportResponse",
    "ReportDetail",
    "MonitoringReport",
    "ReportEnvelope",
    "RatingCreate",
    "RatingResponse",
    "RatingDetail",
    "RatingEnvelope",
    "ComplaintCreate",
    "ComplaintRespond",
    "ComplaintResponse",
    "ComplaintDetail",
    "ComplaintEnvelope",
    "AssignmentCreate",
    "AssignmentResponse",
    "AssignmentDetail",
    "AssignmentEnvelope",
]
