# Re-export all models for convenient imports
from faculty_portal.models.user import User, UserRole, STAFF_ROLES
from faculty_portal.models.academic import Faculty, Course, StudentClass
from faculty_portal.models.assignment import Assignment
from faculty_portal.models.report import Report, ReportStatus
from faculty_portal.models.rating import Rating
from faculty_portal.models.complaint import Complaint, ComplaintStatus

__all__ = [
    # Users
    "User",
    "UserRole",
    "STAFF_ROLES",
    # Academic directory
    "Faculty",
    "Course",
    "StudentClass",
    # Teaching
    "Assignment",
    "Report",
    "ReportStatus",
    # Feedback
    "Rating",
    "Complaint",
    "ComplaintStatus",
]
