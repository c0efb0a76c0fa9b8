from faculty_portal.services.auth_service import AuthService
from faculty_portal.services.directory_service import DirectoryService
from faculty_portal.services.profile_service import ProfileService
from faculty_portal.services.assignment_service import AssignmentService
from faculty_portal.services.report_service import ReportService

# Student feedback
from faculty_portal.services.rating_service import RatingService
from faculty_portal.services.complaint_service import ComplaintService

# Read-only views
from faculty_portal.services.export_service import ExportService
from faculty_portal.services.public_service import PublicService
