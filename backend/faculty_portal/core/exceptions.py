"""
Custom Exceptions for the Faculty Reporting Portal
==================================================

Services raise these instead of HTTPException so that business rules stay
independent of the transport. The exception handlers in main.py turn every
PortalError into a JSON body using the class's status_code.

Usage:
    from faculty_portal.core.exceptions import ReportNotFoundError, ConflictError

    if not report:
        raise ReportNotFoundError(report_id)

    if report.status != ReportStatus.PENDING:
        raise ConflictError("Report has already been signed")
"""

from typing import Optional, Any, Dict


class PortalError(Exception):
    """Base exception for all portal errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthenticationError(PortalError):
    """User authentication failed"""

    status_code = 401

    def __init__(self, message: str = "Token is not valid"):
        super().__init__(message, code="AUTH_FAILED")


class MissingTokenError(AuthenticationError):
    """No bearer token on the request"""

    def __init__(self):
        super().__init__("No token, authorization denied")
        self.code = "TOKEN_MISSING"


class InvalidTokenError(AuthenticationError):
    """JWT token is invalid, expired or refers to a deleted user"""

    def __init__(self):
        super().__init__("Token is not valid")
        self.code = "INVALID_TOKEN"


class AuthorizationError(PortalError):
    """User not authorized for this action"""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="NOT_AUTHORIZED")


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(PortalError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: Any = None):
        super().__init__(
            f"{resource_type} not found",
            code=f"{resource_type.upper().replace(' ', '_')}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


NotFoundError = ResourceNotFoundError


class UserNotFoundError(ResourceNotFoundError):
    def __init__(self, user_id: Any):
        super().__init__("User", user_id)


class CourseNotFoundError(ResourceNotFoundError):
    def __init__(self, course_id: Any):
        super().__init__("Course", course_id)


class ClassNotFoundError(ResourceNotFoundError):
    def __init__(self, class_id: Any):
        super().__init__("Class", class_id)


class ReportNotFoundError(ResourceNotFoundError):
    def __init__(self, report_id: Any):
        super().__init__("Report", report_id)


class ComplaintNotFoundError(ResourceNotFoundError):
    def __init__(self, complaint_id: Any):
        super().__init__("Complaint", complaint_id)


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(PortalError):
    """Input validation or business rule failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class InvalidFileTypeError(ValidationError):
    """File type not allowed"""

    def __init__(self, file_type: str):
        super().__init__("Only image files are allowed", field="profile_image")
        self.code = "INVALID_FILE_TYPE"
        self.details["file_type"] = file_type


class FileTooLargeError(ValidationError):
    """Uploaded file exceeds the configured cap"""

    def __init__(self, max_bytes: int):
        super().__init__(
            f"File too large. Maximum size is {max_bytes // 1024 // 1024}MB",
            field="profile_image"
        )
        self.code = "FILE_TOO_LARGE"
        self.details["max_bytes"] = max_bytes


class ConflictError(PortalError):
    """
    Duplicate or out-of-state write: second rating, reused email,
    re-signing a report, re-answering a complaint.
    """

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message, code="CONFLICT")


# ============================================
# Storage Errors
# ============================================

class StorageError(PortalError):
    """Database or file storage operation failed"""

    status_code = 500

    def __init__(self, message: str = "A storage error occurred", detail: Optional[str] = None):
        super().__init__(message, code="STORAGE_ERROR")
        if detail:
            self.details["detail"] = detail


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: PortalError, include_details: bool = True) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    body = error.to_dict()
    if not include_details:
        body["details"] = {}
    return {
        "detail": error.message,
        "error": body
    }
