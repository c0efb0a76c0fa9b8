"""
Unit Tests for the portal exception hierarchy
"""
from faculty_portal.core.exceptions import (
    AuthorizationError,
    ConflictError,
    FileTooLargeError,
    InvalidFileTypeError,
    MissingTokenError,
    NotFoundError,
    ReportNotFoundError,
    StorageError,
    ValidationError,
    error_response,
)


class TestStatusCodes:

    def test_status_codes_per_class(self):
        assert ValidationError("x").status_code == 400
        assert ConflictError("x").status_code == 400
        assert MissingTokenError().status_code == 401
        assert AuthorizationError().status_code == 403
        assert ReportNotFoundError(1).status_code == 404
        assert StorageError().status_code == 500

    def test_not_found_message_and_code(self):
        error = ReportNotFoundError(7)

        assert isinstance(error, NotFoundError)
        assert error.message == "Report not found"
        assert error.code == "REPORT_NOT_FOUND"
        assert error.details == {"resource_type": "Report", "resource_id": 7}

    def test_file_errors_are_validation_errors(self):
        assert isinstance(InvalidFileTypeError("text/plain"), ValidationError)
        too_large = FileTooLargeError(5 * 1024 * 1024)

        assert isinstance(too_large, ValidationError)
        assert "5MB" in too_large.message
        assert too_large.details["field"] == "profile_image"


class TestErrorResponse:

    def test_body_shape(self):
        body = error_response(ValidationError("Invalid faculty selected", field="faculty_id"))

        assert body == {
            "detail": "Invalid faculty selected",
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid faculty selected",
                "details": {"field": "faculty_id"},
            },
        }

    def test_details_hidden_on_request(self):
        body = error_response(StorageError(detail="password authentication failed"), include_details=False)

        assert body["error"]["details"] == {}
        assert body["detail"] == "A storage error occurred"
