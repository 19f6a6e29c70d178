"""
Tests for the DRF exception handler.
"""

from rest_framework import exceptions as drf_exceptions

from core.exception_handler import api_exception_handler
from core.exceptions import (
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)


class TestApiExceptionHandler:
    def test_application_errors_keep_code_and_status(self):
        cases = [
            (ValidationError("bad", error_code="EMPTY_MESSAGE"), 400),
            (NotFoundError("missing", error_code="CHAT_NOT_FOUND"), 404),
            (PermissionDeniedError("no", error_code="NOT_CREATOR"), 403),
            (ConflictError("dup", error_code="REQUEST_PENDING"), 409),
            (ExternalServiceError("down", error_code="BLOB_DELETE_FAILED"), 502),
        ]

        for exc, expected_status in cases:
            response = api_exception_handler(exc, {})

            assert response.status_code == expected_status
            assert response.data == {"error": exc.message, "error_code": exc.error_code}

    def test_details_are_included_when_present(self):
        exc = NotFoundError("missing", error_code="USER_NOT_FOUND", details={"user_ids": [4]})

        response = api_exception_handler(exc, {})

        assert response.data["details"] == {"user_ids": [4]}

    def test_serializer_errors_become_validation_error(self):
        exc = drf_exceptions.ValidationError({"name": ["This field is required."]})

        response = api_exception_handler(exc, {})

        assert response.status_code == 400
        assert response.data["error_code"] == "VALIDATION_ERROR"
        assert "name" in response.data["details"]

    def test_authentication_errors_keep_drf_status(self):
        response = api_exception_handler(drf_exceptions.NotAuthenticated(), {})

        assert response.status_code == 401
        assert response.data["error_code"] == "NOT_AUTHENTICATED"

    def test_unknown_exceptions_are_left_to_django(self):
        assert api_exception_handler(RuntimeError("boom"), {}) is None
