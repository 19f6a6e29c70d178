"""
Domain exception hierarchy shared by every service.

Services raise these at the point a rule is violated; the REST layer turns
them into JSON responses through core.exception_handler. Each error carries a
human message, a machine-readable code and optional details.

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Malformed input or a violated business rule (400)
    ├── NotFoundError - Referenced record does not exist (404)
    ├── PermissionDeniedError - Caller is not allowed to act (403)
    ├── ConflictError - Operation clashes with existing state (409)
    └── ExternalServiceError - A collaborator (blob store) failed (502)

Usage:
    from core.exceptions import ConflictError

    raise ConflictError(
        "A friend request between these users is already pending",
        error_code="REQUEST_PENDING",
    )

Note:
    Authentication failures (missing or invalid token) stay with DRF's
    NotAuthenticated/AuthenticationFailed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context
        status_code: HTTP status the API layer responds with
    """

    default_error_code: str = "APPLICATION_ERROR"
    status_code: int = 400

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to the API error body.

        Example:
            {
                "error": "Chat not found",
                "error_code": "CHAT_NOT_FOUND",
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised for malformed requests and business rule violations.

    Examples: blank group name, fewer than three group members, a sixth
    attachment, removing a member from a three-person group.
    """

    default_error_code: str = "VALIDATION_ERROR"
    status_code: int = 400


class NotFoundError(BaseApplicationError):
    """Raised when a chat, user or friend request does not exist."""

    default_error_code: str = "NOT_FOUND"
    status_code: int = 404


class PermissionDeniedError(BaseApplicationError):
    """
    Raised when the caller is authenticated but not allowed to act.

    Examples: a non-creator renaming a group, someone other than the
    receiver answering a friend request, a non-member reading messages.
    """

    default_error_code: str = "PERMISSION_DENIED"
    status_code: int = 403


class ConflictError(BaseApplicationError):
    """Raised when an operation clashes with existing state (duplicate request)."""

    default_error_code: str = "CONFLICT"
    status_code: int = 409


class ExternalServiceError(BaseApplicationError):
    """
    Raised when a collaborator outside the database fails.

    The blob store raising this during chat deletion aborts the cascade
    before any message or chat row is removed, so the delete can be retried.
    Log the original error; do not expose it to clients.
    """

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"
    status_code: int = 502
