"""
Application exception hierarchy.

Every error raised by the service layer derives from BaseApplicationError so
the API layer can render it with one shape and one status mapping.

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Input rejected before any write
    ├── NotFoundError - Single-resource lookup found nothing
    ├── PermissionDeniedError - Caller lacks the role for the operation
    └── ExternalServiceError - Storage, push or lookup collaborator failed

Usage:
    from core.exceptions import ValidationError

    raise ValidationError(
        "Message must have text or an attachment",
        error_code="EMPTY_MESSAGE",
    )

    try:
        ...
    except BaseApplicationError as e:
        return Response(e.to_dict(), status=e.status_code)

Note:
    Missing or invalid credentials are not modelled here. simplejwt raises
    DRF's AuthenticationFailed / NotAuthenticated for those (HTTP 401).
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
        details: Additional error context (field errors, identifiers)
        status_code: HTTP status used by core.exception_handler
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
                "error": "Order not found",
                "error_code": "ORDER_NOT_FOUND",
                "details": {"order_id": 42}
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
    Raised when input is rejected.

    Use for:
    - Message with neither text nor attachment
    - Missing sender or receiver identity
    - Sender and receiver being the same identity
    - Unknown read direction

    Always raised before the first write of the operation.
    """

    default_error_code: str = "VALIDATION_ERROR"
    status_code: int = 400


class NotFoundError(BaseApplicationError):
    """
    Raised when a single resource expected to exist is missing.

    Bulk transitions never raise this; they report zero affected rows.
    """

    default_error_code: str = "NOT_FOUND"
    status_code: int = 404


class PermissionDeniedError(BaseApplicationError):
    """
    Raised when an authenticated caller lacks the role for an operation.

    Example:
        if not is_dispatcher_admin(user):
            raise PermissionDeniedError(
                "Dispatcher access required",
                error_code="ADMIN_REQUIRED",
            )
    """

    default_error_code: str = "PERMISSION_DENIED"
    status_code: int = 403


class ExternalServiceError(BaseApplicationError):
    """
    Raised by collaborator clients (object storage, OneSignal).

    Callers at the service seam catch it and degrade: an empty URL, the
    identity as display name, or a dropped push notification.
    """

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"
    status_code: int = 502
