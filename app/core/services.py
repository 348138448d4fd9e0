"""
Base service layer patterns for business logic encapsulation.

- ServiceResult: result wrapper for expected failures
- BaseService: logging and transaction helpers shared by services

Services hold business logic. Views handle HTTP concerns and translate
ServiceResult failures or raised core.exceptions into responses.

Usage:
    from core.services import BaseService, ServiceResult

    class OrderService(BaseService):
        @classmethod
        def update_status(cls, order_id, status) -> ServiceResult[Order]:
            with cls.atomic():
                ...
            cls.get_logger().info("Order %s moved to %s", order_id, status)
            return ServiceResult.success(order)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator
    from typing import Any

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful
        error: Error message if failed
        error_code: Machine-readable error code
        errors: Field-level errors for validation failures
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, list[str]] | None = field(default=None)

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """Create a successful result."""
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Example:
            return ServiceResult.failure("Order not found", "ORDER_NOT_FOUND")
        """
        return cls(success=False, error=error, error_code=error_code, errors=errors)

    def to_response(self) -> dict[str, Any]:
        """Convert to a DRF response body."""
        if self.success:
            return {"success": True, "data": self.data}

        response: dict[str, Any] = {
            "success": False,
            "error": self.error,
        }
        if self.error_code:
            response["error_code"] = self.error_code
        if self.errors:
            response["errors"] = self.errors
        return response

    def __bool__(self) -> bool:
        return self.success


class BaseService:
    """
    Base class for service layer classes.

    Services are stateless; use @classmethod and keep state in the database.
    Use ServiceResult for expected failures and raise core.exceptions for
    failures the API layer should map to a status code.
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Logger named after the concrete service class."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        Example:
            with cls.atomic():
                order = Order.objects.create(...)
                Message.objects.create(order=order, ...)
                # If the message insert fails, the order is rolled back
        """
        with transaction.atomic():
            yield

    @classmethod
    def validate_required(
        cls, values: dict[str, Any], error_code: str = "VALIDATION_ERROR"
    ) -> ServiceResult | None:
        """
        Return a failure result if any value is None or blank, else None.

        Example:
            validation = cls.validate_required({"status": status})
            if validation:
                return validation
        """
        errors = {}
        for field_name, value in values.items():
            if value is None or (isinstance(value, str) and not value.strip()):
                errors[field_name] = ["This field is required."]

        if errors:
            return ServiceResult.failure(
                "Required fields missing",
                error_code=error_code,
                errors=errors,
            )
        return None
