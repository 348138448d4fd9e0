"""
Shared building blocks for the dispatch apps.

Nothing here knows about messages, orders or the dispatcher identity; the
domain apps (authentication, chat, orders, media, notifications) build on
these pieces.

- core.models.BaseModel: created_at / updated_at bookkeeping
- core.services.BaseService, ServiceResult: service layer conventions
- core.exceptions: error hierarchy with HTTP status codes
- core.exception_handler: DRF handler rendering that hierarchy
- core.views.health_check: liveness probe for load balancers

Models are not re-exported here; importing them at package import time
would raise AppRegistryNotReady.
"""

from .exceptions import (
    BaseApplicationError,
    ExternalServiceError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from .services import BaseService, ServiceResult

__all__ = [
    "BaseService",
    "ServiceResult",
    "BaseApplicationError",
    "ValidationError",
    "NotFoundError",
    "PermissionDeniedError",
    "ExternalServiceError",
]
