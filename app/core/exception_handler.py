"""
DRF exception handler for application errors.

Registered as REST_FRAMEWORK["EXCEPTION_HANDLER"]. DRF's own exceptions
(authentication, throttling, serializer validation) are rendered by DRF's
default handler; BaseApplicationError subclasses render their to_dict() body
with their status_code; store failures become a 500 without leaking the
driver message.
"""

from __future__ import annotations

import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import BaseApplicationError

logger = logging.getLogger(__name__)


def application_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else "unknown"

    if isinstance(exc, BaseApplicationError):
        logger.info("%s rejected request: %s", view_name, exc)
        return Response(exc.to_dict(), status=exc.status_code)

    if isinstance(exc, DatabaseError):
        logger.exception("Store failure in %s", view_name)
        return Response(
            {"error": "Storage backend unavailable", "error_code": "STORE_ERROR"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return None
