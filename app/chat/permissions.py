"""
Permission classes and requester mapping for the chat API.

There is one dispatcher identity. Any user with the admin role acts as that
identity: their messages are sent from it and their fetches sync against
it.

- IsDispatcherAdmin: admin role (or the dispatcher account itself)
- requester_identity: identity the services should act as for a user
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rest_framework import permissions

from authentication.managers import normalize_identity
from chat.constants import get_dispatcher_identity, is_dispatcher

if TYPE_CHECKING:
    from rest_framework.request import Request
    from rest_framework.views import APIView

    from authentication.models import User


def is_admin_user(user: User) -> bool:
    if not user or not user.is_authenticated:
        return False
    return getattr(user, "is_admin_role", False) or is_dispatcher(user.email)


def requester_identity(user: User) -> str:
    """The dispatcher identity for admins, the user's own email otherwise."""
    if is_admin_user(user):
        return get_dispatcher_identity()
    return normalize_identity(user.email)


class IsDispatcherAdmin(permissions.BasePermission):
    """Allows access only to dispatcher admins."""

    message = "Access denied: admin privileges required."

    def has_permission(self, request: Request, view: APIView) -> bool:
        return is_admin_user(request.user)
