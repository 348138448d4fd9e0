"""
Authentication services.

- ProfileDirectory: identity -> display data lookups used by the chat inbox
- ProfileService: profile updates from the /me endpoint

Related files:
    - models.py: User, Profile
    - chat/aggregation.py: consumes ProfileDirectory.lookup_many
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from core.services import BaseService
from authentication.managers import normalize_identity

if TYPE_CHECKING:
    from collections.abc import Iterable

    from authentication.models import Profile, User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfileInfo:
    """Display data for one identity. avatar_key is unresolved."""

    display_name: str
    avatar_key: str


class ProfileDirectory:
    """
    Read-only profile lookups keyed by email identity.

    Unknown identities yield None (single) or are absent from the mapping
    (batch); callers fall back to the identity itself as the display name.

    Usage:
        info = ProfileDirectory.lookup_by_identity("customer@example.com")
        name = info.display_name if info else "customer@example.com"
    """

    @staticmethod
    def _to_info(user: User) -> ProfileInfo:
        profile = getattr(user, "profile", None)
        if profile is None:
            return ProfileInfo(display_name=user.email, avatar_key="")
        return ProfileInfo(
            display_name=profile.full_name or user.email,
            avatar_key=profile.avatar_key or "",
        )

    @classmethod
    def lookup_by_identity(cls, identity: str) -> ProfileInfo | None:
        from authentication.models import User

        user = (
            User.objects.select_related("profile")
            .filter(email=normalize_identity(identity))
            .first()
        )
        if user is None:
            return None
        return cls._to_info(user)

    @classmethod
    def lookup_many(cls, identities: Iterable[str]) -> dict[str, ProfileInfo]:
        """Batch lookup in one query; the result omits unknown identities."""
        from authentication.models import User

        emails = {normalize_identity(identity) for identity in identities}
        emails.discard("")
        if not emails:
            return {}

        users = User.objects.select_related("profile").filter(email__in=emails)
        return {user.email: cls._to_info(user) for user in users}


class ProfileService(BaseService):
    """Profile updates for the authenticated user."""

    EDITABLE_FIELDS = ("first_name", "last_name", "phone")

    @classmethod
    def update_profile(cls, user: User, data: dict) -> Profile:
        """
        Apply editable fields and an optional raw avatar image.

        The avatar is uploaded through the attachment storage; a failed
        upload keeps the previous avatar.
        """
        from authentication.models import Profile
        from media.services import AttachmentStorageService

        profile, _ = Profile.objects.get_or_create(user=user)
        update_fields = []

        for field_name in cls.EDITABLE_FIELDS:
            if field_name in data:
                setattr(profile, field_name, data[field_name])
                update_fields.append(field_name)

        raw_avatar = data.get("avatar")
        if raw_avatar:
            if AttachmentStorageService.is_external_url(raw_avatar):
                profile.avatar_key = raw_avatar
                update_fields.append("avatar_key")
            else:
                key = AttachmentStorageService.store(
                    raw_avatar, f"avatars_{user.email.split('@')[0]}"
                )
                if key:
                    profile.avatar_key = key
                    update_fields.append("avatar_key")
                else:
                    cls.get_logger().warning(
                        "Avatar upload failed for %s; keeping previous avatar", user.email
                    )

        if update_fields:
            profile.save(update_fields=[*update_fields, "updated_at"])
        return profile
