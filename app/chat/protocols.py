"""
Protocol definitions for the collaborators chat depends on.

Chat never talks to storage, profiles, orders or push directly; it goes
through objects satisfying these protocols. The default implementations are
the Django-backed services of the sibling apps, and tests substitute plain
objects or mocks.

Available Protocols:
    AttachmentStore: Upload raw image data, resolve keys to URLs
    ProfileLookup: Identity -> display name / avatar key
    OrderLookup: Identity -> latest order summary
    PushSender: Best-effort push notification

Usage:
    from chat.protocols import AttachmentStore

    def thumbnail_url(store: AttachmentStore, key: str) -> str:
        return store.resolve(key)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from authentication.services import ProfileInfo
    from orders.services import OrderInfo


@runtime_checkable
class AttachmentStore(Protocol):
    """
    Storage for message and order images.

    Both methods degrade to "" instead of raising.
    """

    def is_raw_payload(self, value: str) -> bool: ...

    def store(self, raw: str, folder_hint: str) -> str: ...

    def resolve(self, key: str, expires_in: int | None = None) -> str: ...


@runtime_checkable
class ProfileLookup(Protocol):
    def lookup_by_identity(self, identity: str) -> ProfileInfo | None: ...

    def lookup_many(self, identities: Iterable[str]) -> dict[str, ProfileInfo]: ...


@runtime_checkable
class OrderLookup(Protocol):
    def latest_for_identity(self, identity: str) -> OrderInfo | None: ...

    def latest_for_identities(self, identities: Iterable[str]) -> dict[str, OrderInfo]: ...


@runtime_checkable
class PushSender(Protocol):
    """Returns True if the push was handed off; never raises."""

    def notify(self, target: str, title: str, body: str, from_identity: str = "") -> bool: ...
