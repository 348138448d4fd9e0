"""
Dispatcher inbox aggregation.

Collapses the message log into one ThreadSummary per customer. A message
belongs to the customer on the far side of it: the receiver of a dispatcher
message, the sender of any other message.

Pipeline:
    1. Grouped query: unread count per counterpart (Case/When + Count)
    2. Head query: the newest message per counterpart (Subquery on pk)
    3. Batch profile and latest-order lookups for all counterparts
    4. Concurrent resolution of avatar and attachment keys to URLs
    5. Sort by newest activity first

Related files:
    - authentication/services.py: ProfileDirectory
    - orders/services.py: OrderDirectory
    - media/services/attachments.py: AttachmentStorageService.resolve
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from django.db.models import Case, CharField, Count, F, OuterRef, Q, Subquery, When

from chat.constants import get_resolve_max_workers
from core.exceptions import ExternalServiceError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from chat.protocols import AttachmentStore, OrderLookup, ProfileLookup

logger = logging.getLogger(__name__)


@dataclass
class ThreadSummary:
    """One row of the dispatcher inbox."""

    counterpart_identity: str
    display_name: str
    avatar_url: str
    last_message: str
    last_message_time: datetime
    attachment_url: str
    unread_count: int
    order_description: str | None = None
    order_status: str | None = None


def resolve_concurrently(storage: AttachmentStore, keys: Iterable[str]) -> dict[str, str]:
    """
    Resolve storage keys to URLs on a thread pool.

    Returns a mapping for every distinct non-empty key; keys that fail to
    resolve map to "".
    """
    unique = list(dict.fromkeys(key for key in keys if key))
    if not unique:
        return {}

    def _resolve(key: str) -> str:
        try:
            return storage.resolve(key)
        except ExternalServiceError:
            logger.warning("Could not resolve attachment %s", key, exc_info=True)
            return ""

    workers = min(get_resolve_max_workers(), len(unique))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return dict(zip(unique, pool.map(_resolve, unique)))


def counterpart_expression() -> Case:
    """The customer side of a message."""
    return Case(
        When(is_admin=True, then=F("receiver_identity")),
        default=F("sender_identity"),
        output_field=CharField(),
    )


class ThreadAggregator:
    """
    Builds the dispatcher inbox.

    Usage:
        threads = ThreadAggregator().list_threads()
        threads[0].counterpart_identity  # customer with the newest activity

    Collaborators default to the Django-backed services and can be replaced
    with any object satisfying chat.protocols.
    """

    def __init__(
        self,
        storage: AttachmentStore | None = None,
        profiles: ProfileLookup | None = None,
        orders: OrderLookup | None = None,
    ):
        from authentication.services import ProfileDirectory
        from media.services import AttachmentStorageService
        from orders.services import OrderDirectory

        self.storage = storage or AttachmentStorageService
        self.profiles = profiles or ProfileDirectory
        self.orders = orders or OrderDirectory

    def unread_counts(self) -> dict[str, int]:
        """Unread customer-sent messages per counterpart, one grouped query."""
        from chat.models import Message, MessageStatus

        rows = (
            Message.objects.annotate(counterpart=counterpart_expression())
            .order_by()
            .values("counterpart")
            .annotate(
                unread=Count(
                    "id",
                    filter=Q(is_admin=False) & ~Q(status=MessageStatus.READ),
                )
            )
        )
        return {row["counterpart"]: row["unread"] for row in rows}

    def latest_messages(self):
        """Newest message (ties by id) for each counterpart."""
        from chat.models import Message

        newest_pk = (
            Message.objects.annotate(counterpart=counterpart_expression())
            .filter(counterpart=OuterRef("counterpart"))
            .order_by("-timestamp", "-id")
            .values("pk")[:1]
        )
        return (
            Message.objects.annotate(counterpart=counterpart_expression())
            .filter(pk=Subquery(newest_pk))
            .order_by("-timestamp", "-id")
        )

    @staticmethod
    def _lookup(fetch, counterparts: list[str], kind: str) -> dict:
        """Batch lookup that falls back to no rows when the directory fails."""
        try:
            return fetch(counterparts)
        except ExternalServiceError:
            logger.warning("Inbox %s lookup failed, using fallbacks", kind, exc_info=True)
            return {}

    def list_threads(self) -> list[ThreadSummary]:
        heads = list(self.latest_messages())
        if not heads:
            return []

        unread = self.unread_counts()
        counterparts = [head.counterpart for head in heads]
        profiles = self._lookup(self.profiles.lookup_many, counterparts, "profile")
        orders = self._lookup(self.orders.latest_for_identities, counterparts, "order")

        keys = []
        for head in heads:
            profile = profiles.get(head.counterpart)
            order = orders.get(head.counterpart)
            keys.append(profile.avatar_key if profile else "")
            keys.append(head.attachment or (order.attachment_key if order else ""))
        urls = resolve_concurrently(self.storage, keys)

        threads = []
        for head in heads:
            profile = profiles.get(head.counterpart)
            order = orders.get(head.counterpart)
            attachment = head.attachment or (order.attachment_key if order else "")
            threads.append(
                ThreadSummary(
                    counterpart_identity=head.counterpart,
                    display_name=profile.display_name if profile else head.counterpart,
                    avatar_url=urls.get(profile.avatar_key, "") if profile else "",
                    last_message=head.text,
                    last_message_time=head.timestamp,
                    attachment_url=urls.get(attachment, ""),
                    unread_count=unread.get(head.counterpart, 0),
                    order_description=order.description if order else None,
                    order_status=order.status if order else None,
                )
            )

        threads.sort(key=lambda thread: thread.last_message_time, reverse=True)
        logger.info("Inbox built with %d thread(s)", len(threads))
        return threads
