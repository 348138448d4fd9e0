"""
QuerySet helpers for the message log.

All filters take normalized identities; callers normalize once at the
service boundary.
"""

from __future__ import annotations

from django.db import models
from django.db.models import Q


class MessageQuerySet(models.QuerySet):
    """
    Usage:
        Message.objects.involving("ada@example.com").newest_first()[:50]
        Message.objects.inbound_from(counterpart, reader).not_read()
    """

    def involving(self, identity: str) -> MessageQuerySet:
        """Messages where identity is sender or receiver."""
        return self.filter(Q(sender_identity=identity) | Q(receiver_identity=identity))

    def between(self, first: str, second: str) -> MessageQuerySet:
        return self.filter(
            Q(sender_identity=first, receiver_identity=second)
            | Q(sender_identity=second, receiver_identity=first)
        )

    def inbound_from(self, sender: str, receiver: str) -> MessageQuerySet:
        return self.filter(sender_identity=sender, receiver_identity=receiver)

    def addressed_to(self, identity: str) -> MessageQuerySet:
        return self.filter(receiver_identity=identity)

    def with_status(self, status: str) -> MessageQuerySet:
        return self.filter(status=status)

    def not_read(self) -> MessageQuerySet:
        from chat.models import MessageStatus

        return self.exclude(status=MessageStatus.READ)

    def since(self, moment) -> MessageQuerySet:
        """Inclusive lower bound on timestamp."""
        return self.filter(timestamp__gte=moment)

    def newest_first(self) -> MessageQuerySet:
        return self.order_by("-timestamp", "-id")

    def oldest_first(self) -> MessageQuerySet:
        return self.order_by("timestamp", "id")
