"""
Delivery state machine for messages.

States advance sent -> delivered -> read and never move back. Transitions
are applied in bulk with a single UPDATE that only touches rows ranked
strictly below the target, so repeating a transition is a no-op and
concurrent transitions cannot regress a row.

Usage:
    machine = DeliveryStateMachine()
    status = machine.initial_status("ada@example.com")
    machine.advance(Message.objects.filter(pk__in=ids), MessageStatus.READ)
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from django.db import transaction
from django.utils import timezone

from chat.models import MessageStatus
from chat.presence import PresenceEstimator

if TYPE_CHECKING:
    from django.db.models import QuerySet

logger = logging.getLogger(__name__)

STATUS_ORDER: tuple[str, ...] = (
    MessageStatus.SENT,
    MessageStatus.DELIVERED,
    MessageStatus.READ,
)


def rank(status: str) -> int:
    """Position of status in the delivery order."""
    try:
        return STATUS_ORDER.index(status)
    except ValueError:
        raise ValueError(f"Unknown message status: {status!r}") from None


def can_transition(current: str, target: str) -> bool:
    """True only for forward moves; staying put or regressing is rejected."""
    return rank(target) > rank(current)


class DeliveryStateMachine:
    def __init__(self, presence: PresenceEstimator | None = None):
        self.presence = presence or PresenceEstimator()

    rank = staticmethod(rank)
    can_transition = staticmethod(can_transition)

    def initial_status(self, receiver_identity: str, now: datetime | None = None) -> str:
        """delivered if the receiver is present, otherwise sent."""
        if self.presence.is_present(receiver_identity, now=now):
            return MessageStatus.DELIVERED
        return MessageStatus.SENT

    def advance(self, queryset: QuerySet, target: str) -> int:
        """
        Move every row of queryset that is behind target up to target.

        Rows already at or past target are left alone. Entering READ also
        stamps read_at.

        Returns:
            Number of rows changed
        """
        behind = [status for status in STATUS_ORDER if rank(status) < rank(target)]
        if not behind:
            return 0

        updates = {"status": target, "updated_at": timezone.now()}
        if target == MessageStatus.READ:
            updates["read_at"] = updates["updated_at"]

        with transaction.atomic():
            count = queryset.filter(status__in=behind).update(**updates)

        if count:
            logger.info("Advanced %d message(s) to %s", count, target)
        return count
