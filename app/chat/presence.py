"""
Presence heuristic.

An identity counts as present when it sent or received any message within
the trailing window (CHAT_PRESENCE_WINDOW_SECONDS, default 60). There is no
session or heartbeat registry; the message log is the only signal.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from django.utils import timezone

from chat.constants import get_presence_window_seconds

logger = logging.getLogger(__name__)


class PresenceEstimator:
    """
    Usage:
        if PresenceEstimator().is_present("ada@example.com"):
            ...

    Subclass and override is_present to back presence with a real session
    registry; DeliveryStateMachine accepts any object with this method.
    """

    def __init__(self, window_seconds: int | None = None):
        self.window_seconds = (
            get_presence_window_seconds() if window_seconds is None else window_seconds
        )

    def window_start(self, now: datetime | None = None) -> datetime:
        now = now or timezone.now()
        return now - timedelta(seconds=self.window_seconds)

    def is_present(self, identity: str, now: datetime | None = None) -> bool:
        """
        True if identity has any message activity in [now - window, now].

        The lower bound is inclusive: activity exactly window seconds old
        still counts.
        """
        from chat.models import Message

        if not identity:
            return False

        present = (
            Message.objects.involving(identity).since(self.window_start(now)).exists()
        )
        logger.debug(
            "Presence for %s within %ss: %s", identity, self.window_seconds, present
        )
        return present
