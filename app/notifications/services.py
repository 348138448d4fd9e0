"""
Push notification service.

PushService is the only entry point other apps use. It enqueues the Celery
task and swallows enqueue failures, so a broker outage never fails a chat
message or an order.
"""

from __future__ import annotations

from kombu.exceptions import OperationalError

from core.services import BaseService


class PushService(BaseService):
    """
    Best-effort push notifications.

    Usage:
        PushService.notify(
            target=message.receiver_identity,
            title="New Message Alert",
            body=message.text,
            from_identity=message.sender_identity,
        )
    """

    @classmethod
    def notify(cls, target: str, title: str, body: str, from_identity: str = "") -> bool:
        """
        Enqueue a push to ``target``.

        Returns:
            True if the task was enqueued, False if skipped or the broker
            refused it
        """
        from notifications.tasks import send_push_notification

        logger = cls.get_logger()
        target = (target or "").strip().lower()
        if not target:
            logger.debug("Push skipped: no target identity")
            return False

        try:
            send_push_notification.delay(
                target=target,
                title=title,
                body=body,
                from_identity=from_identity,
            )
        except (OperationalError, OSError):
            logger.exception("Could not enqueue push to %s", target)
            return False

        logger.debug("Push to %s enqueued: %s", target, title)
        return True
