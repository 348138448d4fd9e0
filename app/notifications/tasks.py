"""
Celery tasks for notification delivery.

Tasks:
    send_push_notification: Deliver one push via OneSignal

Design:
    - Missing OneSignal credentials make the task a logged no-op
    - Transient provider failures are retried with backoff
    - Permanent failures are logged and dropped; nothing is persisted
"""

from __future__ import annotations

import logging

from celery import shared_task

from core.exceptions import ExternalServiceError
from notifications.clients import OneSignalClient

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3, default_retry_delay=10)
def send_push_notification(
    self,
    target: str,
    title: str,
    body: str,
    from_identity: str = "",
) -> bool:
    """
    Send a push notification to the devices registered for ``target``.

    Returns:
        True if OneSignal accepted the request, False if skipped or dropped
    """
    client = OneSignalClient.from_settings()
    if client is None:
        logger.info("Push to %s skipped: OneSignal is not configured", target)
        return False

    try:
        client.send(target, title, body, from_identity)
    except ExternalServiceError as e:
        if e.details.get("transient") and self.request.retries < self.max_retries:
            logger.warning("Push to %s failed (%s), will retry", target, e.error_code)
            raise self.retry(exc=e, countdown=2 ** self.request.retries * 10)
        logger.error("Push to %s dropped: %s", target, e)
        return False

    return True
