"""
OneSignal REST client.

Targets devices by external id, which the mobile app sets to the user's
normalized email on login.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx
from django.conf import settings

from core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

_CONNECTION_ERROR_TYPES = (
    httpx.ConnectError,
    httpx.TimeoutException,
    httpx.RemoteProtocolError,
)

ANDROID_CHANNEL_ID = "livechat_messages"


@dataclass
class OneSignalClient:
    app_id: str
    rest_api_key: str
    api_url: str
    timeout_s: float = 10

    @classmethod
    def from_settings(cls) -> OneSignalClient | None:
        """Build a client from settings, or None when push is not configured."""
        app_id = (settings.ONESIGNAL_APP_ID or "").strip()
        api_key = (settings.ONESIGNAL_REST_API_KEY or "").strip()
        if not app_id or not api_key:
            return None
        return cls(
            app_id=app_id,
            rest_api_key=api_key,
            api_url=settings.ONESIGNAL_API_URL,
            timeout_s=settings.ONESIGNAL_TIMEOUT_SECONDS,
        )

    def build_payload(self, target: str, title: str, body: str, from_identity: str) -> dict:
        return {
            "app_id": self.app_id,
            "include_aliases": {"external_id": [target]},
            "target_channel": "push",
            "headings": {"en": title},
            "contents": {"en": body},
            "priority": 10,
            "android_visibility": 1,
            "android_channel_id": ANDROID_CHANNEL_ID,
            "data": {
                "type": "chat_alert",
                "sender": from_identity,
                "click_action": "FLUTTER_NOTIFICATION_CLICK",
            },
        }

    def send(self, target: str, title: str, body: str, from_identity: str = "") -> dict:
        """
        POST one notification.

        Returns:
            Decoded OneSignal response body

        Raises:
            ExternalServiceError: Network failure or non-2xx response.
                ``details["transient"]`` is True for failures worth retrying
                (connection problems, timeouts, 429 and 5xx).
        """
        payload = self.build_payload(target, title, body, from_identity)
        headers = {
            "Content-Type": "application/json; charset=utf-8",
            "Authorization": f"Basic {self.rest_api_key}",
        }

        try:
            with httpx.Client(timeout=self.timeout_s) as client:
                response = client.post(self.api_url, json=payload, headers=headers)
        except _CONNECTION_ERROR_TYPES as e:
            raise ExternalServiceError(
                "OneSignal unreachable",
                error_code="PUSH_UNREACHABLE",
                details={"target": target, "transient": True, "original_error": str(e)},
            ) from e

        if response.status_code >= 400:
            raise ExternalServiceError(
                f"OneSignal returned HTTP {response.status_code}",
                error_code="PUSH_REJECTED",
                details={
                    "target": target,
                    "status_code": response.status_code,
                    "transient": response.status_code == 429 or response.status_code >= 500,
                },
            )

        result = response.json()
        if result.get("errors"):
            # Accepted but not deliverable (e.g. no subscribed device)
            logger.warning("OneSignal reported errors for %s: %s", target, result["errors"])
        else:
            logger.info("Push queued for %s (id=%s)", target, result.get("id"))
        return result
