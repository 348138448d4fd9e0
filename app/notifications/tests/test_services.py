"""
Tests for PushService.

PushService must never raise: a push that cannot be enqueued is logged and
reported as False.
"""

from unittest.mock import patch

from kombu.exceptions import OperationalError

from notifications.services import PushService


class TestPushServiceNotify:
    @patch("notifications.tasks.send_push_notification.delay")
    def test_enqueues_task_with_normalized_target(self, mock_delay):
        result = PushService.notify(
            " Ada@Example.com ", "Dispatch", "On the way", from_identity="dispatch@example.com"
        )

        assert result is True
        mock_delay.assert_called_once_with(
            target="ada@example.com",
            title="Dispatch",
            body="On the way",
            from_identity="dispatch@example.com",
        )

    @patch("notifications.tasks.send_push_notification.delay")
    def test_empty_target_is_skipped(self, mock_delay):
        assert PushService.notify("", "Dispatch", "Hello") is False
        mock_delay.assert_not_called()

    @patch("notifications.tasks.send_push_notification.delay")
    def test_broker_failure_is_swallowed(self, mock_delay, caplog):
        mock_delay.side_effect = OperationalError("broker down")

        assert PushService.notify("ada@example.com", "Dispatch", "Hello") is False
        assert "Could not enqueue push" in caplog.text
