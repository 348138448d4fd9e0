"""
Notifications app for best-effort push delivery.

Chat replies and new orders notify the other party through OneSignal. Pushes
are enqueued on Celery and never block or fail the request that caused them.

Usage:
    from notifications.services import PushService

    PushService.notify(
        target="customer@example.com",
        title="Dispatch",
        body="Your courier is on the way",
        from_identity="dispatch@example.com",
    )
"""
