"""
Celery configuration for the dispatch backend.

Celery carries the best-effort side effects of chat and order operations
(push notifications) off the request path. Redis is the broker and result
backend; tasks are auto-discovered from each installed app's tasks.py.

Usage:
    from notifications.tasks import send_push_notification

    send_push_notification.delay(
        target="customer@example.com",
        title="Dispatch",
        body="Your courier is on the way",
        from_identity="dispatch@example.com",
    )

With CELERY_TASK_ALWAYS_EAGER=True the task runs inline, which is how the
test suite exercises the push path.
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("dispatch")

# All Celery settings are prefixed with CELERY_ in settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks()
