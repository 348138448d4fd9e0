"""
WSGI config for the dispatch backend.

Fallback entry point for gunicorn-style deployments; ASGI (config.asgi) is
the primary one.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()
