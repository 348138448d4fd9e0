"""
ASGI config for the dispatch backend.

Uvicorn serves the HTTP API through this entry point. The chat channel is
request/response only; there are no WebSocket routes.

https://docs.djangoproject.com/en/5.2/howto/deployment/asgi/
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_asgi_application()
