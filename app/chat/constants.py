"""
Constants and configuration accessors for the chat module.

The dispatcher identity is deployment configuration; read it through
get_dispatcher_identity() rather than settings directly so comparisons always
use the normalized form.

Import example:
    from chat.constants import get_dispatcher_identity, is_dispatcher
"""

from typing import Final

from django.conf import settings

from authentication.managers import normalize_identity

# Body stored for image-only messages
IMAGE_PLACEHOLDER_TEXT: Final[str] = "📷 Sent an image"

# Push title for customer -> dispatcher messages
NEW_MESSAGE_TITLE: Final[str] = "New Message Alert"

NEW_ORDER_TITLE: Final[str] = "📦 New Order Alert"

# Folder prefix for chat images; suffixed with the customer's local part
CHAT_UPLOAD_FOLDER_PREFIX: Final[str] = "chat_"


def get_dispatcher_identity() -> str:
    return normalize_identity(settings.DISPATCHER_IDENTITY)


def is_dispatcher(identity: str) -> bool:
    return bool(identity) and normalize_identity(identity) == get_dispatcher_identity()


def get_presence_window_seconds() -> int:
    return int(getattr(settings, "CHAT_PRESENCE_WINDOW_SECONDS", 60))


def get_conversation_limit() -> int:
    return int(getattr(settings, "CHAT_CONVERSATION_LIMIT", 50))


def get_resolve_max_workers() -> int:
    return max(1, int(getattr(settings, "CHAT_RESOLVE_MAX_WORKERS", 8)))


def local_part(identity: str) -> str:
    """``ada@example.com`` -> ``ada``; used for storage folder names."""
    return normalize_identity(identity).split("@", 1)[0]
