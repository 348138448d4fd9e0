"""
AttachmentStorageService for storing and serving chat/order images.

Provides:
- Upload of raw base64 / data-URI image payloads to default_storage
- Storage-agnostic URL resolution (presigned S3 URLs or local media URLs)
- Pass-through of values that are already URLs or inline data

Every failure degrades to an empty string and a log line; callers never see
a storage exception.
"""

from __future__ import annotations

import base64
import binascii
import time
import uuid

from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

from core.exceptions import ExternalServiceError
from core.services import BaseService


class AttachmentStorageService(BaseService):
    """
    Service for attachment storage keys.

    Usage:
        # Upload raw image data sent by the mobile app
        key = AttachmentStorageService.store(payload, "chat_ada")
        if not key:
            ...  # upload failed or payload was not image data

        # Resolve a stored key for the client
        url = AttachmentStorageService.resolve(message.attachment)
    """

    # Payloads shorter than this are not treated as image data
    MIN_PAYLOAD_LENGTH = 100

    # Leading bytes of a base64-encoded JPEG
    JPEG_BASE64_PREFIX = "/9j/"

    @classmethod
    def is_external_url(cls, value: str) -> bool:
        return bool(value) and value.startswith(("http://", "https://"))

    @classmethod
    def is_pre_resolved(cls, value: str) -> bool:
        """True for values clients can use directly (URLs and data URIs)."""
        return cls.is_external_url(value) or (bool(value) and value.startswith("data:"))

    @classmethod
    def is_raw_payload(cls, value: str) -> bool:
        """
        True when value looks like inline image data rather than a key.

        Data URIs, bare JPEG base64 and any other long non-URL string sent by
        a client are uploaded; short strings are taken as existing keys.
        """
        if not value or cls.is_external_url(value):
            return False
        if value.startswith(("data:", cls.JPEG_BASE64_PREFIX)):
            return True
        return len(value) >= cls.MIN_PAYLOAD_LENGTH

    @classmethod
    def is_s3_storage(cls) -> bool:
        """S3Storage exposes a ``bucket`` attribute; FileSystemStorage does not."""
        return hasattr(default_storage, "bucket")

    @classmethod
    def build_key(cls, folder_hint: str) -> str:
        folder = folder_hint.strip("/") or "uploads"
        return f"{folder}/{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}.jpg"

    @classmethod
    def store(cls, raw: str, folder_hint: str) -> str:
        """
        Upload raw image data and return its storage key.

        Args:
            raw: Base64 string, optionally with a ``data:...;base64,`` prefix
            folder_hint: Folder the object is stored under (e.g. ``chat_ada``)

        Returns:
            Storage key, or "" when the payload is too short, not decodable,
            or the upload failed
        """
        logger = cls.get_logger()

        if not raw or len(raw) < cls.MIN_PAYLOAD_LENGTH:
            logger.debug("Attachment payload missing or too short; not uploading")
            return ""

        encoded = raw.split("base64,", 1)[1] if "base64," in raw else raw
        try:
            content = base64.b64decode("".join(encoded.split()), validate=True)
        except (binascii.Error, ValueError):
            logger.warning("Attachment payload for %s is not valid base64", folder_hint)
            return ""

        try:
            return cls._save(cls.build_key(folder_hint), content)
        except ExternalServiceError as e:
            logger.error("Attachment upload failed: %s", e, exc_info=True)
            return ""

    @classmethod
    def resolve(cls, key: str, expires_in: int | None = None) -> str:
        """
        Turn a stored key into a URL the client can fetch.

        URLs and data URIs are returned unchanged. Resolution failures give
        "" so one bad key never fails a whole listing.
        """
        if not key:
            return ""
        if cls.is_pre_resolved(key):
            return key

        try:
            return cls._signed_url(key, expires_in or settings.ATTACHMENT_URL_EXPIRY_SECONDS)
        except ExternalServiceError as e:
            cls.get_logger().warning("Could not resolve attachment %s: %s", key, e)
            return ""

    # =========================================================================
    # Private Helper Methods
    # =========================================================================

    @classmethod
    def _save(cls, key: str, content: bytes) -> str:
        try:
            saved = default_storage.save(key, ContentFile(content))
        except (BotoCoreError, ClientError, OSError) as e:
            raise ExternalServiceError(
                "Object storage rejected the upload",
                error_code="STORAGE_UPLOAD_FAILED",
                details={"key": key, "original_error": str(e)},
            ) from e

        cls.get_logger().info("Stored attachment %s (%d bytes)", saved, len(content))
        return saved

    @classmethod
    def _signed_url(cls, key: str, expires_in: int) -> str:
        try:
            if cls.is_s3_storage():
                client = default_storage.connection.meta.client
                return client.generate_presigned_url(
                    "get_object",
                    Params={"Bucket": default_storage.bucket_name, "Key": key},
                    ExpiresIn=expires_in,
                )
            return default_storage.url(key)
        except (BotoCoreError, ClientError, ValueError) as e:
            raise ExternalServiceError(
                "Could not sign attachment URL",
                error_code="STORAGE_SIGN_FAILED",
                details={"key": key, "original_error": str(e)},
            ) from e
