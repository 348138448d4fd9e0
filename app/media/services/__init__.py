"""Media services: attachment upload and signed URL resolution."""

from media.services.attachments import AttachmentStorageService

__all__ = [
    "AttachmentStorageService",
]
