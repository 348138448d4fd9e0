"""
Tests for AttachmentStorageService.

These tests verify:
- Raw payload detection and upload to default_storage (local filesystem)
- Degradation to "" for short, undecodable or rejected payloads
- URL resolution for local and S3 storage, with pass-through of URLs
"""

from __future__ import annotations

import base64
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError
from django.core.files.storage import default_storage

from media.services import AttachmentStorageService

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 200
JPEG_B64 = base64.b64encode(JPEG_BYTES).decode()


@pytest.fixture
def local_media(settings, tmp_path):
    """Point the filesystem storage at a per-test directory."""
    settings.MEDIA_ROOT = tmp_path
    settings.MEDIA_URL = "/media/"
    return tmp_path


class TestPayloadDetection:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("", False),
            ("https://cdn.example.com/a.jpg", False),
            ("chat_ada/1700000000000_ab12cd34.jpg", False),
            ("data:image/jpeg;base64,AAAA", True),
            ("/9j/4AAQSkZJRg", True),
            ("A" * 100, True),
        ],
    )
    def test_is_raw_payload(self, value, expected):
        assert AttachmentStorageService.is_raw_payload(value) is expected

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("http://cdn.example.com/a.jpg", True),
            ("https://cdn.example.com/a.jpg", True),
            ("data:image/png;base64,AAAA", True),
            ("orders/1_ada.jpg", False),
            ("", False),
        ],
    )
    def test_is_pre_resolved(self, value, expected):
        assert AttachmentStorageService.is_pre_resolved(value) is expected


class TestStore:
    def test_stores_data_uri_under_folder_hint(self, local_media):
        key = AttachmentStorageService.store(f"data:image/jpeg;base64,{JPEG_B64}", "chat_ada")

        assert key.startswith("chat_ada/")
        assert key.endswith(".jpg")
        with default_storage.open(key, "rb") as stored:
            assert stored.read() == JPEG_BYTES

    def test_stores_bare_base64(self, local_media):
        key = AttachmentStorageService.store(JPEG_B64, "orders_ada")

        assert key.startswith("orders_ada/")
        assert default_storage.exists(key)

    def test_short_payload_is_not_uploaded(self, local_media):
        with patch.object(AttachmentStorageService, "_save") as mock_save:
            assert AttachmentStorageService.store("A" * 99, "chat_ada") == ""

        mock_save.assert_not_called()

    def test_undecodable_payload_returns_empty_key(self, local_media):
        assert AttachmentStorageService.store("!" * 150, "chat_ada") == ""

    def test_storage_rejection_returns_empty_key(self, local_media):
        error = ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject")
        with patch("media.services.attachments.default_storage") as mock_storage:
            mock_storage.save.side_effect = error

            assert AttachmentStorageService.store(JPEG_B64, "chat_ada") == ""


class TestResolve:
    def test_empty_key_resolves_to_empty_string(self):
        assert AttachmentStorageService.resolve("") == ""

    def test_urls_and_data_uris_pass_through(self):
        assert AttachmentStorageService.resolve("https://cdn.example.com/a.jpg") == (
            "https://cdn.example.com/a.jpg"
        )
        assert AttachmentStorageService.resolve("data:image/png;base64,AAAA") == (
            "data:image/png;base64,AAAA"
        )

    def test_local_storage_returns_media_url(self, local_media):
        assert AttachmentStorageService.resolve("chat_ada/1_x.jpg") == "/media/chat_ada/1_x.jpg"

    @patch("media.services.attachments.default_storage")
    def test_s3_storage_returns_presigned_url(self, mock_storage, settings):
        settings.ATTACHMENT_URL_EXPIRY_SECONDS = 900
        mock_storage.bucket = MagicMock()
        mock_storage.bucket_name = "dispatch-bucket"
        client = mock_storage.connection.meta.client
        client.generate_presigned_url.return_value = "https://s3.example.com/signed"

        url = AttachmentStorageService.resolve("chat_ada/1_x.jpg")

        assert url == "https://s3.example.com/signed"
        client.generate_presigned_url.assert_called_once_with(
            "get_object",
            Params={"Bucket": "dispatch-bucket", "Key": "chat_ada/1_x.jpg"},
            ExpiresIn=900,
        )

    @patch("media.services.attachments.default_storage")
    def test_signing_failure_resolves_to_empty_string(self, mock_storage):
        mock_storage.bucket = MagicMock()
        mock_storage.connection.meta.client.generate_presigned_url.side_effect = ClientError(
            {"Error": {"Code": "500", "Message": "boom"}}, "GetObject"
        )

        assert AttachmentStorageService.resolve("chat_ada/1_x.jpg") == ""
