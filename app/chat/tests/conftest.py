"""
Test configuration and fixtures for chat tests.

This module provides:
- The dispatcher admin and two customers with profiles
- JWT-authenticated API clients for each of them
- A fake attachment store and push sender for service tests

Usage:
    def test_example(customer_client):
        response = customer_client.get("/api/v1/chat/messages/")
        assert response.status_code == 200
"""

from unittest.mock import MagicMock

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.models import Role
from authentication.tests.factories import ProfileFactory, UserFactory
from media.services import AttachmentStorageService


class FakeAttachmentStore:
    """In-memory AttachmentStore: records uploads, resolves to a fixed host."""

    def __init__(self, upload_fails=False):
        self.upload_fails = upload_fails
        self.uploads = []

    def is_raw_payload(self, value):
        return AttachmentStorageService.is_raw_payload(value)

    def store(self, raw, folder_hint):
        self.uploads.append((raw, folder_hint))
        if self.upload_fails:
            return ""
        return f"{folder_hint}/upload-{len(self.uploads)}.jpg"

    def resolve(self, key, expires_in=None):
        if not key:
            return ""
        if AttachmentStorageService.is_pre_resolved(key):
            return key
        return f"https://files.example.com/{key}?signed=1"


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def dispatcher_user(db):
    """Admin account whose email is the configured dispatcher identity."""
    return UserFactory(email="dispatch@example.com", role=Role.ADMIN)


@pytest.fixture
def customer(db):
    user = UserFactory(email="ada@example.com")
    ProfileFactory(user=user, first_name="Ada", last_name="Obi", avatar_key="avatars_ada/a.jpg")
    return user


@pytest.fixture
def other_customer(db):
    user = UserFactory(email="ben@example.com")
    ProfileFactory(user=user, first_name="Ben", last_name="Eze", avatar_key="")
    return user


# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def customer_client(customer):
    return _client_for(customer)


@pytest.fixture
def dispatcher_client(dispatcher_user):
    return _client_for(dispatcher_user)


@pytest.fixture
def api_client():
    return APIClient()


# =============================================================================
# Collaborator Fixtures
# =============================================================================


@pytest.fixture
def fake_store():
    return FakeAttachmentStore()


@pytest.fixture
def push():
    sender = MagicMock()
    sender.notify.return_value = True
    return sender
