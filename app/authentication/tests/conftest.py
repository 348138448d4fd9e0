"""
Test configuration and fixtures for authentication tests.

Usage:
    def test_example(user, authenticated_client):
        response = authenticated_client.get('/api/v1/auth/me/')
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.models import Role
from authentication.tests.factories import UserFactory


@pytest.fixture
def user(db):
    """A customer with an auto-created, empty profile."""
    return UserFactory(email="ada@example.com")


@pytest.fixture
def admin_user(db):
    """The dispatcher account."""
    return UserFactory(email="dispatch@example.com", role=Role.ADMIN)


@pytest.fixture
def api_client():
    """Unauthenticated API client for public endpoints."""
    return APIClient()


@pytest.fixture
def authenticated_client(user):
    """API client authenticated with a JWT for the default user fixture."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client
