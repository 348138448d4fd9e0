"""
Test configuration and fixtures for orders tests.

Usage:
    def test_example(customer_client):
        response = customer_client.get("/api/v1/orders/")
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.models import Role
from authentication.tests.factories import ProfileFactory, UserFactory


@pytest.fixture
def customer(db):
    user = UserFactory(email="ada@example.com")
    ProfileFactory(user=user, first_name="Ada", last_name="Obi", avatar_key="")
    return user


@pytest.fixture
def dispatcher_user(db):
    return UserFactory(email="dispatch@example.com", role=Role.ADMIN)


@pytest.fixture
def customer_client(customer):
    client = APIClient()
    refresh = RefreshToken.for_user(customer)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


@pytest.fixture
def dispatcher_client(dispatcher_user):
    client = APIClient()
    refresh = RefreshToken.for_user(dispatcher_user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


@pytest.fixture
def order_form():
    return {
        "pickup_location": "12 Marina Road",
        "delivery_location": "4 Allen Avenue",
        "pickup_date": "2026-03-02",
        "pickup_time": "10:00",
        "delivery_date": "2026-03-02",
        "delivery_time": "15:00",
        "receiver_name": "Chidi Okafor",
        "receiver_phone": "+2348100000001",
        "weight": "4",
        "description": "Two boxes of books",
    }
