"""
Tests for authentication API views.

- LoginView: JWT pair carrying email and role claims
- MeView: current user read and profile update
"""

from unittest.mock import patch

from rest_framework import status
from rest_framework_simplejwt.tokens import AccessToken

from authentication.models import Role

LOGIN_URL = "/api/v1/auth/login/"
REFRESH_URL = "/api/v1/auth/token/refresh/"
ME_URL = "/api/v1/auth/me/"


class TestLoginView:
    def test_login_returns_token_pair_with_identity_claims(self, api_client, user):
        response = api_client.post(
            LOGIN_URL, {"email": "ada@example.com", "password": "TestPass123!"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["email"] == "ada@example.com"
        assert response.data["role"] == Role.USER
        token = AccessToken(response.data["access"])
        assert token["email"] == "ada@example.com"
        assert token["role"] == "user"

    def test_login_accepts_mixed_case_email(self, api_client, user):
        response = api_client.post(
            LOGIN_URL, {"email": " ADA@Example.com", "password": "TestPass123!"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK

    def test_admin_token_carries_admin_role(self, api_client, admin_user):
        response = api_client.post(
            LOGIN_URL,
            {"email": "dispatch@example.com", "password": "TestPass123!"},
            format="json",
        )

        assert AccessToken(response.data["access"])["role"] == "admin"

    def test_wrong_password_is_unauthorized(self, api_client, user):
        response = api_client.post(
            LOGIN_URL, {"email": "ada@example.com", "password": "nope"}, format="json"
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_refresh_issues_new_access_token(self, api_client, user):
        login = api_client.post(
            LOGIN_URL, {"email": "ada@example.com", "password": "TestPass123!"}, format="json"
        )

        response = api_client.post(REFRESH_URL, {"refresh": login.data["refresh"]}, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert "access" in response.data


class TestMeView:
    def test_requires_authentication(self, api_client):
        response = api_client.get(ME_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_get_returns_user_and_profile(self, authenticated_client, user):
        response = authenticated_client.get(ME_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["email"] == "ada@example.com"
        assert response.data["role"] == "user"
        assert response.data["profile"]["avatar_url"] == ""

    def test_patch_updates_profile(self, authenticated_client, user):
        response = authenticated_client.patch(
            ME_URL, {"first_name": "Ada", "last_name": "Obi"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["profile"]["full_name"] == "Ada Obi"

    def test_patch_resolves_uploaded_avatar(self, authenticated_client, user):
        with patch(
            "media.services.AttachmentStorageService.store", return_value="avatars_ada/1_ada.jpg"
        ), patch(
            "media.services.AttachmentStorageService.resolve",
            return_value="https://signed.example.com/avatars_ada/1_ada.jpg",
        ):
            response = authenticated_client.patch(ME_URL, {"avatar": "A" * 200}, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["profile"]["avatar_key"] == "avatars_ada/1_ada.jpg"
        assert response.data["profile"]["avatar_url"] == (
            "https://signed.example.com/avatars_ada/1_ada.jpg"
        )
