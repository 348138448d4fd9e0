"""
Tests for authentication services.

- ProfileDirectory: identity lookups with None / omission for unknown users
- ProfileService: profile edits and avatar upload degradation
"""

from unittest.mock import patch

from authentication.services import ProfileDirectory, ProfileInfo, ProfileService
from authentication.tests.factories import ProfileFactory, UserFactory


class TestProfileDirectoryLookupByIdentity:
    def test_returns_full_name_and_avatar_key(self, db):
        user = UserFactory(email="ada@example.com")
        ProfileFactory(user=user, first_name="Ada", last_name="Obi", avatar_key="avatars/ada.jpg")

        info = ProfileDirectory.lookup_by_identity("ada@example.com")

        assert info == ProfileInfo(display_name="Ada Obi", avatar_key="avatars/ada.jpg")

    def test_lookup_normalizes_identity(self, db):
        user = UserFactory(email="ada@example.com")
        ProfileFactory(user=user, first_name="Ada", last_name="")

        info = ProfileDirectory.lookup_by_identity("  ADA@example.com ")

        assert info is not None
        assert info.display_name == "Ada"

    def test_empty_profile_falls_back_to_email(self, db):
        UserFactory(email="ada@example.com")

        info = ProfileDirectory.lookup_by_identity("ada@example.com")

        assert info == ProfileInfo(display_name="ada@example.com", avatar_key="")

    def test_unknown_identity_returns_none(self, db):
        assert ProfileDirectory.lookup_by_identity("ghost@example.com") is None


class TestProfileDirectoryLookupMany:
    def test_returns_mapping_without_unknown_identities(self, db):
        ada = UserFactory(email="ada@example.com")
        ProfileFactory(user=ada, first_name="Ada", last_name="Obi")
        UserFactory(email="ben@example.com")

        result = ProfileDirectory.lookup_many(
            ["ada@example.com", "ben@example.com", "ghost@example.com"]
        )

        assert set(result) == {"ada@example.com", "ben@example.com"}
        assert result["ada@example.com"].display_name == "Ada Obi"
        assert result["ben@example.com"].display_name == "ben@example.com"

    def test_empty_input_skips_query(self, db, django_assert_num_queries):
        with django_assert_num_queries(0):
            assert ProfileDirectory.lookup_many([]) == {}


class TestProfileServiceUpdateProfile:
    def test_updates_editable_fields(self, user):
        profile = ProfileService.update_profile(
            user, {"first_name": "Ada", "last_name": "Obi", "phone": "+2348000000001"}
        )

        profile.refresh_from_db()
        assert profile.full_name == "Ada Obi"
        assert profile.phone == "+2348000000001"

    def test_external_avatar_url_is_stored_as_is(self, user):
        with patch("media.services.AttachmentStorageService.store") as mock_store:
            profile = ProfileService.update_profile(
                user, {"avatar": "https://cdn.example.com/ada.png"}
            )

        mock_store.assert_not_called()
        assert profile.avatar_key == "https://cdn.example.com/ada.png"

    def test_raw_avatar_is_uploaded_and_key_stored(self, user):
        with patch(
            "media.services.AttachmentStorageService.store",
            return_value="avatars_ada/123_ada.jpg",
        ) as mock_store:
            profile = ProfileService.update_profile(user, {"avatar": "A" * 200})

        mock_store.assert_called_once_with("A" * 200, "avatars_ada")
        assert profile.avatar_key == "avatars_ada/123_ada.jpg"

    def test_failed_avatar_upload_keeps_previous_avatar(self, user):
        ProfileFactory(user=user, avatar_key="avatars/old.jpg")

        with patch("media.services.AttachmentStorageService.store", return_value=""):
            profile = ProfileService.update_profile(user, {"avatar": "A" * 200})

        profile.refresh_from_db()
        assert profile.avatar_key == "avatars/old.jpg"
