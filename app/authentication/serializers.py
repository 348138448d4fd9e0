"""
Serializers for authentication models.

- UserSerializer: Current user with embedded profile (read)
- ProfileUpdateSerializer: Editable profile fields plus a raw avatar payload
"""

from rest_framework import serializers

from authentication.models import Profile, User
from media.services import AttachmentStorageService


class ProfileSerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(read_only=True)
    avatar_url = serializers.SerializerMethodField()

    class Meta:
        model = Profile
        fields = [
            "first_name",
            "last_name",
            "full_name",
            "phone",
            "avatar_key",
            "avatar_url",
        ]
        read_only_fields = fields

    def get_avatar_url(self, obj):
        """Presigned (or pass-through) URL for the stored avatar key."""
        return AttachmentStorageService.resolve(obj.avatar_key)


class UserSerializer(serializers.ModelSerializer):
    """Current user, as returned by /api/v1/auth/me/."""

    profile = ProfileSerializer(read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "role", "is_verified", "date_joined", "profile"]
        read_only_fields = fields


class ProfileUpdateSerializer(serializers.Serializer):
    """
    Partial profile update.

    ``avatar`` accepts an external URL or raw image data (base64 or data URI);
    raw data is uploaded and replaced by its storage key.
    """

    first_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    avatar = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)
