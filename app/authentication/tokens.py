"""
JWT issuance for the dispatch API.

The access token carries the user's normalized email and role so mobile
clients can tell customer and dispatcher sessions apart without an extra
round trip. Server-side checks always read the role from the database user.
"""

from rest_framework_simplejwt.serializers import TokenObtainPairSerializer


class DispatchTokenObtainPairSerializer(TokenObtainPairSerializer):
    """Token pair serializer adding ``email`` and ``role`` claims."""

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token["email"] = user.email
        token["role"] = user.role
        return token

    def validate(self, attrs):
        # Identities are stored lower-cased; accept any casing at login
        attrs[self.username_field] = (attrs.get(self.username_field) or "").strip().lower()
        data = super().validate(attrs)
        data["email"] = self.user.email
        data["role"] = self.user.role
        return data
