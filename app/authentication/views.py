"""
Authentication views.

- LoginView: Email/password login returning a JWT pair with email/role claims
- MeView: Current user and profile (GET/PATCH)

Token refresh is simplejwt's TokenRefreshView, wired in urls.py.
"""

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView

from authentication.serializers import ProfileUpdateSerializer, UserSerializer
from authentication.services import ProfileService
from authentication.tokens import DispatchTokenObtainPairSerializer


@extend_schema(
    summary="Log in",
    description="Exchange email and password for an access/refresh token pair.",
    tags=["Auth"],
)
class LoginView(TokenObtainPairView):
    serializer_class = DispatchTokenObtainPairSerializer


class MeView(APIView):
    """
    API view for the authenticated user.

    GET: Current user with profile and resolved avatar URL
    PATCH: Update name, phone or avatar

    URL: /api/v1/auth/me/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get current user",
        tags=["Auth"],
        responses={200: UserSerializer},
    )
    def get(self, request):
        return Response(UserSerializer(request.user).data)

    @extend_schema(
        summary="Update current user's profile",
        tags=["Auth"],
        request=ProfileUpdateSerializer,
        responses={200: UserSerializer},
    )
    def patch(self, request):
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ProfileService.update_profile(request.user, serializer.validated_data)
        request.user.refresh_from_db()
        return Response(UserSerializer(request.user).data)
