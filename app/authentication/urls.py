"""
URL configuration for authentication app.

URL structure:
    /api/v1/auth/login/            - JWT pair for email/password
    /api/v1/auth/token/refresh/    - Refresh an access token
    /api/v1/auth/me/               - Current user (GET/PATCH)
"""

from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from authentication.views import LoginView, MeView

app_name = "authentication"

urlpatterns = [
    path("login/", LoginView.as_view(), name="login"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    path("me/", MeView.as_view(), name="me"),
]
