"""
URL configuration for the dispatch backend.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/auth/                  - Authentication endpoints
        login/                     - Email/password login (JWT pair)
        token/refresh/             - Refresh an access token
        me/                        - Current user and profile
    /api/v1/chat/                  - Customer/dispatcher chat
        messages/                  - Fetch conversation (GET) / send (POST)
        messages/read/             - Mark a conversation as read
        threads/                   - Dispatcher inbox (admin only)
    /api/v1/orders/                - Orders
        (root)                     - List own orders (GET) / place order (POST)
        pending/                   - Dispatch queue of pending orders (admin only)
        {id}/status/               - Update order status (admin only)
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

api_v1_patterns = [
    path("auth/", include("authentication.urls")),
    path("chat/", include("chat.urls")),
    path("orders/", include("orders.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("admin/", admin.site.urls),
    path("health/", health_check, name="health_check"),
    path("api/v1/", include(api_v1_patterns)),
]

admin.site.site_header = "Dispatch Admin"
admin.site.site_title = "Dispatch Admin"
admin.site.index_title = "Orders and conversations"
