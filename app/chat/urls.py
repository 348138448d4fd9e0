"""
URL configuration for chat API.

All URLs are prefixed with /api/v1/chat/ in the main URL configuration.
"""

from django.urls import path

from chat.views import MarkReadView, MessageListCreateView, ThreadListView

app_name = "chat"

urlpatterns = [
    path("messages/", MessageListCreateView.as_view(), name="messages"),
    path("messages/read/", MarkReadView.as_view(), name="messages-read"),
    path("threads/", ThreadListView.as_view(), name="threads"),
]
