"""
Chat application configuration.

This app provides the customer/dispatcher message log with:
- Delivery states (sent, delivered, read) advanced in bulk
- A message-activity presence heuristic
- The dispatcher inbox aggregation
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"
