"""Django admin configuration for chat models."""

from django.contrib import admin

from chat.models import Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Read-mostly view of the message log for support staff."""

    list_display = [
        "id",
        "sender_identity",
        "receiver_identity",
        "status",
        "is_admin",
        "timestamp",
    ]
    list_filter = ["status", "is_admin"]
    search_fields = ["sender_identity", "receiver_identity", "text"]
    readonly_fields = ["timestamp", "read_at", "created_at", "updated_at"]
    raw_id_fields = ["order"]
    date_hierarchy = "timestamp"
    ordering = ["-timestamp", "-id"]
