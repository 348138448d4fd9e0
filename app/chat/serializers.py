"""
Serializers for the chat API.

Serializer Hierarchy:
    MessageSerializer: Message with stored key and resolved attachment_url
    MessageCreateSerializer: Send a message
    MarkReadSerializer: Explicit read request
    ThreadSummarySerializer: One dispatcher inbox row

Design Decisions:
    - attachment always carries the stored key; attachment_url carries the
      client-usable URL. The key is never overwritten by a URL.
    - Input serializers only check shape; content rules (non-empty, not to
      self) live in MessageService so every caller gets them.
"""

from __future__ import annotations

from rest_framework import serializers

from chat.models import Message
from chat.services import MessageService
from orders.models import Order


class MessageSerializer(serializers.ModelSerializer):
    attachment_url = serializers.SerializerMethodField()
    order_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = Message
        fields = [
            "id",
            "sender_identity",
            "receiver_identity",
            "text",
            "attachment",
            "attachment_url",
            "status",
            "is_admin",
            "order_id",
            "timestamp",
            "read_at",
        ]
        read_only_fields = fields

    def get_attachment_url(self, obj: Message) -> str:
        """Pre-resolved by ConversationService, or resolved here for single messages."""
        url = getattr(obj, "attachment_url", None)
        if url is not None:
            return url
        if not obj.attachment:
            return ""
        from media.services import AttachmentStorageService

        return AttachmentStorageService.resolve(obj.attachment)


class MessageCreateSerializer(serializers.Serializer):
    text = serializers.CharField(required=False, allow_blank=True, default="", trim_whitespace=True)
    attachment = serializers.CharField(
        required=False,
        allow_blank=True,
        default="",
        help_text="Storage key, URL, or base64 / data-URI image to upload",
    )
    receiver = serializers.EmailField(
        required=False,
        allow_blank=True,
        default="",
        help_text="Customer to write to (dispatcher only)",
    )
    order = serializers.PrimaryKeyRelatedField(
        queryset=Order.objects.all(), required=False, allow_null=True, default=None
    )


class MarkReadSerializer(serializers.Serializer):
    direction = serializers.ChoiceField(choices=MessageService.DIRECTIONS)
    counterpart = serializers.EmailField(required=False, allow_blank=True, default="")


class ThreadSummarySerializer(serializers.Serializer):
    counterpart_identity = serializers.EmailField()
    display_name = serializers.CharField()
    avatar_url = serializers.CharField(allow_blank=True)
    last_message = serializers.CharField(allow_blank=True)
    last_message_time = serializers.DateTimeField()
    attachment_url = serializers.CharField(allow_blank=True)
    unread_count = serializers.IntegerField()
    order_description = serializers.CharField(allow_null=True)
    order_status = serializers.CharField(allow_null=True)
