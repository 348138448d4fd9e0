"""
Serializers for the orders API.

- OrderSerializer: Order with stored key and resolved attachment_url (read)
- OrderCreateSerializer: Customer order form
- OrderStatusSerializer: Dispatcher status change
- PendingOrderSerializer: Dispatch queue row with customer details
"""

from __future__ import annotations

from rest_framework import serializers

from orders.models import Order, OrderStatus


class OrderSerializer(serializers.ModelSerializer):
    attachment_url = serializers.SerializerMethodField()
    customer_email = serializers.EmailField(source="customer.email", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "customer_email",
            "pickup_location",
            "delivery_location",
            "pickup_date",
            "pickup_time",
            "delivery_date",
            "delivery_time",
            "receiver_name",
            "receiver_phone",
            "weight",
            "description",
            "attachment",
            "attachment_url",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_attachment_url(self, obj: Order) -> str:
        url = getattr(obj, "attachment_url", None)
        if url is not None:
            return url
        if not obj.attachment:
            return ""
        from media.services import AttachmentStorageService

        return AttachmentStorageService.resolve(obj.attachment)


class OrderCreateSerializer(serializers.Serializer):
    pickup_location = serializers.CharField(max_length=255)
    delivery_location = serializers.CharField(max_length=255)
    pickup_date = serializers.CharField(max_length=32)
    pickup_time = serializers.CharField(max_length=32)
    delivery_date = serializers.CharField(max_length=32)
    delivery_time = serializers.CharField(max_length=32)
    receiver_name = serializers.CharField(max_length=150)
    receiver_phone = serializers.CharField(max_length=32)
    weight = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    description = serializers.CharField()
    attachment = serializers.CharField(
        required=False,
        allow_blank=True,
        default="",
        help_text="Package photo: storage key, URL, or base64 / data-URI image",
    )


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)


class PendingOrderSerializer(serializers.Serializer):
    order = OrderSerializer()
    customer_name = serializers.CharField()
    customer_email = serializers.EmailField()
    avatar_url = serializers.CharField(allow_blank=True)
    attachment_url = serializers.CharField(allow_blank=True)
    order_message = serializers.CharField()
