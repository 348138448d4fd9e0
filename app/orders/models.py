"""
Order models.

Models:
    Order: A customer's pickup-and-delivery request

Design Decisions:
    - Dates and times are stored as the customer entered them; the mobile
      app owns their format and dispatch staff read them as-is
    - ``attachment`` holds a storage key (or external URL) of the package
      photo; it is resolved to a URL only when serialized
    - Status values are the labels the mobile app displays
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from core.models import BaseModel


class OrderStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    ACCEPTED = "Accepted", "Accepted"
    DECLINED = "Declined", "Declined"
    IN_TRANSIT = "In Transit", "In Transit"
    DELIVERED = "Delivered", "Delivered"


class Order(BaseModel):
    """
    A delivery request placed by a customer.

    Fields:
        customer: User who placed the order
        pickup_location / delivery_location: Free-form addresses
        pickup_date / pickup_time / delivery_date / delivery_time: As entered
        receiver_name / receiver_phone: Who receives the package
        weight: Declared weight in kg ("N/A" when not given)
        description: What is being sent
        attachment: Storage key of the package photo ("" if none)
        status: Dispatch progress
    """

    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="orders",
        help_text="Customer who placed this order",
    )

    pickup_location = models.CharField(max_length=255)
    delivery_location = models.CharField(max_length=255)
    pickup_date = models.CharField(max_length=32)
    pickup_time = models.CharField(max_length=32)
    delivery_date = models.CharField(max_length=32)
    delivery_time = models.CharField(max_length=32)

    receiver_name = models.CharField(max_length=150)
    receiver_phone = models.CharField(max_length=32)

    weight = models.CharField(max_length=32, blank=True, default="N/A")
    description = models.TextField(help_text="Package description")

    attachment = models.CharField(
        max_length=512,
        blank=True,
        default="",
        help_text="Storage key (or external URL) of the package photo",
    )

    status = models.CharField(
        max_length=16,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
        db_index=True,
    )

    class Meta:
        db_table = "orders_order"
        ordering = ["-created_at", "-id"]
        indexes = [
            # Latest order per customer (inbox join, customer dashboard)
            models.Index(
                fields=["customer", "-created_at"],
                name="orders_customer_recent_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"Order {self.pk} ({self.status}) for {self.customer_id}"
