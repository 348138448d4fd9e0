"""
Chat models for the customer/dispatcher message log.

Models:
    Message: One message between a customer and the dispatcher

Design Decisions:
    - Participants are email identities, not user FKs; the dispatcher is a
      configured identity and may not have a User row
    - The log is append-mostly: only status and read_at change after insert,
      and only forward (sent -> delivered -> read)
    - timestamp is the ordering key; id breaks ties between equal timestamps
    - attachment is an opaque storage key or external URL, resolved to a
      client URL only at read time
"""

from __future__ import annotations

from django.db import models
from django.db.models import F, Q
from django.utils import timezone

from chat.managers import MessageQuerySet
from core.models import BaseModel


class MessageStatus(models.TextChoices):
    """
    Delivery status, in increasing order.

    SENT: Persisted; receiver not known to have seen it
    DELIVERED: Receiver was active or has since fetched the conversation
    READ: Receiver replied or explicitly marked it read
    """

    SENT = "sent", "Sent"
    DELIVERED = "delivered", "Delivered"
    READ = "read", "Read"


class Message(BaseModel):
    """
    A message between a customer and the dispatcher.

    Fields:
        sender_identity / receiver_identity: Normalized email identities
        text: Body; may be empty only when attachment is set
        attachment: Storage key or external URL ("" if none)
        status: Delivery status (see MessageStatus)
        is_admin: Sender is the dispatcher identity
        order: Order this message was created for, if any
        timestamp: Creation time, never modified
        read_at: When the message entered the read state
    """

    sender_identity = models.CharField(
        max_length=254,
        db_index=True,
        help_text="Normalized email of the sender",
    )

    receiver_identity = models.CharField(
        max_length=254,
        help_text="Normalized email of the receiver",
    )

    text = models.TextField(blank=True, default="")

    attachment = models.CharField(
        max_length=512,
        blank=True,
        default="",
        help_text="Storage key or external URL of an image",
    )

    status = models.CharField(
        max_length=10,
        choices=MessageStatus.choices,
        default=MessageStatus.SENT,
    )

    is_admin = models.BooleanField(
        default=False,
        help_text="True if sent by the dispatcher",
    )

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="messages",
    )

    timestamp = models.DateTimeField(default=timezone.now, db_index=True)

    read_at = models.DateTimeField(null=True, blank=True)

    objects = MessageQuerySet.as_manager()

    class Meta:
        db_table = "chat_message"
        ordering = ["timestamp", "id"]
        indexes = [
            # Fetch-time delivered sync and unread lookups
            models.Index(
                fields=["receiver_identity", "status"],
                name="chat_msg_receiver_status_idx",
            ),
            models.Index(
                fields=["sender_identity", "-timestamp"],
                name="chat_msg_sender_recent_idx",
            ),
            models.Index(
                fields=["receiver_identity", "-timestamp"],
                name="chat_msg_receiver_recent_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~Q(sender_identity=F("receiver_identity")),
                name="chat_msg_distinct_parties",
            ),
            models.CheckConstraint(
                condition=~Q(text="") | ~Q(attachment=""),
                name="chat_msg_has_content",
            ),
        ]

    def __str__(self) -> str:
        preview = self.text[:50] + "..." if len(self.text) > 50 else self.text
        return f"{self.sender_identity} -> {self.receiver_identity}: {preview} [{self.status}]"
