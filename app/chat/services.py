"""
Chat service layer.

Services:
    ReadSyncService: Set-based delivered/read side effects
    MessageService: Send a message, mark a conversation read
    ConversationService: Fetch one customer's conversation

Every client action follows the same order: sync the read state first,
then compute the new message's status, then persist. The read sync must
not see the new row, and the presence check must not be influenced by it.

Identities passed to these services are email strings. Views translate an
admin user into the dispatcher identity before calling in (see
chat.permissions.requester_identity), so "is the requester the dispatcher"
is always answered by chat.constants.is_dispatcher.

Usage:
    from chat.services import ConversationService, MessageService

    message = MessageService.send_message(
        sender="ada@example.com", text="Is my parcel on its way?"
    )
    messages = ConversationService.fetch_conversation("ada@example.com")
    MessageService.mark_read("ada@example.com", direction="customer")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.conf import settings

from authentication.managers import normalize_identity
from chat.aggregation import resolve_concurrently
from chat.constants import (
    CHAT_UPLOAD_FOLDER_PREFIX,
    IMAGE_PLACEHOLDER_TEXT,
    NEW_MESSAGE_TITLE,
    get_conversation_limit,
    get_dispatcher_identity,
    is_dispatcher,
    local_part,
)
from chat.models import Message, MessageStatus
from chat.state_machine import DeliveryStateMachine
from core.exceptions import PermissionDeniedError, ValidationError
from core.services import BaseService

if TYPE_CHECKING:
    from chat.protocols import AttachmentStore, PushSender
    from orders.models import Order


def _default_storage() -> AttachmentStore:
    from media.services import AttachmentStorageService

    return AttachmentStorageService


def _default_push() -> PushSender:
    from notifications.services import PushService

    return PushService


class ReadSyncService(BaseService):
    """
    Bulk status side effects of reading and replying.

    Both operations are idempotent: running them twice changes nothing the
    second time.
    """

    @classmethod
    def sync_delivered_on_fetch(
        cls, identity: str, machine: DeliveryStateMachine | None = None
    ) -> int:
        """Everything addressed to identity that is still sent becomes delivered."""
        machine = machine or DeliveryStateMachine()
        identity = normalize_identity(identity)
        count = machine.advance(
            Message.objects.addressed_to(identity).with_status(MessageStatus.SENT),
            MessageStatus.DELIVERED,
        )
        if count:
            cls.get_logger().info("Fetch by %s delivered %d message(s)", identity, count)
        return count

    @classmethod
    def sync_read_on_reply(
        cls,
        reader: str,
        counterpart: str,
        machine: DeliveryStateMachine | None = None,
    ) -> int:
        """Replying to counterpart reads everything counterpart sent to reader."""
        machine = machine or DeliveryStateMachine()
        reader = normalize_identity(reader)
        counterpart = normalize_identity(counterpart)
        count = machine.advance(
            Message.objects.inbound_from(counterpart, reader).not_read(),
            MessageStatus.READ,
        )
        if count:
            cls.get_logger().info(
                "Reply by %s read %d message(s) from %s", reader, count, counterpart
            )
        return count


class MessageService(BaseService):
    """
    Methods:
        send_message: Validate, store any image, sync, persist, push
        mark_read: Explicitly read a counterpart's messages
    """

    DIRECTION_ADMIN = "admin"
    DIRECTION_CUSTOMER = "customer"
    DIRECTIONS = (DIRECTION_ADMIN, DIRECTION_CUSTOMER)

    @classmethod
    def resolve_receiver(cls, sender: str, receiver: str | None) -> str:
        """
        The dispatcher must name a receiver; customers always write to the
        dispatcher, whatever they pass.
        """
        if is_dispatcher(sender):
            receiver = normalize_identity(receiver)
            if not receiver:
                raise ValidationError(
                    "Dispatcher messages need a receiver",
                    error_code="RECEIVER_REQUIRED",
                    details={"field": "receiver"},
                )
            return receiver
        return get_dispatcher_identity()

    @classmethod
    def send_message(
        cls,
        sender: str,
        text: str = "",
        attachment: str = "",
        receiver: str | None = None,
        order: Order | None = None,
        *,
        storage: AttachmentStore | None = None,
        push: PushSender | None = None,
        machine: DeliveryStateMachine | None = None,
    ) -> Message:
        """
        Send a message between a customer and the dispatcher.

        Args:
            sender: Sender identity (the dispatcher identity for admins)
            text: Message body
            attachment: Storage key, external URL, or raw image data to upload
            receiver: Required when the dispatcher sends; ignored otherwise
            order: Order to link the message to

        Returns:
            The persisted Message

        Raises:
            ValidationError: Missing sender or receiver, sender equals
                receiver, no content, or an image-only message whose upload
                failed. Nothing has been written when this is raised.
            PermissionDeniedError: order belongs to a different customer
                than the one in this conversation.
        """
        storage = storage or _default_storage()
        push = push or _default_push()
        machine = machine or DeliveryStateMachine()
        logger = cls.get_logger()

        sender = normalize_identity(sender)
        if not sender:
            raise ValidationError("Sender identity is required", error_code="MISSING_IDENTITY")

        sender_is_admin = is_dispatcher(sender)
        receiver = cls.resolve_receiver(sender, receiver)
        if sender == receiver:
            raise ValidationError(
                "Cannot send a message to yourself", error_code="SAME_PARTY"
            )

        text = (text or "").strip()
        attachment = (attachment or "").strip()
        if not text and not attachment:
            raise ValidationError(
                "Message must have text or an attachment", error_code="EMPTY_MESSAGE"
            )

        customer = receiver if sender_is_admin else sender
        if order is not None and normalize_identity(order.customer.email) != customer:
            raise PermissionDeniedError(
                "Order belongs to another customer", error_code="ORDER_NOT_OWNED"
            )

        if attachment and storage.is_raw_payload(attachment):
            key = storage.store(attachment, f"{CHAT_UPLOAD_FOLDER_PREFIX}{local_part(customer)}")
            if not key:
                if not text:
                    raise ValidationError(
                        "Image upload failed", error_code="ATTACHMENT_UPLOAD_FAILED"
                    )
                logger.warning("Image from %s dropped after failed upload", sender)
            attachment = key

        if not text:
            text = IMAGE_PLACEHOLDER_TEXT

        with cls.atomic():
            ReadSyncService.sync_read_on_reply(reader=sender, counterpart=receiver, machine=machine)
            status = machine.initial_status(receiver)
            message = Message.objects.create(
                sender_identity=sender,
                receiver_identity=receiver,
                text=text,
                attachment=attachment,
                status=status,
                is_admin=sender_is_admin,
                order=order,
            )

        logger.info("Message %s from %s to %s stored as %s", message.pk, sender, receiver, status)

        title = settings.PUSH_TITLE_FROM_DISPATCHER if sender_is_admin else NEW_MESSAGE_TITLE
        push.notify(target=receiver, title=title, body=text, from_identity=sender)
        return message

    @classmethod
    def mark_read(
        cls,
        requester: str,
        direction: str,
        counterpart: str | None = None,
        machine: DeliveryStateMachine | None = None,
    ) -> int:
        """
        Mark counterpart's messages to requester as read.

        direction "admin": the dispatcher reads a customer's messages; the
        customer must be named. direction "customer": a customer reads the
        dispatcher's messages; counterpart defaults to the dispatcher.

        Returns:
            Number of messages that changed
        """
        requester = normalize_identity(requester)
        counterpart = normalize_identity(counterpart)

        if direction not in cls.DIRECTIONS:
            raise ValidationError(
                f"Unknown direction {direction!r}",
                error_code="INVALID_DIRECTION",
                details={"allowed": list(cls.DIRECTIONS)},
            )
        if not requester:
            raise ValidationError("Requester identity is required", error_code="MISSING_IDENTITY")

        if direction == cls.DIRECTION_ADMIN:
            if not is_dispatcher(requester):
                raise PermissionDeniedError(
                    "Only the dispatcher can mark customer messages read",
                    error_code="ADMIN_REQUIRED",
                )
            if not counterpart:
                raise ValidationError(
                    "Customer identity is required", error_code="MISSING_IDENTITY"
                )
        else:
            counterpart = counterpart or get_dispatcher_identity()

        if counterpart == requester:
            raise ValidationError("Cannot mark your own messages read", error_code="SAME_PARTY")

        machine = machine or DeliveryStateMachine()
        return machine.advance(
            Message.objects.inbound_from(counterpart, requester).not_read(),
            MessageStatus.READ,
        )


class ConversationService(BaseService):
    @classmethod
    def fetch_conversation(
        cls,
        requester: str,
        counterpart: str | None = None,
        *,
        storage: AttachmentStore | None = None,
        limit: int | None = None,
    ) -> list[Message]:
        """
        Latest messages of one conversation, oldest first.

        Fetching first marks everything addressed to the requester that is
        still sent as delivered. The dispatcher may name a customer with
        counterpart; a customer always gets their own conversation and may
        only name themselves.

        Each returned message carries an ``attachment_url`` attribute with
        the resolved attachment ("" if none); ``attachment`` keeps the key.
        """
        storage = storage or _default_storage()
        limit = limit or get_conversation_limit()

        requester = normalize_identity(requester)
        counterpart = normalize_identity(counterpart)
        if not requester:
            raise ValidationError("Requester identity is required", error_code="MISSING_IDENTITY")

        if counterpart and counterpart != requester and not is_dispatcher(requester):
            raise PermissionDeniedError(
                "Only the dispatcher can open another user's conversation",
                error_code="ADMIN_REQUIRED",
            )
        target = counterpart or requester

        ReadSyncService.sync_delivered_on_fetch(requester)

        messages = list(Message.objects.involving(target).newest_first()[:limit])
        messages.reverse()

        urls = resolve_concurrently(storage, [m.attachment for m in messages])
        for message in messages:
            message.attachment_url = urls.get(message.attachment, "")

        cls.get_logger().debug(
            "Fetched %d message(s) for %s (requested by %s)", len(messages), target, requester
        )
        return messages
