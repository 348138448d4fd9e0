"""
Order services.

- OrderService: order lifecycle for customers and dispatch staff
- OrderDirectory: latest-order lookups used by the chat inbox

Placing an order writes to the chat log too: the customer's receipt to the
dispatcher and the dispatcher's automatic reply, both linked to the order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.conf import settings
from django.db.models import OuterRef, Subquery
from django.utils import timezone

from authentication.managers import normalize_identity
from core.exceptions import NotFoundError, PermissionDeniedError
from core.services import BaseService, ServiceResult
from orders.models import Order, OrderStatus

if TYPE_CHECKING:
    from collections.abc import Iterable

    from authentication.models import User

RECEIPT_TEMPLATE = (
    "📦 **NEW ORDER LOGGED**\n\n"
    "📝 DESC: {description}\n"
    "📍 FROM: {pickup_location}\n"
    "🗓️ Pickup: {pickup_date} @ {pickup_time}\n\n"
    "🏁 TO: {delivery_location}\n\n"
    "👤 RECEIVER: {receiver_name}\n"
    "📞 CONTACT: {receiver_phone}\n"
    "⚖️ WEIGHT: {weight}kg\n\n"
    "Status: Awaiting Dispatcher."
)

AUTO_REPLY_TEMPLATE = (
    'Hello {first_name}! 👋 We\'ve received your order for "{description}". '
    "{company} will contact you shortly to confirm pickup."
)

REQUIRED_FIELDS = (
    "pickup_location",
    "delivery_location",
    "pickup_date",
    "pickup_time",
    "delivery_date",
    "delivery_time",
    "receiver_name",
    "receiver_phone",
    "description",
)


@dataclass(frozen=True)
class OrderInfo:
    """Inbox view of a customer's latest order. attachment_key is unresolved."""

    description: str
    status: str
    attachment_key: str


class OrderDirectory:
    """
    Latest order per customer identity, ordered by creation time.

    Usage:
        info = OrderDirectory.latest_for_identity("ada@example.com")
        if info:
            print(info.description, info.status)
    """

    @staticmethod
    def _to_info(order: Order) -> OrderInfo:
        return OrderInfo(
            description=order.description,
            status=order.status,
            attachment_key=order.attachment,
        )

    @classmethod
    def latest_for_identity(cls, identity: str) -> OrderInfo | None:
        order = (
            Order.objects.filter(customer__email=normalize_identity(identity))
            .order_by("-created_at", "-id")
            .first()
        )
        return cls._to_info(order) if order else None

    @classmethod
    def latest_for_identities(cls, identities: Iterable[str]) -> dict[str, OrderInfo]:
        """Batch variant; identities without orders are absent."""
        emails = {normalize_identity(identity) for identity in identities}
        emails.discard("")
        if not emails:
            return {}

        newest_pk = (
            Order.objects.filter(customer=OuterRef("customer"))
            .order_by("-created_at", "-id")
            .values("pk")[:1]
        )
        orders = (
            Order.objects.filter(customer__email__in=emails, pk=Subquery(newest_pk))
            .select_related("customer")
        )
        return {order.customer.email: cls._to_info(order) for order in orders}


class OrderService(BaseService):
    """
    Methods:
        create_order: Customer places an order (writes order + chat messages)
        update_status: Dispatcher moves an order along
        list_for_customer: A customer's orders, newest first
        list_pending: Pending orders for dispatch, newest first
    """

    @classmethod
    def create_order(cls, customer: User, data: dict) -> ServiceResult[Order]:
        """
        Place an order for customer.

        Steps:
            1. Upload the package photo (raw data) if one was sent
            2. Mark the dispatcher's unread messages to the customer read
            3. Create the order, the receipt and the auto-reply together
            4. Alert the dispatcher by push (best effort)

        Error codes:
            MISSING_FIELDS: A required order field is empty
        """
        from chat.constants import NEW_ORDER_TITLE, get_dispatcher_identity, local_part
        from chat.models import Message, MessageStatus
        from chat.services import ReadSyncService
        from media.services import AttachmentStorageService
        from notifications.services import PushService

        logger = cls.get_logger()

        validation = cls.validate_required(
            {name: str(data.get(name) or "") for name in REQUIRED_FIELDS},
            error_code="MISSING_FIELDS",
        )
        if validation:
            return validation

        customer_identity = normalize_identity(customer.email)
        dispatcher = get_dispatcher_identity()

        attachment = (data.get("attachment") or "").strip()
        if attachment and AttachmentStorageService.is_raw_payload(attachment):
            attachment = AttachmentStorageService.store(
                attachment, f"packages_{local_part(customer_identity)}"
            )
            if not attachment:
                logger.warning("Package photo for %s dropped after failed upload", customer_identity)

        fields = {name: str(data[name]).strip() for name in REQUIRED_FIELDS}
        fields["weight"] = str(data.get("weight") or "").strip() or "N/A"

        with cls.atomic():
            ReadSyncService.sync_read_on_reply(reader=customer_identity, counterpart=dispatcher)

            order = Order.objects.create(
                customer=customer,
                attachment=attachment,
                status=OrderStatus.PENDING,
                **fields,
            )

            now = timezone.now()
            Message.objects.create(
                sender_identity=customer_identity,
                receiver_identity=dispatcher,
                text=RECEIPT_TEMPLATE.format(**fields),
                attachment=attachment,
                status=MessageStatus.SENT,
                is_admin=False,
                order=order,
                timestamp=now,
            )
            Message.objects.create(
                sender_identity=dispatcher,
                receiver_identity=customer_identity,
                text=AUTO_REPLY_TEMPLATE.format(
                    first_name=cls._first_name(customer),
                    description=fields["description"],
                    company=settings.DISPATCH_COMPANY_NAME,
                ),
                status=MessageStatus.SENT,
                is_admin=True,
                order=order,
                timestamp=now,
            )

        logger.info("Order %s placed by %s", order.pk, customer_identity)

        PushService.notify(
            target=dispatcher,
            title=NEW_ORDER_TITLE,
            body=f"{cls._full_name(customer) or 'Customer'} placed an order: {fields['description']}",
            from_identity=customer_identity,
        )
        return ServiceResult.success(order)

    @classmethod
    def update_status(cls, requester: User, order_id: int, status: str) -> Order:
        """
        Set an order's status. Dispatch staff only.

        Raises:
            PermissionDeniedError: Requester is not an admin
            NotFoundError: No order with order_id
        """
        from chat.permissions import is_admin_user

        if not is_admin_user(requester):
            raise PermissionDeniedError(
                "Only dispatch staff can change order status", error_code="ADMIN_REQUIRED"
            )

        order = Order.objects.filter(pk=order_id).first()
        if order is None:
            raise NotFoundError(
                "Order not found", error_code="ORDER_NOT_FOUND", details={"order_id": order_id}
            )

        previous = order.status
        order.status = status
        order.save(update_fields=["status", "updated_at"])
        cls.get_logger().info("Order %s moved from %s to %s", order.pk, previous, status)
        return order

    @classmethod
    def list_for_customer(cls, customer: User) -> list[Order]:
        """Customer's orders, newest first, each with an ``attachment_url``."""
        from chat.aggregation import resolve_concurrently
        from media.services import AttachmentStorageService

        orders = list(Order.objects.filter(customer=customer).order_by("-created_at", "-id"))
        urls = resolve_concurrently(AttachmentStorageService, [o.attachment for o in orders])
        for order in orders:
            order.attachment_url = urls.get(order.attachment, "")
        return orders

    @classmethod
    def list_pending(cls) -> list[dict]:
        """
        Pending orders for dispatch staff, newest first.

        Each entry carries the order plus the customer's name, email and
        resolved avatar and package photo URLs.
        """
        from chat.aggregation import resolve_concurrently
        from media.services import AttachmentStorageService

        orders = list(
            Order.objects.filter(status=OrderStatus.PENDING)
            .select_related("customer", "customer__profile")
            .order_by("-created_at", "-id")
        )

        keys = []
        for order in orders:
            keys.append(order.attachment)
            keys.append(cls._avatar_key(order.customer))
        urls = resolve_concurrently(AttachmentStorageService, keys)

        return [
            {
                "order": order,
                "customer_name": cls._full_name(order.customer) or order.customer.email,
                "customer_email": order.customer.email,
                "avatar_url": urls.get(cls._avatar_key(order.customer), ""),
                "attachment_url": urls.get(order.attachment, ""),
                "order_message": f"Package for {order.receiver_name} ({order.weight}kg)",
            }
            for order in orders
        ]

    @staticmethod
    def _profile(user: User):
        return getattr(user, "profile", None)

    @classmethod
    def _full_name(cls, user: User) -> str:
        profile = cls._profile(user)
        return profile.full_name if profile else ""

    @classmethod
    def _first_name(cls, user: User) -> str:
        profile = cls._profile(user)
        return (profile.first_name if profile else "") or "there"

    @classmethod
    def _avatar_key(cls, user: User) -> str:
        profile = cls._profile(user)
        return profile.avatar_key if profile else ""
