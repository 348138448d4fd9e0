"""
Tests for order services.

These tests verify:
- create_order writes the order, the receipt and the auto-reply together
- Placing an order reads the dispatcher's pending messages to the customer
- Package photo upload and degradation
- Status updates, customer listings and the pending queue
- OrderDirectory latest-order lookups
"""

from unittest.mock import patch

import pytest

from authentication.tests.factories import UserFactory
from chat.models import Message, MessageStatus
from chat.tests.factories import DISPATCHER, MessageFactory
from core.exceptions import NotFoundError, PermissionDeniedError
from orders.models import Order, OrderStatus
from orders.services import OrderDirectory, OrderInfo, OrderService
from orders.tests.factories import OrderFactory

RAW_PHOTO = "/9j/" + "B" * 300


@pytest.mark.django_db
class TestCreateOrder:
    @patch("notifications.services.PushService.notify")
    def test_creates_order_and_linked_messages(self, mock_notify, customer, order_form):
        result = OrderService.create_order(customer, order_form)

        assert result.success
        order = result.data
        assert order.status == OrderStatus.PENDING
        assert order.customer == customer

        receipt, reply = Message.objects.filter(order=order).order_by("id")
        assert receipt.sender_identity == "ada@example.com"
        assert receipt.receiver_identity == DISPATCHER
        assert receipt.is_admin is False
        assert "📝 DESC: Two boxes of books" in receipt.text
        assert "⚖️ WEIGHT: 4kg" in receipt.text
        assert reply.sender_identity == DISPATCHER
        assert reply.is_admin is True
        assert reply.text.startswith("Hello Ada! 👋")
        assert receipt.timestamp == reply.timestamp
        assert {receipt.status, reply.status} == {MessageStatus.SENT}

    @patch("notifications.services.PushService.notify")
    def test_alerts_dispatcher(self, mock_notify, customer, order_form):
        OrderService.create_order(customer, order_form)

        mock_notify.assert_called_once_with(
            target=DISPATCHER,
            title="📦 New Order Alert",
            body="Ada Obi placed an order: Two boxes of books",
            from_identity="ada@example.com",
        )

    def test_greeting_falls_back_without_first_name(self, db, order_form):
        nameless = UserFactory(email="nameless@example.com")

        OrderService.create_order(nameless, order_form)

        reply = Message.objects.get(is_admin=True)
        assert reply.text.startswith("Hello there! 👋")

    def test_reads_pending_dispatcher_messages(self, customer, order_form):
        pending = MessageFactory(customer="ada@example.com", from_dispatcher=True)

        OrderService.create_order(customer, order_form)

        assert Message.objects.get(pk=pending.pk).status == MessageStatus.READ

    def test_missing_weight_defaults_to_na(self, customer, order_form):
        order_form["weight"] = ""

        order = OrderService.create_order(customer, order_form).data

        assert order.weight == "N/A"

    def test_missing_fields_fail_without_writes(self, customer, order_form):
        order_form["receiver_phone"] = " "

        result = OrderService.create_order(customer, order_form)

        assert not result.success
        assert result.error_code == "MISSING_FIELDS"
        assert "receiver_phone" in result.errors
        assert not Order.objects.exists()
        assert not Message.objects.exists()

    @patch("media.services.AttachmentStorageService.store", return_value="packages_ada/1.jpg")
    def test_raw_photo_is_uploaded(self, mock_store, customer, order_form):
        order_form["attachment"] = RAW_PHOTO

        order = OrderService.create_order(customer, order_form).data

        mock_store.assert_called_once_with(RAW_PHOTO, "packages_ada")
        assert order.attachment == "packages_ada/1.jpg"
        assert Message.objects.get(order=order, is_admin=False).attachment == "packages_ada/1.jpg"

    @patch("media.services.AttachmentStorageService.store", return_value="")
    def test_failed_upload_still_creates_order(self, mock_store, customer, order_form):
        order_form["attachment"] = RAW_PHOTO

        result = OrderService.create_order(customer, order_form)

        assert result.success
        assert result.data.attachment == ""


@pytest.mark.django_db
class TestUpdateStatus:
    def test_admin_updates_status(self, dispatcher_user):
        order = OrderFactory()

        updated = OrderService.update_status(dispatcher_user, order.pk, OrderStatus.IN_TRANSIT)

        assert updated.status == OrderStatus.IN_TRANSIT
        assert Order.objects.get(pk=order.pk).status == OrderStatus.IN_TRANSIT

    def test_missing_order_raises_not_found(self, dispatcher_user):
        with pytest.raises(NotFoundError):
            OrderService.update_status(dispatcher_user, 424242, OrderStatus.ACCEPTED)

    def test_customer_cannot_update(self, customer):
        order = OrderFactory(customer=customer)

        with pytest.raises(PermissionDeniedError):
            OrderService.update_status(customer, order.pk, OrderStatus.DELIVERED)


@pytest.mark.django_db
class TestListings:
    def test_customer_orders_newest_first_with_urls(self, customer):
        old = OrderFactory(customer=customer, attachment="https://cdn.example.com/p.jpg")
        new = OrderFactory(customer=customer)
        OrderFactory()

        orders = OrderService.list_for_customer(customer)

        assert [o.pk for o in orders] == [new.pk, old.pk]
        assert orders[1].attachment_url == "https://cdn.example.com/p.jpg"
        assert orders[0].attachment_url == ""

    def test_pending_queue(self, customer):
        pending = OrderFactory(customer=customer, receiver_name="Chidi", weight="4")
        OrderFactory(status=OrderStatus.DELIVERED)

        (entry,) = OrderService.list_pending()

        assert entry["order"] == pending
        assert entry["customer_name"] == "Ada Obi"
        assert entry["customer_email"] == "ada@example.com"
        assert entry["order_message"] == "Package for Chidi (4kg)"


@pytest.mark.django_db
class TestOrderDirectory:
    def test_latest_for_identity(self, customer):
        OrderFactory(customer=customer, description="first")
        OrderFactory(customer=customer, description="second", attachment="packages_ada/2.jpg")

        info = OrderDirectory.latest_for_identity("ADA@example.com")

        assert info == OrderInfo(
            description="second", status=OrderStatus.PENDING, attachment_key="packages_ada/2.jpg"
        )

    def test_unknown_identity_returns_none(self, db):
        assert OrderDirectory.latest_for_identity("ghost@example.com") is None

    def test_batch_lookup_omits_customers_without_orders(self, customer):
        other = OrderFactory(description="other").customer
        OrderFactory(customer=customer, description="old")
        OrderFactory(customer=customer, description="new")

        result = OrderDirectory.latest_for_identities(
            ["ada@example.com", other.email, "ghost@example.com"]
        )

        assert set(result) == {"ada@example.com", other.email}
        assert result["ada@example.com"].description == "new"
        assert result[other.email].description == "other"

    def test_batch_lookup_with_no_identities(self, db):
        assert OrderDirectory.latest_for_identities([]) == {}
