"""
Tests for DeliveryStateMachine.

These tests verify:
- Status ordering and forward-only transitions
- Bulk advance never regresses a row and is idempotent
- read_at is stamped only when entering read
- Creation status follows receiver presence
"""

from datetime import datetime, timedelta
from datetime import timezone as dt_timezone

import pytest
from django.utils import timezone
from freezegun import freeze_time

from chat.models import Message, MessageStatus
from chat.state_machine import DeliveryStateMachine, can_transition, rank
from chat.tests.factories import MessageFactory


class TestOrdering:
    def test_rank_follows_delivery_order(self):
        assert rank(MessageStatus.SENT) < rank(MessageStatus.DELIVERED) < rank(MessageStatus.READ)

    @pytest.mark.parametrize(
        "current,target,allowed",
        [
            (MessageStatus.SENT, MessageStatus.DELIVERED, True),
            (MessageStatus.SENT, MessageStatus.READ, True),
            (MessageStatus.DELIVERED, MessageStatus.READ, True),
            (MessageStatus.READ, MessageStatus.DELIVERED, False),
            (MessageStatus.DELIVERED, MessageStatus.SENT, False),
            (MessageStatus.READ, MessageStatus.READ, False),
        ],
    )
    def test_can_transition_only_forward(self, current, target, allowed):
        assert can_transition(current, target) is allowed

    def test_unknown_status_is_rejected(self):
        with pytest.raises(ValueError):
            rank("archived")


@pytest.mark.django_db
class TestAdvance:
    def test_moves_rows_behind_target_and_leaves_others(self):
        sent = MessageFactory(status=MessageStatus.SENT)
        delivered = MessageFactory(status=MessageStatus.DELIVERED)
        read = MessageFactory(status=MessageStatus.READ)

        count = DeliveryStateMachine().advance(Message.objects.all(), MessageStatus.DELIVERED)

        assert count == 1
        sent.refresh_from_db()
        delivered.refresh_from_db()
        read.refresh_from_db()
        assert sent.status == MessageStatus.DELIVERED
        assert delivered.status == MessageStatus.DELIVERED
        assert read.status == MessageStatus.READ

    def test_repeating_a_transition_changes_nothing(self):
        MessageFactory.create_batch(3)
        machine = DeliveryStateMachine()

        assert machine.advance(Message.objects.all(), MessageStatus.READ) == 3
        assert machine.advance(Message.objects.all(), MessageStatus.READ) == 0

    def test_entering_read_stamps_read_at(self):
        message = MessageFactory(status=MessageStatus.DELIVERED)

        with freeze_time("2026-03-01 12:00:00"):
            DeliveryStateMachine().advance(Message.objects.filter(pk=message.pk), MessageStatus.READ)

        message.refresh_from_db()
        assert message.read_at == datetime(2026, 3, 1, 12, 0, tzinfo=dt_timezone.utc)

    def test_delivered_does_not_stamp_read_at(self):
        message = MessageFactory()

        DeliveryStateMachine().advance(Message.objects.filter(pk=message.pk), MessageStatus.DELIVERED)

        message.refresh_from_db()
        assert message.read_at is None

    def test_unknown_ids_affect_nothing(self):
        assert DeliveryStateMachine().advance(Message.objects.filter(pk=999999), MessageStatus.READ) == 0

    def test_advancing_to_sent_is_a_noop(self):
        MessageFactory()
        assert DeliveryStateMachine().advance(Message.objects.all(), MessageStatus.SENT) == 0


@pytest.mark.django_db
class TestInitialStatus:
    def test_present_receiver_gets_delivered(self):
        with freeze_time("2026-03-01 12:00:00"):
            MessageFactory(customer="ada@example.com", timestamp=timezone.now() - timedelta(seconds=10))

            status = DeliveryStateMachine().initial_status("ada@example.com")

        assert status == MessageStatus.DELIVERED

    def test_absent_receiver_gets_sent(self):
        assert DeliveryStateMachine().initial_status("ada@example.com") == MessageStatus.SENT
