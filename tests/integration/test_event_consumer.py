"""
Integration tests for consuming domain events from RabbitMQ.
"""

import uuid

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from core.domain.value_objects import utcnow
from core.infrastructure.models import AuditLog
from core.infrastructure.rabbitmq_event_bus import RabbitMQEventBus, message_body
from licenses.domain.events import LicenseExpired


class FakeMessage:
    """Stands in for a kombu message."""

    def __init__(self):
        self.acked = False
        self.requeued = None

    def ack(self):
        self.acked = True

    def reject(self, requeue=False):
        self.requeued = requeue


@pytest.mark.django_db
class TestEventConsumer:
    """Messages taken off the queue reach the registered handlers."""

    def test_message_is_audited_and_acked(self):
        event = LicenseExpired(license_id=uuid.uuid4(), expires_at=utcnow())
        message = FakeMessage()

        RabbitMQEventBus()._handle_message(message_body(event), message)

        entry = AuditLog.objects.get(event_id=event.event_id)
        assert entry.action == "LicenseExpired"
        assert entry.entity_type == "license"
        assert entry.entity_id == str(event.license_id)
        assert message.acked is True

    def test_redelivered_message_is_audited_once(self):
        event = LicenseExpired(license_id=uuid.uuid4(), expires_at=utcnow())
        bus = RabbitMQEventBus()

        bus._handle_message(message_body(event), FakeMessage())
        bus._handle_message(message_body(event), FakeMessage())

        assert AuditLog.objects.filter(event_id=event.event_id).count() == 1


class TestConsumeEventsCommand:
    """Tests for the consume_events management command."""

    def test_requires_rabbitmq_bus(self):
        with pytest.raises(CommandError):
            call_command("consume_events")

    def test_consumes_named_queue(self, monkeypatch):
        consumed = []
        bus = RabbitMQEventBus()
        monkeypatch.setattr(bus, "consume_events", lambda queue_name: consumed.append(queue_name))
        monkeypatch.setattr("core.management.commands.consume_events.event_bus", bus)

        call_command("consume_events", "--queue", "audit_queue")

        assert consumed == ["audit_queue"]
