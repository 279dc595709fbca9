"""
Unit tests for the in-memory event bus.
"""

import uuid

import pytest

from core.domain.events import EventHandler
from core.domain.value_objects import utcnow
from core.infrastructure.events import InMemoryEventBus
from licenses.domain.events import LicenseExpired


class RecordingHandler(EventHandler):
    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


class FailingHandler(EventHandler):
    async def handle(self, event):
        raise RuntimeError("handler failed")


def _event():
    return LicenseExpired(license_id=uuid.uuid4(), expires_at=utcnow())


@pytest.mark.asyncio
async def test_publish_delivers_to_subscribers():
    bus = InMemoryEventBus()
    handler = RecordingHandler()
    bus.subscribe(LicenseExpired, handler)

    event = _event()
    await bus.publish(event)

    assert handler.events == [event]


@pytest.mark.asyncio
async def test_failing_handler_does_not_fail_publisher():
    bus = InMemoryEventBus()
    recorder = RecordingHandler()
    bus.subscribe(LicenseExpired, FailingHandler())
    bus.subscribe(LicenseExpired, recorder)

    await bus.publish(_event())

    assert len(recorder.events) == 1


@pytest.mark.asyncio
async def test_publish_without_subscribers_is_noop():
    await InMemoryEventBus().publish(_event())


def test_subscribe_ignores_second_handler_of_same_class():
    bus = InMemoryEventBus()
    bus.subscribe(LicenseExpired, RecordingHandler())
    bus.subscribe(LicenseExpired, RecordingHandler())

    assert len(bus.handlers_for("LicenseExpired")) == 1
    assert bus.handlers_for("LicenseIssued") == []


def test_event_to_dict_includes_payload():
    event = _event()
    data = event.to_dict()

    assert data["event_type"] == "LicenseExpired"
    assert data["aggregate_id"] == str(event.license_id)
    assert data["license_id"] == str(event.license_id)
