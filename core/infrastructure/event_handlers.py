"""
Event handlers for domain events.

These handlers process domain events for side effects like audit logging
and user notifications.
"""

import logging
from typing import Optional

from asgiref.sync import sync_to_async

from core.conf import licensing_setting
from core.domain.events import DomainEvent, EventHandler
from core.infrastructure.notifications import MESSAGE_BUILDERS
from license_requests.domain.events import (
    LicenseRequestApproved,
    LicenseRequestCreated,
    LicenseRequestDeleted,
    LicenseRequestEdited,
    LicenseRequestRejected,
)
from licenses.domain.events import LicenseDeleted, LicenseExpired, LicenseIssued, LicenseUpdated
from payments.domain.events import PaymentRejected, PaymentSubmitted, PaymentVerified

logger = logging.getLogger(__name__)

AUDITED_EVENTS = (
    LicenseRequestCreated,
    LicenseRequestEdited,
    LicenseRequestApproved,
    LicenseRequestRejected,
    LicenseRequestDeleted,
    PaymentSubmitted,
    PaymentVerified,
    PaymentRejected,
    LicenseIssued,
    LicenseUpdated,
    LicenseDeleted,
    LicenseExpired,
)

NOTIFIED_EVENTS = (LicenseIssued, PaymentVerified, PaymentRejected)

# Longest prefix first: LicenseRequest* must not match License.
ENTITY_PREFIXES = (
    ("LicenseRequest", "license_request"),
    ("Payment", "payment"),
    ("License", "license"),
)


def entity_type_for(event_type: str) -> str:
    """Map an event type name to the audited entity type."""
    for prefix, entity_type in ENTITY_PREFIXES:
        if event_type.startswith(prefix):
            return entity_type
    return "event"


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes every domain event to the AuditLog table. Keyed on event_id, so
    replaying an event from the broker does not duplicate the entry.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        data = event.to_dict()
        actor = data.get("actor_id")
        await self._write(
            event_id=event.event_id,
            defaults={
                "entity_type": entity_type_for(event.event_type),
                "entity_id": str(event.aggregate_id),
                "action": event.event_type,
                "changes": data,
                "actor": "" if actor is None else str(actor),
                "occurred_at": event.occurred_at,
            },
        )
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
            },
        )

    @sync_to_async
    def _write(self, event_id, defaults) -> None:
        from core.infrastructure.models import AuditLog

        AuditLog.objects.get_or_create(event_id=event_id, defaults=defaults)


class NotificationEventHandler(EventHandler):
    """
    Event handler for user notifications.

    Emails the affected user when a license is issued or a payment is
    decided. Delivery happens in a Celery task.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for notifications.

        Args:
            event: Domain event
        """
        if not licensing_setting("NOTIFICATIONS_ENABLED"):
            return
        builder = MESSAGE_BUILDERS.get(event.event_type)
        if builder is None:
            return
        data = event.to_dict()
        user_id = data.get("recipient_user_id")
        if user_id is None:
            logger.debug("No recipient for %s, skipping notification", event.event_type)
            return
        recipient = await self._email_for(user_id)
        if not recipient:
            logger.info(
                "Recipient has no email address, skipping notification",
                extra={"event_type": event.event_type, "user_id": user_id},
            )
            return

        subject, body = builder(data)
        await self._enqueue(recipient, subject, body)

    @sync_to_async
    def _email_for(self, user_id) -> Optional[str]:
        from django.contrib.auth import get_user_model

        return (
            get_user_model()
            .objects.filter(id=user_id)
            .values_list("email", flat=True)
            .first()
        )

    @sync_to_async
    def _enqueue(self, recipient: str, subject: str, body: str) -> None:
        from core.tasks import send_notification_email_task

        send_notification_email_task.delay(recipient, subject, body)


# Register event handlers
def register_event_handlers():
    """Register all event handlers with the event bus."""
    from core.infrastructure.events import event_bus

    audit_handler = AuditLogEventHandler()
    notification_handler = NotificationEventHandler()

    for event_type in AUDITED_EVENTS:
        event_bus.subscribe(event_type, audit_handler)
    for event_type in NOTIFIED_EVENTS:
        event_bus.subscribe(event_type, notification_handler)

    logger.info("Event handlers registered")
