"""
Celery tasks for background processing.

Tasks for notification delivery, broker event processing and the
license expiration sweep.
"""
import logging

from asgiref.sync import async_to_sync
from django.conf import settings
from django.core.mail import send_mail

from LicensingPortal.celery import app

logger = logging.getLogger(__name__)


@app.task(bind=True, max_retries=3)
def send_notification_email_task(self, recipient: str, subject: str, body: str):
    """
    Celery task for notification email delivery.

    Args:
        recipient: Email address
        subject: Subject line
        body: Plain-text body
    """
    try:
        send_mail(subject, body, settings.DEFAULT_FROM_EMAIL, [recipient])
        logger.info("Notification sent", extra={"subject": subject})
    except Exception as exc:
        logger.error(f"Notification delivery failed: {exc}", exc_info=True)
        raise self.retry(exc=exc, countdown=2 ** self.request.retries)


@app.task
def process_event_from_rabbitmq(event_data: dict):
    """
    Process event from RabbitMQ queue.

    The event is rebuilt from the message and handed to every handler
    subscribed to its type.

    Args:
        event_data: Event data from RabbitMQ
    """
    from core.infrastructure.events import event_bus
    from core.infrastructure.rabbitmq_event_bus import ReceivedEvent

    event = ReceivedEvent.from_message(event_data)
    handlers = event_bus.handlers_for(event.event_type)
    if not handlers:
        logger.debug("No handlers for %s", event.event_type)
        return

    for handler in handlers:
        try:
            async_to_sync(handler.handle)(event)
        except Exception as e:
            logger.error(
                f"Handler {handler.__class__.__name__} failed for {event.event_type}: {e}",
                exc_info=True,
            )


@app.task
def expire_licenses_task():
    """Mark active licenses past their expiry date as expired."""
    from licenses.application.commands.expire_licenses import ExpireLicensesCommand
    from licenses.application.handlers.expire_licenses_handler import ExpireLicensesHandler
    from licenses.infrastructure.repositories.django_license_repository import (
        DjangoLicenseRepository,
    )

    handler = ExpireLicensesHandler(DjangoLicenseRepository())
    expired = async_to_sync(handler.handle)(ExpireLicensesCommand())
    logger.info("Expiration sweep finished", extra={"expired": len(expired)})
    return len(expired)
