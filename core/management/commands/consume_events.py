"""
Django management command to consume domain events from RabbitMQ.

Run alongside the Celery worker when USE_RABBITMQ=true, otherwise audit
logging and notifications never see published events.
"""

import logging

from django.core.management.base import BaseCommand, CommandError

from core.infrastructure.events import event_bus
from core.infrastructure.rabbitmq_event_bus import RabbitMQEventBus

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to consume events published to RabbitMQ."""

    help = "Consume domain events from RabbitMQ and dispatch them to event handlers"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--queue",
            default="licensing_events_queue",
            help="Queue to consume from",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        if not isinstance(event_bus, RabbitMQEventBus):
            raise CommandError("RabbitMQ event bus is not enabled (set USE_RABBITMQ=true)")

        queue_name = options["queue"]
        self.stdout.write(f"Consuming events from {queue_name}")
        try:
            event_bus.consume_events(queue_name=queue_name)
        except KeyboardInterrupt:
            logger.info("Event consumer stopped", extra={"queue": queue_name})
            # pylint: disable=no-member
            self.stdout.write(self.style.SUCCESS("Stopped consuming events"))
