"""
App configuration for Licensing Portal.
"""

import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class LicensingPortalConfig(AppConfig):
    """App configuration for LicensingPortal."""

    name = "LicensingPortal"
    verbose_name = "Licensing Portal"

    def ready(self):
        """Register event handlers and, when enabled, tracing."""
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()

        if getattr(settings, "OTEL_ENABLED", False):
            self.setup_observability()

    def setup_observability(self):
        """Setup OpenTelemetry after apps are ready."""
        try:
            from core.instrumentation import setup_opentelemetry

            setup_opentelemetry()
        except Exception as e:
            logger.warning("Failed to setup OpenTelemetry: %s", e)
