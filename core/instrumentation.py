"""
OpenTelemetry instrumentation setup.

This module configures OpenTelemetry for distributed tracing and starts
the Prometheus metrics endpoint. Tracers returned by get_tracer() are
no-ops until setup_opentelemetry() installs a provider.
"""

import logging
import os
import socket

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode  # noqa: F401
from prometheus_client import start_http_server

logger = logging.getLogger(__name__)


def setup_opentelemetry():
    """
    Configure OpenTelemetry instrumentation.

    Sets up:
    - Distributed tracing (exported via OTLP)
    - Prometheus metrics endpoint
    - Auto-instrumentation for Django, PostgreSQL, Redis
    """
    from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
    from opentelemetry.instrumentation.django import DjangoInstrumentor
    from opentelemetry.instrumentation.psycopg2 import Psycopg2Instrumentor
    from opentelemetry.instrumentation.redis import RedisInstrumentor
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor

    resource = Resource.create(
        {
            "service.name": os.environ.get("OTEL_SERVICE_NAME", "licensing-portal"),
            "service.version": os.environ.get("OTEL_SERVICE_VERSION", "1.0.0"),
            "deployment.environment": os.environ.get("ENVIRONMENT", "development"),
        }
    )

    trace_provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(trace_provider)

    otlp_endpoint = os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT", "http://tempo:4317")
    otlp_exporter = OTLPSpanExporter(
        endpoint=otlp_endpoint,
        insecure=os.environ.get("OTEL_EXPORTER_OTLP_INSECURE", "true").lower() == "true",
    )
    trace_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    DjangoInstrumentor().instrument()
    Psycopg2Instrumentor().instrument()
    RedisInstrumentor().instrument()

    start_metrics_server(int(os.environ.get("PROMETHEUS_PORT", "9090")))
    logger.info("OpenTelemetry instrumentation configured", extra={"otlp_endpoint": otlp_endpoint})


def start_metrics_server(port: int):
    """Start the Prometheus HTTP endpoint unless the port is taken."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            in_use = sock.connect_ex(("127.0.0.1", port)) == 0
        if in_use:
            logger.info("Prometheus metrics server already running on port %s", port)
            return
        start_http_server(port, addr="0.0.0.0")
        logger.info("Prometheus metrics server started on 0.0.0.0:%s", port)
    except OSError as e:
        logger.warning("Could not start Prometheus metrics server: %s", e)


def get_tracer(name: str):
    """
    Get a tracer instance for manual instrumentation.

    Args:
        name: Tracer name (usually module name)

    Returns:
        Tracer instance
    """
    return trace.get_tracer(name)
