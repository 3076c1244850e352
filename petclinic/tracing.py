"""OpenTelemetry configuration for request tracing.

Handlers create spans through the global OpenTelemetry API. Until
``configure_tracing`` installs a provider the API hands out no-op spans,
so tracing costs nothing when disabled.
"""

import functools
import logging
from typing import Any, Callable, Optional, TypeVar

from flask import Flask
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from opentelemetry.trace import Status, StatusCode

F = TypeVar("F", bound=Callable[..., Any])

logger = logging.getLogger(__name__)


def _build_exporter(exporter: str, otlp_endpoint: Optional[str]) -> SpanExporter:
    if exporter == "otlp":
        return OTLPSpanExporter(endpoint=otlp_endpoint)
    if exporter == "console":
        return ConsoleSpanExporter()
    raise ValueError(f"Unknown tracing exporter: {exporter!r} (expected 'console' or 'otlp')")


def configure_tracing(
    service_name: str,
    environment: str = "dev",
    service_version: str = "1.0.0",
    sampling_rate: float = 1.0,
    exporter: str = "console",
    otlp_endpoint: Optional[str] = None,
) -> TracerProvider:
    """Configure OpenTelemetry tracing for the service.

    Args:
        service_name: Name of the service (e.g., "petclinic")
        environment: Deployment environment tag
        service_version: Version reported with every span
        sampling_rate: Sampling rate (0.0 to 1.0)
        exporter: "console" or "otlp"
        otlp_endpoint: Collector URL for the OTLP HTTP exporter

    Returns:
        Configured TracerProvider
    """
    resource = Resource(
        attributes={
            "service.name": service_name,
            "service.version": service_version,
            "deployment.environment": environment,
        }
    )

    provider = TracerProvider(
        resource=resource,
        sampler=ParentBased(TraceIdRatioBased(sampling_rate)),
    )
    provider.add_span_processor(BatchSpanProcessor(_build_exporter(exporter, otlp_endpoint)))

    # Set as global tracer provider
    trace.set_tracer_provider(provider)

    return provider


def init_tracing(app: Flask) -> Optional[TracerProvider]:
    """Install a tracer provider when ``TRACING_ENABLED`` is set."""
    if not app.config.get("TRACING_ENABLED"):
        return None

    provider = configure_tracing(
        service_name=app.config["TRACING_SERVICE_NAME"],
        environment=app.config["TRACING_ENVIRONMENT"],
        service_version=app.config["TRACING_SERVICE_VERSION"],
        sampling_rate=app.config["TRACING_SAMPLE_RATE"],
        exporter=app.config["TRACING_EXPORTER"],
        otlp_endpoint=app.config.get("OTLP_ENDPOINT"),
    )
    logger.info(
        f"Tracing enabled for {app.config['TRACING_SERVICE_NAME']} "
        f"({app.config['TRACING_EXPORTER']} exporter, "
        f"sample rate {app.config['TRACING_SAMPLE_RATE']})"
    )
    return provider


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer instance.

    Args:
        name: Tracer name (typically __name__)

    Returns:
        Tracer instance
    """
    return trace.get_tracer(name)


def traced(span_name: Optional[str] = None) -> Callable[[F], F]:
    """Decorator that runs a function inside its own span.

    Exceptions are recorded on the span and re-raised.

    Args:
        span_name: Optional custom span name (defaults to function name)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            name = span_name or func.__name__
            tracer = get_tracer(func.__module__)

            with tracer.start_as_current_span(name, record_exception=False) as span:
                span.set_attribute("function.name", func.__qualname__)
                try:
                    result = func(*args, **kwargs)
                except Exception as exc:
                    span.record_exception(exc)
                    span.set_status(Status(StatusCode.ERROR, str(exc)))
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper  # type: ignore[return-value]

    return decorator
