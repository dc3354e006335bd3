"""Tracing helpers.

Every module gets its tracer from :func:`get_tracer`; spans are no-ops until
:func:`configure_telemetry` installs an SDK provider (``hotelbridge serve
--trace`` or ``--otlp-endpoint``).
"""

from __future__ import annotations

import logging
from typing import Any

from opentelemetry import trace

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Semantic attribute keys
# ---------------------------------------------------------------------------

ATTR_MODEL = "hotelbridge.model"
ATTR_ROUND = "hotelbridge.chat.round"
ATTR_TOOL_COUNT = "hotelbridge.chat.tool_count"
ATTR_TOOL_NAME = "hotelbridge.tool.name"
ATTR_TOOL_IS_ERROR = "hotelbridge.tool.is_error"
ATTR_FINISH_REASON = "hotelbridge.finish_reason"

_INSTRUMENTATION_NAME = "hotelbridge"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name*."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def mark_error(span: trace.Span, exc: BaseException) -> None:
    """Record *exc* on *span* and flag the span as failed."""
    span.record_exception(exc)
    span.set_status(trace.Status(trace.StatusCode.ERROR, str(exc) or type(exc).__name__))


def configure_telemetry(
    *,
    service_name: str = "hotelbridge",
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> Any:
    """Install an SDK tracer provider and return it (requires ``hotelbridge[otel]``).

    Spans go to stdout when *export_to_console* is set and to an OTLP/gRPC
    collector when *otlp_endpoint* is given; both may be active.

    Raises:
        ImportError: ``opentelemetry-sdk`` (or the OTLP exporter, when an
            endpoint is requested) is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            ConsoleSpanExporter,
        )
    except ImportError as exc:
        msg = "opentelemetry-sdk is required for tracing; install hotelbridge[otel]"
        raise ImportError(msg) from exc

    from hotelbridge import __version__

    provider = TracerProvider(
        resource=Resource.create({"service.name": service_name, "service.version": __version__})
    )
    if export_to_console:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    if otlp_endpoint:
        provider.add_span_processor(BatchSpanProcessor(_otlp_exporter(otlp_endpoint)))

    trace.set_tracer_provider(provider)
    logger.info(
        "Tracing enabled for %s (console=%s, otlp=%s)",
        service_name,
        export_to_console,
        otlp_endpoint or "-",
    )
    return provider


def _otlp_exporter(endpoint: str) -> Any:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
            OTLPSpanExporter,
        )
    except ImportError as exc:
        msg = "opentelemetry-exporter-otlp is required for OTLP export; install hotelbridge[otel]"
        raise ImportError(msg) from exc
    return OTLPSpanExporter(endpoint=endpoint)
