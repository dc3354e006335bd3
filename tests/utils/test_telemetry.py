"""Tests for OpenTelemetry tracing helpers."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from opentelemetry import trace

from hotelbridge.utils.telemetry import (
    _INSTRUMENTATION_NAME,
    ATTR_FINISH_REASON,
    ATTR_MODEL,
    ATTR_ROUND,
    ATTR_TOOL_COUNT,
    ATTR_TOOL_IS_ERROR,
    ATTR_TOOL_NAME,
    configure_telemetry,
    get_tracer,
    mark_error,
)


class TestGetTracer:
    def test_returns_tracer(self) -> None:
        assert isinstance(get_tracer("hotelbridge.tests"), trace.Tracer)

    def test_default_name(self) -> None:
        assert isinstance(get_tracer(), trace.Tracer)

    def test_noop_span_accepts_attributes(self) -> None:
        with get_tracer("test.noop").start_as_current_span("rpc.tools_call") as span:
            span.set_attribute(ATTR_TOOL_NAME, "ping")
            span.set_attribute(ATTR_TOOL_IS_ERROR, False)

    def test_mark_error_on_noop_span(self) -> None:
        with get_tracer("test.noop").start_as_current_span("chat.tool_call") as span:
            mark_error(span, RuntimeError("router down"))


class TestConfigureTelemetry:
    def test_raises_without_sdk(self) -> None:
        with patch.dict("sys.modules", {"opentelemetry.sdk.resources": None}):
            with pytest.raises(ImportError, match="opentelemetry-sdk"):
                configure_telemetry()

    def test_otlp_raises_without_exporter(self) -> None:
        try:
            import opentelemetry.sdk.trace  # noqa: F401
        except ImportError:
            pytest.skip("opentelemetry-sdk not installed")

        with patch.dict(
            "sys.modules",
            {"opentelemetry.exporter.otlp.proto.grpc.trace_exporter": None},
        ):
            with pytest.raises(ImportError, match="opentelemetry-exporter-otlp"):
                configure_telemetry(export_to_console=False, otlp_endpoint="http://localhost:4317")


class TestAttributeConstants:
    def test_namespaced(self) -> None:
        for name in (ATTR_MODEL, ATTR_ROUND, ATTR_TOOL_COUNT, ATTR_TOOL_NAME, ATTR_TOOL_IS_ERROR, ATTR_FINISH_REASON):
            assert name.startswith("hotelbridge.")

    def test_instrumentation_name(self) -> None:
        assert _INSTRUMENTATION_NAME == "hotelbridge"
