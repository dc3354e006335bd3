"""ToolRegistry — maps tool names to schemas and handlers.

A registry is built fresh for every request (see
:func:`hotelbridge.tools.catalog.build_registry`) and discarded afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from hotelbridge.protocols.errors import ToolRegistrationError
from hotelbridge.protocols.rpc.models import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    RequestId,
    ToolResult,
    normalize_call_params,
    rpc_error,
    rpc_result,
)
from hotelbridge.utils.telemetry import ATTR_TOOL_IS_ERROR, ATTR_TOOL_NAME, get_tracer, mark_error

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

ToolHandler = Callable[[dict[str, Any]], Awaitable[ToolResult]]


def _default_schema() -> dict[str, Any]:
    return {"type": "object"}


@dataclass(frozen=True)
class ToolDefinition:
    """A named, schema-described tool backed by an async handler."""

    name: str
    handler: ToolHandler
    description: str = ""
    input_schema: dict[str, Any] = field(default_factory=_default_schema)
    output_schema: dict[str, Any] = field(default_factory=_default_schema)

    def to_listing(self) -> dict[str, Any]:
        """Render the ``tools/list`` entry for this tool."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
            "outputSchema": self.output_schema,
        }


class ToolRegistry:
    """Holds tool definitions in registration order and executes RPC methods.

    Usage::

        registry = ToolRegistry()
        registry.register(ToolDefinition(name="ping", handler=ping))

        registry.list_tools(request_id)                  # tools/list envelope
        await registry.call(request_id, {"name": "ping"})  # tools/call envelope
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    @property
    def names(self) -> list[str]:
        return list(self._tools)

    def register(self, definition: ToolDefinition) -> None:
        """Add *definition*; a later registration with the same name replaces it in place."""
        if not isinstance(definition.name, str) or not definition.name.strip():
            msg = "Tool definition requires a non-empty string name"
            raise ToolRegistrationError(msg)
        if not callable(definition.handler):
            msg = f"Tool {definition.name!r} requires a callable handler"
            raise ToolRegistrationError(msg)
        if definition.name in self._tools:
            logger.debug("Replacing existing registration for tool %s", definition.name)
        self._tools[definition.name] = definition

    def listings(self) -> list[dict[str, Any]]:
        return [tool.to_listing() for tool in self._tools.values()]

    def list_tools(self, request_id: RequestId) -> dict[str, Any]:
        """Answer ``tools/list``."""
        return rpc_result(request_id, {"tools": self.listings()})

    async def call(self, request_id: RequestId, params: Any) -> dict[str, Any]:
        """Answer ``tools/call``.

        Tool-level failures come back inside the result (``isError``); only a
        handler that raises produces an RPC error.
        """
        name, arguments = normalize_call_params(params)
        if name is None:
            return rpc_error(request_id, INVALID_PARAMS, "Missing tool name")

        tool = self._tools.get(name)
        if tool is None:
            return rpc_error(request_id, METHOD_NOT_FOUND, f"Tool not found: {name}")

        if not isinstance(arguments, dict):
            return rpc_error(request_id, INVALID_PARAMS, "Tool arguments must be an object")

        with _tracer.start_as_current_span("rpc.tools_call") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            try:
                result = await tool.handler(arguments)
                payload = result.dump()
                span.set_attribute(ATTR_TOOL_IS_ERROR, bool(result.is_error))
            except Exception as exc:
                mark_error(span, exc)
                logger.exception("Tool %s raised during execution", name)
                return rpc_error(request_id, INTERNAL_ERROR, "Tool execution error", str(exc) or type(exc).__name__)

        return rpc_result(request_id, payload)
