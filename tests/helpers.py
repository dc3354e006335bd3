"""Shared test helpers: LiteLLM response mocks and httpx mock routers."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import httpx


def make_mock_tool_call(
    name: str,
    arguments: str = "{}",
    call_id: str = "call_1",
) -> MagicMock:
    """Create a ``MagicMock`` matching one entry of ``message.tool_calls``."""
    tool_call = MagicMock()
    tool_call.id = call_id
    tool_call.function.name = name
    tool_call.function.arguments = arguments
    return tool_call


def make_mock_litellm_response(
    content: str = "",
    tool_calls: list[Any] | None = None,
    finish_reason: str = "stop",
    model: str = "gpt-4o-mini",
) -> MagicMock:
    """Create a ``MagicMock`` matching LiteLLM's response structure."""
    message = MagicMock()
    message.content = content or None
    message.tool_calls = tool_calls

    choice = MagicMock()
    choice.message = message
    choice.finish_reason = finish_reason

    response = MagicMock()
    response.choices = [choice]
    response.model = model
    return response


def currencies_tool_def() -> dict[str, Any]:
    return {
        "name": "currencies_list",
        "description": "GET /currencies — list supported currencies (requires locale)",
        "inputSchema": {
            "type": "object",
            "required": ["query"],
            "properties": {
                "headers": {"type": "object"},
                "query": {
                    "type": "object",
                    "required": ["locale"],
                    "properties": {"locale": {"type": "string", "enum": ["de_DE", "en_DE"]}},
                },
            },
        },
    }


def make_router_transport(
    tools: list[dict[str, Any]],
    call_result: Callable[[dict[str, Any]], dict[str, Any]] | dict[str, Any] | None = None,
    captured: list[dict[str, Any]] | None = None,
) -> httpx.MockTransport:
    """A fake tool router answering ``tools/list`` and ``tools/call``.

    Every decoded request body is appended to *captured*.
    """
    sink = captured if captured is not None else []

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        sink.append(body)
        if body["method"] == "tools/list":
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": {"tools": tools}})
        if callable(call_result):
            result = call_result(body["params"])
        else:
            result = call_result or {"content": [{"type": "text", "text": "ok"}]}
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})

    return httpx.MockTransport(handler)


def unreachable_transport() -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.MockTransport(handler)
