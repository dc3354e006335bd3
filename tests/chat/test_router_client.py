"""Tests for RouterClient."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest

from hotelbridge.chat.router_client import RouterClient
from hotelbridge.protocols.errors import RouterError
from tests.helpers import currencies_tool_def, make_router_transport, unreachable_transport

URL = "https://router.test/mcp"


class TestListTools:
    async def test_returns_tool_entries(self) -> None:
        captured: list[dict[str, Any]] = []
        client = RouterClient(URL, transport=make_router_transport([currencies_tool_def()], captured=captured))

        tools = await client.list_tools()

        assert [tool["name"] for tool in tools] == ["currencies_list"]
        assert captured == [{"jsonrpc": "2.0", "id": 1, "method": "tools/list"}]

    async def test_ids_increase(self) -> None:
        captured: list[dict[str, Any]] = []
        client = RouterClient(URL, transport=make_router_transport([], captured=captured))

        await client.list_tools()
        await client.call_tool("ping", {})

        assert [body["id"] for body in captured] == [1, 2]

    async def test_unreachable(self) -> None:
        client = RouterClient(URL, transport=unreachable_transport())
        with pytest.raises(RouterError, match="tools/list"):
            await client.list_tools()


class TestCallTool:
    async def test_sends_name_and_arguments(self) -> None:
        captured: list[dict[str, Any]] = []
        result = {"content": [{"type": "text", "text": "Currencies OK"}], "structuredContent": []}
        client = RouterClient(URL, transport=make_router_transport([], call_result=result, captured=captured))

        assert await client.call_tool("currencies_list", {"query": {"locale": "en_DE"}}) == result
        assert captured[0]["params"] == {"name": "currencies_list", "arguments": {"query": {"locale": "en_DE"}}}

    async def test_rpc_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32601, "message": "Tool not found: x"}},
            )

        client = RouterClient(URL, transport=httpx.MockTransport(handler))
        with pytest.raises(RouterError) as excinfo:
            await client.call_tool("x", {})

        assert excinfo.value.code == -32601
        assert str(excinfo.value) == "MCP tools/call failed (-32601): Tool not found: x"

    async def test_non_json_response(self) -> None:
        client = RouterClient(URL, transport=httpx.MockTransport(lambda r: httpx.Response(502, text="<html>")))
        with pytest.raises(RouterError, match="HTTP 502"):
            await client.call_tool("ping", {})

    async def test_non_success_status(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, json={"jsonrpc": "2.0", "id": 1, "result": {}})

        client = RouterClient(URL, transport=httpx.MockTransport(handler))
        with pytest.raises(RouterError, match="503"):
            await client.call_tool("ping", {})


class TestFailures:
    async def test_slow_router_times_out(self) -> None:
        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(1)
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": {}})

        client = RouterClient(URL, timeout=0.1, transport=httpx.MockTransport(handler))
        with pytest.raises(RouterError) as excinfo:
            await client.call_tool("ping", {})

        assert excinfo.value.method == "tools/call"
        assert "timed out after 0.1s" in str(excinfo.value)

    async def test_transport_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("read timed out", request=request)

        client = RouterClient(URL, transport=httpx.MockTransport(handler))
        with pytest.raises(RouterError, match="read timed out"):
            await client.call_tool("ping", {})

    async def test_invalid_url(self) -> None:
        client = RouterClient("http://router.test:notaport/mcp", transport=make_router_transport([]))
        with pytest.raises(RouterError, match="tools/list"):
            await client.list_tools()
