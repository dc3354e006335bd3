"""RouterClient — talks JSON-RPC to the tool router over HTTP.

Implements tool discovery (``tools/list``) and execution (``tools/call``)
for the chat orchestrator.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
from pydantic import ValidationError

from hotelbridge.protocols.errors import RouterError
from hotelbridge.protocols.rpc.models import JsonRpcRequest, JsonRpcResponse


class RouterClient:
    """Sends one JSON-RPC request per HTTP POST to the router URL.

    Every failure (transport, timeout, non-2xx, malformed envelope, RPC
    error object) surfaces as :class:`RouterError`.

    Usage::

        router = RouterClient("https://example.test/mcp", timeout=30)
        tools = await router.list_tools()
        result = await router.call_tool("currencies_list", {"query": {"locale": "en_DE"}})
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport
        self._next_id = 1

    @property
    def url(self) -> str:
        return self._url

    async def list_tools(self) -> list[dict[str, Any]]:
        """Send ``tools/list`` and return the raw tool entries."""
        response = await self._send_request("tools/list")
        result = response.result if isinstance(response.result, dict) else {}
        tools = result.get("tools", [])
        return [tool for tool in tools if isinstance(tool, dict)] if isinstance(tools, list) else []

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> Any:
        """Send ``tools/call`` and return the result payload."""
        response = await self._send_request(
            "tools/call",
            params={"name": name, "arguments": arguments},
        )
        return response.result

    async def _send_request(
        self,
        method: str,
        params: dict[str, Any] | None = None,
    ) -> JsonRpcResponse:
        request_id = self._next_id
        self._next_id += 1

        request = JsonRpcRequest(method=method, id=request_id, params=params)
        try:
            http_response = await asyncio.wait_for(self._post(request), timeout=self._timeout)
        except TimeoutError as exc:
            raise RouterError(method, f"timed out after {self._timeout:g}s") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise RouterError(method, str(exc) or type(exc).__name__) from exc

        try:
            raw = http_response.json()
        except ValueError as exc:
            detail = f"HTTP {http_response.status_code}: response is not JSON"
            raise RouterError(method, detail) from exc

        try:
            response = JsonRpcResponse.model_validate(raw)
        except ValidationError as exc:
            raise RouterError(method, f"HTTP {http_response.status_code}: malformed response") from exc

        if response.error is not None:
            raise RouterError(method, response.error.message, response.error.code)
        if not http_response.is_success:
            raise RouterError(method, f"HTTP {http_response.status_code} {http_response.reason_phrase}")
        return response

    async def _post(self, request: JsonRpcRequest) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            return await client.post(self._url, json=request.model_dump(exclude_none=True))
