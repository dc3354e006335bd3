"""RpcDispatcher — validates JSON-RPC payloads and routes them to the registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from hotelbridge.protocols.rpc.models import (
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    JsonRpcRequest,
    extract_id,
    rpc_error,
)

if TYPE_CHECKING:
    from hotelbridge.tools.registry import ToolRegistry

HTTP_OK = 200
HTTP_BAD_REQUEST = 400


class RpcDispatcher:
    """Turns a decoded request body into ``(http_status, response_body)``.

    A single request answers with a single envelope; a batch answers with a
    list of envelopes in request order.
    """

    def __init__(self, registry: ToolRegistry) -> None:
        self._registry = registry

    async def handle_payload(self, payload: Any) -> tuple[int, Any]:
        if isinstance(payload, list):
            if not payload:
                return HTTP_BAD_REQUEST, rpc_error(None, INVALID_REQUEST, "Invalid Request")
            responses = [await self._handle_element(item) for item in payload]
            return HTTP_OK, responses

        request = self._validate(payload)
        if request is None:
            return HTTP_BAD_REQUEST, rpc_error(extract_id(payload), INVALID_REQUEST, "Invalid Request")
        return HTTP_OK, await self.handle_request(request)

    async def handle_request(self, request: JsonRpcRequest) -> dict[str, Any]:
        if request.method == "tools/list":
            return self._registry.list_tools(request.id)
        if request.method == "tools/call":
            return await self._registry.call(request.id, request.params or {})
        return rpc_error(request.id, METHOD_NOT_FOUND, f"Method not found: {request.method}")

    async def _handle_element(self, item: Any) -> dict[str, Any]:
        request = self._validate(item)
        if request is None:
            return rpc_error(extract_id(item), INVALID_REQUEST, "Invalid Request")
        return await self.handle_request(request)

    @staticmethod
    def _validate(obj: Any) -> JsonRpcRequest | None:
        if not isinstance(obj, dict) or not isinstance(obj.get("method"), str):
            return None
        params = obj.get("params")
        return JsonRpcRequest(
            jsonrpc=str(obj.get("jsonrpc", "2.0")),
            method=obj["method"],
            id=extract_id(obj),
            params=params if isinstance(params, dict) else None,
        )
