"""Framework-neutral request handlers for ``/mcp`` and ``/chat``.

Each handler takes the HTTP method and a body source and returns
``(status, body)``; ``body`` is ``None`` for 204 responses. Handlers never
raise: every branch produces a JSON body.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from hotelbridge.chat.models import ChatRequest
from hotelbridge.chat.orchestrator import ChatOrchestrator
from hotelbridge.chat.router_client import RouterClient
from hotelbridge.protocols.errors import BodyParseError, ChatRequestError
from hotelbridge.protocols.rpc.body import read_body
from hotelbridge.protocols.rpc.dispatcher import RpcDispatcher
from hotelbridge.protocols.rpc.models import (
    INTERNAL_ERROR,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    rpc_error,
)
from hotelbridge.tools.catalog import build_registry

if TYPE_CHECKING:
    import httpx

    from hotelbridge.config import Settings

logger = logging.getLogger(__name__)

PREFLIGHT_METHODS = frozenset({"OPTIONS", "HEAD"})

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Accept, Authorization, Mcp-Session-Id",
    "Access-Control-Allow-Methods": "GET, POST, DELETE, HEAD, OPTIONS",
}


async def handle_rpc(
    method: str,
    body: Any,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[int, Any]:
    """Serve one request to the JSON-RPC tool endpoint."""
    try:
        verb = method.upper()
        if verb in PREFLIGHT_METHODS:
            return 204, None
        if verb != "POST":
            return 405, rpc_error(None, METHOD_NOT_FOUND, "Method not allowed")

        try:
            payload = await read_body(body)
        except BodyParseError as exc:
            return 400, rpc_error(None, PARSE_ERROR, "Parse error", exc.detail)

        registry = build_registry(settings, transport=transport)
        return await RpcDispatcher(registry).handle_payload(payload)
    except Exception as exc:
        logger.exception("RPC endpoint crashed")
        return 500, rpc_error(None, INTERNAL_ERROR, "Internal error", str(exc) or type(exc).__name__)


def parse_chat_request(payload: Any) -> ChatRequest:
    """Validate a decoded ``/chat`` body.

    Raises:
        ChatRequestError: the body is not an object or lacks a usable message.
    """
    if not isinstance(payload, dict):
        msg = "Request body must be a JSON object"
        raise ChatRequestError(msg)
    try:
        return ChatRequest.model_validate(payload)
    except ValidationError as exc:
        fields = {str(error["loc"][0]) for error in exc.errors() if error["loc"]}
        if "message" in fields:
            msg = "Message is required"
        else:
            msg = "Invalid history: expected a list of {role, content} objects"
        raise ChatRequestError(msg) from exc


async def handle_chat(
    method: str,
    body: Any,
    settings: Settings,
    router_transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[int, Any]:
    """Serve one request to the chat endpoint."""
    try:
        verb = method.upper()
        if verb == "OPTIONS":
            return 204, None
        if verb != "POST":
            return 405, {"error": "Use POST"}

        try:
            chat_request = parse_chat_request(await read_body(body))
        except BodyParseError as exc:
            return 400, {"error": exc.detail}
        except ChatRequestError as exc:
            return 400, {"error": str(exc)}

        router = RouterClient(settings.router_url, timeout=settings.timeout, transport=router_transport)
        reply = await ChatOrchestrator(settings, router).run(chat_request)
        return 200, reply.model_dump()
    except Exception as exc:
        logger.exception("Chat endpoint crashed")
        return 500, {"error": str(exc) or type(exc).__name__}
