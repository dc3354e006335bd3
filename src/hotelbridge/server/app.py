"""FastAPI application exposing ``/mcp``, ``/chat`` and the ``/bridge`` routes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from hotelbridge import __version__
from hotelbridge.config import Settings
from hotelbridge.server.bridge import bridge_router, validation_error_response
from hotelbridge.server.handlers import CORS_HEADERS, handle_chat, handle_rpc

if TYPE_CHECKING:
    import httpx

# Every verb is routed so that unsupported ones still get a JSON answer.
_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def _to_response(status: int, body: Any) -> Response:
    if body is None:
        return Response(status_code=status, headers=CORS_HEADERS)
    return JSONResponse(content=body, status_code=status, headers=CORS_HEADERS)


def create_app(
    settings: Settings | None = None,
    *,
    api_transport: httpx.AsyncBaseTransport | None = None,
    router_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the application.

    ``api_transport`` and ``router_transport`` replace the network layer of
    the outbound booking API and router clients (used by tests).
    """
    app = FastAPI(title="hotelbridge", version=__version__)
    app.state.settings = settings or Settings.from_env()
    app.state.api_transport = api_transport
    app.state.router_transport = router_transport
    app.add_exception_handler(RequestValidationError, validation_error_response)  # type: ignore[arg-type]
    app.include_router(bridge_router)

    @app.api_route("/mcp", methods=_ALL_METHODS)
    async def mcp_endpoint(request: Request) -> Response:
        state = request.app.state
        status, body = await handle_rpc(request.method, request.stream(), state.settings, state.api_transport)
        return _to_response(status, body)

    @app.api_route("/chat", methods=_ALL_METHODS)
    async def chat_endpoint(request: Request) -> Response:
        state = request.app.state
        status, body = await handle_chat(request.method, request.stream(), state.settings, state.router_transport)
        return _to_response(status, body)

    return app
