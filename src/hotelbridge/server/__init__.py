"""FastAPI app, framework-neutral endpoint handlers and the REST bridge."""

from hotelbridge.server.app import create_app
from hotelbridge.server.bridge import bridge_router
from hotelbridge.server.handlers import handle_chat, handle_rpc

__all__ = ["bridge_router", "create_app", "handle_chat", "handle_rpc"]
