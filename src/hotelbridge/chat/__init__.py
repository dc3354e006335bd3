"""Chat orchestration — LLM completions with tools served by the router."""

from hotelbridge.chat.models import ChatMessage, ChatReply, ChatRequest, ToolCall
from hotelbridge.chat.orchestrator import ChatOrchestrator
from hotelbridge.chat.router_client import RouterClient

__all__ = [
    "ChatMessage",
    "ChatOrchestrator",
    "ChatReply",
    "ChatRequest",
    "RouterClient",
    "ToolCall",
]
