"""Chat transcript messages and the ``/chat`` request/response bodies."""

from __future__ import annotations

import json
from typing import Any, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Tool calling
# ---------------------------------------------------------------------------


class ToolCall(BaseModel):
    """A tool invocation emitted by an assistant message.

    ``arguments`` keeps the JSON string exactly as the model produced it so
    the transcript can be replayed verbatim.
    """

    id: str = Field(default_factory=lambda: f"call_{uuid4().hex[:12]}")
    name: str
    arguments: str = "{}"

    def parsed_arguments(self) -> dict[str, Any]:
        """Decode ``arguments``; anything that is not a JSON object becomes ``{}``."""
        try:
            value = json.loads(self.arguments) if self.arguments else {}
        except (json.JSONDecodeError, TypeError):
            return {}
        return value if isinstance(value, dict) else {}

    def to_provider(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }


class RouterToolDef(BaseModel):
    """A tool entry as returned by the router's ``tools/list``."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")


# ---------------------------------------------------------------------------
# Transcript
# ---------------------------------------------------------------------------


class ChatMessage(BaseModel):
    """One transcript entry in the provider's (OpenAI-style) message shape.

    Roles:
    - system: instructions
    - user: human input
    - assistant: model output, possibly carrying ``tool_calls``
    - tool: a tool result answering ``tool_call_id``
    """

    role: Literal["system", "user", "assistant", "tool"]
    content: str | None = None
    tool_calls: list[ToolCall] | None = None
    tool_call_id: str | None = None
    name: str | None = None

    @classmethod
    def system(cls, text: str) -> ChatMessage:
        return cls(role="system", content=text)

    @classmethod
    def user(cls, text: str) -> ChatMessage:
        return cls(role="user", content=text)

    @classmethod
    def assistant(cls, text: str | None = None, tool_calls: list[ToolCall] | None = None) -> ChatMessage:
        return cls(role="assistant", content=text, tool_calls=tool_calls or None)

    @classmethod
    def tool(cls, text: str, *, tool_call_id: str, name: str) -> ChatMessage:
        return cls(role="tool", content=text, tool_call_id=tool_call_id, name=name)

    def to_provider(self) -> dict[str, Any]:
        """Render the message for ``litellm.acompletion``."""
        result: dict[str, Any] = {"role": self.role, "content": self.content or ""}
        if self.tool_calls:
            result["tool_calls"] = [tc.to_provider() for tc in self.tool_calls]
        if self.tool_call_id is not None:
            result["tool_call_id"] = self.tool_call_id
        if self.name is not None:
            result["name"] = self.name
        return result


# ---------------------------------------------------------------------------
# HTTP bodies
# ---------------------------------------------------------------------------


class HistoryMessage(BaseModel):
    """A prior turn supplied by the client."""

    role: Literal["system", "user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Body of ``POST /chat``."""

    message: str
    history: list[HistoryMessage] = []

    @field_validator("message")
    @classmethod
    def _message_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "Message is required"
            raise ValueError(msg)
        return value


class ChatReply(BaseModel):
    """Body of a successful ``POST /chat`` response."""

    reply: str
    raw: dict[str, Any] | None = None
