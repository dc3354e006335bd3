"""JSON-RPC 2.0 messages and tool result payloads.

Implements the message format used by the Model Context Protocol for
tool discovery (``tools/list``) and execution (``tools/call``).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Reserved error codes
# ---------------------------------------------------------------------------

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

RequestId = str | int | float | None

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message."""

    jsonrpc: str = "2.0"
    method: str
    id: RequestId = None
    params: dict[str, Any] | None = None


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message.

    Exactly one of ``result`` or ``error`` is present on the wire; ``id`` is
    always serialized, as ``null`` when the request carried none.
    """

    jsonrpc: str = "2.0"
    id: RequestId = None
    result: Any = None
    error: JsonRpcError | None = None

    def dump(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            error: dict[str, Any] = {"code": self.error.code, "message": self.error.message}
            if self.error.data is not None:
                error["data"] = self.error.data
            payload["error"] = error
        else:
            payload["result"] = self.result
        return payload


def rpc_result(request_id: RequestId, result: Any) -> dict[str, Any]:
    """Build a successful response envelope."""
    return JsonRpcResponse(id=request_id, result=result).dump()


def rpc_error(
    request_id: RequestId,
    code: int,
    message: str,
    data: Any = None,
) -> dict[str, Any]:
    """Build an error response envelope."""
    error = JsonRpcError(code=code, message=message, data=data)
    return JsonRpcResponse(id=request_id, error=error).dump()


def extract_id(obj: Any) -> RequestId:
    """Return the request id of *obj* if it carries a usable one, else ``None``."""
    if not isinstance(obj, dict):
        return None
    value = obj.get("id")
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int, float)):
        return value
    return None


def normalize_call_params(params: Any) -> tuple[str | None, Any]:
    """Split ``tools/call`` params into ``(name, arguments)``.

    Arguments are taken from the first of these that is present:

    1. ``params["arguments"]``
    2. ``params["args"]``
    3. every remaining key of ``params`` except ``name``

    A ``None`` arguments value becomes ``{}``.
    """
    if not isinstance(params, dict):
        return None, {}

    name = params.get("name")
    if not isinstance(name, str) or not name:
        name = None

    if "arguments" in params:
        arguments = params["arguments"]
    elif "args" in params:
        arguments = params["args"]
    else:
        arguments = {k: v for k, v in params.items() if k != "name"}

    return name, {} if arguments is None else arguments


# ---------------------------------------------------------------------------
# Tool results
# ---------------------------------------------------------------------------


class TextContent(BaseModel):
    """Plain text content block."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """The payload of a successful ``tools/call``.

    ``is_error`` marks a tool-level failure; the RPC call itself still
    succeeds so the caller can read the failure text.
    """

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent] = []
    structured_content: Any = Field(default=None, alias="structuredContent")
    is_error: bool | None = Field(default=None, alias="isError")

    @property
    def text(self) -> str:
        return "\n".join(part.text for part in self.content)

    @classmethod
    def ok_text(cls, text: str, data: Any = None) -> ToolResult:
        """Create a result with one text block and optional structured data."""
        return cls(content=[TextContent(text=text)], structured_content=data)

    @classmethod
    def error_text(cls, message: str) -> ToolResult:
        """Create a tool-level error result."""
        return cls(content=[TextContent(text=message)], is_error=True)

    def dump(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
