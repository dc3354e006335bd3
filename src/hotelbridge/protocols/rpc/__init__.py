"""JSON-RPC 2.0 envelope models, body decoding and dispatch."""

from hotelbridge.protocols.rpc.body import read_body
from hotelbridge.protocols.rpc.dispatcher import RpcDispatcher
from hotelbridge.protocols.rpc.models import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    TextContent,
    ToolResult,
    normalize_call_params,
    rpc_error,
    rpc_result,
)

__all__ = [
    "INTERNAL_ERROR",
    "INVALID_PARAMS",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "PARSE_ERROR",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "RpcDispatcher",
    "TextContent",
    "ToolResult",
    "normalize_call_params",
    "read_body",
    "rpc_error",
    "rpc_result",
]
