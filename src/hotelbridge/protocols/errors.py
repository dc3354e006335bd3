"""Shared error types for the protocol layer."""


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""


class ToolRegistrationError(ProtocolError):
    """A tool definition was rejected by the registry."""


class BodyParseError(ProtocolError):
    """The request body could not be decoded as JSON."""

    def __init__(self, detail: str = "Invalid JSON") -> None:
        self.detail = detail
        super().__init__(detail)


class UpstreamError(ProtocolError):
    """The remote booking API answered with a non-2xx status."""

    def __init__(self, status: int, reason: str = "", body: str = "") -> None:
        self.status = status
        self.reason = reason
        self.body = body
        super().__init__(f"HTTP {status} {reason} - {body}".rstrip(" -"))


class UpstreamTimeoutError(ProtocolError):
    """The remote booking API did not answer within the configured timeout."""

    def __init__(self, method: str, url: str, timeout: float) -> None:
        self.method = method
        self.url = url
        self.timeout = timeout
        super().__init__(f"{method} {url} timed out after {timeout:g}s")


class RouterError(ProtocolError):
    """A JSON-RPC call to the tool router failed (transport or RPC error)."""

    def __init__(self, method: str, detail: str = "", code: int | None = None) -> None:
        self.method = method
        self.detail = detail
        self.code = code
        prefix = f"MCP {method} failed"
        if code is not None:
            prefix += f" ({code})"
        super().__init__(prefix + (f": {detail}" if detail else ""))


class ChatRequestError(ProtocolError):
    """The chat request body is missing or malformed."""
