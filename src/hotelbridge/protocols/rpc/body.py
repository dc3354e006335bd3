"""Request body decoding.

The body may reach a handler already parsed by the platform, as text, as a
raw byte buffer, or as a stream that has not been consumed yet.
"""

from __future__ import annotations

import inspect
import json
from typing import Any

from hotelbridge.protocols.errors import BodyParseError

_BOM = "\ufeff"


def strip_bom(text: str) -> str:
    return text[1:] if text.startswith(_BOM) else text


def parse_json_text(text: str) -> Any:
    """Parse JSON *text* after removing a leading byte-order mark."""
    text = strip_bom(text)
    if not text.strip():
        raise BodyParseError("Empty body")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise BodyParseError(f"Invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})") from exc


def _decode(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise BodyParseError(f"Body is not valid UTF-8: {exc.reason}") from exc


async def _drain_stream(source: Any) -> bytes:
    chunks: list[bytes] = []
    async for chunk in source:
        chunks.append(chunk.encode() if isinstance(chunk, str) else bytes(chunk))
    return b"".join(chunks)


async def read_body(source: Any) -> Any:
    """Return the decoded JSON value carried by *source*.

    Supported sources:

    * ``dict`` / ``list`` (already parsed, returned unchanged)
    * ``str``
    * ``bytes`` / ``bytearray`` / ``memoryview``
    * an async iterable of byte chunks (e.g. ``Request.stream()``)
    * an object with a sync or async ``read()`` method

    Raises :class:`BodyParseError` when nothing decodable is found.
    """
    if isinstance(source, (dict, list)):
        return source
    if isinstance(source, str):
        return parse_json_text(source)
    if isinstance(source, (bytes, bytearray, memoryview)):
        return parse_json_text(_decode(bytes(source)))
    if hasattr(source, "__aiter__"):
        return parse_json_text(_decode(await _drain_stream(source)))
    if hasattr(source, "read"):
        data = source.read()
        if inspect.isawaitable(data):
            data = await data
        if isinstance(data, str):
            return parse_json_text(data)
        return parse_json_text(_decode(bytes(data or b"")))
    if source is None:
        raise BodyParseError("Missing body")
    raise BodyParseError(f"Unsupported body type: {type(source).__name__}")
