"""Router tool entries -> OpenAI-compatible function schemas."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from hotelbridge.chat.models import RouterToolDef

logger = logging.getLogger(__name__)

# Parameters the model must never author itself.
HIDDEN_PARAMETERS = frozenset({"headers"})


def to_function_schema(tool_def: RouterToolDef) -> dict[str, Any]:
    """Convert a router tool into a ``{"type": "function", ...}`` entry."""
    schema = tool_def.input_schema
    properties = schema.get("properties") if isinstance(schema.get("properties"), dict) else {}
    required = schema.get("required") if isinstance(schema.get("required"), list) else []

    parameters: dict[str, Any] = {
        "type": "object",
        "properties": {k: v for k, v in properties.items() if k not in HIDDEN_PARAMETERS},
        "required": [name for name in required if name not in HIDDEN_PARAMETERS],
    }
    if isinstance(schema.get("$defs"), dict):
        parameters["$defs"] = schema["$defs"]

    return {
        "type": "function",
        "function": {
            "name": tool_def.name,
            "description": tool_def.description,
            "parameters": parameters,
        },
    }


def to_function_schemas(raw_tools: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Convert every well-formed entry of a ``tools/list`` result."""
    schemas: list[dict[str, Any]] = []
    for raw in raw_tools:
        try:
            tool_def = RouterToolDef.model_validate(raw)
        except ValidationError:
            logger.warning("Skipping malformed tool entry: %r", raw)
            continue
        schemas.append(to_function_schema(tool_def))
    return schemas
