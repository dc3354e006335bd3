"""Runtime settings: base URLs, tokens, timeouts and model selection.

Read once from the process environment and passed explicitly into the
registry factory, the chat orchestrator and the app factory.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://prod-api.amello.plusline.net/api/v1"
DEFAULT_SYSTEM_PROMPT = (
    "You can call tools via MCP to fetch booking and hotel data. Be concise and precise."
)

AuthScheme = Literal["bearer", "x-api-key", "none"]


class Settings(BaseModel):
    """Configuration shared by the tool router, the bridge and the chat orchestrator."""

    model_config = ConfigDict(frozen=True)

    api_base: str = DEFAULT_API_BASE
    api_token: str | None = None
    auth_scheme: AuthScheme = "bearer"
    extra_headers: dict[str, str] = Field(default_factory=dict)
    timeout: float = Field(default=30.0, gt=0)
    llm_model: str = "gpt-4o-mini"
    llm_api_key: str | None = None
    llm_api_base: str | None = None
    router_url: str = "http://127.0.0.1:8000/mcp"
    max_tool_rounds: int = Field(default=1, ge=1)
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    temperature: float = 0.2
    followup_temperature: float = 0.1
    log_level: str = "INFO"

    @property
    def token_present(self) -> bool:
        return bool(self.api_token)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        ``API_TIMEOUT_MS`` is given in milliseconds and ``AMELLO_EXTRA_HEADERS``
        is a JSON object; unset or empty variables fall back to the field
        defaults. ``AMELLO_API_TOKEN`` takes precedence over ``AMELLO_API_KEY``.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        def _set(field: str, var: str) -> None:
            raw = env.get(var)
            if raw is not None and raw.strip():
                values[field] = raw.strip()

        _set("api_base", "API_BASE")
        _set("api_token", "AMELLO_API_KEY")
        _set("api_token", "AMELLO_API_TOKEN")
        _set("llm_model", "OPENAI_MODEL")
        _set("llm_api_key", "OPENAI_API_KEY")
        _set("llm_api_base", "OPENAI_API_BASE")
        _set("router_url", "MCP_URL")
        _set("max_tool_rounds", "CHAT_MAX_TOOL_ROUNDS")
        _set("system_prompt", "CHAT_SYSTEM_PROMPT")
        _set("log_level", "LOG_LEVEL")

        scheme = env.get("AMELLO_AUTH_SCHEME")
        if scheme is not None and scheme.strip():
            values["auth_scheme"] = scheme.strip().lower()

        extra = env.get("AMELLO_EXTRA_HEADERS")
        if extra is not None and extra.strip():
            values["extra_headers"] = _parse_extra_headers(extra)

        timeout_ms = env.get("API_TIMEOUT_MS")
        if timeout_ms is not None and timeout_ms.strip():
            values["timeout"] = float(timeout_ms) / 1000.0

        return cls.model_validate(values)


def _parse_extra_headers(raw: str) -> dict[str, str]:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Ignoring AMELLO_EXTRA_HEADERS: not valid JSON")
        return {}
    if not isinstance(parsed, dict):
        logger.warning("Ignoring AMELLO_EXTRA_HEADERS: expected a JSON object")
        return {}
    return {str(k): str(v) for k, v in parsed.items()}
