"""Shared fixtures."""

from __future__ import annotations

import pytest

from hotelbridge.config import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_base="https://api.test/api/v1",
        api_token="secret-token",
        timeout=5.0,
        llm_model="gpt-4o-mini",
        llm_api_key="test-key",
        router_url="https://router.test/mcp",
    )
