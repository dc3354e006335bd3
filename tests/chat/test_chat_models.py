"""Tests for chat transcript and request models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from hotelbridge.chat.models import ChatMessage, ChatRequest, ToolCall


class TestToolCall:
    def test_generated_id(self) -> None:
        call = ToolCall(name="ping")
        assert call.id.startswith("call_")
        assert call.id != ToolCall(name="ping").id

    def test_parsed_arguments(self) -> None:
        assert ToolCall(name="t", arguments='{"a": 1}').parsed_arguments() == {"a": 1}

    @pytest.mark.parametrize("raw", ["not json", "[1, 2]", "", "null"])
    def test_unusable_arguments_become_empty(self, raw: str) -> None:
        assert ToolCall(name="t", arguments=raw).parsed_arguments() == {}

    def test_to_provider(self) -> None:
        call = ToolCall(id="call_9", name="ping", arguments="{}")
        assert call.to_provider() == {
            "id": "call_9",
            "type": "function",
            "function": {"name": "ping", "arguments": "{}"},
        }


class TestChatMessage:
    def test_assistant_with_tool_calls(self) -> None:
        message = ChatMessage.assistant(None, tool_calls=[ToolCall(id="c1", name="ping")])
        provider = message.to_provider()
        assert provider["role"] == "assistant"
        assert provider["content"] == ""
        assert provider["tool_calls"][0]["id"] == "c1"

    def test_tool_message(self) -> None:
        provider = ChatMessage.tool("{}", tool_call_id="c1", name="ping").to_provider()
        assert provider == {"role": "tool", "content": "{}", "tool_call_id": "c1", "name": "ping"}

    def test_plain_message_has_no_extras(self) -> None:
        assert ChatMessage.user("hi").to_provider() == {"role": "user", "content": "hi"}


class TestChatRequest:
    def test_history_defaults_empty(self) -> None:
        assert ChatRequest(message="hello").history == []

    def test_blank_message_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Message is required"):
            ChatRequest(message="   ")

    def test_tool_role_not_allowed_in_history(self) -> None:
        with pytest.raises(ValidationError):
            ChatRequest.model_validate({"message": "x", "history": [{"role": "tool", "content": "y"}]})
