"""Tests for JSON-RPC envelope helpers and ToolResult."""

from __future__ import annotations

import json

from hotelbridge.protocols.rpc.models import (
    INTERNAL_ERROR,
    JsonRpcRequest,
    ToolResult,
    extract_id,
    normalize_call_params,
    rpc_error,
    rpc_result,
)


class TestEnvelopes:
    def test_result_envelope(self) -> None:
        assert rpc_result(7, {"ok": True}) == {"jsonrpc": "2.0", "id": 7, "result": {"ok": True}}

    def test_error_envelope_keeps_null_id(self) -> None:
        envelope = rpc_error(None, INTERNAL_ERROR, "Internal error", "boom")
        assert envelope == {
            "jsonrpc": "2.0",
            "id": None,
            "error": {"code": -32603, "message": "Internal error", "data": "boom"},
        }

    def test_error_without_data_omits_key(self) -> None:
        envelope = rpc_error("abc", -32601, "Tool not found: x")
        assert "data" not in envelope["error"]
        assert "result" not in envelope

    def test_result_and_error_are_exclusive(self) -> None:
        assert "error" not in rpc_result(1, None)
        assert "result" not in rpc_error(1, -32600, "Invalid Request")

    def test_request_model_defaults(self) -> None:
        request = JsonRpcRequest(method="tools/list")
        assert request.jsonrpc == "2.0"
        assert request.id is None


class TestExtractId:
    def test_string_and_int(self) -> None:
        assert extract_id({"id": "a"}) == "a"
        assert extract_id({"id": 3}) == 3

    def test_fractional_number(self) -> None:
        assert extract_id({"id": 1.5}) == 1.5
        assert extract_id({"id": -0.25}) == -0.25

    def test_unusable_ids(self) -> None:
        assert extract_id({"id": True}) is None
        assert extract_id({"id": {"x": 1}}) is None
        assert extract_id(["not", "a", "dict"]) is None


class TestNormalizeCallParams:
    def test_arguments_wins(self) -> None:
        name, args = normalize_call_params({"name": "t", "arguments": {"a": 1}, "args": {"b": 2}})
        assert name == "t"
        assert args == {"a": 1}

    def test_args_fallback(self) -> None:
        _, args = normalize_call_params({"name": "t", "args": {"b": 2}, "c": 3})
        assert args == {"b": 2}

    def test_remaining_params(self) -> None:
        _, args = normalize_call_params({"name": "t", "query": {"locale": "en_DE"}})
        assert args == {"query": {"locale": "en_DE"}}

    def test_null_arguments_become_empty(self) -> None:
        _, args = normalize_call_params({"name": "t", "arguments": None})
        assert args == {}

    def test_missing_or_blank_name(self) -> None:
        assert normalize_call_params({"arguments": {}})[0] is None
        assert normalize_call_params({"name": ""})[0] is None
        assert normalize_call_params({"name": 5})[0] is None
        assert normalize_call_params(None) == (None, {})


class TestToolResult:
    def test_ok_text_without_data(self) -> None:
        assert ToolResult.ok_text("pong").dump() == {"content": [{"type": "text", "text": "pong"}]}

    def test_error_text(self) -> None:
        dumped = ToolResult.error_text("failed").dump()
        assert dumped["isError"] is True
        assert dumped["content"][0]["text"] == "failed"
        assert "structuredContent" not in dumped

    def test_json_round_trip(self) -> None:
        data = {"currencies": [{"code": "EUR", "symbol": "€"}], "count": 1}
        result = ToolResult.ok_text("Currencies OK", data)

        decoded = ToolResult.model_validate(json.loads(json.dumps(result.dump())))

        assert decoded.content[0].text == "Currencies OK"
        assert decoded.structured_content == data
        assert decoded.text == "Currencies OK"
