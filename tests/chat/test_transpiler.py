"""Tests for router tool -> function schema conversion."""

from __future__ import annotations

from hotelbridge.chat.models import RouterToolDef
from hotelbridge.chat.transpiler import to_function_schema, to_function_schemas
from tests.helpers import currencies_tool_def


class TestToFunctionSchema:
    def test_headers_removed(self) -> None:
        schema = to_function_schema(RouterToolDef.model_validate(currencies_tool_def()))
        function = schema["function"]
        assert schema["type"] == "function"
        assert function["name"] == "currencies_list"
        assert set(function["parameters"]["properties"]) == {"query"}
        assert function["parameters"]["required"] == ["query"]

    def test_required_headers_dropped(self) -> None:
        tool = RouterToolDef(
            name="t",
            input_schema={
                "type": "object",
                "properties": {"headers": {"type": "object"}},
                "required": ["headers"],
            },
        )
        parameters = to_function_schema(tool)["function"]["parameters"]
        assert parameters == {"type": "object", "properties": {}, "required": []}

    def test_missing_schema(self) -> None:
        parameters = to_function_schema(RouterToolDef(name="ping"))["function"]["parameters"]
        assert parameters == {"type": "object", "properties": {}, "required": []}


class TestToFunctionSchemas:
    def test_malformed_entries_skipped(self) -> None:
        schemas = to_function_schemas([{"description": "no name"}, {"name": ""}, currencies_tool_def()])
        assert [s["function"]["name"] for s in schemas] == ["currencies_list"]
