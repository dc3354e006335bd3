"""Argument models for the booking API tools.

Each model validates the ``arguments`` of one tool and is the source of the
``inputSchema`` advertised by ``tools/list``. Field names are snake_case in
Python and camelCase on the wire.
"""

from __future__ import annotations

from collections.abc import Sequence
from copy import deepcopy
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Locale = Literal["de_DE", "en_DE"]
DestinationType = Literal["country-code", "city-code", "region-code"]


class WireModel(BaseModel):
    """Strict camelCase payload: unknown keys are rejected."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class OpenWireModel(WireModel):
    """camelCase payload that forwards unknown keys untouched."""

    model_config = ConfigDict(extra="allow")


# ---------------------------------------------------------------------------
# Query payloads
# ---------------------------------------------------------------------------


class LocaleQuery(WireModel):
    locale: Locale = Field(description="Locale like de_DE or en_DE.")


class HotelsQuery(WireModel):
    locale: Locale = Field(description="Locale like de_DE or en_DE.")
    page: int | None = Field(default=None, ge=1, description="Page number, starting at 1.")


class BookingSearchQuery(WireModel):
    booking_reference_number: str = Field(
        description="Itinerary/booking reference, e.g. 45666CK000940."
    )
    email: str = Field(description="Email address used for the booking.")
    locale: Locale


# ---------------------------------------------------------------------------
# Body payloads
# ---------------------------------------------------------------------------


class BookingCancelBody(WireModel):
    itinerary_number: str
    booking_number: str
    email: str
    locale: Locale


class Destination(OpenWireModel):
    id: str
    type: DestinationType
    label: str | None = None


class Travellers(OpenWireModel):
    adult_count: int = Field(ge=1)
    children_ages: list[int] | None = None


class RoomConfiguration(OpenWireModel):
    travellers: Travellers
    room_code: str | None = None
    board_type_op_code: str | None = None
    booking_code: str | None = None


class FindHotelsBody(OpenWireModel):
    destination: Destination
    hotel_id: str | None = None
    departure_date: str = Field(description="Arrival date, YYYY-MM-DD.")
    return_date: str = Field(description="Departure date, YYYY-MM-DD.")
    currency: str = Field(description="ISO currency code, e.g. EUR.")
    room_configurations: list[RoomConfiguration]
    locale: Locale


class OfferBody(OpenWireModel):
    hotel_id: str
    departure_date: str = Field(description="Arrival date, YYYY-MM-DD.")
    return_date: str = Field(description="Departure date, YYYY-MM-DD.")
    currency: str = Field(description="ISO currency code, e.g. EUR.")
    room_configurations: list[RoomConfiguration] = Field(
        description="Rooms to price; an empty list asks for a proposal."
    )
    locale: Locale


# ---------------------------------------------------------------------------
# Tool arguments
# ---------------------------------------------------------------------------


class ToolArguments(WireModel):
    headers: dict[str, str] | None = Field(
        default=None, description="Extra HTTP headers forwarded to the booking API."
    )


class LocaleArgs(ToolArguments):
    query: LocaleQuery


class HotelsListArgs(ToolArguments):
    query: HotelsQuery


class BookingSearchArgs(ToolArguments):
    query: BookingSearchQuery


class BookingCancelArgs(ToolArguments):
    body: BookingCancelBody


class FindHotelsArgs(ToolArguments):
    body: FindHotelsBody


class OfferArgs(ToolArguments):
    body: OfferBody


NO_ARGUMENTS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {},
}


def input_schema(model: type[BaseModel]) -> dict[str, Any]:
    """Return the JSON Schema of *model* with every ``$ref`` inlined."""
    schema = model.model_json_schema(by_alias=True)
    defs = schema.pop("$defs", {})
    return _inline(schema, defs)


def _inline(node: Any, defs: dict[str, Any]) -> Any:
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str) and ref.startswith("#/$defs/"):
            target = deepcopy(defs[ref.rsplit("/", 1)[-1]])
            extra = {k: v for k, v in node.items() if k != "$ref"}
            return _inline({**target, **extra}, defs)
        return {key: _inline(value, defs) for key, value in node.items()}
    if isinstance(node, list):
        return [_inline(item, defs) for item in node]
    return node


def describe_errors(errors: Sequence[Any]) -> str:
    """Render pydantic error dicts as ``"loc: message; ..."``."""
    parts = []
    for error in errors:
        location = ".".join(str(part) for part in error["loc"]) or "arguments"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)
