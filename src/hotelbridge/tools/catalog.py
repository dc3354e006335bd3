"""The fixed tool catalog and the per-request registry factory.

Every booking API tool is one row of :data:`CATALOG`; a single generic
handler builder turns each row into a registered tool.
"""

from __future__ import annotations

import json
import logging
import platform
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from hotelbridge.protocols.rpc.models import ToolResult
from hotelbridge.tools.booking_api import BookingApiClient
from hotelbridge.tools.registry import ToolDefinition, ToolHandler, ToolRegistry
from hotelbridge.tools.schemas import (
    NO_ARGUMENTS_SCHEMA,
    BookingCancelArgs,
    BookingSearchArgs,
    FindHotelsArgs,
    HotelsListArgs,
    LocaleArgs,
    OfferArgs,
    ToolArguments,
    describe_errors,
    input_schema,
)

if TYPE_CHECKING:
    import httpx

    from hotelbridge.config import Settings

logger = logging.getLogger(__name__)

_ARRAY_OF_OBJECTS: dict[str, Any] = {"type": "array", "items": {"type": "object"}}


@dataclass(frozen=True)
class ApiTool:
    """One remote endpoint exposed as a tool."""

    name: str
    method: str
    route: str
    label: str
    description: str
    arguments: type[ToolArguments]
    output_schema: dict[str, Any]
    summarize: Callable[[Any], str] | None = None

    def summary(self, data: Any) -> str:
        if self.summarize is not None:
            return self.summarize(data)
        return f"{self.label} OK"


def _summarize_hotels(data: Any) -> str:
    results = data.get("data", {}).get("results") if isinstance(data, dict) else None
    count = len(results) if isinstance(results, list) else 0
    return f"FindHotels OK ({count} results)"


CATALOG: tuple[ApiTool, ...] = (
    ApiTool(
        name="booking_search",
        method="GET",
        route="/booking/search",
        label="BookingSearch",
        description="GET /booking/search — find booking by bookingReferenceNumber + email + locale",
        arguments=BookingSearchArgs,
        output_schema={
            "type": "object",
            "properties": {
                "data": {
                    "type": "object",
                    "properties": {
                        "itineraryNumber": {"type": "string"},
                        "user": {"type": "object"},
                        "hotel": {"type": "object"},
                        "currency": {"type": "string"},
                        "status": {"type": "string"},
                    },
                }
            },
        },
    ),
    ApiTool(
        name="booking_cancel",
        method="POST",
        route="/booking/cancel",
        label="BookingCancel",
        description=(
            "POST /booking/cancel — cancel booking with itineraryNumber, bookingNumber, "
            "email, locale"
        ),
        arguments=BookingCancelArgs,
        output_schema={
            "type": "object",
            "properties": {
                "itineraryNumber": {"type": "string"},
                "bookingNumber": {"type": "string"},
                "email": {"type": "string"},
                "status": {"type": "string", "enum": ["CNCLD", "ERROR", "OK"]},
            },
        },
    ),
    ApiTool(
        name="find_hotels",
        method="POST",
        route="/find-hotels",
        label="FindHotels",
        description=(
            "POST /find-hotels — find hotels by destination, dates, currency, "
            "roomConfigurations, locale"
        ),
        arguments=FindHotelsArgs,
        output_schema={
            "type": "object",
            "properties": {
                "data": {
                    "type": "object",
                    "properties": {
                        "results": _ARRAY_OF_OBJECTS,
                        "currency": {"type": "string"},
                    },
                }
            },
        },
        summarize=_summarize_hotels,
    ),
    ApiTool(
        name="currencies_list",
        method="GET",
        route="/currencies",
        label="Currencies",
        description="GET /currencies — list supported currencies (requires locale)",
        arguments=LocaleArgs,
        output_schema=_ARRAY_OF_OBJECTS,
    ),
    ApiTool(
        name="hotels_list",
        method="GET",
        route="/hotels",
        label="Hotels",
        description="GET /hotels — paginated hotel list (requires locale; page default 1)",
        arguments=HotelsListArgs,
        output_schema=_ARRAY_OF_OBJECTS,
    ),
    ApiTool(
        name="hotel_offers",
        method="POST",
        route="/hotel/offer",
        label="HotelOffers",
        description=(
            "POST /hotel/offer — get hotel offers for multiple rooms; "
            "empty roomConfigurations returns a proposal"
        ),
        arguments=OfferArgs,
        output_schema={"type": "object", "properties": {"data": {"type": "object"}}},
    ),
    ApiTool(
        name="hotel_reference",
        method="GET",
        route="/hotel-reference",
        label="HotelReference",
        description="GET /hotel-reference — codes, names, rooms",
        arguments=LocaleArgs,
        output_schema=_ARRAY_OF_OBJECTS,
    ),
    ApiTool(
        name="crapi_hotel_contact",
        method="GET",
        route="/crapi/hotel/contact",
        label="CRAPI HotelContact",
        description="GET /crapi/hotel/contact — all hotel contact info",
        arguments=LocaleArgs,
        output_schema={
            "type": "object",
            "properties": {"code": {"type": "string"}, "contact": {"type": "object"}},
        },
    ),
    ApiTool(
        name="package_offer",
        method="POST",
        route="/offer/package",
        label="PackageOffer",
        description="POST /offer/package — create a packaged offer (returns offerId)",
        arguments=OfferArgs,
        output_schema={
            "type": "object",
            "properties": {"offerId": {"type": "string"}},
            "required": ["offerId"],
        },
    ),
)


def catalog_entry(name: str) -> ApiTool:
    """Return the catalog row called *name*.

    Raises:
        KeyError: no such tool in the catalog.
    """
    for tool in CATALOG:
        if tool.name == name:
            return tool
    raise KeyError(name)


def make_api_handler(tool: ApiTool, api: BookingApiClient) -> ToolHandler:
    """Build the handler for one catalog row.

    The handler validates its arguments, calls the API and reports every
    failure as an ``isError`` result instead of raising.
    """

    async def handler(arguments: dict[str, Any]) -> ToolResult:
        try:
            parsed = tool.arguments.model_validate(arguments)
        except ValidationError as exc:
            return ToolResult.error_text(
                f"{tool.name} failed: invalid arguments: {describe_errors(exc.errors())}"
            )

        payload = parsed.model_dump(by_alias=True, exclude_none=True)
        try:
            data = await api.request(
                tool.method,
                tool.route,
                query=payload.get("query"),
                body=payload.get("body"),
                headers=payload.get("headers"),
            )
        except Exception as exc:
            logger.warning("Tool %s failed: %s", tool.name, exc)
            return ToolResult.error_text(f"{tool.name} failed: {str(exc) or type(exc).__name__}")

        return ToolResult.ok_text(tool.summary(data), data)

    return handler


async def ping(_arguments: dict[str, Any]) -> ToolResult:
    """Health check."""
    return ToolResult.ok_text("pong", {"ok": True, "message": "pong"})


def make_status_handler(settings: Settings) -> ToolHandler:
    async def status(_arguments: dict[str, Any]) -> ToolResult:
        info = {
            "apiBase": settings.api_base,
            "tokenPresent": settings.token_present,
            "authScheme": settings.auth_scheme,
            "python": platform.python_version(),
        }
        return ToolResult.ok_text(json.dumps(info, indent=2), info)

    return status


def build_registry(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ToolRegistry:
    """Create a fresh registry holding ``ping``, the catalog, and ``api_status``."""
    registry = ToolRegistry()
    registry.register(
        ToolDefinition(
            name="ping",
            description="Health check: returns pong",
            input_schema=NO_ARGUMENTS_SCHEMA,
            output_schema={
                "type": "object",
                "additionalProperties": False,
                "properties": {"ok": {"type": "boolean"}, "message": {"type": "string"}},
                "required": ["ok", "message"],
            },
            handler=ping,
        )
    )

    api = BookingApiClient(settings, transport=transport)
    for tool in CATALOG:
        registry.register(
            ToolDefinition(
                name=tool.name,
                description=tool.description,
                input_schema=input_schema(tool.arguments),
                output_schema=tool.output_schema,
                handler=make_api_handler(tool, api),
            )
        )

    registry.register(
        ToolDefinition(
            name="api_status",
            description="Diagnostics: configured API base, auth scheme and whether a token is present",
            input_schema=NO_ARGUMENTS_SCHEMA,
            output_schema={
                "type": "object",
                "properties": {
                    "apiBase": {"type": "string"},
                    "tokenPresent": {"type": "boolean"},
                    "authScheme": {"type": "string", "enum": ["bearer", "x-api-key", "none"]},
                    "python": {"type": "string"},
                },
            },
            handler=make_status_handler(settings),
        )
    )
    return registry
