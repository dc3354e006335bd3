"""Plain REST bridge over the booking API, for clients that cannot speak JSON-RPC.

Each route forwards to one catalog endpoint through :class:`BookingApiClient`
and relays the upstream status and body unchanged. The bridge's own OpenAPI
document is served at ``/bridge/openapi.json``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from fastapi import APIRouter, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from hotelbridge import __version__
from hotelbridge.protocols.errors import UpstreamError, UpstreamTimeoutError
from hotelbridge.tools.booking_api import BookingApiClient
from hotelbridge.tools.catalog import catalog_entry
from hotelbridge.tools.schemas import (
    FindHotelsBody,
    HotelsQuery,
    Locale,
    LocaleQuery,
    OfferBody,
    describe_errors,
)

logger = logging.getLogger(__name__)

_VERBS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")

_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"description": "Invalid input"},
    502: {"description": "Booking API unreachable or timed out"},
}

bridge_router = APIRouter(prefix="/bridge", tags=["bridge"])


def get_api(request: Request) -> BookingApiClient:
    """Per-request API client built from the app's settings."""
    return BookingApiClient(request.app.state.settings, transport=request.app.state.api_transport)


def _relay(status: int, data: Any) -> Response:
    if isinstance(data, str):
        return PlainTextResponse(data, status_code=status)
    return JSONResponse(data, status_code=status)


def _decode_text(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


async def _forward(
    api: BookingApiClient,
    tool_name: str,
    *,
    query: dict[str, Any] | None = None,
    body: Any = None,
) -> Response:
    tool = catalog_entry(tool_name)
    try:
        data = await api.request(tool.method, tool.route, query=query, body=body)
    except UpstreamError as exc:
        return _relay(exc.status, _decode_text(exc.body))
    except (UpstreamTimeoutError, httpx.HTTPError) as exc:
        logger.warning("Bridge %s failed: %s", tool.route, exc)
        return JSONResponse({"error": str(exc) or type(exc).__name__}, status_code=502)
    except Exception as exc:
        logger.exception("Bridge %s crashed", tool.route)
        return JSONResponse({"error": str(exc) or type(exc).__name__}, status_code=500)
    return _relay(200, data)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@bridge_router.get("", include_in_schema=False)
@bridge_router.get("/health", operation_id="health", summary="Bridge liveness check")
async def health() -> dict[str, bool]:
    return {"ok": True}


@bridge_router.post(
    "/find-hotels",
    operation_id="findHotels",
    summary="Find hotels by destination, dates and room configurations",
    responses=_RESPONSES,
)
async def find_hotels(body: FindHotelsBody, api: BookingApiClient = Depends(get_api)) -> Response:
    return await _forward(api, "find_hotels", body=body.model_dump(by_alias=True, exclude_none=True))


@bridge_router.post(
    "/hotel-offer",
    operation_id="hotelOffer",
    summary="Get hotel offers (a proposal when roomConfigurations is empty)",
    responses=_RESPONSES,
)
async def hotel_offer(body: OfferBody, api: BookingApiClient = Depends(get_api)) -> Response:
    return await _forward(api, "hotel_offers", body=body.model_dump(by_alias=True, exclude_none=True))


@bridge_router.get("/hotels", operation_id="listHotels", summary="List hotels", responses=_RESPONSES)
async def list_hotels(
    locale: Locale = Query(description="Locale like de_DE or en_DE."),
    page: int | None = Query(default=None, ge=1, description="Page number, starting at 1."),
    api: BookingApiClient = Depends(get_api),
) -> Response:
    query = HotelsQuery(locale=locale, page=page)
    return await _forward(api, "hotels_list", query=query.model_dump(by_alias=True, exclude_none=True))


@bridge_router.get("/currencies", operation_id="listCurrencies", summary="List currencies", responses=_RESPONSES)
async def list_currencies(
    locale: Locale = Query(description="Locale like de_DE or en_DE."),
    api: BookingApiClient = Depends(get_api),
) -> Response:
    query = LocaleQuery(locale=locale)
    return await _forward(api, "currencies_list", query=query.model_dump(by_alias=True))


def _reject_other_verbs(path: str, allowed: str) -> None:
    async def wrong_verb() -> JSONResponse:
        return JSONResponse({"error": f"Use {allowed}"}, status_code=405)

    methods = [verb for verb in _VERBS if verb != allowed]
    bridge_router.add_api_route(path, wrong_verb, methods=methods, include_in_schema=False)


_reject_other_verbs("/find-hotels", "POST")
_reject_other_verbs("/hotel-offer", "POST")
_reject_other_verbs("/hotels", "GET")
_reject_other_verbs("/currencies", "GET")


@bridge_router.get("/openapi.json", include_in_schema=False)
async def bridge_openapi(request: Request) -> JSONResponse:
    """OpenAPI 3.1 document describing only the bridge routes."""
    document = get_openapi(
        title="hotelbridge booking bridge",
        version=__version__,
        openapi_version="3.1.0",
        description="REST access to the hotel-booking API tools.",
        routes=bridge_router.routes,
        servers=[{"url": str(request.base_url).rstrip("/")}],
    )
    return JSONResponse(document)


@bridge_router.api_route("/{unknown:path}", methods=list(_VERBS), include_in_schema=False)
async def not_found(unknown: str) -> JSONResponse:
    return JSONResponse({"error": "Not found"}, status_code=404)


async def validation_error_response(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer request validation failures with 400 ``{"error": ...}``."""
    errors = exc.errors()
    for error in errors:
        location = tuple(error.get("loc", ()))
        if error.get("type") == "missing" and len(location) == 2 and location[0] == "query":
            return JSONResponse({"error": f"Missing query param: {location[1]}"}, status_code=400)
    return JSONResponse({"error": f"Invalid input: {describe_errors(errors)}"}, status_code=400)
