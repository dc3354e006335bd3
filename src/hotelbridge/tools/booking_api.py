"""BookingApiClient — outbound HTTP calls to the remote hotel-booking API."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any

import httpx

from hotelbridge.protocols.errors import UpstreamError, UpstreamTimeoutError

if TYPE_CHECKING:
    from hotelbridge.config import Settings

logger = logging.getLogger(__name__)

_BODYLESS_METHODS = frozenset({"GET", "HEAD"})


def join_url(base: str, route: str) -> str:
    """Append *route* to *base* with exactly one slash between them."""
    return base.rstrip("/") + "/" + route.lstrip("/")


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def decode_body(response: httpx.Response) -> Any:
    """Parse a JSON response body; anything else comes back as text."""
    text = response.text
    if "json" in response.headers.get("content-type", ""):
        try:
            return json.loads(text or "{}")
        except json.JSONDecodeError:
            logger.warning("%s declared JSON but sent an unparseable body", response.url)
    return text


class BookingApiClient:
    """Issues one request per call against the configured API base.

    Every request is bounded by the configured timeout as a whole, not just
    per connect/read phase. Credentials follow ``Settings.auth_scheme``;
    configured extra headers come next and caller-supplied headers last.
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base = settings.api_base
        self._token = settings.api_token
        self._auth_scheme = settings.auth_scheme
        self._extra_headers = dict(settings.extra_headers)
        self._timeout = settings.timeout
        self._transport = transport

    def build_headers(self, extra: dict[str, Any] | None = None) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self._token and self._auth_scheme == "bearer":
            headers["Authorization"] = f"Bearer {self._token}"
        elif self._token and self._auth_scheme == "x-api-key":
            headers["X-API-Key"] = self._token
        headers.update(self._extra_headers)
        for key, value in (extra or {}).items():
            headers[str(key)] = str(value)
        return headers

    async def request(
        self,
        method: str,
        route: str,
        *,
        query: dict[str, Any] | None = None,
        body: Any = None,
        headers: dict[str, Any] | None = None,
    ) -> Any:
        """Call ``method route`` and return the decoded response body.

        Raises:
            UpstreamError: the API answered with a non-2xx status.
            UpstreamTimeoutError: no complete answer within the timeout.
            httpx.HTTPError: any other transport failure.
        """
        verb = method.upper()
        url = join_url(self._base, route)
        params = {k: _query_value(v) for k, v in (query or {}).items() if v is not None}

        content: str | None = None
        if verb not in _BODYLESS_METHODS and body is not None:
            content = body if isinstance(body, str) else json.dumps(body)

        logger.debug("%s %s params=%s", verb, url, params)
        try:
            response = await asyncio.wait_for(
                self._send(verb, url, params, self.build_headers(headers), content),
                timeout=self._timeout,
            )
        except TimeoutError as exc:
            raise UpstreamTimeoutError(verb, url, self._timeout) from exc
        except httpx.TimeoutException as exc:
            raise UpstreamTimeoutError(verb, url, self._timeout) from exc

        if not response.is_success:
            raise UpstreamError(response.status_code, response.reason_phrase, response.text)
        return decode_body(response)

    async def _send(
        self,
        verb: str,
        url: str,
        params: dict[str, str],
        headers: dict[str, str],
        content: str | None,
    ) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            return await client.request(verb, url, params=params, headers=headers, content=content)
