"""
talent_sdk/rest/rest_client.py

WHAT THIS FILE IS FOR
---------------------
This module is the SDK's only HTTP transport. It takes a RestRequest,
performs one exchange with the API over `httpx.AsyncClient`, and turns
the result into a typed RestResponse.

It exists to:
- Join the data-center root with the request endpoint
- Merge per-request headers with the client's permanent headers
- Route restricted headers through dedicated setters
- Apply the configured timeout
- Convert transport failures into a synthesized RestResponse

TRANSPORT FAILURES
------------------
Low-level failures never escape `execute()` as raw exceptions:

- httpx.TimeoutException       -> status 408, exception message
- any other exception          -> status 500, exception message

The caller sees a RestResponse either way and can treat "the server
never answered" like "the server answered with an error".

HEADER RULES
------------
1) Per-request headers are applied first
2) Permanent client headers fill in names the request did not set
   (empty values are skipped). They never override per-request values.
3) The SDK user agent is set unless the request set one
4) Content-Length comes from the body buffer

Restricted names are the ones the HTTP stack manages itself. Each has
a dedicated setter; a restricted name without one raises
NotImplementedError before any network I/O.

WHAT THIS FILE IS NOT FOR
-------------------------
This module is NOT responsible for:
- Retry logic (the SDK never retries; see client.py)
- Knowing endpoints or request bodies
- Raising API errors

RELATIONSHIP TO client.py
-------------------------
- rest_client.py: transport only, returns RestResponse
- client.py: domain-aware, interprets RestResponse and raises typed errors
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError, version
from typing import Callable, Dict, Optional, Type, TypeVar

import httpx
import structlog
from pydantic import BaseModel

from talent_sdk.rest.rest_request import RestRequest, join_url
from talent_sdk.rest.rest_response import INTERNAL_ERROR, REQUEST_TIMEOUT, RestResponse

logger = structlog.get_logger(__name__)

try:
    SDK_VERSION = version("talent-sdk")
except PackageNotFoundError:  # source checkout, not installed
    SDK_VERSION = "0.0.0"
USER_AGENT = f"talent-sdk-python-{SDK_VERSION}"

T = TypeVar("T", bound=BaseModel)

RESTRICTED_HEADERS = frozenset(
    {
        "accept",
        "connection",
        "content-length",
        "content-type",
        "date",
        "expect",
        "host",
        "if-modified-since",
        "range",
        "referer",
        "transfer-encoding",
        "user-agent",
        "proxy-connection",
    }
)


@dataclass
class WireHeaders:
    """Headers for one exchange, restricted ones held in dedicated slots."""

    accept: Optional[str] = None
    connection: Optional[str] = None
    content_length: Optional[int] = None
    content_type: Optional[str] = None
    expect: Optional[str] = None
    host: Optional[str] = None
    referer: Optional[str] = None
    transfer_encoding: Optional[str] = None
    user_agent: Optional[str] = None
    custom: Dict[str, str] = field(default_factory=dict)

    def set(self, name: str, value: str) -> None:
        key = name.strip().lower()
        if key not in RESTRICTED_HEADERS:
            self.custom[name] = value
            return

        setter = _RESTRICTED_SETTERS.get(key)
        if setter is None:
            raise NotImplementedError(
                f"Header '{name}' is restricted but the handler is not implemented."
            )
        setter(self, value)

    def has(self, name: str) -> bool:
        key = name.strip().lower()
        if key in _RESTRICTED_SETTERS:
            return getattr(self, key.replace("-", "_")) is not None
        return any(k.lower() == key for k in self.custom)

    def to_dict(self) -> Dict[str, str]:
        out = dict(self.custom)
        for key in _RESTRICTED_SETTERS:
            value = getattr(self, key.replace("-", "_"))
            if value is not None:
                out[_CANONICAL_NAMES[key]] = str(value)
        return out


def _set_content_length(headers: WireHeaders, value: str) -> None:
    headers.content_length = int(value)


def _slot_setter(attr: str) -> Callable[[WireHeaders, str], None]:
    def _set(headers: WireHeaders, value: str) -> None:
        setattr(headers, attr, value)

    return _set


_RESTRICTED_SETTERS: Dict[str, Callable[[WireHeaders, str], None]] = {
    "accept": _slot_setter("accept"),
    "connection": _slot_setter("connection"),
    "content-length": _set_content_length,
    "content-type": _slot_setter("content_type"),
    "expect": _slot_setter("expect"),
    "host": _slot_setter("host"),
    "referer": _slot_setter("referer"),
    "transfer-encoding": _slot_setter("transfer_encoding"),
    "user-agent": _slot_setter("user_agent"),
}

_CANONICAL_NAMES = {
    "accept": "Accept",
    "connection": "Connection",
    "content-length": "Content-Length",
    "content-type": "Content-Type",
    "expect": "Expect",
    "host": "Host",
    "referer": "Referer",
    "transfer-encoding": "Transfer-Encoding",
    "user-agent": "User-Agent",
}


class RestClient:
    """
    Async transport bound to one data-center root.

    `headers` holds the permanent headers sent with every request
    (credentials). `transport` is handed to httpx as-is; tests pass an
    `httpx.MockTransport` here.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self.headers: Dict[str, str] = {}
        self._transport = transport

    def build_headers(self, request: RestRequest) -> WireHeaders:
        wire = WireHeaders()

        for name, value in request.headers.items():
            wire.set(name, value)

        for name, value in self.headers.items():
            if value and not wire.has(name):
                wire.set(name, value)

        if wire.user_agent is None:
            wire.user_agent = USER_AGENT

        return wire

    async def execute(self, request: RestRequest, model: Type[T]) -> RestResponse[T]:
        url = join_url(self.base_url, request.endpoint)

        # restricted-header failures surface here, before any I/O
        wire = self.build_headers(request)

        body = request.body_bytes()
        if body is not None:
            wire.content_length = len(body)

        logger.debug("rest_request_sent", method=request.method.value, url=url)
        started = time.perf_counter()

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                resp = await client.request(
                    request.method.value,
                    url,
                    headers=wire.to_dict(),
                    content=body,
                )
        except httpx.TimeoutException as exc:
            logger.warning("rest_transport_failed", url=url, error_type=type(exc).__name__, error=str(exc))
            return RestResponse.from_transport_error(REQUEST_TIMEOUT, str(exc) or "Request timed out")
        except httpx.HTTPError as exc:
            logger.warning("rest_transport_failed", url=url, error_type=type(exc).__name__, error=str(exc))
            return RestResponse.from_transport_error(INTERNAL_ERROR, str(exc) or type(exc).__name__)
        except Exception as exc:  # noqa: BLE001
            logger.error("rest_transport_failed", url=url, error_type=type(exc).__name__, error=str(exc))
            return RestResponse.from_transport_error(INTERNAL_ERROR, str(exc) or type(exc).__name__)

        logger.info(
            "rest_response_received",
            method=request.method.value,
            url=url,
            status_code=resp.status_code,
            elapsed_ms=int((time.perf_counter() - started) * 1000),
        )

        return RestResponse.create(
            resp.content,
            resp.status_code,
            resp.reason_phrase,
            resp.headers,
            model,
        )
