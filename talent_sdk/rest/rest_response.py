"""
talent_sdk/rest/rest_response.py

WHAT THIS FILE IS FOR
---------------------
The typed result of one HTTP exchange.

Every call through the transport produces exactly one RestResponse,
including calls where the server never answered (those get a
synthesized status, see `from_transport_error`). Downstream code can
therefore branch on a single object without try/except around I/O.

SUCCESS RULE
------------
`is_successful` is true for status 200-299 and nothing else.
Every other layer uses this predicate; do not re-derive it elsewhere.

DESERIALIZATION POLICY
----------------------
- No Content-Type / not application/json
    -> nothing is read; data and body stay None
- JSON + 2xx + valid for the expected model
    -> data is set; body stays None (no duplicate copy of the payload)
- JSON + 2xx + invalid
    -> data None, body kept, deserialization_error set
       ("server says OK but sent something we cannot read")
- JSON + non-2xx
    -> data None whatever the content, body kept for diagnostics,
       error_info parsed from the standard {"Info": {...}} block when
       the body has one

WHAT THIS FILE IS NOT FOR
-------------------------
- Raising errors (see talent_sdk/client.py and exceptions.py)
- Inspecting composite sub-results
"""

from __future__ import annotations

from typing import Generic, Mapping, Optional, Type, TypeVar, Union

import httpx
import structlog
from pydantic import BaseModel

from talent_sdk.rest.content_types import JSON, parse_content_type_header
from talent_sdk.schemas.base import ApiResponse, ApiResponseInfo

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

# Synthesized statuses for exchanges that produced no HTTP response
REQUEST_TIMEOUT = 408
INTERNAL_ERROR = 500


class _ErrorEnvelope(ApiResponse[object]):
    pass


class RestResponse(Generic[T]):
    def __init__(
        self,
        status_code: int,
        status_description: str,
        headers: Optional[Union[httpx.Headers, Mapping[str, str]]] = None,
    ) -> None:
        self.status_code = status_code
        self.status_description = status_description
        self.headers = httpx.Headers(headers or {})

        self.data: Optional[T] = None
        self.body: Optional[str] = None
        self.deserialization_error: Optional[Exception] = None
        self.error_info: Optional[ApiResponseInfo] = None
        self.transport_error = False

    @property
    def is_successful(self) -> bool:
        return 200 <= self.status_code <= 299

    @classmethod
    def create(
        cls,
        body: bytes,
        status_code: int,
        status_description: str,
        headers: Union[httpx.Headers, Mapping[str, str]],
        model: Type[T],
    ) -> "RestResponse[T]":
        response: RestResponse[T] = cls(status_code, status_description, headers)

        media_type, encoding = parse_content_type_header(response.headers.get("content-type"))
        if media_type != JSON:
            return response

        text = body.decode(encoding, errors="replace")

        if response.is_successful:
            try:
                response.data = model.model_validate_json(text)
            except ValueError as exc:
                response.deserialization_error = exc
                response.body = text
                logger.warning(
                    "rest_response_deserialization_failed",
                    status_code=status_code,
                    model=model.__name__,
                    error=str(exc),
                )
            return response

        response.body = text
        try:
            response.error_info = _ErrorEnvelope.model_validate_json(text).info
        except ValueError:
            # Non-2xx bodies are not guaranteed to follow the envelope
            response.error_info = None
        return response

    @classmethod
    def from_transport_error(cls, status_code: int, description: str) -> "RestResponse[T]":
        response: RestResponse[T] = cls(status_code, description)
        response.transport_error = True
        return response
