"""
talent_sdk/rest/rest_request.py

WHAT THIS FILE IS FOR
---------------------
A single outbound API request: relative endpoint, HTTP method, headers
and an optional UTF-8 JSON body.

LIFECYCLE
---------
- Created per call by the endpoint catalog (talent_sdk/endpoints.py)
- Body written at most once, before execution
- Read by the transport (talent_sdk/rest/rest_client.py)
- Closed by the caller's `with` block on every exit path

The body lives in an in-memory buffer so that it can be re-read after
the exchange when the client runs with request-body capture enabled.

WHAT THIS FILE IS NOT FOR
-------------------------
- Executing the request
- Knowing which endpoint exists (see endpoints.py)
"""

from __future__ import annotations

import io
from enum import Enum
from typing import Any, Dict, Optional

from talent_sdk.rest.content_types import DEFAULT_ENCODING, JSON, build_content_type_header
from talent_sdk.utils.serialization import dumps


class RestMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"
    PUT = "PUT"
    PATCH = "PATCH"


def join_url(base: str, path: str) -> str:
    """Join base root and endpoint with exactly one '/' between them."""
    if not base:
        return path
    if not path:
        return base
    return base.rstrip("/") + "/" + path.lstrip("/")


class RestRequest:
    def __init__(self, endpoint: str = "", method: RestMethod = RestMethod.GET) -> None:
        self.endpoint = endpoint
        self.method = method
        self.encoding = DEFAULT_ENCODING
        self.headers: Dict[str, str] = {}
        self._body: Optional[io.BytesIO] = None
        self._closed = False

    def __enter__(self) -> "RestRequest":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def add_header(self, name: str, value: str) -> None:
        self.headers[name] = value

    def write_utf8_json_body(self, obj: Any) -> None:
        if self._closed:
            raise ValueError("Cannot write the body of a closed RestRequest.")

        if self._body is not None:
            raise RuntimeError("write_utf8_json_body() cannot be called more than once.")

        self._body = io.BytesIO(dumps(obj).encode(self.encoding))
        self.headers["Content-Type"] = build_content_type_header(JSON, self.encoding)

    def body_bytes(self) -> Optional[bytes]:
        if self._closed:
            raise ValueError("Cannot read the body of a closed RestRequest.")
        if self._body is None:
            return None
        return self._body.getvalue()

    def get_body(self) -> str:
        data = self.body_bytes()
        return data.decode(self.encoding) if data is not None else ""

    def close(self) -> None:
        if self._closed:
            return
        if self._body is not None:
            self._body.flush()
            self._body.close()
            self._body = None
        self._closed = True
