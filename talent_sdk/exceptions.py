"""Exceptions raised by the talent SDK client."""

from __future__ import annotations

from typing import Any, Optional


class TalentError(Exception):
    """Base exception for every failed API call.

    Catching this catches anything the client raises for a call that did not
    do what was asked. Argument validation errors are plain ValueError and are
    not part of this hierarchy.
    """

    def __init__(
        self,
        message: Optional[str],
        *,
        code: Optional[str] = None,
        transaction_id: Optional[str] = None,
        status_code: Optional[int] = None,
        request_body: Optional[str] = None,
        response: Any = None,
        response_body: Optional[str] = None,
    ) -> None:
        """Initialize the error with everything known about the failed call.

        Args:
            message: Human-readable error message (server message when there is one)
            code: Server error code, None when the server never answered
            transaction_id: Server transaction id, for support requests
            status_code: HTTP status (synthesized 408/500 for transport faults)
            request_body: Full JSON request body, only when the client was
                created with show_full_request_body_in_exceptions=True
            response: The RestResponse of the call
            response_body: Raw response body when it was retained
        """
        super().__init__(message or "")
        self.message = message
        self.code = code
        self.transaction_id = transaction_id
        self.status_code = status_code
        self.request_body = request_body
        self.response = response
        self.response_body = response_body

    def __str__(self) -> str:
        return self.message or ""


class TalentTransportError(TalentError):
    """The request never produced an HTTP response.

    Timeouts are reported with status 408 and every other network failure
    with status 500. `code` is always None.
    """

    pass


class TalentApiError(TalentError):
    """The server answered but the call failed.

    Raised for an unsuccessful HTTP status, a failing top-level Info code, a
    failed parsing stage, or a successful status without a usable payload.
    """

    pass


class TalentDeserializationError(TalentApiError):
    """A 2xx response body could not be read into the expected model.

    The parser exception is chained as __cause__ and the raw body is kept in
    `response_body`.
    """

    pass


class TalentSubOperationError(TalentApiError):
    """A secondary stage of a composite call failed.

    The primary work succeeded, so `response_data` holds the full typed
    response (e.g. the parsed document of a parse call whose indexing step
    failed).
    """

    stage = "unknown"

    def __init__(self, message: Optional[str], *, response_data: Any = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.response_data = response_data


class TalentGeocodeError(TalentSubOperationError):
    stage = "geocode"


class GeocodeResumeError(TalentGeocodeError):
    pass


class GeocodeJobError(TalentGeocodeError):
    pass


class TalentIndexingError(TalentSubOperationError):
    stage = "indexing"


class IndexResumeError(TalentIndexingError):
    pass


class IndexJobError(TalentIndexingError):
    pass
