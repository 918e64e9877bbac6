"""
talent_sdk/matching_ui.py

WHAT THIS FILE IS FOR
---------------------
`MatchingUIClient` opens hosted matching-UI sessions. It is obtained
from `TalentClient.ui(options)` and mirrors the client's match, search
and bimetric scoring calls, but:

- the request is wrapped as {"SaasRequest": ..., "UIOptions": ...}
- the `ui/` variant of the endpoint is called
- the answer is a session URL (`GenerateUIResponse`), not results

RESPONSE HANDLING
-----------------
UI endpoints do not use the {Info, Value} envelope, so failures carry
no server code or transaction id. On failure the raw response body
becomes the error message and a `matchui-<timestamp>` transaction id
is synthesized so the error can still be correlated in logs.

Transport faults and unreadable 2xx bodies are reported exactly as the
main client reports them.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Iterable, Optional

from talent_sdk.endpoints import (
    ApiEndpoints,
    build_bimetric_job_request,
    build_bimetric_resume_request,
    build_match_by_document_id_options,
    build_match_job_request,
    build_match_resume_request,
    build_search_request,
    require_ids,
)
from talent_sdk.exceptions import TalentApiError, TalentDeserializationError, TalentError, TalentTransportError
from talent_sdk.rest.rest_client import RestClient
from talent_sdk.rest.rest_request import RestRequest
from talent_sdk.schemas.documents import ParsedJob, ParsedJobWithId, ParsedResume, ParsedResumeWithId
from talent_sdk.schemas.matching import (
    BimetricTargets,
    CategoryWeights,
    FilterCriteria,
    PaginationSettings,
    SearchMatchSettings,
)
from talent_sdk.schemas.matching_ui import GenerateUIResponse, UIOptions, UIRequest

# (exc_type, operation, request, response, message, **details) -> TalentError to raise
ErrorFactory = Callable[..., TalentError]


def ui_transaction_id(now: Optional[datetime] = None) -> str:
    return "matchui-" + (now or datetime.now()).isoformat()


class MatchingUIClient:
    def __init__(
        self,
        http: RestClient,
        endpoints: ApiEndpoints,
        make_error: ErrorFactory,
        options: Optional[UIOptions] = None,
    ) -> None:
        self._http = http
        self._endpoints = endpoints
        self._make_error = make_error
        self.options = options

    def _wrap(self, saas_request) -> UIRequest:
        return UIRequest(saas_request=saas_request, ui_options=self.options)

    async def _send(self, operation: str, request: RestRequest) -> GenerateUIResponse:
        response = await self._http.execute(request, GenerateUIResponse)

        if response.transport_error:
            raise self._make_error(
                TalentTransportError, operation, request, response, response.status_description
            )

        if not response.is_successful:
            raise self._make_error(
                TalentApiError,
                operation,
                request,
                response,
                response.body or response.status_description,
                code="Error",
                transaction_id=ui_transaction_id(),
            )

        if response.deserialization_error is not None:
            cause = response.deserialization_error
            raise self._make_error(
                TalentDeserializationError,
                operation,
                request,
                response,
                f"JSON deserialization error: {cause}",
                code="Error",
                transaction_id=ui_transaction_id(),
            ) from cause

        if response.data is None:
            raise self._make_error(
                TalentApiError,
                operation,
                request,
                response,
                "Unknown API error.",
                code="Error",
                transaction_id=ui_transaction_id(),
            )

        return response.data

    async def match_resume(
        self,
        resume: ParsedResume,
        indexes_to_query: Iterable[str],
        preferred_weights: Optional[CategoryWeights] = None,
        filters: Optional[FilterCriteria] = None,
        settings: Optional[SearchMatchSettings] = None,
        num_results: int = 0,
    ) -> GenerateUIResponse:
        body = self._wrap(
            build_match_resume_request(resume, indexes_to_query, preferred_weights, filters, settings, num_results)
        )
        with self._endpoints.match_resume(body, generate_ui=True) as request:
            return await self._send("ui_match_resume", request)

    async def match_job(
        self,
        job: ParsedJob,
        indexes_to_query: Iterable[str],
        preferred_weights: Optional[CategoryWeights] = None,
        filters: Optional[FilterCriteria] = None,
        settings: Optional[SearchMatchSettings] = None,
        num_results: int = 0,
    ) -> GenerateUIResponse:
        body = self._wrap(
            build_match_job_request(job, indexes_to_query, preferred_weights, filters, settings, num_results)
        )
        with self._endpoints.match_job(body, generate_ui=True) as request:
            return await self._send("ui_match_job", request)

    async def match_indexed_document(
        self,
        index_id: str,
        document_id: str,
        indexes_to_query: Iterable[str],
        preferred_weights: Optional[CategoryWeights] = None,
        filters: Optional[FilterCriteria] = None,
        settings: Optional[SearchMatchSettings] = None,
        num_results: int = 0,
    ) -> GenerateUIResponse:
        require_ids(index_id=index_id, document_id=document_id)
        body = self._wrap(
            build_match_by_document_id_options(indexes_to_query, preferred_weights, filters, settings, num_results)
        )
        with self._endpoints.match_by_document_id(index_id, document_id, body, generate_ui=True) as request:
            return await self._send("ui_match_indexed_document", request)

    async def search(
        self,
        indexes_to_query: Iterable[str],
        query: Optional[FilterCriteria],
        settings: Optional[SearchMatchSettings] = None,
        pagination: Optional[PaginationSettings] = None,
    ) -> GenerateUIResponse:
        body = self._wrap(build_search_request(indexes_to_query, query, settings, pagination))
        with self._endpoints.search(body, generate_ui=True) as request:
            return await self._send("ui_search", request)

    async def bimetric_score_resume(
        self,
        source_resume: ParsedResumeWithId,
        targets: BimetricTargets,
        preferred_weights: Optional[CategoryWeights] = None,
        settings: Optional[SearchMatchSettings] = None,
    ) -> GenerateUIResponse:
        body = self._wrap(build_bimetric_resume_request(source_resume, targets, preferred_weights, settings))
        with self._endpoints.bimetric_score_resume(body, generate_ui=True) as request:
            return await self._send("ui_bimetric_score_resume", request)

    async def bimetric_score_job(
        self,
        source_job: ParsedJobWithId,
        targets: BimetricTargets,
        preferred_weights: Optional[CategoryWeights] = None,
        settings: Optional[SearchMatchSettings] = None,
    ) -> GenerateUIResponse:
        body = self._wrap(build_bimetric_job_request(source_job, targets, preferred_weights, settings))
        with self._endpoints.bimetric_score_job(body, generate_ui=True) as request:
            return await self._send("ui_bimetric_score_job", request)
