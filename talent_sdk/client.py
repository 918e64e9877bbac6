"""
talent_sdk/client.py

WHAT THIS FILE IS FOR
---------------------
This module defines `TalentClient`, the public entry point of the SDK.
It exposes one async method per API operation.

Every method follows the same flow:

  caller
    → ApiEndpoints.<operation>(body)          (build RestRequest)
    → RestClient.execute(request, Model)      (one HTTP round trip)
    → TalentClient._process_response(...)     (translate failures)
    → composite stage checks (parse / geocode-and-index only)
    → typed response model returned

ERROR HANDLING RULES
--------------------
`_process_response` decides, in this order:

1) transport fault (no HTTP answer)       → TalentTransportError
2) non-2xx status                         → TalentApiError (server Info when present)
3) 2xx body unreadable as the model       → TalentDeserializationError
4) 2xx with no payload at all             → TalentApiError("Unknown API error.")
5) 2xx with a failing top-level Info code → TalentApiError

Composite calls (parse, geocode-and-index) then check their embedded
stage results. A failing stage after a successful primary step raises a
TalentSubOperationError carrying the full typed response, so the parsed
document is never lost.

Nothing is retried here. Which operations are safe to repeat is the
caller's decision.

DEBUG REQUEST CAPTURE
---------------------
With `show_full_request_body_in_exceptions=True`, every raised
TalentError carries the full JSON request body. The request body is
buffered in memory for every call, which increases memory use; keep it
off in production. The flag is fixed at construction.

WHAT THIS FILE IS NOT FOR
-------------------------
This module MUST NOT:
- Perform raw HTTP (see talent_sdk/rest/rest_client.py)
- Know URL paths (see talent_sdk/endpoints.py)
- Log request or response bodies, or credentials
"""

from __future__ import annotations

from typing import Iterable, Optional, Type, TypeVar

import httpx
import structlog

from talent_sdk.endpoints import (
    ApiEndpoints,
    DataCenter,
    build_bimetric_job_request,
    build_bimetric_resume_request,
    build_match_by_document_id_options,
    build_match_job_request,
    build_match_resume_request,
    build_search_request,
    require_ids,
)
from talent_sdk.exceptions import (
    GeocodeJobError,
    GeocodeResumeError,
    IndexJobError,
    IndexResumeError,
    TalentApiError,
    TalentDeserializationError,
    TalentError,
    TalentGeocodeError,
    TalentIndexingError,
    TalentTransportError,
)
from talent_sdk.matching_ui import MatchingUIClient
from talent_sdk.rest.rest_client import RestClient
from talent_sdk.rest.rest_request import RestRequest
from talent_sdk.rest.rest_response import RestResponse
from talent_sdk.schemas.account import GetAccountInfoResponse
from talent_sdk.schemas.base import ApiResponse, ApiResponseInfoLite
from talent_sdk.schemas.documents import ParsedJob, ParsedJobWithId, ParsedResume, ParsedResumeWithId
from talent_sdk.schemas.geocoding import (
    Address,
    GeoCoordinates,
    GeocodeAndIndexJobRequest,
    GeocodeAndIndexJobResponse,
    GeocodeAndIndexResumeRequest,
    GeocodeAndIndexResumeResponse,
    GeocodeCredentials,
    GeocodeJobRequest,
    GeocodeJobResponse,
    GeocodeOptionsBase,
    GeocodeResumeRequest,
    GeocodeResumeResponse,
)
from talent_sdk.schemas.indexes import (
    CreateIndexRequest,
    CreateIndexResponse,
    DeleteDocumentResponse,
    DeleteIndexResponse,
    DeleteMultipleDocumentsResponse,
    GetAllIndexesResponse,
    GetJobResponse,
    GetResumeResponse,
    IndexDocumentResponse,
    IndexJobInfo,
    IndexJobRequest,
    IndexMultipleDocumentsResponse,
    IndexMultipleJobsRequest,
    IndexMultipleResumesRequest,
    IndexResumeInfo,
    IndexResumeRequest,
    IndexSingleDocumentInfo,
    IndexType,
    UpdateUserDefinedTagsRequest,
    UpdateUserDefinedTagsResponse,
    UserDefinedTagsMethod,
)
from talent_sdk.schemas.matching import (
    BimetricScoreResponse,
    BimetricTargets,
    CategoryWeights,
    FilterCriteria,
    MatchResponse,
    PaginationSettings,
    SearchMatchSettings,
    SearchResponse,
)
from talent_sdk.schemas.matching_ui import UIOptions
from talent_sdk.schemas.parsing import ParseJobResponse, ParseRequest, ParseResumeResponse
from talent_sdk.utils.settings import Settings, get_settings

logger = structlog.get_logger(__name__)

ACCOUNT_ID_HEADER = "Talent-AccountId"
SERVICE_KEY_HEADER = "Talent-ServiceKey"

R = TypeVar("R", bound=ApiResponse)


class TalentClient:
    """
    Async client for the talent API.

    One instance per account/data center. Calls share no per-call state,
    so one client can serve many concurrent tasks.
    """

    def __init__(
        self,
        account_id: str,
        service_key: str,
        data_center: DataCenter,
        geocode_credentials: Optional[GeocodeCredentials] = None,
        *,
        show_full_request_body_in_exceptions: bool = False,
        timeout_seconds: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not account_id:
            raise ValueError("account_id is required")
        if not service_key:
            raise ValueError("service_key is required")
        if data_center is None:
            raise ValueError("data_center is required")

        self._endpoints = ApiEndpoints(data_center)
        self._geocode_credentials = geocode_credentials or GeocodeCredentials()
        self._show_full_request_body_in_exceptions = show_full_request_body_in_exceptions

        # credentials are not validated here; that would cost an account call per client
        self._http = RestClient(data_center.root, timeout_seconds=timeout_seconds, transport=transport)
        self._http.headers[ACCOUNT_ID_HEADER] = account_id
        self._http.headers[SERVICE_KEY_HEADER] = service_key

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "TalentClient":
        settings = settings or get_settings()
        if not settings.data_center_url:
            raise ValueError("data_center_url is required")

        return cls(
            settings.account_id or "",
            settings.service_key or "",
            DataCenter(str(settings.data_center_url), settings.api_version),
            GeocodeCredentials(
                provider=settings.geocode_provider,
                provider_key=settings.geocode_provider_key,
            ),
            show_full_request_body_in_exceptions=settings.show_full_request_body_in_exceptions,
            timeout_seconds=settings.timeout_seconds,
            transport=transport,
        )

    @property
    def show_full_request_body_in_exceptions(self) -> bool:
        return self._show_full_request_body_in_exceptions

    # ------------------------------------------------------------------
    # Response processing
    # ------------------------------------------------------------------
    def _body_if_debug(self, request: RestRequest) -> Optional[str]:
        if self._show_full_request_body_in_exceptions:
            return request.get_body()
        return None

    def _error(
        self,
        exc_type: Type[TalentError],
        operation: str,
        request: RestRequest,
        response: RestResponse,
        message: Optional[str],
        *,
        code: Optional[str] = None,
        transaction_id: Optional[str] = None,
        **extra,
    ) -> TalentError:
        logger.warning(
            "api_call_failed",
            operation=operation,
            error_type=exc_type.__name__,
            status_code=response.status_code,
            code=code,
            transaction_id=transaction_id,
        )
        return exc_type(
            message,
            code=code,
            transaction_id=transaction_id,
            status_code=response.status_code,
            request_body=self._body_if_debug(request),
            response=response,
            response_body=response.body,
            **extra,
        )

    def _process_response(self, operation: str, request: RestRequest, response: RestResponse) -> None:
        if response.transport_error:
            raise self._error(
                TalentTransportError, operation, request, response, response.status_description
            )

        if not response.is_successful:
            info = response.error_info
            if info is None:
                raise self._error(
                    TalentApiError,
                    operation,
                    request,
                    response,
                    response.body or response.status_description,
                    code="Error",
                )
            raise self._error(
                TalentApiError,
                operation,
                request,
                response,
                info.message,
                code=info.code,
                transaction_id=info.transaction_id,
            )

        if response.deserialization_error is not None:
            cause = response.deserialization_error
            raise self._error(
                TalentDeserializationError,
                operation,
                request,
                response,
                f"JSON deserialization error: {cause}",
                code="Error",
            ) from cause

        if response.data is None:
            raise self._error(
                TalentApiError, operation, request, response, "Unknown API error.", code="Error"
            )

        info = response.data.info
        if info is not None and not info.is_success:
            raise self._error(
                TalentApiError,
                operation,
                request,
                response,
                info.message,
                code=info.code,
                transaction_id=info.transaction_id,
            )

    async def _send(self, operation: str, request: RestRequest, model: Type[R]) -> RestResponse[R]:
        response = await self._http.execute(request, model)
        self._process_response(operation, request, response)
        return response

    def _check_stage(
        self,
        operation: str,
        request: RestRequest,
        response: RestResponse,
        stage: Optional[ApiResponseInfoLite],
        exc_type: Type[TalentError],
        **extra,
    ) -> None:
        if stage is None or stage.is_success:
            return
        info = response.data.info
        raise self._error(
            exc_type,
            operation,
            request,
            response,
            stage.message,
            code=stage.code,
            transaction_id=info.transaction_id if info else None,
            **extra,
        )

    # ------------------------------------------------------------------
    # Account
    # ------------------------------------------------------------------
    async def get_account_info(self) -> GetAccountInfoResponse:
        """Remaining credits, concurrency limit and other account details."""
        with self._endpoints.account() as request:
            response = await self._send("get_account_info", request, GetAccountInfoResponse)
            return response.data

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------
    async def parse_resume(self, parse_request: ParseRequest) -> ParseResumeResponse:
        """
        Parse a resume, optionally geocoding and indexing it in the same call.

        Raises GeocodeResumeError / IndexResumeError when parsing succeeded
        but a later stage failed; the parsed resume is on `response_data`.
        """
        with self._endpoints.parse_resume(parse_request) as request:
            response = await self._send("parse_resume", request, ParseResumeResponse)
            value = response.data.value
            if value is not None:
                self._check_stage("parse_resume", request, response, value.parsing_response, TalentApiError)
                self._check_stage(
                    "parse_resume", request, response, value.geocode_response,
                    GeocodeResumeError, response_data=response.data,
                )
                self._check_stage(
                    "parse_resume", request, response, value.indexing_response,
                    IndexResumeError, response_data=response.data,
                )
            return response.data

    async def parse_job(self, parse_request: ParseRequest) -> ParseJobResponse:
        """Parse a job order. Stage failures are reported like parse_resume."""
        with self._endpoints.parse_job(parse_request) as request:
            response = await self._send("parse_job", request, ParseJobResponse)
            value = response.data.value
            if value is not None:
                self._check_stage("parse_job", request, response, value.parsing_response, TalentApiError)
                self._check_stage(
                    "parse_job", request, response, value.geocode_response,
                    GeocodeJobError, response_data=response.data,
                )
                self._check_stage(
                    "parse_job", request, response, value.indexing_response,
                    IndexJobError, response_data=response.data,
                )
            return response.data

    # ------------------------------------------------------------------
    # Indexes
    # ------------------------------------------------------------------
    async def create_index(self, index_type: IndexType, index_id: str) -> CreateIndexResponse:
        require_ids(index_id=index_id)
        body = CreateIndexRequest(index_type=index_type)
        with self._endpoints.create_index(index_id, body) as request:
            response = await self._send("create_index", request, CreateIndexResponse)
            return response.data

    async def get_all_indexes(self) -> GetAllIndexesResponse:
        with self._endpoints.get_all_indexes() as request:
            response = await self._send("get_all_indexes", request, GetAllIndexesResponse)
            return response.data

    async def delete_index(self, index_id: str) -> DeleteIndexResponse:
        require_ids(index_id=index_id)
        with self._endpoints.delete_index(index_id) as request:
            response = await self._send("delete_index", request, DeleteIndexResponse)
            return response.data

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------
    async def add_resume_to_index(
        self,
        resume: ParsedResume,
        index_id: str,
        document_id: str,
        user_defined_tags: Optional[Iterable[str]] = None,
    ) -> IndexDocumentResponse:
        require_ids(index_id=index_id, document_id=document_id)
        body = IndexResumeRequest(
            resume_data=resume,
            user_defined_tags=list(user_defined_tags) if user_defined_tags is not None else None,
        )
        with self._endpoints.index_resume(index_id, document_id, body) as request:
            response = await self._send("add_resume_to_index", request, IndexDocumentResponse)
            return response.data

    async def add_job_to_index(
        self,
        job: ParsedJob,
        index_id: str,
        document_id: str,
        user_defined_tags: Optional[Iterable[str]] = None,
    ) -> IndexDocumentResponse:
        require_ids(index_id=index_id, document_id=document_id)
        body = IndexJobRequest(
            job_data=job,
            user_defined_tags=list(user_defined_tags) if user_defined_tags is not None else None,
        )
        with self._endpoints.index_job(index_id, document_id, body) as request:
            response = await self._send("add_job_to_index", request, IndexDocumentResponse)
            return response.data

    async def add_multiple_resumes_to_index(
        self, resumes: Iterable[IndexResumeInfo], index_id: str
    ) -> IndexMultipleDocumentsResponse:
        """Per-document outcomes are in `value`; the call itself succeeds with `SomeErrors`."""
        require_ids(index_id=index_id)
        body = IndexMultipleResumesRequest(resumes=list(resumes))
        with self._endpoints.index_multiple_resumes(index_id, body) as request:
            response = await self._send("add_multiple_resumes_to_index", request, IndexMultipleDocumentsResponse)
            return response.data

    async def add_multiple_jobs_to_index(
        self, jobs: Iterable[IndexJobInfo], index_id: str
    ) -> IndexMultipleDocumentsResponse:
        require_ids(index_id=index_id)
        body = IndexMultipleJobsRequest(jobs=list(jobs))
        with self._endpoints.index_multiple_jobs(index_id, body) as request:
            response = await self._send("add_multiple_jobs_to_index", request, IndexMultipleDocumentsResponse)
            return response.data

    async def delete_document_from_index(self, index_id: str, document_id: str) -> DeleteDocumentResponse:
        require_ids(index_id=index_id, document_id=document_id)
        with self._endpoints.delete_document(index_id, document_id) as request:
            response = await self._send("delete_document_from_index", request, DeleteDocumentResponse)
            return response.data

    async def delete_multiple_documents_from_index(
        self, index_id: str, document_ids: Iterable[str]
    ) -> DeleteMultipleDocumentsResponse:
        require_ids(index_id=index_id)
        with self._endpoints.delete_multiple_documents(index_id, document_ids) as request:
            response = await self._send(
                "delete_multiple_documents_from_index", request, DeleteMultipleDocumentsResponse
            )
            return response.data

    async def get_resume_from_index(self, index_id: str, document_id: str) -> GetResumeResponse:
        require_ids(index_id=index_id, document_id=document_id)
        with self._endpoints.get_resume(index_id, document_id) as request:
            response = await self._send("get_resume_from_index", request, GetResumeResponse)
            return response.data

    async def get_job_from_index(self, index_id: str, document_id: str) -> GetJobResponse:
        require_ids(index_id=index_id, document_id=document_id)
        with self._endpoints.get_job(index_id, document_id) as request:
            response = await self._send("get_job_from_index", request, GetJobResponse)
            return response.data

    async def update_resume_user_defined_tags(
        self,
        index_id: str,
        document_id: str,
        user_defined_tags: Iterable[str],
        method: UserDefinedTagsMethod,
    ) -> UpdateUserDefinedTagsResponse:
        require_ids(index_id=index_id, document_id=document_id)
        body = UpdateUserDefinedTagsRequest(user_defined_tags=list(user_defined_tags), method=method)
        with self._endpoints.update_resume_tags(index_id, document_id, body) as request:
            response = await self._send("update_resume_user_defined_tags", request, UpdateUserDefinedTagsResponse)
            return response.data

    async def update_job_user_defined_tags(
        self,
        index_id: str,
        document_id: str,
        user_defined_tags: Iterable[str],
        method: UserDefinedTagsMethod,
    ) -> UpdateUserDefinedTagsResponse:
        require_ids(index_id=index_id, document_id=document_id)
        body = UpdateUserDefinedTagsRequest(user_defined_tags=list(user_defined_tags), method=method)
        with self._endpoints.update_job_tags(index_id, document_id, body) as request:
            response = await self._send("update_job_user_defined_tags", request, UpdateUserDefinedTagsResponse)
            return response.data

    # ------------------------------------------------------------------
    # Matching / searching / scoring
    # ------------------------------------------------------------------
    async def match_resume(
        self,
        resume: ParsedResume,
        indexes_to_query: Iterable[str],
        preferred_weights: Optional[CategoryWeights] = None,
        filters: Optional[FilterCriteria] = None,
        settings: Optional[SearchMatchSettings] = None,
        num_results: int = 0,
    ) -> MatchResponse:
        """Find matches for a non-indexed resume. `num_results=0` uses the server default."""
        body = build_match_resume_request(resume, indexes_to_query, preferred_weights, filters, settings, num_results)
        with self._endpoints.match_resume(body) as request:
            response = await self._send("match_resume", request, MatchResponse)
            return response.data

    async def match_job(
        self,
        job: ParsedJob,
        indexes_to_query: Iterable[str],
        preferred_weights: Optional[CategoryWeights] = None,
        filters: Optional[FilterCriteria] = None,
        settings: Optional[SearchMatchSettings] = None,
        num_results: int = 0,
    ) -> MatchResponse:
        body = build_match_job_request(job, indexes_to_query, preferred_weights, filters, settings, num_results)
        with self._endpoints.match_job(body) as request:
            response = await self._send("match_job", request, MatchResponse)
            return response.data

    async def match_indexed_document(
        self,
        index_id: str,
        document_id: str,
        indexes_to_query: Iterable[str],
        preferred_weights: Optional[CategoryWeights] = None,
        filters: Optional[FilterCriteria] = None,
        settings: Optional[SearchMatchSettings] = None,
        num_results: int = 0,
    ) -> MatchResponse:
        require_ids(index_id=index_id, document_id=document_id)
        body = build_match_by_document_id_options(indexes_to_query, preferred_weights, filters, settings, num_results)
        with self._endpoints.match_by_document_id(index_id, document_id, body) as request:
            response = await self._send("match_indexed_document", request, MatchResponse)
            return response.data

    async def search(
        self,
        indexes_to_query: Iterable[str],
        query: Optional[FilterCriteria],
        settings: Optional[SearchMatchSettings] = None,
        pagination: Optional[PaginationSettings] = None,
    ) -> SearchResponse:
        body = build_search_request(indexes_to_query, query, settings, pagination)
        with self._endpoints.search(body) as request:
            response = await self._send("search", request, SearchResponse)
            return response.data

    async def bimetric_score_resume(
        self,
        source_resume: ParsedResumeWithId,
        targets: BimetricTargets,
        preferred_weights: Optional[CategoryWeights] = None,
        settings: Optional[SearchMatchSettings] = None,
    ) -> BimetricScoreResponse:
        """Score `targets` (ResumeTargets or JobTargets) against one resume."""
        body = build_bimetric_resume_request(source_resume, targets, preferred_weights, settings)
        with self._endpoints.bimetric_score_resume(body) as request:
            response = await self._send("bimetric_score_resume", request, BimetricScoreResponse)
            return response.data

    async def bimetric_score_job(
        self,
        source_job: ParsedJobWithId,
        targets: BimetricTargets,
        preferred_weights: Optional[CategoryWeights] = None,
        settings: Optional[SearchMatchSettings] = None,
    ) -> BimetricScoreResponse:
        body = build_bimetric_job_request(source_job, targets, preferred_weights, settings)
        with self._endpoints.bimetric_score_job(body) as request:
            response = await self._send("bimetric_score_job", request, BimetricScoreResponse)
            return response.data

    # ------------------------------------------------------------------
    # Geocoding
    # ------------------------------------------------------------------
    def _geocode_options(
        self, address: Optional[Address], coordinates: Optional[GeoCoordinates]
    ) -> GeocodeOptionsBase:
        return GeocodeOptionsBase(
            provider=self._geocode_credentials.provider,
            provider_key=self._geocode_credentials.provider_key,
            postal_address=address,
            geo_coordinates=coordinates,
        )

    async def geocode_resume(
        self,
        resume: ParsedResume,
        address: Optional[Address] = None,
        coordinates: Optional[GeoCoordinates] = None,
    ) -> GeocodeResumeResponse:
        """Geocode the resume's own address, or `address` when given."""
        options = self._geocode_options(address, coordinates)
        body = GeocodeResumeRequest(resume_data=resume, **dict(options))
        with self._endpoints.geocode_resume(body) as request:
            response = await self._send("geocode_resume", request, GeocodeResumeResponse)
            return response.data

    async def geocode_job(
        self,
        job: ParsedJob,
        address: Optional[Address] = None,
        coordinates: Optional[GeoCoordinates] = None,
    ) -> GeocodeJobResponse:
        options = self._geocode_options(address, coordinates)
        body = GeocodeJobRequest(job_data=job, **dict(options))
        with self._endpoints.geocode_job(body) as request:
            response = await self._send("geocode_job", request, GeocodeJobResponse)
            return response.data

    async def geocode_and_index_resume(
        self,
        resume: ParsedResume,
        indexing_options: IndexSingleDocumentInfo,
        *,
        address: Optional[Address] = None,
        coordinates: Optional[GeoCoordinates] = None,
        index_if_geocode_fails: bool = False,
    ) -> GeocodeAndIndexResumeResponse:
        """
        Geocode a resume and add it to an index in one call.

        A geocode failure raises unless `index_if_geocode_fails` is set.
        An indexing failure always raises.
        """
        body = GeocodeAndIndexResumeRequest(
            resume_data=resume,
            geocode_options=self._geocode_options(address, coordinates),
            indexing_options=indexing_options,
            index_if_geocode_fails=index_if_geocode_fails,
        )
        with self._endpoints.geocode_and_index_resume(body) as request:
            response = await self._send("geocode_and_index_resume", request, GeocodeAndIndexResumeResponse)
            self._check_geocode_and_index("geocode_and_index_resume", request, response, index_if_geocode_fails)
            return response.data

    async def geocode_and_index_job(
        self,
        job: ParsedJob,
        indexing_options: IndexSingleDocumentInfo,
        *,
        address: Optional[Address] = None,
        coordinates: Optional[GeoCoordinates] = None,
        index_if_geocode_fails: bool = False,
    ) -> GeocodeAndIndexJobResponse:
        body = GeocodeAndIndexJobRequest(
            job_data=job,
            geocode_options=self._geocode_options(address, coordinates),
            indexing_options=indexing_options,
            index_if_geocode_fails=index_if_geocode_fails,
        )
        with self._endpoints.geocode_and_index_job(body) as request:
            response = await self._send("geocode_and_index_job", request, GeocodeAndIndexJobResponse)
            self._check_geocode_and_index("geocode_and_index_job", request, response, index_if_geocode_fails)
            return response.data

    def _check_geocode_and_index(
        self,
        operation: str,
        request: RestRequest,
        response: RestResponse,
        index_if_geocode_fails: bool,
    ) -> None:
        value = response.data.value
        if value is None:
            return
        if not index_if_geocode_fails:
            self._check_stage(
                operation, request, response, value.geocode_response,
                TalentGeocodeError, response_data=response.data,
            )
        self._check_stage(
            operation, request, response, value.indexing_response,
            TalentIndexingError, response_data=response.data,
        )

    # ------------------------------------------------------------------
    # Matching UI
    # ------------------------------------------------------------------
    def ui(self, options: Optional[UIOptions] = None) -> MatchingUIClient:
        """
        Return a client whose match/search/score calls open a hosted UI
        session instead of returning results.
        """
        return MatchingUIClient(self._http, self._endpoints, self._error, options)

