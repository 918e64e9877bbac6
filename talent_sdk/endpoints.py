"""
talent_sdk/endpoints.py

WHAT THIS FILE IS FOR
---------------------
The endpoint catalog: every API operation the SDK knows about, mapped
to an HTTP method and a path relative to the data-center root.

Each catalog method returns a fresh RestRequest. Methods for operations
that carry a payload take the body and write it before returning, so a
caller always receives a request that is ready to execute.

It also holds the pure request-body builders used by both the client
and the matching-UI client, so the two build identical payloads.

PATH RULES
----------
- Paths start with the API version (`v10/...`), or `ui/v10/...` for the
  matching-UI variant of match, search and bimetric scoring
- Index and document ids are percent-encoded, `/` included

WHAT THIS FILE IS NOT FOR
-------------------------
- Executing requests (see talent_sdk/rest/rest_client.py)
- Interpreting responses (see talent_sdk/client.py)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional
from urllib.parse import quote

from talent_sdk.rest.rest_request import RestMethod, RestRequest
from talent_sdk.schemas.documents import ParsedJob, ParsedJobWithId, ParsedResume, ParsedResumeWithId
from talent_sdk.schemas.matching import (
    BimetricScoreJobRequest,
    BimetricScoreResumeRequest,
    BimetricTargets,
    CategoryWeights,
    FilterCriteria,
    MatchByDocumentIdOptions,
    MatchJobRequest,
    MatchResumeRequest,
    PaginationSettings,
    SearchMatchSettings,
    SearchRequest,
)


@dataclass(frozen=True)
class DataCenter:
    """
    Where the API lives.

    `root` is the absolute base URL of the deployment and always comes
    from the caller (or from settings).
    """

    root: str
    version: str = "v10"


def require_ids(**ids: str) -> None:
    """Reject empty path identifiers; an empty id would address the parent collection."""
    for name, value in ids.items():
        if not value:
            raise ValueError(f"{name} is required")


def _encode(value: str) -> str:
    return quote(value, safe="")


class ApiEndpoints:
    def __init__(self, data_center: DataCenter) -> None:
        self.data_center = data_center

    # -----------------------------
    # Path helpers
    # -----------------------------
    def _path(self, *parts: str, ui: bool = False) -> str:
        prefix = "ui/" if ui else ""
        return prefix + "/".join((self.data_center.version,) + parts)

    def _index_path(self, index_id: str, *parts: str) -> str:
        return self._path("index", _encode(index_id), *parts)

    @staticmethod
    def _request(path: str, method: RestMethod, body: Any = None) -> RestRequest:
        request = RestRequest(path, method)
        if body is None:
            return request
        try:
            request.write_utf8_json_body(body)
        except Exception:
            request.close()
            raise
        return request

    # -----------------------------
    # Account
    # -----------------------------
    def account(self) -> RestRequest:
        return self._request(self._path("account"), RestMethod.GET)

    # -----------------------------
    # Parsing
    # -----------------------------
    def parse_resume(self, body: Any) -> RestRequest:
        return self._request(self._path("parser", "resume"), RestMethod.POST, body)

    def parse_job(self, body: Any) -> RestRequest:
        return self._request(self._path("parser", "joborder"), RestMethod.POST, body)

    # -----------------------------
    # Indexes
    # -----------------------------
    def create_index(self, index_id: str, body: Any) -> RestRequest:
        return self._request(self._index_path(index_id), RestMethod.POST, body)

    def get_all_indexes(self) -> RestRequest:
        return self._request(self._path("index"), RestMethod.GET)

    def delete_index(self, index_id: str) -> RestRequest:
        return self._request(self._index_path(index_id), RestMethod.DELETE)

    # -----------------------------
    # Documents
    # -----------------------------
    def index_resume(self, index_id: str, document_id: str, body: Any) -> RestRequest:
        return self._request(
            self._index_path(index_id, "resume", _encode(document_id)), RestMethod.POST, body
        )

    def index_job(self, index_id: str, document_id: str, body: Any) -> RestRequest:
        return self._request(
            self._index_path(index_id, "job", _encode(document_id)), RestMethod.POST, body
        )

    def index_multiple_resumes(self, index_id: str, body: Any) -> RestRequest:
        return self._request(self._index_path(index_id, "resumes"), RestMethod.POST, body)

    def index_multiple_jobs(self, index_id: str, body: Any) -> RestRequest:
        return self._request(self._index_path(index_id, "jobs"), RestMethod.POST, body)

    def delete_document(self, index_id: str, document_id: str) -> RestRequest:
        return self._request(
            self._index_path(index_id, "documents", _encode(document_id)), RestMethod.DELETE
        )

    def delete_multiple_documents(self, index_id: str, document_ids: Iterable[str]) -> RestRequest:
        return self._request(
            self._index_path(index_id, "documents"), RestMethod.DELETE, list(document_ids)
        )

    def get_resume(self, index_id: str, document_id: str) -> RestRequest:
        return self._request(
            self._index_path(index_id, "resume", _encode(document_id)), RestMethod.GET
        )

    def get_job(self, index_id: str, document_id: str) -> RestRequest:
        return self._request(self._index_path(index_id, "job", _encode(document_id)), RestMethod.GET)

    def update_resume_tags(self, index_id: str, document_id: str, body: Any) -> RestRequest:
        return self._request(
            self._index_path(index_id, "resume", _encode(document_id)), RestMethod.PATCH, body
        )

    def update_job_tags(self, index_id: str, document_id: str, body: Any) -> RestRequest:
        return self._request(
            self._index_path(index_id, "job", _encode(document_id)), RestMethod.PATCH, body
        )

    # -----------------------------
    # Matching / searching / scoring
    # -----------------------------
    def match_resume(self, body: Any, generate_ui: bool = False) -> RestRequest:
        return self._request(self._path("matcher", "resume", ui=generate_ui), RestMethod.POST, body)

    def match_job(self, body: Any, generate_ui: bool = False) -> RestRequest:
        return self._request(
            self._path("matcher", "joborder", ui=generate_ui), RestMethod.POST, body
        )

    def match_by_document_id(
        self, index_id: str, document_id: str, body: Any, generate_ui: bool = False
    ) -> RestRequest:
        path = self._path(
            "matcher", "indexes", _encode(index_id), "documents", _encode(document_id), ui=generate_ui
        )
        return self._request(path, RestMethod.POST, body)

    def search(self, body: Any, generate_ui: bool = False) -> RestRequest:
        return self._request(self._path("searcher", ui=generate_ui), RestMethod.POST, body)

    def bimetric_score_resume(self, body: Any, generate_ui: bool = False) -> RestRequest:
        return self._request(
            self._path("scorer", "bimetric", "resume", ui=generate_ui), RestMethod.POST, body
        )

    def bimetric_score_job(self, body: Any, generate_ui: bool = False) -> RestRequest:
        return self._request(
            self._path("scorer", "bimetric", "joborder", ui=generate_ui), RestMethod.POST, body
        )

    # -----------------------------
    # Geocoding
    # -----------------------------
    def geocode_resume(self, body: Any) -> RestRequest:
        return self._request(self._path("geocoder", "resume"), RestMethod.POST, body)

    def geocode_job(self, body: Any) -> RestRequest:
        return self._request(self._path("geocoder", "joborder"), RestMethod.POST, body)

    def geocode_and_index_resume(self, body: Any) -> RestRequest:
        return self._request(self._path("geocoder", "index", "resume"), RestMethod.POST, body)

    def geocode_and_index_job(self, body: Any) -> RestRequest:
        return self._request(self._path("geocoder", "index", "joborder"), RestMethod.POST, body)


# ---------------------------------------------------------------------
# Request-body builders
# ---------------------------------------------------------------------
def build_match_resume_request(
    resume: ParsedResume,
    indexes_to_query: Iterable[str],
    preferred_weights: Optional[CategoryWeights] = None,
    filters: Optional[FilterCriteria] = None,
    settings: Optional[SearchMatchSettings] = None,
    num_results: int = 0,
) -> MatchResumeRequest:
    return MatchResumeRequest(
        resume_data=resume,
        index_ids_to_search_into=list(indexes_to_query),
        preferred_category_weights=preferred_weights,
        filter_criteria=filters,
        settings=settings,
        take=num_results,
    )


def build_match_job_request(
    job: ParsedJob,
    indexes_to_query: Iterable[str],
    preferred_weights: Optional[CategoryWeights] = None,
    filters: Optional[FilterCriteria] = None,
    settings: Optional[SearchMatchSettings] = None,
    num_results: int = 0,
) -> MatchJobRequest:
    return MatchJobRequest(
        job_data=job,
        index_ids_to_search_into=list(indexes_to_query),
        preferred_category_weights=preferred_weights,
        filter_criteria=filters,
        settings=settings,
        take=num_results,
    )


def build_match_by_document_id_options(
    indexes_to_query: Iterable[str],
    preferred_weights: Optional[CategoryWeights] = None,
    filters: Optional[FilterCriteria] = None,
    settings: Optional[SearchMatchSettings] = None,
    num_results: int = 0,
) -> MatchByDocumentIdOptions:
    return MatchByDocumentIdOptions(
        index_ids_to_search_into=list(indexes_to_query),
        preferred_category_weights=preferred_weights,
        filter_criteria=filters,
        settings=settings,
        take=num_results,
    )


def build_search_request(
    indexes_to_query: Iterable[str],
    query: Optional[FilterCriteria],
    settings: Optional[SearchMatchSettings] = None,
    pagination: Optional[PaginationSettings] = None,
) -> SearchRequest:
    return SearchRequest(
        index_ids_to_search_into=list(indexes_to_query),
        filter_criteria=query,
        settings=settings,
        pagination_settings=pagination,
    )


def _split_targets(targets: BimetricTargets) -> dict:
    if targets.kind == "resumes":
        return {"target_resumes": list(targets.documents)}
    if targets.kind == "jobs":
        return {"target_jobs": list(targets.documents)}
    raise ValueError(f"Unsupported bimetric target kind: {targets.kind!r}")


def build_bimetric_resume_request(
    source_resume: ParsedResumeWithId,
    targets: BimetricTargets,
    preferred_weights: Optional[CategoryWeights] = None,
    settings: Optional[SearchMatchSettings] = None,
) -> BimetricScoreResumeRequest:
    return BimetricScoreResumeRequest(
        source_resume=source_resume,
        preferred_category_weights=preferred_weights,
        settings=settings,
        **_split_targets(targets),
    )


def build_bimetric_job_request(
    source_job: ParsedJobWithId,
    targets: BimetricTargets,
    preferred_weights: Optional[CategoryWeights] = None,
    settings: Optional[SearchMatchSettings] = None,
) -> BimetricScoreJobRequest:
    return BimetricScoreJobRequest(
        source_job=source_job,
        preferred_category_weights=preferred_weights,
        settings=settings,
        **_split_targets(targets),
    )
