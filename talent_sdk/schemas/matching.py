from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Union

from talent_sdk.schemas.base import ApiModel, ApiResponse
from talent_sdk.schemas.documents import ParsedJob, ParsedJobWithId, ParsedResume, ParsedResumeWithId


class CategoryWeights(ApiModel):
    education: Optional[float] = None
    job_titles: Optional[float] = None
    skills: Optional[float] = None
    industries: Optional[float] = None
    languages: Optional[float] = None
    certifications: Optional[float] = None
    executive_type: Optional[float] = None
    management_level: Optional[float] = None


class FilterCriteria(ApiModel):
    """Search/match filters; undeclared filters can be passed as extra fields."""

    search_expression: Optional[str] = None
    document_ids: Optional[List[str]] = None
    user_defined_tags: Optional[List[str]] = None
    user_defined_tags_must_all_exist: Optional[bool] = None
    job_titles: Optional[List[Dict[str, Any]]] = None
    skills: Optional[List[Dict[str, Any]]] = None
    locations: Optional[List[Dict[str, Any]]] = None
    revision_date_range: Optional[Dict[str, Any]] = None


class SearchMatchSettings(ApiModel):
    hide_sensitive_fields: Optional[bool] = None
    position_title_must_be_current: Optional[bool] = None


class PaginationSettings(ApiModel):
    skip: int = 0
    take: int = 10


class _MatchRequestBase(ApiModel):
    index_ids_to_search_into: List[str]
    preferred_category_weights: Optional[CategoryWeights] = None
    filter_criteria: Optional[FilterCriteria] = None
    settings: Optional[SearchMatchSettings] = None
    take: int = 0


class MatchResumeRequest(_MatchRequestBase):
    resume_data: ParsedResume


class MatchJobRequest(_MatchRequestBase):
    job_data: ParsedJob


class MatchByDocumentIdOptions(_MatchRequestBase):
    pass


class SearchRequest(ApiModel):
    index_ids_to_search_into: List[str]
    filter_criteria: Optional[FilterCriteria] = None
    settings: Optional[SearchMatchSettings] = None
    pagination_settings: Optional[PaginationSettings] = None


class MatchResult(ApiModel):
    id: Optional[str] = None
    index_id: Optional[str] = None
    weighted_score: Optional[float] = None
    unweighted_category_scores: Optional[Dict[str, Any]] = None
    enriched_score_data: Optional[Dict[str, Any]] = None


class MatchResponseValue(ApiModel):
    matches: List[MatchResult] = []
    total_results: Optional[int] = None


class MatchResponse(ApiResponse[MatchResponseValue]):
    pass


class SearchResult(ApiModel):
    id: Optional[str] = None
    index_id: Optional[str] = None


class SearchResponseValue(ApiModel):
    matches: List[SearchResult] = []
    total_count: Optional[int] = None
    current_count: Optional[int] = None


class SearchResponse(ApiResponse[SearchResponseValue]):
    pass


# ---------------------------------------------------------------------
# Bimetric scoring
#
# The targets of a bimetric score are either all resumes or all jobs.
# The caller says which by picking the variant; the request builder
# switches on `kind`.
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class ResumeTargets:
    documents: List[ParsedResumeWithId]
    kind: Literal["resumes"] = "resumes"


@dataclass(frozen=True)
class JobTargets:
    documents: List[ParsedJobWithId]
    kind: Literal["jobs"] = "jobs"


BimetricTargets = Union[ResumeTargets, JobTargets]


class _BimetricScoreRequestBase(ApiModel):
    target_resumes: Optional[List[ParsedResumeWithId]] = None
    target_jobs: Optional[List[ParsedJobWithId]] = None
    preferred_category_weights: Optional[CategoryWeights] = None
    settings: Optional[SearchMatchSettings] = None


class BimetricScoreResumeRequest(_BimetricScoreRequestBase):
    source_resume: ParsedResumeWithId


class BimetricScoreJobRequest(_BimetricScoreRequestBase):
    source_job: ParsedJobWithId


class BimetricScoreResult(ApiModel):
    id: Optional[str] = None
    weighted_score: Optional[float] = None
    reverse_compatibility_score: Optional[float] = None
    unweighted_category_scores: Optional[Dict[str, Any]] = None


class BimetricScoreResponseValue(ApiModel):
    matches: List[BimetricScoreResult] = []


class BimetricScoreResponse(ApiResponse[BimetricScoreResponseValue]):
    pass
