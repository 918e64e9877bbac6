from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from talent_sdk.schemas.base import ApiModel, ApiResponse
from talent_sdk.schemas.documents import ParsedJob, ParsedResume


class IndexType(str, Enum):
    RESUME = "Resume"
    JOB = "Job"


class UserDefinedTagsMethod(str, Enum):
    ADD = "Add"
    DELETE = "Delete"
    OVERWRITE = "Overwrite"


class Index(ApiModel):
    owner_id: Optional[str] = None
    name: Optional[str] = None
    index_type: Optional[IndexType] = None


class CreateIndexRequest(ApiModel):
    index_type: IndexType


class IndexSingleDocumentInfo(ApiModel):
    """Where a parsed/geocoded document should be stored."""

    index_id: str
    document_id: str
    user_defined_tags: Optional[List[str]] = None


class IndexResumeRequest(ApiModel):
    resume_data: ParsedResume
    user_defined_tags: Optional[List[str]] = None


class IndexJobRequest(ApiModel):
    job_data: ParsedJob
    user_defined_tags: Optional[List[str]] = None


class IndexResumeInfo(ApiModel):
    document_id: str
    resume_data: ParsedResume
    user_defined_tags: Optional[List[str]] = None


class IndexJobInfo(ApiModel):
    document_id: str
    job_data: ParsedJob
    user_defined_tags: Optional[List[str]] = None


class IndexMultipleResumesRequest(ApiModel):
    resumes: List[IndexResumeInfo]


class IndexMultipleJobsRequest(ApiModel):
    jobs: List[IndexJobInfo]


class UpdateUserDefinedTagsRequest(ApiModel):
    user_defined_tags: List[str]
    method: UserDefinedTagsMethod


class DocumentResult(ApiModel):
    """Per-document outcome of a batch index/delete call."""

    document_id: Optional[str] = None
    code: Optional[str] = None
    message: Optional[str] = None


class CreateIndexResponse(ApiResponse[Any]):
    pass


class DeleteIndexResponse(ApiResponse[Any]):
    pass


class GetAllIndexesResponse(ApiResponse[List[Index]]):
    pass


class IndexDocumentResponse(ApiResponse[Any]):
    pass


class IndexMultipleDocumentsResponse(ApiResponse[List[DocumentResult]]):
    pass


class DeleteDocumentResponse(ApiResponse[Any]):
    pass


class DeleteMultipleDocumentsResponse(ApiResponse[List[DocumentResult]]):
    pass


class UpdateUserDefinedTagsResponse(ApiResponse[Any]):
    pass


class GetResumeResponse(ApiResponse[ParsedResume]):
    pass


class GetJobResponse(ApiResponse[ParsedJob]):
    pass
