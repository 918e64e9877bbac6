# -------------------------------------------------------------------
# talent_sdk/schemas/documents.py
#
# Parsed documents (resume / job) and the raw Document handed to the
# parser.
#
# Only the fields the SDK itself reads are declared. Everything else
# returned by the parser is kept as extra data (see ApiModel) and is
# re-emitted unchanged by to_json() or when the document is sent back.
# -------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from talent_sdk.schemas.base import ApiModel
from talent_sdk.utils.serialization import dumps


@dataclass(frozen=True)
class Document:
    """
    A file to be parsed.

    Reading the file from disk (and working out its last-modified date)
    is the caller's job; the SDK only needs the bytes.
    """

    data: bytes
    last_modified: date


class ResumeQualityLevel(str, Enum):
    FATAL_PROBLEM = "Fatal Problems Found"
    MAJOR_ISSUE = "Major Issues Found"
    DATA_MISSING = "Data Missing"
    SUGGESTED_IMPROVEMENT = "Suggested Improvements"


# Most severe first
RESUME_QUALITY_SEVERITY = (
    ResumeQualityLevel.FATAL_PROBLEM,
    ResumeQualityLevel.MAJOR_ISSUE,
    ResumeQualityLevel.DATA_MISSING,
    ResumeQualityLevel.SUGGESTED_IMPROVEMENT,
)


class ResumeQualityFinding(ApiModel):
    quality_code: Optional[int] = None
    identifiers: Optional[List[str]] = None
    message: Optional[str] = None


class ResumeQualityAssessment(ApiModel):
    level: Optional[str] = None
    findings: Optional[List[ResumeQualityFinding]] = None


class ResumeMetadata(ApiModel):
    document_culture: Optional[str] = None
    document_last_modified: Optional[date] = None
    resume_quality: Optional[List[ResumeQualityAssessment]] = None


class NamedListItem(ApiModel):
    """Certification / license entry."""

    name: Optional[str] = None
    matched_to_list: bool = False


class LanguageCompetency(ApiModel):
    language: Optional[str] = None
    language_code: Optional[str] = None


class _ParsedDocument(ApiModel):
    def to_json(self, formatted: bool = False) -> str:
        return dumps(self, formatted=formatted)


class ParsedResume(_ParsedDocument):
    contact_information: Optional[Dict[str, Any]] = None
    certifications: Optional[List[NamedListItem]] = None
    licenses: Optional[List[NamedListItem]] = None
    language_competencies: Optional[List[LanguageCompetency]] = None
    military_experience: Optional[List[Dict[str, Any]]] = None
    security_credentials: Optional[List[Dict[str, Any]]] = None
    skills_data: Optional[List[Dict[str, Any]]] = None
    resume_metadata: Optional[ResumeMetadata] = None


class ParsedJob(_ParsedDocument):
    job_titles: Optional[Dict[str, Any]] = None
    skills_data: Optional[List[Dict[str, Any]]] = None
    job_metadata: Optional[Dict[str, Any]] = None


class ParsedResumeWithId(ApiModel):
    id: str
    resume_data: ParsedResume


class ParsedJobWithId(ApiModel):
    id: str
    job_data: ParsedJob
