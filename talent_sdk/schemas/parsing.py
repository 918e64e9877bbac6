# -------------------------------------------------------------------
# talent_sdk/schemas/parsing.py
#
# WHAT THIS FILE IS FOR
# --------------------
# Request and response models for the resume/job parser.
#
# A parse call is a *composite* operation: depending on the options,
# the server may also geocode and/or index the parsed document in the
# same round trip. Each stage reports its own outcome:
#
#   Value.ParsingResponse   -> did parsing work?
#   Value.GeocodeResponse   -> did geocoding work? (only if requested)
#   Value.IndexingResponse  -> did indexing work?  (only if requested)
#
# The HTTP status and top-level Info can say "success" while one of
# these says otherwise. Unbundling them into typed errors is the job of
# the client (talent_sdk/client.py), not of this module.
#
# ParseResumeResponseValue also exposes a handful of convenience
# accessors over the parsed resume (certifications, quality findings,
# document age, ...). They are read-only and never raise on missing data.
# -------------------------------------------------------------------

from __future__ import annotations

import base64
from datetime import date, datetime, timedelta, timezone
from typing import Any, List, Optional

from talent_sdk.schemas.base import ApiModel, ApiResponse, ApiResponseInfoLite
from talent_sdk.schemas.documents import (
    RESUME_QUALITY_SEVERITY,
    Document,
    ParsedJob,
    ParsedResume,
    ResumeQualityLevel,
)
from talent_sdk.schemas.geocoding import Address, GeoCoordinates, GeocodeProvider
from talent_sdk.schemas.indexes import IndexSingleDocumentInfo

# Converter output-validity codes that mean "the text may be unreliable"
CONVERSION_WARNING_CODES = frozenset(
    {
        "ovProbableGarbageInText",
        "ovUnknown",
        "ovAvgWordLengthGreaterThan20",
        "ovAvgWordLengthLessThan4",
        "ovTooFewLineBreaks",
        "ovLinesSeemTooShort",
        "ovTruncated",
    }
)


class ParseGeocodeOptions(ApiModel):
    include_geocoding: bool = False
    provider: GeocodeProvider = GeocodeProvider.GOOGLE
    provider_key: Optional[str] = None
    postal_address: Optional[Address] = None
    geo_coordinates: Optional[GeoCoordinates] = None


class ParseRequest(ApiModel):
    document_as_base64_string: str
    document_last_modified: date
    output_html: Optional[bool] = None
    output_rtf: Optional[bool] = None
    output_pdf: Optional[bool] = None
    output_candidate_image: Optional[bool] = None
    configuration: Optional[str] = None
    skills_data: Optional[List[str]] = None
    normalizer_data: Optional[str] = None
    geocode_options: Optional[ParseGeocodeOptions] = None
    indexing_options: Optional[IndexSingleDocumentInfo] = None

    @classmethod
    def from_document(cls, document: Document, **options: Any) -> "ParseRequest":
        return cls(
            document_as_base64_string=base64.b64encode(document.data).decode("ascii"),
            document_last_modified=document.last_modified,
            **options,
        )


class ConversionMetadata(ApiModel):
    detected_type: Optional[str] = None
    suggested_file_extension: Optional[str] = None
    output_validity_code: Optional[str] = None
    elapsed_milliseconds: Optional[int] = None


class Conversions(ApiModel):
    html: Optional[str] = None
    rtf: Optional[str] = None
    pdf: Optional[str] = None
    candidate_image: Optional[str] = None


class ParsingMetadata(ApiModel):
    elapsed_milliseconds: Optional[int] = None
    timed_out: bool = False
    timed_out_at_milliseconds: Optional[int] = None
    detected_language: Optional[str] = None


class _ParseResponseValue(ApiModel):
    conversion_metadata: Optional[ConversionMetadata] = None
    conversions: Optional[Conversions] = None
    parsing_metadata: Optional[ParsingMetadata] = None
    parsing_response: Optional[ApiResponseInfoLite] = None
    geocode_response: Optional[ApiResponseInfoLite] = None
    indexing_response: Optional[ApiResponseInfoLite] = None

    def did_timeout(self) -> bool:
        return bool(self.parsing_metadata and self.parsing_metadata.timed_out)

    def has_conversion_warning(self) -> bool:
        code = self.conversion_metadata.output_validity_code if self.conversion_metadata else None
        return code in CONVERSION_WARNING_CODES


class ParseResumeResponseValue(_ParseResponseValue):
    resume_data: Optional[ParsedResume] = None
    scrubbed_resume_data: Optional[ParsedResume] = None

    def certifications(self, only_matched_to_list: bool = False) -> List[str]:
        items = (self.resume_data.certifications if self.resume_data else None) or []
        return [c.name for c in items if c.name and (c.matched_to_list or not only_matched_to_list)]

    def licenses(self, only_matched_to_list: bool = False) -> List[str]:
        items = (self.resume_data.licenses if self.resume_data else None) or []
        return [c.name for c in items if c.name and (c.matched_to_list or not only_matched_to_list)]

    def language_competencies(self) -> List[str]:
        items = (self.resume_data.language_competencies if self.resume_data else None) or []
        return [c.language_code for c in items if c.language_code]

    def military_experience_count(self) -> int:
        return len((self.resume_data.military_experience if self.resume_data else None) or [])

    def has_security_clearance(self) -> bool:
        return bool(self.resume_data and self.resume_data.security_credentials)

    def most_severe_quality_level(self) -> Optional[ResumeQualityLevel]:
        """Worst resume-quality level reported, or None when the resume is clean."""
        metadata = self.resume_data.resume_metadata if self.resume_data else None
        found = {q.level for q in (metadata.resume_quality if metadata else None) or []}
        for level in RESUME_QUALITY_SEVERITY:
            if level.value in found:
                return level
        return None

    def document_last_modified(self) -> Optional[date]:
        metadata = self.resume_data.resume_metadata if self.resume_data else None
        return metadata.document_last_modified if metadata else None

    def resume_age(self, now: Optional[datetime] = None) -> Optional[timedelta]:
        last_modified = self.document_last_modified()
        if last_modified is None:
            return None
        now = now or datetime.now(timezone.utc)
        return now.date() - last_modified

    def resume_json(self, pii_redacted: bool = False, formatted: bool = False) -> Optional[str]:
        resume = self.scrubbed_resume_data if pii_redacted else self.resume_data
        return resume.to_json(formatted=formatted) if resume is not None else None


class ParseJobResponseValue(_ParseResponseValue):
    job_data: Optional[ParsedJob] = None


class ParseResumeResponse(ApiResponse[ParseResumeResponseValue]):
    pass


class ParseJobResponse(ApiResponse[ParseJobResponseValue]):
    pass