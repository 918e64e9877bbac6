from __future__ import annotations

from enum import Enum
from typing import List, Optional

from talent_sdk.schemas.base import ApiModel, ApiResponse, ApiResponseInfoLite
from talent_sdk.schemas.documents import ParsedJob, ParsedResume
from talent_sdk.schemas.indexes import IndexSingleDocumentInfo


class GeocodeProvider(str, Enum):
    GOOGLE = "Google"
    BING = "Bing"


class GeocodeCredentials(ApiModel):
    """Provider used for geocoding; without a key the server's account key is used."""

    provider: GeocodeProvider = GeocodeProvider.GOOGLE
    provider_key: Optional[str] = None


class Address(ApiModel):
    country_code: Optional[str] = None
    postal_code: Optional[str] = None
    region: Optional[str] = None
    municipality: Optional[str] = None
    address_lines: Optional[List[str]] = None


class GeoCoordinates(ApiModel):
    latitude: float
    longitude: float


class GeocodeOptionsBase(ApiModel):
    provider: GeocodeProvider = GeocodeProvider.GOOGLE
    provider_key: Optional[str] = None
    postal_address: Optional[Address] = None
    geo_coordinates: Optional[GeoCoordinates] = None


class GeocodeResumeRequest(GeocodeOptionsBase):
    resume_data: ParsedResume


class GeocodeJobRequest(GeocodeOptionsBase):
    job_data: ParsedJob


class GeocodeResumeResponseValue(ApiModel):
    resume_data: Optional[ParsedResume] = None


class GeocodeJobResponseValue(ApiModel):
    job_data: Optional[ParsedJob] = None


class GeocodeResumeResponse(ApiResponse[GeocodeResumeResponseValue]):
    pass


class GeocodeJobResponse(ApiResponse[GeocodeJobResponseValue]):
    pass


class GeocodeAndIndexResumeRequest(ApiModel):
    resume_data: ParsedResume
    geocode_options: GeocodeOptionsBase
    indexing_options: IndexSingleDocumentInfo
    index_if_geocode_fails: bool = False


class GeocodeAndIndexJobRequest(ApiModel):
    job_data: ParsedJob
    geocode_options: GeocodeOptionsBase
    indexing_options: IndexSingleDocumentInfo
    index_if_geocode_fails: bool = False


class GeocodeAndIndexResponseValue(ApiModel):
    """Both stages report independently; either may fail while the call succeeds."""

    geocode_response: Optional[ApiResponseInfoLite] = None
    indexing_response: Optional[ApiResponseInfoLite] = None


class GeocodeAndIndexResumeResponseValue(GeocodeAndIndexResponseValue):
    resume_data: Optional[ParsedResume] = None


class GeocodeAndIndexJobResponseValue(GeocodeAndIndexResponseValue):
    job_data: Optional[ParsedJob] = None


class GeocodeAndIndexResumeResponse(ApiResponse[GeocodeAndIndexResumeResponseValue]):
    pass


class GeocodeAndIndexJobResponse(ApiResponse[GeocodeAndIndexJobResponseValue]):
    pass

