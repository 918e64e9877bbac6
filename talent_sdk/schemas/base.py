# -------------------------------------------------------------------
# talent_sdk/schemas/base.py
#
# WHAT THIS FILE IS FOR
# --------------------
# This module defines the shared building blocks of every request and
# response model in the SDK:
#
#   - ApiModel: base class carrying the wire naming rule
#   - ApiResponseInfoLite / ApiResponseInfo: the status-info block
#   - ApiResponse[T]: the standard {Info, Value} envelope
#
# NAMING CONVENTION (IMPORTANT)
# -----------------------------
# Python attributes are snake_case. The wire is PascalCase.
# The mapping is done by `alias_generator=snake_to_pascal` and
# `populate_by_name=True`, so both of these are valid:
#
#   ApiResponseInfo(transaction_id="abc")
#   ApiResponseInfo.model_validate({"TransactionId": "abc"})
#
# Where the server spelling does not follow the rule (e.g. IPAddress),
# the field carries an explicit alias.
#
# UNKNOWN FIELDS
# --------------
# The server returns far more fields than the SDK declares.
# `extra="allow"` keeps them on the model, so a document read from the
# API can be sent back (e.g. re-indexed) without losing data.
# -------------------------------------------------------------------

from __future__ import annotations

from datetime import datetime
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from talent_sdk.utils.naming import snake_to_pascal

# Codes the server uses for a call that did what was asked.
# "SomeErrors" is returned by batch operations that report per-item results.
SUCCESS_CODES = frozenset(
    {
        "Success",
        "WarningsFoundDuringParsing",
        "PossibleTruncationFromTimeout",
        "SomeErrors",
    }
)


class ApiModel(BaseModel):
    """Base for every SDK model: PascalCase aliases, extra fields preserved."""

    model_config = ConfigDict(
        alias_generator=snake_to_pascal,
        populate_by_name=True,
        extra="allow",
    )


class ApiResponseInfoLite(ApiModel):
    """
    Minimal status block.

    Used both for the top-level `Info` and for the per-stage results
    embedded in composite responses (ParsingResponse, GeocodeResponse,
    IndexingResponse).
    """

    code: Optional[str] = None
    message: Optional[str] = None

    @property
    def is_success(self) -> bool:
        # a block without a code is not proof of success
        return self.code in SUCCESS_CODES


class AccountInfo(ApiModel):
    account_id: Optional[str] = None
    name: Optional[str] = None
    credits_remaining: Optional[float] = None
    credits_used: Optional[float] = None
    expiration_date: Optional[datetime] = None
    ip_address: Optional[str] = Field(None, alias="IPAddress")
    maximum_concurrent_requests: Optional[int] = None
    region: Optional[str] = None


class ApiResponseInfo(ApiResponseInfoLite):
    transaction_id: Optional[str] = None
    engine_version: Optional[str] = None
    api_version: Optional[str] = None
    total_elapsed_milliseconds: Optional[int] = None
    customer_details: Optional[AccountInfo] = None


ValueT = TypeVar("ValueT")


class ApiResponse(ApiModel, Generic[ValueT]):
    """
    Standard response envelope returned by every non-UI endpoint.

    `info` is always present on a well-formed response.
    `value` is absent for operations with nothing to return
    (e.g. create/delete index).
    """

    info: Optional[ApiResponseInfo] = None
    value: Optional[ValueT] = None
