from __future__ import annotations

from typing import Any

from talent_sdk.schemas.base import ApiResponse


class GetAccountInfoResponse(ApiResponse[Any]):
    """Account details come back in `info.customer_details`; there is no value."""
