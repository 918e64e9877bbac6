"""
talent_sdk/utils/serialization.py

The single JSON option set used for every request body and for
`to_json()` on parsed documents:

- property names are PascalCase aliases (see naming.py)
- None values are omitted
- dates/enums are emitted in JSON mode
- indentation is the only toggle
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel

from talent_sdk.utils.naming import convert_keys_snake_to_pascal


def to_jsonable(obj: Any) -> Any:
    """Turn a model, list or dict into plain JSON-ready Python data."""
    if isinstance(obj, BaseModel):
        return obj.model_dump(by_alias=True, exclude_none=True, mode="json")

    if isinstance(obj, (list, tuple)):
        return [to_jsonable(x) for x in obj]

    if isinstance(obj, dict):
        return convert_keys_snake_to_pascal({k: to_jsonable(v) for k, v in obj.items()})

    return obj


def dumps(obj: Any, *, formatted: bool = False) -> str:
    return json.dumps(
        to_jsonable(obj),
        indent=2 if formatted else None,
        ensure_ascii=False,
    )
