"""
talent_sdk/rest/content_types.py

Content-Type parsing and building.

The only decision made downstream from this module is "is this body
JSON, and in which encoding is it written". Anything unparseable falls
back to UTF-8 rather than failing the call.
"""

from __future__ import annotations

import codecs
from typing import Optional, Tuple

JSON = "application/json"
DEFAULT_ENCODING = "utf-8"


def _normalize_encoding(charset: str) -> str:
    try:
        return codecs.lookup(charset).name
    except LookupError:
        return DEFAULT_ENCODING


def parse_content_type_header(value: Optional[str]) -> Tuple[str, str]:
    """
    Split `type/subtype; charset=X` into (media type, encoding).

    - media type is lower-cased and stripped ("" when the header is empty)
    - encoding is a Python codec name, UTF-8 when missing or unknown
    """
    if not value:
        return "", DEFAULT_ENCODING

    media_type, _, params = value.partition(";")
    encoding = DEFAULT_ENCODING

    for param in params.split(";"):
        key, _, raw = param.partition("=")
        if key.strip().lower() != "charset":
            continue
        charset = raw.strip().strip('"').strip("'")
        if charset:
            encoding = _normalize_encoding(charset)

    return media_type.strip().lower(), encoding


def build_content_type_header(media_type: str, encoding: str = DEFAULT_ENCODING) -> str:
    return f"{media_type}; charset={encoding}"
