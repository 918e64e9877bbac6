"""
talent_sdk/utils/naming.py

WHAT THIS FILE IS FOR
---------------------
This module owns the **wire naming rule** of the SDK.

The remote API speaks PascalCase JSON (`IndexIdsToSearchInto`,
`ResumeData`, `TransactionId`), while every Python model in
`talent_sdk/schemas` uses snake_case attributes. This module converts
between the two so that neither side has to know about the other.

It is used in two places:
- As the pydantic `alias_generator` of every schema model
  (see talent_sdk/schemas/base.py)
- By the request serializer when a caller hands over a plain dict/list
  body instead of a model (see talent_sdk/utils/serialization.py)

PRESERVE-CONTAINER MECHANISM
----------------------------
Some fields are *free-form containers* whose inner keys are owned by
the server or by the caller and must be sent back verbatim:

- `ResumeData` / `JobData`: parsed documents exactly as the server
  returned them
- `CustomInfo`: arbitrary caller payload echoed to UI hooks

For these, the container key itself is converted, but its child keys
are left untouched.

Example:
    preserve_container_keys = {"ResumeData"}

Input:
    {"index_id": "x", "resume_data": {"ContactInformation": {...}}}

Output:
    {"IndexId": "x", "ResumeData": {"ContactInformation": {...}}}

WHAT THIS FILE IS NOT FOR
-------------------------
This module MUST NOT:
- Perform I/O or logging
- Modify values
- Know about specific endpoints

It is a **pure transformation utility**.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional


DEFAULT_PRESERVE_CONTAINER_KEYS = frozenset({"ResumeData", "JobData", "CustomInfo"})


def snake_to_pascal(s: str) -> str:
    """
    Convert a snake_case string to PascalCase.

    - Strings without '_' only get their first letter upper-cased
    - Leading/trailing underscores are dropped (they carry no meaning on the wire)
    """
    parts = [p for p in s.split("_") if p]
    if not parts:
        return s  # e.g. "___"

    return "".join(p[:1].upper() + p[1:] for p in parts)


def convert_keys_snake_to_pascal(
    obj: Any,
    *,
    preserve_container_keys: Optional[Iterable[str]] = None,
) -> Any:
    """
    Recursively convert dict keys from snake_case to PascalCase.

    Args:
        obj:
            Any JSON-like object (dict / list / primitive)
        preserve_container_keys:
            Keys (snake_case OR PascalCase) whose *child dict keys*
            are kept exactly as given. Defaults to
            DEFAULT_PRESERVE_CONTAINER_KEYS.

    Returns:
        New object with converted keys (input is not mutated)
    """
    if preserve_container_keys is None:
        preserve = set(DEFAULT_PRESERVE_CONTAINER_KEYS)
    else:
        preserve = set(preserve_container_keys)

    # ---------- list ----------
    if isinstance(obj, list):
        return [
            convert_keys_snake_to_pascal(x, preserve_container_keys=preserve)
            for x in obj
        ]

    # ---------- dict ----------
    if isinstance(obj, dict):
        out: dict[Any, Any] = {}

        for key, value in obj.items():
            if not isinstance(key, str):
                out[key] = value
                continue

            pascal_key = snake_to_pascal(key)

            if (key in preserve or pascal_key in preserve) and isinstance(value, dict):
                out[pascal_key] = value
            else:
                out[pascal_key] = convert_keys_snake_to_pascal(
                    value, preserve_container_keys=preserve
                )

        return out

    # ---------- primitive ----------
    return obj
