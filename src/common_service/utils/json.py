"""
JSON helpers shared by the logger and the API layer.

`to_json_value` is what the contextual logger uses for its opaque
`ref_id` / `result` arguments: the returned value is always something
`json.dumps` accepts, and any failure degrades to an empty string instead
of raising into the caller.
"""

import dataclasses
import json
from typing import Any

from pydantic import BaseModel

_NATIVE = (str, int, float, bool, type(None))


def _default(value: Any) -> Any:
    # Fallback used by json.dumps for anything it cannot encode natively.
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    return str(value)


def to_json_bytes(value: Any) -> bytes | None:
    """Encode `value` as UTF-8 JSON, returning None when it cannot be encoded."""
    try:
        return json.dumps(value, ensure_ascii=False, default=_default).encode("utf-8")
    except (TypeError, ValueError):
        return None


def to_json(value: Any) -> str:
    """Encode `value` as a JSON string, returning "" when it cannot be encoded."""
    data = to_json_bytes(value)
    return data.decode("utf-8") if data is not None else ""


def to_json_value(value: Any) -> Any:
    """
    Return a JSON-compatible representation of an arbitrary value.

    - str / int / float / bool / None are returned unchanged.
    - pydantic models, dataclasses, containers and other objects go through
      a dumps/loads round trip using the same fallback rules as `to_json`.
    - If anything goes wrong (including a broken __str__), "" is returned.
    """
    if isinstance(value, _NATIVE):
        return value
    try:
        return json.loads(json.dumps(value, default=_default))
    except Exception:
        return ""


__all__ = ["to_json", "to_json_bytes", "to_json_value"]
