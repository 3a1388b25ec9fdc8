import math
import re

# Optional sign followed by ASCII digits only: no whitespace, no "_" separators.
_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def is_empty_or_null(value: str | None) -> bool:
    """
    True for None, blank strings and the literal "null" (any case).
    """
    if value is None:
        return True
    return value.strip() == "" or value.lower() == "null"


def is_not_empty_or_null(value: str | None) -> bool:
    return not is_empty_or_null(value)


def null_string_to_string(value: str | None) -> str:
    """Collapse a nullable column value to a plain string ("" for NULL)."""
    return value if value is not None else ""


def string_to_null_string(value: str) -> str | None:
    """
    Wrap a string as a nullable value.

    Python has no separate nullable-string type: `None` is NULL and any str,
    including "", is a valid value, so the string is returned unchanged.
    """
    return value


def itoa(number: int | float) -> str:
    """
    Render a number as a base-10 integer string.

    Floats are truncated toward zero, so 3.9 -> "3" and -3.9 -> "-3".
    NaN and infinities have no integer form and raise ValueError.
    """
    if isinstance(number, float) and not math.isfinite(number):
        raise ValueError(f"cannot render {number!r} as an integer")
    return str(int(number))


def atoi(value: str | None) -> int:
    """
    Parse a signed base-10 integer in the 64-bit range, returning 0 otherwise.

    Parsing is strict: surrounding whitespace, "_" digit separators and
    non-ASCII digits are rejected, unlike int().
    """
    if value is None or not _DECIMAL_RE.fullmatch(value):
        return 0
    number = int(value, 10)
    if not _INT64_MIN <= number <= _INT64_MAX:
        return 0
    return number


__all__ = [
    "is_empty_or_null",
    "is_not_empty_or_null",
    "null_string_to_string",
    "string_to_null_string",
    "itoa",
    "atoi",
]
