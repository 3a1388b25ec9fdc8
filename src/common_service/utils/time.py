import time
from datetime import datetime


def now_ns() -> int:
    """Wall-clock time in nanoseconds since the epoch (used as a log id)."""
    return time.time_ns()


def monotonic() -> float:
    return time.perf_counter()


def elapsed_ms(start: float) -> int:
    """
    Whole milliseconds elapsed since `start`, a value previously returned by monotonic().
    """
    return int((time.perf_counter() - start) * 1000)


def time_to_null_time(value: datetime | None) -> datetime | None:
    """
    Wrap a datetime as a nullable timestamp.

    `None` is NULL and any datetime is a valid value, so the input is returned unchanged.
    """
    return value


__all__ = ["now_ns", "monotonic", "elapsed_ms", "time_to_null_time"]
