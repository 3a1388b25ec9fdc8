# src/common_service/core/logging/filters.py
"""
Logging filters.

RedactFilter masks values whose key looks sensitive, both on the LogRecord
itself (attributes passed via `extra={...}`) and inside the structured
`record.fields` mapping written by AppLogger. Matching is on the key name,
case-insensitive; values are never inspected.

The filter always returns True: it annotates records, it never drops them.
It is attached to every handler by builder.make_dict_config().
"""

import logging
from logging import LogRecord

REDACTED = "***REDACTED***"


class RedactFilter(logging.Filter):
    SENSITIVE = {
        "password",
        "secret",
        "token",
        "access_token",
        "refresh_token",
        "ssn",
        "authorization",
        "cookie",
    }

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = REDACTED

        fields = getattr(record, "fields", None)
        if isinstance(fields, dict) and any(k.lower() in self.SENSITIVE for k in fields):
            # Copy so the caller's mapping is left untouched.
            record.fields = {
                k: (REDACTED if k.lower() in self.SENSITIVE else v) for k, v in fields.items()
            }
        return True
