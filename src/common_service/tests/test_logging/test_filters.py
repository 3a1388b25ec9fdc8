# src/common_service/tests/test_logging/test_filters.py
import logging
from common_service.core.logging.filters import REDACTED, RedactFilter

def make_record():
    # name, level, pathname, lineno, msg, args, exc_info
    return logging.LogRecord("test", logging.INFO, __file__, 1, "hello %s", ("world",), None)

def test_redact_filter_masks_structured_fields():
    rec = make_record()
    original = {"appName": "billing", "Password": "hunter2", "token": "abc"}
    rec.fields = original

    assert RedactFilter().filter(rec) is True
    assert rec.fields == {"appName": "billing", "Password": REDACTED, "token": REDACTED}
    # the caller's mapping is not mutated
    assert original["Password"] == "hunter2"

def test_redact_filter_masks_record_extras():
    rec = make_record()
    rec.authorization = "Bearer xyz"
    RedactFilter().filter(rec)
    assert rec.authorization == REDACTED

def test_redact_filter_leaves_clean_records_alone():
    rec = make_record()
    fields = {"appName": "billing"}
    rec.fields = fields
    RedactFilter().filter(rec)
    assert rec.fields is fields
