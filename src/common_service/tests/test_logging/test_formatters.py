# src/common_service/tests/test_logging/test_formatters.py
import logging
import json
import re
from common_service.core.logging.formatters import ColorFormatter, JsonFormatter

def make_record(level=logging.INFO, msg="hello %s", args=("tester",)):
    return logging.LogRecord("common_service.app", level, __file__, 10, msg, args, None)

def test_json_formatter_structured_fields():
    rec = make_record()
    rec.fields = {"logID": 1, "appName": "billing", "refID": 7, "serviceName": "pay", "result": {"ok": True}}
    data = json.loads(JsonFormatter().format(rec))

    assert list(data)[:3] == ["timestamp", "level", "message"]
    assert data["message"] == "hello tester"
    assert data["level"] == "INFO"
    assert data["appName"] == "billing"
    assert data["result"] == {"ok": True}
    # caller location is not part of the record shape
    assert "pathname" not in data
    assert "lineno" not in data

def test_json_formatter_timestamp_is_utc_iso8601():
    data = json.loads(JsonFormatter().format(make_record()))
    assert re.fullmatch(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3}Z", data["timestamp"])

def test_json_formatter_warn_level_name():
    data = json.loads(JsonFormatter().format(make_record(level=logging.WARNING)))
    assert data["level"] == "WARN"

def test_json_formatter_fields_cannot_override_core_keys():
    rec = make_record()
    rec.fields = {"message": "spoofed", "level": "DEBUG"}
    data = json.loads(JsonFormatter().format(rec))
    assert data["message"] == "hello tester"
    assert data["level"] == "INFO"

def test_json_formatter_plain_records_keep_extras():
    rec = make_record()
    rec.custom = "value"
    data = json.loads(JsonFormatter().format(rec))
    assert data["logger"] == "common_service.app"
    assert data["custom"] == "value"

def test_json_formatter_non_serializable_extra():
    rec = make_record()
    class X:
        def __repr__(self):
            return "<X>"
    rec.fields = {"obj": X()}
    data = json.loads(JsonFormatter().format(rec))
    # non-serializable obj should be stringified
    assert data["obj"] == "<X>"

def test_color_formatter_appends_fields():
    rec = make_record()
    rec.fields = {"appName": "billing", "status": 200}
    line = ColorFormatter().format(rec)
    assert "hello tester" in line
    assert "[appName=billing, status=200]" in line
    assert "\033[32m" in line  # INFO is green
