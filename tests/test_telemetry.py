import json
import logging
import sys

from chronosec.telemetry.logging import JsonFormatter


def test_log_lines_are_valid_json_with_quotes_in_message():
    record = logging.LogRecord("chronosec.export", logging.INFO, __file__, 1, 'exported "%s"', ("a\\b",), None)

    entry = json.loads(JsonFormatter().format(record))

    assert entry["message"] == 'exported "a\\b"'
    assert entry["level"] == "INFO"
    assert entry["logger"] == "chronosec.export"


def test_log_lines_include_exceptions():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord("chronosec.ai", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())

    entry = json.loads(JsonFormatter().format(record))
    assert "RuntimeError: boom" in entry["exc_info"]
