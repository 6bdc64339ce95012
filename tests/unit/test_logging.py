"""Unit tests for structured JSON logging"""

import json
import logging
from finsim_engine.config import settings
from finsim_engine.infrastructure.observability.logging import build_formatter, setup_logging


def _record(message: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("finsim_engine.test", logging.INFO, __file__, 1, message, None, None)
    record.__dict__.update(extra)
    return record


def test_formatter_emits_json_with_service_metadata():
    line = build_formatter().format(_record("Projection completed", request_id="req-1", horizon_months=12))
    payload = json.loads(line)

    assert payload["message"] == "Projection completed"
    assert payload["level"] == "INFO"
    assert payload["service"] == settings.service_name
    assert payload["request_id"] == "req-1"
    assert payload["horizon_months"] == 12
    assert payload["timestamp"].endswith("+00:00")


def test_formatter_timestamp_comes_from_record():
    record = _record("x")
    record.created = 0.0

    payload = json.loads(build_formatter().format(record))

    assert payload["timestamp"] == "1970-01-01T00:00:00+00:00"


def test_setup_logging_replaces_handlers_and_quiets_http_client():
    root = logging.getLogger()
    previous_level, previous_handlers = root.level, list(root.handlers)
    try:
        setup_logging("DEBUG")

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)
