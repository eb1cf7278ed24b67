"""Tests for the logging setup and request logging middleware."""

import json
import logging
import sys
import uuid

from fastapi import FastAPI
from fastapi.testclient import TestClient

from tenantnotes.core.logging import (
    ColoredFormatter,
    JSONFormatter,
    LoggingMiddleware,
    build_logging_config,
    get_log_level,
    get_logger,
)


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


def _record(msg="hello", **extra):
    record = logging.LogRecord("tenantnotes.test", logging.INFO, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extras():
    out = json.loads(JSONFormatter().format(_record(tenant_id="t-1", note_count=3)))
    assert out["level"] == "INFO"
    assert out["logger"] == "tenantnotes.test"
    assert out["message"] == "hello"
    assert out["extra"] == {"tenant_id": "t-1", "note_count": 3}


def test_json_formatter_serializes_unknown_types():
    value = uuid.uuid4()
    out = json.loads(JSONFormatter().format(_record(user_id=value)))
    assert out["extra"]["user_id"] == str(value)


def test_json_formatter_exception_block():
    try:
        raise ValueError("boom")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()
    out = json.loads(JSONFormatter().format(record))
    assert out["exception"]["type"] == "ValueError"
    assert out["exception"]["message"] == "boom"


def test_colored_formatter_leaves_record_untouched():
    record = _record()
    formatted = ColoredFormatter("%(levelname)s %(message)s").format(record)
    assert "\033[" in formatted
    assert record.levelname == "INFO"


def test_get_log_level():
    assert get_log_level("debug") == logging.DEBUG
    assert get_log_level("WARNING") == logging.WARNING
    assert get_log_level("nonsense") == logging.INFO


def test_file_handlers_follow_settings(test_settings):
    config = build_logging_config()
    # the test environment turns file logging off
    assert set(config["handlers"]) == {"console"}
    assert config["loggers"]["tenantnotes"]["handlers"] == ["console"]


def test_get_logger_namespaces_under_app():
    assert get_logger("notes").name == "tenantnotes.notes"


def test_logging_middleware_logs_request_and_response():
    app = FastAPI()

    @app.get("/ping")
    async def ping():
        return {"ok": True}

    app.add_middleware(LoggingMiddleware)

    handler = ListHandler()
    logger = get_logger("http")
    logger.addHandler(handler)
    try:
        resp = TestClient(app).get("/ping")
    finally:
        logger.removeHandler(handler)

    assert resp.status_code == 200
    messages = [r.getMessage() for r in handler.records]
    assert messages == ["HTTP Request", "HTTP Response"]
    request_rec, response_rec = handler.records
    assert request_rec.request_id == response_rec.request_id
    assert response_rec.status_code == 200
    assert response_rec.path == "/ping"
