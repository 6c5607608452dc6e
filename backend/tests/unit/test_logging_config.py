"""Unit tests for structured logging and request ID handling"""

import json
import logging

from observability.logging_config import JSONFormatter, RequestIDFilter
from observability.request_id import (
    MAX_REQUEST_ID_LENGTH,
    accept_request_id,
    get_request_id,
    request_id_var,
    set_request_id,
)


def _record(message="Mail item logged", **extra):
    record = logging.LogRecord("domain.mail.lifecycle", logging.INFO, __file__, 10, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_formats_core_fields(self):
        token = request_id_var.set("req-123")
        try:
            record = _record()
            RequestIDFilter().filter(record)
            data = json.loads(JSONFormatter().format(record))
        finally:
            request_id_var.reset(token)

        assert data["level"] == "INFO"
        assert data["request_id"] == "req-123"
        assert data["logger"] == "domain.mail.lifecycle"
        assert data["message"] == "Mail item logged"
        assert data["timestamp"].endswith("+00:00")

    def test_includes_known_extras(self):
        data = json.loads(JSONFormatter().format(_record(mail_id="abc", staff_id="def")))

        assert data["mail_id"] == "abc"
        assert data["staff_id"] == "def"

    def test_ignores_unknown_extras(self):
        data = json.loads(JSONFormatter().format(_record(room_number="210")))
        assert "room_number" not in data


class TestRequestId:
    def test_default_outside_request(self):
        token = request_id_var.set(None)
        try:
            assert get_request_id() == "no-request-id"
        finally:
            request_id_var.reset(token)

    def test_set_and_get(self):
        token = request_id_var.set(None)
        try:
            set_request_id("abc")
            assert get_request_id() == "abc"
        finally:
            request_id_var.reset(token)

    def test_accepts_sane_ids(self):
        assert accept_request_id("desk-terminal-7") == "desk-terminal-7"

    def test_replaces_missing_or_oversized_ids(self):
        assert accept_request_id(None) != ""
        assert accept_request_id("x" * (MAX_REQUEST_ID_LENGTH + 1)) != "x" * (MAX_REQUEST_ID_LENGTH + 1)
        assert accept_request_id("bad\nid") != "bad\nid"
