"""Tests for JSON log formatting and request-id propagation."""

import json
import logging
import sys

from streamvibe.logging.context import RequestIDFilter, request_id_var
from streamvibe.logging.formatter import JSONLogFormatter


def _record(msg: str = "hello %s", args: tuple[object, ...] = ("world",), exc_info: object = None) -> logging.LogRecord:
    return logging.LogRecord(
        name="streamvibe.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=exc_info,  # type: ignore[arg-type]
    )


class TestJSONLogFormatter:
    def test_basic_fields(self) -> None:
        line = JSONLogFormatter(service="stream-api").format(_record())
        entry = json.loads(line)

        assert entry["level"] == "INFO"
        assert entry["service"] == "stream-api"
        assert entry["logger"] == "streamvibe.test"
        assert entry["message"] == "hello world"
        assert "timestamp" in entry
        assert "request_id" not in entry
        assert "exception" not in entry

    def test_includes_request_id(self) -> None:
        record = _record()
        record.request_id = "req-1"

        entry = json.loads(JSONLogFormatter(service="stream-api").format(record))

        assert entry["request_id"] == "req-1"

    def test_includes_exception(self) -> None:
        try:
            raise ValueError("bad value")
        except ValueError:
            record = _record(exc_info=sys.exc_info())

        entry = json.loads(JSONLogFormatter(service="stream-api").format(record))

        assert "ValueError: bad value" in entry["exception"]


class TestRequestIDFilter:
    def test_copies_context_value(self) -> None:
        token = request_id_var.set("req-7")
        try:
            record = _record()
            assert RequestIDFilter().filter(record) is True
        finally:
            request_id_var.reset(token)

        assert record.request_id == "req-7"

    def test_without_context_sets_none(self) -> None:
        record = _record()
        RequestIDFilter().filter(record)

        assert record.request_id is None

    def test_keeps_explicit_value(self) -> None:
        record = _record()
        record.request_id = "explicit"
        token = request_id_var.set("from-context")
        try:
            RequestIDFilter().filter(record)
        finally:
            request_id_var.reset(token)

        assert record.request_id == "explicit"
