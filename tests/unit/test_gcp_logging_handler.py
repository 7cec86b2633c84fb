"""Unit tests for GCPLoggingHandler logging adapter."""

import io
import json
import logging
from collections.abc import Iterator
from typing import Any

import pytest

from gcplog import ERROR_REPORT_TYPE_VALUE, Handler, HandlerOptions
from gcplog.adapters.logging import (
    ExceptionInfo,
    GCPLoggingHandler,
    install,
    record_from_logrecord,
)


def _lines(stream: io.StringIO) -> list[dict[str, Any]]:
    return [json.loads(line) for line in stream.getvalue().splitlines()]


def _make_record(**overrides: Any) -> logging.LogRecord:
    kwargs: dict[str, Any] = {
        "name": "test",
        "level": logging.INFO,
        "pathname": "",
        "lineno": 0,
        "msg": "test message",
        "args": (),
        "exc_info": None,
    }
    kwargs.update(overrides)
    return logging.LogRecord(**kwargs)


@pytest.fixture
def stdlib_logger(stream: io.StringIO) -> Iterator[logging.Logger]:
    """A stdlib logger wired to a GCPLoggingHandler over the test stream."""
    logger = logging.getLogger("test_gcplog_adapter")
    logger.handlers.clear()  # Remove any existing handlers
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    logger.addHandler(GCPLoggingHandler(Handler(stream, HandlerOptions(add_source=True))))
    yield logger
    logger.handlers.clear()


@pytest.mark.adapter
class TestGCPLoggingHandler:
    """Tests for GCPLoggingHandler adapter."""

    def test_handler_is_logging_handler(self, stream: io.StringIO) -> None:
        """Handler extends logging.Handler."""
        handler = GCPLoggingHandler(Handler(stream))
        assert isinstance(handler, logging.Handler)

    def test_emit_writes_document(self, stream: io.StringIO) -> None:
        """Handler.emit() writes one JSON line."""
        handler = GCPLoggingHandler(Handler(stream))
        handler.emit(_make_record())

        docs = _lines(stream)
        assert len(docs) == 1
        assert docs[0]["message"] == "test message"
        assert docs[0]["severity"] == "INFO"

    def test_time_from_created(self, stream: io.StringIO) -> None:
        """The record's creation time is written in RFC3339."""
        handler = GCPLoggingHandler(Handler(stream))
        record = _make_record()
        record.created = 1702300000.25
        handler.emit(record)

        assert _lines(stream)[0]["time"] == "2023-12-11T13:06:40.25Z"

    def test_gcplog_level_applies(self, stream: io.StringIO) -> None:
        """Records below the gcplog handler's level are dropped."""
        handler = GCPLoggingHandler(Handler(stream))
        handler.emit(_make_record(level=logging.DEBUG))
        assert stream.getvalue() == ""

    def test_message_args_are_formatted(self, stream: io.StringIO) -> None:
        """Printf-style arguments are merged into the message."""
        handler = GCPLoggingHandler(Handler(stream))
        handler.emit(_make_record(msg="user %s logged in", args=("bob",)))
        assert _lines(stream)[0]["message"] == "user bob logged in"

    def test_includes_extra_attributes(
        self, stdlib_logger: logging.Logger, stream: io.StringIO
    ) -> None:
        """Extra dict entries from the logging call become attributes."""
        stdlib_logger.info(
            "request processed",
            extra={"request_id": "abc123", "user_id": 42, "tags": ["a"]},
        )

        doc = _lines(stream)[0]
        assert doc["request_id"] == "abc123"
        assert doc["user_id"] == 42
        assert doc["tags"] == ["a"]
        assert "pathname" not in doc

    def test_source_location(
        self, stdlib_logger: logging.Logger, stream: io.StringIO
    ) -> None:
        """funcName, pathname and lineno become the source location."""
        stdlib_logger.warning("located")

        source = _lines(stream)[0]["logging.googleapis.com/sourceLocation"]
        assert source["function"] == "test_source_location"
        assert source["file"].endswith("test_gcp_logging_handler.py")
        assert isinstance(source["line"], int)

    def test_exception_becomes_error_report(
        self, stdlib_logger: logging.Logger, stream: io.StringIO
    ) -> None:
        """logger.exception() produces an Error Reporting document."""
        try:
            raise ValueError("test error")
        except ValueError:
            stdlib_logger.exception("caught error")

        doc = _lines(stream)[0]
        assert doc["@type"] == ERROR_REPORT_TYPE_VALUE
        assert doc["severity"] == "ERROR"
        assert doc["message"].startswith("Traceback (most recent call last):")
        assert "ValueError: test error" in doc["message"]
        assert doc["error"] == "test error"
        location = doc["reportLocation"]
        assert location["filePath"].endswith("test_gcp_logging_handler.py")
        assert location["functionName"].endswith(
            "TestGCPLoggingHandler.test_exception_becomes_error_report"
        )

    def test_error_extra_wins_over_exc_info(
        self, stdlib_logger: logging.Logger, stream: io.StringIO
    ) -> None:
        """An explicit error extra is used instead of the exception."""
        try:
            raise KeyError("missing")
        except KeyError:
            stdlib_logger.exception("lookup", extra={"error": "explicit"})

        doc = _lines(stream)[0]
        assert doc["message"] == "explicit"
        assert doc["error"] == "explicit"

    def test_encode_failure_uses_handle_error(
        self, stream: io.StringIO, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Failures are reported through logging.Handler.handleError."""
        handler = GCPLoggingHandler(Handler(stream))
        failed: list[logging.LogRecord] = []
        monkeypatch.setattr(handler, "handleError", failed.append)

        record = _make_record()
        record.payload = object()
        handler.emit(record)

        assert failed == [record]
        assert stream.getvalue() == ""


@pytest.mark.adapter
class TestRecordFromLogRecord:
    """Tests for LogRecord conversion."""

    def test_converts_fields(self) -> None:
        """Level, message and source are carried over."""
        record = _make_record(
            level=logging.ERROR,
            pathname="/app/service.py",
            lineno=42,
            func="process_request",
        )
        converted = record_from_logrecord(record)

        assert converted.level == logging.ERROR
        assert converted.message == "test message"
        assert converted.source is not None
        assert converted.source.file == "/app/service.py"
        assert converted.source.line == 42
        assert converted.source.function == "process_request"
        assert converted.attrs == ()

    def test_exc_info_without_value_is_ignored(self) -> None:
        """exc_info of (None, None, None) adds no error."""
        converted = record_from_logrecord(_make_record(exc_info=(None, None, None)))
        assert converted.attrs == ()


@pytest.mark.adapter
class TestExceptionInfo:
    """Tests for ExceptionInfo capabilities."""

    def test_unraised_exception_has_no_location(self) -> None:
        """An exception that was never raised has a trace but no location."""
        info = ExceptionInfo(RuntimeError("never raised"))
        trace, ok = info.stack_trace()
        assert ok
        assert trace == b"RuntimeError: never raised\n"
        assert info.report_location() is None
        assert str(info) == "never raised"


@pytest.mark.adapter
class TestInstall:
    """Tests for install()."""

    def test_attaches_and_registers_levels(self, stream: io.StringIO) -> None:
        """install() adds the bridge and the extra level names."""
        logger = logging.getLogger("test_gcplog_install")
        logger.handlers.clear()
        try:
            bridge = install(Handler(stream), logger)
            assert bridge in logger.handlers
            assert logging.getLevelName(25) == "NOTICE"
            assert logging.getLevelName(70) == "EMERGENCY"
        finally:
            logger.handlers.clear()
