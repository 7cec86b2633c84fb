"""Python logging handler adapter for gcplog.

This adapter bridges Python's standard library logging module to a gcplog
Handler, so existing ``logging`` calls produce Cloud Logging JSON lines.
"""

import logging
import traceback
from datetime import datetime, timezone
from types import TracebackType

from gcplog.core import levels
from gcplog.core.error_reporting import ERROR_KEY
from gcplog.core.handler import Handler
from gcplog.core.models import Attr, Record, ReportLocation, Source

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

_EXTRA_LEVEL_NAMES = {
    levels.NOTICE: "NOTICE",
    levels.ALERT: "ALERT",
    levels.EMERGENCY: "EMERGENCY",
}


class ExceptionInfo:
    """An exception taken from a LogRecord's exc_info.

    Provides the formatted traceback as stack trace and the innermost
    traceback frame as report location.
    """

    def __init__(self, exc: BaseException, tb: TracebackType | None = None) -> None:
        self.exc = exc
        self.tb = tb if tb is not None else exc.__traceback__

    def __str__(self) -> str:
        return str(self.exc)

    def log_value(self) -> str:
        return str(self.exc)

    def stack_trace(self) -> tuple[bytes | None, bool]:
        text = "".join(traceback.format_exception(type(self.exc), self.exc, self.tb))
        return text.encode("utf-8"), bool(text)

    def report_location(self) -> ReportLocation | None:
        tb = self.tb
        if tb is None:
            return None
        while tb.tb_next is not None:
            tb = tb.tb_next
        code = tb.tb_frame.f_code
        module = tb.tb_frame.f_globals.get("__name__", "")
        return ReportLocation(
            file_path=code.co_filename,
            line_number=tb.tb_lineno,
            function_name=f"{module}.{code.co_qualname}" if module else code.co_qualname,
        )


def record_from_logrecord(record: logging.LogRecord) -> Record:
    """Convert a stdlib LogRecord into a gcplog Record.

    Extra fields become attributes in the order they were set. Exception
    info becomes the "error" attribute unless an extra already uses that key.
    """
    attrs = [
        Attr(key, value)
        for key, value in record.__dict__.items()
        if key not in _STANDARD_LOGRECORD_ATTRS
    ]

    # Extract exception info if present
    if record.exc_info and record.exc_info[1] is not None:
        if not any(attr.key == ERROR_KEY for attr in attrs):
            _, exc_value, exc_tb = record.exc_info
            attrs.append(Attr(ERROR_KEY, ExceptionInfo(exc_value, exc_tb)))

    return Record(
        time=datetime.fromtimestamp(record.created, tz=timezone.utc),
        level=record.levelno,
        message=record.getMessage(),
        attrs=tuple(attrs),
        source=Source(
            function=record.funcName or "",
            file=record.pathname,
            line=record.lineno,
        ),
    )


class GCPLoggingHandler(logging.Handler):
    """Logging handler that writes log records through a gcplog Handler.

    Example:
        ```python
        import sys
        from gcplog import Handler
        from gcplog.adapters.logging import GCPLoggingHandler

        logging.getLogger().addHandler(GCPLoggingHandler(Handler(sys.stdout)))
        ```
    """

    def __init__(self, handler: Handler, level: int = logging.NOTSET) -> None:
        """Initialize the adapter.

        Args:
            handler: The gcplog handler receiving converted records.
            level: Level of this logging.Handler; the gcplog handler's own
                minimum level applies as well.
        """
        super().__init__(level)
        self._handler = handler

    @property
    def handler(self) -> Handler:
        return self._handler

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record through the gcplog handler.

        Args:
            record: The log record to emit.
        """
        if not self._handler.enabled(record.levelno):
            return
        try:
            self._handler.handle(record_from_logrecord(record))
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)


def install(handler: Handler, logger: logging.Logger | None = None) -> GCPLoggingHandler:
    """Attach a GCPLoggingHandler to ``logger`` (the root logger by default).

    Also registers level names for NOTICE, ALERT and EMERGENCY so they can be
    used with ``Logger.log``.

    Returns:
        The installed logging handler.
    """
    for level, name in _EXTRA_LEVEL_NAMES.items():
        logging.addLevelName(level, name)
    target = logger if logger is not None else logging.getLogger()
    bridge = GCPLoggingHandler(handler)
    target.addHandler(bridge)
    return bridge
