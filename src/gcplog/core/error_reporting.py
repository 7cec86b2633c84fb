"""Error Reporting support.

When a record carries an attribute keyed ERROR_KEY, the handler turns the
log entry into a ReportedErrorEvent.
See https://cloud.google.com/error-reporting/docs/formatting-error-messages.
"""

import sys
from typing import Any

from gcplog.core.models import Attr, ReportLocation
from gcplog.core.ports import ReportLocationError, StackTraceError
from gcplog.core.replace import GCP_MESSAGE_KEY
from gcplog.core.values import extract_value

# Key by which errors are retrieved from attributes.
# Values may be str, an exception, or anything implementing StackTraceError
# and/or ReportLocationError.
ERROR_KEY = "error"

ERROR_REPORT_TYPE_KEY = "@type"
ERROR_REPORT_TYPE_VALUE = (
    "type.googleapis.com/google.devtools.clouderrorreporting.v1beta1.ReportedErrorEvent"
)
REPORT_LOCATION_KEY = "reportLocation"


def new_report_location(skip: int = 0) -> ReportLocation | None:
    """Capture a ReportLocation from the current call stack.

    The result can be stored on an exception and returned from its
    ``report_location()`` method.

    Args:
        skip: Number of stack frames to skip. 0 identifies the caller of
            new_report_location.

    Returns:
        The location, or None if the stack is not deep enough.
    """
    if skip < 0:
        return None
    try:
        frame = sys._getframe(skip + 1)
    except ValueError:
        return None
    code = frame.f_code
    module = frame.f_globals.get("__name__", "")
    return ReportLocation(
        file_path=code.co_filename,
        line_number=frame.f_lineno,
        function_name=f"{module}.{code.co_qualname}" if module else code.co_qualname,
    )


def assert_error_value(value: Any) -> tuple[str, ReportLocation | None]:
    """Extract the error report message and location from an error value.

    A non-empty stack trace always wins as the message. Otherwise exceptions
    and strings give their text. Any other type yields a diagnostic message
    and a location pointing here, so the misuse can be found.

    Returns:
        Tuple of (message, report location or None).
    """
    message: str | None = None
    if isinstance(value, StackTraceError):
        trace, ok = value.stack_trace()
        if ok and trace:
            if isinstance(trace, bytes):
                message = trace.decode("utf-8", errors="replace")
            else:
                message = str(trace)

    location: ReportLocation | None = None
    if isinstance(value, ReportLocationError):
        location = value.report_location()

    if message is not None:
        return message, location
    if isinstance(value, BaseException):
        return str(value), location
    if isinstance(value, str):
        return value, location
    return (
        f"gcplog: unsupported type {type(value).__name__} for error with value {value}",
        new_report_location(0),
    )


def check_and_set_error_report(attr: Attr, out: dict[str, Any]) -> bool:
    """Write the error report fields into ``out`` if ``attr`` is the error.

    Returns:
        True if ``attr`` was keyed ERROR_KEY and the report was written.
    """
    if attr.key != ERROR_KEY:
        return False
    value = attr.value
    message, location = assert_error_value(value)
    out[ERROR_REPORT_TYPE_KEY] = ERROR_REPORT_TYPE_VALUE
    out[GCP_MESSAGE_KEY] = message
    out[ERROR_KEY] = extract_value(value)
    if location is not None:
        out[REPORT_LOCATION_KEY] = extract_value(location)
    return True
