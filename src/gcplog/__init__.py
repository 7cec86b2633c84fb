"""Cloud Logging structured JSON output with Error Reporting support."""

from gcplog.core.encoding.ndjson import format_time
from gcplog.core.error_reporting import (
    ERROR_KEY,
    ERROR_REPORT_TYPE_KEY,
    ERROR_REPORT_TYPE_VALUE,
    REPORT_LOCATION_KEY,
    new_report_location,
)
from gcplog.core.errors import HandlerError, ReportableError
from gcplog.core.handler import DEFAULT_OPTIONS, Handler, HandlerOptions
from gcplog.core.levels import (
    ALERT,
    CRITICAL,
    DEBUG,
    EMERGENCY,
    ERROR,
    INFO,
    NOTICE,
    WARNING,
    severity_from_level,
)
from gcplog.core.logger import Logger, new_logger
from gcplog.core.models import (
    Attr,
    GroupValue,
    Record,
    ReportLocation,
    Source,
    attrs_from,
    group,
)
from gcplog.core.ports import (
    JSONMarshaler,
    LogValuer,
    ReportLocationError,
    StackTraceError,
    TextMarshaler,
)
from gcplog.core.replace import (
    GCP_MESSAGE_KEY,
    SEVERITY_KEY,
    SOURCE_LOCATION_KEY,
    TIME_KEY,
    replace_attr,
)
from gcplog.core.values import extract_value

__all__ = [
    "ALERT",
    "CRITICAL",
    "DEBUG",
    "DEFAULT_OPTIONS",
    "EMERGENCY",
    "ERROR",
    "ERROR_KEY",
    "ERROR_REPORT_TYPE_KEY",
    "ERROR_REPORT_TYPE_VALUE",
    "GCP_MESSAGE_KEY",
    "INFO",
    "NOTICE",
    "REPORT_LOCATION_KEY",
    "SEVERITY_KEY",
    "SOURCE_LOCATION_KEY",
    "TIME_KEY",
    "WARNING",
    "Attr",
    "GroupValue",
    "Handler",
    "HandlerError",
    "HandlerOptions",
    "JSONMarshaler",
    "LogValuer",
    "Logger",
    "Record",
    "ReportLocation",
    "ReportLocationError",
    "ReportableError",
    "Source",
    "StackTraceError",
    "TextMarshaler",
    "attrs_from",
    "extract_value",
    "format_time",
    "group",
    "new_logger",
    "new_report_location",
    "replace_attr",
    "severity_from_level",
]
