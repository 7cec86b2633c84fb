"""Log levels and their mapping to Cloud Logging severities.

Level values share the integer axis of the standard library ``logging``
module, so records coming from the stdlib bridge need no translation.
NOTICE sits between INFO and WARNING, ALERT and EMERGENCY above CRITICAL.
"""

import logging

DEBUG = logging.DEBUG  # Debug or trace information
INFO = logging.INFO  # Routine information, such as ongoing status or performance
NOTICE = logging.INFO + 5  # Normal but significant events
WARNING = logging.WARNING  # Warning events might cause problems
ERROR = logging.ERROR  # Error events are likely to cause problems
CRITICAL = logging.CRITICAL  # Critical events cause more severe problems or outages
ALERT = logging.CRITICAL + 10  # A person must take an action immediately
EMERGENCY = logging.CRITICAL + 20  # One or more systems are unusable

# Severity values defined by Cloud Logging.
# https://cloud.google.com/logging/docs/reference/v2/rest/v2/LogEntry#LogSeverity
DEFAULT_SEVERITY = "DEFAULT"
DEBUG_SEVERITY = "DEBUG"
INFO_SEVERITY = "INFO"
NOTICE_SEVERITY = "NOTICE"
WARNING_SEVERITY = "WARNING"
ERROR_SEVERITY = "ERROR"
CRITICAL_SEVERITY = "CRITICAL"
ALERT_SEVERITY = "ALERT"
EMERGENCY_SEVERITY = "EMERGENCY"

# Highest threshold first.
_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (EMERGENCY, EMERGENCY_SEVERITY),
    (ALERT, ALERT_SEVERITY),
    (CRITICAL, CRITICAL_SEVERITY),
    (ERROR, ERROR_SEVERITY),
    (WARNING, WARNING_SEVERITY),
    (NOTICE, NOTICE_SEVERITY),
    (INFO, INFO_SEVERITY),
    (DEBUG, DEBUG_SEVERITY),
)

SEVERITIES = (DEFAULT_SEVERITY,) + tuple(
    severity for _, severity in reversed(_THRESHOLDS)
)


def severity_from_level(level: int) -> str:
    """Map a numeric level to a Cloud Logging severity label.

    Args:
        level: Numeric log level.

    Returns:
        The label of the highest threshold not above ``level``,
        or "DEFAULT" when ``level`` is below DEBUG.
    """
    for threshold, severity in _THRESHOLDS:
        if level >= threshold:
            return severity
    return DEFAULT_SEVERITY
