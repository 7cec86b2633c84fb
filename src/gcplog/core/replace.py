"""Replacement of front-end default attributes with Cloud Logging ones.

https://cloud.google.com/logging/docs/structured-logging
https://cloud.google.com/logging/docs/agent/logging/configuration#special-fields
"""

from collections.abc import Callable, Sequence

from gcplog.core.levels import DEFAULT_SEVERITY, severity_from_level
from gcplog.core.models import Attr

# Keys used by the front-end for the built-in record fields.
TIME_KEY = "time"
LEVEL_KEY = "level"
MESSAGE_KEY = "msg"
SOURCE_KEY = "source"

# Cloud Logging replacements.
SEVERITY_KEY = "severity"
GCP_MESSAGE_KEY = "message"
SOURCE_LOCATION_KEY = "logging.googleapis.com/sourceLocation"
GCP_TIME_KEY = TIME_KEY

ReplaceAttrFunc = Callable[[Sequence[str], Attr], Attr]


def replace_attr(groups: Sequence[str], attr: Attr) -> Attr:
    """Replace a default attribute with its Cloud Logging equivalent.

    Only top-level attributes (``groups`` empty) are rewritten. The time
    attribute is kept as is: its RFC3339 rendering is what Cloud Logging
    expects.

    Args:
        groups: Names of the groups enclosing ``attr``, outermost first.
        attr: The attribute to inspect.

    Returns:
        The replacement attribute, or ``attr`` itself.
    """
    if groups:
        return attr
    if attr.key == LEVEL_KEY:
        level = attr.value
        if not isinstance(level, int) or isinstance(level, bool):
            return Attr(SEVERITY_KEY, DEFAULT_SEVERITY)
        return Attr(SEVERITY_KEY, severity_from_level(level))
    if attr.key == SOURCE_KEY:
        return Attr(SOURCE_LOCATION_KEY, attr.value)
    if attr.key == MESSAGE_KEY:
        return Attr(GCP_MESSAGE_KEY, str(attr.value))
    return attr
