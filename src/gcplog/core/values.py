"""Flattening of attribute values into JSON-encodable form."""

from datetime import date, datetime, time
from typing import Any

from gcplog.core.models import GroupValue
from gcplog.core.ports import JSONMarshaler, LogValuer, TextMarshaler

# Types the encoder handles itself; never rendered through str().
_PRIMITIVES = (
    str, int, float, bool, type(None), list, tuple, dict, bytes, bytearray
)

# Types the encoder renders itself, like a text marshaler.
_NATIVE_TEXT = (datetime, date, time)


def is_marshaler(value: Any) -> bool:
    """Return True if the encoder is responsible for rendering ``value``."""
    return isinstance(value, (JSONMarshaler, TextMarshaler, _NATIVE_TEXT))


def _is_stringer(value: Any) -> bool:
    if isinstance(value, _PRIMITIVES):
        return False
    return type(value).__str__ is not object.__str__


def extract_value(value: Any) -> Any:
    """Flatten an attribute value.

    Rules, first match wins:
      - groups become dicts, members flattened recursively;
      - LogValuer values are replaced by their ``log_value()``, recursively;
      - JSON and text marshalers pass through for the encoder to render;
      - exceptions become their message;
      - values with their own ``__str__`` become that string;
      - everything else passes through unchanged.
    """
    if isinstance(value, GroupValue):
        return {attr.key: extract_value(attr.value) for attr in value.attrs}
    if isinstance(value, LogValuer):
        return extract_value(value.log_value())
    if is_marshaler(value):
        return value
    if isinstance(value, BaseException):
        return str(value)
    if _is_stringer(value):
        return str(value)
    return value
