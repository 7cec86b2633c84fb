"""NDJSON encoder for composed log documents."""

import base64
import json
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from gcplog.core.ports import JSONMarshaler, TextMarshaler
from gcplog.core.values import extract_value


def format_time(value: datetime) -> str:
    """Format a datetime as RFC3339 with trimmed fractional seconds.

    Naive datetimes are taken to be UTC. UTC is rendered as "Z".

    Example:
        2024-01-02T03:04:05.5Z
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += f".{value.microsecond:06d}".rstrip("0")
    return text + _format_offset(value.utcoffset())


def _format_offset(offset: timedelta | None) -> str:
    if not offset:
        return "Z"
    sign = "+" if offset >= timedelta(0) else "-"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _decode(data: str | bytes) -> str:
    if isinstance(data, bytes):
        return data.decode("utf-8")
    return data


def _default(obj: Any) -> Any:
    """Render values the json module cannot encode by itself."""
    if isinstance(obj, JSONMarshaler):
        return json.loads(obj.marshal_json())
    if isinstance(obj, TextMarshaler):
        return _decode(obj.marshal_text())
    if isinstance(obj, datetime):
        return format_time(obj)
    if isinstance(obj, (date, time)):
        return obj.isoformat()
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(obj).decode("ascii")
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    value = extract_value(obj)
    if value is obj:
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
    return value


def encode_line(document: dict[str, Any]) -> str:
    """Encode one log document as a newline-terminated JSON line.

    Keys are sorted so output is deterministic.

    Raises:
        TypeError: If a value cannot be encoded.
        ValueError: If a value is NaN or infinite, or a marshaler
            returns invalid JSON.
    """
    return (
        json.dumps(
            document,
            default=_default,
            sort_keys=True,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        )
        + "\n"
    )
