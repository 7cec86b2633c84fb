"""Capability interfaces probed on attribute values.

Values are matched by shape, not by declared base class: any object that
provides the method satisfies the protocol.
"""

from typing import Any, Protocol, runtime_checkable

from gcplog.core.models import ReportLocation


@runtime_checkable
class LogValuer(Protocol):
    """A value that knows how to represent itself in a log record.

    The result may be a primitive, a GroupValue or another LogValuer.
    """

    def log_value(self) -> Any:
        """Return the loggable representation of this value."""
        ...


@runtime_checkable
class JSONMarshaler(Protocol):
    """A value that renders itself as a JSON document."""

    def marshal_json(self) -> str | bytes:
        """Return the JSON text for this value."""
        ...


@runtime_checkable
class TextMarshaler(Protocol):
    """A value that renders itself as text."""

    def marshal_text(self) -> str | bytes:
        """Return the textual form of this value."""
        ...


@runtime_checkable
class StackTraceError(Protocol):
    """An error carrying the stack trace of the point where it was created."""

    def stack_trace(self) -> tuple[bytes | None, bool]:
        """Return the stack trace and whether one is available."""
        ...


@runtime_checkable
class ReportLocationError(Protocol):
    """An error carrying the location where it was created."""

    def report_location(self) -> ReportLocation | None:
        """Return the report location, or None if unknown."""
        ...


@runtime_checkable
class Writer(Protocol):
    """Output sink for encoded log lines."""

    def write(self, data: str, /) -> Any:
        """Append ``data`` to the sink."""
        ...
