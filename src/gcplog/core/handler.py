"""Cloud Logging record handler.

Relevant Google documentation:
  - Structured Logging: https://cloud.google.com/logging/docs/structured-logging
  - Error Reporting:
    https://cloud.google.com/error-reporting/docs/formatting-error-messages
"""

import copy
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from gcplog.core.encoding.ndjson import encode_line, format_time
from gcplog.core.error_reporting import ERROR_KEY, check_and_set_error_report
from gcplog.core.errors import HandlerError
from gcplog.core.levels import INFO
from gcplog.core.models import Attr, Record
from gcplog.core.ports import Writer
from gcplog.core.replace import (
    GCP_TIME_KEY,
    LEVEL_KEY,
    MESSAGE_KEY,
    SOURCE_KEY,
    ReplaceAttrFunc,
    replace_attr,
)
from gcplog.core.values import extract_value


@dataclass(frozen=True)
class HandlerOptions:
    """Handler configuration.

    Attributes:
        level: Minimum level of records to handle.
        add_source: Include the source location of the call site.
        replace_attr: Optional hook called for every attribute before
            error report detection. Receives the enclosing group names and
            the attribute, returns the attribute to use instead.
    """

    level: int = INFO
    add_source: bool = False
    replace_attr: ReplaceAttrFunc | None = None


DEFAULT_OPTIONS = HandlerOptions()


@dataclass(frozen=True)
class GroupOrAttrs:
    """One scoped derivation step: either a group name or attributes."""

    group: str = ""
    attrs: tuple[Attr, ...] = ()


class Handler:
    """Writes records as Cloud Logging compatible JSON lines.

    Attribute values are flattened by ``extract_value``. When a top-level
    attribute is keyed "error", the record becomes an Error Reporting event:
    its message is replaced by the error details, and "@type", "error" and
    possibly "reportLocation" fields are added. Only the first error
    attribute of a record is honored.

    Handlers derived with ``with_attrs``/``with_group`` share the lock and
    the stream of the handler they were derived from.

    Example:
        ```python
        import sys
        from gcplog import Handler, Logger

        logger = Logger(Handler(sys.stdout))
        logger.with_group("request").info("served", path="/")
        ```
    """

    def __init__(self, stream: Writer, options: HandlerOptions | None = None) -> None:
        """Initialize the handler with an output stream.

        Args:
            stream: Sink receiving one JSON document per line.
            options: Handler configuration. Defaults to DEFAULT_OPTIONS.
        """
        self._stream = stream
        self._options = options or DEFAULT_OPTIONS
        self._lock = threading.Lock()
        self._goas: tuple[GroupOrAttrs, ...] = ()

    @property
    def options(self) -> HandlerOptions:
        return self._options

    def enabled(self, level: int) -> bool:
        """Return True if records at ``level`` should be handled."""
        return level >= self._options.level

    def handle(self, record: Record) -> None:
        """Encode ``record`` and write it to the stream.

        Raises:
            HandlerError: If the document cannot be encoded or written.
        """
        out = self._base_document(record)
        goas = self._goas
        if not record.attrs:
            # Without record attrs, trailing groups stay empty.
            while goas and goas[-1].group:
                goas = goas[:-1]

        reported = False
        groups: list[str] = []
        current = out
        for goa in goas:
            if goa.group:
                nested: dict[str, Any] = {}
                current[goa.group] = nested
                current = nested
                groups.append(goa.group)
                continue
            for attr in goa.attrs:
                reported = self._add_attr(out, current, groups, attr, reported)

        for attr in record.attrs:
            reported = self._add_attr(out, current, groups, attr, reported)

        self._write(out)

    def with_attrs(self, attrs: Sequence[Attr]) -> "Handler":
        """Return a handler that adds ``attrs`` to every record."""
        if not attrs:
            return self
        return self._with_group_or_attrs(GroupOrAttrs(attrs=tuple(attrs)))

    def with_group(self, name: str) -> "Handler":
        """Return a handler that nests subsequent attributes under ``name``."""
        if not name:
            return self
        return self._with_group_or_attrs(GroupOrAttrs(group=name))

    def _with_group_or_attrs(self, goa: GroupOrAttrs) -> "Handler":
        derived = copy.copy(self)
        derived._goas = self._goas + (goa,)
        return derived

    def _base_document(self, record: Record) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if record.time is not None:
            out[GCP_TIME_KEY] = format_time(record.time)
        if self._options.add_source and record.source is not None:
            source = replace_attr((), Attr(SOURCE_KEY, record.source))
            out[source.key] = source.value
        message = replace_attr((), Attr(MESSAGE_KEY, record.message))
        out[message.key] = message.value
        severity = replace_attr((), Attr(LEVEL_KEY, record.level))
        out[severity.key] = severity.value
        return out

    def _add_attr(
        self,
        out: dict[str, Any],
        current: dict[str, Any],
        groups: list[str],
        attr: Attr,
        reported: bool,
    ) -> bool:
        attr = self._replace_attr(groups, attr)
        if not groups and attr.key == ERROR_KEY:
            # The first top-level error owns the report fields; later ones are dropped.
            if not reported:
                reported = check_and_set_error_report(attr, out)
            return reported
        current[attr.key] = extract_value(attr.value)
        return reported

    def _replace_attr(self, groups: list[str], attr: Attr) -> Attr:
        hook = self._options.replace_attr
        if hook is None:
            return attr
        return hook(tuple(groups), attr)

    def _write(self, out: dict[str, Any]) -> None:
        with self._lock:
            try:
                self._stream.write(encode_line(out))
            except Exception as err:
                raise HandlerError(f"gcplog handler: {err}") from err
