"""Structured logger front-end for the Cloud Logging handler."""

import sys
from datetime import datetime, timezone
from typing import Any

from gcplog.core import levels
from gcplog.core.handler import Handler, HandlerOptions
from gcplog.core.models import Attr, Record, Source, attrs_from
from gcplog.core.ports import Writer
from gcplog.core.replace import ReplaceAttrFunc


class Logger:
    """Creates records and passes them to a Handler.

    Attributes are given as Attr instances or keyword arguments:

        logger.info("user created", group("user", id=42), admin=False)

    Records below the handler's level are dropped before they are built.
    Errors raised by the handler propagate to the caller.
    """

    def __init__(self, handler: Handler) -> None:
        self._handler = handler

    @property
    def handler(self) -> Handler:
        return self._handler

    def enabled(self, level: int) -> bool:
        return self._handler.enabled(level)

    def with_(self, *args: Attr, **kwargs: Any) -> "Logger":
        """Return a logger that includes the given attributes in every record."""
        handler = self._handler.with_attrs(attrs_from(*args, **kwargs))
        if handler is self._handler:
            return self
        return Logger(handler)

    bind = with_

    def with_group(self, name: str) -> "Logger":
        """Return a logger that nests all further attributes under ``name``."""
        handler = self._handler.with_group(name)
        if handler is self._handler:
            return self
        return Logger(handler)

    def log(self, level: int, msg: str, /, *args: Attr, **kwargs: Any) -> None:
        self._log(level, msg, args, kwargs)

    def debug(self, msg: str, /, *args: Attr, **kwargs: Any) -> None:
        self._log(levels.DEBUG, msg, args, kwargs)

    def info(self, msg: str, /, *args: Attr, **kwargs: Any) -> None:
        self._log(levels.INFO, msg, args, kwargs)

    def notice(self, msg: str, /, *args: Attr, **kwargs: Any) -> None:
        self._log(levels.NOTICE, msg, args, kwargs)

    def warning(self, msg: str, /, *args: Attr, **kwargs: Any) -> None:
        self._log(levels.WARNING, msg, args, kwargs)

    def error(self, msg: str, /, *args: Attr, **kwargs: Any) -> None:
        self._log(levels.ERROR, msg, args, kwargs)

    def critical(self, msg: str, /, *args: Attr, **kwargs: Any) -> None:
        self._log(levels.CRITICAL, msg, args, kwargs)

    def alert(self, msg: str, /, *args: Attr, **kwargs: Any) -> None:
        self._log(levels.ALERT, msg, args, kwargs)

    def emergency(self, msg: str, /, *args: Attr, **kwargs: Any) -> None:
        self._log(levels.EMERGENCY, msg, args, kwargs)

    def _log(
        self,
        level: int,
        msg: str,
        args: tuple[Attr, ...],
        kwargs: dict[str, Any],
    ) -> None:
        if not self._handler.enabled(level):
            return
        # Frame 0 is _log, frame 1 the level method.
        frame = sys._getframe(2)
        source = Source(
            function=frame.f_code.co_qualname,
            file=frame.f_code.co_filename,
            line=frame.f_lineno,
        )
        record = Record(
            time=datetime.now(timezone.utc),
            level=level,
            message=msg,
            attrs=attrs_from(*args, **kwargs),
            source=source,
        )
        self._handler.handle(record)


def new_logger(
    stream: Writer | None = None,
    *,
    level: int = levels.INFO,
    add_source: bool = False,
    replace_attr: ReplaceAttrFunc | None = None,
) -> Logger:
    """Create a Logger writing Cloud Logging JSON lines.

    Args:
        stream: Output sink. Defaults to sys.stdout.
        level: Minimum level to log.
        add_source: Include the call site in each document.
        replace_attr: Optional attribute replacement hook.
    """
    options = HandlerOptions(level=level, add_source=add_source, replace_attr=replace_attr)
    return Logger(Handler(stream if stream is not None else sys.stdout, options))
