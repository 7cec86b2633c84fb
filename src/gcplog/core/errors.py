"""Exceptions raised and understood by gcplog."""

import traceback

from gcplog.core.error_reporting import new_report_location
from gcplog.core.models import ReportLocation


class HandlerError(Exception):
    """Raised when a log document cannot be encoded or written."""


class ReportableError(Exception):
    """Base class for application errors with Error Reporting details.

    The stack and report location are captured when the exception is
    created, so logging it under the "error" key produces a complete
    ReportedErrorEvent even after the stack has unwound.

    Example:
        ```python
        class UserNotFound(ReportableError):
            pass

        logger.error("lookup failed", error=UserNotFound("user 42"))
        ```

    Args:
        skip: Extra frames to drop from the captured stack, for subclasses
            that override __init__.
    """

    def __init__(self, *args: object, skip: int = 0) -> None:
        super().__init__(*args)
        # Drop this frame and the skipped ones.
        self._frames = traceback.extract_stack()[: -(skip + 1)]
        self._location: ReportLocation | None = None
        if self._frames:
            self._location = new_report_location(skip + 1)

    def stack_trace(self) -> tuple[bytes | None, bool]:
        """Return the construction-time stack in Python traceback format."""
        if not self._frames:
            return None, False
        lines = ["Traceback (most recent call last):\n"]
        lines.extend(traceback.format_list(self._frames))
        lines.extend(traceback.format_exception_only(type(self), self))
        return "".join(lines).encode("utf-8"), True

    def report_location(self) -> ReportLocation | None:
        return self._location
