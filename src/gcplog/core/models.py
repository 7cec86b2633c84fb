"""Core domain models for structured log records."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

# Keys of the JSON report location object.
FILE_PATH_KEY = "filePath"
LINE_NUMBER_KEY = "lineNumber"
FUNCTION_NAME_KEY = "functionName"


@dataclass(frozen=True)
class Attr:
    """A single key/value attribute of a log record.

    Attributes:
        key: Attribute name.
        value: A primitive, a GroupValue, or any value resolved by
            capability when the record is encoded.
    """

    key: str
    value: Any


@dataclass(frozen=True)
class GroupValue:
    """An ordered group of attributes, encoded as a nested JSON object."""

    attrs: tuple[Attr, ...] = ()


@dataclass(frozen=True)
class Source:
    """Call site that produced a log record.

    Attributes:
        function: Qualified name of the calling function.
        file: Path of the calling source file.
        line: Line number in ``file``.
    """

    function: str
    file: str
    line: int

    def log_value(self) -> GroupValue:
        return GroupValue(
            (
                Attr("function", self.function),
                Attr("file", self.file),
                Attr("line", self.line),
            )
        )


@dataclass(frozen=True)
class ReportLocation:
    """Location where an error was created, for Error Reporting.

    Attributes:
        file_path: Path of the source file.
        line_number: Line number in ``file_path``.
        function_name: Qualified name of the function.
    """

    file_path: str
    line_number: int
    function_name: str

    def log_value(self) -> GroupValue:
        """Represent the location as a group.

        This lets a ReportLocation be logged as a plain attribute as well.
        """
        return GroupValue(
            (
                Attr(FILE_PATH_KEY, self.file_path),
                Attr(LINE_NUMBER_KEY, self.line_number),
                Attr(FUNCTION_NAME_KEY, self.function_name),
            )
        )


@dataclass(frozen=True)
class Record:
    """A log record as produced by the front-end.

    Attributes:
        time: When the record was created; None if unknown.
        level: Numeric log level.
        message: The log message.
        attrs: Record attributes in declaration order.
        source: Call site, when captured.
    """

    time: datetime | None
    level: int
    message: str
    attrs: tuple[Attr, ...] = field(default_factory=tuple)
    source: Source | None = None


def attrs_from(*args: Attr, **kwargs: Any) -> tuple[Attr, ...]:
    """Build an attribute tuple from positional Attrs and keyword arguments.

    Positional attributes come first, followed by keyword arguments in the
    order they were passed.

    Raises:
        TypeError: If a positional argument is not an Attr.
    """
    for arg in args:
        if not isinstance(arg, Attr):
            raise TypeError(f"expected Attr, got {type(arg).__name__}")
    return args + tuple(Attr(key, value) for key, value in kwargs.items())


def group(key: str, *args: Attr, **kwargs: Any) -> Attr:
    """Create a group attribute, e.g. ``group("request", method="GET")``."""
    return Attr(key, GroupValue(attrs_from(*args, **kwargs)))
