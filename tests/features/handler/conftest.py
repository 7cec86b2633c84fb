"""BDD step definitions for Cloud Logging document features."""

import io
import json
from dataclasses import dataclass, field
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when

from gcplog import Attr, Handler, Record
from gcplog.core import levels


@dataclass
class HandlerScenarioContext:
    """Mutable state shared between the steps of one scenario."""

    stream: io.StringIO = field(default_factory=io.StringIO)
    handler: Handler | None = None

    def documents(self) -> list[dict[str, Any]]:
        return [json.loads(line) for line in self.stream.getvalue().splitlines()]


def _level(name: str) -> int:
    return getattr(levels, name)


def _lookup(document: dict[str, Any], path: str) -> Any:
    value: Any = document
    for part in path.split("."):
        value = value[part]
    return value


@pytest.fixture
def ctx() -> HandlerScenarioContext:
    """Fresh scenario context for each test."""
    return HandlerScenarioContext()


# === Given ===
@given("a handler writing to memory")
def step_handler(ctx: HandlerScenarioContext) -> None:
    ctx.handler = Handler(ctx.stream)


@given(parsers.parse('the handler is derived with group "{name}"'))
def step_with_group(ctx: HandlerScenarioContext, name: str) -> None:
    assert ctx.handler is not None
    ctx.handler = ctx.handler.with_group(name)


@given(parsers.parse('the handler is derived with attribute "{key}" set to "{value}"'))
def step_with_attr(ctx: HandlerScenarioContext, key: str, value: str) -> None:
    assert ctx.handler is not None
    ctx.handler = ctx.handler.with_attrs([Attr(key, value)])


# === When ===
@when(parsers.parse('a record "{message}" is handled at level {level:w}'))
def step_handle(ctx: HandlerScenarioContext, message: str, level: str) -> None:
    assert ctx.handler is not None
    ctx.handler.handle(Record(time=None, level=_level(level), message=message))


@when(
    parsers.parse(
        'an error record "{message}" carrying "{error}" is handled at level {level:w}'
    )
)
def step_handle_error(
    ctx: HandlerScenarioContext, message: str, level: str, error: str
) -> None:
    assert ctx.handler is not None
    record = Record(
        time=None,
        level=_level(level),
        message=message,
        attrs=(Attr("error", error),),
    )
    ctx.handler.handle(record)


@when(parsers.parse('a record "{message}" is emitted at level {level:w}'))
def step_emit(ctx: HandlerScenarioContext, message: str, level: str) -> None:
    assert ctx.handler is not None
    record = Record(time=None, level=_level(level), message=message)
    if ctx.handler.enabled(record.level):
        ctx.handler.handle(record)


# === Then ===
@then("one line is written")
def step_one_line(ctx: HandlerScenarioContext) -> None:
    assert len(ctx.documents()) == 1


@then("nothing is written")
def step_nothing(ctx: HandlerScenarioContext) -> None:
    assert ctx.stream.getvalue() == ""


@then(parsers.parse('the document field "{path}" is "{expected}"'))
def step_field(ctx: HandlerScenarioContext, path: str, expected: str) -> None:
    assert _lookup(ctx.documents()[-1], path) == expected


@then(parsers.parse('the document has no field "{key}"'))
def step_no_field(ctx: HandlerScenarioContext, key: str) -> None:
    assert key not in ctx.documents()[-1]
