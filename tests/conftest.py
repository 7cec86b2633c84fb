"""Shared test fixtures for all test modules."""

import io
import json
from collections.abc import Callable
from typing import Any

import pytest

from gcplog import Handler, HandlerOptions, Logger


@pytest.fixture
def stream() -> io.StringIO:
    """Provide an in-memory text sink for handler output."""
    return io.StringIO()


@pytest.fixture
def read_lines(stream: io.StringIO) -> Callable[[], list[dict[str, Any]]]:
    """Return a callable that parses every JSON line written so far."""

    def _read() -> list[dict[str, Any]]:
        return [json.loads(line) for line in stream.getvalue().splitlines()]

    return _read


@pytest.fixture
def make_logger(stream: io.StringIO) -> Callable[..., Logger]:
    """Factory fixture creating a Logger over the shared stream.

    Usage:
        def test_something(make_logger):
            logger = make_logger(level=DEBUG)
    """

    def _make(**options: Any) -> Logger:
        return Logger(Handler(stream, HandlerOptions(**options)))

    return _make
