from __future__ import annotations

from collections.abc import Generator
from unittest.mock import MagicMock

import pytest

from eventbind.event import Event
from eventbind.extractors.registry import ExtractorRegistry, extractor_registry
from eventbind.statement import PositionalStatement


@pytest.fixture
def registry() -> ExtractorRegistry:
    """An empty registry isolated from the module-level one."""
    return ExtractorRegistry()


@pytest.fixture
def clean_default_registry() -> Generator[ExtractorRegistry, None, None]:
    """The module-level registry, restored after the test."""
    saved = {name: extractor_registry.get(name) for name in extractor_registry.names()}
    yield extractor_registry
    extractor_registry.clear()
    for name, constructor in saved.items():
        extractor_registry.register(name, constructor)


@pytest.fixture
def statement() -> MagicMock:
    """A statement double recording every setter call."""
    return MagicMock(spec=PositionalStatement)


@pytest.fixture
def event() -> Event:
    return Event(
        body=b"hello world",
        headers={
            "host": "web-1",
            "count": "42",
            "size": "-9000000000",
            "ratio": "0.25",
            "day": "2024-03-15",
        },
    )
