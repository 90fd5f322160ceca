"""Tests for eventbind.utils.logging."""

import io
import logging
from collections.abc import Generator

import pytest

from eventbind._serialization import decode_json, encode_json
from eventbind.extractors import ExtractorRegistry
from eventbind.utils.logging import StructuredFormatter, configure_logging, get_logger


@pytest.fixture
def reset_logging() -> Generator[logging.Logger, None, None]:
    root = logging.getLogger("eventbind")
    yield root
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
    root.propagate = True


def _record(message: str = "hello") -> logging.LogRecord:
    return logging.LogRecord("eventbind.test", logging.INFO, __file__, 10, message, (), None)


def test_get_logger_namespaces_names() -> None:
    assert get_logger().name == "eventbind"
    assert get_logger("factory").name == "eventbind.factory"
    assert get_logger("eventbind.template").name == "eventbind.template"


def test_structured_formatter_emits_json() -> None:
    record = _record()
    record.extra_fields = {"position": 3}
    payload = decode_json(StructuredFormatter().format(record))
    assert payload["message"] == "hello"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "eventbind.test"
    assert payload["position"] == 3


def test_configure_logging_installs_handler(reset_logging: logging.Logger) -> None:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    configure_logging(level="DEBUG", extra_handlers=[handler])

    assert reset_logging.level == logging.DEBUG
    assert reset_logging.propagate is False
    assert handler in reset_logging.handlers

    lines = [decode_json(line) for line in stream.getvalue().splitlines()]
    assert any(line["message"] == "eventbind logging configured" and line["level"] == "DEBUG" for line in lines)

    ExtractorRegistry().register("noop", lambda position: position)
    assert "Registered custom extractor noop" in stream.getvalue()


def test_configure_logging_respects_level(reset_logging: logging.Logger) -> None:
    stream = io.StringIO()
    configure_logging(level="WARNING", format_style="simple", extra_handlers=[logging.StreamHandler(stream)])
    ExtractorRegistry().register("noop", lambda position: position)
    assert stream.getvalue() == ""


def test_encode_json_falls_back_to_str() -> None:
    class Token:
        def __str__(self) -> str:
            return "token"

    assert decode_json(encode_json({"value": Token()})) == {"value": "token"}
