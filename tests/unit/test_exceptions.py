"""Tests for eventbind.exceptions."""

import pytest

from eventbind import exceptions
from eventbind.exceptions import (
    BindingError,
    EventBindError,
    ExtractorConfigurationError,
    ImproperConfigurationError,
    SQLParsingError,
    wrap_binding_errors,
)


def test_base_error_detail_and_str() -> None:
    error = EventBindError("Main message", detail="Detailed info")
    assert error.detail == "Detailed info"
    assert "Main message" in str(error)
    assert "Detailed info" in str(error)


def test_base_error_first_arg_becomes_detail() -> None:
    error = EventBindError("This becomes detail", "", None, "extra")
    assert error.detail == "This becomes detail"
    assert "extra" in str(error)


def test_base_error_repr() -> None:
    assert repr(EventBindError("Test message")) == "EventBindError - Test message"
    assert repr(EventBindError()) == "EventBindError"


def test_hierarchy() -> None:
    assert issubclass(ExtractorConfigurationError, ImproperConfigurationError)
    assert issubclass(SQLParsingError, ImproperConfigurationError)
    assert issubclass(BindingError, EventBindError)
    assert not issubclass(BindingError, ImproperConfigurationError)


def test_exported_errors_share_base() -> None:
    exported = [getattr(exceptions, name) for name in exceptions.__all__]
    error_types = [value for value in exported if isinstance(value, type)]
    assert {error.__name__ for error in error_types} == {
        "BindingError",
        "EventBindError",
        "ExtractorConfigurationError",
        "ImproperConfigurationError",
        "SQLParsingError",
    }
    assert all(issubclass(error, EventBindError) and not issubclass(error, ImportError) for error in error_types)


def test_extractor_configuration_error_fields() -> None:
    error = ExtractorConfigurationError("bad combo", item="body", type_name="long", config="x")
    assert (error.item, error.type_name, error.config) == ("body", "long", "x")
    assert str(error) == "bad combo"


def test_binding_error_includes_position() -> None:
    error = BindingError("cannot parse", 3)
    assert error.position == 3
    assert str(error) == "cannot parse (position 3)"
    assert BindingError("no position").position is None


def test_sql_parsing_error_includes_sql() -> None:
    error = SQLParsingError("broken", "SELECT (")
    assert error.sql == "SELECT ("
    assert "SQL: SELECT (" in str(error)
    assert "Issues parsing SQL statement." in str(SQLParsingError())


def test_wrap_binding_errors_converts_exceptions() -> None:
    with pytest.raises(BindingError, match="ValueError: nope") as exc_info, wrap_binding_errors(5):
        raise ValueError("nope")
    assert exc_info.value.position == 5
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_wrap_binding_errors_passes_binding_errors_through() -> None:
    original = BindingError("already typed", 1)
    with pytest.raises(BindingError) as exc_info, wrap_binding_errors(9):
        raise original
    assert exc_info.value is original
