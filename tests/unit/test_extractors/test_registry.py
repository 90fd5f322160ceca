"""Tests for the custom extractor registry."""

from typing import Any, Optional

import pytest

from eventbind.event import Event
from eventbind.exceptions import ExtractorConfigurationError
from eventbind.extractors import Extractor, ExtractorRegistry, create_extractor
from eventbind.statement import PositionalStatement


class UpperBodyExtractor(Extractor):
    """Binds the upper-cased body."""

    __slots__ = ()

    def set_value(self, statement: Any, event: Any) -> None:
        statement.set_string(self.position, (event.body or b"").decode().upper())


def test_register_and_get(registry: ExtractorRegistry) -> None:
    """Test basic registration."""
    registry.register("upper", UpperBodyExtractor)
    assert registry.get("upper") is UpperBodyExtractor
    assert registry.is_registered("upper")
    assert "upper" in registry
    assert len(registry) == 1


def test_register_as_decorator(registry: ExtractorRegistry) -> None:
    @registry.register("decorated")
    class Decorated(UpperBodyExtractor):
        __slots__ = ()

    assert registry.get("decorated") is Decorated
    assert Decorated.__name__ == "Decorated"


def test_register_duplicate_raises(registry: ExtractorRegistry) -> None:
    registry.register("upper", UpperBodyExtractor)
    with pytest.raises(ExtractorConfigurationError, match="already registered"):
        registry.register("upper", UpperBodyExtractor)


def test_register_replace(registry: ExtractorRegistry) -> None:
    registry.register("upper", UpperBodyExtractor)
    replacement = lambda position: UpperBodyExtractor(position)  # noqa: E731
    registry.register("upper", replacement, replace=True)
    assert registry.get("upper") is replacement


@pytest.mark.parametrize("name", ["", None])
def test_register_empty_name_raises(registry: ExtractorRegistry, name: Optional[str]) -> None:
    with pytest.raises(ExtractorConfigurationError, match="must not be empty"):
        registry.register(name, UpperBodyExtractor)  # type: ignore[arg-type]


def test_register_non_callable_raises(registry: ExtractorRegistry) -> None:
    with pytest.raises(ExtractorConfigurationError, match="must be callable"):
        registry.register("bad", "not callable")  # type: ignore[arg-type]


def test_get_unknown_raises(registry: ExtractorRegistry) -> None:
    with pytest.raises(ExtractorConfigurationError, match="not registered") as exc_info:
        registry.get("nope")
    assert exc_info.value.type_name == "nope"
    assert exc_info.value.item == "custom"


def test_unregister(registry: ExtractorRegistry) -> None:
    registry.register("upper", UpperBodyExtractor)
    registry.unregister("upper")
    assert "upper" not in registry
    with pytest.raises(ExtractorConfigurationError):
        registry.unregister("upper")


def test_names_are_sorted_and_clear(registry: ExtractorRegistry) -> None:
    """Test available custom kinds are enumerable."""
    registry.register("zeta", UpperBodyExtractor)
    registry.register("alpha", UpperBodyExtractor)
    assert registry.names() == ["alpha", "zeta"]
    registry.clear()
    assert registry.names() == []
    assert len(registry) == 0


@pytest.mark.parametrize("separator", [".", ":"])
def test_register_import_by_dotted_path(registry: ExtractorRegistry, separator: str) -> None:
    """Test constructors can be imported at registration time."""
    path = f"{__name__}{separator}UpperBodyExtractor"
    constructor = registry.register_import("upper", path)
    assert constructor is UpperBodyExtractor
    assert registry.get("upper") is UpperBodyExtractor


def test_register_import_defaults_path_to_name(registry: ExtractorRegistry) -> None:
    """Test a fully-qualified class name can serve as the type name."""
    name = f"{__name__}.UpperBodyExtractor"
    registry.register_import(name)

    extractor = create_extractor(1, "custom", name, registry=registry)
    statement = PositionalStatement(1)
    extractor.bind(statement, Event(b"shout"))
    assert statement.parameters == ("SHOUT",)


@pytest.mark.parametrize("path", ["not_a_module_xyz.Thing", "json.NotThere", "json:"])
def test_register_import_failure_raises(registry: ExtractorRegistry, path: str) -> None:
    with pytest.raises(ExtractorConfigurationError, match="Could not import custom extractor"):
        registry.register_import("thing", path)
    assert "thing" not in registry


def test_separate_registries_are_isolated() -> None:
    first = ExtractorRegistry()
    second = ExtractorRegistry()
    first.register("upper", UpperBodyExtractor)
    assert "upper" not in second
