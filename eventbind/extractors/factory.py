"""Factory turning ``(position, item, type, config)`` into a configured extractor."""

from typing import TYPE_CHECKING, Optional

from eventbind.exceptions import ExtractorConfigurationError
from eventbind.extractors.base import validate_position
from eventbind.extractors.builtin import BodyExtractor, HeaderExtractor
from eventbind.extractors.registry import extractor_registry
from eventbind.extractors.types import (
    BODY_ITEM,
    BODY_VALUE_KINDS,
    CUSTOM_ITEM,
    HEADER_ITEM_PREFIX,
    HEADER_VALUE_KINDS,
    ValueKind,
)
from eventbind.protocols import ExtractorProtocol
from eventbind.utils.logging import get_logger

if TYPE_CHECKING:
    from eventbind.extractors.registry import ExtractorRegistry

__all__ = ("create_extractor",)

logger = get_logger(__name__)


def _lookup_value_kind(type_name: Optional[str], allowed: "frozenset[ValueKind]") -> Optional[ValueKind]:
    try:
        value_kind = ValueKind(type_name)
    except ValueError:
        return None
    return value_kind if value_kind in allowed else None


def _describe(item: Optional[str], type_name: Optional[str], config: Optional[str]) -> str:
    return f"item: {item!r} and type: {type_name!r} with config: {config!r}"


def _create_custom(
    position: int, type_name: Optional[str], config: Optional[str], registry: "ExtractorRegistry"
) -> ExtractorProtocol:
    try:
        constructor = registry.get(type_name)  # type: ignore[arg-type]
        extractor = constructor(position)
    except Exception as e:
        msg = f"Could not initialize custom extractor type: {type_name!r} with config: {config!r}: {e}"
        raise ExtractorConfigurationError(msg, CUSTOM_ITEM, type_name, config) from e

    if not isinstance(extractor, ExtractorProtocol):
        msg = (
            f"Custom extractor type {type_name!r} with config: {config!r} produced "
            f"{type(extractor).__name__}, which lacks position, configure or bind."
        )
        raise ExtractorConfigurationError(msg, CUSTOM_ITEM, type_name, config)
    if extractor.position != position:
        msg = (
            f"Custom extractor type {type_name!r} with config: {config!r} reports position "
            f"{extractor.position!r}, expected {position}."
        )
        raise ExtractorConfigurationError(msg, CUSTOM_ITEM, type_name, config)
    return extractor


def create_extractor(
    position: int,
    item: Optional[str],
    type_name: Optional[str],
    config: Optional[str] = None,
    *,
    registry: "Optional[ExtractorRegistry]" = None,
) -> ExtractorProtocol:
    """Create and configure the extractor for one placeholder.

    Dispatch order: ``body``, then ``header.<name>``, then ``custom``. The
    first matching item decides which value kinds are acceptable.

    Args:
        position: The statement parameter position, [1..n].
        item: The event value, one of ``body``, ``header.<name>`` or ``custom``.
        type_name: The value kind, or the registered custom extractor name
            when ``item`` is ``custom``.
        config: The config string for the extractor, or ``None``.
        registry: Registry used to resolve custom extractors. Defaults to
            the module-level ``extractor_registry``.

    Raises:
        ExtractorConfigurationError: If the item and type are an invalid or
            unknown combination, a custom extractor cannot be initialized,
            or configuration fails.

    Returns:
        A configured extractor.
    """
    try:
        validate_position(position)
    except ExtractorConfigurationError as e:
        msg = f"{e.detail} Invalid SQL parameter {_describe(item, type_name, config)}."
        raise ExtractorConfigurationError(msg, item, type_name, config) from e

    extractor: Optional[ExtractorProtocol] = None
    if item == BODY_ITEM:
        value_kind = _lookup_value_kind(type_name, BODY_VALUE_KINDS)
        if value_kind is not None:
            extractor = BodyExtractor(position, value_kind)
    elif isinstance(item, str) and item.startswith(HEADER_ITEM_PREFIX):
        header = item[len(HEADER_ITEM_PREFIX) :]
        value_kind = _lookup_value_kind(type_name, HEADER_VALUE_KINDS)
        if value_kind is not None:
            extractor = HeaderExtractor(position, header, value_kind)
    elif item == CUSTOM_ITEM:
        if registry is None:
            registry = extractor_registry
        extractor = _create_custom(position, type_name, config, registry)

    if extractor is None:
        msg = f"Invalid SQL parameter {_describe(item, type_name, config)}."
        raise ExtractorConfigurationError(msg, item, type_name, config)

    try:
        extractor.configure(config)
    except Exception as e:
        msg = f"Could not configure extractor for {_describe(item, type_name, config)}: {e}"
        raise ExtractorConfigurationError(msg, item, type_name, config) from e

    logger.debug("Created %r for %s", extractor, _describe(item, type_name, config))
    return extractor
