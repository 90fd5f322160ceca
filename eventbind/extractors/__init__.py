"""Extractors: typed reads from an event bound to one statement position."""

from eventbind.extractors.base import Extractor
from eventbind.extractors.builtin import BodyExtractor, FieldExtractor, HeaderExtractor
from eventbind.extractors.factory import create_extractor
from eventbind.extractors.registry import ExtractorConstructor, ExtractorRegistry, extractor_registry
from eventbind.extractors.types import (
    BODY_ITEM,
    BODY_VALUE_KINDS,
    CUSTOM_ITEM,
    HEADER_ITEM_PREFIX,
    HEADER_VALUE_KINDS,
    SourceKind,
    ValueKind,
)

__all__ = (
    "BODY_ITEM",
    "BODY_VALUE_KINDS",
    "CUSTOM_ITEM",
    "HEADER_ITEM_PREFIX",
    "HEADER_VALUE_KINDS",
    "BodyExtractor",
    "Extractor",
    "ExtractorConstructor",
    "ExtractorRegistry",
    "FieldExtractor",
    "HeaderExtractor",
    "SourceKind",
    "ValueKind",
    "create_extractor",
    "extractor_registry",
)
