"""eventbind: bind fields of in-flight events to positional SQL parameters."""

from eventbind import exceptions, extractors, utils
from eventbind.__metadata__ import __version__
from eventbind.config import BindConfig, ParameterStyle
from eventbind.event import Event
from eventbind.exceptions import (
    BindingError,
    EventBindError,
    ExtractorConfigurationError,
    ImproperConfigurationError,
    SQLParsingError,
)
from eventbind.extractors import (
    BodyExtractor,
    Extractor,
    ExtractorRegistry,
    FieldExtractor,
    HeaderExtractor,
    SourceKind,
    ValueKind,
    create_extractor,
    extractor_registry,
)
from eventbind.protocols import EventProtocol, ExtractorProtocol, StatementProtocol
from eventbind.statement import PositionalStatement
from eventbind.template import EventTemplate, PlaceholderInfo

__all__ = (
    "BindConfig",
    "BindingError",
    "BodyExtractor",
    "Event",
    "EventBindError",
    "EventProtocol",
    "EventTemplate",
    "Extractor",
    "ExtractorConfigurationError",
    "ExtractorProtocol",
    "ExtractorRegistry",
    "FieldExtractor",
    "HeaderExtractor",
    "ImproperConfigurationError",
    "ParameterStyle",
    "PlaceholderInfo",
    "PositionalStatement",
    "SQLParsingError",
    "SourceKind",
    "StatementProtocol",
    "ValueKind",
    "__version__",
    "create_extractor",
    "exceptions",
    "extractor_registry",
    "extractors",
    "utils",
)
