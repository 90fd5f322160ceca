"""Built-in body and header extractors.

All built-ins are one tagged variant, :class:`FieldExtractor`, over
``SourceKind`` x ``ValueKind``. Reading, conversion and the statement setter
used for binding are looked up from the tag rather than overridden per type.

A missing header, or an event without a body, always binds SQL NULL.
"""

import codecs
import datetime
import math
import re
import struct
from typing import TYPE_CHECKING, Any, Callable, Final, Optional, Union

from eventbind.exceptions import BindingError, ExtractorConfigurationError
from eventbind.extractors.base import Extractor
from eventbind.extractors.types import (
    BODY_ITEM,
    BODY_VALUE_KINDS,
    DEFAULT_BODY_ENCODING,
    HEADER_ITEM_PREFIX,
    HEADER_VALUE_KINDS,
    MAX_32BIT_INT,
    MAX_64BIT_INT,
    MIN_32BIT_INT,
    MIN_64BIT_INT,
    SourceKind,
    ValueKind,
)

if TYPE_CHECKING:
    from eventbind.protocols import EventProtocol, StatementProtocol

__all__ = ("BodyExtractor", "FieldExtractor", "HeaderExtractor")


_INTEGER_REGEX: Final = re.compile(r"[+-]?[0-9]+")
_DATE_DIRECTIVE_REGEX: Final = re.compile(r"%(.?)")
_DATE_DIRECTIVES: Final[frozenset[str]] = frozenset("aAwdbBmyYHIpMSfzZjUWcxXGuV%")
_DATE_FORMAT_SAMPLE: Final = datetime.datetime(2000, 1, 1, tzinfo=datetime.timezone.utc)

RawValue = Union[str, bytes]


def _parse_integer(extractor: "FieldExtractor", raw: RawValue, low: int, high: int) -> int:
    text = _as_text(raw)
    if not _INTEGER_REGEX.fullmatch(text):
        msg = f"Header {extractor.header_name!r} value {text!r} is not a base-10 integer"
        raise BindingError(msg, extractor.position)
    value = int(text)
    if not low <= value <= high:
        msg = f"Header {extractor.header_name!r} value {text!r} is out of range for {extractor.value_kind}"
        raise BindingError(msg, extractor.position)
    return value


def _parse_decimal(extractor: "FieldExtractor", raw: RawValue) -> float:
    text = _as_text(raw)
    try:
        if "_" in text:
            raise ValueError(text)
        return float(text)
    except ValueError as e:
        msg = f"Header {extractor.header_name!r} value {text!r} is not a decimal number"
        raise BindingError(msg, extractor.position) from e


def _convert_long(extractor: "FieldExtractor", raw: RawValue) -> int:
    return _parse_integer(extractor, raw, MIN_64BIT_INT, MAX_64BIT_INT)


def _convert_int(extractor: "FieldExtractor", raw: RawValue) -> int:
    return _parse_integer(extractor, raw, MIN_32BIT_INT, MAX_32BIT_INT)


def _convert_double(extractor: "FieldExtractor", raw: RawValue) -> float:
    return _parse_decimal(extractor, raw)


def _convert_float(extractor: "FieldExtractor", raw: RawValue) -> float:
    value = _parse_decimal(extractor, raw)
    msg = f"Header {extractor.header_name!r} value {value!r} is out of range for float"
    try:
        narrowed = float(struct.unpack("f", struct.pack("f", value))[0])
    except OverflowError as e:
        raise BindingError(msg, extractor.position) from e
    if math.isinf(narrowed) and not math.isinf(value):
        raise BindingError(msg, extractor.position)
    return narrowed


def _convert_date(extractor: "FieldExtractor", raw: RawValue) -> datetime.date:
    text = _as_text(raw)
    date_format = extractor.date_format
    try:
        if date_format is None:
            parsed = datetime.datetime.fromisoformat(text)
        else:
            parsed = datetime.datetime.strptime(text, date_format)
    except ValueError as e:
        expected = date_format or "ISO-8601"
        msg = f"Header {extractor.header_name!r} value {text!r} does not match date format {expected!r}"
        raise BindingError(msg, extractor.position) from e
    return parsed.date()


def _convert_header_string(extractor: "FieldExtractor", raw: RawValue) -> str:
    return _as_text(raw)


def _convert_body_string(extractor: "FieldExtractor", raw: RawValue) -> str:
    if isinstance(raw, str):
        return raw
    try:
        return bytes(raw).decode(extractor.encoding)
    except UnicodeDecodeError as e:
        msg = f"Event body is not valid {extractor.encoding}: {e.reason}"
        raise BindingError(msg, extractor.position) from e


def _convert_body_bytes(extractor: "FieldExtractor", raw: RawValue) -> bytes:
    if isinstance(raw, str):
        return raw.encode(DEFAULT_BODY_ENCODING)
    return bytes(raw)


def _as_text(raw: RawValue) -> str:
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw).decode(DEFAULT_BODY_ENCODING)
    return str(raw)


_CONVERTERS: Final[dict[tuple[SourceKind, ValueKind], Callable[["FieldExtractor", RawValue], Any]]] = {
    (SourceKind.BODY, ValueKind.STRING): _convert_body_string,
    (SourceKind.BODY, ValueKind.BYTEARRAY): _convert_body_bytes,
    (SourceKind.HEADER, ValueKind.STRING): _convert_header_string,
    (SourceKind.HEADER, ValueKind.LONG): _convert_long,
    (SourceKind.HEADER, ValueKind.INT): _convert_int,
    (SourceKind.HEADER, ValueKind.DATE): _convert_date,
    (SourceKind.HEADER, ValueKind.DOUBLE): _convert_double,
    (SourceKind.HEADER, ValueKind.FLOAT): _convert_float,
}

_SETTERS: Final[dict[ValueKind, str]] = {
    ValueKind.STRING: "set_string",
    ValueKind.BYTEARRAY: "set_bytes",
    ValueKind.LONG: "set_long",
    ValueKind.INT: "set_int",
    ValueKind.DATE: "set_date",
    ValueKind.DOUBLE: "set_double",
    ValueKind.FLOAT: "set_float",
}


def _validate_date_format(pattern: str) -> None:
    if not pattern:
        msg = "Date format must not be empty."
        raise ValueError(msg)
    for match in _DATE_DIRECTIVE_REGEX.finditer(pattern):
        directive = match.group(1)
        if directive not in _DATE_DIRECTIVES:
            msg = f"Unsupported date directive '%{directive}' in {pattern!r}."
            raise ValueError(msg)
    sample = _DATE_FORMAT_SAMPLE.strftime(pattern)
    try:
        datetime.datetime.strptime(sample, pattern)
    except Exception as e:
        msg = f"Invalid date format {pattern!r}: {e}"
        raise ValueError(msg) from e


class FieldExtractor(Extractor):
    """Extractor for one event field and one built-in value kind.

    Args:
        position: 1-based statement position.
        source: Body or header.
        value_kind: Target value kind; must be compatible with ``source``.
        header_name: Header key, required for header sources.
    """

    __slots__ = ("_date_format", "_encoding", "_header_name", "_source", "_value_kind")

    def __init__(
        self, position: int, source: SourceKind, value_kind: ValueKind, header_name: Optional[str] = None
    ) -> None:
        super().__init__(position)
        if (source, value_kind) not in _CONVERTERS:
            msg = f"Value kind {value_kind} is not supported for {source} items."
            raise ExtractorConfigurationError(msg, item=str(source), type_name=str(value_kind))
        if source is SourceKind.HEADER and header_name is None:
            msg = "Header extractors require a header name."
            raise ExtractorConfigurationError(msg, item=HEADER_ITEM_PREFIX, type_name=str(value_kind))
        self._source = source
        self._value_kind = value_kind
        self._header_name = header_name if source is SourceKind.HEADER else None
        self._encoding = DEFAULT_BODY_ENCODING
        self._date_format: Optional[str] = None

    @property
    def source_kind(self) -> SourceKind:  # type: ignore[override]
        return self._source

    @property
    def value_kind(self) -> ValueKind:  # type: ignore[override]
        return self._value_kind

    @property
    def header_name(self) -> Optional[str]:
        return self._header_name

    @property
    def encoding(self) -> str:
        """Body encoding used by body string extractors."""
        return self._encoding

    @property
    def date_format(self) -> Optional[str]:
        """``strptime`` pattern for date extractors; ``None`` means ISO-8601."""
        return self._date_format

    @property
    def item(self) -> str:
        """The item descriptor this extractor was created from."""
        if self._source is SourceKind.HEADER:
            return f"{HEADER_ITEM_PREFIX}{self._header_name}"
        return BODY_ITEM

    def _apply_config(self, config: Optional[str]) -> None:
        if not config:
            return
        if self._source is SourceKind.BODY and self._value_kind is ValueKind.STRING:
            try:
                self._encoding = codecs.lookup(config).name
            except LookupError as e:
                msg = f"Unknown body encoding {config!r}."
                raise ExtractorConfigurationError(msg, self.item, str(self._value_kind), config) from e
        elif self._value_kind is ValueKind.DATE:
            try:
                _validate_date_format(config)
            except ValueError as e:
                raise ExtractorConfigurationError(str(e), self.item, str(self._value_kind), config) from e
            self._date_format = config

    def read(self, event: "EventProtocol") -> Optional[RawValue]:
        """Return the raw field value, or ``None`` when it is absent."""
        if self._source is SourceKind.BODY:
            return event.body
        headers = event.headers
        if headers is None:
            return None
        return headers.get(self._header_name)  # type: ignore[arg-type]

    def convert(self, raw: RawValue) -> Any:
        """Convert a raw field value to this extractor's value kind.

        Raises:
            BindingError: If the value cannot be converted.
        """
        return _CONVERTERS[self._source, self._value_kind](self, raw)

    def set_value(self, statement: "StatementProtocol", event: "EventProtocol") -> None:
        raw = self.read(event)
        if raw is None:
            statement.set_null(self._position, self._value_kind)
            return
        value = self.convert(raw)
        getattr(statement, _SETTERS[self._value_kind])(self._position, value)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(position={self._position!r}, item={self.item!r}, "
            f"value_kind={self._value_kind.value!r})"
        )


class BodyExtractor(FieldExtractor):
    """Binds the event body as a string or as raw bytes."""

    __slots__ = ()

    def __init__(self, position: int, value_kind: ValueKind) -> None:
        if value_kind not in BODY_VALUE_KINDS:
            msg = f"Value kind {value_kind} is not supported for body items."
            raise ExtractorConfigurationError(msg, item=BODY_ITEM, type_name=str(value_kind))
        super().__init__(position, SourceKind.BODY, value_kind)


class HeaderExtractor(FieldExtractor):
    """Binds one named header, parsed to the requested value kind."""

    __slots__ = ()

    def __init__(self, position: int, header_name: str, value_kind: ValueKind) -> None:
        if value_kind not in HEADER_VALUE_KINDS:
            msg = f"Value kind {value_kind} is not supported for header items."
            raise ExtractorConfigurationError(
                msg, item=f"{HEADER_ITEM_PREFIX}{header_name}", type_name=str(value_kind)
            )
        super().__init__(position, SourceKind.HEADER, value_kind, header_name)
