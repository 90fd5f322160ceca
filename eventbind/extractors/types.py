"""Source and value kinds understood by the extractor factory."""

from enum import Enum
from typing import Final

__all__ = (
    "BODY_ITEM",
    "BODY_VALUE_KINDS",
    "CUSTOM_ITEM",
    "DEFAULT_BODY_ENCODING",
    "HEADER_ITEM_PREFIX",
    "HEADER_VALUE_KINDS",
    "MAX_32BIT_INT",
    "MAX_64BIT_INT",
    "MIN_32BIT_INT",
    "MIN_64BIT_INT",
    "SourceKind",
    "ValueKind",
)


class SourceKind(str, Enum):
    """Where in the event a raw value comes from."""

    BODY = "body"
    HEADER = "header"
    CUSTOM = "custom"

    def __str__(self) -> str:
        """String representation for better error messages.

        Returns:
            The enum value as a string.
        """
        return self.value


class ValueKind(str, Enum):
    """Target type a value is converted to before binding."""

    STRING = "string"
    BYTEARRAY = "bytearray"
    LONG = "long"
    INT = "int"
    DATE = "date"
    DOUBLE = "double"
    FLOAT = "float"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value


BODY_ITEM: Final[str] = "body"
HEADER_ITEM_PREFIX: Final[str] = "header."
CUSTOM_ITEM: Final[str] = "custom"

BODY_VALUE_KINDS: Final[frozenset[ValueKind]] = frozenset({ValueKind.STRING, ValueKind.BYTEARRAY})
HEADER_VALUE_KINDS: Final[frozenset[ValueKind]] = frozenset(
    {ValueKind.STRING, ValueKind.LONG, ValueKind.INT, ValueKind.DATE, ValueKind.DOUBLE, ValueKind.FLOAT}
)

MAX_32BIT_INT: Final[int] = 2147483647
MIN_32BIT_INT: Final[int] = -2147483648
MAX_64BIT_INT: Final[int] = 9223372036854775807
MIN_64BIT_INT: Final[int] = -9223372036854775808

DEFAULT_BODY_ENCODING: Final[str] = "utf-8"
