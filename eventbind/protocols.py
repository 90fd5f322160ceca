"""Runtime-checkable protocols for the objects eventbind reads from and writes to.

Events and prepared statements are owned by the caller. Anything that
provides these attributes and methods can be used with the extractors.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    import datetime

    from eventbind.extractors.types import ValueKind

__all__ = ("EventProtocol", "ExtractorProtocol", "StatementProtocol")


@runtime_checkable
class EventProtocol(Protocol):
    """Protocol for an in-flight event: a byte body plus string headers."""

    @property
    def body(self) -> Optional[bytes]:
        """Raw event body, or ``None`` when the event carries none."""
        ...

    @property
    def headers(self) -> "Mapping[str, str]":
        """Header mapping."""
        ...


@runtime_checkable
class StatementProtocol(Protocol):
    """Protocol for a prepared statement accepting positional bindings.

    Positions are 1-based.
    """

    def set_string(self, position: int, value: str) -> None: ...

    def set_bytes(self, position: int, value: bytes) -> None: ...

    def set_int(self, position: int, value: int) -> None: ...

    def set_long(self, position: int, value: int) -> None: ...

    def set_float(self, position: int, value: float) -> None: ...

    def set_double(self, position: int, value: float) -> None: ...

    def set_date(self, position: int, value: "datetime.date") -> None: ...

    def set_object(self, position: int, value: Any) -> None:
        """Bind a value of a type the statement does not declare explicitly."""
        ...

    def set_null(self, position: int, value_kind: "ValueKind") -> None:
        """Bind SQL NULL for a parameter of the given kind."""
        ...


@runtime_checkable
class ExtractorProtocol(Protocol):
    """Capability set every extractor, built-in or custom, must provide."""

    @property
    def position(self) -> int:
        """1-based statement position this extractor binds to."""
        ...

    def configure(self, config: Optional[str]) -> None:
        """Apply the variant-specific config string."""
        ...

    def bind(self, statement: "StatementProtocol", event: "EventProtocol") -> None:
        """Read, convert and bind the value for ``event``."""
        ...
