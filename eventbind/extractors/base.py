"""Base class shared by built-in and custom extractors."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Optional

from mypy_extensions import mypyc_attr

from eventbind.exceptions import ExtractorConfigurationError, wrap_binding_errors
from eventbind.extractors.types import SourceKind, ValueKind

if TYPE_CHECKING:
    from eventbind.protocols import EventProtocol, StatementProtocol

__all__ = ("Extractor", "validate_position")


def validate_position(position: object) -> int:
    """Check that ``position`` is a usable 1-based statement index.

    Args:
        position: Candidate position.

    Raises:
        ExtractorConfigurationError: If the position is not an integer >= 1.

    Returns:
        The validated position.
    """
    if isinstance(position, bool) or not isinstance(position, int) or position < 1:
        msg = f"Parameter position must be an integer >= 1, got {position!r}."
        raise ExtractorConfigurationError(msg)
    return position


@mypyc_attr(allow_interpreted_subclasses=True)
class Extractor(ABC):
    """Pulls one typed value from an event and binds it at a fixed position.

    An extractor is created once per placeholder, configured exactly once,
    and then bound once per event for the lifetime of the statement.
    Subclasses implement :meth:`set_value`; :meth:`bind` surfaces every
    failure as :class:`~eventbind.exceptions.BindingError`.

    Custom extractors subclass this and are made available to templates
    through :class:`~eventbind.extractors.registry.ExtractorRegistry`.
    """

    __slots__ = ("_configured", "_position")

    source_kind: ClassVar[SourceKind] = SourceKind.CUSTOM
    value_kind: ClassVar[ValueKind] = ValueKind.OTHER

    def __init__(self, position: int) -> None:
        self._position = validate_position(position)
        self._configured = False

    @property
    def position(self) -> int:
        """1-based statement position."""
        return self._position

    @property
    def is_configured(self) -> bool:
        return self._configured

    def configure(self, config: Optional[str]) -> None:
        """Apply the config string. May only be called once.

        Subclasses override :meth:`_apply_config`; the default accepts anything.

        Args:
            config: The config string, or ``None`` when none was provided.

        Raises:
            ExtractorConfigurationError: If the extractor was already configured
                or the config string is invalid for this variant.
        """
        if self._configured:
            msg = f"Extractor at position {self._position} is already configured."
            raise ExtractorConfigurationError(msg, config=config)
        self._apply_config(config)
        self._configured = True

    def _apply_config(self, config: Optional[str]) -> None:  # noqa: B027
        """Hook for variant-specific configuration. Does nothing by default."""

    def bind(self, statement: "StatementProtocol", event: "EventProtocol") -> None:
        """Set the value of this parameter into ``statement``.

        Args:
            statement: The prepared statement to bind into.
            event: The event to read the value from.

        Raises:
            BindingError: On any conversion or statement error.
        """
        with wrap_binding_errors(self._position):
            self.set_value(statement, event)

    @abstractmethod
    def set_value(self, statement: "StatementProtocol", event: "EventProtocol") -> None:
        """Read, convert and bind the value. Any exception becomes a ``BindingError``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(position={self._position!r})"
