"""Template compilation settings."""

from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from eventbind.exceptions import ImproperConfigurationError

if TYPE_CHECKING:
    from eventbind.extractors.registry import ExtractorRegistry

__all__ = ("BindConfig", "ParameterStyle")


class ParameterStyle(str, Enum):
    """Positional placeholder style used when rendering a template."""

    QMARK = "qmark"
    NUMERIC = "numeric"
    POSITIONAL_COLON = "positional_colon"
    POSITIONAL_PYFORMAT = "pyformat_positional"

    def __str__(self) -> str:
        """String representation for better error messages.

        Returns:
            The enum value as a string.
        """
        return self.value

    def render(self, position: int) -> str:
        """Render the placeholder for a 1-based position."""
        if self is ParameterStyle.NUMERIC:
            return f"${position}"
        if self is ParameterStyle.POSITIONAL_COLON:
            return f":{position}"
        if self is ParameterStyle.POSITIONAL_PYFORMAT:
            return "%s"
        return "?"


class BindConfig:
    """Declarative configuration for compiling an event template."""

    __slots__ = ("dialect", "enable_validation", "parameter_style", "registry")

    def __init__(
        self,
        parameter_style: "ParameterStyle | str" = ParameterStyle.QMARK,
        dialect: Optional[str] = None,
        enable_validation: bool = True,
        registry: "Optional[ExtractorRegistry]" = None,
    ) -> None:
        """Initialize template configuration.

        Args:
            parameter_style: Placeholder style of the rendered SQL
            dialect: sqlglot dialect used to validate the rendered SQL
            enable_validation: Whether to parse the rendered SQL with sqlglot
            registry: Registry for custom extractors; the module-level registry when omitted

        Raises:
            ImproperConfigurationError: If the parameter style is unknown.
        """
        try:
            self.parameter_style = ParameterStyle(parameter_style)
        except ValueError as e:
            supported = ", ".join(sorted(s.value for s in ParameterStyle))
            msg = f"Unknown parameter style {parameter_style!r}. Supported styles: {supported}"
            raise ImproperConfigurationError(msg) from e
        self.dialect = dialect
        self.enable_validation = enable_validation
        self.registry = registry

    def replace(self, **kwargs: Any) -> "BindConfig":
        """Return a copy with the given fields changed."""
        values = {name: getattr(self, name) for name in self.__slots__}
        values.update(kwargs)
        return BindConfig(**values)

    def hash(self) -> int:
        """Generate hash for cache key generation."""
        return hash((self.parameter_style.value, self.dialect, self.enable_validation, id(self.registry)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BindConfig):
            return False
        return (
            self.parameter_style == other.parameter_style
            and self.dialect == other.dialect
            and self.enable_validation == other.enable_validation
            and self.registry is other.registry
        )

    def __hash__(self) -> int:
        return self.hash()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(parameter_style={self.parameter_style!r}, dialect={self.dialect!r}, "
            f"enable_validation={self.enable_validation!r}, registry={self.registry!r})"
        )
