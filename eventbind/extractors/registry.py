"""Registry of caller-supplied extractor constructors.

Custom placeholders (``item = custom``) name a registered constructor
instead of a class to be loaded at dispatch time. Constructors are
registered ahead of time, so the available custom kinds can be listed.

Examples:
    @extractor_registry.register("uuid")
    class UUIDExtractor(Extractor):
        def set_value(self, statement, event):
            statement.set_string(self.position, str(uuid.uuid4()))

    extractor_registry.register_import("myapp.extractors.GeoPointExtractor")
"""

from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar, Union, overload

from mypy_extensions import mypyc_attr

from eventbind.exceptions import ExtractorConfigurationError
from eventbind.extractors.types import CUSTOM_ITEM
from eventbind.utils.logging import get_logger
from eventbind.utils.module_loader import import_string

if TYPE_CHECKING:
    from eventbind.protocols import ExtractorProtocol

__all__ = ("ExtractorConstructor", "ExtractorRegistry", "extractor_registry")

logger = get_logger(__name__)

ExtractorConstructor = Callable[[int], "ExtractorProtocol"]
ConstructorT = TypeVar("ConstructorT", bound=Callable[..., Any])


@mypyc_attr(allow_interpreted_subclasses=True)
class ExtractorRegistry:
    """Named constructors for custom extractors.

    A constructor is any callable taking the 1-based position and returning
    an object with ``position``, ``configure`` and ``bind``. Extractor
    subclasses qualify directly.
    """

    __slots__ = ("_constructors",)

    def __init__(self) -> None:
        self._constructors: dict[str, ExtractorConstructor] = {}

    @overload
    def register(
        self, name: str, constructor: None = None, *, replace: bool = False
    ) -> "Callable[[ConstructorT], ConstructorT]": ...

    @overload
    def register(self, name: str, constructor: ConstructorT, *, replace: bool = False) -> ConstructorT: ...

    def register(
        self, name: str, constructor: Optional[ConstructorT] = None, *, replace: bool = False
    ) -> "Union[ConstructorT, Callable[[ConstructorT], ConstructorT]]":
        """Register a custom extractor constructor under ``name``.

        Can be used directly or as a class decorator.

        Args:
            name: Type name used in ``${custom:<name>}`` placeholders.
            constructor: Callable taking the position. Omit to use as a decorator.
            replace: Allow overwriting an existing registration.

        Raises:
            ExtractorConfigurationError: On an empty name, a non-callable
                constructor, or a duplicate name without ``replace``.

        Returns:
            The constructor, or a decorator registering it.
        """
        if constructor is None:

            def decorator(value: ConstructorT) -> ConstructorT:
                return self.register(name, value, replace=replace)

            return decorator

        if not name:
            msg = "Custom extractor name must not be empty."
            raise ExtractorConfigurationError(msg, item=CUSTOM_ITEM, type_name=name)
        if not callable(constructor):
            msg = f"Custom extractor {name!r} must be callable, got {type(constructor).__name__}."
            raise ExtractorConfigurationError(msg, item=CUSTOM_ITEM, type_name=name)
        if name in self._constructors and not replace:
            msg = f"Custom extractor {name!r} is already registered."
            raise ExtractorConfigurationError(msg, item=CUSTOM_ITEM, type_name=name)

        self._constructors[name] = constructor
        logger.debug("Registered custom extractor %s -> %r", name, constructor)
        return constructor

    def register_import(
        self, name: str, dotted_path: Optional[str] = None, *, replace: bool = False
    ) -> ExtractorConstructor:
        """Import a constructor by dotted path now and register it.

        Args:
            name: Type name used in placeholders.
            dotted_path: Import path of the constructor; defaults to ``name``,
                so fully-qualified class names can be used as type names.
            replace: Allow overwriting an existing registration.

        Raises:
            ExtractorConfigurationError: If the path cannot be imported.

        Returns:
            The imported constructor.
        """
        path = dotted_path or name
        try:
            constructor = import_string(path)
        except ImportError as e:
            msg = f"Could not import custom extractor {name!r} from {path!r}: {e}"
            raise ExtractorConfigurationError(msg, item=CUSTOM_ITEM, type_name=name) from e
        return self.register(name, constructor, replace=replace)

    def unregister(self, name: str) -> None:
        """Remove a registration.

        Raises:
            ExtractorConfigurationError: If ``name`` is not registered.
        """
        try:
            del self._constructors[name]
        except KeyError as e:
            msg = f"Custom extractor {name!r} is not registered."
            raise ExtractorConfigurationError(msg, item=CUSTOM_ITEM, type_name=name) from e

    def get(self, name: str) -> ExtractorConstructor:
        """Return the constructor registered under ``name``.

        Raises:
            ExtractorConfigurationError: If ``name`` is not registered.
        """
        try:
            return self._constructors[name]
        except KeyError as e:
            msg = f"Custom extractor {name!r} is not registered."
            raise ExtractorConfigurationError(msg, item=CUSTOM_ITEM, type_name=name) from e

    def is_registered(self, name: str) -> bool:
        return name in self._constructors

    def names(self) -> "list[str]":
        """Registered type names, sorted."""
        return sorted(self._constructors)

    def clear(self) -> None:
        self._constructors.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._constructors

    def __len__(self) -> int:
        return len(self._constructors)


extractor_registry = ExtractorRegistry()
