from collections.abc import Generator
from contextlib import contextmanager
from typing import Any, Optional

__all__ = (
    "BindingError",
    "EventBindError",
    "ExtractorConfigurationError",
    "ImproperConfigurationError",
    "SQLParsingError",
    "wrap_binding_errors",
)


class EventBindError(Exception):
    """Base exception class from which all eventbind exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``EventBindError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class ImproperConfigurationError(EventBindError):
    """Improper Configuration error.

    Raised while a template or extractor is being set up, before any event is processed.
    """


class ExtractorConfigurationError(ImproperConfigurationError):
    """An extractor could not be created or configured.

    Carries the offending ``item``, ``type`` and ``config`` for diagnosis.
    """

    item: Optional[str]
    type_name: Optional[str]
    config: Optional[str]

    def __init__(
        self,
        message: str,
        item: Optional[str] = None,
        type_name: Optional[str] = None,
        config: Optional[str] = None,
    ) -> None:
        super().__init__(detail=message)
        self.item = item
        self.type_name = type_name
        self.config = config


class SQLParsingError(ImproperConfigurationError):
    """Issues parsing a SQL template."""

    sql: Optional[str]

    def __init__(self, message: Optional[str] = None, sql: Optional[str] = None) -> None:
        if message is None:
            message = "Issues parsing SQL statement."
        detail_message = message
        if sql:
            detail_message = f"{message}\nSQL: {sql}"
        super().__init__(detail=detail_message)
        self.sql = sql


class BindingError(EventBindError):
    """A value could not be read, converted, or bound for one event."""

    position: Optional[int]

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        detail_message = message
        if position is not None:
            detail_message = f"{message} (position {position})"
        super().__init__(detail=detail_message)
        self.position = position


@contextmanager
def wrap_binding_errors(position: Optional[int] = None) -> Generator[None, None, None]:
    """Convert any failure raised inside the block into a :class:`BindingError`.

    Args:
        position: The statement position being bound, included in the message.

    Raises:
        BindingError: For every exception raised in the block.
    """
    try:
        yield
    except BindingError:
        raise
    except Exception as exc:
        msg = f"Failed to bind value: {type(exc).__name__}: {exc}"
        raise BindingError(msg, position) from exc
