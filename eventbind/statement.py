"""Positional parameter buffer standing in for a prepared statement.

DB-API drivers take the statement text and its parameters together, so
extractors bind into a :class:`PositionalStatement` whose ordered
``parameters`` are then passed to ``cursor.execute``.
"""

import datetime
from typing import TYPE_CHECKING, Any, Final

from eventbind.exceptions import BindingError

if TYPE_CHECKING:
    from eventbind.extractors.types import ValueKind

__all__ = ("UNBOUND", "PositionalStatement")


class _Unbound:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<UNBOUND>"


UNBOUND: Final = _Unbound()


class PositionalStatement:
    """Collects one value per 1-based position.

    Not safe for concurrent binding; use one instance per event.
    """

    __slots__ = ("_values",)

    def __init__(self, parameter_count: int) -> None:
        if parameter_count < 0:
            msg = f"Parameter count must be >= 0, got {parameter_count}."
            raise ValueError(msg)
        self._values: list[Any] = [UNBOUND] * parameter_count

    @property
    def parameter_count(self) -> int:
        return len(self._values)

    def _set(self, position: int, value: Any) -> None:
        if isinstance(position, bool) or not isinstance(position, int) or not 1 <= position <= len(self._values):
            msg = f"Parameter position {position!r} is out of range 1..{len(self._values)}"
            raise BindingError(msg, position if isinstance(position, int) else None)
        self._values[position - 1] = value

    def _check_type(self, position: int, value: Any, expected: "tuple[type, ...]", kind: str) -> None:
        if isinstance(value, bool) or not isinstance(value, expected):
            msg = f"Expected {kind} value, got {type(value).__name__}"
            raise BindingError(msg, position)

    def set_string(self, position: int, value: str) -> None:
        self._check_type(position, value, (str,), "string")
        self._set(position, value)

    def set_bytes(self, position: int, value: bytes) -> None:
        self._check_type(position, value, (bytes, bytearray, memoryview), "bytes")
        self._set(position, bytes(value))

    def set_int(self, position: int, value: int) -> None:
        self._check_type(position, value, (int,), "int")
        self._set(position, value)

    def set_long(self, position: int, value: int) -> None:
        self._check_type(position, value, (int,), "long")
        self._set(position, value)

    def set_float(self, position: int, value: float) -> None:
        self._check_type(position, value, (float, int), "float")
        self._set(position, float(value))

    def set_double(self, position: int, value: float) -> None:
        self._check_type(position, value, (float, int), "double")
        self._set(position, float(value))

    def set_date(self, position: int, value: datetime.date) -> None:
        self._check_type(position, value, (datetime.date,), "date")
        self._set(position, value)

    def set_object(self, position: int, value: Any) -> None:
        self._set(position, value)

    def set_null(self, position: int, value_kind: "ValueKind") -> None:
        self._set(position, None)

    def is_bound(self, position: int) -> bool:
        return self._values[position - 1] is not UNBOUND

    @property
    def parameters(self) -> "tuple[Any, ...]":
        """Bound values ordered by position.

        Raises:
            BindingError: If any position has not been bound.
        """
        missing = [index + 1 for index, value in enumerate(self._values) if value is UNBOUND]
        if missing:
            msg = f"Parameters at positions {missing} were never bound"
            raise BindingError(msg)
        return tuple(self._values)

    def clear(self) -> None:
        self._values = [UNBOUND] * len(self._values)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._values!r})"
