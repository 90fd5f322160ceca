"""A minimal in-memory event."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Optional, Union

__all__ = ("Event",)


class Event:
    """Immutable event with a byte body and string headers.

    A ``str`` body is stored UTF-8 encoded.
    """

    __slots__ = ("_body", "_headers")

    def __init__(
        self, body: "Optional[Union[bytes, bytearray, str]]" = None, headers: "Optional[Mapping[str, str]]" = None
    ) -> None:
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._body = bytes(body) if body is not None else None
        self._headers: Mapping[str, str] = MappingProxyType(dict(headers or {}))

    @property
    def body(self) -> Optional[bytes]:
        return self._body

    @property
    def headers(self) -> "Mapping[str, str]":
        return self._headers

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return False
        return self._body == other._body and dict(self._headers) == dict(other._headers)

    def __hash__(self) -> int:
        return hash((self._body, tuple(sorted(self._headers.items()))))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(body={self._body!r}, headers={dict(self._headers)!r})"
