"""SQL templates with ``${item:type[:config]}`` placeholders.

A template is compiled once: every placeholder outside string literals and
comments becomes one extractor, numbered 1..n in textual order, and the SQL
is rendered with positional placeholders in the configured style. Binding an
event then runs every extractor, in position order, into a fresh statement.

Examples:
    template = EventTemplate.from_sql(
        "INSERT INTO logs (host, ts, line) "
        "VALUES (${header.host:string}, ${header.ts:date:%Y-%m-%d}, ${body:string})"
    )
    template.execute(cursor, event)
"""

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Final, Optional

import sqlglot
from sqlglot.dialects.dialect import Dialect
from sqlglot.errors import SqlglotError

from eventbind.config import BindConfig, ParameterStyle
from eventbind.exceptions import (
    ExtractorConfigurationError,
    ImproperConfigurationError,
    SQLParsingError,
    wrap_binding_errors,
)
from eventbind.extractors.factory import create_extractor
from eventbind.statement import PositionalStatement
from eventbind.utils.logging import get_logger

if TYPE_CHECKING:
    from eventbind.protocols import EventProtocol, ExtractorProtocol, StatementProtocol

__all__ = ("EventTemplate", "PlaceholderInfo", "parse_placeholders")

logger = get_logger(__name__)

_COMMENT_AND_PLACEHOLDER_PATTERN: Final = r"""
    (?P<line_comment>--[^\r\n]*) |
    (?P<block_comment>/\*(?:[^*]|\*(?!/))*\*/) |
    (?P<placeholder>\$\{(?P<token>[^{}]*)\}) |
    (?P<unterminated>\$\{)
    """

# Quotes inside literals are escaped by doubling them.
_TEMPLATE_REGEX: Final = re.compile(
    r"""
    (?P<dquote>"(?:[^"]|"")*") |
    (?P<squote>'(?:[^']|'')*') |
    """
    + _COMMENT_AND_PLACEHOLDER_PATTERN,
    re.VERBOSE | re.DOTALL,
)

# Dialects whose tokenizer also accepts a backslash escape.
_BACKSLASH_TEMPLATE_REGEX: Final = re.compile(
    r"""
    (?P<dquote>"(?:[^"\\]|""|\\.)*") |
    (?P<squote>'(?:[^'\\]|''|\\.)*') |
    """
    + _COMMENT_AND_PLACEHOLDER_PATTERN,
    re.VERBOSE | re.DOTALL,
)


def _template_regex(dialect: Optional[str]) -> "re.Pattern[str]":
    if not dialect:
        return _TEMPLATE_REGEX
    try:
        tokenizer = Dialect.get_or_raise(dialect).tokenizer_class
    except ValueError as e:
        msg = f"Invalid SQL dialect {dialect!r}: {e}"
        raise ImproperConfigurationError(msg) from e
    if "\\" in tokenizer.STRING_ESCAPES:
        return _BACKSLASH_TEMPLATE_REGEX
    return _TEMPLATE_REGEX


class PlaceholderInfo:
    """Immutable description of one ``${...}`` token."""

    __slots__ = ("config", "end", "item", "position", "start", "text", "type_name")

    def __init__(
        self,
        position: int,
        item: str,
        type_name: str,
        config: Optional[str],
        text: str,
        start: int,
        end: int,
    ) -> None:
        self.position = position
        self.item = item
        self.type_name = type_name
        self.config = config
        self.text = text
        self.start = start
        self.end = end

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return False
        return (
            self.position == other.position
            and self.item == other.item
            and self.type_name == other.type_name
            and self.config == other.config
            and self.start == other.start
        )

    def __hash__(self) -> int:
        return hash((self.position, self.item, self.type_name, self.config, self.start))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(position={self.position!r}, item={self.item!r}, "
            f"type_name={self.type_name!r}, config={self.config!r}, text={self.text!r})"
        )


def _parse_token(token: str, text: str, position: int, start: int, end: int) -> PlaceholderInfo:
    item, sep, rest = token.partition(":")
    item = item.strip()
    if not sep or not item:
        msg = f"Malformed placeholder {text!r}: expected ${{item:type}} or ${{item:type:config}}."
        raise ExtractorConfigurationError(msg, item=item or None)
    type_name, has_config, config = rest.partition(":")
    return PlaceholderInfo(
        position=position,
        item=item,
        type_name=type_name.strip(),
        config=config if has_config and config else None,
        text=text,
        start=start,
        end=end,
    )


def parse_placeholders(sql: str, dialect: Optional[str] = None) -> "list[PlaceholderInfo]":
    """Find the placeholders of a template in textual order.

    Tokens inside quoted literals and comments are ignored. A quote inside a
    literal is escaped by doubling it, or also by a backslash when the
    ``dialect`` tokenizes strings that way.

    Args:
        sql: The SQL template.
        dialect: sqlglot dialect deciding how quotes are escaped.

    Raises:
        ExtractorConfigurationError: On a malformed or unterminated placeholder.
        ImproperConfigurationError: If ``dialect`` is unknown.

    Returns:
        One ``PlaceholderInfo`` per placeholder, positions starting at 1.
    """
    placeholders: list[PlaceholderInfo] = []
    for match in _template_regex(dialect).finditer(sql):
        if match.group("unterminated"):
            msg = f"Unterminated placeholder at offset {match.start()} in template."
            raise ExtractorConfigurationError(msg)
        if not match.group("placeholder"):
            continue
        placeholders.append(
            _parse_token(
                match.group("token"), match.group("placeholder"), len(placeholders) + 1, match.start(), match.end()
            )
        )
    return placeholders


def _render(sql: str, placeholders: "Sequence[PlaceholderInfo]", style: ParameterStyle) -> str:
    parts: list[str] = []
    cursor = 0
    for placeholder in placeholders:
        parts.append(sql[cursor : placeholder.start])
        parts.append(style.render(placeholder.position))
        cursor = placeholder.end
    parts.append(sql[cursor:])
    return "".join(parts)


def _validate_sql(sql: str, dialect: Optional[str]) -> None:
    try:
        expressions = [expression for expression in sqlglot.parse(sql, read=dialect) if expression is not None]
    except SqlglotError as e:
        msg = f"SQL parsing failed: {e}"
        raise SQLParsingError(msg, sql) from e
    except ValueError as e:
        msg = f"Invalid SQL dialect {dialect!r}: {e}"
        raise ImproperConfigurationError(msg) from e
    if len(expressions) != 1:
        msg = f"Template must contain exactly one statement, found {len(expressions)}"
        raise SQLParsingError(msg, sql)


class EventTemplate:
    """A compiled SQL template bound to an ordered list of extractors.

    Compilation, including every extractor's configuration, happens in the
    constructor, so configuration errors surface before any event is bound.
    """

    __slots__ = ("_config", "_extractors", "_placeholders", "_raw_sql", "_sql")

    def __init__(self, sql: str, config: Optional[BindConfig] = None) -> None:
        if not sql or not sql.strip():
            msg = "SQL template must not be empty."
            raise ImproperConfigurationError(msg)
        self._raw_sql = sql
        self._config = config or BindConfig()
        self._placeholders = tuple(parse_placeholders(sql, self._config.dialect))
        if self._config.enable_validation:
            _validate_sql(_render(sql, self._placeholders, ParameterStyle.QMARK), self._config.dialect)
        self._extractors: tuple[ExtractorProtocol, ...] = tuple(
            create_extractor(p.position, p.item, p.type_name, p.config, registry=self._config.registry)
            for p in self._placeholders
        )
        self._sql = _render(sql, self._placeholders, self._config.parameter_style)
        logger.debug("Compiled template with %d placeholders: %s", len(self._extractors), self._sql)

    @classmethod
    def from_sql(cls, sql: str, config: Optional[BindConfig] = None) -> "EventTemplate":
        return cls(sql, config)

    @property
    def sql(self) -> str:
        """The rendered SQL with positional placeholders."""
        return self._sql

    @property
    def raw_sql(self) -> str:
        return self._raw_sql

    @property
    def config(self) -> BindConfig:
        return self._config

    @property
    def placeholders(self) -> "tuple[PlaceholderInfo, ...]":
        return self._placeholders

    @property
    def extractors(self) -> "tuple[ExtractorProtocol, ...]":
        return self._extractors

    @property
    def parameter_count(self) -> int:
        return len(self._extractors)

    def bind_into(self, statement: "StatementProtocol", event: "EventProtocol") -> None:
        """Run every extractor, in position order, against ``statement``.

        Raises:
            BindingError: On the first extractor that fails.
        """
        for extractor in self._extractors:
            with wrap_binding_errors(extractor.position):
                extractor.bind(statement, event)

    def bind(self, event: "EventProtocol") -> "tuple[Any, ...]":
        """Bind ``event`` into a fresh statement and return its ordered parameters.

        Raises:
            BindingError: If any value cannot be extracted or bound.
        """
        statement = PositionalStatement(len(self._extractors))
        self.bind_into(statement, event)
        return statement.parameters

    def execute(self, cursor: Any, event: "EventProtocol") -> Any:
        """Bind ``event`` and execute the statement on a DB-API cursor.

        Transaction handling is left to the caller.

        Returns:
            Whatever ``cursor.execute`` returns.
        """
        return cursor.execute(self._sql, self.bind(event))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sql={self._sql!r}, parameter_count={len(self._extractors)})"
