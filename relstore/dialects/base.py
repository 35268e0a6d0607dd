"""Base Dialect type: subclasses implement connect() for each engine."""

import re
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar

from pydantic import BaseModel

_NAMED_PARAMETER = re.compile(r"(?<!:):([A-Za-z_][A-Za-z0-9_]*)")


class _DialectF:
    """Helper for dialect.f: __getattr__ returns the callable from the dialect's F config."""

    __slots__ = ("_dialect",)

    def __init__(self, dialect: "Dialect") -> None:
        self._dialect = dialect

    def __getattr__(self, name: str) -> Callable[..., Any]:
        F = type(self._dialect).F  # pylint: disable=invalid-name
        if name in F:
            return F[name]
        raise AttributeError(name)


class Dialect(BaseModel, ABC):
    """Base for database dialects; subclasses implement connect() for a given URL."""

    model_config = {"arbitrary_types_allowed": True}

    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ()
    """URL schemes this dialect handles (e.g. ('sqlite',), ('postgresql', 'postgres'))."""

    F: ClassVar[dict[str, Callable[..., Any]]] = {}
    """Dialect-specific SQL helpers (e.g. regexp). Access via dialect.f.regexp(column, pattern)."""

    QUOTE: ClassVar[str] = '"'
    """Identifier quote character."""

    PARAMSTYLE: ClassVar[str] = "named"
    """DB-API paramstyle of the driver: 'named' (``:key``) or 'pyformat' (``%(key)s``)."""

    INSERT_DEFAULT_VALUES: ClassVar[str] = "DEFAULT VALUES"
    """Tail of an INSERT statement that sets no column explicitly."""

    @property
    def f(self) -> _DialectF:
        """Access dialect-specific helpers by name (e.g. self.f.regexp(a, b))."""
        return _DialectF(self)

    def quote_identifier(self, name: str) -> str:
        """Quote a table or column name, doubling embedded quote characters."""
        quote = type(self).QUOTE
        return quote + name.replace(quote, quote * 2) + quote

    def format_parameters(self, sql: str, parameters: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        """Rewrite ``:key`` placeholders into the driver's paramstyle."""
        if type(self).PARAMSTYLE == "named":
            return sql, parameters
        sql = _NAMED_PARAMETER.sub(r"%(\1)s", sql.replace("%", "%%"))
        return sql, parameters

    def last_insert_id(self, connection: Any, cursor: Any) -> Any:
        """Return the key generated by the last INSERT executed through cursor."""
        return cursor.lastrowid

    @abstractmethod
    def connect(self, url: str) -> Any:
        """Return a new raw driver connection for the given URL.

        The return value is engine-specific (e.g. sqlite3.Connection, pymysql.Connection).
        Connections are opened in autocommit mode; transaction control belongs to the caller.
        """
        ...  # pylint: disable=unnecessary-ellipsis
