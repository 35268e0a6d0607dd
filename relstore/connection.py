"""Named database connections.

URLs are registered by name with :func:`connect`; the matching
:class:`Connection` is built on first use by :func:`get_connection` and opens
its driver connection lazily, so statements can be built (and rendered)
without ever touching the database.
"""

import logging
from typing import Any, Optional

from pydantic import BaseModel, Field, PrivateAttr

from .dialects import Dialect, get_dialect_for_url

logger = logging.getLogger("relstore")


class Result(BaseModel):
    """Outcome of one executed statement."""

    rows: list[dict[str, Any]] = Field(default_factory=list)
    """Fetched rows keyed by column label; empty for statements returning nothing."""
    rowcount: int = -1


class Connection(BaseModel):
    """A database URL bound to its dialect, with a lazily opened driver connection."""

    model_config = {"arbitrary_types_allowed": True}

    name: str = "default"
    url: str
    dialect: Dialect

    _raw: Any = PrivateAttr(default=None)
    _last_cursor: Any = PrivateAttr(default=None)

    @classmethod
    def from_url(cls, url: str, name: str = "default") -> "Connection":
        """Build a connection choosing the dialect from the URL scheme."""
        return cls(name=name, url=url, dialect=get_dialect_for_url(url))

    @property
    def raw(self) -> Any:
        """The DB-API connection, opened on first access."""
        if self._raw is None:
            self._raw = self.dialect.connect(self.url)
        return self._raw

    def execute(self, sql: str, parameters: Optional[dict[str, Any]] = None) -> Result:
        """Run one statement with named parameters and return its rows.

        Args:
            sql: Statement with ``:key`` placeholders.
            parameters: Values for the placeholders; default {}.

        Returns:
            A Result with rows as dicts (column label -> value) and the row count.
        """
        sql, parameters = self.dialect.format_parameters(sql, dict(parameters or {}))
        logger.debug("%s %r", sql, parameters)
        cursor = self.raw.cursor()
        cursor.execute(sql, parameters)
        rows = []
        if cursor.description:
            names = [column[0] for column in cursor.description]
            rows = [dict(zip(names, row)) for row in cursor.fetchall()]
        self._last_cursor = cursor
        return Result(rows=rows, rowcount=cursor.rowcount)

    def last_insert_id(self) -> Any:
        """Key generated by the most recent INSERT on this connection."""
        if self._last_cursor is None:
            return None
        return self.dialect.last_insert_id(self.raw, self._last_cursor)

    def close(self) -> None:
        """Close the driver connection if it was opened."""
        if self._raw is not None:
            self._raw.close()
            self._raw = None
            self._last_cursor = None


_urls: dict[str, str] = {}
_connections: dict[str, Connection] = {}


def connect(database_url: str, name: str = "default") -> None:
    """Register a database URL under a name, replacing (and closing) any previous one."""
    disconnect(name)
    _urls[name] = database_url


def disconnect(name: str = "default") -> None:
    """Close and forget the connection registered under name, if any."""
    connection = _connections.pop(name, None)
    if connection is not None:
        connection.close()
    _urls.pop(name, None)


def get_connection(name: str = "default") -> Connection:
    """Return the Connection registered under name (built on first call)."""
    if name not in _connections:
        try:
            url = _urls[name]
        except KeyError as error:
            raise ValueError(f"No connection configured with name=`{name}`") from error
        _connections[name] = Connection.from_url(url, name=name)
    return _connections[name]


__all__ = ["Connection", "Result", "connect", "disconnect", "get_connection"]
