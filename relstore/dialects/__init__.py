"""Database dialects: SQLite, MySQL and PostgreSQL, chosen from a connection URL."""

import urllib.parse

from .base import Dialect
from .sqlite import SqliteDialect
from .mysql import MysqlDialect
from .postgres import PostgresDialect

_DIALECTS_BY_SCHEME: dict[str, type[Dialect]] = {
    scheme: dialect_class
    for dialect_class in (SqliteDialect, MysqlDialect, PostgresDialect)
    for scheme in dialect_class.SUPPORTED_SCHEMA
}


def get_dialect_for_scheme(scheme: str) -> Dialect:
    """Dialect for a URL scheme; a driver suffix (``mysql+pymysql``) is ignored."""
    engine = (scheme or "").partition("+")[0].lower()
    try:
        return _DIALECTS_BY_SCHEME[engine]()
    except KeyError as error:
        raise ValueError(f"Unsupported database scheme: {scheme}") from error


def get_dialect_for_url(url: str) -> Dialect:
    """Dialect for a database URL such as ``sqlite:///blog.sqlite3``."""
    return get_dialect_for_scheme(urllib.parse.urlparse(url).scheme)


__all__ = [
    "Dialect",
    "SqliteDialect",
    "MysqlDialect",
    "PostgresDialect",
    "get_dialect_for_scheme",
    "get_dialect_for_url",
]
