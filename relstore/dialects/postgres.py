"""PostgreSQL dialect."""

import urllib.parse
from typing import ClassVar

from relstore.expressions import NaryOperatorExpression

from .base import Dialect


class PostgresDialect(Dialect):
    """Dialect for PostgreSQL (schemes postgresql, postgres)."""

    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("postgresql", "postgres")

    PARAMSTYLE: ClassVar[str] = "pyformat"

    F: ClassVar[dict[str, callable]] = {
        "regexp": lambda column, pattern: NaryOperatorExpression(
            symbol="~", arguments=(column, pattern), parenthesized=False
        ),
    }

    def last_insert_id(self, connection, cursor):
        # cursor.lastrowid is the row OID on PostgreSQL, not the serial value
        with connection.cursor() as lastval_cursor:
            lastval_cursor.execute("SELECT lastval()")
            return lastval_cursor.fetchone()[0]

    def connect(self, url: str):
        import psycopg2
        parsed = urllib.parse.urlparse(url)
        connection = psycopg2.connect(
            host=parsed.hostname,
            user=parsed.username,
            password=parsed.password,
            database=(parsed.path or "")[1:] or None,
            port=parsed.port,
        )
        connection.autocommit = True
        return connection
