"""SQLite dialect."""

import logging
import re
import urllib.parse

from typing import ClassVar

from relstore.expressions import NaryOperatorExpression

from .base import Dialect

logger = logging.getLogger(__name__)


def _regexp(pattern, value) -> bool:
    """SQLite evaluates ``X REGEXP Y`` as ``regexp(Y, X)``."""
    if pattern is None or value is None:
        return False
    return re.search(pattern, str(value)) is not None


class SqliteDialect(Dialect):
    """Dialect for SQLite (scheme sqlite)."""

    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("sqlite",)

    F: ClassVar[dict[str, callable]] = {
        "regexp": lambda column, pattern: NaryOperatorExpression(
            symbol="REGEXP", arguments=(column, pattern), parenthesized=False
        ),
    }

    def connect(self, url: str):
        import sqlite3
        parsed = urllib.parse.urlparse(url)
        path = (parsed.path or "")[1:] or parsed.hostname
        logger.info("Connecting to SQLite database %s", path)
        conn = sqlite3.connect(path, isolation_level=None)
        conn.execute("PRAGMA foreign_keys = ON")
        conn.create_function("REGEXP", 2, _regexp)
        return conn
