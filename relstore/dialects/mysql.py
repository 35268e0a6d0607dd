"""MySQL dialect."""

import urllib.parse
from typing import ClassVar

from relstore.expressions import NaryOperatorExpression

from .base import Dialect


class MysqlDialect(Dialect):
    """Dialect for MySQL (scheme mysql)."""

    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("mysql",)

    QUOTE: ClassVar[str] = "`"
    PARAMSTYLE: ClassVar[str] = "pyformat"
    INSERT_DEFAULT_VALUES: ClassVar[str] = "() VALUES ()"

    F: ClassVar[dict[str, callable]] = {
        "regexp": lambda column, pattern: NaryOperatorExpression(
            symbol="REGEXP", arguments=(column, pattern), parenthesized=False
        ),
    }

    def connect(self, url: str):
        import pymysql  # pylint: disable=import-outside-toplevel,import-error
        parsed = urllib.parse.urlparse(url)
        return pymysql.connect(
            host=parsed.hostname,
            user=parsed.username,
            password=parsed.password,
            database=(parsed.path or "")[1:] or None,
            port=parsed.port or 3306,
            autocommit=True,
        )
