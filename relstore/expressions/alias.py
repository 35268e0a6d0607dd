"""Aliased select-list entry."""

from ._bases import Expression


class AliasExpression(Expression):
    """``expression AS alias`` (e.g. ``"author" AS "author_id"``)."""

    expression: Expression
    alias: Expression

    @property
    def sql(self) -> str:
        return f"{self.expression.sql} AS {self.alias.sql}"
