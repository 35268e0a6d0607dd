"""NULL test of one expression."""

from ._bases import Expression


class NullTestExpression(Expression):
    """``expression IS NULL``, or ``IS NOT NULL`` when negated; binds nothing."""

    expression: Expression
    negated: bool = False

    @property
    def sql(self) -> str:
        return f"{self.expression.sql} IS {'NOT NULL' if self.negated else 'NULL'}"
