"""Column expression for referencing a single quoted identifier."""

from typing import Any

from ._bases import Expression


class ColumnExpression(Expression):
    """Reference to a single column (or alias), quoted by the dialect."""

    name: str
    """Unquoted column name (e.g. ``id``, ``author_id``)."""
    dialect: Any
    """Dialect providing identifier quoting."""

    @property
    def sql(self) -> str:
        """Quoted identifier (e.g. ``"author_id"``)."""
        return self.dialect.quote_identifier(self.name)

    @property
    def asc(self):
        """Order by this column ascending."""
        from .order import OrderExpression
        return OrderExpression(expression=self, desc=False)

    @property
    def desc(self):
        """Order by this column descending."""
        from .order import OrderExpression
        return OrderExpression(expression=self, desc=True)
