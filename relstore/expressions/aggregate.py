"""Aggregate function applied to one column."""

from ._bases import Expression


class AggregateExpression(Expression):
    """``FUNCTION(argument)`` in a select list (e.g. ``COUNT("id")``, ``AVG("price")``)."""

    function: str
    """SQL function name, already upper-cased (``COUNT``, ``AVG``, ``DISTINCT``...)."""
    argument: Expression

    @property
    def sql(self) -> str:
        if not self.function:
            raise ValueError("AggregateExpression must name a function")
        return f"{self.function}({self.argument.sql})"
