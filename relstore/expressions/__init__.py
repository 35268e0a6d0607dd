"""SQL expression types for statement building.

Conditions, select lists and orderings are built as small trees of expression
nodes. Each node has a ``.sql`` property rendering a SQL fragment with named
``:key`` placeholders; the bound values themselves are held by the statement
that created the placeholders.
"""

from ._bases import ArgumentedExpression, Expression
from .aggregate import AggregateExpression
from .alias import AliasExpression
from .column import ColumnExpression
from .nary_operator import NaryOperatorExpression
from .null_test import NullTestExpression
from .order import OrderExpression
from .parameter import ParameterExpression
from .raw import RawExpression

__all__ = [
    "AggregateExpression",
    "AliasExpression",
    "ArgumentedExpression",
    "ColumnExpression",
    "Expression",
    "NaryOperatorExpression",
    "NullTestExpression",
    "OrderExpression",
    "ParameterExpression",
    "RawExpression",
]
