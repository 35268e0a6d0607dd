"""Base expression types for SQL expression trees."""

from __future__ import annotations
from typing import Any, Tuple

from pydantic import BaseModel, Field as PydanticField


class Expression(BaseModel):
    """Base type for all SQL expression nodes.

    Subclasses must implement the ``sql`` property. Bound values never appear
    in the tree: literals are represented by ``ParameterExpression`` nodes whose
    values live in the statement that created them.
    """

    model_config = {"arbitrary_types_allowed": True}

    @property
    def sql(self) -> str:
        """SQL fragment for this expression, with ``:name`` placeholders."""
        raise NotImplementedError("Subclasses must implement `sql` property")

    def compare(self, symbol: str, other: "Expression"):
        """Build an unparenthesized binary comparison (e.g. ``"id" = :p``)."""
        from .nary_operator import NaryOperatorExpression
        return NaryOperatorExpression(symbol=symbol, arguments=(self, other), parenthesized=False)

    def is_null(self):
        """Build an IS NULL expression."""
        from .null_test import NullTestExpression
        return NullTestExpression(expression=self)

    def is_not_null(self):
        """Build an IS NOT NULL expression."""
        from .null_test import NullTestExpression
        return NullTestExpression(expression=self, negated=True)

    def as_(self, alias: "Expression"):
        """Build ``expression AS alias`` for select lists."""
        from .alias import AliasExpression
        return AliasExpression(expression=self, alias=alias)

    def __and__(self, other: Any):
        from .nary_operator import NaryOperatorExpression
        return NaryOperatorExpression(symbol="AND", arguments=(self, other))

    def __or__(self, other: Any):
        from .nary_operator import NaryOperatorExpression
        return NaryOperatorExpression(symbol="OR", arguments=(self, other))


class ArgumentedExpression(Expression):
    """Base for expressions that have a symbol and a tuple of arguments.

    Used by operators (e.g. ``=``, ``AND``, ``REGEXP``).
    """

    symbol: str
    arguments: Tuple[Any, ...] = PydanticField(default_factory=tuple)

    @staticmethod
    def _argument_to_sql(argument: Any) -> str:
        """Render one argument as SQL; only expressions may appear in the tree."""
        if isinstance(argument, Expression):
            return argument.sql
        raise TypeError(f"Cannot render non-expression argument {argument!r}; bind it first")
