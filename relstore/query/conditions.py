"""Translation of field/value/operator descriptors into boolean expressions."""

from __future__ import annotations

from typing import Any, Callable

from ..errors import InvalidComparison, InvalidLogical, QueryError
from ..expressions import ColumnExpression, Expression, NaryOperatorExpression, RawExpression
from ..model import Field, Model

COMPARISON_EQUAL = "="
COMPARISON_NOT_EQUAL = "!="
COMPARISON_LESS = "<"
COMPARISON_LESS_OR_EQUAL = "<="
COMPARISON_GREATER = ">"
COMPARISON_GREATER_OR_EQUAL = ">="
COMPARISON_LIKE = "like"
COMPARISON_REGEXP = "regexp"

COMPARISONS = (
    COMPARISON_EQUAL,
    COMPARISON_NOT_EQUAL,
    COMPARISON_LESS,
    COMPARISON_LESS_OR_EQUAL,
    COMPARISON_GREATER,
    COMPARISON_GREATER_OR_EQUAL,
    COMPARISON_LIKE,
    COMPARISON_REGEXP,
)

LOGICAL_AND = "and"
LOGICAL_OR = "or"
LOGICALS = (LOGICAL_AND, LOGICAL_OR)

Bind = Callable[..., Expression]


class ConditionBuilder:
    """Builds condition expressions for one model, binding values through ``bind``.

    ``bind(operation, field, value, type_=None)`` must return the placeholder
    expression for the bound value; queries pass their own ``bind`` so that
    every placeholder lands in their build context.
    """

    def __init__(self, model: Model, dialect: Any, bind: Bind):
        self.model = model
        self.dialect = dialect
        self.bind = bind

    def condition(
        self,
        field: str | list[str] | tuple[str, ...],
        value: Any,
        comparison: str = COMPARISON_EQUAL,
        logical: str = LOGICAL_AND,
    ) -> Expression:
        """Expression testing field(s) against value.

        Args:
            field: Field name, or a list of names tested against the same value
                and joined by ``logical``.
            value: Scalar, ``None`` (NULL test) or a list/tuple/set of values
                (one test per element, joined by OR, or by AND for ``!=``).
            comparison: One of ``= != < <= > >= like regexp`` (case-insensitive).
            logical: ``and`` or ``or`` (case-insensitive).

        Raises:
            InvalidComparison, InvalidLogical: before anything is bound.
            UnknownField: if any field is not in the model, before anything is bound.
        """
        comparison = str(comparison).lower()
        logical = str(logical).lower()
        if comparison not in COMPARISONS:
            raise InvalidComparison(
                f"Query does not supports comparison operator {comparison!r} in query {self.model.entity}"
            )
        if logical not in LOGICALS:
            raise InvalidLogical(
                f"Query does not supports logical operator {logical!r} in query {self.model.entity}"
            )

        if not isinstance(field, (list, tuple)):
            return self._field_condition(self.model.field(field), value, comparison)

        fields = [self.model.field(name) for name in field]
        if not fields:
            raise QueryError(f"No fields given for condition in query {self.model.entity}")
        return NaryOperatorExpression(
            symbol=logical.upper(),
            arguments=tuple(self._field_condition(f, value, comparison) for f in fields),
        )

    def _field_condition(self, field: Field, value: Any, comparison: str) -> Expression:
        if not isinstance(value, (list, tuple, set, frozenset)):
            return self._leaf(field, value, comparison)
        if not value:
            return RawExpression(text="1 = 1" if comparison == COMPARISON_NOT_EQUAL else "1 = 0")
        return NaryOperatorExpression(
            symbol="AND" if comparison == COMPARISON_NOT_EQUAL else "OR",
            arguments=tuple(self._field_condition(field, item, comparison) for item in value),
        )

    def _leaf(self, field: Field, value: Any, comparison: str) -> Expression:
        column = ColumnExpression(name=field.mapped_name, dialect=self.dialect)
        if value is None:
            if comparison == COMPARISON_NOT_EQUAL:
                return column.is_not_null()
            return column.is_null()
        if comparison == COMPARISON_REGEXP:
            return self.dialect.f.regexp(column, self.bind("condition", field, value, "string"))
        if comparison == COMPARISON_LIKE:
            return column.compare("LIKE", self.bind("condition", field, value, "string"))
        return column.compare(comparison, self.bind("condition", field, value))
