"""Read queries: SELECT with field selection, aggregates, conditions and relations."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from ..errors import InvalidAggregate, InvalidOrder, QueryError
from ..expressions import AggregateExpression
from ..model import Field
from .base import ConditionalQuery
from .conditions import COMPARISON_EQUAL, LOGICAL_AND, LOGICAL_OR

logger = logging.getLogger("relstore")

AGGREGATE_DISTINCT = "distinct"
AGGREGATE_COUNT = "count"
AGGREGATE_AVERAGE = "average"
AGGREGATE_MAX = "max"
AGGREGATE_MIN = "min"
AGGREGATE_SUM = "sum"

AGGREGATES: dict[str, str] = {
    AGGREGATE_DISTINCT: "DISTINCT",
    AGGREGATE_COUNT: "COUNT",
    AGGREGATE_AVERAGE: "AVG",
    AGGREGATE_MAX: "MAX",
    AGGREGATE_MIN: "MIN",
    AGGREGATE_SUM: "SUM",
}
"""Aggregate method -> SQL function."""

ORDER_ASC = "asc"
ORDER_DESC = "desc"


class ReadQuery(ConditionalQuery):
    """Fluent SELECT on one model; ``execute()`` returns hydrated entities.

    Example:
        >>> storage.read("Article").where("title", "%python%", "like").order("id", "asc").limit(10).with_("comments").execute()
    """

    def _setup(self) -> None:
        self.fields()

    # selection

    def _select_field(self, field: Field) -> None:
        column = self.column(field.mapped_name)
        if field.mapping:
            self.statement.add_select(column.as_(self.column(field.name)))
        else:
            self.statement.add_select(column)
        self._context.casts[field.name] = field.type

    def fields(self, fields: Iterable[str] = ()) -> ReadQuery:
        """Replace the selection with the given fields (all model fields when empty)."""
        names = list(fields) or list(self.model.fields)
        resolved = [self.model.field(name) for name in names]
        self.statement.select()
        self._context.casts = {}
        for field in resolved:
            self._select_field(field)
        return self

    def field(self, name: str) -> ReadQuery:
        """Add one field to the selection."""
        self._select_field(self.model.field(name))
        return self

    def aggregate(self, method: str, field: str, alias: Optional[str] = None) -> ReadQuery:
        """Add ``METHOD(field) AS alias`` to the selection; alias defaults to the method name."""
        method = str(method).lower()
        if method not in AGGREGATES:
            raise InvalidAggregate(
                f"Invalid aggregation method {method!r} in query {self.model.entity}"
            )
        column = self.column(self.model.field(field).mapped_name)
        expression = AggregateExpression(function=AGGREGATES[method], argument=column)
        self.statement.add_select(expression.as_(self.column(alias or method)))
        return self

    def distinct(self, field: str, alias: Optional[str] = None) -> ReadQuery:
        return self.aggregate(AGGREGATE_DISTINCT, field, alias)

    def count(self, field: str, alias: Optional[str] = None) -> ReadQuery:
        return self.aggregate(AGGREGATE_COUNT, field, alias)

    def average(self, field: str, alias: Optional[str] = None) -> ReadQuery:
        return self.aggregate(AGGREGATE_AVERAGE, field, alias)

    def max(self, field: str, alias: Optional[str] = None) -> ReadQuery:
        return self.aggregate(AGGREGATE_MAX, field, alias)

    def min(self, field: str, alias: Optional[str] = None) -> ReadQuery:
        return self.aggregate(AGGREGATE_MIN, field, alias)

    def sum(self, field: str, alias: Optional[str] = None) -> ReadQuery:
        return self.aggregate(AGGREGATE_SUM, field, alias)

    # clauses

    def group(self, field: str) -> ReadQuery:
        self.statement.add_group_by(self.column(self.model.field(field).mapped_name))
        return self

    def having(self, field, value, comparison: str = COMPARISON_EQUAL, logical: str = LOGICAL_AND) -> ReadQuery:
        """Add a HAVING condition, built like ``where``."""
        condition = self.conditions.condition(field, value, comparison, logical)
        if str(logical).lower() == LOGICAL_OR:
            self.statement.or_having(condition)
        else:
            self.statement.and_having(condition)
        return self

    def order(self, field: str, order: str = ORDER_DESC) -> ReadQuery:
        """Add an ORDER BY on field; order is ``asc`` or ``desc``."""
        column = self.column(self.model.field(field).mapped_name)
        order = str(order).lower()
        if order not in (ORDER_ASC, ORDER_DESC):
            raise InvalidOrder(f"Unsupported sorting method {order!r} in query {self.model.entity}")
        self.statement.add_order_by(column.desc if order == ORDER_DESC else column.asc)
        return self

    def limit(self, limit: int, offset: Optional[int] = None) -> ReadQuery:
        if offset:
            self.statement.set_first_result(int(offset))
        self.statement.set_max_results(int(limit))
        return self

    # execution

    def clone(self) -> ReadQuery:
        """Independent copy of this query, build context included."""
        query = self.model_copy()
        query._context = self._context.clone()
        return query

    def _restore(self, row: dict[str, Any]) -> Any:
        casts = self._context.casts
        restored = {
            name: self.converter.restore(value, casts[name]) if name in casts else value
            for name, value in row.items()
        }
        return self.accessor.hydrate(self.model.entity_class, restored)

    def execute(self) -> list[Any]:
        """Fetch matching rows as entities, then resolve attached relations in order."""
        rows = self.connection.execute(self.sql, self.binds).rows
        result = [self._restore(row) for row in rows]
        logger.debug("Read %d %s entities", len(result), self.model.entity)
        for relation in self._context.relations.values():
            result = relation.read(result)
        return result


class ReadOneQuery(ReadQuery):
    """ReadQuery limited to one row; ``execute()`` returns that entity."""

    def _setup(self) -> None:
        super()._setup()
        self.statement.set_max_results(1)

    def execute(self) -> Any:
        result = super().execute()
        if not result:
            raise QueryError(f"Result out of range or does not exists for {self.model.entity}")
        return result[0]
