"""Statement builder: the SQL text primitive under every query.

A StatementBuilder targets one table and one verb (SELECT, INSERT, UPDATE or
DELETE). It collects expression trees for each clause, hands out named
parameter placeholders and renders the final SQL text. It knows nothing about
models or entities; that is the job of the queries in ``relstore.query``.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from .dialects import Dialect
from .expressions import (
    ColumnExpression,
    Expression,
    NaryOperatorExpression,
    OrderExpression,
    ParameterExpression,
)

SELECT = "SELECT"
INSERT = "INSERT"
UPDATE = "UPDATE"
DELETE = "DELETE"


def _combine(current: Optional[Expression], condition: Expression, symbol: str) -> Expression:
    """Append condition to current with symbol, flattening same-symbol chains."""
    if current is None:
        return condition
    if isinstance(current, NaryOperatorExpression) and current.symbol == symbol and current.parenthesized:
        return NaryOperatorExpression(symbol=symbol, arguments=current.arguments + (condition,))
    return NaryOperatorExpression(symbol=symbol, arguments=(current, condition))


class StatementBuilder(BaseModel):
    """Mutable builder for one SQL statement against one table."""

    model_config = {"arbitrary_types_allowed": True}

    table: str
    dialect: Dialect
    verb: Optional[str] = None
    select_expressions: list[Expression] = Field(default_factory=list)
    assignments: list[tuple[Expression, Expression]] = Field(default_factory=list)
    """(column, value) pairs for INSERT and UPDATE."""
    where_expression: Optional[Expression] = None
    group_by_expressions: list[Expression] = Field(default_factory=list)
    having_expression: Optional[Expression] = None
    order_by_expressions: list[OrderExpression] = Field(default_factory=list)
    limit_value: Optional[int] = None
    offset_value: Optional[int] = None
    parameters: dict[str, Any] = Field(default_factory=dict)
    """Bound values keyed by placeholder name (without the leading colon)."""

    # verbs

    def select(self, *expressions: Expression) -> StatementBuilder:
        """Turn this into a SELECT and replace the select list."""
        self.verb = SELECT
        self.select_expressions = list(expressions)
        return self

    def add_select(self, *expressions: Expression) -> StatementBuilder:
        self.select_expressions.extend(expressions)
        return self

    def insert(self) -> StatementBuilder:
        self.verb = INSERT
        return self

    def update(self) -> StatementBuilder:
        self.verb = UPDATE
        return self

    def delete(self) -> StatementBuilder:
        self.verb = DELETE
        return self

    # identifiers and parameters

    def column(self, name: str) -> ColumnExpression:
        """Return a quoted identifier expression for name."""
        return ColumnExpression(name=name, dialect=self.dialect)

    def create_named_parameter(self, value: Any, key: str) -> ParameterExpression:
        """Bind value under key and return its placeholder."""
        self.parameters[key] = value
        return ParameterExpression(key=key)

    def get_parameters(self) -> dict[str, Any]:
        """Currently bound parameters (placeholder name -> value)."""
        return dict(self.parameters)

    def set_parameters(self, parameters: dict[str, Any]) -> StatementBuilder:
        self.parameters = dict(parameters)
        return self

    # clauses

    def set_value(self, column: Expression, value: Expression) -> StatementBuilder:
        self.assignments.append((column, value))
        return self

    def and_where(self, condition: Expression) -> StatementBuilder:
        self.where_expression = _combine(self.where_expression, condition, "AND")
        return self

    def or_where(self, condition: Expression) -> StatementBuilder:
        self.where_expression = _combine(self.where_expression, condition, "OR")
        return self

    def add_group_by(self, expression: Expression) -> StatementBuilder:
        self.group_by_expressions.append(expression)
        return self

    def and_having(self, condition: Expression) -> StatementBuilder:
        self.having_expression = _combine(self.having_expression, condition, "AND")
        return self

    def or_having(self, condition: Expression) -> StatementBuilder:
        self.having_expression = _combine(self.having_expression, condition, "OR")
        return self

    def add_order_by(self, order: OrderExpression) -> StatementBuilder:
        self.order_by_expressions.append(order)
        return self

    def set_max_results(self, limit: Optional[int]) -> StatementBuilder:
        self.limit_value = limit
        return self

    def set_first_result(self, offset: Optional[int]) -> StatementBuilder:
        self.offset_value = offset
        return self

    # --- SQL-generating methods (sql_*) ---

    @property
    def sql_table(self) -> str:
        return self.dialect.quote_identifier(self.table)

    @property
    def sql_where(self) -> str:
        """WHERE clause (with leading space) or empty string if no conditions."""
        if self.where_expression is None:
            return ""
        return " WHERE " + self.where_expression.sql

    def _sql_select(self) -> str:
        sql = "SELECT " + ", ".join(e.sql for e in self.select_expressions)
        sql += " FROM " + self.sql_table
        sql += self.sql_where
        if self.group_by_expressions:
            sql += " GROUP BY " + ", ".join(e.sql for e in self.group_by_expressions)
        if self.having_expression is not None:
            sql += " HAVING " + self.having_expression.sql
        if self.order_by_expressions:
            sql += " ORDER BY " + ", ".join(o.sql for o in self.order_by_expressions)
        if self.limit_value is not None:
            sql += " LIMIT " + str(int(self.limit_value))
        if self.offset_value is not None:
            sql += " OFFSET " + str(int(self.offset_value))
        return sql

    def _sql_insert(self) -> str:
        if not self.assignments:
            return f"INSERT INTO {self.sql_table} {type(self.dialect).INSERT_DEFAULT_VALUES}"
        columns = ", ".join(column.sql for column, _ in self.assignments)
        values = ", ".join(value.sql for _, value in self.assignments)
        return f"INSERT INTO {self.sql_table} ({columns}) VALUES ({values})"

    def _sql_update(self) -> str:
        if not self.assignments:
            raise ValueError(f"UPDATE on {self.table} has no assignments")
        assignments = ", ".join(f"{column.sql} = {value.sql}" for column, value in self.assignments)
        return f"UPDATE {self.sql_table} SET {assignments}{self.sql_where}"

    def _sql_delete(self) -> str:
        return f"DELETE FROM {self.sql_table}{self.sql_where}"

    @property
    def sql(self) -> str:
        """Return the compiled SQL string for this statement."""
        if self.verb == SELECT:
            return self._sql_select()
        if self.verb == INSERT:
            return self._sql_insert()
        if self.verb == UPDATE:
            return self._sql_update()
        if self.verb == DELETE:
            return self._sql_delete()
        raise ValueError(f"Statement on {self.table} has no verb")


__all__ = ["StatementBuilder", "SELECT", "INSERT", "UPDATE", "DELETE"]
