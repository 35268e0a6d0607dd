"""Query builders: read, insert, update and delete on one model."""

from .base import AbstractQuery, BuildContext, ConditionalQuery, EntityQuery
from .conditions import (
    COMPARISON_EQUAL,
    COMPARISON_GREATER,
    COMPARISON_GREATER_OR_EQUAL,
    COMPARISON_LESS,
    COMPARISON_LESS_OR_EQUAL,
    COMPARISON_LIKE,
    COMPARISON_NOT_EQUAL,
    COMPARISON_REGEXP,
    LOGICAL_AND,
    LOGICAL_OR,
    ConditionBuilder,
)
from .read import AGGREGATES, ORDER_ASC, ORDER_DESC, ReadOneQuery, ReadQuery
from .insert import InsertQuery
from .update import UpdateQuery
from .delete import DeleteQuery

__all__ = [
    "AbstractQuery",
    "BuildContext",
    "ConditionalQuery",
    "EntityQuery",
    "ConditionBuilder",
    "COMPARISON_EQUAL",
    "COMPARISON_NOT_EQUAL",
    "COMPARISON_LESS",
    "COMPARISON_LESS_OR_EQUAL",
    "COMPARISON_GREATER",
    "COMPARISON_GREATER_OR_EQUAL",
    "COMPARISON_LIKE",
    "COMPARISON_REGEXP",
    "LOGICAL_AND",
    "LOGICAL_OR",
    "AGGREGATES",
    "ORDER_ASC",
    "ORDER_DESC",
    "ReadQuery",
    "ReadOneQuery",
    "InsertQuery",
    "UpdateQuery",
    "DeleteQuery",
]
