"""Relation factory: dotted relation paths to chains of resolvers."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from ...errors import InvalidRelationArgument
from ...model import Model, RelationKind
from ..conditions import COMPARISON_EQUAL, LOGICAL_AND
from ..read import ORDER_DESC
from .base import Relation
from .many import ManyRelation
from .many_trough import ManyTroughRelation
from .one import OneRelation
from .one_trough import OneTroughRelation

logger = logging.getLogger("relstore")

_RELATION_CLASSES: dict[RelationKind, type[Relation]] = {
    RelationKind.ONE: OneRelation,
    RelationKind.MANY: ManyRelation,
    RelationKind.ONE_TROUGH: OneTroughRelation,
    RelationKind.MANY_TROUGH: ManyTroughRelation,
}


def _condition(node: Any) -> tuple[Any, Any, str, str]:
    """(field, value[, comparison[, logical]]) with defaults applied."""
    if not isinstance(node, (list, tuple)) or not 2 <= len(node) <= 4:
        raise InvalidRelationArgument(
            f"Invalid condition, must be a (field, value[, comparison[, logical]]) tuple, got {node!r}"
        )
    return tuple(node) + (COMPARISON_EQUAL, LOGICAL_AND)[len(node) - 2:]


def _order(node: Any) -> tuple[str, str]:
    """(field[, order]) with the default order applied."""
    if not isinstance(node, (list, tuple)) or not 1 <= len(node) <= 2:
        raise InvalidRelationArgument(
            f"Invalid order, must be a (field[, order]) tuple, got {node!r}"
        )
    return tuple(node) + (ORDER_DESC,)[len(node) - 1:]


class RelationFactory:
    """Builds resolvers for the relations of models registered in one storage."""

    def __init__(self, storage: Any):
        self.storage = storage

    @staticmethod
    def split_relation_name(path: str) -> tuple[str, Optional[str]]:
        """``"a.b.c"`` -> ``("a", "b.c")``; ``"a"`` -> ``("a", None)``."""
        name, _, remainder = path.partition(".")
        return name, remainder or None

    def create(
        self,
        model: Model,
        path: str,
        conditions: Iterable[Any] = (),
        order: Iterable[Any] = (),
    ) -> Relation:
        """Resolver for the first segment of path, with the rest attached to it.

        Conditions and order apply to the first segment's query. Every segment
        is validated before anything is executed.

        Raises:
            UnknownRelation: if a segment is not a relation of its model.
            InvalidRelationArgument: if a condition or order is not a well-formed tuple.
        """
        name, remainder = self.split_relation_name(path)
        definition = model.relation(name)

        relation = _RELATION_CLASSES[definition.kind](
            storage=self.storage,
            owner=model,
            definition=definition,
            query=self.storage.read(definition.entity),
        )
        self.configure(relation, conditions, order)
        if remainder:
            relation.with_(remainder)
        logger.debug("Created %s relation %s on %s", definition.kind.value, name, model.entity)
        return relation

    @staticmethod
    def configure(relation: Relation, conditions: Iterable[Any] = (), order: Iterable[Any] = ()) -> Relation:
        """Apply condition and order tuples to the resolver's own query.

        Every tuple is validated before the first one is applied.
        """
        conditions = [_condition(node) for node in conditions]
        order = [_order(node) for node in order]
        for field, value, comparison, logical in conditions:
            relation.query.where(field, value, comparison, logical)
        for field, direction in order:
            relation.query.order(field, direction)
        return relation
