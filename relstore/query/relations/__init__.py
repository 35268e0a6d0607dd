"""Relation resolvers: one, many, oneTrough and manyTrough."""

from .base import Relation
from .one import OneRelation
from .many import ManyRelation
from .one_trough import OneTroughRelation
from .many_trough import ManyTroughRelation
from .factory import RelationFactory

__all__ = [
    "Relation",
    "OneRelation",
    "ManyRelation",
    "OneTroughRelation",
    "ManyTroughRelation",
    "RelationFactory",
]
