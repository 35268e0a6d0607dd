"""Schema metadata: fields, indexes, relations and the models holding them."""

from .field import Field, FIELD_ATTRIBUTES
from .index import Index, IndexKind
from .relation import RelationDefinition, RelationKind
from .model import Model
from .registry import ModelRegistry

__all__ = [
    "Field",
    "FIELD_ATTRIBUTES",
    "Index",
    "IndexKind",
    "RelationDefinition",
    "RelationKind",
    "Model",
    "ModelRegistry",
]
