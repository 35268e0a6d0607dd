"""relstore: relational storage for plain entities, with relations resolved in memory."""

from .connection import Connection, connect, disconnect, get_connection
from .converter import Converter
from .entity import Accessor
from .errors import (
    ConfigurationError,
    EntityAccessError,
    InvalidAggregate,
    InvalidComparison,
    InvalidLogical,
    InvalidOrder,
    InvalidRelationArgument,
    QueryError,
    StorageError,
    UnknownEntity,
    UnknownField,
    UnknownIndex,
    UnknownRelation,
)
from .events import EventDispatcher
from .model import Field, Index, Model, ModelRegistry, RelationDefinition
from .storage import Storage

__all__ = [
    "Accessor",
    "Connection",
    "Converter",
    "EventDispatcher",
    "Field",
    "Index",
    "Model",
    "ModelRegistry",
    "RelationDefinition",
    "Storage",
    "connect",
    "disconnect",
    "get_connection",
    "StorageError",
    "ConfigurationError",
    "QueryError",
    "InvalidComparison",
    "InvalidLogical",
    "InvalidAggregate",
    "InvalidOrder",
    "InvalidRelationArgument",
    "UnknownField",
    "UnknownIndex",
    "UnknownRelation",
    "UnknownEntity",
    "EntityAccessError",
]
