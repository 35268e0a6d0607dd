"""Exception hierarchy for relstore.

ConfigurationError is raised while models are loaded and is never recovered.
QueryError (and its subclasses) is raised while queries are being built or
executed and always surfaces to the caller.
"""


class StorageError(Exception):
    """Base class for every error raised by relstore."""


class ConfigurationError(StorageError):
    """Malformed model, field, index or relation definition."""


class QueryError(StorageError):
    """Invalid query construction or execution request."""


class InvalidComparison(QueryError):
    """Unsupported comparison operator."""


class InvalidLogical(QueryError):
    """Unsupported logical operator."""


class InvalidAggregate(QueryError):
    """Unsupported aggregate method."""


class InvalidOrder(QueryError):
    """Unsupported sorting direction."""


class InvalidRelationArgument(QueryError):
    """Relation condition or order descriptor is not a well-formed tuple."""


class UnknownField(QueryError):
    """Field is not defined in the model."""


class UnknownIndex(QueryError):
    """Index is not defined in the model."""


class UnknownRelation(QueryError):
    """Relation is not defined in the model (or not attached to the query)."""


class UnknownEntity(QueryError):
    """No model is registered for the requested entity."""


class EntityAccessError(QueryError):
    """Property cannot be read from or written to an entity."""


__all__ = [
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
