"""Storage: the entry point building queries for registered models."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from .connection import Connection, get_connection
from .converter import Converter
from .entity import Accessor
from .errors import QueryError
from .events import EventDispatcher
from .model import Model, ModelRegistry
from .query import DeleteQuery, InsertQuery, ReadOneQuery, ReadQuery, UpdateQuery
from .query.relations import RelationFactory

logger = logging.getLogger("relstore")


class Storage:
    """Builds read, write, insert, update and delete queries for registered models.

    The entity argument of every operation may be an entity name, a table
    name, an entity class or an entity instance; write, insert, update and
    delete also accept the instance alone (``storage.write(instance)``).

    Example:
        >>> storage = Storage(models, connection="default")
        >>> article = storage.read_one("Article").where("id", 1).with_("tags").execute()
        >>> article["tags"].append(tag)
        >>> storage.write("Article", article).with_("tags").execute()
    """

    def __init__(
        self,
        models: ModelRegistry | Iterable[Model],
        connection: str | Connection = "default",
        converter: Optional[Converter] = None,
        accessor: Optional[Accessor] = None,
        dispatcher: Optional[EventDispatcher] = None,
    ):
        self.models = models if isinstance(models, ModelRegistry) else ModelRegistry(models)
        self.models.validate()
        self._connection = connection
        self.converter = converter or Converter()
        self.accessor = accessor or Accessor()
        self.dispatcher = dispatcher or EventDispatcher()
        self.factory = RelationFactory(self)

    @property
    def connection(self) -> Connection:
        if isinstance(self._connection, Connection):
            return self._connection
        return get_connection(self._connection)

    def _resolve(self, entity: Any, instance: Any) -> tuple[Model, Any]:
        if instance is None:
            if isinstance(entity, (str, type, Model)):
                raise QueryError(f"No instance given for entity {entity!r}")
            instance = entity
        return self.models.get(entity), instance

    def read(self, entity: Any) -> ReadQuery:
        return ReadQuery(storage=self, model=self.models.get(entity))

    def read_one(self, entity: Any) -> ReadOneQuery:
        return ReadOneQuery(storage=self, model=self.models.get(entity))

    def write(self, entity: Any, instance: Any = None) -> InsertQuery | UpdateQuery:
        """Update when the instance's primary key is set and its row exists, insert otherwise."""
        model, instance = self._resolve(entity, instance)
        if self._exists(model, instance):
            return UpdateQuery(storage=self, model=model, instance=instance)
        return InsertQuery(storage=self, model=model, instance=instance)

    def insert(self, entity: Any, instance: Any = None) -> InsertQuery:
        model, instance = self._resolve(entity, instance)
        return InsertQuery(storage=self, model=model, instance=instance)

    def update(self, entity: Any, instance: Any = None) -> UpdateQuery:
        model, instance = self._resolve(entity, instance)
        return UpdateQuery(storage=self, model=model, instance=instance)

    def delete(self, entity: Any, instance: Any = None) -> DeleteQuery:
        model, instance = self._resolve(entity, instance)
        return DeleteQuery(storage=self, model=model, instance=instance)

    def _exists(self, model: Model, instance: Any) -> bool:
        primary_fields = model.primary_fields()
        if not primary_fields:
            return False
        query = ReadQuery(storage=self, model=model).fields([field.name for field in primary_fields])
        for field in primary_fields:
            value = self.accessor.get_property_value(instance, field.name, None)
            if value is None:
                return False
            query.where(field.name, value)
        exists = bool(query.limit(1).execute())
        logger.debug("%s instance %s", model.entity, "exists" if exists else "is new")
        return exists
