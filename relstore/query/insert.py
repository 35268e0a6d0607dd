"""Insert query: one row from one entity instance."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from ..model import Field
from .base import EntityQuery

logger = logging.getLogger("relstore")


class InsertQuery(EntityQuery):
    """INSERT of the instance's field values, then identification and relation writes."""

    EVENT_BEFORE: ClassVar[str] = "insert.before"
    EVENT_AFTER: ClassVar[str] = "insert.after"

    def _setup(self) -> None:
        self.statement.insert()
        for field in self.model.fields.values():
            self._assign_value(field)

    def _assign_value(self, field: Field) -> None:
        value = self.property_value(field)
        if value is None and field.is_autoincrement:
            return
        if value is None:
            value = self._value_from_referenced_entity(field)
        if value is None and field.has_default:
            value = field.default
        self.statement.set_value(self.column(field.mapped_name), self.bind("value", field, value))

    def _value_from_referenced_entity(self, field: Field) -> Any:
        """Key value of an entity held in a relation container using field as local key."""
        for relation in self.model.referred_in(field.name):
            if relation.kind.is_through:
                continue
            referenced = self.accessor.get_property_value(self.instance, relation.container, None)
            if referenced is None or isinstance(referenced, (list, tuple)):
                continue
            value = self.accessor.get_property_value(referenced, relation.keys[field.name], None)
            if value is not None:
                return value
        return None

    def _identify(self) -> None:
        primary_fields = self.model.primary_fields()
        if len(primary_fields) != 1:
            return
        if self.accessor.get_property_value(self.instance, primary_fields[0].name, None) is not None:
            return
        self.accessor.identify_entity(self.model, self.instance, self.connection.last_insert_id())

    def execute(self) -> Any:
        """Insert the row, identify the instance, write attached relations; return the instance."""
        self.dispatcher.fire(self.EVENT_BEFORE, self.instance)
        self.connection.execute(self.sql, self.binds)
        self._identify()
        logger.debug("Inserted %s", self.model.entity)
        self.dispatcher.fire(self.EVENT_AFTER, self.instance)
        for relation in self._declared_relations():
            relation.write(self.instance)
        return self.instance
