"""Update query: rewrite the row addressed by the instance's primary key."""

from __future__ import annotations

from typing import Any, ClassVar

from .base import ConditionalQuery, EntityQuery


class UpdateQuery(EntityQuery, ConditionalQuery):
    """UPDATE of every field present on the instance, scoped by its primary key."""

    EVENT_BEFORE: ClassVar[str] = "update.before"
    EVENT_AFTER: ClassVar[str] = "update.after"

    def _setup(self) -> None:
        self.statement.update()
        for field in self.model.fields.values():
            if not self.accessor.has_property(self.instance, field.name):
                # raises EntityAccessError for required fields
                self.property_value(field)
                continue
            value = self.accessor.get_property_value(self.instance, field.name)
            self.statement.set_value(self.column(field.mapped_name), self.bind("value", field, value))
        self._primary_conditions()

    def execute(self) -> Any:
        self.dispatcher.fire(self.EVENT_BEFORE, self.instance)
        self.connection.execute(self.sql, self.binds)
        self.dispatcher.fire(self.EVENT_AFTER, self.instance)
        for relation in self._declared_relations():
            relation.write(self.instance)
        return self.instance
