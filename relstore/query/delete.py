"""Delete query: remove the row addressed by the instance's primary key."""

from __future__ import annotations

from typing import Any, ClassVar

from .base import ConditionalQuery, EntityQuery


class DeleteQuery(EntityQuery, ConditionalQuery):
    """DELETE scoped by the instance's primary key (all fields without a primary index).

    Attached relations are deleted before the row itself; afterwards the
    instance's key fields are cleared.
    """

    EVENT_BEFORE: ClassVar[str] = "delete.before"
    EVENT_AFTER: ClassVar[str] = "delete.after"

    def _setup(self) -> None:
        self.statement.delete()
        self._primary_conditions()

    def execute(self) -> Any:
        self.dispatcher.fire(self.EVENT_BEFORE, self.instance)
        for relation in self._declared_relations():
            relation.delete(self.instance)
        self.connection.execute(self.sql, self.binds)
        self.accessor.identify_entity(self.model, self.instance, None)
        self.dispatcher.fire(self.EVENT_AFTER, self.instance)
        return self.instance
