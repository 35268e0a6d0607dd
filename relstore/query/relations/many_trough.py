"""Many-to-many relation through a mediator table."""

from typing import Any

from .base import Relation


class ManyTroughRelation(Relation):
    """Targets reached through mediator rows, appended in fetch order."""

    def read(self, result: list[Any]) -> list[Any]:
        for entity in result:
            self.accessor.set_property_value(entity, self.container, [])
        return self._read_through(
            result, lambda entity, target: self.accessor.add_property_value(entity, self.container, target)
        )

    def write(self, entity: Any) -> Any:
        """Write targets and their mediator rows; an empty container unlinks every target."""
        if not self.accessor.has_property(entity, self.container):
            return entity
        targets = list(self.accessor.get_property_value(entity, self.container) or ())
        return self._write_through(entity, targets)

    def delete(self, entity: Any) -> Any:
        """Delete the mediator rows of contained targets; the targets survive."""
        targets = list(self.accessor.get_property_value(entity, self.container, None) or ())
        return self._delete_through(entity, targets)
