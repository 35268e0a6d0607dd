"""One-to-one relation through a mediator table."""

from typing import Any

from .base import Relation


class OneTroughRelation(Relation):
    """Single target reached through mediator rows; the last match wins."""

    def read(self, result: list[Any]) -> list[Any]:
        return self._read_through(
            result, lambda entity, target: self.accessor.set_property_value(entity, self.container, target)
        )

    def write(self, entity: Any) -> Any:
        if not self.accessor.has_property(entity, self.container):
            return entity
        target = self.accessor.get_property_value(entity, self.container)
        return self._write_through(entity, [] if target is None else [target])

    def delete(self, entity: Any) -> Any:
        target = self.accessor.get_property_value(entity, self.container, None)
        if target is None:
            return entity
        return self._delete_through(entity, [target])
