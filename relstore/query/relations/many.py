"""Direct one-to-many relation."""

from typing import Any

from .base import Relation


class ManyRelation(Relation):
    """Target rows whose foreign fields equal the root's local fields, in fetch order."""

    def read(self, result: list[Any]) -> list[Any]:
        for entity in result:
            self.accessor.set_property_value(entity, self.container, [])
        return self._read_direct(
            result, lambda entity, target: self.accessor.add_property_value(entity, self.container, target)
        )

    def write(self, entity: Any) -> Any:
        """Write contained targets, then delete persisted targets of entity no longer contained.

        An absent container leaves the relation untouched; an empty one deletes
        every target referencing entity.
        """
        if not self.accessor.has_property(entity, self.container):
            return entity
        targets = list(self.accessor.get_property_value(entity, self.container) or ())
        for target in targets:
            self._copy_keys(entity, target)
            self._write_target(target)
        conditions = self._values(entity, self.definition.keys)
        if conditions is not None:
            self._cleanup(
                self.definition.entity,
                targets,
                conditions,
                self._identity_fields(self.definition.entity),
            )
        return entity

    def delete(self, entity: Any) -> Any:
        for target in self.accessor.get_property_value(entity, self.container, None) or ():
            self._delete_target(target)
        return entity
