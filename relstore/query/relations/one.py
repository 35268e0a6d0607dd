"""Direct one-to-one relation."""

from typing import Any

from .base import Relation


class OneRelation(Relation):
    """Target rows whose foreign fields equal the root's local fields; one per root."""

    def read(self, result: list[Any]) -> list[Any]:
        return self._read_direct(
            result, lambda entity, target: self.accessor.set_property_value(entity, self.container, target)
        )

    def _refers_to_target_key(self) -> bool:
        """True when the foreign fields are the target's primary key (the root holds the reference)."""
        primary = {field.name for field in self.storage.models.get(self.definition.entity).primary_fields()}
        return bool(primary) and set(self.definition.keys.values()) <= primary

    def write(self, entity: Any) -> Any:
        """Write the contained target and keep both sides of the key in step.

        When the root refers to the target's primary key, the target is written
        first and its key is copied back into the root, which is updated if the
        reference changed. Otherwise the root's key is copied into the target.
        """
        target = self.accessor.get_property_value(entity, self.container, None)
        if target is None:
            return entity
        if not self._refers_to_target_key():
            self._copy_keys(entity, target)
            self._write_target(target)
            return entity

        self._write_target(target)
        changed = False
        for local, foreign in self.definition.keys.items():
            value = self.accessor.get_property_value(target, foreign, None)
            if self.accessor.get_property_value(entity, local, None) != value:
                self.accessor.set_property_value(entity, local, value)
                changed = True
        if changed:
            self.storage.update(self.owner, entity).execute()
        return entity

    def delete(self, entity: Any) -> Any:
        target = self.accessor.get_property_value(entity, self.container, None)
        if target is not None:
            self._delete_target(target)
        return entity
