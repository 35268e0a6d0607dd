"""Shared pipeline steps of the relation resolvers."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Iterable, Optional

from pydantic import BaseModel

from ...model import Model, RelationDefinition

logger = logging.getLogger("relstore")

Key = tuple[str, ...]


class Relation(BaseModel):
    """Resolver bound to one relation definition.

    ``query`` is a read query on the target entity; conditions, order and nested
    relations attached to it apply to every fetch of targets. Resolvers keep no
    state between ``read``, ``write`` and ``delete`` calls.
    """

    model_config = {"arbitrary_types_allowed": True}

    storage: Any
    owner: Model
    """Model of the entities this resolver is attached to."""
    definition: RelationDefinition
    query: Any

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def container(self) -> str:
        return self.definition.container

    @property
    def accessor(self):
        return self.storage.accessor

    def with_(self, path: str, conditions=(), order=()) -> Relation:
        """Attach a nested relation to the target query."""
        self.query.with_(path, conditions, order)
        return self

    def relation(self, path: str) -> Relation:
        return self.query.relation(path)

    def read(self, result: list[Any]) -> list[Any]:
        raise NotImplementedError("Subclasses must implement `read`")

    def write(self, entity: Any) -> Any:
        raise NotImplementedError("Subclasses must implement `write`")

    def delete(self, entity: Any) -> Any:
        raise NotImplementedError("Subclasses must implement `delete`")

    # keys

    def _build_key(self, entity: Any, fields: Iterable[str]) -> Optional[Key]:
        """Composite key of entity over fields; None when any value is None."""
        values = [self.accessor.get_property_value(entity, name, None) for name in fields]
        if any(value is None for value in values):
            return None
        return tuple(str(value) for value in values)

    def _collect(self, entities: Iterable[Any], fields: dict[str, str]) -> dict[str, list]:
        """Distinct values of each source field, keyed by the field they are matched against."""
        conditions: dict[str, list] = {target: [] for target in fields.values()}
        for entity in entities:
            values = [self.accessor.get_property_value(entity, name, None) for name in fields]
            if any(value is None for value in values):
                continue
            for target, value in zip(fields.values(), values):
                if value not in conditions[target]:
                    conditions[target].append(value)
        return conditions

    def _values(self, entity: Any, fields: dict[str, str]) -> Optional[dict[str, Any]]:
        """Entity values of the source fields keyed by target field; None when any is None."""
        values = {
            target: self.accessor.get_property_value(entity, source, None)
            for source, target in fields.items()
        }
        if any(value is None for value in values.values()):
            return None
        return values

    def _identity_fields(self, entity: str) -> list[str]:
        model = self.storage.models.get(entity)
        fields = model.primary_fields() or list(model.fields.values())
        return [field.name for field in fields]

    # fetching

    def _fetch(self, entity: str, conditions: dict[str, list], use_query: bool) -> list[Any]:
        """Rows of entity matching every field's value list; no query when a list is empty."""
        if not conditions or any(not values for values in conditions.values()):
            return []
        query = self.query.clone() if use_query else self.storage.read(entity)
        for field, values in conditions.items():
            query.where(field, values)
        result = query.execute()
        logger.debug("Relation %s fetched %d %s rows", self.name, len(result), entity)
        return result

    def _read_direct(self, result: list[Any], attach: Callable[[Any, Any], None]) -> list[Any]:
        keys = self.definition.keys
        targets = self._fetch(self.definition.entity, self._collect(result, keys), True)
        index: dict[Key, list] = defaultdict(list)
        for target in targets:
            key = self._build_key(target, keys.values())
            if key is not None:
                index[key].append(target)
        for entity in result:
            key = self._build_key(entity, keys)
            if key is None:
                continue
            for target in index.get(key, ()):
                attach(entity, target)
        return result

    def _read_through(self, result: list[Any], attach: Callable[[Any, Any], None]) -> list[Any]:
        in_keys = self.definition.keys
        out_keys = self.definition.through_keys

        roots: dict[Key, list] = defaultdict(list)
        for entity in result:
            key = self._build_key(entity, in_keys)
            if key is not None:
                roots[key].append(entity)

        mediators = self._fetch(self.definition.mediator, self._collect(result, in_keys), False)
        links: dict[Key, list[Key]] = defaultdict(list)
        for row in mediators:
            in_key = self._build_key(row, in_keys.values())
            out_key = self._build_key(row, out_keys)
            if in_key is not None and out_key is not None:
                links[out_key].append(in_key)

        targets = self._fetch(self.definition.entity, self._collect(mediators, out_keys), True)
        for target in targets:
            for in_key in links.get(self._build_key(target, out_keys.values()), ()):
                for entity in roots.get(in_key, ()):
                    attach(entity, target)
        return result

    # cascading

    def _write_target(self, target: Any) -> None:
        """Write a target entity, cascading into relations nested under this one."""
        query = self.storage.write(self.definition.entity, target)
        for relation in self.query.relations.values():
            query.attach(relation)
        query.execute()

    def _delete_target(self, target: Any) -> None:
        query = self.storage.delete(self.definition.entity, target)
        for relation in self.query.relations.values():
            query.attach(relation)
        query.execute()

    def _copy_keys(self, entity: Any, target: Any) -> None:
        for local, foreign in self.definition.keys.items():
            self.accessor.set_property_value(
                target, foreign, self.accessor.get_property_value(entity, local, None)
            )

    def _cleanup(self, entity: str, collection: list[Any], conditions: dict[str, Any], identity: list[str]) -> None:
        """Delete rows of entity matching conditions whose identity is not in collection."""
        query = self.storage.read(entity)
        for field, value in conditions.items():
            query.where(field, value)
        keep = {self._build_key(item, identity) for item in collection}
        for row in query.execute():
            if self._build_key(row, identity) not in keep:
                self.storage.delete(entity, row).execute()

    def _mediator_rows(self, entity: Any, targets: list[Any]) -> tuple[Optional[dict], list[dict]]:
        """Root's mediator key values and one mediator row per target."""
        root = self._values(entity, self.definition.keys)
        if root is None:
            return None, []
        rows = []
        for target in targets:
            row = dict(root)
            for out, foreign in self.definition.through_keys.items():
                row[out] = self.accessor.get_property_value(target, foreign, None)
            rows.append(row)
        return root, rows

    def _write_through(self, entity: Any, targets: list[Any]) -> Any:
        """Write targets and the mediator rows linking them to entity, dropping stale links."""
        mediator = self.definition.mediator
        for target in targets:
            self._write_target(target)
        root, rows = self._mediator_rows(entity, targets)
        if root is None:
            return entity

        identity = list(self.definition.keys.values()) + list(self.definition.through_keys)
        query = self.storage.read(mediator)
        for field, value in root.items():
            query.where(field, value)
        existing = query.execute()
        persisted = {self._build_key(row, identity) for row in existing}

        mediator_class = self.storage.models.get(mediator).entity_class
        for row in rows:
            key = self._build_key(row, identity)
            if key in persisted:
                continue
            self.storage.insert(mediator, self.accessor.hydrate(mediator_class, row)).execute()
            persisted.add(key)

        written = {self._build_key(row, identity) for row in rows}
        for row in existing:
            if self._build_key(row, identity) not in written:
                self.storage.delete(mediator, row).execute()
        return entity

    def _delete_through(self, entity: Any, targets: list[Any]) -> Any:
        """Delete the mediator rows linking entity to targets; targets are kept."""
        root, rows = self._mediator_rows(entity, targets)
        if root is None or not rows:
            return entity
        identity = list(self.definition.keys.values()) + list(self.definition.through_keys)
        doomed = {self._build_key(row, identity) for row in rows}
        query = self.storage.read(self.definition.mediator)
        for field, value in root.items():
            query.where(field, value)
        for row in query.execute():
            if self._build_key(row, identity) in doomed:
                self.storage.delete(self.definition.mediator, row).execute()
        return entity
