"""Entity property access and hydration.

Entities may be plain mappings (``dict`` rows) or objects (pydantic models,
dataclasses, plain classes). Queries and relations never inspect entity types
themselves: they go through an :class:`Accessor`, which resolves one
:class:`PropertyAccess` per entity type and caches it.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, MutableMapping
from typing import Any, Callable

from pydantic import BaseModel

from .errors import EntityAccessError

MISSING = object()
"""Sentinel for get_property_value: no default given."""


class PropertyAccess(ABC):
    """Get/set capability for one family of entity representations."""

    @abstractmethod
    def has(self, entity: Any, name: str) -> bool: ...

    @abstractmethod
    def get(self, entity: Any, name: str) -> Any: ...

    @abstractmethod
    def set(self, entity: Any, name: str, value: Any) -> None: ...


class MappingAccess(PropertyAccess):
    """Access for dict-like entities."""

    def has(self, entity, name):
        return name in entity

    def get(self, entity, name):
        return entity[name]

    def set(self, entity, name, value):
        entity[name] = value


class AttributeAccess(PropertyAccess):
    """Access for object entities through their attributes."""

    def has(self, entity, name):
        return hasattr(entity, name)

    def get(self, entity, name):
        try:
            return getattr(entity, name)
        except AttributeError as error:
            raise EntityAccessError(f"Unable to read {name} from {type(entity).__name__}") from error

    def set(self, entity, name, value):
        try:
            setattr(entity, name, value)
        except (AttributeError, ValueError, TypeError) as error:
            raise EntityAccessError(f"Unable to write {name} to {type(entity).__name__}") from error


_MAPPING_ACCESS = MappingAccess()
_ATTRIBUTE_ACCESS = AttributeAccess()


def _hydrate_mapping(entity_class: type) -> Callable[[dict], Any]:
    return lambda row: entity_class(row)


def _hydrate_pydantic(entity_class: type[BaseModel]) -> Callable[[dict], Any]:
    # rows are already restored by the converter, skip validation
    return lambda row: entity_class.model_construct(**row)


def _hydrate_object(entity_class: type) -> Callable[[dict], Any]:
    def hydrate(row: dict) -> Any:
        instance = entity_class.__new__(entity_class)
        instance.__dict__.update(row)
        return instance
    return hydrate


class Accessor:
    """Reads, writes and creates entities, whatever their representation."""

    def __init__(self):
        self._access: dict[type, PropertyAccess] = {}
        self._hydrators: dict[type, Callable[[dict], Any]] = {}

    def access(self, entity: Any) -> PropertyAccess:
        """PropertyAccess for the entity's type, resolved once per type."""
        entity_type = type(entity)
        if entity_type not in self._access:
            if isinstance(entity, (Mapping, MutableMapping)):
                self._access[entity_type] = _MAPPING_ACCESS
            else:
                self._access[entity_type] = _ATTRIBUTE_ACCESS
        return self._access[entity_type]

    def has_property(self, entity: Any, name: str) -> bool:
        return self.access(entity).has(entity, name)

    def get_property_value(self, entity: Any, name: str, default: Any = MISSING) -> Any:
        """Read a property; without a default, a missing property raises EntityAccessError."""
        access = self.access(entity)
        if not access.has(entity, name):
            if default is MISSING:
                raise EntityAccessError(f"Entity {type(entity).__name__} has no property {name}")
            return default
        return access.get(entity, name)

    def set_property_value(self, entity: Any, name: str, value: Any) -> None:
        self.access(entity).set(entity, name, value)

    def add_property_value(self, entity: Any, name: str, value: Any) -> None:
        """Append value to the list held in the property, creating the list if needed."""
        current = self.get_property_value(entity, name, None)
        if current is None:
            current = []
        elif not isinstance(current, list):
            current = list(current)
        current.append(value)
        self.set_property_value(entity, name, current)

    def identify_entity(self, model: Any, entity: Any, identifier: Any) -> None:
        """Assign a generated key after insert, or clear key fields when identifier is None."""
        primary_fields = model.primary_fields()
        if identifier is None:
            for field in primary_fields:
                self.set_property_value(entity, field.name, None)
            return
        if len(primary_fields) == 1:
            self.set_property_value(entity, primary_fields[0].name, identifier)

    def register(self, entity_class: type, hydrator: Callable[[dict], Any]) -> None:
        """Declare how rows become instances of entity_class."""
        self._hydrators[entity_class] = hydrator

    def hydrate(self, entity_class: type, row: dict) -> Any:
        """Build an entity of entity_class from a restored row (field name -> value)."""
        if entity_class not in self._hydrators:
            if issubclass(entity_class, Mapping):
                hydrator = _hydrate_mapping(entity_class)
            elif issubclass(entity_class, BaseModel):
                hydrator = _hydrate_pydantic(entity_class)
            else:
                hydrator = _hydrate_object(entity_class)
            self.register(entity_class, hydrator)
        return self._hydrators[entity_class](row)


__all__ = ["Accessor", "PropertyAccess", "MappingAccess", "AttributeAccess", "MISSING"]
