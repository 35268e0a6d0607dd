"""Registry of models, resolving entities given by name, table, class or instance."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable

from ..errors import ConfigurationError, UnknownEntity
from .model import Model

logger = logging.getLogger("relstore")


class ModelRegistry:
    """Models keyed by entity name, also reachable by table name and entity class."""

    def __init__(self, models: Iterable[Model] = ()):
        self._models: dict[str, Model] = {}
        for model in models:
            self.add(model)

    @classmethod
    def from_config(cls, config: Iterable[dict]) -> ModelRegistry:
        """Build a registry from static configuration (one dict per model)."""
        return cls(Model.model_validate(item) for item in config)

    def add(self, model: Model) -> ModelRegistry:
        if model.entity in self._models:
            raise ConfigurationError(f"Model for entity {model.entity!r} is already registered")
        self._models[model.entity] = model
        return self

    def __iter__(self):
        return iter(self._models.values())

    def __len__(self) -> int:
        return len(self._models)

    def has(self, entity: Any) -> bool:
        try:
            self.get(entity)
        except UnknownEntity:
            return False
        return True

    def get(self, entity: Any) -> Model:
        """Model for an entity name, table name, entity class or entity instance."""
        if isinstance(entity, Model):
            return entity
        if isinstance(entity, str):
            if entity in self._models:
                return self._models[entity]
            for model in self._models.values():
                if model.table == entity:
                    return model
            raise UnknownEntity(f"No model registered for entity {entity!r}")
        entity_class = entity if isinstance(entity, type) else type(entity)
        if entity_class is not dict and not issubclass(entity_class, Mapping):
            for model in self._models.values():
                if model.entity_class is entity_class:
                    return model
            for model in self._models.values():
                if model.entity_class is not dict and issubclass(entity_class, model.entity_class):
                    return model
        raise UnknownEntity(f"No model registered for entity {entity!r}")

    def validate(self) -> ModelRegistry:
        """Check every relation target and mediator is registered with the referenced fields."""
        for model in self._models.values():
            if not model.has_relations():
                continue
            for relation in model.relations.values():
                target = self._resolve(model, relation.entity)
                if relation.kind.is_through:
                    mediator = self._resolve(model, relation.mediator)
                    self._assert_fields(mediator, relation.keys.values(), model, relation.name)
                    self._assert_fields(mediator, relation.through_keys.keys(), model, relation.name)
                    self._assert_fields(target, relation.through_keys.values(), model, relation.name)
                else:
                    self._assert_fields(target, relation.keys.values(), model, relation.name)
        logger.debug("Validated %d models", len(self._models))
        return self

    def _resolve(self, model: Model, entity: str) -> Model:
        try:
            return self.get(entity)
        except UnknownEntity as error:
            raise ConfigurationError(
                f"Model {model.entity!r} refers to unregistered entity {entity!r}"
            ) from error

    @staticmethod
    def _assert_fields(target: Model, names: Iterable[str], model: Model, relation: str) -> None:
        for name in names:
            if not target.has_field(name):
                raise ConfigurationError(
                    f"Relation {relation!r} of model {model.entity!r} uses unknown field "
                    f"{name!r} of model {target.entity!r}"
                )
