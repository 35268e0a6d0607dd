"""Model: the immutable schema metadata of one entity type."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from ..errors import ConfigurationError, UnknownField, UnknownIndex, UnknownRelation
from .field import Field
from .index import Index
from .relation import RelationDefinition


def _by_name(items: Any) -> Any:
    """Accept a list of definitions (or their dicts) and key them by name."""
    if not isinstance(items, (list, tuple)):
        return items
    result = {}
    for item in items:
        name = item.get("name") if isinstance(item, dict) else getattr(item, "name", None)
        if name is None and isinstance(item, dict) and "entity" in item:
            # relation without explicit name: validate first to get its default name
            item = RelationDefinition.model_validate(item)
            name = item.name
        if name in result:
            raise ConfigurationError(f"Duplicate definition {name!r}")
        result[name] = item
    return result


class Model(BaseModel):
    """Fields, indexes and relations of one entity, bound to one table.

    Fields, indexes and relations may be given as lists (keyed by their
    names) or as mappings. Every field used by an index or as a relation's
    local key must be defined, and at most one primary index may exist.

    Example:
        >>> Model(
        ...     entity="Article",
        ...     table="article",
        ...     fields=[Field(name="id", type="integer", attributes=["autoincrement"]),
        ...             Field(name="title")],
        ...     indexes=[Index.primary(["id"])],
        ... )
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    entity: str
    table: str
    entity_class: type = dict
    fields: dict[str, Field]
    indexes: dict[str, Index] = {}
    relations: dict[str, RelationDefinition] = {}

    @model_validator(mode="before")
    @classmethod
    def _prepare(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if not data.get("entity"):
            raise ConfigurationError("Model needs an entity name")
        if not data.get("table"):
            data["table"] = data["entity"].lower()
        for key in ("fields", "indexes", "relations"):
            if key in data:
                data[key] = _by_name(data[key])
        if not data.get("fields"):
            raise ConfigurationError(f"No fields in model {data['entity']!r}")
        return data

    @model_validator(mode="after")
    def _verify(self) -> Model:
        primary_indexes = [index for index in self.indexes.values() if index.is_primary]
        if len(primary_indexes) > 1:
            raise ConfigurationError(f"Model {self.entity!r} has more than one primary index")
        for index in self.indexes.values():
            for name in index.fields:
                self._assert_field(name)
        for relation in self.relations.values():
            for name in relation.local_keys:
                self._assert_field(name)
        return self

    def _assert_field(self, name: str) -> None:
        if name not in self.fields:
            raise ConfigurationError(
                f'Unknown field, field "{name}" not found in model "{self.entity}"'
            )

    # fields

    def has_field(self, name: str) -> bool:
        return name in self.fields

    def field(self, name: str) -> Field:
        try:
            return self.fields[name]
        except KeyError as error:
            raise UnknownField(f'Unknown field, field "{name}" not found in model "{self.entity}"') from error

    def primary_fields(self) -> list[Field]:
        """Fields of the primary index, in index order (empty without a primary index)."""
        for index in self.indexes.values():
            if index.is_primary:
                return [self.fields[name] for name in index.fields]
        return []

    def index_fields(self) -> list[Field]:
        """Fields present in any index, in declaration order, without duplicates."""
        names = {name for index in self.indexes.values() for name in index.fields}
        return [field for name, field in self.fields.items() if name in names]

    def referred_in(self, name: str) -> list[RelationDefinition]:
        """Relations using the field as a local key."""
        return [relation for relation in self.relations.values() if name in relation.local_keys]

    # indexes

    def has_index(self, name: str) -> bool:
        return name in self.indexes

    def index(self, name: str) -> Index:
        try:
            return self.indexes[name]
        except KeyError as error:
            raise UnknownIndex(f'Unknown index, index "{name}" not found in model "{self.entity}"') from error

    # relations

    def has_relations(self) -> bool:
        return bool(self.relations)

    def has_relation(self, name: str) -> bool:
        return name in self.relations

    def relation(self, name: str) -> RelationDefinition:
        try:
            return self.relations[name]
        except KeyError as error:
            raise UnknownRelation(
                f'Unknown relation, relation "{name}" not found in model "{self.entity}"'
            ) from error
