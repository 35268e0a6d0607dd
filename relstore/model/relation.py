"""Relation metadata: how rows of one entity link to rows of another."""

from __future__ import annotations

import enum
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from ..errors import ConfigurationError


class RelationKind(str, enum.Enum):
    ONE = "one"
    MANY = "many"
    ONE_TROUGH = "oneTrough"
    MANY_TROUGH = "manyTrough"

    @property
    def is_through(self) -> bool:
        return self in (RelationKind.ONE_TROUGH, RelationKind.MANY_TROUGH)


def _short_name(entity: str) -> str:
    """Last segment of a qualified entity name (``app.models.Tag`` -> ``Tag``)."""
    return re.split(r"[.\\]+", entity.strip(".\\"))[-1]


def _verify_keys(entity: str, keys: Any) -> None:
    if not isinstance(keys, dict) or not keys:
        raise ConfigurationError(
            f"Invalid keys for relation {entity!r}, must be a non-empty mapping of field names"
        )
    for local, foreign in keys.items():
        if not isinstance(local, str) or not local or not isinstance(foreign, str) or not foreign:
            raise ConfigurationError(
                f"Invalid field name for relation {entity!r}: {local!r} -> {foreign!r}"
            )


class RelationDefinition(BaseModel):
    """Declarative link from the owning entity to a target entity.

    For ``one`` and ``many``, ``keys`` maps local fields to target fields.
    For ``oneTrough`` and ``manyTrough``, ``keys`` maps local fields to the
    mediator's incoming fields and ``through_keys`` maps the mediator's
    outgoing fields to target fields.
    """

    model_config = ConfigDict(frozen=True)

    entity: str
    kind: RelationKind
    keys: dict[str, str]
    through_keys: dict[str, str] = {}
    mediator: Optional[str] = None
    name: str
    container: str

    @model_validator(mode="before")
    @classmethod
    def _apply_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        entity = data.get("entity")
        if not isinstance(entity, str) or not _short_name(entity):
            raise ConfigurationError(f"Invalid relation entity {entity!r}")
        data["entity"] = _short_name(entity)
        if not data.get("name"):
            data["name"] = data["entity"]
        if not data.get("container"):
            data["container"] = data["name"]
        return data

    @model_validator(mode="after")
    def _verify(self) -> RelationDefinition:
        _verify_keys(self.entity, self.keys)
        if not self.kind.is_through:
            return self
        if not self.mediator:
            raise ConfigurationError(f"Relation {self.entity!r} of kind {self.kind.value} needs a mediator")
        _verify_keys(self.entity, self.through_keys)
        if len(self.keys) != len(self.through_keys):
            raise ConfigurationError(
                f"Both key mappings for relation {self.entity!r} must have the same number of elements"
            )
        return self

    @classmethod
    def one(cls, entity: str, keys: dict[str, str], name: str = None, container: str = None) -> RelationDefinition:
        return cls(entity=entity, kind=RelationKind.ONE, keys=keys, name=name, container=container)

    @classmethod
    def many(cls, entity: str, keys: dict[str, str], name: str = None, container: str = None) -> RelationDefinition:
        return cls(entity=entity, kind=RelationKind.MANY, keys=keys, name=name, container=container)

    @classmethod
    def one_trough(
        cls,
        entity: str,
        in_keys: dict[str, str],
        out_keys: dict[str, str],
        mediator: str,
        name: str = None,
        container: str = None,
    ) -> RelationDefinition:
        return cls(
            entity=entity,
            kind=RelationKind.ONE_TROUGH,
            keys=in_keys,
            through_keys=out_keys,
            mediator=mediator,
            name=name,
            container=container,
        )

    @classmethod
    def many_trough(
        cls,
        entity: str,
        in_keys: dict[str, str],
        out_keys: dict[str, str],
        mediator: str,
        name: str = None,
        container: str = None,
    ) -> RelationDefinition:
        return cls(
            entity=entity,
            kind=RelationKind.MANY_TROUGH,
            keys=in_keys,
            through_keys=out_keys,
            mediator=mediator,
            name=name,
            container=container,
        )

    @property
    def local_keys(self) -> dict[str, str]:
        """Local field -> target field (direct) or mediator incoming field (through)."""
        return self.keys

    @property
    def foreign_keys(self) -> dict[str, str]:
        """Mediator outgoing field -> target field (through); same as keys for direct kinds."""
        if self.kind.is_through:
            return self.through_keys
        return self.keys
