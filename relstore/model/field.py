"""Field metadata: one mapped column of an entity."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from ..errors import ConfigurationError

FIELD_ATTRIBUTES: dict[str, tuple[str, ...]] = {
    "boolean": ("null", "default", "comment"),
    "integer": ("length", "null", "autoincrement", "default", "comment"),
    "decimal": ("length", "precision", "null", "default", "comment"),
    "string": ("length", "null", "default", "comment"),
    "text": ("null", "comment"),
    "datetime": ("null", "default", "comment"),
    "serial": ("null", "comment"),
    "json": ("null", "comment"),
}
"""Attribute names accepted by each logical field type."""


class Field(BaseModel):
    """One entity property and the column storing it.

    Attributes may be given as a mapping or as a list of flag names
    (``["null", "autoincrement"]`` means both set to True).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = "string"
    mapping: Optional[str] = None
    attributes: dict[str, Any] = {}

    @field_validator("attributes", mode="before")
    @classmethod
    def _prepare_attributes(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, (list, tuple, set)):
            return {name: True for name in value}
        return value

    @model_validator(mode="after")
    def _verify(self) -> Field:
        if not self.name:
            raise ConfigurationError("Field name must be a non-empty string")
        if self.type not in FIELD_ATTRIBUTES:
            raise ConfigurationError(f"Unknown type {self.type!r} for field {self.name!r}")
        allowed = FIELD_ATTRIBUTES[self.type]
        for attribute in self.attributes:
            if attribute not in allowed:
                raise ConfigurationError(
                    f"Forbidden attribute {attribute!r} for {self.type} field {self.name!r}, "
                    f"allowed: {', '.join(allowed)}"
                )
        return self

    @property
    def mapped_name(self) -> str:
        """Storage column name."""
        return self.mapping or self.name

    def attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    @property
    def is_nullable(self) -> bool:
        return bool(self.attribute("null"))

    @property
    def is_autoincrement(self) -> bool:
        return bool(self.attribute("autoincrement"))

    @property
    def has_default(self) -> bool:
        return self.attribute("default") is not None

    @property
    def default(self) -> Any:
        return self.attribute("default")
