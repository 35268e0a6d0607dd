"""Index metadata: primary keys, unique and plain indexes, foreign keys."""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

from ..errors import ConfigurationError


class IndexKind(str, enum.Enum):
    PRIMARY = "primary"
    UNIQUE = "unique"
    INDEX = "index"
    FOREIGN = "foreign"


class Index(BaseModel):
    """Named set of fields; foreign indexes also map local to foreign columns."""

    model_config = ConfigDict(frozen=True)

    name: str
    fields: tuple[str, ...]
    kind: IndexKind = IndexKind.INDEX
    table: Optional[str] = None
    """Referenced table (foreign indexes only)."""
    references: dict[str, str] = {}
    """Local field -> referenced column (foreign indexes only)."""

    @model_validator(mode="after")
    def _verify(self) -> Index:
        if not self.fields:
            raise ConfigurationError(f"No fields in index {self.name!r}")
        if self.kind is IndexKind.FOREIGN:
            if not self.table:
                raise ConfigurationError(f"Foreign index {self.name!r} needs a referenced table")
            if set(self.references) != set(self.fields):
                raise ConfigurationError(
                    f"Foreign index {self.name!r} must reference a column for each of its fields"
                )
        return self

    @classmethod
    def primary(cls, fields: list[str], name: str = "primary") -> Index:
        return cls(name=name, fields=tuple(fields), kind=IndexKind.PRIMARY)

    @classmethod
    def unique(cls, name: str, fields: list[str]) -> Index:
        return cls(name=name, fields=tuple(fields), kind=IndexKind.UNIQUE)

    @classmethod
    def index(cls, name: str, fields: list[str]) -> Index:
        return cls(name=name, fields=tuple(fields), kind=IndexKind.INDEX)

    @classmethod
    def foreign(cls, name: str, fields: dict[str, str], table: str) -> Index:
        """Foreign key from local fields to columns of table (local -> foreign)."""
        return cls(
            name=name,
            fields=tuple(fields),
            kind=IndexKind.FOREIGN,
            table=table,
            references=dict(fields),
        )

    @property
    def is_primary(self) -> bool:
        return self.kind is IndexKind.PRIMARY

    @property
    def is_unique(self) -> bool:
        return self.kind in (IndexKind.PRIMARY, IndexKind.UNIQUE)

    def has_field(self, field: str) -> bool:
        return field in self.fields
