"""Shared machinery of the read, insert, update and delete queries."""

from __future__ import annotations

import re
from typing import Any, Optional

from pydantic import BaseModel, Field as PydanticField, PrivateAttr

from ..errors import EntityAccessError, UnknownRelation
from ..expressions import ColumnExpression, ParameterExpression
from ..model import Field, Model
from ..statement import StatementBuilder
from .conditions import COMPARISON_EQUAL, LOGICAL_AND, LOGICAL_OR, ConditionBuilder

_UNSAFE_KEY_CHARACTERS = re.compile(r"\W")


class BuildContext(BaseModel):
    """Everything a query accumulates between two resets."""

    model_config = {"arbitrary_types_allowed": True}

    statement: StatementBuilder
    casts: dict[str, str] = PydanticField(default_factory=dict)
    """Selected field name -> logical type, for restoring fetched values."""
    relations: dict[str, Any] = PydanticField(default_factory=dict)
    """Attached relation resolvers by name, in attachment order."""

    def clone(self) -> BuildContext:
        return BuildContext(
            statement=self.statement.model_copy(deep=True),
            casts=dict(self.casts),
            relations=dict(self.relations),
        )


class AbstractQuery(BaseModel):
    """Base of every query: one model, one build context, one storage.

    The fluent methods mutate the current build context; ``reset()`` replaces
    it wholesale and rebuilds the baseline defined by ``_setup()``.
    """

    model_config = {"arbitrary_types_allowed": True}

    storage: Any
    """The Storage that created this query (connection, converter, accessor, dispatcher, factory)."""
    model: Model

    _context: BuildContext = PrivateAttr()

    def model_post_init(self, __context: Any) -> None:
        self.reset()

    # collaborators

    @property
    def connection(self):
        return self.storage.connection

    @property
    def dialect(self):
        return self.storage.connection.dialect

    @property
    def accessor(self):
        return self.storage.accessor

    @property
    def converter(self):
        return self.storage.converter

    @property
    def dispatcher(self):
        return self.storage.dispatcher

    @property
    def statement(self) -> StatementBuilder:
        return self._context.statement

    @property
    def conditions(self) -> ConditionBuilder:
        return ConditionBuilder(model=self.model, dialect=self.dialect, bind=self.bind)

    # build context

    def reset(self) -> AbstractQuery:
        """Drop everything accumulated and rebuild the initial state."""
        self._context = BuildContext(
            statement=StatementBuilder(table=self.model.table, dialect=self.dialect)
        )
        self._setup()
        return self

    def _setup(self) -> None:
        raise NotImplementedError("Subclasses must implement `_setup`")

    def column(self, name: str) -> ColumnExpression:
        return self.statement.column(name)

    def bind(self, operation: str, field: Field, value: Any, type_: Optional[str] = None) -> ParameterExpression:
        """Convert value for storage and bind it under a key unique in this build context."""
        key = f"{operation}_{len(self.statement.parameters)}_{field.mapped_name}"
        key = _UNSAFE_KEY_CHARACTERS.sub("_", key)
        return self.statement.create_named_parameter(
            self.converter.store(value, type_ or field.type), key
        )

    @property
    def sql(self) -> str:
        return self.statement.sql

    @property
    def binds(self) -> dict[str, Any]:
        """Bound values keyed by placeholder name."""
        return self.statement.get_parameters()

    # relations

    def with_(self, path: str, conditions=(), order=()) -> AbstractQuery:
        """Attach the relation at path (``"comments"``, ``"comments.author"``).

        Conditions and order always apply to the first segment. When it is
        already attached, they are added to that resolver and the rest of the
        path is attached under it.
        """
        factory = self.storage.factory
        name, remainder = factory.split_relation_name(path)
        if remainder and name in self._context.relations:
            relation = factory.configure(self._context.relations[name], conditions, order)
            relation.with_(remainder)
            return self
        relation = factory.create(self.model, path, conditions, order)
        self._context.relations[relation.name] = relation
        return self

    def attach(self, relation: Any) -> AbstractQuery:
        """Attach an already built relation resolver under its name."""
        self._context.relations[relation.name] = relation
        return self

    @property
    def relations(self) -> dict[str, Any]:
        return dict(self._context.relations)

    def relation(self, path: str) -> Any:
        """Attached resolver for path; nested names are looked up in child resolvers."""
        name, remainder = self.storage.factory.split_relation_name(path)
        if name not in self._context.relations:
            raise UnknownRelation(
                f'Unable to retrieve relation "{name}", relation is not attached to query on "{self.model.entity}"'
            )
        relation = self._context.relations[name]
        if remainder:
            return relation.relation(remainder)
        return relation

    def execute(self) -> Any:
        raise NotImplementedError("Subclasses must implement `execute`")


class ConditionalQuery(AbstractQuery):
    """Query with a WHERE clause."""

    def where(self, field, value, comparison: str = COMPARISON_EQUAL, logical: str = LOGICAL_AND) -> ConditionalQuery:
        """Add a condition (see ConditionBuilder.condition), combined by logical."""
        condition = self.conditions.condition(field, value, comparison, logical)
        if str(logical).lower() == LOGICAL_OR:
            self.statement.or_where(condition)
        else:
            self.statement.and_where(condition)
        return self


class EntityQuery(AbstractQuery):
    """Query bound to one entity instance (insert, update, delete)."""

    instance: Any

    def property_value(self, field: Field) -> Any:
        """Current value of field on the instance; optional fields may be absent."""
        if self.accessor.has_property(self.instance, field.name):
            return self.accessor.get_property_value(self.instance, field.name)
        if field.is_nullable or field.is_autoincrement or field.has_default:
            return None
        raise EntityAccessError(
            f"Entity {self.model.entity} has no value for required field {field.name}"
        )

    def _primary_conditions(self) -> None:
        """Scope the statement to the row addressed by the instance's key."""
        fields = self.model.primary_fields() or list(self.model.fields.values())
        for field in fields:
            value = self.accessor.get_property_value(self.instance, field.name)
            self.statement.and_where(
                self.conditions.condition(field.name, value, COMPARISON_EQUAL, LOGICAL_AND)
            )

    def _declared_relations(self) -> list[Any]:
        """Attached resolvers in the order their relations are declared in the model."""
        attached = self._context.relations
        declared = [attached[name] for name in self.model.relations if name in attached]
        return declared + [relation for name, relation in attached.items() if name not in self.model.relations]
