"""Tests for relstore.model: Field, Index, RelationDefinition."""

import pytest

from relstore.errors import ConfigurationError
from relstore.model import Field, Index, IndexKind, RelationDefinition, RelationKind


class TestField:
    """Test field defaults, attributes and mapping."""

    def test_defaults(self):
        field = Field(name="title")
        assert field.type == "string"
        assert field.mapping is None
        assert field.mapped_name == "title"
        assert field.attributes == {}

    def test_mapped_name(self):
        field = Field(name="body", type="text", mapping="content")
        assert field.mapped_name == "content"

    def test_attribute_list_becomes_flags(self):
        field = Field(name="id", type="integer", attributes=["autoincrement", "null"])
        assert field.attributes == {"autoincrement": True, "null": True}
        assert field.is_autoincrement
        assert field.is_nullable

    def test_default_attribute(self):
        field = Field(name="count", type="integer", attributes={"default": 3})
        assert field.has_default
        assert field.default == 3
        assert field.attribute("length") is None

    def test_forbidden_attribute_raises(self):
        """Attributes not supported by the field type are a configuration error."""
        with pytest.raises(ConfigurationError, match="Forbidden attribute 'autoincrement'"):
            Field(name="title", attributes=["autoincrement"])

    def test_unknown_type_raises(self):
        with pytest.raises(ConfigurationError, match="Unknown type"):
            Field(name="title", type="blob")

    def test_frozen(self):
        field = Field(name="title")
        with pytest.raises(Exception):
            field.name = "other"


class TestIndex:
    """Test index kinds and validation."""

    def test_primary(self):
        index = Index.primary(["id"])
        assert index.name == "primary"
        assert index.kind is IndexKind.PRIMARY
        assert index.is_primary
        assert index.is_unique

    def test_unique_is_not_primary(self):
        index = Index.unique("uniq_name", ["name"])
        assert not index.is_primary
        assert index.is_unique

    def test_plain_index(self):
        index = Index.index("idx_name", ["name", "id"])
        assert not index.is_unique
        assert index.has_field("name")
        assert not index.has_field("title")

    def test_foreign(self):
        index = Index.foreign("fk", {"foo": "tfoo", "bar": "tbar"}, "table")
        assert index.kind is IndexKind.FOREIGN
        assert index.fields == ("foo", "bar")
        assert index.references == {"foo": "tfoo", "bar": "tbar"}
        assert index.table == "table"
        assert not index.is_primary
        assert not index.is_unique
        assert index.has_field("bar")

    def test_without_fields_raises(self):
        with pytest.raises(ConfigurationError, match="No fields in"):
            Index.index("idx", [])

    def test_foreign_without_fields_raises(self):
        with pytest.raises(ConfigurationError, match="No fields in"):
            Index.foreign("fk", {}, "table")


class TestRelationDefinition:
    """Test relation defaults and key validation."""

    @pytest.mark.parametrize("entity, expected", [
        ("Foo", "Foo"),
        ("app.models.Foo", "Foo"),
        ("\\Foo", "Foo"),
        ("\\Foo\\Bar", "Bar"),
    ])
    def test_default_name_and_container(self, entity, expected):
        relation = RelationDefinition.many_trough(entity, {"id": "in"}, {"out": "id"}, "mediator")
        assert relation.entity == expected
        assert relation.name == expected
        assert relation.container == expected

    def test_forced_name_and_container(self):
        relation = RelationDefinition.one("Foo", {"id": "foo_id"}, name="foo", container="the_foo")
        assert relation.name == "foo"
        assert relation.container == "the_foo"

    def test_container_defaults_to_name(self):
        relation = RelationDefinition.many("Comment", {"id": "article_id"}, name="comments")
        assert relation.container == "comments"

    def test_direct_keys(self):
        relation = RelationDefinition.one("Foo", {"id": "foo_id"})
        assert relation.kind is RelationKind.ONE
        assert not relation.kind.is_through
        assert relation.local_keys == {"id": "foo_id"}
        assert relation.foreign_keys == {"id": "foo_id"}

    def test_through_keys(self):
        relation = RelationDefinition.one_trough("Foo", {"id": "in"}, {"out": "id"}, "mediator")
        assert relation.kind is RelationKind.ONE_TROUGH
        assert relation.kind.is_through
        assert relation.local_keys == {"id": "in"}
        assert relation.foreign_keys == {"out": "id"}
        assert relation.mediator == "mediator"

    def test_kind_from_string(self):
        relation = RelationDefinition(entity="Foo", kind="manyTrough", keys={"id": "in"},
                                      through_keys={"out": "id"}, mediator="m")
        assert relation.kind is RelationKind.MANY_TROUGH

    @pytest.mark.parametrize("in_keys, out_keys", [
        ({}, {"out": "id"}),
        ({"id": "in"}, {}),
    ])
    def test_through_without_keys_raises(self, in_keys, out_keys):
        with pytest.raises(ConfigurationError, match="Invalid keys for relation"):
            RelationDefinition.many_trough("Foo", in_keys, out_keys, "mediator")

    def test_through_keys_with_different_arity_raises(self):
        with pytest.raises(ConfigurationError, match="same number of elements"):
            RelationDefinition.many_trough("Foo", {"id": "in"}, {"foo": "foo", "bar": "bar"}, "mediator")

    def test_through_without_mediator_raises(self):
        with pytest.raises(ConfigurationError, match="needs a mediator"):
            RelationDefinition(entity="Foo", kind="oneTrough", keys={"id": "in"}, through_keys={"out": "id"})

    @pytest.mark.parametrize("keys", [
        {"": "foo"},
        {"foo": ""},
        {"": ""},
    ])
    def test_invalid_field_names_raise(self, keys):
        with pytest.raises(ConfigurationError, match="Invalid field name for relation"):
            RelationDefinition.many("Foo", keys)
