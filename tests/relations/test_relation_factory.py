"""Tests for relstore.query.relations.factory: path splitting, validation, resolver kinds."""

import pytest

from relstore.errors import InvalidRelationArgument, UnknownRelation
from relstore.query.relations import (
    ManyRelation,
    ManyTroughRelation,
    OneRelation,
    OneTroughRelation,
    RelationFactory,
)


@pytest.mark.parametrize("path, expected", [
    ("comments", ("comments", None)),
    ("comments.author", ("comments", "author")),
    ("a.b.c", ("a", "b.c")),
])
def test_split_relation_name(path, expected):
    assert RelationFactory.split_relation_name(path) == expected


@pytest.mark.parametrize("name, relation_class", [
    ("author", OneRelation),
    ("comments", ManyRelation),
    ("category", OneTroughRelation),
    ("tags", ManyTroughRelation),
])
def test_resolver_kind(offline_storage, name, relation_class):
    relation = offline_storage.read("Article").with_(name).relation(name)
    assert isinstance(relation, relation_class)
    assert relation.name == name
    assert relation.container == name


def test_nested_path(offline_storage):
    query = offline_storage.read("Article").with_("comments.author")
    assert list(query.relations) == ["comments"]
    assert isinstance(query.relation("comments.author"), OneRelation)
    assert query.relation("comments").query.model.entity == "Comment"


def test_nested_path_reuses_attached_relation(offline_storage):
    query = offline_storage.read("Article").with_("comments", [("body", "x")]).with_("comments.author")
    comments = query.relation("comments")
    assert list(comments.query.relations) == ["author"]
    assert comments.query.binds == {"condition_0_body": "x"}


def test_forwarded_conditions_apply_to_attached_relation(offline_storage):
    query = (
        offline_storage.read("Article")
        .with_("comments")
        .with_("comments.author", conditions=[("body", "x")], order=[("id", "asc")])
    )
    assert query.relation("comments").query.sql == (
        'SELECT "id", "article_id", "author_id", "body" FROM "comment" '
        'WHERE "body" = :condition_0_body ORDER BY "id" ASC'
    )
    assert query.relation("comments.author").query.sql == 'SELECT "id", "name" FROM "author"'


def test_call_order_does_not_change_target(offline_storage):
    attached_first = offline_storage.read("Article").with_("comments").with_("comments.author", [("body", "x")])
    in_one_call = offline_storage.read("Article").with_("comments.author", [("body", "x")])
    assert attached_first.relation("comments").query.sql == in_one_call.relation("comments").query.sql
    assert attached_first.relation("comments.author").query.sql == in_one_call.relation("comments.author").query.sql


def test_conditions_and_order_apply_to_first_segment(offline_storage):
    query = offline_storage.read("Article").with_(
        "comments.author",
        conditions=[("body", "%a%", "like"), ("author_id", None, "!=", "or")],
        order=[("id",), ("body", "asc")],
    )
    comments = query.relation("comments")
    assert comments.query.sql == (
        'SELECT "id", "article_id", "author_id", "body" FROM "comment" '
        'WHERE ("body" LIKE :condition_0_body OR "author_id" IS NOT NULL) '
        'ORDER BY "id" DESC, "body" ASC'
    )
    assert query.relation("comments.author").query.sql == 'SELECT "id", "name" FROM "author"'


def test_unknown_relation_raises(offline_storage):
    with pytest.raises(UnknownRelation, match='relation "missing" not found in model "Author"'):
        offline_storage.read("Article").with_("author.missing")
    assert offline_storage.connection._raw is None


def test_relation_not_attached_raises(offline_storage):
    with pytest.raises(UnknownRelation, match='Unable to retrieve relation "comments", relation is not attached'):
        offline_storage.read("Article").with_("tags").relation("comments")


@pytest.mark.parametrize("conditions", [
    ["body"],
    [("body",)],
    [("body", "x", "=", "and", "extra")],
])
def test_malformed_condition_raises(offline_storage, conditions):
    with pytest.raises(InvalidRelationArgument, match="Invalid condition"):
        offline_storage.read("Article").with_("comments", conditions=conditions)


@pytest.mark.parametrize("order", [
    ["id"],
    [()],
    [("id", "asc", "extra")],
])
def test_malformed_order_raises(offline_storage, order):
    with pytest.raises(InvalidRelationArgument, match="Invalid order"):
        offline_storage.read("Article").with_("comments", order=order)
