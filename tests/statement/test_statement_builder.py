"""Tests for relstore.statement: StatementBuilder rendering."""

import pytest

from relstore.dialects import MysqlDialect, SqliteDialect
from relstore.expressions import AggregateExpression
from relstore.statement import StatementBuilder


@pytest.fixture
def builder():
    return StatementBuilder(table="article", dialect=SqliteDialect())


def test_select(builder):
    builder.select(builder.column("id"), builder.column("title"))
    assert builder.sql == 'SELECT "id", "title" FROM "article"'


def test_select_every_clause(builder):
    author = builder.column("author_id")
    builder.select(author, AggregateExpression(function="COUNT", argument=builder.column("id")))
    builder.and_where(author.compare(">", builder.create_named_parameter(1, "p0")))
    builder.add_group_by(author)
    builder.and_having(author.compare("<", builder.create_named_parameter(9, "p1")))
    builder.add_order_by(author.desc)
    builder.set_max_results(10).set_first_result(5)
    assert builder.sql == (
        'SELECT "author_id", COUNT("id") FROM "article" WHERE "author_id" > :p0 '
        'GROUP BY "author_id" HAVING "author_id" < :p1 ORDER BY "author_id" DESC LIMIT 10 OFFSET 5'
    )
    assert builder.get_parameters() == {"p0": 1, "p1": 9}


def test_where_chains_flatten(builder):
    column = builder.column("id")
    builder.select(column)
    for index in range(3):
        builder.or_where(column.compare("=", builder.create_named_parameter(index, f"p{index}")))
    assert builder.sql_where == ' WHERE ("id" = :p0 OR "id" = :p1 OR "id" = :p2)'


def test_mixed_chains_group(builder):
    column = builder.column("id")
    builder.and_where(column.is_null()).and_where(column.is_not_null()).or_where(column.is_null())
    assert builder.sql_where == ' WHERE (("id" IS NULL AND "id" IS NOT NULL) OR "id" IS NULL)'


def test_insert(builder):
    builder.insert().set_value(builder.column("title"), builder.create_named_parameter("T", "v"))
    assert builder.sql == 'INSERT INTO "article" ("title") VALUES (:v)'


@pytest.mark.parametrize("dialect, sql", [
    (SqliteDialect(), 'INSERT INTO "article" DEFAULT VALUES'),
    (MysqlDialect(), "INSERT INTO `article` () VALUES ()"),
])
def test_insert_without_values(dialect, sql):
    assert StatementBuilder(table="article", dialect=dialect).insert().sql == sql


def test_update(builder):
    builder.update().set_value(builder.column("title"), builder.create_named_parameter("T", "v"))
    builder.and_where(builder.column("id").compare("=", builder.create_named_parameter(1, "k")))
    assert builder.sql == 'UPDATE "article" SET "title" = :v WHERE "id" = :k'


def test_update_without_assignments_raises(builder):
    with pytest.raises(ValueError, match="no assignments"):
        builder.update().sql


def test_delete(builder):
    assert builder.delete().sql == 'DELETE FROM "article"'


def test_without_verb_raises(builder):
    with pytest.raises(ValueError, match="has no verb"):
        builder.sql


def test_set_parameters_replaces(builder):
    builder.create_named_parameter(1, "a")
    builder.set_parameters({"b": 2})
    assert builder.get_parameters() == {"b": 2}
