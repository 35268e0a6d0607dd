import pytest

from relstore import Field, Index, Model, ModelRegistry, RelationDefinition, Storage
from relstore.connection import Connection, connect, disconnect, get_connection

SCHEMA = (
    "CREATE TABLE author (id INTEGER PRIMARY KEY AUTOINCREMENT, name VARCHAR(64) NOT NULL)",
    "CREATE TABLE article (id INTEGER PRIMARY KEY AUTOINCREMENT, author_id INTEGER, "
    "title VARCHAR(128) NOT NULL, content TEXT)",
    "CREATE TABLE comment (id INTEGER PRIMARY KEY AUTOINCREMENT, article_id INTEGER NOT NULL, "
    "author_id INTEGER, body TEXT NOT NULL)",
    "CREATE TABLE tag (id INTEGER PRIMARY KEY AUTOINCREMENT, name VARCHAR(64) NOT NULL)",
    "CREATE TABLE article_tag (article_id INTEGER NOT NULL, tag_id INTEGER NOT NULL, "
    "PRIMARY KEY (article_id, tag_id))",
    "CREATE TABLE category (id INTEGER PRIMARY KEY AUTOINCREMENT, name VARCHAR(64) NOT NULL)",
    "CREATE TABLE article_category (article_id INTEGER NOT NULL, category_id INTEGER NOT NULL, "
    "PRIMARY KEY (article_id, category_id))",
)


def _id_field() -> Field:
    return Field(name="id", type="integer", attributes=["autoincrement"])


def build_models() -> ModelRegistry:
    """Blog schema: authors write articles; articles have comments, tags and one category."""
    return ModelRegistry([
        Model(
            entity="Author",
            table="author",
            fields=[_id_field(), Field(name="name")],
            indexes=[Index.primary(["id"])],
        ),
        Model(
            entity="Article",
            table="article",
            fields=[
                _id_field(),
                Field(name="author_id", type="integer", attributes=["null"]),
                Field(name="title", attributes={"length": 128}),
                Field(name="body", type="text", mapping="content", attributes=["null"]),
            ],
            indexes=[
                Index.primary(["id"]),
                Index.foreign("article_author", {"author_id": "id"}, "author"),
            ],
            relations=[
                RelationDefinition.one("Author", {"author_id": "id"}, name="author"),
                RelationDefinition.many("Comment", {"id": "article_id"}, name="comments"),
                RelationDefinition.many_trough(
                    "Tag", {"id": "article_id"}, {"tag_id": "id"}, "ArticleTag", name="tags"
                ),
                RelationDefinition.one_trough(
                    "Category", {"id": "article_id"}, {"category_id": "id"}, "ArticleCategory", name="category"
                ),
            ],
        ),
        Model(
            entity="Comment",
            table="comment",
            fields=[
                _id_field(),
                Field(name="article_id", type="integer"),
                Field(name="author_id", type="integer", attributes=["null"]),
                Field(name="body", type="text"),
            ],
            indexes=[Index.primary(["id"])],
            relations=[RelationDefinition.one("Author", {"author_id": "id"}, name="author")],
        ),
        Model(
            entity="Tag",
            table="tag",
            fields=[_id_field(), Field(name="name")],
            indexes=[Index.primary(["id"])],
        ),
        Model(
            entity="ArticleTag",
            table="article_tag",
            fields=[Field(name="article_id", type="integer"), Field(name="tag_id", type="integer")],
            indexes=[Index.primary(["article_id", "tag_id"])],
        ),
        Model(
            entity="Category",
            table="category",
            fields=[_id_field(), Field(name="name")],
            indexes=[Index.primary(["id"])],
        ),
        Model(
            entity="ArticleCategory",
            table="article_category",
            fields=[Field(name="article_id", type="integer"), Field(name="category_id", type="integer")],
            indexes=[Index.primary(["article_id", "category_id"])],
        ),
    ])


@pytest.fixture(scope="function")
def setup_db(request, tmp_path):
    """Setup a temporary file SQLite database with the blog schema for each test."""
    path = tmp_path / f"test-{request.function.__name__}.sqlite3"
    connect(f"sqlite:///{path}")
    connection = get_connection()
    for statement in SCHEMA:
        connection.execute(statement)
    yield connection
    disconnect()


@pytest.fixture
def models():
    return build_models()


@pytest.fixture
def storage(setup_db, models):
    return Storage(models)


@pytest.fixture
def offline_storage(models):
    """Storage whose connection is never opened: queries are built, not executed."""
    return Storage(models, connection=Connection.from_url("sqlite:///:memory:"))


@pytest.fixture
def blog(storage):
    """Two authors, three articles, three comments, three tags, two categories."""
    ann = storage.insert("Author", {"name": "Ann"}).execute()
    bob = storage.insert("Author", {"name": "Bob"}).execute()
    first = storage.insert("Article", {"title": "First", "author_id": ann["id"], "body": "one"}).execute()
    second = storage.insert("Article", {"title": "Second", "author_id": bob["id"]}).execute()
    third = storage.insert("Article", {"title": "Third", "author_id": ann["id"]}).execute()
    comments = [
        storage.insert("Comment", {"article_id": first["id"], "author_id": bob["id"], "body": "x"}).execute(),
        storage.insert("Comment", {"article_id": first["id"], "author_id": ann["id"], "body": "y"}).execute(),
        storage.insert("Comment", {"article_id": second["id"], "body": "z"}).execute(),
    ]
    tags = [storage.insert("Tag", {"name": name}).execute() for name in ("t1", "t2", "t3")]
    categories = [storage.insert("Category", {"name": name}).execute() for name in ("news", "howto")]
    return {
        "authors": [ann, bob],
        "articles": [first, second, third],
        "comments": comments,
        "tags": tags,
        "categories": categories,
    }


@pytest.fixture
def mediator_rows(setup_db):
    """Reader of the (article_id, column) pairs persisted in a mediator table."""
    def read(table: str, column: str) -> set[tuple[int, int]]:
        rows = setup_db.execute(f"SELECT article_id, {column} FROM {table}").rows
        return {(row["article_id"], row[column]) for row in rows}
    return read
