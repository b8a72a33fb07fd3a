import pytest
from sqlalchemy import select

from searchable import (
    JoinConfig,
    SearchableConfig,
    SearchConfigurationError,
    SearchQuery,
    SearchRequest,
    Searchable,
)
from searchable.enums import JoinType
from tests.stubs import POST_COLUMNS, Post

POST_CONFIG = {
    "columns": ["posts.title", "description", ["author_name", "authors.name"]],
    "joins": {"authors": ["authors.id", "posts.author_id"]},
}


@pytest.fixture
def posts(table_columns):
    return Searchable(Post, POST_CONFIG, table_columns=table_columns, dialect="sqlite")


def test_config_is_normalized(posts):
    assert posts.searchable_columns() == [
        (None, "posts.title"),
        (None, "description"),
        ("author_name", "authors.name"),
    ]
    assert posts.searchable_joins() == {"authors": JoinConfig(first="authors.id", second="posts.author_id")}


def test_unconfigured_model_falls_back_to_table_columns(table_columns):
    posts = Searchable(Post, table_columns=table_columns)

    assert posts.searchable_columns() == ["id", "title", "description", "author_id"]
    assert posts.sortable_columns() == ["id", "title", "description", "author_id"]
    assert posts.get_column("author_id") == "author_id"


def test_missing_sortable_columns_mean_none(posts):
    assert posts.sortable_columns() == []


def test_get_column_with_searchable_columns_only(posts):
    assert posts.get_column("title") == "posts.title"
    assert posts.get_column("author_name") == "authors.name"
    assert posts.get_column("author_id") is None
    assert posts.get_column("created_at") is None


def test_get_column_with_sortable_columns_only(table_columns):
    posts = Searchable(Post, {"sortable_columns": POST_COLUMNS}, table_columns=table_columns)

    assert posts.get_column("title") == "posts.title"
    assert posts.get_column("description") == "description"
    assert posts.get_column("author_name") == "authors.name"
    assert posts.get_column("author_age") == "authors.age"
    assert posts.is_column_valid("author_age")
    assert posts.get_searchable_column("title") is None
    assert posts.get_sortable_column("author_name") == "authors.name"


def test_sortable_only_model_searches_nothing(table_columns):
    posts = Searchable(Post, {"sortable_columns": POST_COLUMNS}, table_columns=table_columns)

    sql = posts.search(select(Post), "ab").to_sql()

    assert "LIKE" not in sql
    assert "sort_index" not in sql


def test_set_searchable_without_columns_searches_nothing(table_columns):
    posts = Searchable(Post, table_columns=table_columns)
    posts.set_searchable({"sortable_columns": ["posts.title"]})

    assert posts.searchable_columns() == []
    assert "LIKE" not in posts.search(select(Post), "ab").to_sql()


def test_set_searchable_columns_to_none_searches_nothing(posts):
    posts.set_searchable_columns(None)

    assert posts.searchable_columns() == []


def test_is_column_valid(posts):
    assert posts.is_column_valid("author_name")
    assert not posts.is_column_valid("id")
    assert not posts.is_column_valid("posts.id; DROP TABLE posts")


def test_table_fallback_needs_a_table_columns_cache():
    posts = Searchable(Post)

    with pytest.raises(SearchConfigurationError):
        posts.get_column("title")


def test_search_applies_joins_and_search(posts):
    sql = posts.search(select(Post), "ab").to_sql()

    assert "LEFT OUTER JOIN authors ON authors.id = posts.author_id" in sql
    assert "WHERE (posts.title LIKE '%a%b%' OR description LIKE '%a%b%' OR authors.name LIKE '%a%b%')" in sql
    assert sql.endswith("ORDER BY sort_index ASC")


def test_search_selects_table_columns_when_none_are_selected(posts):
    query = SearchQuery.from_table("posts")

    assert posts.sort_by_relevance(False).search(query, "ab").to_sql().startswith("SELECT posts.* \nFROM posts")


def test_inner_joins():
    posts = Searchable(Post, {"columns": ["authors.name"], "joins": {"authors": ["authors.id", "posts.author_id", "inner"]}})

    assert posts.searchable_joins()["authors"].how == JoinType.INNER
    assert "FROM posts JOIN authors ON authors.id = posts.author_id" in posts.search(select(Post), "ab").to_sql()


def test_disabled_search_leaves_query_unchanged(posts):
    query = SearchQuery(select(Post))
    before = query.statement

    posts.disable().search(query, "daily")

    assert query.statement is before
    posts.enable()
    posts.search(query, "daily")
    assert query.statement is not before


def test_search_filters_and_sorts_rows(posts, session):
    rows = session.execute(posts.search(select(Post), "daily").statement).all()

    assert [(post.id, sort_index) for post, sort_index in rows] == [(3, 15), (1, 30)]


def test_apply_search_request(posts, session):
    request = SearchRequest(search="daily", page=1, per_page=1)

    rows = session.execute(posts.apply(select(Post), request).statement).all()

    assert [post.id for post, _ in rows] == [3]


def test_apply_search_request_with_sort_columns(posts, session):
    request = SearchRequest(search="daily", sort_columns=["description"])

    rows = session.execute(posts.apply(select(Post), request).statement).all()

    assert [(post.id, sort_index) for post, sort_index in rows] == [(3, 0), (1, 19)]


def test_add_searchable_appends_configuration(posts):
    posts.add_searchable({"columns": ["authors.age as author_age"], "sortable_columns": ["posts.id"]})

    assert posts.get_searchable_column("author_age") == "authors.age"
    assert posts.get_searchable_column("title") == "posts.title"
    assert posts.sortable_columns() == [(None, "posts.id")]
    assert "authors" in posts.searchable_joins()


def test_set_searchable_replaces_configuration(posts):
    posts.search_query()
    posts.set_searchable(SearchableConfig(columns=["posts.title"]))

    assert posts.search_query().columns.actual() == ["posts.title"]
    assert posts.searchable_joins() == {}


def test_set_searchable_columns(posts):
    posts.set_searchable_columns(["posts.description"])

    assert posts.get_searchable_column("description") == "posts.description"
    assert posts.get_searchable_column("title") is None


def test_apply_keeps_the_configured_search_options(posts):
    request = SearchRequest(search="a", operator="having", sort_by_relevance=False, sort_columns=["posts.title"])
    posts.apply(select(Post), request)

    sql = posts.search(select(Post), "a").to_sql()

    assert "WHERE (posts.title LIKE '%a%'" in sql
    assert "HAVING" not in sql
    assert sql.endswith("ORDER BY sort_index ASC")
    assert "IFNULL((description), '')" in sql


def test_apply_keeps_a_custom_parser(posts):
    posts.search_query().parse_using(lambda search_str: f"%{search_str}%")

    sql = posts.apply(select(Post), SearchRequest(search="my posts", sort_by_relevance=False)).to_sql()

    assert "posts.title LIKE '%my posts%'" in sql


def test_add_searchable_to_an_unconfigured_model(table_columns):
    posts = Searchable(Post, table_columns=table_columns)
    posts.add_searchable({"sortable_columns": ["posts.title"]})

    assert posts.searchable_columns() == []
    assert posts.sortable_columns() == [(None, "posts.title")]
