from searchable import table_columns as table_columns_module


def test_get_lists_table_columns(table_columns):
    assert table_columns.get("posts") == ["id", "title", "description", "author_id"]
    assert table_columns.get("authors") == ["id", "name", "age"]


def test_columns_are_cached_per_table(table_columns, monkeypatch):
    assert "posts" not in table_columns

    table_columns.get("posts")
    assert "posts" in table_columns

    def fail(*args, **kwargs):
        raise AssertionError("the database was inspected again")

    monkeypatch.setattr(table_columns_module, "inspect", fail)
    assert table_columns.get("posts") == ["id", "title", "description", "author_id"]


def test_callers_cannot_mutate_the_cache(table_columns):
    columns = table_columns.get("posts")
    columns.append("extra")

    assert table_columns.get("posts") == ["id", "title", "description", "author_id"]


def test_forget(table_columns):
    table_columns.get("posts")
    table_columns.get("authors")

    table_columns.forget("posts")
    assert "posts" not in table_columns
    assert "authors" in table_columns

    table_columns.forget()
    assert "authors" not in table_columns
