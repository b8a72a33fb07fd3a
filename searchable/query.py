"""
Mutable query handle around a SQLAlchemy Select
SQLAlchemy statements are generative, so the handle keeps the latest statement
and every mutating call replaces it in place
"""

from typing import Iterable, Protocol, Union

from sqlalchemy import literal_column, select, table, text
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import ColumnElement

from .enums import JoinType, SortDirection
from .utils import compile_statement, format_sql_query

SelectExpression = Union[str, ColumnElement]


class QueryHandle(Protocol):
    """The query operations a search needs"""

    def select(self, expressions: Iterable[SelectExpression]) -> "QueryHandle":
        ...

    def where_raw(self, sql: str) -> "QueryHandle":
        ...

    def having_raw(self, sql: str) -> "QueryHandle":
        ...

    def add_select(self, expression: SelectExpression) -> "QueryHandle":
        ...

    def order_by(self, column: str, direction: str = "asc") -> "QueryHandle":
        ...

    def limit(self, limit: int) -> "QueryHandle":
        ...

    def offset(self, offset: int) -> "QueryHandle":
        ...


def _raw(sql: str):
    # colons are literal, not :name bind parameters
    return text(sql.replace(":", "\\:"))


def _as_column(expression: SelectExpression) -> ColumnElement:
    if isinstance(expression, str):
        return literal_column(expression)
    return expression


class SearchQuery:
    """
    Chainable wrapper of a Select statement.

    query = SearchQuery(select(Post))
    query.where_raw("(posts.title LIKE '%a%')").order_by("posts.id")
    session.execute(query.statement)
    """

    def __init__(self, statement: Select):
        self.statement = statement

    @classmethod
    def from_model(cls, model) -> "SearchQuery":
        return cls(select(model))

    @classmethod
    def from_table(cls, name: str) -> "SearchQuery":
        return cls(select().select_from(table(name)))

    def select(self, expressions: Iterable[SelectExpression]) -> "SearchQuery":
        columns = [_as_column(expression) for expression in expressions]
        self.statement = self.statement.with_only_columns(*columns, maintain_column_froms=True)
        return self

    def add_select(self, expression: SelectExpression) -> "SearchQuery":
        self.statement = self.statement.add_columns(_as_column(expression))
        return self

    def where_raw(self, sql: str) -> "SearchQuery":
        self.statement = self.statement.where(_raw(sql))
        return self

    def having_raw(self, sql: str) -> "SearchQuery":
        self.statement = self.statement.having(_raw(sql))
        return self

    def group_by(self, *columns: str) -> "SearchQuery":
        self.statement = self.statement.group_by(*[literal_column(column) for column in columns])
        return self

    def order_by(self, column: str, direction: str = "asc") -> "SearchQuery":
        ordered = literal_column(column)
        if SortDirection(direction) == SortDirection.DESC:
            ordered = ordered.desc()
        else:
            ordered = ordered.asc()
        self.statement = self.statement.order_by(ordered)
        return self

    def join(self, table_name: str, first: str, second: str, how: str = "left") -> "SearchQuery":
        onclause = literal_column(first) == literal_column(second)
        self.statement = self.statement.join(
            table(table_name), onclause, isouter=JoinType(how) == JoinType.LEFT
        )
        return self

    def limit(self, limit: int) -> "SearchQuery":
        self.statement = self.statement.limit(limit)
        return self

    def offset(self, offset: int) -> "SearchQuery":
        self.statement = self.statement.offset(offset)
        return self

    def has_columns(self) -> bool:
        return len(self.statement.selected_columns) > 0

    def to_sql(self, pretty: bool = False, dialect=None) -> str:
        sql = compile_statement(self.statement, dialect)
        return format_sql_query(sql) if pretty else sql

    def __str__(self) -> str:
        return self.to_sql()
