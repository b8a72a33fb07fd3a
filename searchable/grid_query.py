"""
Grid queries: a base query plus a column declaration, with search and pagination
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Union

from sqlalchemy.sql.elements import ColumnElement

from . import config
from .columns import ColumnDeclarations, Columns
from .dialects import Dialect
from .enums import SearchOperator
from .errors import QueryNotSetError, SearchConfigurationError
from .pagination import PageLimitOffset
from .query import QueryHandle
from .search import BaseSearch, resolve_search_operator


class BaseGridQuery(ABC):
    """
    A query specific to a report grid.

    Subclasses declare the grid's columns and build the base query:

    class PostsGrid(BaseGridQuery):
        def columns(self):
            return ["posts.title", ("author_name", "authors.name")]

        def init_query(self):
            return SearchQuery(select().select_from(Post).join(Author, Author.id == Post.author_id))
    """

    def __init__(self, query: Optional[QueryHandle] = None):
        self._query = query
        self._registry: Optional[Columns] = None

    @abstractmethod
    def columns(self) -> ColumnDeclarations:
        """Columns declaration of the grid"""

    def init_query(self) -> QueryHandle:
        raise SearchConfigurationError(f"Please create an init_query() method on {type(self).__name__}.")

    def query(self) -> QueryHandle:
        """Return the initialized query, containing the joins and conditions specific to this grid."""
        if self._query is None:
            self._query = self.init_query()
        return self._query

    def set_query(self, query: QueryHandle) -> "BaseGridQuery":
        self._query = query
        return self

    def require_query(self, operation: str) -> QueryHandle:
        if self._query is None:
            raise QueryNotSetError(operation, self)
        return self._query

    def registry(self) -> Columns:
        if self._registry is None:
            self._registry = Columns.make(self.columns())
        return self._registry

    def make_query(self) -> QueryHandle:
        """Return the final query, by default the query with the declared columns selected."""
        return self.select_columns()

    def select_columns(self) -> QueryHandle:
        return self.query().select(self.make_select())

    def set_select_query(self, query: QueryHandle) -> QueryHandle:
        return query.select(self.make_select())

    def make_select(self, columns: Optional[ColumnDeclarations] = None) -> List[ColumnElement]:
        """Create the select list, keyed columns aliased with their keys."""
        registry = self.registry() if columns is None else Columns.make(columns)
        return registry.select_columns()

    def get_column(self, column_key: str) -> Optional[str]:
        """Get the actual column of the given column key."""
        return self.registry().find(column_key)

    def get_columns(self, column_keys: Sequence[str]) -> List[Optional[str]]:
        return [self.get_column(column_key) for column_key in column_keys]

    @staticmethod
    def find_column(columns: ColumnDeclarations, column_key: str) -> Optional[str]:
        return Columns.make(columns).find(column_key)

    def where_raw(self, sql: str) -> "BaseGridQuery":
        self.require_query("where_raw").where_raw(sql)
        return self

    def having_raw(self, sql: str) -> "BaseGridQuery":
        self.require_query("having_raw").having_raw(sql)
        return self

    def order_by(self, column: str, direction: str = "asc") -> "BaseGridQuery":
        self.require_query("order_by").order_by(column, direction)
        return self

    def paginate(self, page: int = 0, per_page: Optional[int] = None) -> "BaseGridQuery":
        per_page = config.PER_PAGE if per_page is None else per_page
        PageLimitOffset(per_page, page).apply(self.require_query("paginate"))
        return self

    @classmethod
    def make(cls, *args, **kwargs) -> "BaseGridQuery":
        return cls(*args, **kwargs)


class BaseSearchQuery(BaseGridQuery):
    """
    A grid query that can be searched.

    The searcher compares the grid's columns using the configured search operator
    and, when enabled, sorts by relevance over sort_columns().
    """

    def __init__(
        self,
        query: Optional[QueryHandle] = None,
        search_operator: Union[str, SearchOperator, None] = None,
        sort: Optional[bool] = None,
        dialect: Union[str, Dialect, None] = None,
    ):
        super().__init__(query)
        self.search_operator = resolve_search_operator(search_operator)
        self._sort = config.SORT_BY_RELEVANCE if sort is None else sort
        self.dialect = dialect
        self.search_str: Optional[str] = None

    def search(self, search_str: str) -> QueryHandle:
        self.search_str = search_str
        return self.searcher().search(search_str)

    def searcher(self) -> BaseSearch:
        """Return the search logic applied to this grid's query."""
        return BaseSearch(
            self.query(),
            self.registry(),
            sort_by_relevance=self._sort,
            search_operator=self.search_operator,
            sort_columns=self.sort_columns,
            dialect=self.dialect,
        )

    def sort_columns(self) -> List[str]:
        """Return the columns for relevance sorting, the compared columns by default."""
        if self.search_operator == SearchOperator.HAVING:
            return list(self.registry().keys())
        return self.registry().actual()

    def set_search_operator(self, search_operator: Union[str, SearchOperator]) -> "BaseSearchQuery":
        self.search_operator = resolve_search_operator(search_operator)
        return self

    def sort(self, sort: bool = True) -> "BaseSearchQuery":
        """Alias of sort_by_relevance()"""
        return self.sort_by_relevance(sort)

    def sort_by_relevance(self, sort: bool = True) -> "BaseSearchQuery":
        self._sort = sort
        return self

    def should_sort_by_relevance(self) -> bool:
        return self._sort
