"""
Searchable behaviour for SQLModel models, by composition

class Post(SQLModel, table=True):
    ...

posts_search = Searchable(Post, {
    "columns": ["posts.title", "description", ["author_name", "authors.name"]],
    "joins": {"authors": ["authors.id", "posts.author_id"]},
})
statement = posts_search.search(select(Post), "my daily posts").statement
"""

import copy
from typing import Any, Dict, List, Optional, Union

from sqlalchemy.sql import Select

from .columns import ColumnDeclarations, Columns, normalize_declarations
from .dialects import Dialect
from .enums import SearchOperator
from .errors import SearchConfigurationError
from .logging_setup import logger
from .models import JoinConfig, SearchableConfig, SearchRequest
from .pagination import PageLimitOffset
from .query import SearchQuery
from .search import BaseSearch
from .table_columns import TableColumns


class Searchable:
    """Searchable columns, sortable columns and joins of a model, and the search applied with them"""

    def __init__(
        self,
        model: Any,
        config: Union[SearchableConfig, Dict[str, Any], None] = None,
        table_columns: Optional[TableColumns] = None,
        sort_by_relevance: Optional[bool] = None,
        search_operator: Union[str, SearchOperator, None] = None,
        dialect: Union[str, Dialect, None] = None,
    ):
        self.model = model
        self.config = SearchableConfig() if config is None else self._configured(config)
        self.table_columns = table_columns
        self.enabled = True
        self._search_options = {
            "sort_by_relevance": sort_by_relevance,
            "search_operator": search_operator,
            "dialect": dialect,
        }
        self._search_query: Optional[BaseSearch] = None

    @staticmethod
    def _validate_config(config: Union[SearchableConfig, Dict[str, Any]]) -> SearchableConfig:
        if isinstance(config, SearchableConfig):
            return config
        return SearchableConfig.model_validate(config)

    @classmethod
    def _configured(cls, config: Union[SearchableConfig, Dict[str, Any]]) -> SearchableConfig:
        """Validate a given configuration, a missing column list meaning no columns"""
        config = cls._validate_config(config)
        return config.model_copy(
            update={
                "columns": config.columns if config.columns is not None else [],
                "sortable_columns": config.sortable_columns if config.sortable_columns is not None else [],
            }
        )

    @property
    def table_name(self) -> str:
        return self.model.__table__.name

    def _table_column_listing(self) -> List[str]:
        if self.table_columns is None:
            raise SearchConfigurationError(
                f"{self.model.__name__} declares no searchable columns and no TableColumns cache was given."
            )
        return self.table_columns.get(self.table_name)

    def searchable_columns(self) -> ColumnDeclarations:
        """Return the searchable columns, the table's columns when none are declared."""
        if self.config.columns is not None:
            return self.config.columns
        return self._table_column_listing()

    def sortable_columns(self) -> ColumnDeclarations:
        """Return the sortable columns, the table's columns when none are declared."""
        if self.config.sortable_columns is not None:
            return self.config.sortable_columns
        return self._table_column_listing()

    def searchable_joins(self) -> Dict[str, JoinConfig]:
        return self.config.joins

    def build_all_columns(self) -> Columns:
        """Build columns from both searchable and sortable columns"""
        return Columns.make(
            normalize_declarations(self.searchable_columns()) + normalize_declarations(self.sortable_columns())
        )

    def build_searchable_columns(self) -> Columns:
        return Columns.make(self.searchable_columns())

    def build_sortable_columns(self) -> Columns:
        return Columns.make(self.sortable_columns())

    def get_column(self, column: str) -> Optional[str]:
        """Get the actual column from both searchable and sortable columns"""
        return self.build_all_columns().find(column)

    def get_searchable_column(self, column: str) -> Optional[str]:
        return self.build_searchable_columns().find(column)

    def get_sortable_column(self, column: str) -> Optional[str]:
        return self.build_sortable_columns().find(column)

    def is_column_valid(self, column: str) -> bool:
        """
        Whether the column is a declared column, a table column or a derived one.
        Check user supplied column names with this before ordering by them.
        """
        return self.get_column(column) is not None

    def set_searchable(self, config: Union[SearchableConfig, Dict[str, Any]]) -> "Searchable":
        self.config = self._configured(config)
        self._search_query = None
        return self

    def add_searchable(self, config: Union[SearchableConfig, Dict[str, Any]]) -> "Searchable":
        """Append columns, sortable columns and joins to the current configuration"""
        added = self._validate_config(config)

        self.config = self.config.model_copy(
            update={
                "columns": (self.config.columns or []) + (added.columns or []),
                "sortable_columns": (self.config.sortable_columns or []) + (added.sortable_columns or []),
                "joins": {**self.config.joins, **added.joins},
            }
        )
        self._search_query = None
        return self

    def set_searchable_columns(self, columns: Optional[ColumnDeclarations]) -> "Searchable":
        self.config = self.config.model_copy(update={"columns": self._declarations(columns)})
        self._search_query = None
        return self

    def set_sortable_columns(self, columns: Optional[ColumnDeclarations]) -> "Searchable":
        self.config = self.config.model_copy(update={"sortable_columns": self._declarations(columns)})
        return self

    @staticmethod
    def _declarations(columns: Optional[ColumnDeclarations]):
        return SearchableConfig.model_validate({"columns": columns or []}).columns

    def enable(self) -> "Searchable":
        self.enabled = True
        return self

    def disable(self) -> "Searchable":
        self.enabled = False
        return self

    def search_query(self) -> BaseSearch:
        if self._search_query is None:
            self._search_query = BaseSearch(columns=self.build_searchable_columns(), **self._search_options)
        return self._search_query

    def set_search_query(self, search_query: BaseSearch) -> "Searchable":
        self._search_query = search_query
        return self

    def sort_by_relevance(self, sort_by_relevance: bool = True) -> "Searchable":
        self.search_query().sort_by_relevance(sort_by_relevance)
        return self

    def apply_searchable_joins(self, query: SearchQuery) -> SearchQuery:
        for table_name, join in self.searchable_joins().items():
            query.join(table_name, join.first, join.second, join.how.value)
        return query

    def search(self, query: Union[Select, SearchQuery], search_str: Any) -> SearchQuery:
        """
        Apply the searchable joins and the search to the query.

        A query selecting nothing yet selects the model table's columns first.
        """
        return self._search_with(self.search_query(), query, search_str)

    def _search_with(self, searcher: BaseSearch, query: Union[Select, SearchQuery], search_str: Any) -> SearchQuery:
        if isinstance(query, Select):
            query = SearchQuery(query)

        if not self.enabled:
            logger.debug(f"Search is disabled on {self.model.__name__}")
            return query

        self.apply_searchable_joins(query)

        if not query.has_columns():
            query.select([f"{self.table_name}.*"])

        searcher.set_query(query).search(search_str)
        return query

    def apply(self, query: Union[Select, SearchQuery], request: SearchRequest) -> SearchQuery:
        """
        Search and paginate the query as the request asks.

        The request's options apply to this call only, the model's search options stay as configured.
        """
        searcher = (
            copy.copy(self.search_query())
            .set_search_operator(request.operator)
            .sort_by_relevance(request.sort_by_relevance)
        )
        if request.sort_columns is not None:
            searcher.set_sort_columns(request.sort_columns)
        query = self._search_with(searcher, query, request.search)
        PageLimitOffset(request.per_page, request.page).apply(query)
        return query
