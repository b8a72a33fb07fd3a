"""
Fuzzy search over a column registry
Compares every searchable column against the parsed search string and
optionally sorts the results by relevance
"""

from typing import Any, Callable, List, Optional, Sequence, Union

from . import config
from .columns import ColumnDeclarations, Columns
from .dialects import Dialect, get_dialect
from .enums import SearchOperator
from .errors import QueryNotSetError, SearchConfigurationError
from .logging_setup import logger
from .parsers import CustomSearch, FuzzySearch, ParserInterface
from .query import QueryHandle
from .relevance import SortByRelevance

SortColumns = Union[Sequence[str], Callable[[], Sequence[str]]]


def resolve_search_operator(search_operator: Union[str, SearchOperator, None]) -> SearchOperator:
    try:
        return SearchOperator(search_operator or config.SEARCH_OPERATOR)
    except ValueError:
        raise SearchConfigurationError(
            f"Invalid search operator: {search_operator}. Possible values: {[op.value for op in SearchOperator]}"
        )


class BaseSearch:
    """
    Applies a fuzzy search to a query.

    Under the `where` operator the actual columns are compared, e.g. 'authors.name'.
    Under the `having` operator the column keys are compared instead, e.g. 'author_name',
    which works on queries that already select or aggregate those aliases.
    """

    def __init__(
        self,
        query: Optional[QueryHandle] = None,
        columns: Optional[ColumnDeclarations] = None,
        sort_by_relevance: Optional[bool] = None,
        search_operator: Union[str, SearchOperator, None] = None,
        sort_columns: Optional[SortColumns] = None,
        dialect: Union[str, Dialect, None] = None,
    ):
        self.query = query
        if columns is not None and not isinstance(columns, Columns):
            columns = Columns.make(columns)
        self.columns: Optional[Columns] = columns
        self.search_str: Optional[str] = None
        self._sort_columns = sort_columns
        self._default_parser: Optional[ParserInterface] = None
        self._sort_by_relevance = config.SORT_BY_RELEVANCE if sort_by_relevance is None else sort_by_relevance
        self.search_operator = resolve_search_operator(search_operator)
        self.dialect = get_dialect(dialect or config.DIALECT) if not isinstance(dialect, Dialect) else dialect

    def set_query(self, query: QueryHandle) -> "BaseSearch":
        self.query = query
        return self

    def search(self, search_str: Any) -> QueryHandle:
        """
        Apply the search to the query.

        Returns the same query handle, mutated.
        """
        if self.query is None:
            raise QueryNotSetError("search", self)

        self.search_str = search_str
        query = self.query
        columns_to_compare = self.columns_to_compare()

        if len(columns_to_compare) == 0:
            return query

        parsed_str = self.parse_search_str(search_str)
        conditions = [self.dialect.like(column, parsed_str) for column in columns_to_compare]
        condition_sql = "(" + " OR ".join(conditions) + ")"

        if self.search_operator == SearchOperator.HAVING:
            query.having_raw(condition_sql)
        else:
            query.where_raw(condition_sql)
        logger.debug(f"Applied {self.search_operator.value} search over {len(conditions)} column(s)")

        if self.should_sort_by_relevance():
            self.apply_sort_by_relevance()

        return query

    def parse_search_str(self, search_str: Any) -> str:
        return self.get_default_parser().parse(search_str)

    def get_default_parser(self) -> ParserInterface:
        if self._default_parser is not None:
            return self._default_parser
        return FuzzySearch()

    def parse_using(self, callback: Callable[[Any], str]) -> "BaseSearch":
        """Set a custom search string parser via callback"""
        self._default_parser = CustomSearch(callback)
        return self

    def set_search_operator(self, search_operator: Union[str, SearchOperator]) -> "BaseSearch":
        self.search_operator = resolve_search_operator(search_operator)
        return self

    def sort_by_relevance(self, sort_by_relevance: bool = True) -> "BaseSearch":
        self._sort_by_relevance = sort_by_relevance
        return self

    def should_sort_by_relevance(self) -> bool:
        return self._sort_by_relevance

    def apply_sort_by_relevance(self) -> QueryHandle:
        if self.query is None:
            raise QueryNotSetError("apply_sort_by_relevance", self)
        return SortByRelevance.sort(self.query, self.sort_columns(), self.search_str, self.dialect)

    def columns_to_compare(self) -> List[str]:
        """Return actual columns for the `where` operator and column keys for the `having` operator."""
        if self.columns is None:
            return []
        if self.search_operator == SearchOperator.HAVING:
            return list(self.columns.keys())
        return self.columns.actual()

    def sort_columns(self) -> List[str]:
        """Return the columns concatenated for relevance scoring, the compared columns unless set."""
        if callable(self._sort_columns):
            return list(self._sort_columns())
        if self._sort_columns is not None:
            return list(self._sort_columns)
        if self.columns is None:
            raise SearchConfigurationError(
                f"Sort by relevance requires sort columns or a column registry on {type(self).__name__}."
            )
        return self.columns_to_compare()

    def set_sort_columns(self, sort_columns: Optional[SortColumns]) -> "BaseSearch":
        self._sort_columns = sort_columns
        return self
