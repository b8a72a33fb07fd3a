"""
Searchable: fuzzy search-as-you-type for SQLAlchemy queries

This package filters a query by loosely matching a search string against a set of
declared columns, and can order the results by a positional relevance score.
"""

from .columns import Columns
from .dialects import MYSQL, SQLITE, Dialect, get_dialect
from .enums import SearchOperator
from .errors import QueryNotSetError, SearchableError, SearchConfigurationError
from .grid_query import BaseGridQuery, BaseSearchQuery
from .models import JoinConfig, SearchableConfig, SearchRequest
from .pagination import PageLimitOffset
from .parsers import CustomSearch, FuzzySearch, ParserInterface
from .query import QueryHandle, SearchQuery
from .relevance import SortByRelevance
from .search import BaseSearch
from .searchable_model import Searchable
from .table_columns import TableColumns

__all__ = [
    "Columns",
    "Dialect",
    "MYSQL",
    "SQLITE",
    "get_dialect",
    "SearchOperator",
    "SearchableError",
    "SearchConfigurationError",
    "QueryNotSetError",
    "BaseGridQuery",
    "BaseSearchQuery",
    "JoinConfig",
    "SearchableConfig",
    "SearchRequest",
    "PageLimitOffset",
    "ParserInterface",
    "FuzzySearch",
    "CustomSearch",
    "QueryHandle",
    "SearchQuery",
    "SortByRelevance",
    "BaseSearch",
    "Searchable",
    "TableColumns",
]
