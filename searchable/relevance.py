"""
Relevance sorting for fuzzy searches
"""

from typing import List, Optional, Sequence

from sqlalchemy import literal_column

from . import config
from .dialects import MYSQL, Dialect
from .logging_setup import logger
from .query import QueryHandle
from .utils import strip_search_str


class SortByRelevance:
    """
    Orders a query by how early the search characters occur in the sort columns.

    Every character at position i of the stripped search string is located in
    the concatenation of the sort columns starting from position i + 1, and the
    positions are summed into a sort_index column sorted ascending.

    A character that is not found at all contributes 0, so a row missing a
    character can rank above a row where it occurs late. The score is a
    positional proxy rather than a strict relevance measure.
    """

    @staticmethod
    def expression(sort_columns: Sequence[str], search_str: Optional[str], dialect: Dialect = MYSQL) -> Optional[str]:
        """Build the summed locate expression, or None when there is nothing to score"""
        stripped = strip_search_str(search_str)
        if not stripped or len(sort_columns) == 0:
            return None

        guarded = [dialect.ifnull(column) for column in sort_columns]
        concatenated = dialect.concat(guarded)

        locates: List[str] = [
            dialect.locate(character, concatenated, position)
            for position, character in enumerate(stripped, start=1)
        ]
        return "(" + "+".join(locates) + ")"

    @classmethod
    def sort(
        cls,
        query: QueryHandle,
        sort_columns: Sequence[str],
        search_str: Optional[str],
        dialect: Dialect = MYSQL,
        sort_index: Optional[str] = None,
    ) -> QueryHandle:
        sort_index = sort_index or config.SORT_INDEX
        expression = cls.expression(sort_columns, search_str, dialect)
        if expression is None:
            return query

        logger.debug(f"Sorting by relevance over {len(sort_columns)} column(s) as {sort_index}")
        query.add_select(literal_column(expression).label(sort_index))
        query.order_by(sort_index, "asc")

        return query
