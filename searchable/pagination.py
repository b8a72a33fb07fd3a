from typing import Optional

from .query import QueryHandle


class PageLimitOffset:
    """Translates page / per-page into limit and offset. Page 0 means no pagination."""

    def __init__(self, per_page: int = 0, page: int = 0):
        if per_page < 0 or page < 0:
            raise ValueError(f"Page and per page must not be negative, got page={page}, per_page={per_page}")
        self.page = page
        self.per_page = per_page

    def limit(self) -> int:
        return self.per_page if self.page else 0

    def offset(self) -> int:
        if not self.page:
            return 0
        return (self.page - 1) * self.per_page

    def apply(self, query: QueryHandle) -> QueryHandle:
        """Apply limit and offset, leaving the query untouched when not paginating."""
        if not self.limit():
            return query
        query.limit(self.limit())
        query.offset(self.offset())
        return query

    @classmethod
    def from_params(cls, page: Optional[int], per_page: Optional[int]) -> "PageLimitOffset":
        return cls(per_page or 0, page or 0)
