from typing import Dict, List, Optional, Tuple

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from . import config
from .columns import normalize_declarations
from .enums import JoinType, SearchOperator

ColumnDeclarationList = List[Tuple[Optional[str], str]]


class SearchRequest(SQLModel):
    search: str = Field(default="")
    operator: SearchOperator = Field(default_factory=lambda: SearchOperator(config.SEARCH_OPERATOR))
    sort_by_relevance: bool = Field(default_factory=lambda: config.SORT_BY_RELEVANCE)
    sort_columns: Optional[List[str]] = Field(default=None)
    page: int = Field(default=0, ge=0)
    per_page: int = Field(default_factory=lambda: config.PER_PAGE, ge=0)

    @field_validator("search", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return "" if value is None else value


class JoinConfig(SQLModel):
    first: str
    second: str
    how: JoinType = Field(default=JoinType.LEFT)


class SearchableConfig(SQLModel):
    """
    Searchable configuration of a model.

    {
        "columns": ["posts.title", "description", ["author_name", "authors.name"]],
        "sortable_columns": ["posts.created_at"],
        "joins": {"authors": ["authors.id", "posts.author_id"]},
    }

    Columns left as None fall back to the model table's columns. Searchable treats a
    missing key of a configuration it is given as an empty list.
    """

    columns: Optional[ColumnDeclarationList] = Field(default=None)
    sortable_columns: Optional[ColumnDeclarationList] = Field(default=None)
    joins: Dict[str, JoinConfig] = Field(default_factory=dict)

    @field_validator("columns", "sortable_columns", mode="before")
    @classmethod
    def normalize_columns(cls, value):
        if value is None or isinstance(value, dict):
            return None if value is None else normalize_declarations(value)
        return normalize_declarations([tuple(item) if isinstance(item, list) else item for item in value])

    @field_validator("joins", mode="before")
    @classmethod
    def normalize_joins(cls, value):
        if value is None:
            return {}
        joins = {}
        for table_name, join in value.items():
            if isinstance(join, (list, tuple)):
                join = dict(zip(("first", "second", "how"), join))
            joins[table_name] = join
        return joins
