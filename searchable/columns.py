"""
Column registry for searchable queries
Resolves logical column keys like 'author_name' to physical SQL columns like 'authors.name'
"""

import threading
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from sqlalchemy import literal_column
from sqlalchemy.sql.elements import Label

from .logging_setup import logger
from .utils import ALIAS_SEPARATOR, extract_key_from_select, strip_alias

Declaration = Tuple[Optional[str], str]
ColumnDeclarations = Union[Mapping[Any, str], Iterable[Union[str, Tuple[str, str]]], "Columns"]


def normalize_declarations(columns: ColumnDeclarations) -> List[Declaration]:
    """
    Normalize column declarations into ordered (key, column) pairs.

    Accepts a dict (string keys are logical keys, integer keys are positional),
    a list of column strings, or a list mixing strings and (key, column) pairs.
    Positional declarations get a key of None.
    """
    if isinstance(columns, Columns):
        return list(columns.declarations)

    if isinstance(columns, Mapping):
        items = columns.items()
    else:
        items = []
        for column in columns:
            if isinstance(column, tuple):
                items.append(column)
            else:
                items.append((None, column))

    return [(key if isinstance(key, str) else None, column) for key, column in items]


class Columns:
    """
    A smart columns object that lets you reference actual table columns with key names.

    Columns.make([
        'posts.title',
        'description',
        ('author_name', 'authors.name'),
        'authors.age as author_age',
    ])
    """

    def __init__(self, columns: ColumnDeclarations):
        self.declarations: List[Declaration] = normalize_declarations(columns)
        self._keyed: Dict[str, str] = {key: column for key, column in self.declarations if key is not None}
        self._selects: List[str] = []
        self._keys: List[str] = []
        self._cache: Dict[str, str] = {}
        self._lock = threading.Lock()

    @classmethod
    def make(cls, columns: ColumnDeclarations) -> "Columns":
        return cls(columns)

    def __len__(self) -> int:
        return len(self.declarations)

    def __iter__(self):
        return iter(self.declarations)

    def __contains__(self, key: str) -> bool:
        return self.find(key) is not None

    def selects(self) -> List[str]:
        """Return the columns as select expressions, aliased as 'column as key' where a key is declared."""
        if self._selects:
            return list(self._selects)

        selects = []
        for key, column in self.declarations:
            if key is not None:
                column = f"{column}{ALIAS_SEPARATOR}{key}"
            selects.append(column)

        self._selects = selects
        return list(self._selects)

    def keys(self) -> List[str]:
        """Return the column keys which can be used as reference names, e.g. for sorting."""
        if not self._keys:
            self._keys = [extract_key_from_select(select) for select in self.selects()]
        return list(self._keys)

    def actual(self) -> List[str]:
        """Return the actual columns, without aliases."""
        return [column if key is not None else strip_alias(column) for key, column in self.declarations]

    def find(self, key: str) -> Optional[str]:
        """
        Find the actual column represented by the given key.

        Returns None when no column matches.
        """
        if key in self._keyed:
            return self._keyed[key]

        cached = self._cache.get(key)
        if cached is not None:
            return cached

        alias_suffix = f"{ALIAS_SEPARATOR}{key}"
        for _, column in self.declarations:
            if column == key or column.endswith(f".{key}"):
                return self._remember(key, column)

            if column.endswith(alias_suffix):
                return self._remember(key, column[: -len(alias_suffix)])

        return None

    def get(self, key: str) -> Optional[str]:
        """Alias of find()"""
        return self.find(key)

    def select_columns(self) -> List[Label]:
        """Return the select expressions as SQLAlchemy columns labelled with their keys."""
        return [
            literal_column(strip_alias(select)).label(key)
            for select, key in zip(self.selects(), self.keys())
        ]

    def merge(self, other: ColumnDeclarations) -> "Columns":
        """Return a new registry holding these declarations followed by the other ones"""
        return Columns(self.declarations + normalize_declarations(other))

    def _remember(self, key: str, column: str) -> str:
        with self._lock:
            self._cache.setdefault(key, column)
            logger.debug(f"Resolved column key {key!r} to {column!r}")
            return self._cache[key]

    def __repr__(self) -> str:
        return f"Columns({self.selects()!r})"
