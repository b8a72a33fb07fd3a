"""
Table column listing cache
Owned by whoever composes searches, so its lifetime is explicit
"""

import threading
from typing import Dict, List, Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from .logging_setup import logger


class TableColumns:
    """Lists and caches the column names of database tables"""

    def __init__(self, engine: Engine, schema: Optional[str] = None):
        self.engine = engine
        self.schema = schema
        self._cache: Dict[str, List[str]] = {}
        self._lock = threading.Lock()

    def get(self, table_name: str) -> List[str]:
        with self._lock:
            if table_name not in self._cache:
                columns = [column["name"] for column in inspect(self.engine).get_columns(table_name, schema=self.schema)]
                logger.debug(f"Cached {len(columns)} column(s) of table {table_name}")
                self._cache[table_name] = columns
            return list(self._cache[table_name])

    def forget(self, table_name: Optional[str] = None) -> None:
        """Drop one cached table, or all of them"""
        with self._lock:
            if table_name is None:
                self._cache.clear()
            else:
                self._cache.pop(table_name, None)

    def __contains__(self, table_name: str) -> bool:
        return table_name in self._cache
