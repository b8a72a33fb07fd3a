"""
Utility functions for search functionality
"""

import re
from typing import Optional

from sqlalchemy.sql import Select

ALIAS_SEPARATOR = " as "

_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")


def strip_search_str(search_str: Optional[str]) -> str:
    """Drop every character that is not an ASCII letter or digit"""
    if not search_str:
        return ""
    return _NON_ALPHANUMERIC.sub("", str(search_str))


def add_slashes(value: str) -> str:
    """Backslash-escape quotes, backslashes and NUL for embedding in a SQL string literal"""
    return (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace('"', '\\"')
        .replace("\0", "\\0")
    )


def extract_key_from_select(select: str) -> str:
    """
    Extract the reference name of a select expression.

    'authors.age as author_age' -> 'author_age'
    'posts.title'               -> 'title'
    'description'               -> 'description'
    """
    if ALIAS_SEPARATOR in select:
        return select.split(ALIAS_SEPARATOR)[-1]

    if "." in select:
        return select.rsplit(".", 1)[-1]

    return select


def strip_alias(select: str) -> str:
    """Return the raw expression of an aliased select expression"""
    if ALIAS_SEPARATOR in select:
        return select.split(ALIAS_SEPARATOR)[0]
    return select


def format_sql_query(sql: str) -> str:
    """Format SQL query for better readability"""
    formatted = " ".join(sql.split())

    clauses = ["SELECT", "FROM", "LEFT OUTER JOIN", "JOIN", "WHERE", "GROUP BY", "HAVING", "ORDER BY", "LIMIT", "OFFSET"]
    for clause in clauses:
        formatted = formatted.replace(f" {clause} ", f"\n{clause} ")

    return formatted.replace("\nLEFT OUTER\nJOIN ", "\nLEFT OUTER JOIN ")


def compile_statement(statement: Select, dialect=None) -> str:
    """Render a statement to a SQL string with bound values inlined"""
    return str(statement.compile(dialect=dialect, compile_kwargs={"literal_binds": True}))
