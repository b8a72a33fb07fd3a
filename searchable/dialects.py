"""
SQL function sets used to render fuzzy predicates and relevance expressions.

LOCATE, IFNULL and CONCAT are MySQL functions. Other engines need equivalent
string-search, null-coalescing and concatenation expressions.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List

from .errors import SearchConfigurationError
from .utils import add_slashes


@dataclass(frozen=True)
class Dialect:
    """Renders the raw SQL fragments a search needs"""

    name: str
    quote: str
    ifnull: Callable[[str], str]
    concat: Callable[[List[str]], str]
    locate: Callable[[str, str, int], str]

    def literal(self, value: str) -> str:
        return f"{self.quote}{value}{self.quote}"

    def like(self, column: str, pattern: str) -> str:
        return f"{column} LIKE {self.literal(pattern)}"


def _sqlite_locate(character: str, haystack: str, position: int) -> str:
    # 1-based position of character in haystack at or after position, case-insensitive, 0 when absent
    found = f"INSTR(LOWER(SUBSTR({haystack}, {position})), LOWER('{character}'))"
    return f"(CASE WHEN {found} > 0 THEN {found} + {position - 1} ELSE 0 END)"


MYSQL = Dialect(
    name="mysql",
    quote='"',
    ifnull=lambda column: f"IFNULL(({column}), '')",
    concat=lambda parts: f"CONCAT({','.join(parts)})",
    locate=lambda character, haystack, position: f"LOCATE('{add_slashes(character)}', {haystack}, {position})",
)

SQLITE = Dialect(
    name="sqlite",
    quote="'",
    ifnull=lambda column: f"IFNULL(({column}), '')",
    concat=lambda parts: f"({' || '.join(parts)})",
    locate=lambda character, haystack, position: _sqlite_locate(character.replace("'", "''"), haystack, position),
)

DIALECTS: Dict[str, Dialect] = {
    MYSQL.name: MYSQL,
    SQLITE.name: SQLITE,
}


def get_dialect(name: str) -> Dialect:
    """Look up a dialect by name"""
    try:
        return DIALECTS[name.lower()]
    except KeyError:
        raise SearchConfigurationError(
            f"Unknown search dialect: {name}. Possible values: {', '.join(DIALECTS)}"
        )
