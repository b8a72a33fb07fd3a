"""
Search string parsers
A parser turns the raw user input into the pattern compared with LIKE
"""

from abc import ABC, abstractmethod
from typing import Any, Callable

from .utils import strip_search_str

WILDCARD = "%"


class ParserInterface(ABC):
    @abstractmethod
    def parse(self, search_str: Any) -> str:
        ...


class FuzzySearch(ParserInterface):
    """
    Loose subsequence matching, like fuzzy file pickers do.

    'abc' -> '%a%b%c%', so 'a', 'b' and 'c' must appear in order but not
    necessarily next to each other. Input without letters or digits gives '%%',
    which matches every row.
    """

    def parse(self, search_str: Any) -> str:
        stripped = strip_search_str(search_str)
        return WILDCARD + WILDCARD.join(stripped) + WILDCARD


class CustomSearch(ParserInterface):
    """Delegates parsing to a callback"""

    def __init__(self, callback: Callable[[Any], str]):
        self.callback = callback

    def parse(self, search_str: Any) -> str:
        return self.callback(search_str)
