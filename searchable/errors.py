"""
Exceptions raised by the searchable package
"""


class SearchableError(Exception):
    """Base exception for searchable errors"""
    pass


class SearchConfigurationError(SearchableError):
    """Raised when a search component is used without the configuration it requires"""
    pass


class QueryNotSetError(SearchConfigurationError):
    """Raised when an operation needs a query handle that was never set"""

    def __init__(self, operation: str, owner: object):
        self.operation = operation
        self.owner_class = owner if isinstance(owner, type) else type(owner)
        super().__init__(
            f"Property query is not set. Cannot call method {operation} on object of {self.owner_class.__name__}."
        )
