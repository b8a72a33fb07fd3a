import os

SEARCH_OPERATOR = os.environ.get("SEARCHABLE_OPERATOR", "where")
SORT_BY_RELEVANCE = os.environ.get("SEARCHABLE_SORT_BY_RELEVANCE", "true").lower() in ("1", "true", "yes", "on")
SORT_INDEX = os.environ.get("SEARCHABLE_SORT_INDEX", "sort_index")
DIALECT = os.environ.get("SEARCHABLE_DIALECT", "mysql")
LOG_LEVEL = os.environ.get("SEARCHABLE_LOG_LEVEL", "WARNING")
PER_PAGE = int(os.environ.get("SEARCHABLE_PER_PAGE", "0"))
