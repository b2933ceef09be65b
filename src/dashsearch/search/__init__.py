"""Search system module for dashboard collections."""

from dashsearch.search.engine import SearchEngine, resolve_mode, run
from dashsearch.search.predicate import PredicateBuilder, SearchClause, SearchPredicate
from dashsearch.search.query import Query
from dashsearch.search.strategy import DEFAULT_SEARCH_MODE, SearchMode, SearchStrategy

__all__ = [
    "DEFAULT_SEARCH_MODE",
    "PredicateBuilder",
    "Query",
    "SearchClause",
    "SearchEngine",
    "SearchMode",
    "SearchPredicate",
    "SearchStrategy",
    "resolve_mode",
    "run",
]
