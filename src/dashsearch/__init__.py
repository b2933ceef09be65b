"""dashsearch: attribute-driven search and filtering for dashboard collections."""

from dashsearch.dashboard import (
    AttributeDescriptor,
    AttributeKind,
    AttributeSet,
    DashboardConfig,
    FilterRegistry,
)
from dashsearch.search import Query, SearchEngine, SearchMode, SearchStrategy, resolve_mode, run

__version__ = "0.1.0"

__all__ = [
    "AttributeDescriptor",
    "AttributeKind",
    "AttributeSet",
    "DashboardConfig",
    "FilterRegistry",
    "Query",
    "SearchEngine",
    "SearchMode",
    "SearchStrategy",
    "resolve_mode",
    "run",
]
