"""Utility modules for dashsearch."""

from dashsearch.utils.exceptions import (
    ConfigurationError,
    DashsearchError,
    SearchError,
)

__all__ = [
    "ConfigurationError",
    "DashsearchError",
    "SearchError",
]
