"""Database repositories for dashboard searches."""

from .search import SearchRepository

__all__ = [
    "SearchRepository",
]
