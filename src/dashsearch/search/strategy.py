"""Comparison strategies for search clauses.

The strict strategy compares columns for exact equality with the term. The
fuzzy strategy, the default, lowercases both sides and matches the term as a
substring.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sqlalchemy import ColumnElement, String, cast, func

from dashsearch.config.settings import get_settings


class SearchMode(str, Enum):
    """How search terms are compared to column values."""

    STRICT = "strict"
    FUZZY = "fuzzy"


DEFAULT_SEARCH_MODE = SearchMode.FUZZY


@dataclass(frozen=True)
class SearchStrategy:
    """A comparison rule: how a column is compared and what value is bound.

    Attributes:
        mode: The search mode this strategy implements
        cast_length: Width of the text cast applied in fuzzy comparisons
    """

    mode: SearchMode
    cast_length: int = 256

    @classmethod
    def for_mode(cls, mode: SearchMode, cast_length: int | None = None) -> SearchStrategy:
        """Create the strategy for a mode.

        Args:
            mode: Search mode
            cast_length: Fuzzy cast width (default from settings)
        """
        if cast_length is None:
            cast_length = get_settings().search_cast_length
        return cls(mode=mode, cast_length=cast_length)

    def bound_value(self, term: str) -> str:
        """Value bound to every clause for the given term."""
        if self.mode == SearchMode.STRICT:
            return term
        return f"%{term.lower()}%"

    def comparison_template(self, qualified_column: str) -> str:
        """Positional-placeholder rendering of one comparison."""
        if self.mode == SearchMode.STRICT:
            return f"{qualified_column} = ?"
        return f"LOWER(CAST({qualified_column} AS VARCHAR({self.cast_length}))) LIKE ?"

    def comparison(self, column: ColumnElement, value: str) -> ColumnElement[bool]:
        """SQLAlchemy expression comparing a column to a bound value."""
        if self.mode == SearchMode.STRICT:
            return column == value
        return func.lower(cast(column, String(self.cast_length))).like(value)
