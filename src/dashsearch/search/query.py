"""Search box query parsing.

A raw search string is split on whitespace into filter tokens and search
terms. A filter token is a word immediately followed by a single trailing
colon (``active:``); it names a collection filter. Every other token is part
of the free-text search term.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

FILTER_TOKEN = re.compile(r"\w+:", re.ASCII)


@dataclass(frozen=True)
class Query:
    """A parsed search box query.

    Attributes:
        original: The raw input string
        filters: Filter names in order of appearance, duplicates kept
        terms: Non-filter tokens joined by single spaces
    """

    original: str
    filters: tuple[str, ...] = ()
    terms: str = ""

    @classmethod
    def parse(cls, raw: str | None) -> Query:
        """Split a raw search string into filters and terms.

        Args:
            raw: Search box input; None is treated as an empty string

        Returns:
            Parsed Query
        """
        original = "" if raw is None else str(raw)
        filters: list[str] = []
        terms: list[str] = []

        for word in original.split():
            if FILTER_TOKEN.fullmatch(word):
                filters.append(word[:-1])
            else:
                terms.append(word)

        return cls(original=original, filters=tuple(filters), terms=" ".join(terms))

    @property
    def is_blank(self) -> bool:
        """True when there is neither a search term nor a filter."""
        return not self.terms and not self.filters

    def __str__(self) -> str:
        return self.original
