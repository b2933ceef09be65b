"""Named collection filters.

A collection filter narrows a scoped collection (a SQLAlchemy ``Select``)
to a subset of its rows. Dashboards register filters by name; users invoke
them from the search box with ``name:`` tokens.
"""

from collections.abc import Callable, Iterator, Mapping
from typing import Any

from sqlalchemy import Select

from dashsearch.utils.exceptions import ConfigurationError

CollectionFilter = Callable[[Select], Select]


class FilterRegistry(Mapping[str, CollectionFilter]):
    """Read-only mapping of filter name to predicate.

    Keys are normalized to strings when the registry is built, so hosts may
    declare filters keyed by enum members or other str-like values.
    """

    def __init__(self, filters: Mapping[Any, CollectionFilter] | None = None):
        entries: dict[str, CollectionFilter] = {}
        for key, predicate in (filters or {}).items():
            if not callable(predicate):
                raise ConfigurationError(f"Collection filter {key!r} is not callable")
            name = key.value if hasattr(key, "value") else key
            entries[str(name)] = predicate
        self._entries = entries

    def __getitem__(self, name: str) -> CollectionFilter:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"<FilterRegistry({', '.join(self._entries)})>"
