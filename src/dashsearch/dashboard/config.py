"""Dashboard configuration consumed by the search engine.

A dashboard binds a mapped entity class to its attribute descriptors, an
optional search mode and its named collection filters. Configuration is
resolved once, when the dashboard is loaded, and is read-only afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import structlog

from dashsearch.dashboard.attributes import AttributeDescriptor, AttributeSet
from dashsearch.dashboard.filters import CollectionFilter, FilterRegistry
from dashsearch.search.strategy import SearchMode
from dashsearch.utils.exceptions import ConfigurationError

logger = structlog.get_logger()


@dataclass(frozen=True)
class DashboardConfig:
    """Search configuration for one entity type.

    Attributes:
        model: The SQLAlchemy mapped class the dashboard lists
        attributes: Attribute descriptors in declaration order
        search_mode: Explicit search mode, or None to use the default
        collection_filters: Named filters available as ``name:`` tokens
        name: Display name used in logs (defaults to the model's class name)
    """

    model: type
    attributes: AttributeSet
    search_mode: SearchMode | None = None
    collection_filters: FilterRegistry = field(default_factory=FilterRegistry)
    name: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", self.model.__name__)

    @classmethod
    def build(
        cls,
        model: type,
        attributes: Mapping[str, AttributeDescriptor] | list[AttributeDescriptor],
        *,
        search_mode: SearchMode | str | None = None,
        collection_filters: Mapping[Any, CollectionFilter] | None = None,
        name: str = "",
    ) -> DashboardConfig:
        """Build a configuration from loosely typed host values."""
        if isinstance(attributes, Mapping):
            attribute_set = AttributeSet.from_mapping(attributes)
        else:
            attribute_set = AttributeSet(attributes)

        return cls(
            model=model,
            attributes=attribute_set,
            search_mode=_coerce_search_mode(search_mode),
            collection_filters=FilterRegistry(collection_filters),
            name=name,
        )

    @classmethod
    def from_dashboard_class(cls, dashboard_class: type) -> DashboardConfig:
        """Read configuration from a host dashboard class.

        The class declares its settings as constants:

            class CustomerDashboard:
                MODEL = Customer
                ATTRIBUTE_TYPES = {"name": AttributeDescriptor.scalar("name")}
                SEARCH_MODE = "strict"              # optional, default fuzzy
                COLLECTION_FILTERS = {"vip": ...}   # optional

        ``FILTER_MODE`` is accepted as a legacy alias of ``SEARCH_MODE``.

        Raises:
            ConfigurationError: If MODEL or ATTRIBUTE_TYPES is missing
        """
        model = getattr(dashboard_class, "MODEL", None)
        if model is None:
            raise ConfigurationError(f"{dashboard_class.__name__} does not declare MODEL")

        attribute_types = getattr(dashboard_class, "ATTRIBUTE_TYPES", None)
        if attribute_types is None:
            raise ConfigurationError(
                f"{dashboard_class.__name__} does not declare ATTRIBUTE_TYPES"
            )

        mode = getattr(dashboard_class, "SEARCH_MODE", None)
        if mode is None:
            mode = getattr(dashboard_class, "FILTER_MODE", None)

        return cls.build(
            model,
            attribute_types,
            search_mode=mode,
            collection_filters=getattr(dashboard_class, "COLLECTION_FILTERS", None),
            name=dashboard_class.__name__,
        )


def _coerce_search_mode(value: SearchMode | str | None) -> SearchMode | None:
    """Normalize a declared search mode; anything but strict searches fuzzily."""
    if value is None or isinstance(value, SearchMode):
        return value
    name = value.value if isinstance(value, Enum) else str(value)
    if name.lower() == SearchMode.STRICT.value:
        return SearchMode.STRICT
    if name.lower() != SearchMode.FUZZY.value:
        logger.warning("search_mode_unrecognized", search_mode=name, fallback="fuzzy")
    return SearchMode.FUZZY
