"""Dashboard search configuration."""

from dashsearch.dashboard.attributes import AttributeDescriptor, AttributeKind, AttributeSet
from dashsearch.dashboard.config import DashboardConfig
from dashsearch.dashboard.filters import CollectionFilter, FilterRegistry

__all__ = [
    "AttributeDescriptor",
    "AttributeKind",
    "AttributeSet",
    "CollectionFilter",
    "DashboardConfig",
    "FilterRegistry",
]
