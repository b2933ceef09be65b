"""Custom exceptions for dashsearch."""


class DashsearchError(Exception):
    """Base exception for all dashsearch errors."""

    pass


class ConfigurationError(DashsearchError):
    """Error in dashboard configuration or settings."""

    pass


class SearchError(DashsearchError):
    """Error during search operations."""

    pass
