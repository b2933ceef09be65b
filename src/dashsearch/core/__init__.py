"""Core services and utilities for dashsearch."""

from .logging import (
    LogContext,
    bind_contextvars,
    clear_contextvars,
    get_logger,
    log_database_query,
    setup_logging,
    unbind_contextvars,
)

__all__ = [
    "LogContext",
    "bind_contextvars",
    "clear_contextvars",
    "get_logger",
    "log_database_query",
    "setup_logging",
    "unbind_contextvars",
]
