"""Repository materializing dashboard searches.

Usage:
    from dashsearch.db.repositories import SearchRepository

    repo = SearchRepository(db_session, customer_dashboard)
    customers = await repo.search("jo active:")
    total = await repo.count("jo active:")
"""

import time
from typing import Any

import structlog
from sqlalchemy import Select, func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from dashsearch.core.logging import log_database_query
from dashsearch.dashboard.config import DashboardConfig
from dashsearch.db.storage import SqlAlchemyStorage
from dashsearch.search.engine import run
from dashsearch.utils.exceptions import SearchError

logger = structlog.get_logger()


class SearchRepository:
    """Executes dashboard searches against an async session.

    Attributes:
        db: The database session
        dashboard: The dashboard whose entity is searched
    """

    def __init__(self, db: AsyncSession, dashboard: DashboardConfig):
        """Initialize repository with database session and dashboard.

        Args:
            db: Async SQLAlchemy session
            dashboard: Dashboard configuration
        """
        self.db = db
        self.dashboard = dashboard

    def statement(self) -> Select:
        """Unfiltered statement selecting the dashboard's entity."""
        return select(self.dashboard.model)

    def build(self, term: str | None, scoped_resource: Select | None = None) -> Select:
        """Build the search statement without executing it.

        Args:
            term: Raw search box input
            scoped_resource: Statement to search within (default: all rows)

        Raises:
            SearchError: If ``scoped_resource`` does not select the dashboard's entity
        """
        if scoped_resource is None:
            scoped_resource = self.statement()
        elif self.dashboard.model not in _selected_entities(scoped_resource):
            raise SearchError(
                f"Statement does not select {self.dashboard.model.__name__}"
            )

        storage = SqlAlchemyStorage(self.db.get_bind().dialect)
        return run(scoped_resource, self.dashboard, term, storage=storage)

    async def search(
        self, term: str | None, scoped_resource: Select | None = None
    ) -> list[Any]:
        """Search and return the matching entities.

        Args:
            term: Raw search box input
            scoped_resource: Statement to search within (default: all rows)

        Returns:
            List of model instances
        """
        stmt = self.build(term, scoped_resource)

        started = time.perf_counter()
        result = await self.db.execute(stmt)
        rows = list(result.scalars().all())
        log_database_query(
            logger,
            "search",
            self._table_name(),
            (time.perf_counter() - started) * 1000,
            row_count=len(rows),
        )
        return rows

    async def count(self, term: str | None, scoped_resource: Select | None = None) -> int:
        """Count the rows a search yields.

        Args:
            term: Raw search box input
            scoped_resource: Statement to search within (default: all rows)

        Returns:
            Number of matching rows
        """
        stmt = self.build(term, scoped_resource)
        count_stmt = select(func.count()).select_from(stmt.subquery())

        started = time.perf_counter()
        result = await self.db.execute(count_stmt)
        total = result.scalar() or 0
        log_database_query(
            logger,
            "count",
            self._table_name(),
            (time.perf_counter() - started) * 1000,
            row_count=total,
        )
        return total

    def _table_name(self) -> str:
        return inspect(self.dashboard.model).local_table.fullname


def _selected_entities(stmt: Select) -> list[Any]:
    return [desc.get("entity") for desc in stmt.column_descriptions]
