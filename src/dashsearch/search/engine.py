"""Search engine for dashboard collections.

Runs a parsed search box query against a scoped collection: the free-text
term is matched across the dashboard's searchable attributes, then each
named filter narrows the matches in the order it was typed.

Usage:
    from sqlalchemy import select
    from dashsearch.search.engine import run

    stmt = run(select(Customer), customer_dashboard, "jo active:")
    customers = (await session.execute(stmt)).scalars().all()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import Select

from dashsearch.core.logging import LogContext
from dashsearch.db.storage import SqlAlchemyStorage
from dashsearch.search.predicate import PredicateBuilder
from dashsearch.search.query import Query
from dashsearch.search.strategy import DEFAULT_SEARCH_MODE, SearchMode, SearchStrategy

if TYPE_CHECKING:
    from dashsearch.dashboard.config import DashboardConfig

logger = structlog.get_logger()


def resolve_mode(dashboard: DashboardConfig) -> SearchMode:
    """Search mode declared by the dashboard, fuzzy when none is declared."""
    if dashboard.search_mode is not None:
        return dashboard.search_mode
    return DEFAULT_SEARCH_MODE


class SearchEngine:
    """Applies one query to one scoped collection.

    Instances are request scoped: build one per search and discard it.

    Args:
        scoped_resource: Statement selecting the rows visible to the caller
        dashboard: Dashboard configuration
        query: Parsed query
        strategy: Comparison rule for the search term
        storage: Storage adapter (default: ANSI-quoting SQLAlchemy adapter)
    """

    def __init__(
        self,
        scoped_resource: Select,
        dashboard: DashboardConfig,
        query: Query,
        strategy: SearchStrategy,
        storage: SqlAlchemyStorage | None = None,
    ):
        self.scoped_resource = scoped_resource
        self.dashboard = dashboard
        self.query = query
        self.strategy = strategy
        self.storage = storage or SqlAlchemyStorage()

    def execute(self) -> Select:
        """Return the searched and filtered statement.

        A blank query returns the scoped resource untouched.
        """
        if self.query.is_blank:
            logger.debug("search_blank_query")
            return self.scoped_resource

        results = self.run_search(self.scoped_resource)
        return self.apply_filters(results)

    def run_search(self, resource: Select) -> Select:
        """Join searched relations and filter by the OR of all clauses."""
        predicate = PredicateBuilder(self.dashboard, self.storage, self.strategy).build(
            self.query.terms
        )
        logger.debug(
            "search_predicate_built",
            joins=list(predicate.joins),
            template=predicate.template,
            fields_count=predicate.fields_count,
        )

        stmt = self.storage.join(resource, self.dashboard.model, predicate.joins)
        return self.storage.where(stmt, predicate)

    def apply_filters(self, resource: Select) -> Select:
        """Narrow ``resource`` by each filter named in the query, in order.

        Unknown filter names are skipped.
        """
        registry = self.dashboard.collection_filters
        for name in self.query.filters:
            predicate = registry.get(name)
            if predicate is None:
                logger.debug("filter_unknown", filter=name)
                continue
            resource = predicate(resource)
            logger.debug("filter_applied", filter=name)
        return resource


def run(
    scoped_resource: Select,
    dashboard: DashboardConfig,
    term: str | None,
    *,
    storage: SqlAlchemyStorage | None = None,
) -> Select:
    """Search ``scoped_resource`` with a raw search box string.

    Args:
        scoped_resource: Statement selecting the dashboard's entity
        dashboard: Dashboard configuration
        term: Raw search box input
        storage: Storage adapter (default: ANSI-quoting SQLAlchemy adapter)

    Returns:
        A new, unexecuted statement; ``scoped_resource`` itself when the
        query is blank
    """
    query = Query.parse(term)
    mode = resolve_mode(dashboard)

    with LogContext(dashboard=dashboard.name, search_mode=mode.value):
        logger.debug(
            "search_started",
            terms=query.terms,
            filters=list(query.filters),
        )
        engine = SearchEngine(
            scoped_resource,
            dashboard,
            query,
            SearchStrategy.for_mode(mode),
            storage=storage,
        )
        return engine.execute()
