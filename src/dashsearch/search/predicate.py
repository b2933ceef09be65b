"""Search predicate construction.

Turns a dashboard's searchable attributes and a search term into the list of
relations to join and the ordered comparison clauses to OR together. Each
clause carries its own bound value, so clauses and values cannot drift out of
alignment.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from dashsearch.search.strategy import SearchStrategy

if TYPE_CHECKING:
    from dashsearch.dashboard.attributes import AttributeDescriptor
    from dashsearch.dashboard.config import DashboardConfig
    from dashsearch.db.storage import SqlAlchemyStorage


@dataclass(frozen=True)
class SearchClause:
    """One column comparison and the value bound to it."""

    table: str
    column: str
    value: str

    @property
    def qualified_column(self) -> str:
        return f"{self.table}.{self.column}"


@dataclass(frozen=True)
class SearchPredicate:
    """Joins and OR-combined clauses for one search term.

    Attributes:
        joins: Relationship names to join, in declaration order
        clauses: Comparisons in attribute then field order
        strategy: Comparison rule used for every clause
    """

    joins: tuple[str, ...]
    clauses: tuple[SearchClause, ...]
    strategy: SearchStrategy

    @property
    def fields_count(self) -> int:
        return len(self.clauses)

    @property
    def values(self) -> tuple[str, ...]:
        """Bound values, positionally aligned with the clauses."""
        return tuple(clause.value for clause in self.clauses)

    @property
    def template(self) -> str:
        """Clauses rendered with positional ``?`` placeholders, OR-combined."""
        return " OR ".join(
            self.strategy.comparison_template(clause.qualified_column) for clause in self.clauses
        )


class PredicateBuilder:
    """Builds the search predicate for a dashboard.

    Args:
        dashboard: Dashboard configuration supplying the attributes
        storage: Storage adapter used for table naming and quoting
        strategy: Comparison rule
    """

    def __init__(
        self,
        dashboard: DashboardConfig,
        storage: SqlAlchemyStorage,
        strategy: SearchStrategy,
    ):
        self.dashboard = dashboard
        self.storage = storage
        self.strategy = strategy

    def build(self, term: str) -> SearchPredicate:
        """Build joins and clauses for ``term``."""
        attributes = self.dashboard.attributes
        value = self.strategy.bound_value(term)

        clauses: list[SearchClause] = []
        for attribute in attributes.searchable():
            if not attribute.field_list:
                continue
            table = self._table_for(attribute)
            for field in attribute.field_list:
                clauses.append(
                    SearchClause(
                        table=table,
                        column=self.storage.quote_column_name(field),
                        value=value,
                    )
                )

        return SearchPredicate(
            joins=tuple(attributes.join_targets()),
            clauses=tuple(clauses),
            strategy=self.strategy,
        )

    def _table_for(self, attribute: AttributeDescriptor) -> str:
        if attribute.associative:
            return self.storage.related_table(self.dashboard.model, attribute)
        return self.storage.primary_table(self.dashboard.model)
