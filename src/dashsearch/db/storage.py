"""SQLAlchemy adapter for search statements.

Supplies the storage primitives the search engine relies on: identifier
quoting, default table naming, relationship joins and translation of a
search predicate into a WHERE clause on a ``Select``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import inflection
from sqlalchemy import Select, inspect, literal_column, or_
from sqlalchemy.engine import Dialect
from sqlalchemy.engine.default import DefaultDialect
from sqlalchemy.exc import InvalidRequestError

if TYPE_CHECKING:
    from dashsearch.dashboard.attributes import AttributeDescriptor
    from dashsearch.search.predicate import SearchPredicate


class SqlAlchemyStorage:
    """Storage collaborator backed by SQLAlchemy statements.

    Identifiers are quoted with the given dialect's preparer. Without a
    dialect, ANSI double quotes are used, which SQLite and PostgreSQL accept.
    """

    def __init__(self, dialect: Dialect | None = None):
        self.dialect = dialect or DefaultDialect()
        self._preparer = self.dialect.identifier_preparer

    def quote_table_name(self, name: str) -> str:
        """Quote a table name, quoting each part of a schema-qualified name."""
        return ".".join(self._preparer.quote_identifier(part) for part in name.split("."))

    def quote_column_name(self, name: str) -> str:
        return self._preparer.quote_identifier(name)

    def pluralize(self, name: str) -> str:
        """Default table name for an attribute or entity name."""
        return inflection.pluralize(name)

    def table_name_for_entity(self, model: type, entity_name: str) -> str:
        """Table name of the mapped class called ``entity_name``.

        Looks the class up in the registry ``model`` is mapped in. A dotted
        name (``app.models.Person``) matches the fully qualified class; a bare
        name must identify exactly one mapped class.

        Raises:
            InvalidRequestError: If no class, or more than one, matches
        """
        matches = [
            mapper
            for mapper in inspect(model).registry.mappers
            if _qualified_name(mapper.class_) == entity_name
            or mapper.class_.__name__ == entity_name
        ]
        if not matches:
            raise InvalidRequestError(f"No mapped class named {entity_name!r}")
        if len(matches) > 1:
            candidates = sorted(_qualified_name(mapper.class_) for mapper in matches)
            raise InvalidRequestError(
                f"Mapped class name {entity_name!r} is ambiguous: {', '.join(candidates)}"
            )
        return matches[0].local_table.fullname

    def primary_table(self, model: type) -> str:
        """Quoted table name of the dashboard's own entity."""
        return self.quote_table_name(inspect(model).local_table.fullname)

    def related_table(self, model: type, attribute: AttributeDescriptor) -> str:
        """Quoted table name searched for an associative attribute."""
        if attribute.class_name:
            return self.quote_table_name(self.table_name_for_entity(model, attribute.class_name))
        return self.quote_table_name(self.pluralize(attribute.name))

    def join(self, stmt: Select, model: type, relation_names: list[str] | tuple[str, ...]) -> Select:
        """Inner join ``stmt`` to each named relationship of ``model``."""
        for name in relation_names:
            stmt = stmt.join(getattr(model, name))
        return stmt

    def where(self, stmt: Select, predicate: SearchPredicate) -> Select:
        """Filter ``stmt`` by the OR of the predicate's clauses.

        A predicate without clauses leaves the statement unfiltered.
        """
        if not predicate.clauses:
            return stmt

        strategy = predicate.strategy
        return stmt.where(
            or_(
                *(
                    strategy.comparison(literal_column(clause.qualified_column), clause.value)
                    for clause in predicate.clauses
                )
            )
        )


def _qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"
