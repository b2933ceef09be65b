"""Attribute descriptors for dashboard search configuration.

Each dashboard declares, per attribute of its entity, whether the attribute
takes part in free-text search and, for associations, which fields of the
related entity are searched.

Usage:
    from dashsearch.dashboard.attributes import AttributeDescriptor, AttributeSet

    attributes = AttributeSet(
        [
            AttributeDescriptor.scalar("name"),
            AttributeDescriptor.association(
                "owner", searchable_fields=["first_name", "last_name"]
            ),
            AttributeDescriptor.scalar("created_at", searchable=False),
        ]
    )
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dashsearch.utils.exceptions import ConfigurationError


class AttributeKind(str, Enum):
    """Whether an attribute is a plain column or a relation to another entity."""

    SCALAR = "scalar"
    ASSOCIATION = "association"


class AttributeDescriptor(BaseModel):
    """Static search metadata for one attribute of a dashboard entity.

    Attributes:
        name: Attribute (column or relationship) name on the entity
        searchable: Whether the attribute takes part in free-text search
        kind: Scalar column or association
        searchable_fields: Fields of the related entity to search (associations only)
        class_name: Related entity name, overriding the default table derived
            from the attribute name
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    searchable: bool = False
    kind: AttributeKind = AttributeKind.SCALAR
    searchable_fields: tuple[str, ...] = ()
    class_name: str | None = None

    @model_validator(mode="after")
    def _check_association_options(self) -> AttributeDescriptor:
        if self.kind == AttributeKind.SCALAR and self.class_name is not None:
            raise ValueError(f"class_name is only valid for associations: {self.name}")
        return self

    @classmethod
    def scalar(cls, name: str, *, searchable: bool = True) -> AttributeDescriptor:
        """Describe a plain column attribute."""
        return cls(name=name, searchable=searchable, kind=AttributeKind.SCALAR)

    @classmethod
    def association(
        cls,
        name: str,
        *,
        searchable_fields: Iterable[str] = (),
        class_name: str | None = None,
        searchable: bool | None = None,
    ) -> AttributeDescriptor:
        """Describe a relation to another entity.

        The association is searchable whenever it names at least one field,
        unless ``searchable`` says otherwise.
        """
        fields = tuple(searchable_fields)
        return cls(
            name=name,
            searchable=bool(fields) if searchable is None else searchable,
            kind=AttributeKind.ASSOCIATION,
            searchable_fields=fields,
            class_name=class_name,
        )

    @property
    def associative(self) -> bool:
        return self.kind == AttributeKind.ASSOCIATION

    @property
    def field_list(self) -> tuple[str, ...]:
        """Fields compared for this attribute, in declaration order."""
        if self.associative:
            return self.searchable_fields
        return (self.name,)


class AttributeSet(Mapping[str, AttributeDescriptor]):
    """Read-only, ordered mapping of attribute name to descriptor.

    Declaration order is preserved; it determines the order of the
    generated search clauses.
    """

    def __init__(self, descriptors: Iterable[AttributeDescriptor] = ()):
        entries: dict[str, AttributeDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in entries:
                raise ConfigurationError(f"Duplicate attribute: {descriptor.name}")
            entries[descriptor.name] = descriptor
        self._entries = entries

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, AttributeDescriptor]) -> AttributeSet:
        """Build from a host mapping of name to descriptor.

        Keys are authoritative: a descriptor declared under a different key is
        renamed to match it.
        """
        descriptors = []
        for key, descriptor in mapping.items():
            if not isinstance(descriptor, AttributeDescriptor):
                raise ConfigurationError(
                    f"Attribute {key!r} is not an AttributeDescriptor: {descriptor!r}"
                )
            if descriptor.name != str(key):
                descriptor = descriptor.model_copy(update={"name": str(key)})
            descriptors.append(descriptor)
        return cls(descriptors)

    def __getitem__(self, name: str) -> AttributeDescriptor:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"<AttributeSet({', '.join(self._entries)})>"

    def searchable(self) -> list[AttributeDescriptor]:
        """Searchable attributes in declaration order."""
        return [d for d in self._entries.values() if d.searchable]

    def join_targets(self) -> list[str]:
        """Names of the searchable associations, in declaration order."""
        return [d.name for d in self.searchable() if d.associative]
