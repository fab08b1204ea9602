"""Relationship metadata as loaded from the mapping layer.

Descriptors are immutable and owned by the catalog; everything downstream only
reads them.
"""

from __future__ import annotations

from dataclasses import dataclass

from .enums import RelationshipKind


@dataclass(frozen=True, slots=True)
class RelationshipDescriptor:
    """One declared relationship between two record types.

    ``counter_cache`` names an explicitly configured counter attribute on the
    owner. ``limit`` bounds the number of rows the collection may expose.
    ``populatable`` is false for collections that are never held in memory
    (query-only loaders), so they can be counted but not set.
    """

    owner_type: type
    related_type: type
    name: str
    kind: RelationshipKind = RelationshipKind.HAS_MANY
    counter_cache: str | None = None
    limit: int | None = None
    populatable: bool = True

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("relationship name must not be empty")
        if self.limit is not None and self.limit < 0:
            raise ValueError(f"relationship limit must be non-negative, got {self.limit}")
        if self.counter_cache is not None and not self.counter_cache.strip():
            raise ValueError("counter_cache must not be blank")

    @property
    def belongs_to(self) -> bool:
        return self.kind is RelationshipKind.BELONGS_TO

    @property
    def is_collection(self) -> bool:
        return self.kind in (RelationshipKind.HAS_MANY, RelationshipKind.MANY_TO_MANY)

    @property
    def qualified_name(self) -> str:
        return f"{self.owner_type.__name__}.{self.name}"
