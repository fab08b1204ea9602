"""Relationship metadata catalog.

The catalog is built once from an iterable of descriptors and never mutated
afterwards. Per-type declaration order is preserved: inverse resolution picks
the first qualifying reverse relationship, so the order is part of the
contract.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from .errors import DuplicateRelationshipError, UnknownRelationshipError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .model import RelationshipDescriptor


class MetadataCatalog:
    """Read-only index of declared relationships keyed by owning type."""

    __slots__ = ("_by_name", "_by_type")

    def __init__(self, relationships: Iterable[RelationshipDescriptor] = ()) -> None:
        ordered: dict[type, list[RelationshipDescriptor]] = {}
        by_name: dict[tuple[type, str], RelationshipDescriptor] = {}
        for descriptor in relationships:
            key = (descriptor.owner_type, descriptor.name)
            if key in by_name:
                raise DuplicateRelationshipError(
                    f"{descriptor.qualified_name} is declared more than once"
                )
            by_name[key] = descriptor
            ordered.setdefault(descriptor.owner_type, []).append(descriptor)

        self._by_type: Mapping[type, tuple[RelationshipDescriptor, ...]] = MappingProxyType(
            {owner: tuple(items) for owner, items in ordered.items()}
        )
        self._by_name: Mapping[tuple[type, str], RelationshipDescriptor] = MappingProxyType(
            by_name
        )

    def __len__(self) -> int:
        return len(self._by_name)

    def __repr__(self) -> str:
        return f"MetadataCatalog(types={len(self._by_type)}, relationships={len(self)})"

    def types(self) -> tuple[type, ...]:
        return tuple(self._by_type)

    def get_relationship(self, owner_type: type, name: str) -> RelationshipDescriptor:
        try:
            return self._by_name[(owner_type, name)]
        except KeyError:
            raise UnknownRelationshipError(owner_type, name) from None

    def list_relationships(self, owner_type: type) -> tuple[RelationshipDescriptor, ...]:
        return self._by_type.get(owner_type, ())
