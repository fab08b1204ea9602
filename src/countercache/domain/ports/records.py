"""Ports for reading owning records and counting their collections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from countercache.domain.model import RelationshipDescriptor


@dataclass(frozen=True, slots=True)
class CountScope:
    """The rows of ``relationship`` belonging to ``owner``.

    Storage applies the relationship's base filter only; row limits are
    applied by the caller.
    """

    owner: object
    relationship: RelationshipDescriptor


@runtime_checkable
class RecordAccessor(Protocol):
    """Storage/record contract consumed by the count computer."""

    def read_attribute(self, record: object, name: str) -> object: ...

    def attribute_present(self, record: object, name: str) -> bool: ...

    def count(self, scope: CountScope) -> int: ...

    def is_loaded(self, record: object, relationship: str) -> bool: ...

    def read_target(self, record: object, relationship: str) -> Sequence[object]: ...

    def set_target(self, record: object, relationship: str, items: Sequence[object]) -> None: ...

    def mark_loaded(self, record: object, relationship: str) -> None: ...
