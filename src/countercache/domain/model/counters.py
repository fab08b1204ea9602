"""Counter definitions and the values derived from them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .enums import CountSource
    from .relationships import RelationshipDescriptor


@dataclass(frozen=True, slots=True)
class CounterDefinition:
    """A registered rule keeping ``counter_cache_name`` in sync with a count.

    ``counted_type`` is the type whose rows are counted. ``relation`` is the
    path of relationship names leading from the counted type to the record that
    carries the counter; a single hop means the counter lives on the direct
    parent.
    """

    counted_type: type
    counter_cache_name: str
    relation: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.relation:
            raise ValueError("counter relation path must not be empty")
        if not self.counter_cache_name:
            raise ValueError("counter cache name must not be empty")

    def tracks(self, relationship_name: str) -> bool:
        return self.relation == (relationship_name,)


@dataclass(frozen=True, slots=True)
class InverseCandidate:
    """The reverse relationship whose counter targets the relationship under resolution."""

    relationship: RelationshipDescriptor
    definition: CounterDefinition

    @property
    def counter_cache_name(self) -> str:
        return self.definition.counter_cache_name


@dataclass(frozen=True, slots=True)
class CountResult:
    """Outcome of a count computation.

    ``loaded_empty`` records whether the owner's collection was marked as
    loaded-empty as a side effect.
    """

    count: int
    raw_count: int
    source: CountSource
    loaded_empty: bool = False
