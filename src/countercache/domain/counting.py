"""Read-time collection counts.

``CountComputer.compute`` has one documented side effect: when the count is
zero and the owner's collection has not been loaded yet, the collection is set
to an empty list and marked loaded. Callers rely on "count == 0" meaning the
collection is already resolved, which saves a later SELECT. Query-only
collections are never populated.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

from .errors import NotACollectionError
from .model import CountResult, CountSource
from .ports import CountScope

if TYPE_CHECKING:
    from .model import RelationshipDescriptor
    from .ports import RecordAccessor
    from .resolution import CounterAttributeResolver

log = logging.getLogger(__name__)


class CountComputer:
    """Compute collection sizes, preferring cached counters over count queries."""

    def __init__(self, resolver: CounterAttributeResolver, records: RecordAccessor) -> None:
        self.resolver = resolver
        self.records = records

    def count_records(self, owner: object, descriptor: RelationshipDescriptor) -> int:
        return self.compute(owner, descriptor).count

    def compute(self, owner: object, descriptor: RelationshipDescriptor) -> CountResult:
        if not descriptor.is_collection:
            raise NotACollectionError(descriptor.qualified_name)
        raw_count, source = self._raw_count(owner, descriptor)

        loaded_empty = False
        if raw_count == 0 and self._can_short_circuit(owner, descriptor):
            self.records.set_target(owner, descriptor.name, [])
            self.records.mark_loaded(owner, descriptor.name)
            loaded_empty = True

        count = raw_count if descriptor.limit is None else min(descriptor.limit, raw_count)
        log.debug(
            "Counted %s for %s from %s (raw=%s, loaded_empty=%s)",
            count,
            descriptor.qualified_name,
            source,
            raw_count,
            loaded_empty,
        )
        return CountResult(
            count=count, raw_count=raw_count, source=source, loaded_empty=loaded_empty
        )

    def size(self, owner: object, descriptor: RelationshipDescriptor) -> int:
        """Return the loaded collection's length, or count it without loading."""

        if not descriptor.is_collection:
            raise NotACollectionError(descriptor.qualified_name)
        if descriptor.populatable and self.records.is_loaded(owner, descriptor.name):
            return len(self.records.read_target(owner, descriptor.name))
        return self.count_records(owner, descriptor)

    def _raw_count(
        self, owner: object, descriptor: RelationshipDescriptor
    ) -> tuple[int, CountSource]:
        if self.resolver.has_cached_counter(descriptor, owner, self.records):
            name = cast("str", descriptor.counter_cache)
            return self._read_counter(owner, name), CountSource.EXPLICIT_COUNTER
        inverse = self.resolver.cached_inverse_counter(descriptor, owner, self.records)
        if inverse is not None:
            count = self._read_counter(owner, inverse.counter_cache_name)
            return count, CountSource.INVERSE_COUNTER
        scope = CountScope(owner=owner, relationship=descriptor)
        return self.records.count(scope), CountSource.QUERY

    def _can_short_circuit(self, owner: object, descriptor: RelationshipDescriptor) -> bool:
        return descriptor.populatable and not self.records.is_loaded(owner, descriptor.name)

    def _read_counter(self, owner: object, name: str) -> int:
        value = self.records.read_attribute(owner, name)
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(
                f"Counter attribute {name!r} holds {type(value).__name__}, expected int"
            )
        return value
