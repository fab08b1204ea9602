"""Counter attribute resolution.

Given a relationship, find the attribute on the owner that already holds the
size of the collection. Sources are checked in priority order:

1. an explicitly configured counter on the relationship itself
2. a counter registered on the related type through a reverse (belongs-to)
   relationship pointing back at the owner
3. the naming convention ``<relationship><suffix>``

Only the first two are authoritative. The convention name says nothing about
whether such a column exists; callers must check the record before trusting it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from countercache.config import CounterCacheConfig

from .model import InverseCandidate

if TYPE_CHECKING:
    from .catalog import MetadataCatalog
    from .model import CounterDefinition, RelationshipDescriptor
    from .ports import RecordAccessor
    from .registry import CounterRegistry

log = logging.getLogger(__name__)


class CounterAttributeResolver:
    """Resolve counter attribute names from catalog metadata and counter registrations."""

    def __init__(
        self,
        catalog: MetadataCatalog,
        registry: CounterRegistry,
        *,
        config: CounterCacheConfig | None = None,
    ) -> None:
        self.catalog = catalog
        self.registry = registry
        self.config = config or CounterCacheConfig()

    def resolve_counter_attribute_name(self, descriptor: RelationshipDescriptor) -> str:
        name = self.authoritative_counter_attribute_name(descriptor)
        if name is not None:
            return name
        fallback = self.config.convention_name(descriptor.name)
        log.debug("No registered counter for %s, using %s", descriptor.qualified_name, fallback)
        return fallback

    def authoritative_counter_attribute_name(
        self, descriptor: RelationshipDescriptor
    ) -> str | None:
        """Return the explicit or inverse-registered counter name, or ``None``."""

        if descriptor.counter_cache is not None:
            return descriptor.counter_cache
        inverse = self.inverse_which_updates_counter_cache(descriptor)
        if inverse is None:
            return None
        return inverse.counter_cache_name

    def inverse_which_updates_counter_cache(
        self, descriptor: RelationshipDescriptor
    ) -> InverseCandidate | None:
        """Return the first reverse relationship whose counter targets ``descriptor``.

        Reverse relationships are scanned in the related type's declaration
        order; the first one that belongs to the owner and carries a matching
        counter definition wins.
        """

        for inverse in self.catalog.list_relationships(descriptor.related_type):
            if not inverse.belongs_to:
                continue
            # Subclass owners inherit counters kept for their mapped base.
            if not issubclass(descriptor.owner_type, inverse.related_type):
                continue
            definition = self._counter_for(descriptor, inverse)
            if definition is not None:
                log.debug(
                    "Resolved %s to counter %s via %s",
                    descriptor.qualified_name,
                    definition.counter_cache_name,
                    inverse.qualified_name,
                )
                return InverseCandidate(relationship=inverse, definition=definition)
        return None

    def has_cached_counter(
        self,
        descriptor: RelationshipDescriptor,
        owner: object,
        records: RecordAccessor,
    ) -> bool:
        """Return whether an explicitly configured counter is present on ``owner``."""

        if descriptor.counter_cache is None:
            return False
        return records.attribute_present(owner, descriptor.counter_cache)

    def has_cached_counter_by_convention(
        self,
        descriptor: RelationshipDescriptor,
        owner: object,
        records: RecordAccessor,
    ) -> bool:
        """Return whether a registered inverse counter exists and ``owner`` carries it.

        A counter may be registered for the related type without the column
        having been added to this particular owner, hence the presence check.
        """

        return self.cached_inverse_counter(descriptor, owner, records) is not None

    def cached_inverse_counter(
        self,
        descriptor: RelationshipDescriptor,
        owner: object,
        records: RecordAccessor,
    ) -> InverseCandidate | None:
        inverse = self.inverse_which_updates_counter_cache(descriptor)
        if inverse is None or not records.attribute_present(owner, inverse.counter_cache_name):
            return None
        return inverse

    def _counter_for(
        self,
        descriptor: RelationshipDescriptor,
        inverse: RelationshipDescriptor,
    ) -> CounterDefinition | None:
        for definition in self.registry.list_counter_definitions(descriptor.related_type):
            if definition.counted_type is descriptor.related_type and definition.tracks(
                inverse.name
            ):
                return definition
        return None
