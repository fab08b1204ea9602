"""Application entry points wiring the catalog, registry and SQLAlchemy session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from countercache.adapters.sqlalchemy import SqlAlchemyRecordAccessor, build_catalog
from countercache.config import CounterCacheConfig
from countercache.domain.counting import CountComputer
from countercache.domain.model import RelationshipKind
from countercache.domain.resolution import CounterAttributeResolver

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.orm import Session, registry

    from countercache.domain.catalog import MetadataCatalog
    from countercache.domain.model import RelationshipDescriptor
    from countercache.domain.registry import CounterRegistry

log = getLogger(__name__)


class ResolutionSource(StrEnum):
    EXPLICIT = "explicit"
    INVERSE = "inverse"
    CONVENTION = "convention"


@dataclass(frozen=True, slots=True)
class ResolutionReport:
    """How one has-many relationship's counter attribute was resolved."""

    owner: str
    relationship: str
    attribute: str
    source: ResolutionSource


class CounterCache:
    """Resolve counter attributes and count collections for mapped records."""

    def __init__(
        self,
        catalog: MetadataCatalog,
        registry: CounterRegistry,
        *,
        config: CounterCacheConfig | None = None,
    ) -> None:
        self.catalog = catalog
        self.registry = registry
        self.resolver = CounterAttributeResolver(catalog, registry, config=config)

    def relationship(self, owner_type: type, relationship_name: str) -> RelationshipDescriptor:
        return self.catalog.get_relationship(owner_type, relationship_name)

    def resolve_counter_attribute_name(self, owner_type: type, relationship_name: str) -> str:
        return self.resolver.resolve_counter_attribute_name(
            self.relationship(owner_type, relationship_name)
        )

    def computer(self, session: Session) -> CountComputer:
        return CountComputer(self.resolver, SqlAlchemyRecordAccessor(session))

    def count_records(self, session: Session, owner: object, relationship_name: str) -> int:
        descriptor = self.relationship(type(owner), relationship_name)
        return self.computer(session).count_records(owner, descriptor)

    def size(self, session: Session, owner: object, relationship_name: str) -> int:
        descriptor = self.relationship(type(owner), relationship_name)
        return self.computer(session).size(owner, descriptor)

    def describe(self) -> list[ResolutionReport]:
        reports: list[ResolutionReport] = []
        for owner_type in self.catalog.types():
            for descriptor in self.catalog.list_relationships(owner_type):
                if descriptor.kind is not RelationshipKind.HAS_MANY:
                    continue
                reports.append(self._report(descriptor))
        return reports

    def _report(self, descriptor: RelationshipDescriptor) -> ResolutionReport:
        if descriptor.counter_cache is not None:
            source = ResolutionSource.EXPLICIT
        elif self.resolver.inverse_which_updates_counter_cache(descriptor) is not None:
            source = ResolutionSource.INVERSE
        else:
            source = ResolutionSource.CONVENTION
        return ResolutionReport(
            owner=descriptor.owner_type.__name__,
            relationship=descriptor.name,
            attribute=self.resolver.resolve_counter_attribute_name(descriptor),
            source=source,
        )


def build_counter_cache(
    mappers: registry | Iterable[type],
    counters: CounterRegistry,
    *,
    config: CounterCacheConfig | None = None,
) -> CounterCache:
    """Build a counter cache over the classes mapped by ``mappers``."""

    catalog = build_catalog(mappers)
    log.info("Counter cache ready with %s registered counters", len(counters))
    return CounterCache(catalog, counters, config=config)
