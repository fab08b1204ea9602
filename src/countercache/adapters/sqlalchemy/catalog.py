"""Build a relationship catalog from SQLAlchemy mapper metadata."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import RelationshipDirection, configure_mappers, registry

from countercache.domain.catalog import MetadataCatalog
from countercache.domain.model import RelationshipDescriptor, RelationshipKind

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from sqlalchemy.orm import Mapper, RelationshipProperty

log = logging.getLogger(__name__)

COUNTER_CACHE_INFO_KEY = "counter_cache"
LIMIT_INFO_KEY = "limit"

# Loader strategies whose collections are only ever queried, never held.
QUERY_ONLY_LOADERS = frozenset({"dynamic", "write_only"})


def _kind_for(prop: RelationshipProperty[Any]) -> RelationshipKind:
    if prop.direction is RelationshipDirection.MANYTOONE:
        return RelationshipKind.BELONGS_TO
    if prop.direction is RelationshipDirection.MANYTOMANY:
        return RelationshipKind.MANY_TO_MANY
    return RelationshipKind.HAS_MANY if prop.uselist else RelationshipKind.HAS_ONE


def _counter_cache_option(prop: RelationshipProperty[Any]) -> str | None:
    value = prop.info.get(COUNTER_CACHE_INFO_KEY)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(
            f"{prop} info[{COUNTER_CACHE_INFO_KEY!r}] must be a column name, "
            f"got {type(value).__name__}"
        )
    return value


def _limit_option(prop: RelationshipProperty[Any]) -> int | None:
    value = prop.info.get(LIMIT_INFO_KEY)
    if value is None:
        return None
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(
            f"{prop} info[{LIMIT_INFO_KEY!r}] must be an int, got {type(value).__name__}"
        )
    return value


def describe_relationship(
    owner_type: type, prop: RelationshipProperty[Any]
) -> RelationshipDescriptor:
    return RelationshipDescriptor(
        owner_type=owner_type,
        related_type=prop.mapper.class_,
        name=prop.key,
        kind=_kind_for(prop),
        counter_cache=_counter_cache_option(prop),
        limit=_limit_option(prop),
        populatable=prop.lazy not in QUERY_ONLY_LOADERS,
    )


def _mapped_classes(source: registry | Iterable[type]) -> list[type]:
    if isinstance(source, registry):
        classes = [mapper.class_ for mapper in source.mappers]
    else:
        classes = list(source)
    return sorted(classes, key=lambda cls: (cls.__module__, cls.__qualname__))


def _descriptors(classes: list[type]) -> Iterator[RelationshipDescriptor]:
    for cls in classes:
        mapper: Mapper[Any] = sa_inspect(cls)
        for prop in mapper.relationships:
            yield describe_relationship(cls, prop)


def build_catalog(source: registry | Iterable[type]) -> MetadataCatalog:
    """Return a catalog of every relationship declared on the mapped classes.

    ``source`` is either a SQLAlchemy ``registry`` or an iterable of mapped
    classes. Relationships keep mapper declaration order; an explicit counter
    column and row limit are read from ``relationship(info={...})``.
    """

    configure_mappers()
    catalog = MetadataCatalog(_descriptors(_mapped_classes(source)))
    log.info(
        "Built relationship catalog: types=%s, relationships=%s",
        len(catalog.types()),
        len(catalog),
    )
    return catalog
