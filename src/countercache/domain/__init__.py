"""Counter resolution domain: metadata, registrations, resolution and counting."""

from __future__ import annotations

from .catalog import MetadataCatalog
from .counting import CountComputer
from .errors import (
    CounterCacheError,
    DuplicateRelationshipError,
    NotACollectionError,
    UnknownRelationshipError,
)
from .registry import CounterRegistry, default_counter_cache_name
from .resolution import CounterAttributeResolver

__all__ = [
    "CountComputer",
    "CounterAttributeResolver",
    "CounterCacheError",
    "CounterRegistry",
    "DuplicateRelationshipError",
    "MetadataCatalog",
    "NotACollectionError",
    "UnknownRelationshipError",
    "default_counter_cache_name",
]
