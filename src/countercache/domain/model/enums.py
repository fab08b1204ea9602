"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class RelationshipKind(StrEnum):
    HAS_MANY = "has_many"
    HAS_ONE = "has_one"
    BELONGS_TO = "belongs_to"
    MANY_TO_MANY = "many_to_many"


class CountSource(StrEnum):
    """Which strategy produced a collection count."""

    EXPLICIT_COUNTER = "explicit_counter"
    INVERSE_COUNTER = "inverse_counter"
    QUERY = "query"
