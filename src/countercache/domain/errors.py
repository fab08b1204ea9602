"""Errors raised by the metadata collaborators."""

from __future__ import annotations


class CounterCacheError(Exception):
    """Base class for countercache errors."""


class UnknownRelationshipError(CounterCacheError, LookupError):
    """Raised when a relationship is not declared in the catalog."""

    def __init__(self, owner_type: type, name: str) -> None:
        super().__init__(f"{owner_type.__name__} declares no relationship named {name!r}")
        self.owner_type = owner_type
        self.name = name


class DuplicateRelationshipError(CounterCacheError, ValueError):
    """Raised when a type declares the same relationship name twice."""


class NotACollectionError(CounterCacheError, ValueError):
    """Raised when a count is requested for a scalar relationship."""

    def __init__(self, qualified_name: str) -> None:
        super().__init__(f"{qualified_name} is not a collection and cannot be counted")
        self.qualified_name = qualified_name
