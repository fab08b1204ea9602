"""Domain model for counter resolution."""

from __future__ import annotations

from .counters import CounterDefinition, CountResult, InverseCandidate
from .enums import CountSource, RelationshipKind
from .relationships import RelationshipDescriptor

__all__ = [
    "CountResult",
    "CountSource",
    "CounterDefinition",
    "InverseCandidate",
    "RelationshipDescriptor",
    "RelationshipKind",
]
