"""Domain port definitions for adapters."""

from __future__ import annotations

from .records import CountScope, RecordAccessor

__all__ = [
    "CountScope",
    "RecordAccessor",
]
