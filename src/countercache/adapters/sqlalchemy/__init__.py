"""SQLAlchemy adapter package for countercache."""

from __future__ import annotations

from .catalog import (
    COUNTER_CACHE_INFO_KEY,
    LIMIT_INFO_KEY,
    build_catalog,
    describe_relationship,
)
from .records import SqlAlchemyRecordAccessor

__all__ = [
    "COUNTER_CACHE_INFO_KEY",
    "LIMIT_INFO_KEY",
    "SqlAlchemyRecordAccessor",
    "build_catalog",
    "describe_relationship",
]
