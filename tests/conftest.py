from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from countercache.app import CounterCache, build_counter_cache
from tests.support.blog import counters, create_all_tables, mapper_registry, start_mappers

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    start_mappers()
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def recorded_statements(sqlite_engine: Engine) -> Iterator[list[str]]:
    """SQL statements executed on the engine; clear before the step under test."""

    statements: list[str] = []

    def _record(*args: Any) -> None:
        statements.append(args[2])

    event.listen(sqlite_engine, "before_cursor_execute", _record)
    try:
        yield statements
    finally:
        event.remove(sqlite_engine, "before_cursor_execute", _record)


@pytest.fixture
def counter_cache() -> CounterCache:
    start_mappers()
    return build_counter_cache(mapper_registry, counters)
