"""Session-backed record accessor."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import func, select
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import with_parent
from sqlalchemy.orm.attributes import set_committed_value

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.orm import InstanceState, InstrumentedAttribute, Session

    from countercache.domain.ports import CountScope


def _state(record: object) -> InstanceState[Any]:
    return cast("InstanceState[Any]", sa_inspect(record))


class SqlAlchemyRecordAccessor:
    """Read mapped instances and count their collections through a session.

    Collections set here are committed values: they carry no change history
    and are not flushed.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def read_attribute(self, record: object, name: str) -> object:
        return getattr(record, name)

    def attribute_present(self, record: object, name: str) -> bool:
        state = _state(record)
        if name not in state.mapper.column_attrs:
            return False
        return state.attrs[name].value is not None

    def count(self, scope: CountScope) -> int:
        descriptor = scope.relationship
        attribute = cast(
            "InstrumentedAttribute[Any]", getattr(descriptor.owner_type, descriptor.name)
        )
        stmt = (
            select(func.count())
            .select_from(descriptor.related_type)
            .where(with_parent(scope.owner, attribute))
        )
        return self.session.execute(stmt).scalar_one()

    def is_loaded(self, record: object, relationship: str) -> bool:
        return relationship not in _state(record).unloaded

    def read_target(self, record: object, relationship: str) -> Sequence[object]:
        return cast("Sequence[object]", getattr(record, relationship))

    def set_target(self, record: object, relationship: str, items: Sequence[object]) -> None:
        set_committed_value(record, relationship, list(items))

    def mark_loaded(self, record: object, relationship: str) -> None:
        # set_committed_value already marks the collection loaded; this covers
        # owners whose target was never assigned.
        if relationship in _state(record).unloaded:
            set_committed_value(record, relationship, [])


if TYPE_CHECKING:
    from countercache.domain.ports import RecordAccessor

    _accessor_check: RecordAccessor = SqlAlchemyRecordAccessor(cast("Session", None))
