"""Counter-cache registrations.

Counters are registered on the counted type, naming the relationship path that
leads to the record carrying the counter column::

    counters = CounterRegistry()
    counters.register(Post, "author")                  # Author.posts_count
    counters.register(Comment, ("post", "author"))     # Author.comments_count

Maintenance of the counters (commit hooks) lives elsewhere; this module only
records what exists so reads can find it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import inflection

from countercache.config import CounterCacheConfig

from .model import CounterDefinition

if TYPE_CHECKING:
    from collections.abc import Sequence

log = logging.getLogger(__name__)


def default_counter_cache_name(model: type, *, suffix: str) -> str:
    """Return the conventional column name for counting ``model`` rows."""

    return f"{inflection.tableize(model.__name__)}{suffix}"


class CounterRegistry:
    """Counter definitions per counted type, in registration order."""

    def __init__(self, *, config: CounterCacheConfig | None = None) -> None:
        self._config = config or CounterCacheConfig()
        self._definitions: dict[type, list[CounterDefinition]] = {}

    def __len__(self) -> int:
        return sum(len(items) for items in self._definitions.values())

    def register(
        self,
        model: type,
        relation: str | Sequence[str],
        *,
        column_name: str | None = None,
    ) -> CounterDefinition:
        path = (relation,) if isinstance(relation, str) else tuple(relation)
        name = column_name or default_counter_cache_name(
            model, suffix=self._config.counter_suffix
        )
        definition = CounterDefinition(counted_type=model, counter_cache_name=name, relation=path)
        self._definitions.setdefault(model, []).append(definition)
        log.debug(
            "Registered counter %s on %s via %s", name, model.__name__, ".".join(path)
        )
        return definition

    def list_counter_definitions(self, model: type) -> tuple[CounterDefinition, ...]:
        return tuple(self._definitions.get(model, ()))
