"""Counter naming and runtime configuration."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Final

from .env import env_flag, optional_env_var
from .errors import InvalidSettingError

DEFAULT_COUNTER_SUFFIX: Final[str] = "_count"
COUNTER_SUFFIX_ENV: Final[str] = "COUNTERCACHE_COUNTER_SUFFIX"
LOG_LEVEL_ENV: Final[str] = "COUNTERCACHE_LOG_LEVEL"
SQL_ECHO_ENV: Final[str] = "COUNTERCACHE_SQL_ECHO"

_SUFFIX_PATTERN: Final = re.compile(r"[A-Za-z0-9_]+")


@dataclass(frozen=True, slots=True)
class CounterCacheConfig:
    """Naming rules shared by the resolver and the counter registry."""

    counter_suffix: str = DEFAULT_COUNTER_SUFFIX
    log_level: int = logging.INFO
    sql_echo: bool = False

    def __post_init__(self) -> None:
        if not _SUFFIX_PATTERN.fullmatch(self.counter_suffix):
            raise InvalidSettingError(
                "counter suffix", self.counter_suffix, "expected letters, digits or underscores"
            )

    def convention_name(self, relationship_name: str) -> str:
        return f"{relationship_name}{self.counter_suffix}"


def _parse_log_level(value: str) -> int:
    level = logging.getLevelNamesMapping().get(value.upper())
    if level is None:
        raise InvalidSettingError("log level", value, "unknown level name")
    return level


def get_counter_cache_config() -> CounterCacheConfig:
    suffix = optional_env_var(COUNTER_SUFFIX_ENV) or DEFAULT_COUNTER_SUFFIX
    level_name = optional_env_var(LOG_LEVEL_ENV)
    level = _parse_log_level(level_name) if level_name else logging.INFO
    return CounterCacheConfig(
        counter_suffix=suffix, log_level=level, sql_echo=env_flag(SQL_ECHO_ENV)
    )
