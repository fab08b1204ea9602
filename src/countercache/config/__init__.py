"""Application configuration helpers."""

from __future__ import annotations

from .counters import (
    DEFAULT_COUNTER_SUFFIX,
    CounterCacheConfig,
    get_counter_cache_config,
)
from .env import env_flag, optional_env_var
from .errors import ConfigurationError, InvalidSettingError
from .logging import configure_logging

__all__ = [
    "DEFAULT_COUNTER_SUFFIX",
    "ConfigurationError",
    "CounterCacheConfig",
    "InvalidSettingError",
    "configure_logging",
    "env_flag",
    "get_counter_cache_config",
    "optional_env_var",
]
