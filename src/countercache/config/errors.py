"""Errors raised while reading countercache settings."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """A countercache setting could not be used."""


class InvalidSettingError(ConfigurationError):
    """An environment value does not parse as its setting's type."""

    def __init__(self, name: str, value: str, reason: str) -> None:
        super().__init__(f"Invalid {name} {value!r}: {reason}")
        self.name = name
        self.value = value
