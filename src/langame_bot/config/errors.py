"""Exception types for bot settings."""

from __future__ import annotations

from typing import Any


class ConfigurationError(RuntimeError):
    """A required setting is missing or unusable; the bot cannot start."""

    @classmethod
    def missing_value(cls, setting: str) -> "ConfigurationError":
        """``setting`` is unset or blank."""
        return cls(f"{setting} is not set.")

    @classmethod
    def invalid_value(cls, setting: str, value: Any, reason: str) -> "ConfigurationError":
        """``setting`` is present but ``value`` cannot be used."""
        return cls(f"{setting} is invalid ({value!r}): {reason}")
