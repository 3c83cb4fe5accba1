from __future__ import annotations

"""Runtime helpers for working with environment-backed configuration."""


import logging
import os
from pathlib import Path
from typing import Optional

from .dotenv_loader import DotenvLoader
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

_DOTENV_CANDIDATES = (Path(".env"),)

_DEFAULT_VALUES: dict[str, str] | None = None


def _load_default_values() -> dict[str, str]:
    """Load configuration values from .env-style files."""
    global _DEFAULT_VALUES
    if _DEFAULT_VALUES is not None:
        return _DEFAULT_VALUES

    defaults: dict[str, str] = {}
    for path in _DOTENV_CANDIDATES:
        for key, value in DotenvLoader.load_from_file(path).items():
            defaults.setdefault(key, value)

    _DEFAULT_VALUES = defaults
    return defaults


def reset_default_values() -> None:
    """Forget cached .env values so the next lookup re-reads them."""
    global _DEFAULT_VALUES
    _DEFAULT_VALUES = None


def _default_value(name: str) -> Optional[str]:
    return _load_default_values().get(name)


def _normalize(value: str | None, *, strip: bool) -> str | None:
    if value is None:
        return None
    return value.strip() if strip else value


def env_str(
    name: str,
    or_value: str | None = None,
    *,
    required: bool = False,
    strip: bool = True,
) -> str | None:
    """Fetch an environment variable as a string; blank counts as unset."""

    value = _normalize(os.getenv(name), strip=strip)

    if not value:
        configured_default = _default_value(name)
        if configured_default is not None:
            value = _normalize(configured_default, strip=strip)

    if not value:
        if required:
            raise ConfigurationError.missing_value(f"ENV {name}")
        return or_value
    return value


def env_int(name: str, or_value: int | None = None, *, required: bool = False) -> int | None:
    """Fetch an environment variable and coerce it to ``int``."""

    raw = env_str(name, strip=True)
    if raw is None:
        if required and or_value is None:
            raise ConfigurationError.missing_value(f"ENV {name}")
        return or_value
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError.invalid_value(f"ENV {name}", raw, "Must be an integer.") from exc


def env_int_lenient(name: str, or_value: int) -> int:
    """Like ``env_int`` but falls back to ``or_value`` when the value does not parse."""

    try:
        value = env_int(name, or_value=or_value)
    except ConfigurationError:
        logger.warning("Ignoring non-integer %s; using %s", name, or_value)
        return or_value
    return or_value if value is None else value


def clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, value))
