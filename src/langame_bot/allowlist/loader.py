"""Parse the allowlist YAML file into a set of chat ids."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, FrozenSet, Optional

import yaml

logger = logging.getLogger(__name__)

ALLOWLIST_KEYS = ("allowlist", "allowed_ids", "ids")
EMPTY_ALLOWLIST: FrozenSet[int] = frozenset()


def _coerce_chat_id(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Allowlist entry must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip())
    raise ValueError(f"Allowlist entry must be an integer, got {value!r}")


def _as_id_set(candidate: Any) -> Optional[FrozenSet[int]]:
    """Return the ids in ``candidate`` or None when it is not a non-empty integer list."""
    if not isinstance(candidate, list) or not candidate:
        return None
    try:
        return frozenset(_coerce_chat_id(item) for item in candidate)
    except ValueError as exc:
        logger.debug("Allowlist sequence rejected: %s", exc)
        return None


def _from_mapping(document: Any) -> Optional[FrozenSet[int]]:
    if not isinstance(document, dict):
        return None
    for key in ALLOWLIST_KEYS:
        value = document.get(key)
        if value is not None:
            return _as_id_set(value)
    return None


def parse_allowlist(text: str) -> FrozenSet[int]:
    """
    Parse allowlist YAML.

    Accepts a flat sequence of integers, or a mapping holding that sequence
    under ``allowlist``, ``allowed_ids`` or ``ids``. Anything else yields the
    empty set.

    Raises:
        yaml.YAMLError: If the text is not valid YAML
    """
    document = yaml.safe_load(text)

    ids = _as_id_set(document)
    if ids:
        return ids

    ids = _from_mapping(document)
    if ids:
        return ids

    return EMPTY_ALLOWLIST


def load_allowlist(path: Path) -> FrozenSet[int]:
    """Load the allowlist at ``path``; errors are logged and yield the empty set."""
    if not path.exists():
        logger.debug("Allowlist file %s not found; allowing all chats", path)
        return EMPTY_ALLOWLIST

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to read allowlist %s: %s", path, exc)
        return EMPTY_ALLOWLIST

    try:
        return parse_allowlist(text)
    except yaml.YAMLError as exc:
        logger.warning("Failed to parse allowlist %s: %s", path, exc)
        return EMPTY_ALLOWLIST
