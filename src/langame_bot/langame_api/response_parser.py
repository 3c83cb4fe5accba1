"""Parse Langame response bodies into typed models."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

import orjson

from .errors import LinkedPcListParseError, ManageResponseParseError
from .models import LinkedPc, ManageResponse

logger = logging.getLogger(__name__)

_LINKED_PC_FIELDS = {
    "id": ("id", int),
    "name": ("name", str),
    "pc_number": ("pc_number", str),
    "packets_type_pc": ("packets_type_pc", int),
    "fiscal_name": ("fiscal_name", str),
    "uuid": ("uuid", str),
    "club_id": ("club_id", int),
    "date": ("date", str),
    "isps": ("is_ps", int),
    "rele_type": ("rele_type", str),
    "color": ("color", str),
}


def _get_field(payload: Mapping[str, Any], name: str) -> Any:
    """Look up ``name`` exactly first, then ignoring case."""
    if name in payload:
        return payload[name]
    folded = name.casefold()
    for key, value in payload.items():
        if isinstance(key, str) and key.casefold() == folded:
            return value
    return None


def _parse_status_array(device_id: str, raw: Any) -> Tuple[bool, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list) or not all(isinstance(item, bool) for item in raw):
        raise ManageResponseParseError(f"status for {device_id} must be an array of booleans")
    return tuple(raw)


def parse_manage_response(body: str) -> ManageResponse:
    """
    Parse the manage endpoint body.

    Raises:
        ManageResponseParseError: If the body is not JSON or not an object
    """
    try:
        payload = orjson.loads(body)
    except orjson.JSONDecodeError as exc:
        raise ManageResponseParseError(str(exc)) from exc

    if not isinstance(payload, dict):
        raise ManageResponseParseError("expected a JSON object")

    status = _get_field(payload, "status")
    if status is None:
        status = False
    if not isinstance(status, bool):
        raise ManageResponseParseError("status must be a boolean")

    raw_data = _get_field(payload, "data")
    if raw_data is None:
        raw_data = {}
    if not isinstance(raw_data, dict):
        raise ManageResponseParseError("data must be an object")

    data: Dict[str, Tuple[bool, ...]] = {
        str(device_id): _parse_status_array(str(device_id), statuses) for device_id, statuses in raw_data.items()
    }
    return ManageResponse(status=status, data=data)


def _coerce_field(value: Any, expected: type) -> Any:
    if value is None:
        return None
    if expected is int and isinstance(value, int) and not isinstance(value, bool):
        return value
    if expected is str and isinstance(value, str):
        return value
    raise ValueError(f"expected {expected.__name__}, got {type(value).__name__}")


def _parse_linked_pc(entry: Any) -> LinkedPc:
    if not isinstance(entry, dict):
        raise ValueError("list entries must be JSON objects")
    values: Dict[str, Any] = {}
    for key, raw in entry.items():
        known_field = _LINKED_PC_FIELDS.get(str(key).casefold())
        if known_field is None:
            continue
        attribute, expected = known_field
        coerced = _coerce_field(raw, expected)
        if coerced is not None:
            values[attribute] = coerced
    return LinkedPc(**values)


def _parse_linked_pc_array(items: List[Any]) -> List[LinkedPc]:
    return [_parse_linked_pc(entry) for entry in items]


def _find_wrapped_array(payload: Mapping[str, Any]) -> Optional[List[Any]]:
    value = _get_field(payload, "data")
    return value if isinstance(value, list) else None


def parse_linked_pc_list(body: str) -> List[LinkedPc]:
    """
    Parse the linked-PC listing.

    Tries a bare array, then an object wrapping the array under ``data``
    (any letter case), then a direct parse of the root. JSON ``null`` yields
    an empty list.

    Raises:
        LinkedPcListParseError: If no shape matches
    """
    try:
        payload = orjson.loads(body)
    except orjson.JSONDecodeError as exc:
        raise LinkedPcListParseError(str(exc)) from exc

    try:
        if isinstance(payload, list):
            return _parse_linked_pc_array(payload)
        if isinstance(payload, dict):
            wrapped = _find_wrapped_array(payload)
            if wrapped is not None:
                return _parse_linked_pc_array(wrapped)
    except ValueError as exc:
        logger.debug("Structured PC list parse failed, falling back: %s", exc)

    return _parse_root_directly(payload)


def _parse_root_directly(payload: Any) -> List[LinkedPc]:
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise LinkedPcListParseError(f"expected an array, got {type(payload).__name__}")
    try:
        return _parse_linked_pc_array(payload)
    except ValueError as exc:
        raise LinkedPcListParseError(str(exc)) from exc
