from __future__ import annotations

from typing import Any, Optional
from unittest.mock import AsyncMock, MagicMock


def make_response_cm(
    *,
    status: int = 200,
    text: str = "",
    json_payload: Any = None,
    raise_for_status: Optional[BaseException] = None,
) -> MagicMock:
    """Build an ``async with session.request(...)`` context manager double."""
    response = MagicMock()
    response.status = status
    response.text = AsyncMock(return_value=text)
    response.json = AsyncMock(return_value=json_payload)
    response.raise_for_status = MagicMock(side_effect=raise_for_status)

    context_manager = MagicMock()
    context_manager.__aenter__ = AsyncMock(return_value=response)
    context_manager.__aexit__ = AsyncMock(return_value=None)
    return context_manager


def make_session_cm(session: MagicMock) -> MagicMock:
    """Wrap ``session`` so ``async with aiohttp.ClientSession(...)`` yields it."""
    context_manager = MagicMock()
    context_manager.__aenter__ = AsyncMock(return_value=session)
    context_manager.__aexit__ = AsyncMock(return_value=None)
    return context_manager
