from __future__ import annotations

"""Minimal Telegram Bot API adapter used by the bot."""

from typing import Any, Dict, Optional, Tuple

import aiohttp

# HTTP status code
_HTTP_OK = 200

TELEGRAM_API_ROOT = "https://api.telegram.org"


class TelegramAPIError(RuntimeError):
    """Raised when the Telegram API responds with an unexpected payload."""


class TelegramClient:
    """Convenience wrapper around Telegram Bot HTTP endpoints."""

    def __init__(self, token: str, *, timeout_seconds: float, api_root: str = TELEGRAM_API_ROOT) -> None:
        self._base_url = f"{api_root.rstrip('/')}/bot{token}"
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> aiohttp.ClientTimeout:
        return self._timeout

    async def send_message(self, chat_id: int, message: str) -> Tuple[bool, Optional[str]]:
        """Send a text message to a single chat id."""

        payload = {"chat_id": chat_id, "text": message}
        async with aiohttp.ClientSession(timeout=self._timeout) as session:
            async with session.post(f"{self._base_url}/sendMessage", json=payload) as response:
                if response.status == _HTTP_OK:
                    return True, None
                return False, await response.text()

    async def send_chat_action(self, chat_id: int, action: str = "typing") -> Tuple[bool, Optional[str]]:
        """Show a chat action such as ``typing`` to the user."""

        payload = {"chat_id": chat_id, "action": action}
        async with aiohttp.ClientSession(timeout=self._timeout) as session:
            async with session.post(f"{self._base_url}/sendChatAction", json=payload) as response:
                if response.status == _HTTP_OK:
                    return True, None
                return False, await response.text()

    async def get_me(self) -> Dict[str, Any]:
        """Return the bot's own user object."""

        async with aiohttp.ClientSession(timeout=self._timeout) as session:
            async with session.get(f"{self._base_url}/getMe") as response:
                response.raise_for_status()
                payload = await response.json()
        if not isinstance(payload, dict) or not payload.get("ok"):
            raise TelegramAPIError(f"getMe failed: {payload}")
        result = payload.get("result")
        if not isinstance(result, dict):
            raise TelegramAPIError(f"getMe returned no user: {payload}")
        return result

    async def get_updates(
        self, params: Dict[str, Any], *, timeout: Optional[aiohttp.ClientTimeout] = None
    ) -> Dict[str, Any]:
        """Fetch pending updates."""

        async with aiohttp.ClientSession(timeout=timeout or self._timeout) as session:
            async with session.get(f"{self._base_url}/getUpdates", params=params) as response:
                response.raise_for_status()
                return await response.json()
