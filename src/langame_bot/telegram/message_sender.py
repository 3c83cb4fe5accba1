"""Telegram message sending functionality."""

import asyncio
import logging

import aiohttp

from .telegram_client import TelegramClient

logger = logging.getLogger(__name__)


class TelegramMessageSender:
    """Sends text replies and chat actions to a single Telegram chat."""

    def __init__(self, telegram_client: TelegramClient, timeout_seconds: int):
        """
        Initialize message sender.

        Args:
            telegram_client: Telegram API client
            timeout_seconds: Timeout for send operations
        """
        self.telegram_client = telegram_client
        self.timeout_seconds = timeout_seconds

    async def send_text(self, chat_id: int, text: str) -> None:
        """
        Send a text message to ``chat_id``.

        Raises:
            RuntimeError: If delivery fails
        """
        try:
            success, error_text = await self.telegram_client.send_message(chat_id, text)
        except asyncio.TimeoutError as exc:
            raise RuntimeError(f"Telegram send_message timeout after {self.timeout_seconds}s for {chat_id}") from exc
        except (aiohttp.ClientError, OSError) as exc:
            raise RuntimeError(f"Telegram send_message failed for {chat_id}") from exc

        if not success:
            failure_message = error_text if error_text else "unknown error"
            raise RuntimeError(f"Telegram send_message returned failure for {chat_id}: {failure_message}")
        logger.debug("Telegram message sent to %s", chat_id)

    async def send_typing(self, chat_id: int) -> None:
        """Best-effort typing indicator; failures are only logged."""
        try:
            success, error_text = await self.telegram_client.send_chat_action(chat_id, "typing")
        except (asyncio.TimeoutError, aiohttp.ClientError, OSError) as exc:
            logger.warning("Failed to send typing action to %s: %s", chat_id, exc)
            return
        if not success:
            logger.warning("Telegram sendChatAction failed for %s: %s", chat_id, error_text)
