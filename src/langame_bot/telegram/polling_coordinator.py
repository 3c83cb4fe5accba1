"""Coordinates Telegram polling with backoff and error handling."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict

import aiohttp

from .network_backoff_manager import TelegramNetworkBackoffManager
from .telegram_client import TelegramClient
from .update_processor import TelegramUpdateProcessor

logger = logging.getLogger(__name__)

MIN_LONG_POLL_TIMEOUT_SECONDS = 5
# Extra slack on top of the server-side long-poll wait
LONG_POLL_TIMEOUT_PADDING_SECONDS = 5


@dataclass(frozen=True)
class TelegramCoordinatorConfig:
    """Configuration for Telegram polling coordinator."""

    telegram_timeout_seconds: int
    telegram_long_poll_timeout_seconds: int = 25


class TelegramPollingCoordinator:
    """Coordinates Telegram polling lifecycle with network backoff."""

    def __init__(
        self,
        config: TelegramCoordinatorConfig,
        telegram_client: TelegramClient,
        update_processor: TelegramUpdateProcessor,
        backoff_manager: TelegramNetworkBackoffManager,
    ):
        self.telegram_timeout_seconds = config.telegram_timeout_seconds
        self.long_poll_timeout = max(MIN_LONG_POLL_TIMEOUT_SECONDS, int(config.telegram_long_poll_timeout_seconds))
        self.telegram_client = telegram_client
        self.update_processor = update_processor
        self.backoff_manager = backoff_manager

    async def drop_pending_updates(self) -> int:
        """
        Acknowledge everything queued while the bot was offline.

        Returns:
            Number of updates that were discarded
        """
        payload = await self.telegram_client.get_updates({"offset": -1, "timeout": 0})
        updates = payload.get("result") if payload.get("ok") else None
        if not isinstance(updates, list) or not updates:
            return 0

        last_update_id = updates[-1].get("update_id")
        if isinstance(last_update_id, int):
            self.update_processor.last_update_id = last_update_id
            # Confirm the offset so the dropped update is not redelivered
            await self.telegram_client.get_updates({"offset": last_update_id + 1, "timeout": 0})
        logger.info("Dropped pending Telegram updates up to id %s", last_update_id)
        return len(updates)

    async def poll_updates(self) -> None:
        """Poll Telegram for command updates."""
        if self.backoff_manager.should_skip_operation("getUpdates"):
            return

        params = {
            "offset": self.update_processor.last_update_id + 1,
            "timeout": self.long_poll_timeout,
        }
        timeout = aiohttp.ClientTimeout(total=self.long_poll_timeout + LONG_POLL_TIMEOUT_PADDING_SECONDS)
        try:
            payload = await self.telegram_client.get_updates(params, timeout=timeout)
        except asyncio.TimeoutError:
            logger.debug("Telegram long polling timeout (expected)")
            return
        except (aiohttp.ClientError, OSError, ValueError) as exc:
            logger.exception("Error polling Telegram updates")
            self.backoff_manager.record_failure(exc)
            return

        if await self._handle_poll_payload(payload):
            self.backoff_manager.clear_backoff()

    async def _handle_poll_payload(self, payload: Dict[str, Any]) -> bool:
        """
        Handle polling response payload.

        Args:
            payload: JSON response from Telegram

        Returns:
            True if successful
        """
        if not isinstance(payload, dict) or not payload.get("ok"):
            logger.error("Telegram API error: %s", payload)
            return False

        updates = payload.get("result")
        if not isinstance(updates, list) or not updates:
            logger.debug("No new Telegram updates")
            return True

        for update in updates:
            if isinstance(update, dict):
                await self.update_processor.process_update(update)
        return True

    async def run(self, stop_event: asyncio.Event) -> None:
        """Poll until ``stop_event`` is set."""
        while not stop_event.is_set():
            await self.poll_updates()
            remaining = self.backoff_manager.remaining_seconds()
            if remaining > 0:
                try:
                    await asyncio.wait_for(stop_event.wait(), timeout=remaining)
                except asyncio.TimeoutError:
                    pass
