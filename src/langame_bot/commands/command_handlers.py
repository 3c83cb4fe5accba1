"""Command handlers for the bot's Telegram commands."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Protocol

import aiohttp

from ..langame_api import DeviceDirectory, ManageResponse
from .message_chunker import DEFAULT_CHUNK_BUDGET, chunk_lines
from .reboot_formatter import format_reboot_lines

logger = logging.getLogger(__name__)

REBOOT_COMMAND = "free_reboot"
START_COMMAND = "start"

NO_DATA_TEXT = "no data"
TIMEOUT_TEXT = "API request timed out."
HELP_TEXT = f"Commands:\n/{REBOOT_COMMAND} - reboot all free PCs"
UNKNOWN_COMMAND_TEXT = f"Unknown command. Available: /{REBOOT_COMMAND}"


class RebootApiProtocol(Protocol):
    """Subset of LangameApiClient used by the reboot handler."""

    async def reboot(self, club_id: int, pc_type: str) -> ManageResponse: ...

    async def get_pc_name_lookup(self, club_id: int, pc_type: str) -> DeviceDirectory: ...


class MessageSenderProtocol(Protocol):
    async def send_text(self, chat_id: int, text: str) -> None: ...

    async def send_typing(self, chat_id: int) -> None: ...


def describe_api_failure(exc: BaseException) -> str:
    """Render an API failure as the text shown to the user."""
    if isinstance(exc, asyncio.TimeoutError):
        return TIMEOUT_TEXT
    if isinstance(exc, aiohttp.ClientResponseError):
        return f"HTTP error: {exc.status} {exc.message}"
    if isinstance(exc, aiohttp.ClientError):
        return f"HTTP error: {exc}"
    return f"Error: {exc}"


class RebootCommandHandler:
    """Handles /free_reboot - reboot every PC of the configured type."""

    def __init__(
        self,
        api_client: RebootApiProtocol,
        sender: MessageSenderProtocol,
        *,
        club_id: int,
        pc_type: str,
        chunk_budget: int = DEFAULT_CHUNK_BUDGET,
    ):
        self.api_client = api_client
        self.sender = sender
        self.club_id = club_id
        self.pc_type = pc_type
        self.chunk_budget = chunk_budget

    async def build_reboot_lines(self) -> List[str]:
        """Issue the reboot and the name lookup together and join the results."""
        response, directory = await asyncio.gather(
            self.api_client.reboot(self.club_id, self.pc_type),
            self.api_client.get_pc_name_lookup(self.club_id, self.pc_type),
        )
        return format_reboot_lines(response, directory)

    async def handle(self, chat_id: int, message: Optional[Dict[str, Any]] = None) -> None:
        """Run the reboot workflow and reply with per-PC outcomes."""
        await self.sender.send_typing(chat_id)
        logger.info("Reboot requested by chat %s for club %s type %s", chat_id, self.club_id, self.pc_type)

        try:
            lines = await self.build_reboot_lines()
        except (asyncio.TimeoutError, aiohttp.ClientError, RuntimeError) as exc:
            logger.warning("Reboot for chat %s failed: %s", chat_id, exc)
            await self.sender.send_text(chat_id, describe_api_failure(exc))
            return

        if not lines:
            await self.sender.send_text(chat_id, NO_DATA_TEXT)
            return

        for chunk in chunk_lines(lines, self.chunk_budget):
            await self.sender.send_text(chat_id, chunk)


class HelpCommandHandler:
    """Handles /start command."""

    def __init__(self, sender: MessageSenderProtocol):
        self.sender = sender

    async def handle(self, chat_id: int, message: Optional[Dict[str, Any]] = None) -> None:
        await self.sender.send_text(chat_id, HELP_TEXT)


class UnknownCommandHandler:
    """Replies to any text that is not a known command."""

    def __init__(self, sender: MessageSenderProtocol):
        self.sender = sender

    async def handle(self, chat_id: int, message: Optional[Dict[str, Any]] = None) -> None:
        await self.sender.send_text(chat_id, UNKNOWN_COMMAND_TEXT)
