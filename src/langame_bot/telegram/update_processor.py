"""Process individual Telegram updates from polling."""

import logging
from typing import Any, Dict, Optional

from .command_handler_registry import CommandHandlerRegistry

logger = logging.getLogger(__name__)


class TelegramUpdateProcessor:
    """Processes individual Telegram updates (text messages only)."""

    def __init__(self, allowlist_store, handler_registry: CommandHandlerRegistry):
        """
        Initialize update processor.

        Args:
            allowlist_store: Anything exposing ``is_allowed(chat_id)``
            handler_registry: Command handler registry
        """
        self.allowlist_store = allowlist_store
        self.handler_registry = handler_registry
        self.last_update_id = 0

    async def process_update(self, update: Dict[str, Any]) -> None:
        """
        Process a single Telegram update.

        Args:
            update: Telegram update object
        """
        update_id = update.get("update_id")
        if isinstance(update_id, int):
            self.last_update_id = update_id

        message = update.get("message")
        if not isinstance(message, dict):
            return

        text = message.get("text")
        if not isinstance(text, str):
            return

        chat_id = _extract_chat_id(message)
        if chat_id is None:
            return

        if not self.allowlist_store.is_allowed(chat_id):
            logger.debug("Ignoring message from chat %s not in allowlist", chat_id)
            return

        handler = self.handler_registry.resolve(text)
        if handler is None:
            return

        try:
            await handler(chat_id, message)
        except (RuntimeError, ValueError, TypeError, KeyError, OSError):
            logger.exception("Failed to handle message from chat %s", chat_id)


def _extract_chat_id(message: Dict[str, Any]) -> Optional[int]:
    chat = message.get("chat")
    if not isinstance(chat, dict):
        return None
    chat_id = chat.get("id")
    if isinstance(chat_id, bool) or not isinstance(chat_id, int):
        return None
    return chat_id
