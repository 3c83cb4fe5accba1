"""Registry for Telegram command handlers."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Optional

logger = logging.getLogger(__name__)

CommandHandler = Callable[[int, Dict[str, Any]], Awaitable[None]]


class CommandHandlerRegistry:
    """
    Maps command prefixes to handlers.

    Commands match case-insensitively on the start of the message text, in
    registration order, so ``/free_reboot@my_bot`` reaches ``/free_reboot``.
    Text that matches nothing goes to the fallback handler.
    """

    def __init__(self):
        self.command_handlers: Dict[str, CommandHandler] = {}
        self.fallback_handler: Optional[CommandHandler] = None

    def register_command_handler(self, command: str, handler: CommandHandler) -> None:
        """
        Register a handler for a Telegram command.

        Args:
            command: Command string (without leading /)
            handler: Async function to handle the command
        """
        self.command_handlers[command.lower()] = handler
        logger.info("Registered handler for command: /%s", command)

    def register_fallback_handler(self, handler: CommandHandler) -> None:
        self.fallback_handler = handler

    def resolve(self, text: str) -> Optional[CommandHandler]:
        """Return the handler for ``text``, or the fallback when no command matches."""
        lowered = text.strip().lower()
        for command, handler in self.command_handlers.items():
            if lowered.startswith(f"/{command}"):
                return handler
        return self.fallback_handler
