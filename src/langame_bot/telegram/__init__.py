"""Telegram Bot API transport: client, polling and dispatch."""

from .command_handler_registry import CommandHandler, CommandHandlerRegistry
from .message_sender import TelegramMessageSender
from .network_backoff_manager import TelegramNetworkBackoffManager
from .polling_coordinator import TelegramCoordinatorConfig, TelegramPollingCoordinator
from .telegram_client import TelegramAPIError, TelegramClient
from .update_processor import TelegramUpdateProcessor

__all__ = [
    "CommandHandler",
    "CommandHandlerRegistry",
    "TelegramAPIError",
    "TelegramClient",
    "TelegramCoordinatorConfig",
    "TelegramMessageSender",
    "TelegramNetworkBackoffManager",
    "TelegramPollingCoordinator",
    "TelegramUpdateProcessor",
]
