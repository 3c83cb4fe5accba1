from __future__ import annotations

"""Wire settings, allowlist, Langame client and Telegram polling into one service."""

import asyncio
import logging
import signal
from contextlib import suppress
from typing import Optional

import aiohttp

from .allowlist import AllowlistStore
from .commands import (
    REBOOT_COMMAND,
    START_COMMAND,
    HelpCommandHandler,
    RebootCommandHandler,
    UnknownCommandHandler,
)
from .config import BotSettings, ConfigurationError, load_bot_settings
from .langame_api import LangameApiClient, LangameConfig
from .logging_config import setup_logging
from .telegram import (
    CommandHandlerRegistry,
    TelegramAPIError,
    TelegramClient,
    TelegramCoordinatorConfig,
    TelegramMessageSender,
    TelegramNetworkBackoffManager,
    TelegramPollingCoordinator,
    TelegramUpdateProcessor,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "langame_bot"
TELEGRAM_TIMEOUT_SECONDS = 10
TELEGRAM_LONG_POLL_TIMEOUT_SECONDS = 25


def build_command_registry(
    api_client: LangameApiClient,
    sender: TelegramMessageSender,
    settings: BotSettings,
) -> CommandHandlerRegistry:
    """Register the chat commands in match order."""
    registry = CommandHandlerRegistry()
    reboot_handler = RebootCommandHandler(
        api_client,
        sender,
        club_id=settings.club_id,
        pc_type=settings.pc_type,
    )
    registry.register_command_handler(START_COMMAND, HelpCommandHandler(sender).handle)
    registry.register_command_handler(REBOOT_COMMAND, reboot_handler.handle)
    registry.register_fallback_handler(UnknownCommandHandler(sender).handle)
    return registry


def build_langame_config(settings: BotSettings) -> LangameConfig:
    return LangameConfig(
        base_url=settings.base_url,
        api_key=settings.api_key,
        request_timeout_seconds=settings.api_timeout_seconds,
        max_attempts=settings.api_retry_count,
    )


async def run_bot(
    settings: BotSettings,
    stop_event: asyncio.Event,
    *,
    telegram_client: Optional[TelegramClient] = None,
) -> None:
    """
    Run the bot until ``stop_event`` is set.

    Args:
        settings: Validated bot settings
        stop_event: Set by the signal handlers to request shutdown
        telegram_client: Optional preconfigured client
    """
    telegram_client = telegram_client or TelegramClient(
        settings.telegram_token, timeout_seconds=TELEGRAM_TIMEOUT_SECONDS
    )
    sender = TelegramMessageSender(telegram_client, TELEGRAM_TIMEOUT_SECONDS)

    async with AllowlistStore(settings.allowlist_path) as allowlist, LangameApiClient(
        build_langame_config(settings)
    ) as api_client:
        registry = build_command_registry(api_client, sender, settings)
        update_processor = TelegramUpdateProcessor(allowlist, registry)
        coordinator = TelegramPollingCoordinator(
            TelegramCoordinatorConfig(
                telegram_timeout_seconds=TELEGRAM_TIMEOUT_SECONDS,
                telegram_long_poll_timeout_seconds=TELEGRAM_LONG_POLL_TIMEOUT_SECONDS,
            ),
            telegram_client,
            update_processor,
            TelegramNetworkBackoffManager(TELEGRAM_TIMEOUT_SECONDS),
        )

        bot_user = await telegram_client.get_me()
        dropped = await coordinator.drop_pending_updates()
        logger.info(
            "Bot @%s started (allowlist %s, %d entries; dropped %d pending updates)",
            bot_user.get("username"),
            settings.allowlist_path,
            len(allowlist.snapshot),
            dropped,
        )

        polling_task = asyncio.create_task(coordinator.run(stop_event))
        stop_task = asyncio.create_task(stop_event.wait())
        try:
            await asyncio.wait({polling_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (polling_task, stop_task):
                task.cancel()
            for task in (polling_task, stop_task):
                with suppress(asyncio.CancelledError):
                    await task
    logger.info("Bot stopped")


def _install_signal_handlers(loop: asyncio.AbstractEventLoop, stop_event: asyncio.Event) -> None:
    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, stop_event.set)
        except (NotImplementedError, RuntimeError):
            logger.debug("Signal handler for %s not supported on this platform", signum)


async def _run_until_signalled(settings: BotSettings) -> None:
    stop_event = asyncio.Event()
    _install_signal_handlers(asyncio.get_running_loop(), stop_event)
    await run_bot(settings, stop_event)


def main() -> int:
    """Console entry point; returns the process exit status."""
    setup_logging(SERVICE_NAME)
    try:
        settings = load_bot_settings()
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return 1

    setup_logging(SERVICE_NAME, settings.log_level)
    try:
        asyncio.run(_run_until_signalled(settings))
    except KeyboardInterrupt:
        logger.info("%s service interrupted by user", SERVICE_NAME)
    except (aiohttp.ClientError, asyncio.TimeoutError, TelegramAPIError) as exc:
        logger.error("Bot failed to start: %s", exc)
        return 1
    return 0
