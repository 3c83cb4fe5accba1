"""Tests for update processing and message sending."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from langame_bot.telegram import CommandHandlerRegistry, TelegramMessageSender, TelegramUpdateProcessor


def _update(update_id: int, text, chat_id=42):
    return {"update_id": update_id, "message": {"chat": {"id": chat_id}, "text": text}}


@pytest.fixture
def allowlist():
    store = MagicMock()
    store.is_allowed = MagicMock(return_value=True)
    return store


@pytest.fixture
def handlers():
    registry = CommandHandlerRegistry()
    reboot, fallback = AsyncMock(), AsyncMock()
    registry.register_command_handler("free_reboot", reboot)
    registry.register_fallback_handler(fallback)
    return registry, reboot, fallback


class TestTelegramUpdateProcessor:
    """Tests for TelegramUpdateProcessor."""

    @pytest.mark.asyncio
    async def test_dispatches_command(self, allowlist, handlers) -> None:
        registry, reboot, _ = handlers
        processor = TelegramUpdateProcessor(allowlist, registry)
        update = _update(7, "/free_reboot")

        await processor.process_update(update)

        reboot.assert_awaited_once_with(42, update["message"])
        assert processor.last_update_id == 7

    @pytest.mark.asyncio
    async def test_unknown_text_goes_to_fallback(self, allowlist, handlers) -> None:
        registry, reboot, fallback = handlers
        processor = TelegramUpdateProcessor(allowlist, registry)

        await processor.process_update(_update(8, "what?"))

        fallback.assert_awaited_once()
        reboot.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_disallowed_chat_is_ignored_silently(self, allowlist, handlers) -> None:
        registry, reboot, fallback = handlers
        allowlist.is_allowed.return_value = False
        processor = TelegramUpdateProcessor(allowlist, registry)

        await processor.process_update(_update(9, "/free_reboot", chat_id=-5))

        allowlist.is_allowed.assert_called_once_with(-5)
        reboot.assert_not_awaited()
        fallback.assert_not_awaited()
        assert processor.last_update_id == 9

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "update",
        [
            {"update_id": 10},
            {"update_id": 10, "edited_message": {"chat": {"id": 42}, "text": "/free_reboot"}},
            {"update_id": 10, "message": {"chat": {"id": 42}, "sticker": {}}},
            {"update_id": 10, "message": {"text": "/free_reboot"}},
        ],
    )
    async def test_non_text_updates_are_skipped(self, allowlist, handlers, update) -> None:
        registry, reboot, fallback = handlers
        processor = TelegramUpdateProcessor(allowlist, registry)

        await processor.process_update(update)

        reboot.assert_not_awaited()
        fallback.assert_not_awaited()
        assert processor.last_update_id == 10

    @pytest.mark.asyncio
    async def test_handler_failure_is_logged_not_raised(self, allowlist, handlers, caplog) -> None:
        registry, reboot, _ = handlers
        reboot.side_effect = RuntimeError("send failed")
        processor = TelegramUpdateProcessor(allowlist, registry)

        await processor.process_update(_update(11, "/free_reboot"))

        assert "Failed to handle message from chat 42" in caplog.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [ValueError("bad payload"), KeyError("chat"), TypeError("not a str")])
    async def test_handler_data_errors_are_logged_not_raised(self, allowlist, handlers, caplog, error) -> None:
        registry, reboot, _ = handlers
        reboot.side_effect = error
        processor = TelegramUpdateProcessor(allowlist, registry)

        await processor.process_update(_update(12, "/free_reboot"))
        await processor.process_update(_update(13, "/free_reboot"))

        assert reboot.await_count == 2
        assert processor.last_update_id == 13
        assert "Failed to handle message from chat 42" in caplog.text


class TestTelegramMessageSender:
    """Tests for TelegramMessageSender."""

    @pytest.fixture
    def telegram_client(self):
        client = MagicMock()
        client.send_message = AsyncMock(return_value=(True, None))
        client.send_chat_action = AsyncMock(return_value=(True, None))
        return client

    @pytest.mark.asyncio
    async def test_send_text(self, telegram_client) -> None:
        await TelegramMessageSender(telegram_client, 10).send_text(42, "hello")

        telegram_client.send_message.assert_awaited_once_with(42, "hello")

    @pytest.mark.asyncio
    async def test_send_text_failure_raises(self, telegram_client) -> None:
        telegram_client.send_message.return_value = (False, "Forbidden")

        with pytest.raises(RuntimeError, match="Forbidden"):
            await TelegramMessageSender(telegram_client, 10).send_text(42, "hello")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [asyncio.TimeoutError(), aiohttp.ClientConnectionError("down")])
    async def test_send_text_transport_error_raises_runtime_error(self, telegram_client, error) -> None:
        telegram_client.send_message.side_effect = error

        with pytest.raises(RuntimeError):
            await TelegramMessageSender(telegram_client, 10).send_text(42, "hello")

    @pytest.mark.asyncio
    async def test_send_typing_swallows_transport_errors(self, telegram_client, caplog) -> None:
        telegram_client.send_chat_action.side_effect = aiohttp.ClientConnectionError("down")

        await TelegramMessageSender(telegram_client, 10).send_typing(42)

        assert "Failed to send typing action" in caplog.text
