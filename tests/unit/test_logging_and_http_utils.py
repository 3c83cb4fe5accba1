"""Tests for logging setup and HTTP helpers."""

import logging
from unittest.mock import MagicMock

import pytest

from langame_bot.http_utils import ensure_http_url, is_aiohttp_session_open
from langame_bot.logging_config import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_console_only_without_log_dir(self, restore_root_logger) -> None:
        setup_logging("langame_bot")

        assert len(restore_root_logger.handlers) == 1
        assert restore_root_logger.level == logging.INFO
        assert logging.getLogger("aiohttp").level == logging.WARNING

    def test_file_handler_and_string_level(self, restore_root_logger, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))

        setup_logging("langame_bot", "debug")
        logging.getLogger("langame_bot.test").debug("hello file")

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 2
        for handler in restore_root_logger.handlers:
            handler.flush()
        assert "hello file" in (tmp_path / "logs" / "langame_bot.log").read_text(encoding="utf-8")

    def test_unknown_level_falls_back_to_info(self, restore_root_logger) -> None:
        setup_logging(level="chatty")

        assert restore_root_logger.level == logging.INFO


class TestHttpUtils:
    @pytest.mark.parametrize("url", ["http://localhost:8080", "https://club.example/api"])
    def test_accepts_http_urls(self, url) -> None:
        assert ensure_http_url(url) == url

    @pytest.mark.parametrize("url", ["ftp://club.example", "club.example", "https://"])
    def test_rejects_other_urls(self, url) -> None:
        with pytest.raises(ValueError):
            ensure_http_url(url)

    def test_session_open_checks(self) -> None:
        session = MagicMock()
        session.closed = False

        assert is_aiohttp_session_open(session)
        session.closed = True
        assert not is_aiohttp_session_open(session)
        assert not is_aiohttp_session_open(None)
        assert not is_aiohttp_session_open(object())
