"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from langame_bot.config import runtime

BOT_ENV_VARS = (
    "TELEGRAM_BOT_TOKEN",
    "LANGAME_API_KEY",
    "LANGAME_BASE_URL",
    "ALLOWED_IDS_YML",
    "LANGAME_HTTP_TIMEOUT_SECONDS",
    "LANGAME_HTTP_RETRY_COUNT",
    "LANGAME_CLUB_ID",
    "LANGAME_PC_TYPE",
    "LOG_LEVEL",
    "LOG_DIR",
    "LOG_APPEND",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Run every test without bot env vars and away from any real .env file."""
    for name in BOT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    runtime.reset_default_values()
    yield
    runtime.reset_default_values()


@pytest.fixture
def fake_sender():
    sender = MagicMock()
    sender.send_text = AsyncMock()
    sender.send_typing = AsyncMock()
    return sender


@pytest.fixture
def allowlist_file(tmp_path):
    """Return a writer that stores YAML text in a temp allowlist file."""
    path = tmp_path / "allowed_ids.yml"

    def _write(text: str):
        path.write_text(text, encoding="utf-8")
        return path

    return _write
