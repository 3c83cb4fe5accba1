from __future__ import annotations

"""Bot settings assembled from the environment."""

from dataclasses import dataclass
from pathlib import Path

from ..http_utils import ensure_http_url
from .errors import ConfigurationError
from .runtime import clamp, env_int_lenient, env_str

DEFAULT_ALLOWLIST_PATH = "allowed_ids.yml"
DEFAULT_TIMEOUT_SECONDS = 30
MIN_TIMEOUT_SECONDS = 5
MAX_TIMEOUT_SECONDS = 300
DEFAULT_RETRY_COUNT = 3
MIN_RETRY_COUNT = 1
MAX_RETRY_COUNT = 6
DEFAULT_CLUB_ID = 1
DEFAULT_PC_TYPE = "free"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class BotSettings:
    telegram_token: str
    api_key: str
    base_url: str
    allowlist_path: Path
    api_timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    api_retry_count: int = DEFAULT_RETRY_COUNT
    club_id: int = DEFAULT_CLUB_ID
    pc_type: str = DEFAULT_PC_TYPE
    log_level: str = DEFAULT_LOG_LEVEL


def _read_base_url() -> str:
    raw = env_str("LANGAME_BASE_URL", required=True)
    base_url = raw.rstrip("/")
    try:
        return ensure_http_url(base_url)
    except ValueError as exc:
        raise ConfigurationError.invalid_value("ENV LANGAME_BASE_URL", base_url, str(exc)) from exc


def load_bot_settings() -> BotSettings:
    """Read and validate settings; raises ``ConfigurationError`` on missing required values."""

    telegram_token = env_str("TELEGRAM_BOT_TOKEN", required=True)
    api_key = env_str("LANGAME_API_KEY", required=True)
    base_url = _read_base_url()

    allowlist_raw = env_str("ALLOWED_IDS_YML", or_value=DEFAULT_ALLOWLIST_PATH)
    allowlist_path = Path(allowlist_raw).expanduser().resolve()

    timeout = clamp(
        env_int_lenient("LANGAME_HTTP_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        MIN_TIMEOUT_SECONDS,
        MAX_TIMEOUT_SECONDS,
    )
    retries = clamp(
        env_int_lenient("LANGAME_HTTP_RETRY_COUNT", DEFAULT_RETRY_COUNT),
        MIN_RETRY_COUNT,
        MAX_RETRY_COUNT,
    )
    club_id = max(1, env_int_lenient("LANGAME_CLUB_ID", DEFAULT_CLUB_ID))
    pc_type = env_str("LANGAME_PC_TYPE", or_value=DEFAULT_PC_TYPE)
    log_level = env_str("LOG_LEVEL", or_value=DEFAULT_LOG_LEVEL).upper()

    return BotSettings(
        telegram_token=telegram_token,
        api_key=api_key,
        base_url=base_url,
        allowlist_path=allowlist_path,
        api_timeout_seconds=timeout,
        api_retry_count=retries,
        club_id=club_id,
        pc_type=pc_type,
        log_level=log_level,
    )
