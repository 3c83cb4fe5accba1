"""Environment-backed configuration for the bot."""

from .errors import ConfigurationError
from .runtime import env_int, env_int_lenient, env_str
from .settings import BotSettings, load_bot_settings

__all__ = [
    "BotSettings",
    "ConfigurationError",
    "env_int",
    "env_int_lenient",
    "env_str",
    "load_bot_settings",
]
