"""Chat commands: reboot workflow, help and unknown-command replies."""

from .command_handlers import (
    HELP_TEXT,
    NO_DATA_TEXT,
    REBOOT_COMMAND,
    START_COMMAND,
    TIMEOUT_TEXT,
    UNKNOWN_COMMAND_TEXT,
    HelpCommandHandler,
    RebootCommandHandler,
    UnknownCommandHandler,
    describe_api_failure,
)
from .message_chunker import DEFAULT_CHUNK_BUDGET, chunk_lines
from .reboot_formatter import device_succeeded, format_reboot_lines

__all__ = [
    "DEFAULT_CHUNK_BUDGET",
    "HELP_TEXT",
    "HelpCommandHandler",
    "NO_DATA_TEXT",
    "REBOOT_COMMAND",
    "RebootCommandHandler",
    "START_COMMAND",
    "TIMEOUT_TEXT",
    "UNKNOWN_COMMAND_TEXT",
    "UnknownCommandHandler",
    "chunk_lines",
    "describe_api_failure",
    "device_succeeded",
    "format_reboot_lines",
]
