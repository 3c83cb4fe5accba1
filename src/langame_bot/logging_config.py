"""
Centralized logging configuration for the bot.

Provides a single setup_logging function that configures the root logger:
- Console output to stdout
- Optional file output to $LOG_DIR/{service_name}.log
- Quiet third-party loggers
"""

import logging
import os
import sys
import threading
from pathlib import Path
from typing import Optional, Union

_config_lock = threading.Lock()
_MODULE_LOGGER = logging.getLogger(__name__)
_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        try:
            handler.close()
        except OSError as e:
            _MODULE_LOGGER.debug("Handler close failed: %s", e)
    logger.handlers = []


def _build_console_handler() -> logging.Handler:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    return console_handler


def _configure_file_handler(service_name: Optional[str]) -> Optional[logging.Handler]:
    log_dir = os.getenv("LOG_DIR")
    if not service_name or not log_dir:
        return None

    logs_dir = Path(log_dir).expanduser()
    logs_dir.mkdir(parents=True, exist_ok=True)
    file_mode = "a" if os.getenv("LOG_APPEND") == "1" else "w"

    file_handler = logging.FileHandler(logs_dir / f"{service_name}.log", mode=file_mode, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    return file_handler


def _suppress_noisy_third_parties() -> None:
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def setup_logging(service_name: Optional[str] = None, level: Union[int, str] = logging.INFO) -> None:
    """Configure logging for the application"""

    with _config_lock:
        root_logger = logging.getLogger()
        _close_handlers(root_logger)

        root_logger.addHandler(_build_console_handler())

        file_handler = _configure_file_handler(service_name)
        if file_handler:
            root_logger.addHandler(file_handler)

        if isinstance(level, str):
            resolved = logging.getLevelName(level.upper())
            level = resolved if isinstance(resolved, int) else logging.INFO
        root_logger.setLevel(level)
        _suppress_noisy_third_parties()
