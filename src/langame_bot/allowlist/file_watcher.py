"""Poll a single file for changes and notify a callback."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 1.0

FileSignature = Optional[Tuple[int, int]]


def read_file_signature(path: Path) -> FileSignature:
    """Return (mtime_ns, size) for ``path`` or None when it does not exist."""
    try:
        stat_result = path.stat()
    except FileNotFoundError:
        return None
    except OSError as exc:
        logger.debug("Unable to stat %s: %s", path, exc)
        return None
    return stat_result.st_mtime_ns, stat_result.st_size


class FileChangeWatcher:
    """Watches one file by polling its stat signature from a background task."""

    def __init__(
        self,
        path: Path,
        on_change: Callable[[], None],
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    ):
        self.path = path
        self.on_change = on_change
        self.poll_interval = poll_interval
        self._last_signature: FileSignature = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start watching in a background task."""
        if self.is_running:
            return
        self._last_signature = read_file_signature(self.path)
        self._task = asyncio.create_task(self._watch_poll())
        logger.info("Started watching %s", self.path)

    async def stop(self) -> None:
        """Stop watching."""
        task = self._task
        self._task = None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Stopped watching %s", self.path)

    def check_once(self) -> bool:
        """Compare the current signature to the last one; fire the callback on change."""
        current = read_file_signature(self.path)
        if current == self._last_signature:
            return False
        self._last_signature = current
        logger.debug("Change detected in %s", self.path)
        self.on_change()
        return True

    async def _watch_poll(self) -> None:
        while True:
            await asyncio.sleep(self.poll_interval)
            self.check_once()
