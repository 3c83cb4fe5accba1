"""Hot-reloading allowlist of Telegram chat ids."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import FrozenSet, Optional

from .file_watcher import DEFAULT_POLL_INTERVAL_SECONDS, FileChangeWatcher
from .loader import EMPTY_ALLOWLIST, load_allowlist

logger = logging.getLogger(__name__)

DEFAULT_RELOAD_DEBOUNCE_SECONDS = 0.25


class AllowlistStore:
    """
    Owns the allowlist snapshot and the watcher that refreshes it.

    The snapshot is an immutable frozenset published by a single attribute
    assignment, so ``is_allowed`` never observes a partially built set. An
    empty snapshot allows every chat.
    """

    def __init__(
        self,
        path: Path,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        debounce_seconds: float = DEFAULT_RELOAD_DEBOUNCE_SECONDS,
    ):
        self.path = path
        self.debounce_seconds = debounce_seconds
        self._snapshot: FrozenSet[int] = EMPTY_ALLOWLIST
        self._reload_scheduled = False
        self._reload_task: Optional[asyncio.Task] = None
        self._watcher = FileChangeWatcher(path, self.schedule_reload, poll_interval=poll_interval)

    @property
    def snapshot(self) -> FrozenSet[int]:
        return self._snapshot

    @property
    def reload_pending(self) -> bool:
        return self._reload_scheduled

    def is_allowed(self, chat_id: int) -> bool:
        snapshot = self._snapshot
        return not snapshot or chat_id in snapshot

    def reload(self) -> FrozenSet[int]:
        """Load the file and publish the result as the new snapshot."""
        loaded = load_allowlist(self.path)
        previous_count = len(self._snapshot)
        self._snapshot = loaded
        if previous_count != len(loaded):
            logger.info("Loaded %d allowlist entries from %s", len(loaded), self.path)
        return loaded

    def schedule_reload(self) -> bool:
        """
        Schedule a debounced reload.

        Returns:
            False when a reload is already pending or running
        """
        if self._reload_scheduled:
            return False
        self._reload_scheduled = True
        self._reload_task = asyncio.create_task(self._debounced_reload())
        return True

    async def _debounced_reload(self) -> None:
        try:
            await asyncio.sleep(self.debounce_seconds)
            self.reload()
        except (OSError, RuntimeError, ValueError):
            logger.exception("Allowlist reload failed")
        finally:
            self._reload_scheduled = False

    async def start(self) -> None:
        """Perform the initial load and start watching the file."""
        self.reload()
        self._watcher.start()

    async def stop(self) -> None:
        """Stop the watcher and cancel any pending reload."""
        await self._watcher.stop()
        task = self._reload_task
        self._reload_task = None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._reload_scheduled = False

    async def __aenter__(self) -> "AllowlistStore":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
