"""Tests for AllowlistStore snapshot, reload and lifecycle."""

import asyncio
from unittest.mock import patch

import pytest

from langame_bot.allowlist import AllowlistStore


async def _wait_for(predicate, timeout: float = 2.0) -> None:
    deadline = asyncio.get_running_loop().time() + timeout
    while not predicate():
        if asyncio.get_running_loop().time() > deadline:
            raise AssertionError("condition not met before timeout")
        await asyncio.sleep(0.01)


class TestAllowlistMembership:
    """Tests for is_allowed and reload."""

    def test_empty_store_allows_everyone(self, tmp_path) -> None:
        store = AllowlistStore(tmp_path / "missing.yml")

        assert store.is_allowed(1)
        assert store.is_allowed(-100500)

    def test_listed_ids_only(self, allowlist_file) -> None:
        store = AllowlistStore(allowlist_file("- 10\n- 20\n"))

        store.reload()

        assert store.is_allowed(10)
        assert store.is_allowed(20)
        assert not store.is_allowed(30)

    def test_wrapped_ids_only(self, allowlist_file) -> None:
        store = AllowlistStore(allowlist_file("allowlist: [5]\n"))

        store.reload()

        assert store.is_allowed(5)
        assert not store.is_allowed(6)

    def test_reload_twice_with_same_content_is_stable(self, allowlist_file) -> None:
        store = AllowlistStore(allowlist_file("ids: [1, 2, 3]\n"))

        first = store.reload()
        second = store.reload()

        assert first == second == frozenset({1, 2, 3})
        assert [store.is_allowed(i) for i in range(5)] == [False, True, True, True, False]

    def test_snapshot_is_replaced_not_mutated(self, allowlist_file) -> None:
        path = allowlist_file("ids: [1]\n")
        store = AllowlistStore(path)
        store.reload()
        old_snapshot = store.snapshot

        allowlist_file("ids: [2]\n")
        store.reload()

        assert old_snapshot == frozenset({1})
        assert store.snapshot == frozenset({2})

    def test_file_becoming_invalid_opens_access(self, allowlist_file) -> None:
        store = AllowlistStore(allowlist_file("ids: [1]\n"))
        store.reload()

        allowlist_file("ids: [1,\n")
        store.reload()

        assert store.is_allowed(999)


class TestScheduledReload:
    """Tests for the debounced, single-flight reload."""

    @pytest.mark.asyncio
    async def test_second_trigger_while_pending_is_noop(self, allowlist_file) -> None:
        store = AllowlistStore(allowlist_file("ids: [1]\n"), debounce_seconds=0.01)

        assert store.schedule_reload() is True
        assert store.schedule_reload() is False
        assert store.reload_pending

        await store._reload_task

        assert not store.reload_pending
        assert store.snapshot == frozenset({1})

    @pytest.mark.asyncio
    async def test_rapid_writes_collapse_into_one_reload(self, allowlist_file) -> None:
        path = allowlist_file("ids: [1]\n")
        store = AllowlistStore(path, debounce_seconds=0.05)

        with patch.object(store, "reload", wraps=store.reload) as reload_spy:
            store.schedule_reload()
            allowlist_file("ids: [1, 2]\n")
            store.schedule_reload()
            allowlist_file("ids: [1, 2, 3]\n")
            store.schedule_reload()
            await store._reload_task

        assert reload_spy.call_count == 1
        assert store.snapshot == frozenset({1, 2, 3})

    @pytest.mark.asyncio
    async def test_trigger_after_completion_schedules_again(self, allowlist_file) -> None:
        store = AllowlistStore(allowlist_file("ids: [1]\n"), debounce_seconds=0.01)
        store.schedule_reload()
        await store._reload_task

        assert store.schedule_reload() is True
        await store._reload_task

    @pytest.mark.asyncio
    async def test_failed_reload_clears_pending_flag(self, allowlist_file, caplog) -> None:
        store = AllowlistStore(allowlist_file("ids: [1]\n"), debounce_seconds=0.01)

        with patch("langame_bot.allowlist.store.load_allowlist", side_effect=RuntimeError("boom")):
            store.schedule_reload()
            await store._reload_task

        assert not store.reload_pending
        assert "Allowlist reload failed" in caplog.text


class TestStoreLifecycle:
    """Tests for start/stop and file watching."""

    @pytest.mark.asyncio
    async def test_context_manager_loads_and_watches(self, allowlist_file) -> None:
        store = AllowlistStore(allowlist_file("ids: [1]\n"), poll_interval=0.01)

        async with store:
            assert store.snapshot == frozenset({1})
            assert store._watcher.is_running

        assert not store._watcher.is_running

    @pytest.mark.asyncio
    async def test_file_change_is_picked_up(self, allowlist_file) -> None:
        path = allowlist_file("ids: [1]\n")
        store = AllowlistStore(path, poll_interval=0.01, debounce_seconds=0.01)

        async with store:
            allowlist_file("ids: [1, 2, 3, 4]\n")
            await _wait_for(lambda: store.snapshot == frozenset({1, 2, 3, 4}))

        assert store.is_allowed(4)

    @pytest.mark.asyncio
    async def test_file_removal_allows_everyone(self, allowlist_file) -> None:
        path = allowlist_file("ids: [1]\n")
        store = AllowlistStore(path, poll_interval=0.01, debounce_seconds=0.01)

        async with store:
            path.unlink()
            await _wait_for(lambda: store.snapshot == frozenset())

        assert store.is_allowed(12345)

    @pytest.mark.asyncio
    async def test_undecodable_file_at_startup_allows_everyone(self, tmp_path) -> None:
        path = tmp_path / "allowed_ids.yml"
        path.write_bytes(b"\xff\xfe")
        store = AllowlistStore(path, poll_interval=0.01)

        async with store:
            assert store.snapshot == frozenset()
            assert store.is_allowed(123)

    @pytest.mark.asyncio
    async def test_file_becoming_undecodable_opens_access(self, allowlist_file) -> None:
        path = allowlist_file("ids: [1]\n")
        store = AllowlistStore(path, poll_interval=0.01, debounce_seconds=0.01)

        async with store:
            path.write_bytes(b"- 1\n- \xff\xfe2\n")
            await _wait_for(lambda: store.snapshot == frozenset())

        assert store.is_allowed(999)

    @pytest.mark.asyncio
    async def test_stop_cancels_pending_reload(self, allowlist_file) -> None:
        store = AllowlistStore(allowlist_file("ids: [1]\n"), debounce_seconds=30)
        await store.start()
        store.schedule_reload()
        task = store._reload_task

        await store.stop()

        assert task.cancelled()
        assert not store.reload_pending
