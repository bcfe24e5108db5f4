"""Tests for the watchfiles watcher adapter."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from jsstyle.watcher.watchfiles_adapter import WatchfilesWatcher

EXCLUDE = ("node_modules", "*.min.js")


class TestWanted:
    @pytest.fixture
    def watcher(self, tmp_path: Path) -> WatchfilesWatcher:
        return WatchfilesWatcher(tmp_path, AsyncMock(), exclude=EXCLUDE)

    def test_javascript_files(self, watcher: WatchfilesWatcher, tmp_path: Path) -> None:
        root = tmp_path.resolve()
        assert watcher._wanted(root / "app.js") is True
        assert watcher._wanted(root / "lib" / "server.mjs") is True
        assert watcher._wanted(root / "legacy.cjs") is True

    def test_unsupported_files(self, watcher: WatchfilesWatcher, tmp_path: Path) -> None:
        root = tmp_path.resolve()
        assert watcher._wanted(root / "readme.md") is False
        assert watcher._wanted(root / "Makefile") is False
        assert watcher._wanted(root / "types.ts") is False

    def test_excluded_files(self, watcher: WatchfilesWatcher, tmp_path: Path) -> None:
        root = tmp_path.resolve()
        assert watcher._wanted(root / "node_modules" / "pkg" / "index.js") is False
        assert watcher._wanted(root / "vendor.min.js") is False

    def test_patterns_only_apply_below_watched_directory(self, tmp_path: Path) -> None:
        root = (tmp_path / "build").resolve()
        watcher = WatchfilesWatcher(root, AsyncMock(), exclude=("build",))
        assert watcher._wanted(root / "app.js") is True


class TestWatchfilesWatcher:
    def test_implements_protocol(self) -> None:
        from jsstyle.core.ports.watcher import FileWatcherPort

        callback = AsyncMock()
        watcher: FileWatcherPort = WatchfilesWatcher("/tmp", callback)
        assert hasattr(watcher, "start")
        assert hasattr(watcher, "stop")

    @pytest.mark.asyncio
    async def test_start_creates_task(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/tmp", callback)

        with patch("jsstyle.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _empty_async_iter()
            await watcher.start()
            assert watcher._task is not None
            await watcher.stop()
            assert watcher._task is None

    @pytest.mark.asyncio
    async def test_stop_without_start_is_noop(self) -> None:
        watcher = WatchfilesWatcher("/tmp", AsyncMock())
        await watcher.stop()

    @pytest.mark.asyncio
    async def test_double_start_is_noop(self) -> None:
        watcher = WatchfilesWatcher("/tmp", AsyncMock())

        with patch("jsstyle.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _empty_async_iter()
            await watcher.start()
            task1 = watcher._task
            await watcher.start()
            assert watcher._task is task1
            await watcher.stop()

    @pytest.mark.asyncio
    async def test_callback_receives_wanted_files(self, tmp_path: Path) -> None:
        root = tmp_path.resolve()
        callback = AsyncMock()
        watcher = WatchfilesWatcher(root, callback, exclude=EXCLUDE)

        changes = {
            (1, str(root / "app.js")),
            (2, str(root / "notes.txt")),
            (1, str(root / "node_modules" / "x.js")),
            (1, str(root / "util.mjs")),
        }

        with patch("jsstyle.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter(changes)
            await watcher.start()
            await asyncio.sleep(0.05)
            await watcher.stop()

        callback.assert_called_once()
        paths = callback.call_args[0][0]
        assert paths == {root / "app.js", root / "util.mjs"}

    @pytest.mark.asyncio
    async def test_callback_not_called_for_unwanted_only(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/tmp", callback)

        changes = {(1, "/tmp/readme.txt"), (2, "/tmp/Makefile")}

        with patch("jsstyle.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter(changes)
            await watcher.start()
            await asyncio.sleep(0.05)
            await watcher.stop()

        callback.assert_not_called()

    @pytest.mark.asyncio
    async def test_callback_errors_keep_the_watcher_alive(self, tmp_path: Path) -> None:
        root = tmp_path.resolve()
        callback = AsyncMock(side_effect=RuntimeError("boom"))
        watcher = WatchfilesWatcher(root, callback)

        with patch("jsstyle.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter({(1, str(root / "app.js"))})
            await watcher.start()
            await asyncio.sleep(0.05)
            assert watcher._task is not None
            assert not watcher._task.done()
            await watcher.stop()

        callback.assert_called_once()


async def _empty_async_iter() -> AsyncIterator[Any]:
    """Async iterator that never yields, just blocks until cancelled."""
    try:
        await asyncio.sleep(3600)
    except asyncio.CancelledError:
        return
    yield  # pragma: no cover


async def _single_change_iter(changes: set[tuple[int, str]]) -> AsyncIterator[set[tuple[int, str]]]:
    """Async iterator that yields one set of changes then blocks."""
    yield changes
    try:
        await asyncio.sleep(3600)
    except asyncio.CancelledError:
        return
