from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Iterable
from pathlib import Path

from watchfiles import awatch

from jsstyle.core.languages import is_supported_file
from jsstyle.core.lint import is_excluded
from jsstyle.core.ports.watcher import ChangeCallback

logger = logging.getLogger(__name__)


class WatchfilesWatcher:
    """Watch a directory for JavaScript changes and trigger a callback.

    Implements the ``FileWatcherPort`` protocol.
    """

    def __init__(
        self,
        directory: str | Path,
        on_change: ChangeCallback,
        exclude: Iterable[str] = (),
    ) -> None:
        self._directory = Path(directory)
        self._root = self._directory.resolve()
        self._on_change = on_change
        self._exclude = tuple(exclude)
        self._task: asyncio.Task[None] | None = None

    def _wanted(self, path: Path) -> bool:
        if not is_supported_file(path):
            return False
        # Exclude patterns apply below the watched directory only.
        relative = path.relative_to(self._root) if path.is_relative_to(self._root) else path
        return not is_excluded(relative, self._exclude)

    async def start(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._watch())
        logger.info("Watcher started for %s", self._directory)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Watcher stopped for %s", self._directory)

    async def _watch(self) -> None:
        async for changes in awatch(self._directory):
            paths = {Path(p) for _, p in changes if self._wanted(Path(p))}
            if paths:
                logger.info("Detected changes in %d file(s)", len(paths))
                try:
                    await self._on_change(paths)
                except Exception:
                    logger.exception("Error in watcher callback")
