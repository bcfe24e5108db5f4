from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Any, Protocol

ChangeCallback = Callable[[set[Path]], Coroutine[Any, Any, None]]
"""Receives the set of changed JavaScript files after each debounced batch."""


class FileWatcherPort(Protocol):
    async def start(self) -> None: ...

    async def stop(self) -> None: ...
