import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from jsstyle.config import LintConfig, load_config
from jsstyle.core.lint import lint_paths
from jsstyle.core.ports.watcher import FileWatcherPort
from jsstyle.errors import JsStyleError
from jsstyle.reporters import render
from jsstyle.watcher.watchfiles_adapter import WatchfilesWatcher

console = Console()
err_console = Console(stderr=True)


def _relint(paths: set[Path], settings: LintConfig, fmt: str) -> None:
    existing = sorted(p for p in paths if p.is_file())
    if not existing:
        return
    render(lint_paths(existing, settings), fmt, console)


def watch(
    directory: Annotated[Path, typer.Argument(help="Directory to watch.")] = Path("."),
    fmt: Annotated[str, typer.Option("--format", "-f", help="Output format: text, table or json.")] = "text",
    config: Annotated[Path | None, typer.Option(help="Path to a jsstyle.toml or pyproject.toml.")] = None,
) -> None:
    """Lint a directory, then re-lint files as they change."""
    try:
        settings = load_config(config)
        render(lint_paths([directory], settings), fmt, console)
    except JsStyleError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(2) from exc

    async def _on_change(paths: set[Path]) -> None:
        _relint(paths, settings, fmt)

    async def _run() -> None:
        watcher: FileWatcherPort = WatchfilesWatcher(directory, _on_change, exclude=settings.exclude)
        await watcher.start()
        try:
            await asyncio.Event().wait()
        finally:
            await watcher.stop()

    console.print(f"[green]Watching[/green] {escape(str(directory))} (Ctrl+C to stop)")
    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("Stopped.")
