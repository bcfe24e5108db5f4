from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from jsstyle.config import load_config
from jsstyle.core.lint import lint_paths, lint_source
from jsstyle.errors import JsStyleError
from jsstyle.models import LintReport
from jsstyle.reporters import exit_code, render

console = Console()
err_console = Console(stderr=True)


def check(
    paths: Annotated[list[Path] | None, typer.Argument(help="Files or directories to lint.")] = None,
    code: Annotated[str | None, typer.Option(help="Source code string to lint instead of files.")] = None,
    fmt: Annotated[str, typer.Option("--format", "-f", help="Output format: text, table or json.")] = "text",
    select: Annotated[list[str] | None, typer.Option(help="Only run these rule ids.")] = None,
    ignore: Annotated[list[str] | None, typer.Option(help="Skip these rule ids.")] = None,
    config: Annotated[Path | None, typer.Option(help="Path to a jsstyle.toml or pyproject.toml.")] = None,
) -> None:
    """Lint JavaScript files, directories or a code snippet."""
    try:
        settings = load_config(config).with_overrides(select, ignore)
        if code is not None:
            report = LintReport(files=[lint_source(code, config=settings)])
        else:
            report = lint_paths(paths or [Path(".")], settings)
        render(report, fmt, console)
    except JsStyleError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(2) from exc
    raise typer.Exit(exit_code(report))
