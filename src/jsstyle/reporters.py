"""Render lint reports for people (text, table) and for machines (json)."""

from collections.abc import Callable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from jsstyle.errors import UnknownFormatError
from jsstyle.models import LintReport, Severity

_SEVERITY_STYLES = {Severity.ERROR: "red", Severity.WARNING: "yellow"}


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def _summary(report: LintReport) -> str:
    total = report.error_count + report.warning_count
    if total == 0:
        return f"[green]No problems found[/green] in {_plural(len(report.files), 'file')}."
    return (
        f"[bold]{_plural(total, 'problem')}[/bold] "
        f"({_plural(report.error_count, 'error')}, {_plural(report.warning_count, 'warning')})"
    )


def render_text(report: LintReport, console: Console) -> None:
    for file_report in report.files:
        if not file_report.violations:
            continue
        console.print(f"[underline]{escape(file_report.path)}[/underline]")
        for v in file_report.violations:
            style = _SEVERITY_STYLES[v.severity]
            console.print(
                f"  {v.line}:{v.column}  [{style}]{v.severity.value}[/{style}]  "
                f"{escape(v.message)}  [dim]{v.rule_id}[/dim]",
                highlight=False,
            )
        console.print()
    console.print(_summary(report))


def render_table(report: LintReport, console: Console) -> None:
    table = Table(show_lines=False)
    for header in ("file", "line", "column", "severity", "rule", "message"):
        table.add_column(header)
    for v in report.violations:
        style = _SEVERITY_STYLES[v.severity]
        severity = f"[{style}]{v.severity.value}[/{style}]"
        table.add_row(escape(v.path), str(v.line), str(v.column), severity, v.rule_id, escape(v.message))
    console.print(table)
    console.print(f"({len(report.violations)} rows)")


def render_json(report: LintReport, console: Console) -> None:
    console.out(report.model_dump_json(indent=2), highlight=False)


RENDERERS: dict[str, Callable[[LintReport, Console], None]] = {
    "text": render_text,
    "table": render_table,
    "json": render_json,
}


def render(report: LintReport, fmt: str, console: Console) -> None:
    try:
        renderer = RENDERERS[fmt]
    except KeyError:
        raise UnknownFormatError(f"Unknown output format '{fmt}'. Supported: {sorted(RENDERERS)}") from None
    renderer(report, console)


def exit_code(report: LintReport) -> int:
    return 1 if report.error_count else 0
