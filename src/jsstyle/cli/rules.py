from rich.console import Console
from rich.table import Table

from jsstyle.core.registry import SYNTAX_ERROR_RULE, default_registry

console = Console()


def rules() -> None:
    """List the available style rules."""
    table = Table(show_lines=False)
    table.add_column("rule")
    table.add_column("severity")
    table.add_column("description")
    for registered in default_registry().rules():
        info = registered.info()
        table.add_row(info.rule_id, info.default_severity.value, info.description)
    table.add_row(SYNTAX_ERROR_RULE, "error", "Source must parse (always on).")
    console.print(table)
