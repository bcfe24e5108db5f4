import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from jsstyle.cli.check import check
from jsstyle.cli.rules import rules
from jsstyle.cli.serve import serve_app
from jsstyle.cli.watch import watch

app = typer.Typer(
    name="jsstyle",
    help="Check JavaScript sources against the style guide.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    package_logger = logging.getLogger("jsstyle")
    package_logger.handlers[:] = [handler]
    package_logger.setLevel(level)


@app.callback()
def main_callback(
    verbose: Annotated[int, typer.Option("--verbose", "-v", count=True, help="Increase log verbosity.")] = 0,
) -> None:
    _configure_logging(verbose)


app.command("check")(check)
app.command("rules")(rules)
app.command("watch")(watch)
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
