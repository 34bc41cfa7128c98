"""App definition, consoles, and root callback for the benchgate CLI."""

from __future__ import annotations

import typer
from rich.console import Console

from ._theme import BG_THEME

app = typer.Typer(
    help="Statistical benchmark regression gate for CI pipelines.",
    epilog=(
        "[dim]Common workflows:\n"
        "  Gate a run        → benchgate gate baselines/ results.json\n"
        "  Debug resolution  → benchgate resolve baselines/ --suite CacheBenchmarks[/dim]"
    ),
    rich_markup_mode="rich",
    no_args_is_help=True,
)

console = Console(theme=BG_THEME)
err_console = Console(theme=BG_THEME, stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        import platform

        import numpy

        from benchgate import __version__

        console.print(
            f"benchgate [bold]{__version__}[/bold]  "
            f"(Python {platform.python_version()}, NumPy {numpy.__version__})"
        )
        raise typer.Exit()


def _debug_callback(debug: bool) -> None:
    """Enable debug logging when --debug is passed."""
    if debug:
        import logging

        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
) -> None:
    """benchgate command-line interface."""
    _debug_callback(debug)
