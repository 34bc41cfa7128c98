"""The ``resolve`` command: show how a baseline path would be chosen."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape

from benchgate.baseline import (
    infer_suite_name,
    platform_arch,
    platform_os_id,
    resolve_baseline,
)
from benchgate.errors import BenchGateError
from benchgate.loaders import load_document

from ._app import app, console
from ._rich_output import key_value_panel, status_table


@app.command("resolve")
def resolve(
    baseline: Path = typer.Argument(..., help="Baseline JSON file or directory."),
    suite: str | None = typer.Option(None, "--suite", help="Suite name to resolve."),
    current: Path | None = typer.Option(
        None, "--current", help="Current results used to infer the suite name."
    ),
    os_id: str | None = typer.Option(None, "--os", help="Override the detected OS label."),
    arch: str | None = typer.Option(None, "--arch", help="Override the detected architecture."),
) -> None:
    """Show the baseline candidates for a suite and which one would be used.

    [dim]Examples:[/dim]
      benchgate resolve baselines/ --suite CacheBenchmarks
      benchgate resolve baselines/ --current results.json --os ubuntu-latest --arch x64
    """
    suite_name = suite
    if suite_name is None and current is not None:
        try:
            suite_name = infer_suite_name(load_document(current).raw)
        except BenchGateError as exc:
            console.print(f"[bg.fail]Failed to read current results:[/bg.fail] {escape(str(exc))}")
            raise typer.Exit(code=1) from None
    if suite_name is None:
        suite_name = infer_suite_name({})

    resolved_os = os_id or platform_os_id()
    resolved_arch = arch or platform_arch()
    resolved = resolve_baseline(baseline, suite_name, os_id=resolved_os, arch=resolved_arch)

    console.print(
        key_value_panel(
            {
                "Suite": suite_name,
                "OS": resolved_os,
                "Architecture": resolved_arch,
                "Baseline": str(resolved.path),
            },
            title="Baseline Resolution",
            border="bg.border.success" if resolved.found else "bg.border.error",
        )
    )

    rows: list[tuple[str, str, str]] = []
    for candidate in resolved.candidates:
        if resolved.found and candidate == resolved.path:
            rows.append(("pass", str(candidate), "[bg.pass]selected[/bg.pass]"))
        elif candidate.is_file():
            rows.append(("info", str(candidate), "exists"))
        else:
            rows.append(("fail", str(candidate), "[bg.muted]missing[/bg.muted]"))
    console.print(status_table(rows, title="Candidates"))

    if not resolved.found:
        console.print("[bg.warn]No baseline found; `benchgate gate` would be SKIPPED.[/bg.warn]")
        raise typer.Exit(code=1)
