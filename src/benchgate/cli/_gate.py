"""The ``gate`` command: compare a benchmark run against its baseline."""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path

import typer
from rich.markup import escape

from benchgate.config_loader import GateConfig, discover_config
from benchgate.errors import BenchGateError
from benchgate.gate import (
    EXIT_FAILURE,
    EXIT_OK,
    EXIT_USAGE,
    STATUS_FAILED,
    STATUS_MISSING_CURRENT,
    STATUS_SKIPPED,
    GateOutcome,
    run_gate,
)
from benchgate.report import build_report_payload, render_markdown_report, write_report
from benchgate.types import ThresholdConfig

from ._app import app, console, err_console

FAILURE_PREFIX = "BENCH GATE FAILURE:"
OUTPUT_FORMATS = ("text", "json", "markdown")


def _fail(message: str) -> None:
    err_console.print(f"[bg.fail]{FAILURE_PREFIX}[/bg.fail] {escape(message)}", soft_wrap=True)


def _merge_thresholds(
    config: GateConfig,
    *,
    time_threshold: float | None,
    alloc_threshold_bytes: int | None,
    alloc_threshold_pct: float | None,
    sigma_mult: float | None,
    no_sigma: bool,
) -> ThresholdConfig:
    base = config.thresholds
    overrides: dict[str, object] = {}
    if time_threshold is not None:
        overrides["time_threshold"] = time_threshold
    if alloc_threshold_bytes is not None:
        overrides["alloc_threshold_bytes"] = alloc_threshold_bytes
    if alloc_threshold_pct is not None:
        overrides["alloc_threshold_pct"] = alloc_threshold_pct
    if sigma_mult is not None:
        overrides["sigma_mult"] = sigma_mult
    if no_sigma:
        overrides["use_sigma"] = False
    return replace(base, **overrides).validate()


def _print_text(outcome: GateOutcome) -> None:
    if outcome.status == STATUS_MISSING_CURRENT:
        _fail(outcome.message)
        return

    if outcome.baseline is not None and outcome.baseline.found and len(outcome.baseline.candidates) > 1:
        console.print(f"Resolved baseline: {escape(str(outcome.baseline.path))}", soft_wrap=True)

    if outcome.status == STATUS_SKIPPED:
        console.print(f"[bg.warn]{escape(outcome.message)}[/bg.warn]", soft_wrap=True)
        return

    result = outcome.result
    if result is None:
        return
    if outcome.status == STATUS_FAILED:
        _fail(outcome.message)
        for verdict in result.regressions:
            err_console.print(f"  {escape(verdict.render())}", soft_wrap=True, highlight=False)
        return

    console.print(f"[bg.pass]{escape(outcome.message)}[/bg.pass]", soft_wrap=True)
    if result.improvements:
        console.print("Notable improvements (consider updating baseline):")
        for verdict in result.improvements:
            console.print(f"  {escape(verdict.render())}", soft_wrap=True, highlight=False)


@app.command("gate")
def gate(
    baseline: Path = typer.Argument(
        ...,
        help="Baseline JSON file, or a directory searched per OS/architecture.",
        show_default=False,
    ),
    current: Path = typer.Argument(..., help="Current benchmark results JSON file."),
    suite: str | None = typer.Option(
        None, "--suite", help="Suite name used for directory resolution (inferred if omitted)."
    ),
    time_threshold: float | None = typer.Option(
        None, "--time-threshold", help="Relative time regression threshold (default 0.03)."
    ),
    alloc_threshold_bytes: int | None = typer.Option(
        None, "--alloc-threshold-bytes", help="Absolute allocation growth guard (default 16)."
    ),
    alloc_threshold_pct: float | None = typer.Option(
        None, "--alloc-threshold-pct", help="Relative allocation growth threshold (default 0.03)."
    ),
    sigma_mult: float | None = typer.Option(
        None, "--sigma-mult", help="Standard-error multiplier for significance (default 2.0)."
    ),
    no_sigma: bool = typer.Option(
        False, "--no-sigma", help="Disable significance filtering on the mean/stddev path."
    ),
    config: Path | None = typer.Option(
        None, "--config", help="Path to benchgate.toml (defaults to ./benchgate.toml if present)."
    ),
    format: str = typer.Option("text", "--format", "-f", help="text, json, or markdown."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write a JSON report here."),
) -> None:
    """Fail the build when benchmarks regressed against the committed baseline.

    When BASELINE is a directory the file is resolved as
    <suite>.<os>.<arch>.json -> <suite>.<os>.json -> <suite>.json.
    If no baseline exists the gate is SKIPPED (exit 0) so a first run can
    capture one.

    [dim]Examples:[/dim]
      benchgate gate baselines/ results.json
      benchgate gate baselines/Cache.json results.json --time-threshold=0.05 --no-sigma
    """
    if format not in OUTPUT_FORMATS:
        console.print(
            f"[bg.fail]Unknown format:[/bg.fail] {escape(format)}. "
            f"Available: {', '.join(OUTPUT_FORMATS)}."
        )
        raise typer.Exit(code=EXIT_USAGE)

    try:
        gate_config = discover_config(config)
        thresholds = _merge_thresholds(
            gate_config,
            time_threshold=time_threshold,
            alloc_threshold_bytes=alloc_threshold_bytes,
            alloc_threshold_pct=alloc_threshold_pct,
            sigma_mult=sigma_mult,
            no_sigma=no_sigma,
        )
        outcome = run_gate(
            baseline,
            current,
            suite=suite or gate_config.suite,
            thresholds=thresholds,
        )
        if output is not None:
            write_report(outcome, output)
    except (BenchGateError, ValueError, OSError) as exc:
        _fail(str(exc))
        raise typer.Exit(code=EXIT_FAILURE) from None

    if format == "json":
        console.print(
            json.dumps(build_report_payload(outcome), indent=2, sort_keys=True),
            markup=False,
            emoji=False,
            highlight=False,
            soft_wrap=True,
        )
    elif format == "markdown":
        console.print(
            render_markdown_report(outcome),
            markup=False,
            emoji=False,
            highlight=False,
            soft_wrap=True,
        )
    else:
        _print_text(outcome)

    if outcome.exit_code != EXIT_OK:
        raise typer.Exit(code=outcome.exit_code)
