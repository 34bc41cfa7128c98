"""Serialisable and markdown renderings of a gate outcome."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .gate import GateOutcome

REPORT_SCHEMA_VERSION = "benchgate.report.v1"


def build_report_payload(outcome: GateOutcome) -> dict[str, Any]:
    """Return a JSON-ready description of ``outcome``."""
    payload: dict[str, Any] = {
        "schema_version": REPORT_SCHEMA_VERSION,
        "status": outcome.status,
        "exit_code": outcome.exit_code,
        "message": outcome.message,
        "suite": outcome.suite,
        "baseline": None,
    }
    if outcome.baseline is not None:
        payload["baseline"] = {
            "path": str(outcome.baseline.path),
            "found": outcome.baseline.found,
            "candidates": [str(candidate) for candidate in outcome.baseline.candidates],
        }
    if outcome.result is not None:
        payload.update(outcome.result.to_dict())
    return payload


def write_report(outcome: GateOutcome, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(build_report_payload(outcome), indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return path


def _escape(cell: str) -> str:
    return cell.replace("|", "\\|")


def render_markdown_report(outcome: GateOutcome) -> str:
    """Render a gate outcome as a markdown summary for CI job pages."""
    overall = {
        "passed": "PASS",
        "failed": "FAIL",
        "skipped": "SKIPPED",
    }.get(outcome.status, "FAIL")
    lines = [
        "# Benchmark Gate Report",
        "",
        f"Suite: `{outcome.suite or 'unknown'}`",
    ]
    if outcome.baseline is not None:
        lines.append(f"Baseline: `{outcome.baseline.path}`")
    lines.extend([f"Overall status: **{overall}**", "", outcome.message])

    result = outcome.result
    if result is None:
        return "\n".join(lines) + "\n"

    for title, verdicts in (("Regressions", result.regressions), ("Improvements", result.improvements)):
        lines.extend(["", f"## {title}", ""])
        if not verdicts:
            lines.append("_None._")
            continue
        lines.append("| Benchmark | Mean Before | Mean After | Delta % | Alloc Delta (B) | MWU p |")
        lines.append("| --- | ---: | ---: | ---: | ---: | ---: |")
        for verdict in verdicts:
            p_value = "-" if verdict.rank_sum is None else f"{verdict.rank_sum.p_value:.4f}"
            lines.append(
                f"| {_escape(verdict.id)} | {verdict.mean_before:.2f} | {verdict.mean_after:.2f} "
                f"| {verdict.mean_pct * 100:+.2f}% | {verdict.alloc_delta:+g} | {p_value} |"
            )
    return "\n".join(lines) + "\n"
