"""Tests for JSON and markdown gate reports."""

from __future__ import annotations

import json
from pathlib import Path

from benchgate.baseline import ResolvedBaseline
from benchgate.comparator import compare_samples
from benchgate.gate import GateOutcome
from benchgate.report import (
    REPORT_SCHEMA_VERSION,
    build_report_payload,
    render_markdown_report,
    write_report,
)
from benchgate.types import BenchmarkSample


def _failed_outcome() -> GateOutcome:
    result = compare_samples(
        [BenchmarkSample(id="Cache|Hit", mean=100.0), BenchmarkSample(id="Miss", mean=100.0)],
        [BenchmarkSample(id="Cache|Hit", mean=120.0), BenchmarkSample(id="Miss", mean=90.0)],
    )
    return GateOutcome(
        status="failed",
        exit_code=1,
        message="Detected performance regressions vs baseline:",
        suite="Cache",
        baseline=ResolvedBaseline(path=Path("baselines/Cache.json"), found=True),
        result=result,
    )


def test_payload_includes_verdicts() -> None:
    payload = build_report_payload(_failed_outcome())
    assert payload["schema_version"] == REPORT_SCHEMA_VERSION
    assert payload["status"] == "failed"
    assert payload["passed"] is False
    assert payload["baseline"]["found"] is True
    assert [item["id"] for item in payload["regressions"]] == ["Cache|Hit"]
    assert [item["id"] for item in payload["improvements"]] == ["Miss"]


def test_payload_for_skipped_run_has_no_verdicts() -> None:
    outcome = GateOutcome(status="skipped", exit_code=0, message="No baseline found", suite="Cache")
    payload = build_report_payload(outcome)
    assert payload["baseline"] is None
    assert "regressions" not in payload


def test_write_report_creates_parents(tmp_path: Path) -> None:
    target = write_report(_failed_outcome(), tmp_path / "nested" / "report.json")
    payload = json.loads(target.read_text(encoding="utf-8"))
    assert payload["exit_code"] == 1
    assert payload["regressions"][0]["line"].startswith("Cache|Hit: mean 100.00ns -> 120.00ns")


def test_markdown_report_tables() -> None:
    text = render_markdown_report(_failed_outcome())
    assert text.startswith("# Benchmark Gate Report")
    assert "Overall status: **FAIL**" in text
    assert "## Regressions" in text
    assert "| Cache\\|Hit | 100.00 | 120.00 | +20.00% | +0 | - |" in text
    assert "## Improvements" in text


def test_markdown_report_without_result() -> None:
    outcome = GateOutcome(status="skipped", exit_code=0, message="Gate SKIPPED.", suite="Cache")
    text = render_markdown_report(outcome)
    assert "Overall status: **SKIPPED**" in text
    assert "## Regressions" not in text
