"""Gate orchestration: resolve, ingest, compare, decide the exit code."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .baseline import ResolvedBaseline, infer_suite_name, resolve_baseline
from .comparator import GateComparer
from .loaders import load_document
from .types import ComparisonResult, ThresholdConfig

logger = logging.getLogger(__name__)

STATUS_PASSED = "passed"
STATUS_FAILED = "failed"
STATUS_SKIPPED = "skipped"
STATUS_MISSING_CURRENT = "missing-current"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


@dataclass(frozen=True)
class GateOutcome:
    """Everything the presentation layer needs to report one gate run."""

    status: str
    exit_code: int
    message: str
    suite: str | None = None
    baseline: ResolvedBaseline | None = None
    result: ComparisonResult | None = None

    @property
    def compared(self) -> bool:
        return self.result is not None


def run_gate(
    baseline_arg: str | Path,
    current_path: str | Path,
    *,
    suite: str | None = None,
    thresholds: ThresholdConfig | None = None,
    os_id: str | None = None,
    arch: str | None = None,
) -> GateOutcome:
    """Compare the current run against its baseline and decide pass/fail.

    A missing current file fails the gate, while a missing baseline skips it
    (exit 0) so a first run can capture one. Unreadable documents raise
    ``DocumentError``.
    """
    current_file = Path(current_path)
    if not current_file.is_file():
        return GateOutcome(
            status=STATUS_MISSING_CURRENT,
            exit_code=EXIT_FAILURE,
            message=f"Current results not found: {current_file}",
        )

    current = load_document(current_file)
    suite_name = suite or infer_suite_name(current.raw)
    logger.debug("Gating suite %r with %d current samples", suite_name, len(current.samples))

    resolved = resolve_baseline(baseline_arg, suite_name, os_id=os_id, arch=arch)
    if not resolved.found:
        return GateOutcome(
            status=STATUS_SKIPPED,
            exit_code=EXIT_OK,
            message=(
                f"No baseline found for suite '{suite_name}'. Gate SKIPPED. "
                f"(Expected at: {resolved.path})"
            ),
            suite=suite_name,
            baseline=resolved,
        )

    baseline = load_document(resolved.path)
    result = GateComparer(thresholds).compare(baseline.samples, current.samples)

    if result.passed:
        return GateOutcome(
            status=STATUS_PASSED,
            exit_code=EXIT_OK,
            message="Benchmark gate passed (no regressions).",
            suite=suite_name,
            baseline=resolved,
            result=result,
        )
    return GateOutcome(
        status=STATUS_FAILED,
        exit_code=EXIT_FAILURE,
        message="Detected performance regressions vs baseline:",
        suite=suite_name,
        baseline=resolved,
        result=result,
    )
