"""Regression/improvement classification of matched benchmark pairs."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

import numpy as np

from .stats import Alternative, mann_whitney_u
from .types import (
    BenchmarkSample,
    ComparisonResult,
    RankSumDetail,
    ThresholdConfig,
    Verdict,
)

logger = logging.getLogger(__name__)

MIN_RAW_SAMPLES = 4
RANK_SUM_ALPHA = 0.05
MIN_TIME_DELTA = 5.0

REGRESSION = "regression"
IMPROVEMENT = "improvement"


def _relative(delta: float, base: float) -> float:
    if base <= 0:
        return 0.0
    return delta / base


def _time_relative(delta: float, base: float) -> float:
    # Any slowdown from a zero-time baseline is unbounded.
    if base <= 0:
        return math.inf if delta > 0 else 0.0
    return delta / base


def _standard_error(sample: BenchmarkSample) -> float:
    if sample.n > 0:
        return sample.stddev / math.sqrt(sample.n)
    return sample.stddev


def _median(values: Sequence[float]) -> float:
    return float(np.median(np.asarray(values, dtype=np.float64)))


def _raw_for_test(sample: BenchmarkSample) -> tuple[float, ...] | None:
    if not sample.has_raw_samples:
        return None
    raw = sample.samples or ()
    return raw if len(raw) >= MIN_RAW_SAMPLES else None


class GateComparer:
    """Decide which benchmarks regressed or improved against a baseline.

    Pairs with at least four raw measurements on both sides are judged by a
    two-sided Mann-Whitney U test on the medians; all others use a
    mean/standard-error heuristic. Allocation growth is checked on its own
    and is never gated by significance.
    """

    def __init__(self, thresholds: ThresholdConfig | None = None) -> None:
        self.thresholds = (thresholds or ThresholdConfig()).validate()

    def compare(
        self,
        baseline: Iterable[BenchmarkSample],
        current: Iterable[BenchmarkSample],
    ) -> ComparisonResult:
        base_map: dict[str, BenchmarkSample] = {}
        for sample in baseline:
            if sample.id in base_map:
                logger.warning("Duplicate baseline benchmark %r ignored", sample.id)
                continue
            base_map[sample.id] = sample

        regressions: list[Verdict] = []
        improvements: list[Verdict] = []
        for cur in current:
            base = base_map.get(cur.id)
            if base is None:
                logger.debug("Benchmark %r has no baseline; skipping", cur.id)
                continue
            verdict = self.evaluate_pair(base, cur)
            if verdict is None:
                continue
            if verdict.kind == REGRESSION:
                regressions.append(verdict)
            else:
                improvements.append(verdict)

        return ComparisonResult(
            regressions=tuple(regressions),
            improvements=tuple(improvements),
            thresholds=self.thresholds,
        )

    def evaluate_pair(self, baseline: BenchmarkSample, current: BenchmarkSample) -> Verdict | None:
        """Classify one pair; ``None`` means neutral."""
        cfg = self.thresholds
        mean_delta = current.mean - baseline.mean
        mean_pct = _time_relative(mean_delta, baseline.mean)
        alloc_delta = current.alloc_bytes - baseline.alloc_bytes
        alloc_pct = _relative(alloc_delta, baseline.alloc_bytes)

        detail: RankSumDetail | None = None
        base_raw = _raw_for_test(baseline)
        cur_raw = _raw_for_test(current)
        if base_raw is not None and cur_raw is not None:
            test = mann_whitney_u(base_raw, cur_raw, Alternative.TWO_SIDED)
            median_before = _median(base_raw)
            median_after = _median(cur_raw)
            median_delta = median_after - median_before
            median_pct = _time_relative(median_delta, median_before)
            detail = RankSumDetail(
                p_value=test.p_value,
                median_before=median_before,
                median_after=median_after,
                median_pct=median_pct,
            )
            significant = test.p_value < RANK_SUM_ALPHA
            regression = (
                significant and median_pct > cfg.time_threshold and median_delta > MIN_TIME_DELTA
            )
            improvement = significant and median_delta < 0
            logger.debug(
                "%s: rank-sum p=%.4f median %.2f -> %.2f",
                current.id,
                test.p_value,
                median_before,
                median_after,
            )
        else:
            significant = self._is_significant(baseline, current, mean_delta)
            regression = (
                significant and mean_pct > cfg.time_threshold and mean_delta > MIN_TIME_DELTA
            )
            improvement = mean_delta < 0

        alloc_regression = (
            alloc_delta > cfg.alloc_threshold_bytes and alloc_pct > cfg.alloc_threshold_pct
        )
        alloc_improvement = alloc_delta < 0

        if regression or alloc_regression:
            kind = REGRESSION
        elif improvement or alloc_improvement:
            kind = IMPROVEMENT
        else:
            return None

        return Verdict(
            id=current.id,
            kind=kind,
            mean_before=baseline.mean,
            mean_after=current.mean,
            mean_pct=mean_pct,
            alloc_before=baseline.alloc_bytes,
            alloc_after=current.alloc_bytes,
            rank_sum=detail,
        )

    def _is_significant(
        self, baseline: BenchmarkSample, current: BenchmarkSample, mean_delta: float
    ) -> bool:
        if not self.thresholds.use_sigma:
            return True
        se_base = _standard_error(baseline)
        se_cur = _standard_error(current)
        combined = math.sqrt(se_base * se_base + se_cur * se_cur)
        # An unmeasurable spread must not hide a real slowdown.
        if combined <= 0:
            return True
        return abs(mean_delta) > self.thresholds.sigma_mult * combined


def compare_samples(
    baseline: Iterable[BenchmarkSample],
    current: Iterable[BenchmarkSample],
    thresholds: ThresholdConfig | None = None,
) -> ComparisonResult:
    """Functional shorthand for ``GateComparer(thresholds).compare(...)``."""
    return GateComparer(thresholds).compare(baseline, current)
