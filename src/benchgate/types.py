"""Typed value objects shared by the gate components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import ConfigError

PLACEHOLDER_ID = "<null>"


@dataclass(frozen=True)
class BenchmarkSample:
    """One benchmark's summary statistics as produced by the harness."""

    id: str
    mean: float
    stddev: float = 0.0
    n: int = 0
    alloc_bytes: float = 0.0
    samples: tuple[float, ...] | None = None

    @classmethod
    def placeholder(cls) -> BenchmarkSample:
        return cls(id=PLACEHOLDER_ID, mean=0.0)

    @property
    def has_raw_samples(self) -> bool:
        return self.samples is not None and len(self.samples) > 0


@dataclass(frozen=True)
class MannWhitneyResult:
    """Result of a Mann-Whitney U test comparing two independent samples.

    ``u1 + u2 == n1 * n2`` always holds. ``z`` is 0 and ``used_normal_approx``
    is False when ties remove all variance from the rank statistic.
    """

    u1: float
    u2: float
    u: float
    z: float
    p_value: float
    n1: int
    n2: int
    used_normal_approx: bool

    @property
    def effect_size(self) -> float:
        """Rank-biserial correlation ``1 - 2U / (n1 * n2)``."""
        return 1.0 - 2.0 * self.u / (self.n1 * self.n2)


@dataclass(frozen=True)
class ThresholdConfig:
    """Practical-significance thresholds applied by the comparator."""

    time_threshold: float = 0.03
    alloc_threshold_bytes: float = 16
    alloc_threshold_pct: float = 0.03
    sigma_mult: float = 2.0
    use_sigma: bool = True

    def validate(self) -> ThresholdConfig:
        for name in ("time_threshold", "alloc_threshold_bytes", "alloc_threshold_pct", "sigma_mult"):
            value = getattr(self, name)
            if value < 0:
                raise ConfigError(f"{name} must be non-negative, got {value!r}")
        return self


@dataclass(frozen=True)
class RankSumDetail:
    """Median-based evidence attached to a verdict decided by the rank-sum test."""

    p_value: float
    median_before: float
    median_after: float
    median_pct: float


@dataclass(frozen=True)
class Verdict:
    """Classification of one matched baseline/current benchmark pair."""

    id: str
    kind: str
    mean_before: float
    mean_after: float
    mean_pct: float
    alloc_before: float
    alloc_after: float
    rank_sum: RankSumDetail | None = None

    @property
    def alloc_delta(self) -> float:
        return self.alloc_after - self.alloc_before

    def render(self) -> str:
        line = (
            f"{self.id}: mean {self.mean_before:.2f}ns -> {self.mean_after:.2f}ns "
            f"({self.mean_pct * 100:.2f}%), alloc {_fmt_bytes(self.alloc_before)}B -> "
            f"{_fmt_bytes(self.alloc_after)}B (Δ {_fmt_bytes(self.alloc_delta)}B)"
        )
        if self.rank_sum is not None:
            detail = self.rank_sum
            line += (
                f" [MWU p={detail.p_value:.4f}, median {detail.median_before:.2f}ns -> "
                f"{detail.median_after:.2f}ns ({detail.median_pct * 100:.2f}%)]"
            )
        return line

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "kind": self.kind,
            "mean_before": self.mean_before,
            "mean_after": self.mean_after,
            "mean_pct": self.mean_pct,
            "alloc_before": self.alloc_before,
            "alloc_after": self.alloc_after,
            "alloc_delta": self.alloc_delta,
            "line": self.render(),
        }
        if self.rank_sum is not None:
            payload["rank_sum"] = {
                "p_value": self.rank_sum.p_value,
                "median_before": self.rank_sum.median_before,
                "median_after": self.rank_sum.median_after,
                "median_pct": self.rank_sum.median_pct,
            }
        return payload


@dataclass(frozen=True)
class ComparisonResult:
    """Ordered regression and improvement verdicts for one gate run."""

    regressions: tuple[Verdict, ...] = ()
    improvements: tuple[Verdict, ...] = ()
    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    @property
    def passed(self) -> bool:
        return not self.regressions

    def to_dict(self) -> dict[str, Any]:
        return {
            "passed": self.passed,
            "thresholds": {
                "time_threshold": self.thresholds.time_threshold,
                "alloc_threshold_bytes": self.thresholds.alloc_threshold_bytes,
                "alloc_threshold_pct": self.thresholds.alloc_threshold_pct,
                "sigma_mult": self.thresholds.sigma_mult,
                "use_sigma": self.thresholds.use_sigma,
            },
            "regressions": [verdict.to_dict() for verdict in self.regressions],
            "improvements": [verdict.to_dict() for verdict in self.improvements],
        }


def _fmt_bytes(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"
