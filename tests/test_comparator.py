"""Tests for regression/improvement classification."""

from __future__ import annotations

import math

import pytest

from benchgate.comparator import IMPROVEMENT, REGRESSION, GateComparer, compare_samples
from benchgate.errors import ConfigError
from benchgate.types import BenchmarkSample, ThresholdConfig


def _sample(
    name: str,
    mean: float,
    *,
    stddev: float = 0.0,
    n: int = 0,
    alloc: float = 0.0,
    raw: tuple[float, ...] | None = None,
) -> BenchmarkSample:
    return BenchmarkSample(id=name, mean=mean, stddev=stddev, n=n, alloc_bytes=alloc, samples=raw)


NO_SIGMA = ThresholdConfig(use_sigma=False)


class TestMeanPath:
    def test_clear_slowdown_is_a_regression(self) -> None:
        result = compare_samples(
            [_sample("A", 100.0, stddev=5.0, n=20, alloc=64)],
            [_sample("A", 110.0, stddev=5.0, n=20, alloc=64)],
        )
        assert not result.passed
        assert len(result.regressions) == 1
        verdict = result.regressions[0]
        assert verdict.kind == REGRESSION
        assert verdict.mean_pct == pytest.approx(0.10)
        assert verdict.rank_sum is None
        assert str(verdict) == "A: mean 100.00ns -> 110.00ns (10.00%), alloc 64B -> 64B (Δ 0B)"

    def test_unmatched_ids_are_ignored(self) -> None:
        result = compare_samples(
            [_sample("OnlyBaseline", 100.0), _sample("Shared", 100.0)],
            [_sample("OnlyCurrent", 500.0), _sample("Shared", 100.0)],
        )
        assert result.passed
        assert result.regressions == ()
        assert result.improvements == ()

    def test_change_within_threshold_is_neutral(self) -> None:
        result = compare_samples([_sample("A", 1000.0)], [_sample("A", 1025.0)], NO_SIGMA)
        assert result.passed
        assert result.improvements == ()

    def test_tiny_absolute_change_is_neutral(self) -> None:
        # 50% slower but only 3ns.
        result = compare_samples([_sample("A", 6.0)], [_sample("A", 9.0)], NO_SIGMA)
        assert result.regressions == ()

    def test_improvement_is_reported(self) -> None:
        result = compare_samples([_sample("A", 100.0)], [_sample("A", 80.0)])
        assert result.passed
        assert [verdict.id for verdict in result.improvements] == ["A"]
        assert result.improvements[0].kind == IMPROVEMENT

    def test_noisy_change_is_filtered_by_sigma(self) -> None:
        baseline = [_sample("A", 100.0, stddev=200.0, n=10)]
        current = [_sample("A", 110.0, stddev=200.0, n=10)]
        assert compare_samples(baseline, current).passed
        assert not compare_samples(baseline, current, NO_SIGMA).passed

    def test_sigma_multiplier_is_configurable(self) -> None:
        baseline = [_sample("A", 100.0, stddev=5.0, n=20)]
        current = [_sample("A", 110.0, stddev=5.0, n=20)]
        assert compare_samples(baseline, current, ThresholdConfig(sigma_mult=10.0)).passed

    def test_zero_spread_does_not_hide_a_regression(self) -> None:
        result = compare_samples([_sample("A", 100.0)], [_sample("A", 110.0)])
        assert not result.passed

    def test_mixed_suite(self) -> None:
        baseline = [
            _sample("ConcurrentAccess", 1000.0, stddev=10.0, n=20, alloc=128),
            _sample("StableOperation", 500.0, stddev=5.0, n=20, alloc=32),
        ]
        current = [
            _sample("ConcurrentAccess", 1200.0, stddev=10.0, n=20, alloc=128),
            _sample("StableOperation", 505.0, stddev=5.0, n=20, alloc=32),
        ]
        result = compare_samples(baseline, current)
        assert [verdict.id for verdict in result.regressions] == ["ConcurrentAccess"]
        assert result.improvements == ()

    def test_slowdown_from_zero_baseline_mean_is_a_regression(self) -> None:
        result = compare_samples(
            [_sample("A", 0.0, n=20)],
            [_sample("A", 50.0, n=20)],
        )
        assert [verdict.id for verdict in result.regressions] == ["A"]
        assert result.regressions[0].mean_pct == math.inf
        assert "(inf%)" in result.regressions[0].render()

    def test_unchanged_zero_baseline_mean_is_neutral(self) -> None:
        result = compare_samples([_sample("A", 0.0)], [_sample("A", 0.0)])
        assert result.regressions == ()
        assert result.improvements == ()


class TestAllocation:
    def test_small_absolute_growth_is_neutral(self) -> None:
        result = compare_samples([_sample("A", 100.0, alloc=100)], [_sample("A", 100.0, alloc=105)])
        assert result.regressions == ()

    def test_small_relative_growth_is_neutral(self) -> None:
        result = compare_samples([_sample("A", 100.0, alloc=1000)], [_sample("A", 100.0, alloc=1020)])
        assert result.regressions == ()

    def test_growth_past_both_guards_is_a_regression(self) -> None:
        result = compare_samples([_sample("A", 100.0, alloc=100)], [_sample("A", 100.0, alloc=150)])
        assert [verdict.id for verdict in result.regressions] == ["A"]
        assert result.regressions[0].alloc_delta == 50

    def test_allocation_decrease_is_an_improvement(self) -> None:
        result = compare_samples([_sample("A", 100.0, alloc=64)], [_sample("A", 100.0, alloc=32)])
        assert [verdict.id for verdict in result.improvements] == ["A"]

    def test_allocation_regression_wins_over_time_improvement(self) -> None:
        result = compare_samples([_sample("A", 100.0, alloc=100)], [_sample("A", 50.0, alloc=400)])
        assert [verdict.id for verdict in result.regressions] == ["A"]
        assert result.improvements == ()


class TestRankSumPath:
    BEFORE = tuple(float(value) for value in range(100, 108))
    AFTER = tuple(float(value) for value in range(120, 128))

    def test_shifted_distribution_is_a_regression(self) -> None:
        result = compare_samples(
            [_sample("A", 103.5, raw=self.BEFORE)],
            [_sample("A", 123.5, raw=self.AFTER)],
        )
        assert len(result.regressions) == 1
        verdict = result.regressions[0]
        detail = verdict.rank_sum
        assert detail is not None
        assert detail.p_value < 0.01
        assert detail.median_before == pytest.approx(103.5)
        assert detail.median_after == pytest.approx(123.5)
        assert "MWU p=" in verdict.render()

    def test_rank_sum_overrides_diverging_means(self) -> None:
        result = compare_samples(
            [_sample("A", 100.0, raw=self.BEFORE)],
            [_sample("A", 200.0, raw=self.BEFORE)],
        )
        assert result.regressions == ()
        assert result.improvements == ()

    def test_too_few_raw_samples_fall_back_to_means(self) -> None:
        result = compare_samples(
            [_sample("A", 100.0, raw=(100.0, 101.0, 102.0))],
            [_sample("A", 110.0, raw=self.AFTER)],
        )
        assert len(result.regressions) == 1
        assert result.regressions[0].rank_sum is None

    def test_shift_back_is_an_improvement(self) -> None:
        result = compare_samples(
            [_sample("A", 123.5, raw=self.AFTER)],
            [_sample("A", 103.5, raw=self.BEFORE)],
        )
        assert result.passed
        assert len(result.improvements) == 1
        assert result.improvements[0].rank_sum is not None

    def test_slowdown_from_zero_baseline_median_is_a_regression(self) -> None:
        before = (0.0,) * 6
        after = tuple(float(value) for value in range(50, 56))
        result = compare_samples([_sample("A", 0.0, raw=before)], [_sample("A", 52.5, raw=after)])
        assert len(result.regressions) == 1
        detail = result.regressions[0].rank_sum
        assert detail is not None
        assert detail.p_value < 0.05
        assert detail.median_after - detail.median_before == pytest.approx(52.5)
        assert detail.median_pct == math.inf

    def test_empty_raw_samples_fall_back_to_means(self) -> None:
        result = compare_samples(
            [_sample("A", 100.0, raw=())],
            [_sample("A", 110.0, raw=self.AFTER)],
        )
        assert len(result.regressions) == 1
        assert result.regressions[0].rank_sum is None

    def test_small_median_shift_is_neutral(self) -> None:
        before = (100.0, 100.5, 101.0, 101.5, 102.0, 102.5)
        after = tuple(value + 4.0 for value in before)
        result = compare_samples([_sample("A", 101.25, raw=before)], [_sample("A", 105.25, raw=after)])
        assert result.regressions == ()


class TestComparerContract:
    def test_current_order_is_preserved(self) -> None:
        names = ["C", "A", "B"]
        baseline = [_sample(name, 100.0) for name in sorted(names)]
        current = [_sample(name, 150.0) for name in names]
        result = compare_samples(baseline, current)
        assert [verdict.id for verdict in result.regressions] == names

    def test_comparison_is_idempotent(self) -> None:
        baseline = [_sample("A", 100.0), _sample("B", 100.0, alloc=10)]
        current = [_sample("A", 130.0), _sample("B", 90.0, alloc=10)]
        comparer = GateComparer()
        assert comparer.compare(baseline, current) == comparer.compare(baseline, current)

    def test_first_duplicate_baseline_wins(self) -> None:
        baseline = [_sample("A", 100.0), _sample("A", 200.0)]
        result = compare_samples(baseline, [_sample("A", 110.0)])
        assert [verdict.mean_before for verdict in result.regressions] == [100.0]

    def test_placeholders_compare_as_equal(self) -> None:
        placeholder = BenchmarkSample.placeholder()
        result = compare_samples([placeholder], [placeholder])
        assert result.regressions == ()
        assert result.improvements == ()

    def test_negative_thresholds_are_rejected(self) -> None:
        with pytest.raises(ConfigError, match="time_threshold"):
            GateComparer(ThresholdConfig(time_threshold=-0.1))

    def test_result_serialises(self) -> None:
        result = compare_samples([_sample("A", 100.0)], [_sample("A", 120.0)])
        payload = result.to_dict()
        assert payload["passed"] is False
        assert payload["regressions"][0]["id"] == "A"
        assert payload["thresholds"]["time_threshold"] == 0.03
