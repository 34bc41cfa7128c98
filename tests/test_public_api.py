"""Freeze tests for public API symbols and core signatures."""

from __future__ import annotations

import inspect

import benchgate


def test_all_exports_resolve() -> None:
    for name in benchgate.__all__:
        assert hasattr(benchgate, name), name


def test_core_signatures_are_frozen() -> None:
    assert list(inspect.signature(benchgate.mann_whitney_u).parameters) == ["x", "y", "alternative"]
    assert list(inspect.signature(benchgate.compare_samples).parameters) == [
        "baseline",
        "current",
        "thresholds",
    ]
    assert list(inspect.signature(benchgate.resolve_baseline).parameters) == [
        "baseline_arg",
        "suite",
        "os_id",
        "arch",
    ]


def test_threshold_defaults() -> None:
    defaults = benchgate.ThresholdConfig()
    assert defaults.time_threshold == 0.03
    assert defaults.alloc_threshold_bytes == 16
    assert defaults.alloc_threshold_pct == 0.03
    assert defaults.sigma_mult == 2.0
    assert defaults.use_sigma is True


def test_sample_errors_carry_error_code() -> None:
    err = benchgate.SampleValidationError("x must be non-empty")
    assert isinstance(err, benchgate.BenchGateError)
    assert str(err).startswith("BG_SAMPLE_INVALID:")
