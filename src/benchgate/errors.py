"""Custom exceptions for the benchmark gate."""

from __future__ import annotations


class BenchGateError(RuntimeError):
    """Raised when gate input or evaluation cannot be completed."""


class SampleValidationError(BenchGateError):
    """Raised when samples handed to the rank-sum test are unusable."""

    error_code = "BG_SAMPLE_INVALID"

    def __init__(self, message: str) -> None:
        super().__init__(f"{self.error_code}: {message}")


class DocumentError(BenchGateError):
    """Raised when a measurement document cannot be read or decoded."""


class ConfigError(BenchGateError):
    """Raised when a ``benchgate.toml`` file is malformed."""
