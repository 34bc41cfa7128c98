"""Partial decoding of harness measurement documents into benchmark samples.

Field-level problems never raise here: a benchmark entry that lacks an
identifier or a usable mean degrades to a placeholder sample, and optional
statistics fall back to zero. Only an unreadable file or a payload that is
not a JSON object is an error.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import DocumentError
from .types import BenchmarkSample

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BenchmarkDocument:
    """A decoded measurement document."""

    title: str | None
    samples: tuple[BenchmarkSample, ...]
    raw: dict[str, Any] = field(default_factory=dict, repr=False)


def _finite_float(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    result = float(value)
    if not math.isfinite(result):
        return None
    return result


def _non_negative_float(value: Any, *, default: float = 0.0) -> float:
    parsed = _finite_float(value)
    if parsed is None or parsed < 0:
        return default
    return parsed


def _iteration_count(value: Any) -> int:
    parsed = _finite_float(value)
    if parsed is None or parsed < 0 or not parsed.is_integer():
        return 0
    return int(parsed)


def _raw_measurements(value: Any) -> tuple[float, ...] | None:
    if not isinstance(value, list) or not value:
        return None
    measurements: list[float] = []
    for item in value:
        parsed = _finite_float(item)
        if parsed is None:
            return None
        measurements.append(parsed)
    return tuple(measurements)


def parse_sample(node: Any) -> BenchmarkSample:
    """Map one ``Benchmarks`` entry onto a ``BenchmarkSample``."""
    if not isinstance(node, Mapping):
        logger.warning("Benchmark entry is not an object; using placeholder")
        return BenchmarkSample.placeholder()

    full_name = node.get("FullName")
    stats = node.get("Statistics")
    if not isinstance(full_name, str) or not isinstance(stats, Mapping):
        logger.warning("Benchmark entry lacks FullName/Statistics; using placeholder")
        return BenchmarkSample.placeholder()

    mean = _finite_float(stats.get("Mean"))
    if mean is None:
        logger.warning("Benchmark %r has no usable Statistics.Mean; using placeholder", full_name)
        return BenchmarkSample.placeholder()

    memory = node.get("Memory")
    alloc_raw: Any = None
    if isinstance(memory, Mapping):
        alloc_raw = memory.get("AllocatedBytes")
        if alloc_raw is None:
            alloc_raw = memory.get("BytesAllocatedPerOperation")

    raw_values = stats.get("OriginalValues")
    samples = _raw_measurements(raw_values)
    if raw_values is not None and samples is None:
        logger.debug("Dropping malformed OriginalValues for %r", full_name)

    return BenchmarkSample(
        id=full_name,
        mean=mean,
        stddev=_non_negative_float(stats.get("StandardDeviation")),
        n=_iteration_count(stats.get("N")),
        alloc_bytes=_non_negative_float(alloc_raw),
        samples=samples,
    )


def parse_document(payload: Any) -> BenchmarkDocument:
    """Decode a loaded JSON payload into a ``BenchmarkDocument``."""
    if not isinstance(payload, dict):
        raise DocumentError(
            f"Measurement document must decode to object, got {type(payload).__name__}"
        )

    title = payload.get("Title")
    benchmarks = payload.get("Benchmarks")
    if benchmarks is None:
        benchmarks = []
    if not isinstance(benchmarks, list):
        logger.warning("Benchmarks field is not a list; treating document as empty")
        benchmarks = []

    return BenchmarkDocument(
        title=title if isinstance(title, str) else None,
        samples=tuple(parse_sample(node) for node in benchmarks),
        raw=payload,
    )


def load_document(path: Path) -> BenchmarkDocument:
    """Read and decode a measurement document from disk."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise DocumentError(f"Failed to read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DocumentError(f"Invalid JSON in {path}: {exc}") from exc
    return parse_document(payload)
