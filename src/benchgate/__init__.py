"""
benchgate - statistical benchmark regression gate.

Simple Usage:
    from benchgate import GateComparer, load_document

    baseline = load_document(Path("baselines/CacheBenchmarks.json"))
    current = load_document(Path("results.json"))
    result = GateComparer().compare(baseline.samples, current.samples)
    if not result.passed:
        for verdict in result.regressions:
            print(verdict)
"""

from .baseline import (
    ResolvedBaseline,
    infer_suite_name,
    platform_arch,
    platform_os_id,
    resolve_baseline,
)
from .comparator import GateComparer, compare_samples
from .config_loader import GateConfig, load_config
from .errors import BenchGateError, ConfigError, DocumentError, SampleValidationError
from .gate import GateOutcome, run_gate
from .loaders import BenchmarkDocument, load_document, parse_document, parse_sample
from .numeric import erfc
from .report import build_report_payload, render_markdown_report, write_report
from .stats import Alternative, mann_whitney_u
from .types import (
    BenchmarkSample,
    ComparisonResult,
    MannWhitneyResult,
    RankSumDetail,
    ThresholdConfig,
    Verdict,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Alternative",
    "BenchGateError",
    "BenchmarkDocument",
    "BenchmarkSample",
    "ComparisonResult",
    "ConfigError",
    "DocumentError",
    "GateComparer",
    "GateConfig",
    "GateOutcome",
    "MannWhitneyResult",
    "RankSumDetail",
    "ResolvedBaseline",
    "SampleValidationError",
    "ThresholdConfig",
    "Verdict",
    "build_report_payload",
    "compare_samples",
    "erfc",
    "infer_suite_name",
    "load_config",
    "load_document",
    "mann_whitney_u",
    "parse_document",
    "parse_sample",
    "platform_arch",
    "platform_os_id",
    "render_markdown_report",
    "resolve_baseline",
    "run_gate",
    "write_report",
]
