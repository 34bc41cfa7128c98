"""Baseline file resolution with an OS/architecture fallback chain."""

from __future__ import annotations

import logging
import platform
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

FALLBACK_SUITE_NAME = "UnknownSuite"

# CI runner labels used in baseline file names.
OS_WINDOWS = "windows-latest"
OS_MACOS = "macos-latest"
OS_LINUX = "ubuntu-latest"
OS_LINUX_ARM = "ubuntu-24.04-arm"
OS_UNKNOWN = "unknown-os"

_ARCH_ALIASES: dict[str, str] = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "i386": "x86",
    "i686": "x86",
    "x86": "x86",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "armv6l": "arm",
    "arm": "arm",
}


@dataclass(frozen=True)
class ResolvedBaseline:
    """Outcome of baseline resolution.

    ``path`` is always set so callers can show where a baseline was expected;
    ``found`` tells whether it points at an existing file.
    """

    path: Path
    found: bool
    candidates: tuple[Path, ...] = ()


def platform_arch(machine: str | None = None) -> str:
    """Lower-cased processor architecture name (``x64``, ``arm64``, ...)."""
    raw = (platform.machine() if machine is None else machine).strip().lower()
    return _ARCH_ALIASES.get(raw, raw or "unknown")


def platform_os_id(system: str | None = None, machine: str | None = None) -> str:
    """Map the running platform onto the CI runner label vocabulary."""
    name = (platform.system() if system is None else system).strip().lower()
    if name == "windows":
        return OS_WINDOWS
    if name == "darwin":
        return OS_MACOS
    if name == "linux":
        if platform_arch(machine) in {"arm64", "arm"}:
            return OS_LINUX_ARM
        return OS_LINUX
    return OS_UNKNOWN


def baseline_candidates(
    directory: Path, suite: str, *, os_id: str, arch: str
) -> tuple[Path, ...]:
    return (
        directory / f"{suite}.{os_id}.{arch}.json",
        directory / f"{suite}.{os_id}.json",
        directory / f"{suite}.json",
    )


def resolve_baseline(
    baseline_arg: str | Path,
    suite: str,
    *,
    os_id: str | None = None,
    arch: str | None = None,
) -> ResolvedBaseline:
    """Locate the baseline document for ``suite``.

    An existing file is used as-is. For a directory the candidates
    ``{suite}.{os}.{arch}.json``, ``{suite}.{os}.json`` and ``{suite}.json``
    are tried in that order; when none exists the last one is reported as
    the expected location. A path that is neither is returned unchanged.
    """
    path = Path(baseline_arg)
    if path.is_file():
        return ResolvedBaseline(path=path, found=True, candidates=(path,))
    if not path.is_dir():
        return ResolvedBaseline(path=path, found=False, candidates=(path,))

    candidates = baseline_candidates(
        path,
        suite,
        os_id=os_id if os_id is not None else platform_os_id(),
        arch=arch if arch is not None else platform_arch(),
    )
    for candidate in candidates:
        if candidate.is_file():
            logger.info("Resolved baseline: %s", candidate)
            return ResolvedBaseline(path=candidate, found=True, candidates=candidates)

    logger.debug("No baseline candidate exists under %s for suite %r", path, suite)
    return ResolvedBaseline(path=candidates[-1], found=False, candidates=candidates)


def _suite_from_title(title: Any) -> str | None:
    if not isinstance(title, str) or not title.strip():
        return None
    dot = title.find(".")
    if dot < 0 or dot + 1 >= len(title):
        return None
    after = title[dot + 1 :]
    dash = after.find("-")
    if dash <= 0:
        return None
    return after[:dash]


def _suite_from_first_benchmark(benchmarks: Any) -> str | None:
    if not isinstance(benchmarks, list) or not benchmarks:
        return None
    first = benchmarks[0]
    if not isinstance(first, Mapping):
        return None
    full_name = first.get("FullName")
    if not isinstance(full_name, str) or not full_name.strip():
        return None
    parts = full_name.split(".")
    if len(parts) >= 2 and parts[1]:
        return parts[1]
    return None


def infer_suite_name(payload: Mapping[str, Any], default: str = FALLBACK_SUITE_NAME) -> str:
    """Guess the suite name from a measurement document.

    Tries the part of ``Title`` between the first ``.`` and the next ``-``,
    then the second dotted segment of the first benchmark's ``FullName``.
    """
    suite = _suite_from_title(payload.get("Title"))
    if suite is None:
        suite = _suite_from_first_benchmark(payload.get("Benchmarks"))
    return suite if suite is not None else default
