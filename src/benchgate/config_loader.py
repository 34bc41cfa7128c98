"""``benchgate.toml`` configuration loader.

Parses the optional project configuration into structured types consumed by
``benchgate gate``. Command-line flags take precedence over file values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore[no-redefine]

from .errors import ConfigError
from .types import ThresholdConfig

DEFAULT_CONFIG_NAME = "benchgate.toml"


@dataclass(frozen=True)
class GateConfig:
    """Top-level parsed representation of ``benchgate.toml``."""

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)
    suite: str | None = None
    source: Path | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    value = raw.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"[{name}] must be a table")
    return value


def _number(section: dict[str, Any], key: str, default: float) -> float:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ConfigError(f"thresholds.{key} must be a number, got {value!r}")
    return float(value)


def _optional_str(section: dict[str, Any], key: str) -> str | None:
    value = section.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"gate.{key} must be a string, got {value!r}")
    return value.strip() or None


def load_config(path: str | Path = DEFAULT_CONFIG_NAME) -> GateConfig:
    """Load and parse a ``benchgate.toml`` file.

    Parameters
    ----------
    path:
        Path to the TOML configuration file.

    Returns
    -------
    GateConfig
        Structured configuration object.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist.
    ConfigError
        If the file is not valid TOML or holds malformed values.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open("rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {config_path}: {exc}") from exc

    defaults = ThresholdConfig()
    thresholds_raw = _section(raw, "thresholds")
    use_sigma = thresholds_raw.get("use_sigma", defaults.use_sigma)
    if not isinstance(use_sigma, bool):
        raise ConfigError(f"thresholds.use_sigma must be a boolean, got {use_sigma!r}")
    thresholds = ThresholdConfig(
        time_threshold=_number(thresholds_raw, "time", defaults.time_threshold),
        alloc_threshold_bytes=_number(thresholds_raw, "alloc_bytes", defaults.alloc_threshold_bytes),
        alloc_threshold_pct=_number(thresholds_raw, "alloc_pct", defaults.alloc_threshold_pct),
        sigma_mult=_number(thresholds_raw, "sigma_mult", defaults.sigma_mult),
        use_sigma=use_sigma,
    ).validate()

    gate_raw = _section(raw, "gate")
    return GateConfig(
        thresholds=thresholds,
        suite=_optional_str(gate_raw, "suite"),
        source=config_path,
        raw=raw,
    )


def discover_config(explicit: Path | None = None, *, cwd: Path | None = None) -> GateConfig:
    """Return the explicit config, ``./benchgate.toml`` if present, or defaults."""
    if explicit is not None:
        return load_config(explicit)
    candidate = (cwd or Path.cwd()) / DEFAULT_CONFIG_NAME
    if candidate.is_file():
        return load_config(candidate)
    return GateConfig()
