"""Run configuration for the groundwater storage projection.

The defaults reproduce the published constants (units 10^9 m^3 and
10^9 m^3/yr). Any field can be overridden from a JSON file::

    {
      "base_year_inflow": 12.8,
      "final_year_inflow": 10.3,
      "base_year_outflow": 18.2,
      "final_year_outflow": 27.0,
      "scenario_initial_storage": {"low": 190, "mean": 350, "high": 550}
    }

Unrecognized keys are rejected so a typo never silently falls back to a default.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from scipy.stats import norm

from .paths import default_config_path
from .trends import Observation

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Configuration file or mapping is malformed."""


@dataclass(frozen=True)
class ScenarioBound:
    label: str
    initial_storage: float
    description: str = ""


@dataclass(frozen=True)
class InitialStorage:
    low: float = 190.0
    mean: float = 350.0
    high: float = 550.0

    def __post_init__(self):
        if not (self.low <= self.mean <= self.high):
            raise ConfigError(
                f"Initial storage must satisfy low <= mean <= high, got {self.low}, {self.mean}, {self.high}"
            )


@dataclass(frozen=True)
class BalanceConfig:
    base_year_inflow: float = 12.8
    final_year_inflow: float = 10.3
    base_year_outflow: float = 18.2
    final_year_outflow: float = 27.0
    base_year_net_change: Optional[float] = -5.4
    final_year_net_change: Optional[float] = -16.7
    scenario_initial_storage: InitialStorage = field(default_factory=InitialStorage)
    storage_sigma: float = 115.0
    observation_base_year: int = 2000
    observation_final_year: int = 2050
    base_year: int = 2000
    final_year: int = 2050
    step: int = 1

    def inflow_observations(self) -> tuple[Observation, Observation]:
        return (
            Observation(self.observation_base_year, float(self.base_year_inflow)),
            Observation(self.observation_final_year, float(self.final_year_inflow)),
        )

    def outflow_observations(self) -> tuple[Observation, Observation]:
        return (
            Observation(self.observation_base_year, float(self.base_year_outflow)),
            Observation(self.observation_final_year, float(self.final_year_outflow)),
        )

    def net_change_observations(self) -> Optional[tuple[Observation, Observation]]:
        """Raw net-change estimates, when supplied; used only to cross-check."""
        if self.base_year_net_change is None or self.final_year_net_change is None:
            return None
        return (
            Observation(self.observation_base_year, float(self.base_year_net_change)),
            Observation(self.observation_final_year, float(self.final_year_net_change)),
        )

    def scenario_bounds(self) -> tuple[ScenarioBound, ScenarioBound, ScenarioBound]:
        s = self.scenario_initial_storage
        return (
            ScenarioBound("low", float(s.low), "5th percentile"),
            ScenarioBound("mean", float(s.mean), "mean"),
            ScenarioBound("high", float(s.high), "95th percentile"),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


_FIELD_NAMES = {f.name for f in fields(BalanceConfig)}
_STORAGE_KEYS = {f.name for f in fields(InitialStorage)}
_INT_FIELDS = {"observation_base_year", "observation_final_year", "base_year", "final_year", "step"}


def _whole_number(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"Invalid value for {key}: {value!r} (expected a whole number)")
    number = float(value)
    if not number.is_integer():
        raise ConfigError(f"Invalid value for {key}: {value!r} (expected a whole number)")
    return int(number)


def from_mapping(data: Mapping[str, Any], base: Optional[BalanceConfig] = None) -> BalanceConfig:
    """Build a config from ``data``, starting from ``base`` (or the defaults)."""
    if not isinstance(data, Mapping):
        raise ConfigError(f"Configuration must be a JSON object, got {type(data).__name__}")
    unknown = sorted(set(data) - _FIELD_NAMES)
    if unknown:
        raise ConfigError(f"Unrecognized configuration fields: {unknown}")

    cfg = base or BalanceConfig()
    updates: dict[str, Any] = {}
    for key, value in data.items():
        if key == "scenario_initial_storage":
            if not isinstance(value, Mapping):
                raise ConfigError("scenario_initial_storage must be an object with low/mean/high")
            bad = sorted(set(value) - _STORAGE_KEYS)
            if bad:
                raise ConfigError(f"Unrecognized scenario_initial_storage fields: {bad}")
            merged = {**asdict(cfg.scenario_initial_storage), **value}
            try:
                updates[key] = InitialStorage(**{k: float(v) for k, v in merged.items()})
            except ConfigError:
                raise
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"Invalid scenario_initial_storage: {exc}") from exc
        elif value is None and key in ("base_year_net_change", "final_year_net_change"):
            updates[key] = None
        else:
            try:
                updates[key] = _whole_number(key, value) if key in _INT_FIELDS else float(value)
            except ConfigError:
                raise
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"Invalid value for {key}: {value!r}") from exc
    return replace(cfg, **updates)


def load_config(path: Optional[str | Path] = None) -> BalanceConfig:
    """Load configuration from JSON.

    Resolution order: explicit ``path``, then the ``GWBM_CONFIG`` environment
    variable, then built-in defaults.
    """
    p = Path(path) if path is not None else default_config_path()
    if p is None:
        logger.debug("No configuration file given; using built-in constants")
        return BalanceConfig()
    try:
        with open(p, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError as exc:
        raise ConfigError(f"Configuration file not found: {p}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Configuration file {p} is not valid JSON: {exc}") from exc
    logger.info("Loaded configuration from %s", p)
    return from_mapping(data)


def scenarios_from_normal(mean: float, sigma: float, ci: float = 0.90) -> InitialStorage:
    """Symmetric low/high bounds for a central ``ci`` interval of N(mean, sigma)."""
    if not 0.0 < ci < 1.0:
        raise ConfigError(f"Confidence level must lie in (0, 1), got {ci}")
    if sigma < 0:
        raise ConfigError(f"Standard deviation must be non-negative, got {sigma}")
    z = float(norm.ppf(0.5 + ci / 2.0))
    return InitialStorage(low=mean - z * sigma, mean=mean, high=mean + z * sigma)


__all__ = [
    "ConfigError",
    "ScenarioBound",
    "InitialStorage",
    "BalanceConfig",
    "from_mapping",
    "load_config",
    "scenarios_from_normal",
]
