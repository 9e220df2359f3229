"""Groundwater Balance Model (gwbm) package.

Linear trend projection of groundwater storage under initial-storage scenarios.

Modules:
  years: year series construction & validation
  trends: two-point / OLS linear models for inflow, outflow, net change
  integrate: cumulative net change (scipy quadrature or closed form)
  scenarios: storage trajectories & depletion years
  balance: immutable mass-balance table
  ensemble: sampled initial-storage ensemble & depletion probability
  analysis: summary facts for reporting
  plots: interactive Plotly figures
  pipeline: end-to-end run
  report: CSV / JSON / Markdown / HTML outputs
"""

from . import years, trends, integrate, scenarios, balance, ensemble, analysis, plots, pipeline  # noqa: F401
from .config import BalanceConfig, ConfigError, InitialStorage, ScenarioBound, load_config
from .pipeline import ProjectionResult, run_pipeline
from .years import InvalidRangeError

__all__ = [
	"years",
	"trends",
	"integrate",
	"scenarios",
	"balance",
	"ensemble",
	"analysis",
	"plots",
	"pipeline",
	"BalanceConfig",
	"ConfigError",
	"InitialStorage",
	"ScenarioBound",
	"InvalidRangeError",
	"ProjectionResult",
	"load_config",
	"run_pipeline",
]
