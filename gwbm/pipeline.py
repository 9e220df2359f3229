"""End-to-end projection run.

Stages (strictly sequential):
  1. fit inflow / outflow lines, derive net change      (gwbm.balance.fit_models)
  2. evaluate the lines over the year series            (gwbm.trends.evaluate)
  3. integrate net change from the base year            (gwbm.integrate)
  4. project low / mean / high storage trajectories     (gwbm.scenarios)
  5. extract summary facts                              (gwbm.analysis)

The run is deterministic: the same configuration gives identical tables.
An optional initial-storage ensemble is seeded explicitly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from .analysis import Summary, summarize
from .balance import TrendModels, build_mass_balance, fit_models
from .config import BalanceConfig
from .ensemble import EnsembleResult, run_storage_ensemble
from .integrate import Method
from .years import year_series

logger = logging.getLogger(__name__)


@dataclass
class ProjectionResult:
    config: BalanceConfig
    years: np.ndarray
    models: TrendModels
    table: pd.DataFrame
    summary: Summary
    ensemble: Optional[EnsembleResult] = None


def run_pipeline(
    config: Optional[BalanceConfig] = None,
    *,
    method: Method = "quad",
    ensemble_members: int = 0,
    random_state: Optional[int] = 42,
) -> ProjectionResult:
    cfg = config or BalanceConfig()
    years = year_series(cfg.base_year, cfg.final_year, cfg.step)
    logger.info("Projecting storage for %d-%d (%d years)", years[0], years[-1], len(years))

    models = fit_models(cfg)
    table = build_mass_balance(models, years, cfg.scenario_bounds(), method=method)
    summary = summarize(table, models.net_change)

    ensemble = None
    if ensemble_members > 0:
        ensemble = run_storage_ensemble(
            years=years,
            cumulative=table["cumulative_loss"].to_numpy(),
            mean=cfg.scenario_initial_storage.mean,
            sigma=cfg.storage_sigma,
            n_members=ensemble_members,
            random_state=random_state,
        )
        logger.info("Ran initial-storage ensemble with %d members", ensemble_members)

    return ProjectionResult(
        config=cfg,
        years=years,
        models=models,
        table=table,
        summary=summary,
        ensemble=ensemble,
    )


__all__ = [
    "ProjectionResult",
    "run_pipeline",
]
