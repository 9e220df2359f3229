"""Mass-balance table assembly.

Every column is produced by a pure function of the fitted models and the
year series; the DataFrame is built once from those columns and never
edited afterwards.

Columns
-------
year             calendar year
ins              inflow (recharge), 10^9 m^3/yr
outs             outflow (discharge), 10^9 m^3/yr
change           ins - outs
cumulative_loss  integral of net change since the base year, 10^9 m^3
storage_low      low-scenario storage, 10^9 m^3
storage_mean     mean-scenario storage
storage_high     high-scenario storage
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from .config import BalanceConfig, ScenarioBound
from .integrate import Method, cumulative_change
from .scenarios import project_scenarios
from .trends import LinearModel, check_net_consistency, evaluate, fit_two_point

logger = logging.getLogger(__name__)

COLUMNS = [
    "year",
    "ins",
    "outs",
    "change",
    "cumulative_loss",
    "storage_mean",
    "storage_low",
    "storage_high",
]


@dataclass(frozen=True)
class TrendModels:
    inflow: LinearModel
    outflow: LinearModel
    net_change: LinearModel
    net_change_refit: Optional[LinearModel] = None


def fit_models(config: BalanceConfig) -> TrendModels:
    inflow = fit_two_point(*config.inflow_observations())
    outflow = fit_two_point(*config.outflow_observations())
    net = inflow - outflow
    refit = None
    net_obs = config.net_change_observations()
    if net_obs is not None:
        refit = fit_two_point(*net_obs)
        check_net_consistency(net, refit, [config.observation_base_year, config.observation_final_year])
    logger.info(
        "Fitted trends: inflow %.4f/yr, outflow %.4f/yr, net %.4f/yr",
        inflow.slope, outflow.slope, net.slope,
    )
    return TrendModels(inflow=inflow, outflow=outflow, net_change=net, net_change_refit=refit)


def build_mass_balance(
    models: TrendModels,
    years: np.ndarray,
    bounds: tuple[ScenarioBound, ...],
    *,
    method: Method = "quad",
) -> pd.DataFrame:
    ins = evaluate(models.inflow, years)
    outs = evaluate(models.outflow, years)
    cumulative = cumulative_change(models.net_change, years, method=method)
    storage = project_scenarios(cumulative, bounds)
    missing = {"low", "mean", "high"} - set(storage)
    if missing:
        raise ValueError(f"Scenario bounds missing labels: {sorted(missing)}")

    df = pd.DataFrame({
        "year": np.asarray(years, dtype=int),
        "ins": ins,
        "outs": outs,
        "change": ins - outs,
        "cumulative_loss": cumulative,
        "storage_mean": storage["mean"],
        "storage_low": storage["low"],
        "storage_high": storage["high"],
    })
    return df[COLUMNS]


__all__ = [
    "COLUMNS",
    "TrendModels",
    "fit_models",
    "build_mass_balance",
]
