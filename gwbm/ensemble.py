from __future__ import annotations

import numpy as np
import pandas as pd
from dataclasses import dataclass
from scipy.stats import norm

from .scenarios import project_storage


QUANTILE_PREFIX = "storage_q"


@dataclass
class EnsembleResult:
    initial_storages: np.ndarray
    quantiles: pd.DataFrame
    depletion: pd.DataFrame


def quantile_column(level: float) -> str:
    return f"{QUANTILE_PREFIX}{int(round(level * 100))}"


def band_columns(quantiles: pd.DataFrame) -> tuple[str, str]:
    """Return the (lowest, highest) quantile columns of an ensemble quantile frame."""
    cols = sorted(
        (c for c in quantiles.columns if str(c).startswith(QUANTILE_PREFIX)),
        key=lambda c: int(str(c)[len(QUANTILE_PREFIX):]),
    )
    if len(cols) < 2:
        raise ValueError(f"Need at least two quantile columns for a band, got {cols}")
    return cols[0], cols[-1]


def sample_initial_storage(
    mean: float,
    sigma: float,
    n_members: int = 1000,
    random_state: int | None = None,
) -> np.ndarray:
    """Draw initial storages from N(mean, sigma)."""
    if n_members <= 0:
        raise ValueError(f"Ensemble needs at least one member, got {n_members}")
    rng = np.random.default_rng(random_state)
    return rng.normal(loc=mean, scale=sigma, size=n_members)


def run_storage_ensemble(
    *,
    years: np.ndarray,
    cumulative: np.ndarray,
    mean: float,
    sigma: float,
    n_members: int = 1000,
    random_state: int | None = None,
    quantile_levels: tuple[float, float, float] = (0.05, 0.5, 0.95),
) -> EnsembleResult:
    """Project storage for sampled initial conditions.

    All members share the same cumulative change, so spread comes only from
    the initial storage. Returns per-year quantiles and the depleted fraction
    next to the analytical probability P(initial <= -cumulative).
    """
    inits = sample_initial_storage(mean, sigma, n_members, random_state)
    members = np.vstack([project_storage(cumulative, s0) for s0 in inits])
    all_storage = pd.DataFrame(members.T, index=pd.Index(np.asarray(years, dtype=int), name="year"))

    qs = all_storage.quantile(list(quantile_levels), axis=1).T
    qs.columns = [quantile_column(q) for q in quantile_levels]
    qs.reset_index(inplace=True)

    cum = np.asarray(cumulative, dtype=float)
    if sigma > 0:
        analytic = norm.cdf(-cum, loc=mean, scale=sigma)
    else:
        analytic = (mean + cum <= 0).astype(float)
    depletion = pd.DataFrame({
        "year": np.asarray(years, dtype=int),
        "depleted_fraction": (members <= 0.0).mean(axis=0),
        "depletion_probability": analytic,
    })
    return EnsembleResult(initial_storages=inits, quantiles=qs, depletion=depletion)


__all__ = [
    "EnsembleResult",
    "QUANTILE_PREFIX",
    "quantile_column",
    "band_columns",
    "sample_initial_storage",
    "run_storage_ensemble",
]
