"""Linear trend models for groundwater inflow, outflow and net change.

All lines are expressed in absolute calendar years::

    value(year) = slope * year + intercept

With two observations the least-squares fit is exactly determined, so
``fit_two_point`` interpolates both points.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np
import pandas as pd

ArrayLike = Union[float, int, np.ndarray, pd.Series, Sequence[float]]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Observation:
    year: int
    value: float


@dataclass(frozen=True)
class LinearModel:
    slope: float
    intercept: float

    def __call__(self, year: ArrayLike):
        if np.isscalar(year):
            return self.slope * float(year) + self.intercept
        return self.slope * np.asarray(year, dtype=float) + self.intercept

    def __sub__(self, other: "LinearModel") -> "LinearModel":
        return LinearModel(self.slope - other.slope, self.intercept - other.intercept)

    def integral(self, a: float, b: float) -> float:
        """Closed-form definite integral of the line from ``a`` to ``b``."""
        return self.slope / 2.0 * (b * b - a * a) + self.intercept * (b - a)

    def root(self) -> float:
        """Year at which the line crosses zero (nan for a flat line)."""
        if self.slope == 0:
            return float("nan")
        return -self.intercept / self.slope


def fit_two_point(p0: Observation, p1: Observation) -> LinearModel:
    if p0.year == p1.year:
        raise ValueError(f"Cannot fit a line through two observations at the same year ({p0.year})")
    slope = (p1.value - p0.value) / (p1.year - p0.year)
    intercept = p0.value - slope * p0.year
    return LinearModel(float(slope), float(intercept))


def evaluate(model: LinearModel, years: ArrayLike) -> np.ndarray:
    """Evaluate ``model`` at every year. No range check: extrapolation is allowed."""
    return np.asarray(model(np.asarray(years, dtype=float)), dtype=float)


def check_net_consistency(
    derived: LinearModel,
    refit: LinearModel,
    years: ArrayLike,
    *,
    atol: float = 1e-6,
) -> float:
    """Compare the derived net-change line against an independent refit.

    Returns the largest absolute disagreement over ``years`` and logs a
    warning when it exceeds ``atol``. The derived line stays authoritative.
    """
    gap = float(np.max(np.abs(evaluate(derived, years) - evaluate(refit, years))))
    if gap > atol:
        logger.warning(
            "Net-change observations disagree with inflow - outflow by up to %.6g; using inflow - outflow",
            gap,
        )
    else:
        logger.debug("Net-change refit agrees with inflow - outflow (max gap %.3g)", gap)
    return gap


__all__ = [
    "Observation",
    "LinearModel",
    "fit_two_point",
    "evaluate",
    "check_net_consistency",
]
