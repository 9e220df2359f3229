from __future__ import annotations

import logging
from typing import Iterable, Optional

import numpy as np

from .config import ScenarioBound

logger = logging.getLogger(__name__)


def project_storage(cumulative: np.ndarray, initial_storage: float) -> np.ndarray:
    """Storage trajectory: initial storage plus cumulative net change."""
    return float(initial_storage) + np.asarray(cumulative, dtype=float)


def project_scenarios(cumulative: np.ndarray, bounds: Iterable[ScenarioBound]) -> dict[str, np.ndarray]:
    return {b.label: project_storage(cumulative, b.initial_storage) for b in bounds}


def depletion_year(years, storage) -> Optional[int]:
    """First year with storage <= 0, or None when storage stays positive over the range."""
    ys = np.asarray(years)
    s = np.asarray(storage, dtype=float)
    if ys.shape != s.shape:
        raise ValueError(f"Years and storage differ in length ({ys.size} vs {s.size})")
    hits = np.flatnonzero(s <= 0.0)
    if hits.size == 0:
        return None
    return int(ys[hits[0]])


def depletion_years(years, trajectories: dict[str, np.ndarray]) -> dict[str, Optional[int]]:
    out = {label: depletion_year(years, storage) for label, storage in trajectories.items()}
    for label, year in out.items():
        if year is None:
            logger.info("Scenario %s: storage stays positive through %d", label, int(np.asarray(years)[-1]))
        else:
            logger.info("Scenario %s: storage depleted in %d", label, year)
    return out


__all__ = [
    "project_storage",
    "project_scenarios",
    "depletion_year",
    "depletion_years",
]
