from __future__ import annotations

import logging
from typing import Literal, Optional

import numpy as np
from scipy.integrate import quad

from .trends import LinearModel
from .years import validate_years

logger = logging.getLogger(__name__)

Method = Literal["quad", "closed"]


def cumulative_change(
    model: LinearModel,
    years,
    base_year: Optional[int] = None,
    method: Method = "quad",
) -> np.ndarray:
    """Cumulative net change since ``base_year`` for every target year.

    cumulative(y) = integral_{base}^{y} (slope * t + intercept) dt

    Parameters
    ----------
    model : LinearModel
        Net-change line (10^9 m^3/yr per calendar year).
    years : sequence of int
        Target years; validated as a non-empty, strictly increasing series.
    base_year : int, optional
        Lower integration bound. Defaults to the first target year.
    method : {'quad', 'closed'}
        Adaptive quadrature (scipy) or the closed-form antiderivative.

    Returns
    -------
    np.ndarray of float, same length as ``years``. The value at the base year is 0.0.
    """
    ys = validate_years(years)
    b = int(ys[0]) if base_year is None else int(base_year)

    if method == "closed":
        out = np.array([model.integral(b, float(y)) for y in ys], dtype=float)
    elif method == "quad":
        out = np.empty(len(ys), dtype=float)
        for i, y in enumerate(ys):
            if y == b:
                out[i] = 0.0
                continue
            val, err = quad(model, b, float(y))
            if err > 1e-6 * max(1.0, abs(val)):
                logger.warning("Quadrature error estimate %.3g for year %d", err, y)
            out[i] = val
    else:
        raise ValueError(f"Unknown integration method: {method!r}")

    logger.debug("Integrated net change over %d years from %d (%s)", len(ys), b, method)
    return out


__all__ = [
    "cumulative_change",
]
