from __future__ import annotations

import numpy as np
from typing import Iterable


class InvalidRangeError(ValueError):
    """Year series is empty, not strictly increasing, or has a bad step."""


def year_series(start: int = 2000, end: int = 2050, step: int = 1) -> np.ndarray:
    """Return inclusive integer years ``start..end`` with the given step.

    The last year is included only when it falls on the step grid.
    """
    if step <= 0:
        raise InvalidRangeError(f"Year step must be positive, got {step}")
    if end < start:
        raise InvalidRangeError(f"Final year {end} precedes base year {start}")
    years = np.arange(int(start), int(end) + 1, int(step), dtype=int)
    return validate_years(years)


def validate_years(years: Iterable[int]) -> np.ndarray:
    arr = np.asarray(list(years) if not isinstance(years, np.ndarray) else years)
    if arr.ndim != 1 or arr.size == 0:
        raise InvalidRangeError("Year series must be a non-empty 1-D sequence")
    if not np.issubdtype(arr.dtype, np.integer):
        if not np.all(np.equal(np.mod(arr, 1), 0)):
            raise InvalidRangeError("Year series must contain whole years")
        arr = arr.astype(int)
    if arr.size > 1 and not np.all(np.diff(arr) > 0):
        raise InvalidRangeError("Year series must be strictly increasing")
    return arr


__all__ = [
    "InvalidRangeError",
    "year_series",
    "validate_years",
]
