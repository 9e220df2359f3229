from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Optional

import pandas as pd

from .scenarios import depletion_years
from .trends import LinearModel

NOT_REACHED = "not reached"


@dataclass(frozen=True)
class Summary:
    decline_per_decade: float
    max_change: float
    max_change_year: int
    min_change: float
    min_change_year: int
    net_change_zero_year: Optional[int]
    depletion: dict[str, Optional[int]]
    final_year: int

    def to_dict(self) -> dict:
        return asdict(self)


def decline_per_decade(net_model: LinearModel) -> float:
    """Decrease in net change per decade (positive when net change is falling)."""
    return -net_model.slope * 10.0


def extreme_change(table: pd.DataFrame) -> tuple[float, int, float, int]:
    """Return (max, year_of_max, min, year_of_min) of the change column."""
    if table.empty:
        raise ValueError("Mass-balance table is empty")
    i_max = table["change"].idxmax()
    i_min = table["change"].idxmin()
    return (
        float(table.loc[i_max, "change"]),
        int(table.loc[i_max, "year"]),
        float(table.loc[i_min, "change"]),
        int(table.loc[i_min, "year"]),
    )


def zero_crossing_year(net_model: LinearModel, first_year: int, last_year: int) -> Optional[int]:
    """First whole year at or after the sign change of the net-change line, if inside the range."""
    root = net_model.root()
    if math.isnan(root) or root < first_year or root > last_year:
        return None
    return int(math.ceil(root))


def summarize(table: pd.DataFrame, net_model: LinearModel) -> Summary:
    years = table["year"].to_numpy()
    trajectories = {
        label: table[f"storage_{label}"].to_numpy()
        for label in ("low", "mean", "high")
    }
    mx, mx_year, mn, mn_year = extreme_change(table)
    return Summary(
        decline_per_decade=decline_per_decade(net_model),
        max_change=mx,
        max_change_year=mx_year,
        min_change=mn,
        min_change_year=mn_year,
        net_change_zero_year=zero_crossing_year(net_model, int(years[0]), int(years[-1])),
        depletion=depletion_years(years, trajectories),
        final_year=int(years[-1]),
    )


def format_year(year: Optional[int]) -> str:
    return NOT_REACHED if year is None else str(year)


def summary_lines(summary: Summary) -> list[str]:
    lines = [
        f"Net change decreases by {summary.decline_per_decade:.2f} x10^9 m^3/yr per decade.",
        f"Maximum net change: {summary.max_change:.2f} x10^9 m^3/yr in {summary.max_change_year}.",
        f"Minimum net change: {summary.min_change:.2f} x10^9 m^3/yr in {summary.min_change_year}.",
    ]
    if summary.net_change_zero_year is not None:
        lines.append(f"Net change changes sign in {summary.net_change_zero_year}.")
    for label in ("low", "mean", "high"):
        year = summary.depletion.get(label)
        suffix = "" if year is not None else f" by {summary.final_year}"
        lines.append(f"Depletion year ({label} initial storage): {format_year(year)}{suffix}.")
    return lines


__all__ = [
    "NOT_REACHED",
    "Summary",
    "decline_per_decade",
    "extreme_change",
    "zero_crossing_year",
    "summarize",
    "format_year",
    "summary_lines",
]
