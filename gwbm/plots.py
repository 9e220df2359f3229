from __future__ import annotations

import plotly.graph_objects as go
import pandas as pd
from typing import Callable, Optional

from .ensemble import QUANTILE_PREFIX, band_columns

_LABELS = {
    "net_change_title": "Net change in groundwater storage",
    "net_change_name": "Net change (inflow - outflow)",
    "storage_title": "Projected groundwater storage",
    "year_axis": "Year",
    "flux_axis": "10^9 m^3/yr",
    "storage_axis": "Storage (10^9 m^3)",
    "depleted_label": "Depleted",
    "storage_low_name": "Low initial storage (5th percentile)",
    "storage_mean_name": "Mean initial storage",
    "storage_high_name": "High initial storage (95th percentile)",
    "ensemble_band_name": "Ensemble {lo}-{hi}%",
}

_SCENARIO_COLORS = {
    "low": "#d62728",
    "mean": "#1f77b4",
    "high": "#2ca02c",
}


def _default_tr(key: str, **fmt) -> str:
    text = _LABELS.get(key, key)
    return text.format(**fmt) if fmt else text


def net_change_figure(table: pd.DataFrame, tr: Optional[Callable[[str], str]] = None) -> go.Figure:
    tr = tr or _default_tr
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=table["year"], y=table["change"], name=tr("net_change_name"),
                             mode="lines+markers", line=dict(color="#1f77b4", width=2), marker=dict(size=4)))
    fig.add_hline(y=0, line=dict(color="#7f7f7f", width=1, dash="dot"))
    fig.update_layout(title=tr("net_change_title"), xaxis_title=tr("year_axis"), yaxis_title=tr("flux_axis"),
                      template="plotly_white")
    return fig


def storage_scenarios_figure(
    table: pd.DataFrame,
    tr: Optional[Callable[[str], str]] = None,
    ensemble_quantiles: Optional[pd.DataFrame] = None,
) -> go.Figure:
    """Storage trajectories for the three scenarios with the depleted region (storage <= 0) shaded."""
    tr = tr or _default_tr
    fig = go.Figure()
    if ensemble_quantiles is not None and not ensemble_quantiles.empty:
        lo_col, hi_col = band_columns(ensemble_quantiles)
        lo, hi = (c[len(QUANTILE_PREFIX):] for c in (lo_col, hi_col))
        fig.add_trace(go.Scatter(x=ensemble_quantiles["year"], y=ensemble_quantiles[hi_col],
                                 mode="lines", line=dict(width=0), showlegend=False, hoverinfo="skip"))
        fig.add_trace(go.Scatter(x=ensemble_quantiles["year"], y=ensemble_quantiles[lo_col],
                                 mode="lines", line=dict(width=0), fill="tonexty",
                                 fillcolor="rgba(31,119,180,0.15)", name=tr("ensemble_band_name", lo=lo, hi=hi)))
    for label in ("high", "mean", "low"):
        fig.add_trace(go.Scatter(x=table["year"], y=table[f"storage_{label}"], name=tr(f"storage_{label}_name"),
                                 mode="lines", line=dict(color=_SCENARIO_COLORS[label], width=2)))

    storage_cols = ["storage_low", "storage_mean", "storage_high"]
    y_min = float(table[storage_cols].min().min())
    y_max = float(table[storage_cols].max().max())
    floor = min(y_min, -0.1 * max(abs(y_max), 1.0))
    fig.add_hrect(y0=floor, y1=0, fillcolor="#7f7f7f", opacity=0.2, line_width=0,
                  annotation_text=tr("depleted_label"), annotation_position="bottom left")
    fig.update_layout(title=tr("storage_title"), xaxis_title=tr("year_axis"), yaxis_title=tr("storage_axis"),
                      template="plotly_white")
    fig.update_yaxes(range=[floor, y_max * 1.05 if y_max > 0 else 1.0])
    return fig


__all__ = [
    "net_change_figure",
    "storage_scenarios_figure",
]
