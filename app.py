"""Streamlit front end for the groundwater storage projection.

Responsibilities are delegated to `gwbm`:

  gwbm.ui.controls.build_controls -> sidebar inputs -> BalanceConfig
  gwbm.pipeline.run_pipeline      -> trend fit, integration, scenarios, summary
  gwbm.plots                      -> net-change and storage figures
  gwbm.ui.sections.*              -> summary metrics, table, ensemble

Run: streamlit run app.py
"""
from __future__ import annotations

import streamlit as st

from gwbm.config import load_config
from gwbm.pipeline import run_pipeline
from gwbm.plots import net_change_figure, storage_scenarios_figure
from gwbm.ui.controls import build_controls
from gwbm.ui.sections import render_ensemble, render_summary, render_table


# Unified Plotly display helper
def show_plot(fig):
    if fig is None:
        return
    st.plotly_chart(fig, config={"displaylogo": False, "modeBarButtonsToRemove": ["select2d","lasso2d"]}, use_container_width=True)


st.set_page_config(page_title="Groundwater Storage Projection", layout="wide")
st.title("Groundwater storage projection")
st.caption("Linear inflow/outflow trends integrated under three initial-storage scenarios.")

try:
    defaults = load_config()
except ValueError as exc:
    st.error(f"Configuration error: {exc}")
    st.stop()

ctr = build_controls(defaults)

try:
    result = run_pipeline(
        ctr.config,
        method=ctr.method,
        ensemble_members=ctr.ensemble_members,
        random_state=ctr.seed,
    )
except ValueError as exc:
    st.error(f"Projection failed: {exc}")
    st.stop()

render_summary(result)

col_a, col_b = st.columns(2)
with col_a:
    show_plot(net_change_figure(result.table))
with col_b:
    quantiles = result.ensemble.quantiles if result.ensemble is not None else None
    show_plot(storage_scenarios_figure(result.table, ensemble_quantiles=quantiles))

render_ensemble(result)
render_table(result)
