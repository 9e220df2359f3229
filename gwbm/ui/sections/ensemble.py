from __future__ import annotations
import streamlit as st
import plotly.graph_objects as go
from gwbm.pipeline import ProjectionResult

__all__ = ["render_ensemble"]


def render_ensemble(result: ProjectionResult):
    with st.expander("Initial-storage ensemble", expanded=False):
        ens = result.ensemble
        if ens is None:
            st.info("Ensemble disabled. Set the member count in the sidebar.")
            return
        dep = ens.depletion
        fig = go.Figure()
        fig.add_trace(go.Scatter(x=dep["year"], y=dep["depleted_fraction"], name="Sampled",
                                 mode="lines", line=dict(color="#1f77b4", width=2)))
        fig.add_trace(go.Scatter(x=dep["year"], y=dep["depletion_probability"], name="Analytical",
                                 mode="lines", line=dict(color="#ff7f0e", dash="dash")))
        fig.update_layout(title="Probability storage is depleted", xaxis_title="Year",
                          yaxis_title="Probability", template="plotly_white")
        st.plotly_chart(fig, use_container_width=True, config={"displaylogo": False})
        st.caption(f"{len(ens.initial_storages)} members, sigma = {result.config.storage_sigma:g}")
