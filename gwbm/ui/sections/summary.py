from __future__ import annotations
import streamlit as st
from gwbm.analysis import format_year
from gwbm.pipeline import ProjectionResult

__all__ = ["render_summary", "render_table"]


def render_summary(result: ProjectionResult):
    s = result.summary
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Net-change decline per decade", f"{s.decline_per_decade:.2f}")
    with col2:
        st.metric(f"Max net change ({s.max_change_year})", f"{s.max_change:.2f}")
    with col3:
        st.metric(f"Min net change ({s.min_change_year})", f"{s.min_change:.2f}")
    if s.net_change_zero_year is not None:
        st.caption(f"Net change changes sign in {s.net_change_zero_year}.")

    cols = st.columns(3)
    for col, label in zip(cols, ("low", "mean", "high")):
        with col:
            st.metric(f"Depletion year ({label})", format_year(s.depletion.get(label)))


def render_table(result: ProjectionResult):
    with st.expander("Mass-balance table", expanded=False):
        st.dataframe(result.table, hide_index=True)
        st.download_button(
            "Download CSV",
            data=result.table.to_csv(index=False).encode("utf-8"),
            file_name="mass_balance.csv",
            mime="text/csv",
        )
