from __future__ import annotations
import streamlit as st
from dataclasses import dataclass
from gwbm.config import BalanceConfig, InitialStorage, ConfigError, scenarios_from_normal

__all__ = ["Controls", "build_controls"]


@dataclass
class Controls:
    config: BalanceConfig
    method: str
    ensemble_members: int
    seed: int


def build_controls(default: BalanceConfig | None = None) -> Controls:
    d = default or BalanceConfig()
    st.sidebar.header("Trend observations (10^9 m^3/yr)")
    obs_base = st.sidebar.number_input("Observation year (base)", value=int(d.observation_base_year), step=1)
    obs_final = st.sidebar.number_input("Observation year (final)", value=int(d.observation_final_year), step=1)
    in0 = st.sidebar.number_input("Inflow, base year", value=float(d.base_year_inflow), step=0.1)
    in1 = st.sidebar.number_input("Inflow, final year", value=float(d.final_year_inflow), step=0.1)
    out0 = st.sidebar.number_input("Outflow, base year", value=float(d.base_year_outflow), step=0.1)
    out1 = st.sidebar.number_input("Outflow, final year", value=float(d.final_year_outflow), step=0.1)

    st.sidebar.header("Projection range")
    base_year = st.sidebar.number_input("First projected year", value=int(d.base_year), step=1)
    final_year = st.sidebar.number_input("Last projected year", value=int(d.final_year), step=1)

    st.sidebar.header("Initial storage (10^9 m^3)")
    s = d.scenario_initial_storage
    low = st.sidebar.number_input("Low (5th percentile)", value=float(s.low), step=10.0)
    mean = st.sidebar.number_input("Mean", value=float(s.mean), step=10.0)
    high = st.sidebar.number_input("High (95th percentile)", value=float(s.high), step=10.0)
    sigma = st.sidebar.number_input("Std. deviation", value=float(d.storage_sigma), min_value=0.0, step=5.0)
    from_sigma = st.sidebar.checkbox("Derive low/high from sigma (90% CI)", value=False,
                                     help="Symmetric bounds of N(mean, sigma); replaces the low/high inputs")

    st.sidebar.header("Computation")
    method = st.sidebar.radio("Integration", ["quad", "closed"], index=0,
                              help="Adaptive quadrature (scipy) or closed-form integral")
    ensemble_members = st.sidebar.slider("Ensemble members", 0, 5000, 0, 100,
                                         help="0 disables the sampled initial-storage ensemble")
    seed = st.sidebar.number_input("Seed", value=42, step=1)

    try:
        if from_sigma:
            storage = scenarios_from_normal(float(mean), float(sigma), 0.90)
        else:
            storage = InitialStorage(low=float(low), mean=float(mean), high=float(high))
    except ConfigError as exc:
        st.sidebar.error(str(exc))
        storage = s

    config = BalanceConfig(
        base_year_inflow=float(in0),
        final_year_inflow=float(in1),
        base_year_outflow=float(out0),
        final_year_outflow=float(out1),
        base_year_net_change=d.base_year_net_change,
        final_year_net_change=d.final_year_net_change,
        scenario_initial_storage=storage,
        storage_sigma=float(sigma),
        observation_base_year=int(obs_base),
        observation_final_year=int(obs_final),
        base_year=int(base_year),
        final_year=int(final_year),
        step=d.step,
    )
    return Controls(config=config, method=str(method), ensemble_members=int(ensemble_members), seed=int(seed))
