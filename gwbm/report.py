from __future__ import annotations

import json
import logging
from pathlib import Path

from .analysis import summary_lines
from .paths import ensure_dir
from .pipeline import ProjectionResult
from .plots import net_change_figure, storage_scenarios_figure

logger = logging.getLogger(__name__)


def render_markdown(result: ProjectionResult) -> str:
    m = result.models
    header = [
        "# Groundwater storage projection",
        "",
        f"Years {int(result.years[0])}-{int(result.years[-1])}.",
        "",
        f"- Inflow trend: {m.inflow.slope:+.4f} x10^9 m^3/yr per year (intercept {m.inflow.intercept:.2f})",
        f"- Outflow trend: {m.outflow.slope:+.4f} x10^9 m^3/yr per year (intercept {m.outflow.intercept:.2f})",
        f"- Net-change trend: {m.net_change.slope:+.4f} x10^9 m^3/yr per year (intercept {m.net_change.intercept:.2f})",
        "",
    ]
    body = [f"- {line}" for line in summary_lines(result.summary)]
    return "\n".join(header + body) + "\n"


def write_report(result: ProjectionResult, output_dir: Path) -> dict[str, Path]:
    """Write table, summary and both figures into ``output_dir``; return the written paths."""
    out = ensure_dir(Path(output_dir))
    paths = {
        "table": out / "mass_balance.csv",
        "summary_json": out / "summary.json",
        "summary_md": out / "summary.md",
        "net_change_html": out / "net_change.html",
        "storage_html": out / "storage_scenarios.html",
    }

    result.table.to_csv(paths["table"], index=False)
    with open(paths["summary_json"], "w", encoding="utf-8") as fh:
        json.dump(result.summary.to_dict(), fh, indent=2, sort_keys=True)
    paths["summary_md"].write_text(render_markdown(result), encoding="utf-8")

    quantiles = result.ensemble.quantiles if result.ensemble is not None else None
    net_change_figure(result.table).write_html(paths["net_change_html"], include_plotlyjs="cdn")
    storage_scenarios_figure(result.table, ensemble_quantiles=quantiles).write_html(
        paths["storage_html"], include_plotlyjs="cdn"
    )
    if result.ensemble is not None:
        paths["ensemble"] = out / "ensemble_depletion.csv"
        result.ensemble.quantiles.merge(result.ensemble.depletion, on="year").to_csv(paths["ensemble"], index=False)

    for name, path in paths.items():
        logger.info("Wrote %s -> %s", name, path)
    return paths


__all__ = [
    "render_markdown",
    "write_report",
]
