# tests/test_report_cli.py
import json

import pandas as pd
import pytest

from gwbm.cli import main
from gwbm.plots import net_change_figure, storage_scenarios_figure
from gwbm.pipeline import run_pipeline
from gwbm.report import render_markdown, write_report


# ---- Figures ----
def test_net_change_figure_has_one_series(result):
    fig = net_change_figure(result.table)
    assert len(fig.data) == 1
    assert list(fig.data[0].y) == pytest.approx(result.table["change"].tolist())


def test_storage_figure_shades_depleted_region(result):
    fig = storage_scenarios_figure(result.table)
    assert [tr.name for tr in fig.data] == [
        "High initial storage (95th percentile)",
        "Mean initial storage",
        "Low initial storage (5th percentile)",
    ]
    rects = [s for s in fig.layout.shapes if s.type == "rect"]
    assert len(rects) == 1
    assert rects[0].y1 == 0
    assert rects[0].y0 < 0


def test_storage_figure_with_ensemble_band(default_config):
    res = run_pipeline(default_config, ensemble_members=100, random_state=0)
    fig = storage_scenarios_figure(res.table, ensemble_quantiles=res.ensemble.quantiles)
    assert len(fig.data) == 5
    assert fig.data[1].fill == "tonexty"


def test_custom_labels(result):
    fig = net_change_figure(result.table, tr=lambda k, **_: k.upper())
    assert fig.layout.title.text == "NET_CHANGE_TITLE"


# ---- Report files ----
def test_write_report(result, tmp_path):
    paths = write_report(result, tmp_path / "out")
    assert set(paths) == {"table", "summary_json", "summary_md", "net_change_html", "storage_html"}
    for p in paths.values():
        assert p.exists()
    table = pd.read_csv(paths["table"])
    assert len(table) == 51
    summary = json.loads(paths["summary_json"].read_text(encoding="utf-8"))
    assert summary["depletion"] == {"low": 2024, "mean": 2037, "high": 2050}
    assert "plotly" in paths["storage_html"].read_text(encoding="utf-8").lower()


def test_write_report_with_ensemble(default_config, tmp_path):
    res = run_pipeline(default_config, ensemble_members=50, random_state=0)
    paths = write_report(res, tmp_path)
    ens = pd.read_csv(paths["ensemble"])
    assert {"storage_q5", "depleted_fraction", "depletion_probability"} <= set(ens.columns)


def test_markdown_lists_trends(result):
    md = render_markdown(result)
    assert md.startswith("# Groundwater storage projection")
    assert "-0.0500" in md
    assert "-0.2260" in md


# ---- CLI ----
def test_cli_dry_run(capsys, tmp_path):
    code = main(["--dry-run", "--output-dir", str(tmp_path), "--log-level", "WARNING"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Depletion year (mean initial storage): 2037." in out
    assert list(tmp_path.iterdir()) == []


def test_cli_writes_report(tmp_path, capsys):
    code = main(["--output-dir", str(tmp_path), "--method", "closed", "--ensemble-members", "20"])
    assert code == 0
    assert (tmp_path / "mass_balance.csv").exists()
    assert (tmp_path / "ensemble_depletion.csv").exists()


def test_cli_output_dir_from_environment(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("GWBM_OUTPUT_DIR", str(tmp_path / "env_out"))
    assert main([]) == 0
    assert (tmp_path / "env_out" / "summary.json").exists()


def test_cli_reports_bad_range(capsys):
    assert main(["--dry-run", "--base-year", "2050", "--final-year", "2000"]) == 1


def test_cli_reports_bad_config(tmp_path):
    cfg = tmp_path / "bad.json"
    cfg.write_text('{"unknown": 1}', encoding="utf-8")
    assert main(["--config", str(cfg), "--dry-run"]) == 1


def test_cli_longer_horizon_keeps_published_results(capsys):
    assert main(["--dry-run", "--final-year", "2060"]) == 0
    out = capsys.readouterr().out
    assert "Net change decreases by 2.26" in out
    assert "Depletion year (low initial storage): 2024." in out
    assert "Depletion year (mean initial storage): 2037." in out


def test_cli_bounds_from_sigma(capsys):
    assert main(["--dry-run", "--bounds-from-sigma"]) == 0
    out = capsys.readouterr().out
    # 350 - 1.645 * 115 = 160.8 is exhausted three years earlier than 190
    assert "Depletion year (low initial storage): 2021." in out
    assert "Depletion year (high initial storage): 2050." in out


def test_cli_bounds_from_sigma_rejects_bad_level():
    assert main(["--dry-run", "--bounds-from-sigma", "1.2"]) == 1


def test_storage_figure_band_follows_quantile_levels(result):
    from gwbm.ensemble import run_storage_ensemble

    ens = run_storage_ensemble(
        years=result.years,
        cumulative=result.table["cumulative_loss"].to_numpy(),
        mean=350.0,
        sigma=115.0,
        n_members=200,
        random_state=0,
        quantile_levels=(0.1, 0.5, 0.9),
    )
    fig = storage_scenarios_figure(result.table, ensemble_quantiles=ens.quantiles)
    assert list(fig.data[0].y) == pytest.approx(ens.quantiles["storage_q90"].tolist())
    assert list(fig.data[1].y) == pytest.approx(ens.quantiles["storage_q10"].tolist())
    assert fig.data[1].name == "Ensemble 10-90%"
