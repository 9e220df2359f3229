from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path

from gwbm.analysis import summary_lines
from gwbm.config import ConfigError, load_config, scenarios_from_normal
from gwbm.paths import default_output_dir
from gwbm.pipeline import run_pipeline
from gwbm.report import write_report
from gwbm.years import InvalidRangeError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Project groundwater storage from inflow/outflow trend lines.")
    parser.add_argument("--config", type=Path, default=None, help="JSON configuration file (defaults to GWBM_CONFIG or built-in constants)")
    parser.add_argument("--output-dir", type=Path, default=None, help="Directory for table, summary and figures (defaults to GWBM_OUTPUT_DIR or ./gwbm_output)")
    parser.add_argument("--base-year", type=int, default=None, help="Override the first projected year")
    parser.add_argument("--final-year", type=int, default=None, help="Override the last projected year")
    parser.add_argument("--bounds-from-sigma", type=float, nargs="?", const=0.90, default=None, metavar="CI", help="Replace low/high initial storage with the central CI interval of N(mean, storage_sigma) (default CI 0.90)")
    parser.add_argument("--method", default="quad", choices=["quad", "closed"], help="Integration method for cumulative net change")
    parser.add_argument("--ensemble-members", type=int, default=0, help="Sample N initial storages from the stated normal distribution (0 disables)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for the ensemble")
    parser.add_argument("--dry-run", action="store_true", help="Compute and print the summary without writing files")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], help="Logging verbosity")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper()))
    log = logging.getLogger(__name__)

    try:
        config = load_config(args.config)
        overrides = {}
        if args.base_year is not None:
            overrides["base_year"] = args.base_year
        if args.final_year is not None:
            overrides["final_year"] = args.final_year
        if args.bounds_from_sigma is not None:
            overrides["scenario_initial_storage"] = scenarios_from_normal(
                config.scenario_initial_storage.mean, config.storage_sigma, args.bounds_from_sigma
            )
        if overrides:
            config = replace(config, **overrides)
        result = run_pipeline(
            config,
            method=args.method,
            ensemble_members=args.ensemble_members,
            random_state=args.seed,
        )
    except (ConfigError, InvalidRangeError, ValueError) as exc:
        log.error("Projection failed: %s", exc)
        return 1

    for line in summary_lines(result.summary):
        print(line)

    if args.dry_run:
        print("Dry run: no files written.")
        return 0

    output_dir = args.output_dir if args.output_dir is not None else default_output_dir()
    paths = write_report(result, output_dir)
    print(f"Report written to {output_dir} ({len(paths)} files).")
    return 0


__all__ = ["main"]
