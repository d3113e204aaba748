#!/usr/bin/env python
"""Run the TWIST model on a timeseries table.

Usage:
  python scripts/run_twist.py \
    --data data/example_input.csv \
    --out results/twist_output.csv \
    --config config/twist.yaml \
    --plot results/figures

Steps:
  1. Read the input table (CSV or Parquet)
  2. Compute the water pool size from wood biomass (unless --no-pool)
  3. Run the deficit recurrence
  4. Write TWD/RWC output and print run diagnostics
  5. Optionally plot TWD and RWC timeseries

All water quantities (E, TWD, W) must share one unit.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

from twist.core.config import TwistConfig
from twist.core.constants import OUTPUT_RWC_COLUMN, OUTPUT_TIME_COLUMN, OUTPUT_TWD_COLUMN
from twist.core.exceptions import ErrorContext, MissingFieldError, TwistError, handle_exception
from twist.data.io import read_timeseries, write_results
from twist.physics.twist_model import create_twist_model
from twist.validation.diagnostics import summarize_run

logger = logging.getLogger(__name__)


def _ensure_matplotlib():
    try:
        import matplotlib.pyplot as plt  # noqa: F401
    except Exception as e:  # pragma: no cover
        raise SystemExit(
            "matplotlib is required for plotting. Install with: pip install 'twist-model[plot]'\n"
            f"Original error: {e}"
        )


def plot_series(output: pd.DataFrame, column: str, ylabel: str, out_path: Path) -> None:
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(8, 4.5), constrained_layout=True)
    ax.plot(output[OUTPUT_TIME_COLUMN], output[column], lw=1.0)
    ax.set_xlabel("Time")
    ax.set_ylabel(ylabel)
    ax.grid(True, alpha=0.3)
    fig.savefig(out_path, dpi=200)
    plt.close(fig)


def _load_config(args: argparse.Namespace) -> TwistConfig:
    config = TwistConfig.from_yaml(args.config) if args.config else TwistConfig()

    # Command-line overrides
    updates = {}
    if args.twd_initial is not None:
        updates["run"] = config.run.model_copy(update={"twd_initial": args.twd_initial})
    if args.no_pool:
        run_cfg = updates.get("run", config.run)
        updates["run"] = run_cfg.model_copy(update={"compute_water_pool": False})
    if updates:
        config = config.model_copy(update=updates)
    return config


def main(argv: list[str]) -> int:
    parser = argparse.ArgumentParser(
        description="Run the Tree Water Imbalance and Storage Tracker on a timeseries table")
    parser.add_argument("--data", required=True, type=Path,
                        help="Input CSV/Parquet with time, transpiration, theta and wood mass or pool columns")
    parser.add_argument("--out", required=True, type=Path,
                        help="Output CSV/Parquet for datetime, TWD, RWC")
    parser.add_argument("--config", type=Path, default=None,
                        help="YAML configuration (parameters and column names)")
    parser.add_argument("--twd-initial", type=float, default=None,
                        help="Initial TWD (overrides config)")
    parser.add_argument("--no-pool", action="store_true",
                        help="Use the pool column as given instead of computing it from wood mass")
    parser.add_argument("--plot", type=Path, default=None,
                        help="Folder for TWD/RWC figures")

    args = parser.parse_args(argv)

    config = _load_config(args)
    logging.basicConfig(level=config.logging.level, format=config.logging.format)

    model = create_twist_model(config)
    try:
        df = read_timeseries(args.data, model.columns)
    except (OSError, ValueError, TwistError) as e:
        err = handle_exception(e, ErrorContext(site_id=config.site_id, operation="read_timeseries"))
        logger.error(f"Could not read input table: {err}")
        return 1

    try:
        if config.run.compute_water_pool:
            output = model.run_with_pool(
                df, config.water_pool_parameters(), twd_initial=config.run.twd_initial)
        else:
            output = model.run(df, twd_initial=config.run.twd_initial)
    except MissingFieldError as e:
        raise SystemExit(
            f"{e}\nAvailable columns: {list(df.columns)}. "
            "Adjust the 'columns' section of the configuration."
        )
    except TwistError as e:
        logger.error(f"Model run failed: {e}")
        return 1

    write_results(output, args.out)

    diagnostics = summarize_run(output)
    print(f"Wrote {diagnostics.n_steps} timesteps to {args.out}")
    print("Diagnostics:")
    for k, v in diagnostics.to_dict().items():
        print(f"  {k}: {v:.6g}" if isinstance(v, float) else f"  {k}: {v}")

    if args.plot is not None:
        _ensure_matplotlib()
        args.plot.mkdir(parents=True, exist_ok=True)
        plot_series(output, OUTPUT_TWD_COLUMN, "Tree water deficit (unit of E)",
                    args.plot / "twd.png")
        plot_series(output, OUTPUT_RWC_COLUMN, "Relative water content (-)",
                    args.plot / "rwc.png")
        print(f"Wrote figures to: {args.plot}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
