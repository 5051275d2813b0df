#!/usr/bin/env python
"""
Spot Price Analysis Pipeline
Reads hourly settlement point prices and writes monthly averages,
hourly volatility, formatted spot history and hourly shape profiles.

Usage:
    python -m spot_analysis.run_analysis
    python -m spot_analysis.run_analysis --data-dir data --output-dir output
    python -m spot_analysis.run_analysis --config analysis.yaml --no-plots
"""

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from .config import AnalysisConfig, load_config
from .data_utils import (
    clean_df,
    compute_average_price,
    compute_hourly_volatility,
    compute_highest_volatility_per_year,
    compute_hourly_shape_profiles,
    format_spot_history,
    partition_by_settlement_point,
    settlement_points,
)
from .exceptions import SpotAnalysisError
from .io_utils import read_files, write_partitions, write_table
from .plot_utils import plot_avg_monthly, plot_hourly_volatility, save_figure

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Tables produced by one run."""
    clean: pd.DataFrame
    average_price: pd.DataFrame
    hourly_volatility: pd.DataFrame
    max_volatility: pd.DataFrame
    spot_history: Dict[str, pd.DataFrame]
    shape_profiles: Dict[str, pd.DataFrame]
    written_files: List[Path] = field(default_factory=list)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Analyze historical hourly settlement point prices'
    )

    parser.add_argument('--config', type=Path,
                        help='YAML configuration file')
    parser.add_argument('--data-dir',
                        help='Directory with raw price CSV files (overrides config)')
    parser.add_argument('--output-dir',
                        help='Directory for output tables and charts (overrides config)')
    parser.add_argument('--no-plots', action='store_true',
                        help='Skip chart generation')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable debug logging')

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> AnalysisConfig:
    """Load the config file and apply command line overrides."""
    config = load_config(args.config)
    if args.data_dir:
        config.data_dir = args.data_dir
    if args.output_dir:
        config.output_dir = args.output_dir
    if args.no_plots:
        config.make_plots = False
    return config


def write_charts(result: PipelineResult, config: AnalysisConfig) -> List[Path]:
    """Render the average price and volatility charts."""
    charts = {
        config.hub_prefix: 'SettlementHubAveragePriceByMonth.png',
        config.load_zone_prefix: 'LoadZoneAveragePriceByMonth.png',
    }
    present = settlement_points(result.average_price)

    written = []
    for prefix, filename in charts.items():
        if not any(sp.startswith(prefix) for sp in present):
            logger.warning("No '%s' settlement points; skipping %s", prefix, filename)
            continue
        fig = plot_avg_monthly(result.average_price, prefix)
        written.append(save_figure(fig, config.output_path(filename), dpi=config.plot_dpi))

    if result.hourly_volatility['HourlyVolatility'].notna().any():
        fig = plot_hourly_volatility(result.hourly_volatility)
        written.append(
            save_figure(fig, config.output_path('HourlyVolatilityByYear.png'), dpi=config.plot_dpi)
        )

    return written


def run_pipeline(config: AnalysisConfig) -> PipelineResult:
    """Run every analysis step and write the outputs described by config."""

    # Read and clean
    power_df = read_files(config.data_dir, config.file_pattern)
    clean = clean_df(power_df)

    # Average price
    average_price_df = compute_average_price(clean)

    # Hourly volatility
    hourly_volatility_df = compute_hourly_volatility(clean, prefix=config.hub_prefix)
    max_volatility_df = compute_highest_volatility_per_year(hourly_volatility_df)

    # Per-settlement-point tables
    spot_history = partition_by_settlement_point(format_spot_history(clean))
    shape_profiles = partition_by_settlement_point(compute_hourly_shape_profiles(clean))

    result = PipelineResult(
        clean=clean,
        average_price=average_price_df,
        hourly_volatility=hourly_volatility_df,
        max_volatility=max_volatility_df,
        spot_history=spot_history,
        shape_profiles=shape_profiles,
    )

    written = result.written_files
    written.append(write_table(average_price_df, config.output_path(config.average_price_file)))
    written.append(write_table(hourly_volatility_df, config.output_path(config.volatility_file)))
    written.append(write_table(max_volatility_df, config.output_path(config.max_volatility_file)))
    written.extend(write_partitions(
        spot_history,
        config.output_path(config.spot_history_dir),
        config.spot_history_template,
    ))
    written.extend(write_partitions(
        shape_profiles,
        config.output_path(config.shape_profile_dir),
        config.shape_profile_template,
    ))

    if config.make_plots:
        written.extend(write_charts(result, config))

    return result


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )

    try:
        config = build_config(args)
        result = run_pipeline(config)
    except SpotAnalysisError as e:
        logger.error("Analysis failed: %s", e)
        return 1

    logger.info(
        "Analysis complete: %d settlement points, %d files written to %s",
        len(result.spot_history), len(result.written_files), config.output_dir
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
