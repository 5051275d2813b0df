"""
Spot Price Analysis
Batch analysis of historical hourly settlement point prices.

Components:
- data_utils: Cleaning, monthly averages, hourly volatility, wide spot history
  and normalized hourly shape profiles
- io_utils: Reading raw price files and writing output tables
- plot_utils: Average price and volatility charts
- config: Run configuration (dataclass + YAML)

CLI Scripts:
- run_analysis.py: Run the full pipeline from a data directory
"""

from .data_utils import (
    clean_df,
    compute_average_price,
    compute_log_returns,
    compute_hourly_volatility,
    compute_highest_volatility_per_year,
    format_spot_history,
    compute_hourly_shape_profiles,
    partition_by_settlement_point,
    filter_settlement_type,
    to_upper_camel,
    HUB_PREFIX,
    LOAD_ZONE_PREFIX,
    HOUR_COLUMNS
)

from .exceptions import (
    SpotAnalysisError,
    SchemaError,
    ComputationError,
    ConfigError,
    DataSourceError
)

from .config import (
    AnalysisConfig,
    load_config
)

from .io_utils import (
    read_files,
    write_table,
    write_partitions
)

__version__ = '1.0.0'
__all__ = [
    # Transformations
    'clean_df',
    'compute_average_price',
    'compute_log_returns',
    'compute_hourly_volatility',
    'compute_highest_volatility_per_year',
    'format_spot_history',
    'compute_hourly_shape_profiles',
    'partition_by_settlement_point',
    'filter_settlement_type',
    'to_upper_camel',
    'HUB_PREFIX',
    'LOAD_ZONE_PREFIX',
    'HOUR_COLUMNS',

    # Errors
    'SpotAnalysisError',
    'SchemaError',
    'ComputationError',
    'ConfigError',
    'DataSourceError',

    # Config
    'AnalysisConfig',
    'load_config',

    # IO
    'read_files',
    'write_table',
    'write_partitions'
]
