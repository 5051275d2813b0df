"""
Run configuration for the spot price analysis.

Defaults reproduce the standard output layout:

    output/
    ├── AveragePriceByMonth.csv
    ├── HourlyVolatilityByYear.csv
    ├── MaxVolatilityByYear.csv
    ├── formattedSpotHistory/spot_<SettlementPoint>.csv
    ├── hourlyShapeProfiles/profile_<SettlementPoint>.csv
    └── *.png
"""

from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .exceptions import ConfigError


@dataclass
class AnalysisConfig:
    """Configuration for one batch run."""

    # Input/Output
    data_dir: str = 'data'
    output_dir: str = 'output'
    file_pattern: str = '*.csv'

    # Tabular outputs
    average_price_file: str = 'AveragePriceByMonth.csv'
    volatility_file: str = 'HourlyVolatilityByYear.csv'
    max_volatility_file: str = 'MaxVolatilityByYear.csv'

    # Per-settlement-point outputs
    spot_history_dir: str = 'formattedSpotHistory'
    spot_history_template: str = 'spot_{settlement_point}.csv'
    shape_profile_dir: str = 'hourlyShapeProfiles'
    shape_profile_template: str = 'profile_{settlement_point}.csv'

    # Settlement point types
    hub_prefix: str = 'HB'
    load_zone_prefix: str = 'LZ'

    # Charts
    make_plots: bool = True
    plot_dpi: int = 150

    def output_path(self, *parts: str) -> Path:
        return Path(self.output_dir).joinpath(*parts)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AnalysisConfig':
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {unknown}")
        return cls(**data)


def load_config(config_path: Optional[Union[str, Path]] = None) -> AnalysisConfig:
    """
    Load configuration from a YAML file.

    Keys not present in the file keep their defaults. Without a path the
    default configuration is returned.
    """
    if config_path is None:
        return AnalysisConfig()

    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r') as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {config_path}, got {type(data).__name__}")

    return AnalysisConfig.from_dict(data)
