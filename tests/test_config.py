"""Tests for run configuration."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from spot_analysis import AnalysisConfig, ConfigError, load_config


def test_defaults():
    config = load_config()

    assert config == AnalysisConfig()
    assert config.average_price_file == "AveragePriceByMonth.csv"
    assert config.spot_history_template.format(settlement_point="HB_NORTH") == "spot_HB_NORTH.csv"
    assert config.output_path("hourlyShapeProfiles") == Path("output") / "hourlyShapeProfiles"


def test_yaml_overrides(tmp_path):
    config_file = tmp_path / "analysis.yaml"
    config_file.write_text(yaml.dump({"output_dir": "results", "make_plots": False}))

    config = load_config(config_file)

    assert config.output_dir == "results"
    assert config.make_plots is False
    assert config.data_dir == "data"


def test_empty_file_uses_defaults(tmp_path):
    config_file = tmp_path / "analysis.yaml"
    config_file.write_text("")

    assert load_config(config_file) == AnalysisConfig()


def test_unknown_key(tmp_path):
    config_file = tmp_path / "analysis.yaml"
    config_file.write_text(yaml.dump({"outptu_dir": "typo"}))

    with pytest.raises(ConfigError, match="outptu_dir"):
        load_config(config_file)


def test_not_a_mapping(tmp_path):
    config_file = tmp_path / "analysis.yaml"
    config_file.write_text("- just\n- a list\n")

    with pytest.raises(ConfigError, match="mapping"):
        load_config(config_file)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "missing.yaml")


def test_round_trip_dict():
    config = AnalysisConfig(hub_prefix="HUB")
    assert AnalysisConfig.from_dict(config.to_dict()) == config
