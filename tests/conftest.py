"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
from collections.abc import Sequence

import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest
from hypothesis import HealthCheck, settings

from spot_analysis import clean_df


def make_records(
    settlement_point: str, start: str, prices: Sequence[float], freq: str = "h"
) -> pd.DataFrame:
    """Build raw hourly records for one settlement point starting at `start`."""
    return pd.DataFrame(
        {
            "Date": pd.date_range(start, periods=len(prices), freq=freq),
            "SettlementPoint": settlement_point,
            "Price": list(prices),
        }
    )


@pytest.fixture
def raw_prices_df() -> pd.DataFrame:
    """Two days of hourly prices for two hubs and one load zone, as read from CSV."""
    frames = []
    for offset, settlement_point in enumerate(["HB_HOUSTON", "HB_NORTH", "LZ_NORTH"]):
        prices = [20.0 + offset + (hour % 24) * 0.5 + (hour // 24) for hour in range(48)]
        frame = make_records(settlement_point, "2016-01-01", prices)
        frame["Date"] = frame["Date"].dt.strftime("%Y-%m-%d %H:%M:%S")
        frames.append(frame)
    return pd.concat(frames, ignore_index=True)


@pytest.fixture
def clean_prices(raw_prices_df: pd.DataFrame) -> pd.DataFrame:
    """Cleaned version of raw_prices_df."""
    return clean_df(raw_prices_df)


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Set up logging for tests."""
    caplog.set_level("INFO")


# Hypothesis settings


settings.register_profile(
    "dev",
    max_examples=25,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
