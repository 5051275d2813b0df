"""
Spot Price Transformations
Cleaning, aggregation and reshaping of hourly settlement point prices.

Pipeline (each step returns a new DataFrame):
- clean_df: canonical column names + Year/Month/Day parts
- compute_average_price: mean price per settlement point and month
- compute_hourly_volatility: std-dev of hourly log returns per hub and year
- compute_highest_volatility_per_year: hub(s) with the peak volatility each year
- format_spot_history: one row per settlement point and day, 24 hour columns
- compute_hourly_shape_profiles: normalized hourly shape by month and weekday
"""

import logging
import re
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from .exceptions import ComputationError, SchemaError

logger = logging.getLogger(__name__)

HUB_PREFIX = 'HB'
LOAD_ZONE_PREFIX = 'LZ'

REQUIRED_COLUMNS = ['Date', 'SettlementPoint', 'Price']

HOURS = list(range(1, 25))
HOUR_COLUMNS = [f'Hour{h}' for h in HOURS]

AVERAGE_PRICE_COLUMNS = ['SettlementPoint', 'Year', 'Month', 'AveragePrice']
VOLATILITY_COLUMNS = ['SettlementPoint', 'Year', 'HourlyVolatility']
SPOT_HISTORY_COLUMNS = ['SettlementPoint', 'Date'] + HOUR_COLUMNS
SHAPE_PROFILE_KEYS = ['SettlementPoint', 'Month', 'DayOfWeek']
SHAPE_PROFILE_COLUMNS = SHAPE_PROFILE_KEYS + HOUR_COLUMNS


# =============================================================================
# SCHEMA NORMALIZATION
# =============================================================================

def to_upper_camel(name) -> str:
    """
    Convert a column name to UpperCamel case.

    'settlement point', 'settlement_point' and 'SettlementPoint' all
    become 'SettlementPoint'; 'PRICE' becomes 'Price'.
    """
    text = re.sub(r'([a-z0-9])([A-Z])', r'\1 \2', str(name).strip())
    words = re.split(r'[^0-9A-Za-z]+', text)
    return ''.join(w[:1].upper() + w[1:].lower() for w in words if w)


def validate_columns(df: pd.DataFrame, required: Sequence[str]) -> None:
    """Raise SchemaError naming every required column absent from df."""
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise SchemaError(missing, available=list(df.columns))


def _parse_timestamps(values: pd.Series) -> pd.Series:
    parsed = pd.to_datetime(values, errors='coerce')
    bad = parsed.isna()
    if bad.any():
        examples = values[bad].head(3).tolist()
        raise ComputationError(
            'Date', f"{int(bad.sum())} values are not valid timestamps, e.g. {examples}"
        )
    return parsed


def _parse_prices(values: pd.Series) -> pd.Series:
    parsed = pd.to_numeric(values, errors='coerce')
    bad = parsed.isna() & values.notna()
    if bad.any():
        examples = values[bad].head(3).tolist()
        raise ComputationError(
            'Price', f"{int(bad.sum())} values are not numeric, e.g. {examples}"
        )
    n_missing = int(parsed.isna().sum())
    if n_missing:
        logger.warning("%d rows have no Price", n_missing)
    return parsed.astype(float)


def clean_df(df: pd.DataFrame) -> pd.DataFrame:
    """
    Preprocess raw price records for further analysis.

    Column names are converted to UpperCamel case and the Date column is
    decomposed into Year, Month and Day. The parsed Date timestamp is kept
    since the hour and weekday are derived from it downstream.

    Args:
        df: Raw records with a combined date-time column and a price column

    Returns:
        New DataFrame with the same rows plus Year, Month and Day

    Raises:
        SchemaError: If Date, SettlementPoint or Price is missing
        ComputationError: If Date or Price cannot be parsed
    """
    clean = df.rename(columns=to_upper_camel)
    validate_columns(clean, REQUIRED_COLUMNS)
    clean = clean.copy()

    clean['Date'] = _parse_timestamps(clean['Date'])
    clean['Price'] = _parse_prices(clean['Price'])
    clean['Year'] = clean['Date'].dt.year
    clean['Month'] = clean['Date'].dt.month
    clean['Day'] = clean['Date'].dt.day

    logger.info(
        "Cleaned %d records for %d settlement points",
        len(clean), clean['SettlementPoint'].nunique()
    )
    return clean


def filter_settlement_type(df: pd.DataFrame, prefix: str) -> pd.DataFrame:
    """Keep rows whose SettlementPoint starts with prefix (e.g. 'HB' or 'LZ')."""
    mask = df['SettlementPoint'].astype(str).str.startswith(prefix)
    return df[mask].copy()


# =============================================================================
# AVERAGE PRICE
# =============================================================================

def compute_average_price(df: pd.DataFrame) -> pd.DataFrame:
    """
    Compute the mean price per settlement point for each month.

    Returns columns [SettlementPoint, Year, Month, AveragePrice], one row
    per (SettlementPoint, Year, Month) present in df.
    """
    average_df = (
        df.groupby(['Year', 'Month', 'SettlementPoint'], as_index=False)['Price']
          .mean()
          .rename(columns={'Price': 'AveragePrice'})
    )
    # Column order is fixed for CSV consumers
    average_df = (
        average_df[AVERAGE_PRICE_COLUMNS]
        .sort_values(['SettlementPoint', 'Year', 'Month'])
        .reset_index(drop=True)
    )

    logger.info("Computed %d monthly average prices", len(average_df))
    return average_df


# =============================================================================
# VOLATILITY
# =============================================================================

def compute_log_returns(df: pd.DataFrame, prefix: str = HUB_PREFIX) -> pd.DataFrame:
    """
    Compute hourly log returns for each settlement point of one type.

    Rows outside the prefix and rows with Price <= 0 are dropped first.
    Each settlement point is then ordered by Date and compared with its own
    previous observation, so the first row of each series has no return.
    Dropping non-positive prices before the lag means a return may span
    more than one hour.

    Returns:
        Filtered DataFrame sorted by (SettlementPoint, Date) with added
        Return and LogReturn columns
    """
    hubs = filter_settlement_type(df, prefix)
    hubs = hubs[hubs['Price'] > 0]
    hubs = hubs.sort_values(['SettlementPoint', 'Date'], kind='mergesort').reset_index(drop=True)

    previous_price = hubs.groupby('SettlementPoint')['Price'].shift(1)
    hubs['Return'] = hubs['Price'] / previous_price
    hubs['LogReturn'] = np.log(hubs['Return'])

    logger.debug(
        "Computed %d log returns across %d '%s' settlement points",
        int(hubs['LogReturn'].notna().sum()), hubs['SettlementPoint'].nunique(), prefix
    )
    return hubs


def compute_hourly_volatility(df: pd.DataFrame, prefix: str = HUB_PREFIX) -> pd.DataFrame:
    """
    Compute hourly volatility per settlement point and year.

    Volatility is the sample standard deviation (ddof=1) of the hourly log
    returns. Groups with fewer than two returns get NaN, not zero.

    Args:
        df: Cleaned price records (all settlement point types)
        prefix: Settlement point prefix to include, hubs by default

    Returns:
        DataFrame with columns [SettlementPoint, Year, HourlyVolatility]
    """
    returns = compute_log_returns(df, prefix)
    if returns.empty:
        logger.warning("No '%s' settlement points with positive prices", prefix)
        return pd.DataFrame(columns=VOLATILITY_COLUMNS)

    volatility_df = (
        returns.groupby(['Year', 'SettlementPoint'], as_index=False)['LogReturn']
               .std(ddof=1)
               .rename(columns={'LogReturn': 'HourlyVolatility'})
    )
    volatility_df = (
        volatility_df[VOLATILITY_COLUMNS]
        .sort_values(['SettlementPoint', 'Year'])
        .reset_index(drop=True)
    )

    n_undefined = int(volatility_df['HourlyVolatility'].isna().sum())
    if n_undefined:
        logger.warning(
            "%d settlement point/year groups have fewer than 2 returns; volatility is NaN",
            n_undefined
        )
    logger.info("Computed hourly volatility for %d settlement point/years", len(volatility_df))
    return volatility_df


def compute_highest_volatility_per_year(volatility_df: pd.DataFrame) -> pd.DataFrame:
    """
    Select the settlement point(s) with the highest volatility in each year.

    Every row tied at a year's maximum is returned. NaN volatilities are
    never selected.
    """
    valid = volatility_df.dropna(subset=['HourlyVolatility'])
    if valid.empty:
        return pd.DataFrame(columns=VOLATILITY_COLUMNS)

    yearly_max = valid.groupby('Year')['HourlyVolatility'].transform('max')
    highest = valid[valid['HourlyVolatility'] == yearly_max]

    return (
        highest[VOLATILITY_COLUMNS]
        .sort_values(['Year', 'SettlementPoint'])
        .reset_index(drop=True)
    )


# =============================================================================
# WIDE FORMAT
# =============================================================================

def _to_hour_columns(long_values: pd.Series) -> pd.DataFrame:
    """Unstack an 'Hour' index level into the fixed Hour1..Hour24 columns."""
    wide = long_values.unstack('Hour').reindex(columns=HOURS)
    wide.columns = HOUR_COLUMNS
    return wide.reset_index()


def format_spot_history(df: pd.DataFrame) -> pd.DataFrame:
    """
    Pivot hourly prices to one row per settlement point and day.

    The price observed at hour H of the day is stored in column
    'Hour{H+1}'. All 24 hour columns are always present; unobserved hours
    are NaN. Repeated observations of the same hour are averaged.

    Returns:
        DataFrame with columns [SettlementPoint, Date, Hour1..Hour24]
        sorted by (SettlementPoint, Date)
    """
    if df.empty:
        return pd.DataFrame(columns=SPOT_HISTORY_COLUMNS)

    keys = ['SettlementPoint', 'Year', 'Month', 'Day']
    hourly = df[keys + ['Price']].copy()
    hourly['Hour'] = df['Date'].dt.hour + 1

    n_duplicates = int(hourly.duplicated(keys + ['Hour']).sum())
    if n_duplicates:
        logger.warning("%d repeated hourly observations were averaged", n_duplicates)

    prices = hourly.groupby(keys + ['Hour'])['Price'].mean()
    wide = _to_hour_columns(prices)

    wide['Date'] = pd.to_datetime(
        pd.DataFrame({'year': wide['Year'], 'month': wide['Month'], 'day': wide['Day']})
    ).dt.date
    wide = (
        wide[SPOT_HISTORY_COLUMNS]
        .sort_values(['SettlementPoint', 'Date'])
        .reset_index(drop=True)
    )

    logger.info("Formatted %d settlement point days", len(wide))
    return wide


# =============================================================================
# SHAPE PROFILES
# =============================================================================

def compute_hourly_shape_profiles(df: pd.DataFrame) -> pd.DataFrame:
    """
    Compute normalized hourly price shapes.

    Prices are averaged per (SettlementPoint, Month, DayOfWeek, Hour) and
    each average is divided by the sum of the hourly averages of its
    (SettlementPoint, Month, DayOfWeek) bucket, so a complete bucket sums
    to 1. DayOfWeek runs from 1 (Monday) to 7 (Sunday). Buckets whose sum
    is zero are left as NaN.

    Returns:
        DataFrame with columns [SettlementPoint, Month, DayOfWeek,
        Hour1..Hour24] sorted by the first three
    """
    if df.empty:
        return pd.DataFrame(columns=SHAPE_PROFILE_COLUMNS)

    profile = df[['SettlementPoint', 'Month', 'Price']].copy()
    profile['DayOfWeek'] = df['Date'].dt.dayofweek + 1
    profile['Hour'] = df['Date'].dt.hour + 1

    hourly = (
        profile.groupby(SHAPE_PROFILE_KEYS + ['Hour'], as_index=False)['Price']
               .mean()
               .rename(columns={'Price': 'AverageHourlyPrice'})
    )

    totals = hourly.groupby(SHAPE_PROFILE_KEYS)['AverageHourlyPrice'].transform('sum')
    zero_total = totals == 0
    if zero_total.any():
        logger.warning(
            "%d hourly buckets belong to profiles whose prices sum to zero",
            int(zero_total.sum())
        )
    hourly['Share'] = hourly['AverageHourlyPrice'] / totals.mask(zero_total)

    shares = hourly.set_index(SHAPE_PROFILE_KEYS + ['Hour'])['Share']
    wide = (
        _to_hour_columns(shares)[SHAPE_PROFILE_COLUMNS]
        .sort_values(SHAPE_PROFILE_KEYS)
        .reset_index(drop=True)
    )

    logger.info("Computed %d hourly shape profiles", len(wide))
    return wide


def partition_by_settlement_point(df: pd.DataFrame) -> Dict[str, pd.DataFrame]:
    """Split df into one DataFrame per settlement point, keeping row order."""
    return {
        settlement_point: group.reset_index(drop=True)
        for settlement_point, group in df.groupby('SettlementPoint', sort=True)
    }


def settlement_points(df: pd.DataFrame) -> List[str]:
    """Sorted distinct settlement points in df."""
    return sorted(df['SettlementPoint'].dropna().unique().tolist())
