"""
Charts of monthly average prices and hourly volatility.
"""

import logging
from pathlib import Path
from typing import Union

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import matplotlib.dates as mdates

from .data_utils import HUB_PREFIX, filter_settlement_type

logger = logging.getLogger(__name__)

# Style
plt.style.use('seaborn-v0_8-whitegrid')
COLORS = ['#2563eb', '#10b981', '#f59e0b', '#ef4444', '#8b5cf6', '#6b7280', '#0ea5e9']

SETTLEMENT_TYPE_LABELS = {
    'HB': 'Settlement Hubs',
    'LZ': 'Load Zones',
}


def settlement_type_label(settlement_prefix: str) -> str:
    return SETTLEMENT_TYPE_LABELS.get(settlement_prefix, f'{settlement_prefix} Settlement Points')


def plot_avg_monthly(average_df: pd.DataFrame, settlement_prefix: str) -> plt.Figure:
    """
    Plot the average monthly price over time, one line per settlement point.

    Args:
        average_df: Output of compute_average_price
        settlement_prefix: 'HB' for hubs or 'LZ' for load zones

    Returns:
        Matplotlib figure
    """
    df = filter_settlement_type(average_df, settlement_prefix)
    if df.empty:
        raise ValueError(f"No settlement points with prefix '{settlement_prefix}' to plot")

    df['Date'] = pd.to_datetime(
        pd.DataFrame({'year': df['Year'], 'month': df['Month'], 'day': 1})
    )
    settlement_type = settlement_type_label(settlement_prefix)

    fig, ax = plt.subplots(figsize=(14, 7))

    for i, (settlement_point, sp_df) in enumerate(df.groupby('SettlementPoint')):
        sp_df = sp_df.sort_values('Date')
        ax.plot(sp_df['Date'], sp_df['AveragePrice'],
                label=settlement_point, color=COLORS[i % len(COLORS)], linewidth=1.5)

    ax.set_xlabel('Date', fontsize=12)
    ax.set_ylabel('Average Price (USD)', fontsize=12)
    ax.set_title(f'Average Monthly Price for {settlement_type}', fontsize=14)
    ax.legend(title=settlement_type, loc='upper left')

    # Ticks every 6 months from the first month
    ax.xaxis.set_major_locator(mdates.MonthLocator(interval=6, bymonthday=1))
    ax.xaxis.set_major_formatter(mdates.DateFormatter('%Y-%m'))
    ax.yaxis.set_major_locator(plt.MaxNLocator(5))
    plt.setp(ax.get_xticklabels(), rotation=45)

    fig.tight_layout()
    return fig


def plot_hourly_volatility(volatility_df: pd.DataFrame) -> plt.Figure:
    """Grouped bar chart of hourly volatility per year for each hub."""
    df = volatility_df.dropna(subset=['HourlyVolatility'])
    if df.empty:
        raise ValueError("No defined volatility values to plot")

    table = df.pivot(index='Year', columns='SettlementPoint', values='HourlyVolatility')
    years = table.index.tolist()
    x = np.arange(len(years))
    width = 0.8 / max(len(table.columns), 1)

    fig, ax = plt.subplots(figsize=(12, 6))

    for i, settlement_point in enumerate(table.columns):
        ax.bar(x + i * width, table[settlement_point].values, width,
               label=settlement_point, color=COLORS[i % len(COLORS)], alpha=0.85)

    ax.set_xticks(x + width * (len(table.columns) - 1) / 2)
    ax.set_xticklabels([str(y) for y in years])
    ax.set_xlabel('Year', fontsize=12)
    ax.set_ylabel('Hourly Volatility (std of log returns)', fontsize=12)
    ax.set_title(f'Hourly Volatility by Year for {settlement_type_label(HUB_PREFIX)}', fontsize=14)
    ax.legend(loc='upper left')

    fig.tight_layout()
    return fig


def save_figure(fig: plt.Figure, path: Union[str, Path], dpi: int = 150) -> Path:
    """Save fig as an image and close it."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches='tight')
    plt.close(fig)
    logger.info("Saved: %s", path)
    return path
