"""
Reading raw price files and writing analysis tables to disk.
"""

import logging
from pathlib import Path
from typing import Dict, List, Union

import pandas as pd

from .exceptions import DataSourceError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_files(directory: PathLike, pattern: str = '*.csv') -> pd.DataFrame:
    """
    Read every file in a directory into one DataFrame.

    Args:
        directory: Directory to grab files from
        pattern: Glob pattern selecting the files

    Returns:
        Concatenated records of all matching files, in file name order

    Raises:
        DataSourceError: If the directory does not exist or has no matching files
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise DataSourceError(f"Data directory not found: {directory}")

    all_files = sorted(p for p in directory.glob(pattern) if p.is_file())
    if not all_files:
        raise DataSourceError(f"No files matching '{pattern}' in {directory}")

    frames = []
    for path in all_files:
        frame = pd.read_csv(path)
        logger.debug("Read %d rows from %s", len(frame), path.name)
        frames.append(frame)

    df = pd.concat(frames, ignore_index=True)
    logger.info("Loaded %d records from %d files in %s", len(df), len(all_files), directory)
    return df


def write_table(df: pd.DataFrame, path: PathLike) -> Path:
    """Write df as CSV without the index, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    logger.info("Saved: %s (%d rows)", path, len(df))
    return path


def write_partitions(
    partitions: Dict[str, pd.DataFrame],
    directory: PathLike,
    template: str
) -> List[Path]:
    """
    Write one CSV per settlement point.

    Args:
        partitions: Mapping of settlement point to its rows
        directory: Output directory
        template: File name template with a {settlement_point} field

    Returns:
        Paths of the written files
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    written = []
    for settlement_point, frame in partitions.items():
        path = directory / template.format(settlement_point=settlement_point)
        frame.to_csv(path, index=False)
        written.append(path)

    logger.info("Saved %d files to %s", len(written), directory)
    return written
