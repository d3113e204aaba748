"""Read model input tables and write model output tables."""

import logging
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from twist.core.constants import TABLE_SUFFIXES
from twist.core.exceptions import DataError, ErrorContext
from twist.core.types import ColumnNames

logger = logging.getLogger(__name__)


def _check_suffix(path: Path, operation: str) -> str:
    suffix = path.suffix.lower()
    if suffix not in TABLE_SUFFIXES:
        raise DataError(
            f"Unsupported table format '{suffix}' for {path}; expected one of {TABLE_SUFFIXES}",
            ErrorContext(component="io", operation=operation),
        )
    return suffix


def read_timeseries(
    path: Union[str, Path],
    columns: Optional[ColumnNames] = None,
    parse_time: bool = True
) -> pd.DataFrame:
    """
    Load an input timeseries table.

    Row order is kept as stored; the model treats it as time order and
    does not sort.

    Args:
        path: CSV or Parquet file
        columns: Column mapping, used to find the time column
        parse_time: Convert the time column to datetimes when present

    Returns:
        Input DataFrame
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    suffix = _check_suffix(path, "read_timeseries")
    if suffix == ".csv":
        df = pd.read_csv(path)
    else:
        df = pd.read_parquet(path)

    columns = columns or ColumnNames()
    if parse_time and columns.time in df.columns:
        df[columns.time] = pd.to_datetime(df[columns.time])

    logger.info(f"Read {len(df)} rows from {path}")
    return df


def write_results(df: pd.DataFrame, path: Union[str, Path]) -> Path:
    """Write a results table as CSV or Parquet, chosen by file suffix"""
    path = Path(path)
    suffix = _check_suffix(path, "write_results")
    path.parent.mkdir(parents=True, exist_ok=True)

    if suffix == ".csv":
        df.to_csv(path, index=False)
    else:
        df.to_parquet(path, index=False)

    logger.info(f"Wrote {len(df)} rows to {path}")
    return path
