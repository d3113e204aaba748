"""Input table checks for the TWIST model.

Two kinds of checks live here:

- ``require_columns`` is structural and strict. It runs before any
  computation and fails with every missing column name at once.
- ``check_input_domains`` is advisory. It logs rows whose values fall
  outside their physical domain but never modifies or rejects them, since
  the model propagates such values arithmetically.
"""

import logging
from typing import Dict, Iterable, Optional

import numpy as np
import pandas as pd

from twist.core.constants import THETA_REL_RANGE
from twist.core.exceptions import ErrorContext, MissingFieldError
from twist.core.types import ColumnNames

logger = logging.getLogger(__name__)


def require_columns(
    df: pd.DataFrame,
    required: Iterable[str],
    site_id: Optional[str] = None
) -> None:
    """
    Ensure all required columns are present.

    Args:
        df: Input table
        required: Column names that must exist
        site_id: Optional site label attached to the error

    Raises:
        MissingFieldError: Listing every absent column, in the given order
    """
    missing = [col for col in required if col not in df.columns]
    if missing:
        logger.error(f"Input table is missing required columns: {missing}")
        raise MissingFieldError(
            missing,
            ErrorContext(site_id=site_id, component="input", operation="require_columns"),
        )


def check_input_domains(
    df: pd.DataFrame,
    columns: Optional[ColumnNames] = None
) -> Dict[str, int]:
    """
    Count and log out-of-domain input values.

    Checked, when the column is present:
        - theta_rel outside [0, 1]
        - negative transpiration
        - non-positive or non-finite pool size (RWC is then undefined)
        - non-finite transpiration or theta_rel

    Args:
        df: Input table
        columns: Column mapping (defaults to ColumnNames())

    Returns:
        Mapping of check name to number of offending rows
    """
    columns = columns or ColumnNames()
    counts: Dict[str, int] = {}

    if columns.theta in df.columns:
        theta = pd.to_numeric(df[columns.theta], errors="coerce").to_numpy(dtype=float)
        low, high = THETA_REL_RANGE
        counts["theta_out_of_range"] = int(np.sum((theta < low) | (theta > high)))
        counts["theta_non_finite"] = int(np.sum(~np.isfinite(theta)))

    if columns.transpiration in df.columns:
        E = pd.to_numeric(df[columns.transpiration], errors="coerce").to_numpy(dtype=float)
        counts["transpiration_negative"] = int(np.sum(E < 0))
        counts["transpiration_non_finite"] = int(np.sum(~np.isfinite(E)))

    if columns.pool in df.columns:
        W = pd.to_numeric(df[columns.pool], errors="coerce").to_numpy(dtype=float)
        counts["pool_non_positive"] = int(np.sum(W <= 0))
        counts["pool_non_finite"] = int(np.sum(~np.isfinite(W)))

    for check, n in counts.items():
        if n > 0:
            logger.warning(f"{check}: {n}/{len(df)} rows")

    return counts
