"""
Tree water pool size and relative water content.

The pool is the water a tree can hold in its wood, estimated from oven-dry
biomass and the ratio of saturated to dry wood density:

    W   = (rho_sat / rho_dry - 1) * m_wood_dry
    RWC = max(0, (W - TWD) / W)

RWC is floored at zero but deliberately not capped at one: a negative
deficit (over-recharge) yields RWC > 1.
"""
import logging
from typing import Optional

import numpy as np
import pandas as pd

from twist.core.constants import MIN_RWC
from twist.core.exceptions import DataValidationError, ErrorContext
from twist.core.types import ColumnNames, FloatOrArray, WaterPoolParameters, as_float64
from twist.data.validation import require_columns

logger = logging.getLogger(__name__)


def compute_water_pool(
    m_wood_dry: FloatOrArray,
    params: WaterPoolParameters
) -> FloatOrArray:
    """
    Estimate tree water pool size from wood biomass.

    Args:
        m_wood_dry: Oven-dry wood biomass contributing to water storage
            (e.g. kg per m² ground); scalar or per-timestep array
        params: Saturated and dry wood densities

    Returns:
        Pool size ``W`` in the water unit implied by the biomass unit
        (kg of wood -> litres of water). A zero ``rho_dry`` gives inf/NaN.
    """
    ratio = np.divide(as_float64(params.rho_sat), as_float64(params.rho_dry))
    return as_float64((ratio - 1.0) * as_float64(m_wood_dry))


def compute_rwc(W: FloatOrArray, TWD: FloatOrArray) -> FloatOrArray:
    """
    Relative water content of the tree water pool.

    Args:
        W: Tree water pool size
        TWD: Tree water deficit (same unit as W)

    Returns:
        ``max(0, (W - TWD) / W)``. Non-finite fractions from ``W == 0`` are
        returned unclamped so the degeneracy stays visible downstream.
    """
    W = as_float64(W)
    fraction = np.divide(W - as_float64(TWD), W)
    rwc = np.where(np.isfinite(fraction), np.maximum(MIN_RWC, fraction), fraction)
    return as_float64(rwc)


def attach_water_pool(
    df: pd.DataFrame,
    params: WaterPoolParameters,
    columns: Optional[ColumnNames] = None
) -> pd.DataFrame:
    """
    Compute the pool size for every row and store it in the pool column.

    Args:
        df: Input table with the wood biomass column
        params: Wood densities
        columns: Column mapping (defaults to ColumnNames())

    Returns:
        Copy of ``df`` with ``columns.pool`` set from ``columns.wood_mass``

    Raises:
        MissingFieldError: If the wood biomass column is absent
        DataValidationError: If the wood biomass column is not numeric
    """
    columns = columns or ColumnNames()
    require_columns(df, [columns.wood_mass])

    result = df.copy()
    if columns.pool in result.columns:
        logger.info(f"Overwriting existing pool column '{columns.pool}'")

    try:
        m_wood_dry = result[columns.wood_mass].to_numpy(dtype=np.float64, na_value=np.nan)
    except (ValueError, TypeError) as e:
        logger.error(f"Non-numeric wood biomass: {e}")
        raise DataValidationError(
            f"Wood biomass column '{columns.wood_mass}' must be numeric: {e}",
            ErrorContext(component="input", operation="attach_water_pool"),
        ) from e

    result[columns.pool] = compute_water_pool(m_wood_dry, params)
    logger.debug(
        f"Water pool computed for {len(result)} rows "
        f"(rho_sat={params.rho_sat}, rho_dry={params.rho_dry})"
    )
    return result
