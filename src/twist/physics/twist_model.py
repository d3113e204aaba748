"""
Timeseries driver for the Tree Water Imbalance and Storage Tracker (TWIST).

The deficit recurrence is an inherently sequential scan: every timestep
consumes the deficit emitted by the previous one. ``run_sequence`` is that
scan over plain arrays; ``TwistModel`` wraps it with column mapping, input
checks and logging for tabular input.

No deficit state is kept on the model between calls. Each run seeds its
own accumulator from ``twd_initial``, so independent runs (sites,
parameter sets) can execute concurrently on one model instance.
"""
import logging
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from twist.core.config import TwistConfig, get_config
from twist.core.constants import (
    DEFAULT_TWD_INITIAL,
    OUTPUT_RWC_COLUMN,
    OUTPUT_TIME_COLUMN,
    OUTPUT_TWD_COLUMN,
)
from twist.core.exceptions import DataValidationError, ErrorContext
from twist.core.types import (
    ColumnNames,
    DeficitParameters,
    FloatOrArray,
    StepResult,
    WaterPoolParameters,
)
from twist.data.validation import check_input_domains, require_columns
from twist.physics.tree_water_deficit import run_step
from twist.physics.water_pool import attach_water_pool

logger = logging.getLogger(__name__)


def run_sequence(
    E: np.ndarray,
    theta_rel: np.ndarray,
    W: np.ndarray,
    params: DeficitParameters,
    twd_initial: float = DEFAULT_TWD_INITIAL
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Run the deficit recurrence over aligned input series.

    Args:
        E: Transpiration per timestep, in time order
        theta_rel: Relative soil water content per timestep
        W: Tree water pool size per timestep
        params: Deficit parameters
        twd_initial: Deficit before the first timestep

    Returns:
        Tuple of (TWD, RWC) arrays, same length and order as the inputs
    """
    E = np.asarray(E, dtype=np.float64)
    theta_rel = np.asarray(theta_rel, dtype=np.float64)
    W = np.asarray(W, dtype=np.float64)

    if not (E.ndim == theta_rel.ndim == W.ndim == 1):
        raise DataValidationError("Input series must be 1-D")
    n = E.shape[0]
    if not (theta_rel.shape[0] == W.shape[0] == n):
        raise DataValidationError(
            f"Input series lengths differ: E={n}, "
            f"theta_rel={theta_rel.shape[0]}, W={W.shape[0]}"
        )

    logger.debug(f"Running deficit recurrence over {n} timesteps")

    twd_out = np.empty(n, dtype=np.float64)
    rwc_out = np.empty(n, dtype=np.float64)

    twd = np.float64(twd_initial)
    for i in range(n):
        result = run_step(E[i], theta_rel[i], W[i], params, TWD_old=twd)
        twd_out[i] = result.TWD
        rwc_out[i] = result.RWC
        twd = result.TWD

    return twd_out, rwc_out


class TwistModel:
    """
    Tree water deficit and relative water content model.

    Binds immutable deficit parameters and a column mapping; every call to
    ``run`` is an independent pass over one input table.

    Usage:
        >>> model = TwistModel(DeficitParameters(F_E=0.6, F_TWD=0.3, F_theta=0.7))
        >>> output = model.run(df, twd_initial=0.0)
    """

    def __init__(
        self,
        params: DeficitParameters,
        columns: Optional[ColumnNames] = None,
        check_domains: bool = True,
        site_id: Optional[str] = None
    ):
        """
        Initialize model.

        Args:
            params: Deficit parameters
            columns: Input column mapping (defaults to ColumnNames())
            check_domains: Log warnings for out-of-domain inputs before running
            site_id: Optional site label used in logs and errors
        """
        self.params = params
        self.columns = columns or ColumnNames()
        self.check_domains = check_domains
        self.site_id = site_id
        self._setup_logging()

    def _setup_logging(self):
        """Configure model-specific logging"""
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def step(
        self,
        E: FloatOrArray,
        theta_rel: FloatOrArray,
        W: FloatOrArray,
        TWD_old: FloatOrArray = DEFAULT_TWD_INITIAL
    ) -> StepResult:
        """Run a single timestep from an explicit previous deficit"""
        return run_step(E, theta_rel, W, self.params, TWD_old=TWD_old)

    def run(
        self,
        df: pd.DataFrame,
        twd_initial: float = DEFAULT_TWD_INITIAL
    ) -> pd.DataFrame:
        """
        Run the model over a timeseries table.

        Rows are processed in their stored order. All required columns
        are checked before any row is processed.

        Args:
            df: Table with time, transpiration, theta and pool columns
            twd_initial: Deficit before the first row (0 = fully hydrated)

        Returns:
            DataFrame with columns datetime, TWD, RWC; one row per input row

        Raises:
            MissingFieldError: If any required column is absent
            DataValidationError: If a required column is not numeric
        """
        cols = self.columns
        require_columns(df, cols.required(), site_id=self.site_id)

        self.logger.info(
            f"Running TWIST for {len(df)} timesteps "
            f"(F_E={self.params.F_E}, F_TWD={self.params.F_TWD}, "
            f"F_theta={self.params.F_theta}, TWD_initial={twd_initial})"
        )

        if self.check_domains:
            check_input_domains(df, cols)

        try:
            E = df[cols.transpiration].to_numpy(dtype=np.float64, na_value=np.nan)
            theta_rel = df[cols.theta].to_numpy(dtype=np.float64, na_value=np.nan)
            W = df[cols.pool].to_numpy(dtype=np.float64, na_value=np.nan)
        except (ValueError, TypeError) as e:
            self.logger.error(f"Non-numeric model input: {e}")
            raise DataValidationError(
                f"Model inputs must be numeric: {e}",
                ErrorContext(site_id=self.site_id, component="input", operation="run"),
            ) from e

        twd, rwc = run_sequence(E, theta_rel, W, self.params, twd_initial)

        output = pd.DataFrame({
            OUTPUT_TIME_COLUMN: df[cols.time].to_numpy(),
            OUTPUT_TWD_COLUMN: twd,
            OUTPUT_RWC_COLUMN: rwc,
        })

        if len(output):
            self.logger.info(f"Run complete: {len(output)} timesteps, final TWD={twd[-1]:.4g}")
        else:
            self.logger.info("Run complete: empty input, no timesteps")

        return output

    def run_with_pool(
        self,
        df: pd.DataFrame,
        pool_params: WaterPoolParameters,
        twd_initial: float = DEFAULT_TWD_INITIAL
    ) -> pd.DataFrame:
        """Compute the pool column from wood biomass, then run the model"""
        cols = self.columns
        required = [c for c in cols.required() if c != cols.pool] + [cols.wood_mass]
        require_columns(df, required, site_id=self.site_id)

        with_pool = attach_water_pool(df, pool_params, self.columns)
        return self.run(with_pool, twd_initial=twd_initial)


def create_twist_model(config: Optional[TwistConfig] = None) -> TwistModel:
    """
    Factory function to create a TWIST model from configuration.

    Args:
        config: Configuration (defaults to the global configuration)

    Returns:
        Configured TwistModel instance
    """
    config = config or get_config()
    return TwistModel(
        params=config.deficit_parameters(),
        columns=config.column_names(),
        check_domains=config.run.check_input_domains,
        site_id=config.site_id,
    )
