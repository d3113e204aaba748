"""
Run diagnostics for TWIST model output.

Summarizes a TWD/RWC output table so non-finite values from degenerate
inputs, over-recharged states (RWC > 1) and fully depleted pools (RWC == 0)
are easy to spot without plotting.
"""
import logging
from dataclasses import asdict, dataclass
from typing import Dict

import numpy as np
import pandas as pd

from twist.core.constants import OUTPUT_RWC_COLUMN, OUTPUT_TWD_COLUMN
from twist.data.validation import require_columns

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunDiagnostics:
    """Summary statistics of one model run"""
    n_steps: int
    twd_min: float
    twd_max: float
    twd_final: float
    rwc_min: float
    rwc_max: float
    n_non_finite: int
    n_over_recharged: int  # RWC > 1
    n_depleted: int  # RWC == 0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def _finite_stat(values: np.ndarray, func) -> float:
    finite = values[np.isfinite(values)]
    if finite.size == 0:
        return float("nan")
    return float(func(finite))


def summarize_run(output: pd.DataFrame) -> RunDiagnostics:
    """
    Summarize a model output table.

    Min/max statistics ignore non-finite values; those are counted
    separately in ``n_non_finite`` (rows where TWD or RWC is not finite).

    Args:
        output: Table with TWD and RWC columns, in time order

    Returns:
        RunDiagnostics
    """
    require_columns(output, [OUTPUT_TWD_COLUMN, OUTPUT_RWC_COLUMN])

    twd = output[OUTPUT_TWD_COLUMN].to_numpy(dtype=float)
    rwc = output[OUTPUT_RWC_COLUMN].to_numpy(dtype=float)
    non_finite = ~(np.isfinite(twd) & np.isfinite(rwc))

    diagnostics = RunDiagnostics(
        n_steps=int(len(output)),
        twd_min=_finite_stat(twd, np.min),
        twd_max=_finite_stat(twd, np.max),
        twd_final=float(twd[-1]) if twd.size else float("nan"),
        rwc_min=_finite_stat(rwc, np.min),
        rwc_max=_finite_stat(rwc, np.max),
        n_non_finite=int(np.sum(non_finite)),
        n_over_recharged=int(np.sum(np.isfinite(rwc) & (rwc > 1.0))),
        n_depleted=int(np.sum(rwc == 0.0)),
    )

    if diagnostics.n_non_finite:
        logger.warning(
            f"{diagnostics.n_non_finite}/{diagnostics.n_steps} steps produced "
            "non-finite TWD or RWC; check F_theta, rho_dry and W for zeros"
        )
    return diagnostics
