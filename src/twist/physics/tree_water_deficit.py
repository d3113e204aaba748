"""
Tree water deficit (TWD) recurrence.

Implements the per-timestep update of the Tree Water Imbalance and Storage
Tracker:

    f_soil  = min(theta_rel / F_theta, 1)                     (soil limitation)
    U       = (F_E * E + F_TWD * TWD_old) * f_soil            (water uptake)
    TWD_new = TWD_old + E - U                                  (deficit update)

All functions are pure and broadcast over numpy arrays, so the same code
serves a single scalar step and a vectorized evaluation over many trees or
parameter sets at one timestep.

Inputs are not clamped: a negative ``theta_rel`` yields a negative soil
factor, and the deficit may become negative (over-recharged) or grow
without bound. Division by a zero ``F_theta`` produces inf/NaN through
numpy rather than raising.
"""
import logging

import numpy as np

from twist.core.constants import MAX_SOIL_LIMITATION
from twist.core.types import DeficitParameters, FloatOrArray, StepResult, as_float64
from twist.physics.water_pool import compute_rwc

logger = logging.getLogger(__name__)


def soil_limitation(theta_rel: FloatOrArray, F_theta: float) -> FloatOrArray:
    """
    Soil water limitation factor for root water uptake.

    Args:
        theta_rel: Relative soil water content (1 at field capacity, 0 at
            wilting point)
        F_theta: Threshold below which uptake is downregulated

    Returns:
        ``min(theta_rel / F_theta, 1)``; capped above only. A non-finite
        ratio (zero ``F_theta``) is returned uncapped so it propagates.
    """
    ratio = np.divide(as_float64(theta_rel), as_float64(F_theta))
    capped = np.where(np.isfinite(ratio), np.minimum(ratio, MAX_SOIL_LIMITATION), ratio)
    return as_float64(capped)


def compute_uptake(
    E: FloatOrArray,
    TWD_old: FloatOrArray,
    theta_rel: FloatOrArray,
    params: DeficitParameters
) -> FloatOrArray:
    """
    Root water uptake for one timestep.

    Both the transpiration-driven and the deficit-driven share are scaled
    by the same soil limitation factor, so dry soil suppresses concurrent
    supply and refilling alike.

    Args:
        E: Transpirational water loss during the timestep
        TWD_old: Tree water deficit at the previous timestep
        theta_rel: Relative soil water content
        params: Deficit parameters

    Returns:
        Uptake ``U`` in the unit of ``E``
    """
    f_soil = soil_limitation(theta_rel, params.F_theta)
    demand = params.F_E * as_float64(E) + params.F_TWD * as_float64(TWD_old)
    return as_float64(demand * f_soil)


def update_twd(
    E: FloatOrArray,
    TWD_old: FloatOrArray,
    theta_rel: FloatOrArray,
    params: DeficitParameters
) -> FloatOrArray:
    """
    Advance the tree water deficit by one timestep.

    ``TWD_new = TWD_old + E - U``; no floor or ceiling is applied here.
    """
    uptake = compute_uptake(E, TWD_old, theta_rel, params)
    return as_float64(as_float64(TWD_old) + as_float64(E) - uptake)


def run_step(
    E: FloatOrArray,
    theta_rel: FloatOrArray,
    W: FloatOrArray,
    params: DeficitParameters,
    TWD_old: FloatOrArray = 0.0
) -> StepResult:
    """
    Deficit update followed by relative water content for one timestep.

    Args:
        E: Transpirational water loss
        theta_rel: Relative soil water content
        W: Tree water pool size (same unit as E)
        params: Deficit parameters
        TWD_old: Deficit carried in from the previous timestep

    Returns:
        StepResult with the new TWD and the RWC derived from it
    """
    twd_new = update_twd(E, TWD_old, theta_rel, params)
    rwc = compute_rwc(W, twd_new)
    logger.debug(f"Step: E={E}, theta_rel={theta_rel}, TWD {TWD_old} -> {twd_new}, RWC={rwc}")
    return StepResult(TWD=twd_new, RWC=rwc)
