"""
Type definitions and type aliases for the TWIST system.
Provides strong typing throughout the codebase.
"""
from dataclasses import dataclass
from typing import NamedTuple, Tuple, Union

import numpy as np
from typing_extensions import TypeAlias

from twist.core.constants import (
    DEFAULT_COLUMN_NAMES,
    DEFAULT_DEFICIT_PARAMETERS,
    DEFAULT_WATER_POOL_PARAMETERS,
)


# Type aliases for clarity
# All water quantities share the unit of transpiration (e.g. l m⁻² h⁻¹)
TreeWaterDeficit: TypeAlias = float
RelativeWaterContent: TypeAlias = float

# Leaf functions accept scalars or arrays and broadcast element-wise
FloatOrArray: TypeAlias = Union[float, np.ndarray]


def as_float64(x) -> FloatOrArray:
    """Coerce to numpy float64 so division by zero follows IEEE rules"""
    arr = np.asarray(x, dtype=np.float64)
    return arr[()] if arr.ndim == 0 else arr


@dataclass(frozen=True)
class DeficitParameters:
    """
    Parameters of the tree water deficit recurrence.

    Ranges are documented, not enforced. A zero ``F_theta`` divides by zero
    and yields non-finite output instead of an error.

    Attributes:
        F_E: Fraction of transpiration directly supplied by uptake, [0, 1]
        F_TWD: Fraction of the standing deficit refilled per timestep, [0, 1]
        F_theta: Relative soil water threshold below which uptake declines, > 0
    """
    F_E: float = DEFAULT_DEFICIT_PARAMETERS["F_E"]
    F_TWD: float = DEFAULT_DEFICIT_PARAMETERS["F_TWD"]
    F_theta: float = DEFAULT_DEFICIT_PARAMETERS["F_theta"]

    def __post_init__(self):
        # Frozen dataclass, so coerce through object.__setattr__
        for name in ("F_E", "F_TWD", "F_theta"):
            object.__setattr__(self, name, float(getattr(self, name)))


@dataclass(frozen=True)
class WaterPoolParameters:
    """
    Wood densities used to size the tree water pool.

    Attributes:
        rho_sat: Fully saturated wood density (kg dm⁻³)
        rho_dry: Oven-dry wood density (kg dm⁻³), must be non-zero

    ``rho_sat <= rho_dry`` gives a non-positive pool; it is accepted as is.
    """
    rho_sat: float = DEFAULT_WATER_POOL_PARAMETERS["rho_sat"]
    rho_dry: float = DEFAULT_WATER_POOL_PARAMETERS["rho_dry"]

    def __post_init__(self):
        for name in ("rho_sat", "rho_dry"):
            object.__setattr__(self, name, float(getattr(self, name)))


@dataclass(frozen=True)
class ColumnNames:
    """Mapping of the model's logical inputs to table column names"""
    time: str = DEFAULT_COLUMN_NAMES["time"]
    transpiration: str = DEFAULT_COLUMN_NAMES["transpiration"]
    theta: str = DEFAULT_COLUMN_NAMES["theta"]
    wood_mass: str = DEFAULT_COLUMN_NAMES["wood_mass"]
    pool: str = DEFAULT_COLUMN_NAMES["pool"]

    def required(self) -> Tuple[str, str, str, str]:
        """Columns that must be present to run the timeseries model"""
        return (self.time, self.transpiration, self.theta, self.pool)


class StepResult(NamedTuple):
    """Outcome of a single model timestep"""
    TWD: TreeWaterDeficit
    RWC: RelativeWaterContent
