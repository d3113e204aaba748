"""
Default parameter values, column names and system-wide constants.
"""
from typing import Dict, Final, Tuple

# Deficit parameters for the Štítná Fagus sylvatica setup
DEFAULT_DEFICIT_PARAMETERS: Final[Dict[str, float]] = {
    "F_E": 0.6,      # Fraction of transpiration directly supplied by uptake
    "F_TWD": 0.3,    # Fraction of current TWD refilled per timestep
    "F_theta": 0.7,  # Soil moisture threshold scaling uptake downregulation
}

# Wood densities for the same setup
DEFAULT_WATER_POOL_PARAMETERS: Final[Dict[str, float]] = {
    "rho_sat": 1.07,  # kg dm⁻³
    "rho_dry": 0.58,  # kg dm⁻³
}

# Full hydration at simulation start
DEFAULT_TWD_INITIAL: Final[float] = 0.0

# Upper bound of the soil limitation factor
MAX_SOIL_LIMITATION: Final[float] = 1.0

# Lower bound of relative water content (no upper bound, see compute_rwc)
MIN_RWC: Final[float] = 0.0

# Input column names
DEFAULT_COLUMN_NAMES: Final[Dict[str, str]] = {
    "time": "datetime",
    "transpiration": "transpiration",
    "theta": "theta_rel",
    "wood_mass": "m_wood_dry",
    "pool": "W",
}

# Output column names
OUTPUT_TIME_COLUMN: Final[str] = "datetime"
OUTPUT_TWD_COLUMN: Final[str] = "TWD"
OUTPUT_RWC_COLUMN: Final[str] = "RWC"

# Intended domain of relative soil water content
THETA_REL_RANGE: Final[Tuple[float, float]] = (0.0, 1.0)

# Documented range of the uptake fractions F_E and F_TWD
UPTAKE_FRACTION_RANGE: Final[Tuple[float, float]] = (0.0, 1.0)

# Supported table formats
TABLE_SUFFIXES: Final[Tuple[str, ...]] = (".csv", ".parquet")
