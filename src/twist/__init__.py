"""Tree Water Imbalance and Storage Tracker (TWIST)."""
from twist.core.types import ColumnNames, DeficitParameters, WaterPoolParameters, StepResult
from twist.core.exceptions import TwistError, MissingFieldError
from twist.physics.twist_model import TwistModel, create_twist_model, run_sequence

__version__ = "0.1.0"

__all__ = [
    "ColumnNames",
    "DeficitParameters",
    "WaterPoolParameters",
    "StepResult",
    "TwistError",
    "MissingFieldError",
    "TwistModel",
    "create_twist_model",
    "run_sequence",
]
