"""Physics modules for tree water deficit and storage."""
from twist.physics.tree_water_deficit import (
    soil_limitation,
    compute_uptake,
    update_twd,
    run_step,
)
from twist.physics.water_pool import (
    compute_water_pool,
    compute_rwc,
    attach_water_pool,
)
from twist.physics.twist_model import (
    TwistModel,
    create_twist_model,
    run_sequence,
)

__all__ = [
    "soil_limitation",
    "compute_uptake",
    "update_twd",
    "run_step",
    # Water pool
    "compute_water_pool",
    "compute_rwc",
    "attach_water_pool",
    # Timeseries driver
    "TwistModel",
    "create_twist_model",
    "run_sequence",
]
