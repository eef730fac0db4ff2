# Core calculation engine
from .beam_design import design_single_beam, design_double_beam
from .footing import (
    calculate_all_footings, calculate_footing_dimensions,
    process_footings, select_critical_footings, utilization_band
)
from .footing_reinforcement import (
    DemandExceedsCapacityError, calculate_rn, design_all_footings,
    design_footing_reinforcement, minimum_steel_ratio, required_steel_ratio
)
