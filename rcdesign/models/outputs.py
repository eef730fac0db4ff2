"""
Output data models for beam design results.

Every intermediate quantity used by a formula is exposed as a field so that
reports can show the substitution without recomputing anything.
"""

from pydantic import BaseModel, ConfigDict
from typing import List
from enum import Enum


class DesignStatus(str, Enum):
    """Status of a design check."""
    PASS = "pass"
    FAIL = "fail"
    WARNING = "warning"


class CalculationStep(BaseModel):
    """Single calculation step for transparency."""
    model_config = ConfigDict(frozen=True)

    step_number: int
    description: str
    formula: str
    substitution: str
    result: float
    unit: str


class SectionProperties(BaseModel):
    """Derived properties of a singly reinforced section."""
    model_config = ConfigDict(frozen=True)

    effective_depth: float   # d (cm)
    total_steel_area: float  # As (cm²)
    steel_ratio: float       # rho
    centroid_depth: float    # depth to steel centroid from compression face (cm)


class DoubleSectionProperties(BaseModel):
    """Derived properties of a doubly reinforced section."""
    model_config = ConfigDict(frozen=True)

    effective_depth: float          # d (cm)
    effective_depth_prime: float    # d' (cm)
    tension_steel_area: float       # As (cm²)
    compression_steel_area: float   # As' (cm²)
    tension_steel_ratio: float
    compression_steel_ratio: float


class WSDResults(BaseModel):
    """Working stress design of a singly reinforced section."""
    model_config = ConfigDict(frozen=True)

    allowable_concrete_stress: float  # fc (kg/cm²)
    allowable_steel_stress: float     # fs (kg/cm²)
    modular_ratio: float              # n = Es/Ec
    rho_n: float                      # rho * n
    k: float
    j: float
    neutral_axis_depth: float         # kd (cm)
    lever_arm: float                  # jd (cm)
    moment_concrete: float            # Mc (kg-m)
    moment_steel: float               # Ms (kg-m)
    moment_capacity: float            # M (kg-m)
    governing: str                    # "concrete" or "steel"
    allowable_shear_stress: float     # vc (kg/cm²)
    concrete_shear_capacity: float    # Vc (kg)
    stirrup_area: float               # Av (cm²)
    stirrup_shear_capacity: float     # Vs (kg)
    shear_capacity: float             # V (kg)

    steps: List[CalculationStep]


class SDMResults(BaseModel):
    """Strength design of a singly reinforced section."""
    model_config = ConfigDict(frozen=True)

    beta1: float
    balanced_ratio: float             # rho_b
    max_ratio: float                  # rho_max
    steel_ratio: float                # rho
    is_under_reinforced: bool
    compression_block_depth: float    # a (cm)
    nominal_moment: float             # Mn (kg-m)
    design_moment: float              # phi Mn (kg-m)
    concrete_shear_capacity: float    # Vc (kg)
    stirrup_area: float               # Av (cm²)
    steel_shear_capacity: float       # Vs (kg)
    nominal_shear: float              # Vn (kg)
    design_shear: float               # phi Vn (kg)

    steps: List[CalculationStep]


class DoubleWSDResults(BaseModel):
    """Working stress design of a doubly reinforced section."""
    model_config = ConfigDict(frozen=True)

    allowable_concrete_stress: float
    allowable_steel_stress: float
    modular_ratio: float
    transformed_ratio: float          # n' = 2n - 1
    neutral_axis_depth: float         # kd (cm)
    compression_steel_stress: float   # fs' (kg/cm²)
    lever_arm: float                  # d - kd/3 (cm)
    moment_concrete: float            # kg-m
    moment_compression_steel: float   # kg-m
    moment_capacity: float            # kg-m
    concrete_shear_capacity: float
    stirrup_shear_capacity: float
    shear_capacity: float

    steps: List[CalculationStep]


class DoubleSDMResults(BaseModel):
    """Strength design of a doubly reinforced section."""
    model_config = ConfigDict(frozen=True)

    beta1: float
    balanced_ratio: float
    max_ratio: float
    net_tension_ratio: float          # (As - As') / (b d)
    is_under_reinforced: bool
    assumed_block_depth: float        # a assuming fs' = fy (cm)
    compression_steel_strain: float   # eps_s' at the final neutral axis
    yield_strain: float               # eps_y = fy / Es
    compression_steel_yields: bool
    converged: bool
    iterations: int
    neutral_axis_depth: float         # c (cm)
    compression_block_depth: float    # a (cm)
    compression_steel_stress: float   # fs' (kg/cm²)
    nominal_moment: float             # Mn (kg-m)
    design_moment: float              # phi Mn (kg-m)
    moment_from_comp_steel: float     # As' fs' (d - d') (kg-m)
    concrete_shear_capacity: float
    steel_shear_capacity: float
    nominal_shear: float
    design_shear: float

    steps: List[CalculationStep]


class SingleBeamResults(BaseModel):
    """Both design methods for one singly reinforced input snapshot."""
    model_config = ConfigDict(frozen=True)

    section: SectionProperties
    wsd: WSDResults
    sdm: SDMResults

    @property
    def status(self) -> DesignStatus:
        return DesignStatus.PASS if self.sdm.is_under_reinforced else DesignStatus.WARNING


class DoubleBeamResults(BaseModel):
    """Both design methods for one doubly reinforced input snapshot."""
    model_config = ConfigDict(frozen=True)

    section: DoubleSectionProperties
    wsd: DoubleWSDResults
    sdm: DoubleSDMResults
    notes: List[str] = []

    @property
    def status(self) -> DesignStatus:
        return DesignStatus.PASS if self.sdm.is_under_reinforced else DesignStatus.WARNING
