"""
Data models for isolated square footing design.

Each stage of the footing pipeline strictly extends the previous one:
``ProcessedFooting`` -> ``CalculatedFooting`` -> ``CriticalFooting``.
Plan dimensions are in m, loads in Tonf, bar size and cover in mm.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from enum import Enum

from .outputs import CalculationStep, DesignStatus


class UtilizationBand(str, Enum):
    """Soil bearing utilization band (reporting only)."""
    OK = "ok"              # <= 85 %
    CAUTION = "caution"    # 85 - 100 %
    OVERLOAD = "overload"  # > 100 %


class JointReaction(BaseModel):
    """Vertical support reaction of one joint under one load case."""
    model_config = ConfigDict(frozen=True)

    unique_name: str
    output_case: str
    fz: float  # Tonf


class PointLocation(BaseModel):
    """Plan location of a support joint."""
    model_config = ConfigDict(frozen=True)

    unique_name: str
    x: float  # m
    y: float  # m


class ProcessedFooting(BaseModel):
    """Footing loads merged with its location."""
    model_config = ConfigDict(frozen=True)

    unique_name: str
    x: float = 0.0
    y: float = 0.0
    dl_sdl: float  # DL + SDL (Tonf)
    ll: float      # LL (Tonf)
    total_load: float  # DL + SDL + LL (Tonf)


class CalculatedFooting(ProcessedFooting):
    """Footing with its plan size."""
    required_area: float      # m²
    dimension: float          # B = L, rounded up to 0.2 m
    utilization_ratio: float  # %


class ReinforcementInputs(BaseModel):
    """Material and detailing inputs for footing reinforcement."""
    model_config = ConfigDict(frozen=True)

    fc: float = Field(default=240, gt=0, description="Concrete strength f'c in kg/cm²")
    fy: float = Field(default=4000, gt=0, description="Steel yield strength in kg/cm²")
    bar_size: float = Field(default=16, gt=0, description="Main bar diameter in mm")
    cover: float = Field(default=75, ge=0, description="Clear cover in mm")
    column_width: float = Field(default=0.4, gt=0, description="Column dimension c1 in m")
    column_depth: float = Field(default=0.4, gt=0, description="Column dimension c2 in m")


class CriticalFooting(CalculatedFooting):
    """Representative footing of a size group with its reinforcement design."""
    factored_load: float             # Pu (Tonf)
    soil_pressure: float             # qu (Tonf/m²)
    footing_thickness: float         # h (m)
    thickness_converged: Optional[bool] = None  # None when thickness was given
    effective_depth: float           # d (m)

    moment_x: float                  # Tonf-m
    moment_y: float
    rn_x: float                      # Rn (kg/cm²)
    rn_y: float
    rho_x: Optional[float] = None    # None when over capacity
    rho_y: Optional[float] = None
    rho_min: float
    as_req_x: Optional[float] = None  # cm², None when over capacity
    as_req_y: Optional[float] = None
    as_min_x: float
    as_min_y: float
    over_capacity_x: bool = False
    over_capacity_y: bool = False
    num_bars_x: int
    num_bars_y: int
    spacing_x: float                 # mm
    spacing_y: float

    beam_shear_x: float              # Vu (Tonf)
    beam_shear_y: float
    beam_shear_capacity_x: float     # phi Vc (Tonf)
    beam_shear_capacity_y: float
    punching_shear: float            # Vu (Tonf)
    punching_shear_capacity: float   # phi Vc (Tonf)
    punching_perimeter: float        # bo (m)

    beam_shear_ok_x: bool
    beam_shear_ok_y: bool
    punching_shear_ok: bool

    steps: List[CalculationStep] = Field(default_factory=list)

    @property
    def flexure_ok(self) -> bool:
        return not (self.over_capacity_x or self.over_capacity_y)

    @property
    def status(self) -> DesignStatus:
        checks = (
            self.flexure_ok,
            self.beam_shear_ok_x,
            self.beam_shear_ok_y,
            self.punching_shear_ok,
        )
        return DesignStatus.PASS if all(checks) else DesignStatus.FAIL
