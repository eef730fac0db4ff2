"""
Input data models for RC beam design using Pydantic for validation.

Section geometry is in cm, material strengths in kg/cm².
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List
from enum import Enum


class ConcreteGrade(int, Enum):
    """Concrete compressive strength f'c (kg/cm²)."""
    FC180 = 180
    FC210 = 210
    FC240 = 240
    FC280 = 280
    FC320 = 320
    FC350 = 350


class SteelGrade(str, Enum):
    """Thai standard (TIS 24) deformed bar grades."""
    SD30 = "SD30"
    SD40 = "SD40"
    SD50 = "SD50"


class DeformedBar(str, Enum):
    """Deformed bar designations for main reinforcement."""
    DB10 = "DB10"
    DB12 = "DB12"
    DB16 = "DB16"
    DB20 = "DB20"
    DB25 = "DB25"
    DB28 = "DB28"
    DB32 = "DB32"


class RoundBar(str, Enum):
    """Round bar designations for stirrups."""
    RB6 = "RB6"
    RB9 = "RB9"
    RB12 = "RB12"


class CalculationMethod(str, Enum):
    """Design method."""
    WSD = "WSD"
    SDM = "SDM"


class ReinforcementLayer(BaseModel):
    """One horizontal layer of identical bars."""
    model_config = ConfigDict(frozen=True)

    id: str = ""
    bar_size: DeformedBar
    count: int = Field(..., ge=1, description="Number of bars in the layer")


class BeamInputs(BaseModel):
    """Singly reinforced rectangular beam.

    ``layers`` are ordered from the tension face inward. An empty list is
    allowed and simply yields no result.
    """
    model_config = ConfigDict(frozen=True)

    # Materials
    concrete_grade: ConcreteGrade = ConcreteGrade.FC240
    steel_grade: SteelGrade = SteelGrade.SD40

    # Section (cm)
    width: float = Field(..., gt=0, description="Beam width b in cm")
    height: float = Field(..., gt=0, description="Overall height h in cm")
    cover: float = Field(default=4.0, ge=0, description="Clear cover to stirrup in cm")

    # Reinforcement
    layers: List[ReinforcementLayer] = Field(default_factory=list)
    stirrup_size: RoundBar = RoundBar.RB9
    stirrup_spacing: float = Field(default=20.0, gt=0, description="Stirrup spacing in cm")

    @property
    def fc(self) -> float:
        """Concrete strength f'c in kg/cm²."""
        return float(self.concrete_grade)


class DoubleBeamInputs(BaseModel):
    """Doubly reinforced rectangular beam.

    ``tension_layers`` run bottom-to-top, ``compression_layers`` top-to-bottom.
    """
    model_config = ConfigDict(frozen=True)

    concrete_grade: ConcreteGrade = ConcreteGrade.FC240
    steel_grade: SteelGrade = SteelGrade.SD40

    width: float = Field(..., gt=0, description="Beam width b in cm")
    height: float = Field(..., gt=0, description="Overall height h in cm")
    cover: float = Field(default=4.0, ge=0, description="Bottom clear cover in cm")
    cover_top: float = Field(default=4.0, ge=0, description="Top clear cover in cm")

    tension_layers: List[ReinforcementLayer] = Field(default_factory=list)
    compression_layers: List[ReinforcementLayer] = Field(default_factory=list)
    stirrup_size: RoundBar = RoundBar.RB9
    stirrup_spacing: float = Field(default=20.0, gt=0, description="Stirrup spacing in cm")

    @property
    def fc(self) -> float:
        """Concrete strength f'c in kg/cm²."""
        return float(self.concrete_grade)
