"""Material properties for RC design per the Thai standard tables.

Lookups for bar and steel grade data and the derived concrete properties
(modulus of elasticity, modular ratio and stress-block factor beta1).

Units
-----
Stresses and moduli in **kg/cm²**, bar diameters in **mm**, bar areas in
**cm²**.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from rcdesign.models.inputs import DeformedBar, RoundBar, SteelGrade
from rcdesign.utils.constants import (
    CONCRETE_MODULUS_COEFFICIENT,
    DEFORMED_BARS,
    ROUND_BARS,
    STEEL_GRADES,
    STEEL_MODULUS,
)


@dataclass(frozen=True)
class BarData:
    """Tabulated bar geometry.

    Attributes
    ----------
    diameter : float
        Nominal diameter, mm.
    area : float
        Nominal cross-sectional area, cm².  Tabulated, not computed from
        ``diameter``, to match the published table.
    """

    diameter: float
    area: float


@dataclass(frozen=True)
class SteelData:
    """Yield strength ``fy`` of a steel grade, kg/cm²."""

    fy: float


deformed_bar_data: dict[DeformedBar, BarData] = {
    DeformedBar(name): BarData(diameter=dia, area=area)
    for name, (dia, area) in DEFORMED_BARS.items()
}

round_bar_data: dict[RoundBar, BarData] = {
    RoundBar(name): BarData(diameter=dia, area=area)
    for name, (dia, area) in ROUND_BARS.items()
}

steel_grade_data: dict[SteelGrade, SteelData] = {
    SteelGrade(name): SteelData(fy=float(fy))
    for name, fy in STEEL_GRADES.items()
}


def get_yield_strength(grade: SteelGrade | str) -> float:
    """Yield strength ``fy`` (kg/cm²) of a steel grade."""
    return steel_grade_data[SteelGrade(grade)].fy


def get_concrete_modulus(fc: float) -> float:
    """Concrete modulus of elasticity ``Ec = 15100 * sqrt(f'c)`` (kg/cm²)."""
    return CONCRETE_MODULUS_COEFFICIENT * math.sqrt(fc)


def get_modular_ratio(fc: float) -> float:
    """Modular ratio ``n = Es / Ec``."""
    return STEEL_MODULUS / get_concrete_modulus(fc)


def get_beta1(fc: float) -> float:
    """Stress-block depth factor beta1.

    0.85 up to f'c = 280 kg/cm², reduced by 0.05 per 70 kg/cm² above that,
    never below 0.65.
    """
    if fc <= 280:
        return 0.85
    if fc <= 560:
        return 0.85 - 0.05 * ((fc - 280) / 70)
    return 0.65
