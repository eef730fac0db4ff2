"""
Strength design method (SDM) for singly reinforced rectangular beams.

Equivalent rectangular stress block (0.85 f'c over depth a = beta1 c):
- rho_b = 0.85 beta1 (f'c/fy) (6000 / (6000 + fy)), rho_max = 0.75 rho_b
- Mn = As fy (d - a/2), phi = 0.90
- Vn = 0.53 sqrt(f'c) b d + Av fy d / s, phi = 0.85
"""

import math
from typing import List, Tuple

from rcdesign.core.materials import get_beta1, get_yield_strength, round_bar_data
from rcdesign.core.trace import add_step
from rcdesign.models.inputs import BeamInputs, RoundBar
from rcdesign.models.outputs import CalculationStep, SDMResults, SectionProperties
from rcdesign.utils.constants import (
    BALANCED_STRAIN_CONSTANT,
    MAX_RATIO_FACTOR,
    PHI_MOMENT,
    PHI_SHEAR,
    SDM_SHEAR_COEFFICIENT,
    STIRRUP_LEGS,
)
from rcdesign.utils.units import kg_cm_to_kg_m


def balanced_ratio(fc: float, fy: float, beta1: float) -> float:
    """Balanced steel ratio rho_b."""
    return 0.85 * beta1 * (fc / fy) * (BALANCED_STRAIN_CONSTANT / (BALANCED_STRAIN_CONSTANT + fy))


def calculate_ratio_limits(
    fc: float,
    fy: float,
    steps: List[CalculationStep],
) -> Tuple[float, float, float]:
    """beta1, rho_b and rho_max with their trace steps."""
    beta1 = add_step(steps, "Stress block factor (β1)",
                     "β1 = 0.85 - 0.05 (f'c - 280)/70, 0.65 ≤ β1 ≤ 0.85",
                     f"f'c = {fc:g} kg/cm²", get_beta1(fc))
    rho_b = add_step(steps, "Balanced steel ratio (ρb)",
                     "ρb = 0.85 β1 (f'c/fy) (6000/(6000+fy))",
                     f"= 0.85 × {beta1:.3f} × ({fc:g}/{fy:g}) × (6000/(6000+{fy:g}))",
                     balanced_ratio(fc, fy, beta1))
    rho_max = add_step(steps, "Maximum steel ratio (ρmax)", "ρmax = 0.75 ρb",
                       f"= 0.75 × {rho_b:.5f}", MAX_RATIO_FACTOR * rho_b)
    return beta1, rho_b, rho_max


def calculate_sdm_shear(
    fc: float,
    fy: float,
    width: float,
    effective_depth: float,
    stirrup_size: RoundBar,
    stirrup_spacing: float,
    steps: List[CalculationStep],
) -> Tuple[float, float, float, float, float]:
    """
    Nominal and design shear strength with two-leg stirrups.

    Returns:
        (Vc, Av, Vs, Vn, phi Vn) in kg, cm², kg, kg, kg
    """
    b, d, s = width, effective_depth, stirrup_spacing

    Vc = add_step(steps, "Concrete shear strength (Vc)",
                  "Vc = 0.53 √f'c b d",
                  f"= 0.53 × √{fc:g} × {b:g} × {d:.2f}",
                  SDM_SHEAR_COEFFICIENT * math.sqrt(fc) * b * d, "kg")
    Av = STIRRUP_LEGS * round_bar_data[stirrup_size].area
    Vs = add_step(steps, "Stirrup shear strength (Vs)",
                  "Vs = Av fy d / s",
                  f"= {Av:.3f} × {fy:g} × {d:.2f} / {s:g}",
                  Av * fy * d / s, "kg")
    Vn = add_step(steps, "Nominal shear strength", "Vn = Vc + Vs",
                  f"= {Vc:.2f} + {Vs:.2f}", Vc + Vs, "kg")
    phi_Vn = add_step(steps, "Design shear strength", "φVn = 0.85 Vn",
                      f"= 0.85 × {Vn:.2f}", PHI_SHEAR * Vn, "kg")
    return Vc, Av, Vs, Vn, phi_Vn


def calculate_sdm(inputs: BeamInputs, section: SectionProperties) -> SDMResults:
    """
    Strength design capacity of a singly reinforced section.

    The under-reinforced check (rho <= rho_max) is reported, not enforced.
    """
    steps: List[CalculationStep] = []

    fc = inputs.fc
    fy = get_yield_strength(inputs.steel_grade)
    b = inputs.width
    d = section.effective_depth
    As = section.total_steel_area
    rho = section.steel_ratio

    beta1, rho_b, rho_max = calculate_ratio_limits(fc, fy, steps)
    add_step(steps, "Steel ratio (ρ)", "ρ = As / (b d)",
             f"= {As:.3f} / ({b:g} × {d:.2f})", rho)

    a = add_step(steps, "Compression block depth", "a = As fy / (0.85 f'c b)",
                 f"= {As:.3f} × {fy:g} / (0.85 × {fc:g} × {b:g})",
                 As * fy / (0.85 * fc * b), "cm")
    Mn = add_step(steps, "Nominal moment", "Mn = As fy (d - a/2)",
                  f"= {As:.3f} × {fy:g} × ({d:.2f} - {a:.2f}/2) / 100",
                  kg_cm_to_kg_m(As * fy * (d - a / 2)), "kg-m")
    phi_Mn = add_step(steps, "Design moment", "φMn = 0.90 Mn",
                      f"= 0.90 × {Mn:.2f}", PHI_MOMENT * Mn, "kg-m")

    Vc, Av, Vs, Vn, phi_Vn = calculate_sdm_shear(
        fc, fy, b, d, inputs.stirrup_size, inputs.stirrup_spacing, steps
    )

    return SDMResults(
        beta1=beta1,
        balanced_ratio=rho_b,
        max_ratio=rho_max,
        steel_ratio=rho,
        is_under_reinforced=rho <= rho_max,
        compression_block_depth=a,
        nominal_moment=Mn,
        design_moment=phi_Mn,
        concrete_shear_capacity=Vc,
        stirrup_area=Av,
        steel_shear_capacity=Vs,
        nominal_shear=Vn,
        design_shear=phi_Vn,
        steps=steps,
    )
