"""
Working stress design (WSD) of singly reinforced rectangular beams.

Cracked elastic section with allowable stresses:
- fc = 0.45 f'c, fs = 0.5 fy
- k = sqrt(2 rho n + (rho n)^2) - rho n, j = 1 - k/3
- M = min(Mc, Ms)
- V = 0.29 sqrt(f'c) b d + Av (0.5 fy) d / s
"""

import math
from typing import List, Tuple

from rcdesign.core.materials import get_modular_ratio, get_yield_strength, round_bar_data
from rcdesign.core.trace import add_step
from rcdesign.models.inputs import BeamInputs, RoundBar
from rcdesign.models.outputs import CalculationStep, SectionProperties, WSDResults
from rcdesign.utils.constants import (
    STIRRUP_LEGS,
    WSD_CONCRETE_STRESS_RATIO,
    WSD_SHEAR_COEFFICIENT,
    WSD_STEEL_STRESS_RATIO,
)
from rcdesign.utils.units import kg_cm_to_kg_m


def allowable_stresses(fc: float, fy: float) -> Tuple[float, float]:
    """Allowable concrete and steel stresses (kg/cm²)."""
    return WSD_CONCRETE_STRESS_RATIO * fc, WSD_STEEL_STRESS_RATIO * fy


def calculate_wsd_shear(
    fc: float,
    fy: float,
    width: float,
    effective_depth: float,
    stirrup_size: RoundBar,
    stirrup_spacing: float,
    steps: List[CalculationStep],
) -> Tuple[float, float, float, float]:
    """
    Allowable shear capacity with two-leg stirrups at half yield strength.

    Returns:
        (vc, Vc, Av, Vs) in kg/cm², kg, cm², kg
    """
    b, d, s = width, effective_depth, stirrup_spacing

    vc = WSD_SHEAR_COEFFICIENT * math.sqrt(fc)
    Vc = add_step(
        steps, "Concrete shear capacity (Vc)",
        "Vc = 0.29 × √f'c × b × d",
        f"= 0.29 × √{fc:g} × {b:g} × {d:.2f}",
        vc * b * d, "kg",
    )

    Av = STIRRUP_LEGS * round_bar_data[stirrup_size].area
    Vs = add_step(
        steps, "Stirrup shear capacity (Vs)",
        "Vs = Av × 0.5fy × d / s",
        f"= {Av:.3f} × 0.5×{fy:g} × {d:.2f} / {s:g}",
        Av * WSD_STEEL_STRESS_RATIO * fy * d / s, "kg",
    )
    return vc, Vc, Av, Vs


def calculate_wsd(inputs: BeamInputs, section: SectionProperties) -> WSDResults:
    """
    Working stress capacity of a singly reinforced section.

    Args:
        inputs: Beam geometry, materials and stirrups
        section: Section properties computed from ``inputs``

    Returns:
        WSDResults with every intermediate and the equation trace
    """
    steps: List[CalculationStep] = []

    fc = inputs.fc
    fy = get_yield_strength(inputs.steel_grade)
    b = inputs.width
    d = section.effective_depth
    As = section.total_steel_area

    fc_allow, fs_allow = allowable_stresses(fc, fy)
    add_step(steps, "Allowable concrete stress", "fc = 0.45 f'c",
             f"= 0.45 × {fc:g}", fc_allow, "kg/cm²")
    add_step(steps, "Allowable steel stress", "fs = 0.5 fy",
             f"= 0.5 × {fy:g}", fs_allow, "kg/cm²")

    n = add_step(steps, "Modular ratio", "n = Es / Ec",
                 f"= 2,040,000 / (15100 × √{fc:g})", get_modular_ratio(fc))

    rho_n = add_step(steps, "ρn", "ρn = As / (b d) × n",
                     f"= {As:.3f} / ({b:g} × {d:.2f}) × {n:.3f}",
                     As / (b * d) * n)

    # positive root of k^2 + 2 rho_n k - 2 rho_n = 0
    k = add_step(steps, "Neutral axis ratio", "k = √(2ρn + (ρn)²) - ρn",
                 f"= √(2×{rho_n:.4f} + {rho_n:.4f}²) - {rho_n:.4f}",
                 math.sqrt(2 * rho_n + rho_n * rho_n) - rho_n)
    kd = add_step(steps, "Neutral axis depth", "kd = k × d",
                  f"= {k:.4f} × {d:.2f}", k * d, "cm")
    j = add_step(steps, "Lever arm factor", "j = 1 - k/3",
                 f"= 1 - {k:.4f}/3", 1 - k / 3)
    jd = add_step(steps, "Lever arm", "jd = j × d",
                  f"= {j:.4f} × {d:.2f}", j * d, "cm")

    Mc = add_step(steps, "Concrete-controlled moment", "Mc = fc b k j d² / 2",
                  f"= {fc_allow:g} × {b:g} × {k:.4f} × {j:.4f} × {d:.2f}² / 2 / 100",
                  kg_cm_to_kg_m(fc_allow * b * k * j * d * d / 2), "kg-m")
    Ms = add_step(steps, "Steel-controlled moment", "Ms = As fs j d",
                  f"= {As:.3f} × {fs_allow:g} × {j:.4f} × {d:.2f} / 100",
                  kg_cm_to_kg_m(As * fs_allow * j * d), "kg-m")

    M = add_step(steps, "Moment capacity", "M = min(Mc, Ms)",
                 f"= min({Mc:.2f}, {Ms:.2f})", min(Mc, Ms), "kg-m")
    governing = "concrete" if Mc <= Ms else "steel"

    vc, Vc, Av, Vs = calculate_wsd_shear(
        fc, fy, b, d, inputs.stirrup_size, inputs.stirrup_spacing, steps
    )
    V = add_step(steps, "Shear capacity", "V = Vc + Vs",
                 f"= {Vc:.2f} + {Vs:.2f}", Vc + Vs, "kg")

    return WSDResults(
        allowable_concrete_stress=fc_allow,
        allowable_steel_stress=fs_allow,
        modular_ratio=n,
        rho_n=rho_n,
        k=k,
        j=j,
        neutral_axis_depth=kd,
        lever_arm=jd,
        moment_concrete=Mc,
        moment_steel=Ms,
        moment_capacity=M,
        governing=governing,
        allowable_shear_stress=vc,
        concrete_shear_capacity=Vc,
        stirrup_area=Av,
        stirrup_shear_capacity=Vs,
        shear_capacity=V,
        steps=steps,
    )
