"""
Doubly reinforced rectangular beams (tension + compression steel).

WSD: transformed cracked section, compression steel transformed with
(2n - 1) and its stress capped at the allowable steel stress.

SDM: compression steel is first assumed to yield. When strain compatibility
shows it does not, the neutral axis depth is found by fixed-point iteration on
force equilibrium, since fs' depends on c and c depends on fs'.
"""

import logging
import math
from typing import List

from rcdesign.core.iteration import fixed_point
from rcdesign.core.materials import get_modular_ratio, get_yield_strength
from rcdesign.core.sdm import calculate_ratio_limits, calculate_sdm_shear
from rcdesign.core.trace import add_step
from rcdesign.core.wsd import allowable_stresses, calculate_wsd_shear
from rcdesign.models.inputs import DoubleBeamInputs
from rcdesign.models.outputs import (
    CalculationStep, DoubleSectionProperties, DoubleSDMResults, DoubleWSDResults
)
from rcdesign.utils.constants import (
    COMPRESSION_STEEL_MAX_ITERATIONS,
    COMPRESSION_STEEL_TOLERANCE,
    CONCRETE_ULTIMATE_STRAIN,
    PHI_MOMENT,
    STEEL_MODULUS,
)
from rcdesign.utils.units import kg_cm_to_kg_m

logger = logging.getLogger(__name__)


def calculate_double_wsd(
    inputs: DoubleBeamInputs,
    section: DoubleSectionProperties,
) -> DoubleWSDResults:
    """
    Working stress capacity of a doubly reinforced section.

    Neutral axis from first moments of the transformed section about the
    neutral axis:
        b kd²/2 + (2n-1) As' (kd - d') = n As (d - kd)
    """
    steps: List[CalculationStep] = []

    fc = inputs.fc
    fy = get_yield_strength(inputs.steel_grade)
    width = inputs.width
    d = section.effective_depth
    d_prime = section.effective_depth_prime
    As = section.tension_steel_area
    As_prime = section.compression_steel_area

    fc_allow, fs_allow = allowable_stresses(fc, fy)
    add_step(steps, "Allowable concrete stress", "fc = 0.45 f'c",
             f"= 0.45 × {fc:g}", fc_allow, "kg/cm²")
    add_step(steps, "Allowable steel stress", "fs = 0.5 fy",
             f"= 0.5 × {fy:g}", fs_allow, "kg/cm²")
    n = add_step(steps, "Modular ratio", "n = Es / Ec",
                 f"= 2,040,000 / (15100 × √{fc:g})", get_modular_ratio(fc))
    n_prime = add_step(steps, "Compression steel transform factor", "n' = 2n - 1",
                       f"= 2 × {n:.3f} - 1", 2 * n - 1)

    # a kd² + b kd + c = 0
    qa = width / 2
    qb = n_prime * As_prime + n * As
    qc = -(n_prime * As_prime * d_prime + n * As * d)
    kd = add_step(steps, "Neutral axis depth", "kd = (-B + √(B² - 4AC)) / 2A",
                  f"A = {qa:g}, B = {qb:.2f}, C = {qc:.2f}",
                  (-qb + math.sqrt(qb * qb - 4 * qa * qc)) / (2 * qa), "cm")

    fs_prime = add_step(steps, "Compression steel stress",
                        "fs' = min(fs, 2fc (kd - d')/kd)",
                        f"= min({fs_allow:g}, 2 × {fc_allow:g} × ({kd:.2f} - {d_prime:.2f})/{kd:.2f})",
                        min(fs_allow, 2 * fc_allow * (kd - d_prime) / kd), "kg/cm²")

    lever_arm = add_step(steps, "Lever arm", "jd = d - kd/3",
                         f"= {d:.2f} - {kd:.2f}/3", d - kd / 3, "cm")

    M_concrete = add_step(steps, "Concrete moment", "Mc = fc b kd jd / 2",
                          f"= {fc_allow:g} × {width:g} × {kd:.2f} × {lever_arm:.2f} / 2 / 100",
                          kg_cm_to_kg_m(fc_allow * width * kd * lever_arm / 2), "kg-m")
    M_steel = add_step(steps, "Compression steel moment", "Ms' = As' fs' (d - d')",
                       f"= {As_prime:.3f} × {fs_prime:.1f} × ({d:.2f} - {d_prime:.2f}) / 100",
                       kg_cm_to_kg_m(As_prime * fs_prime * (d - d_prime)), "kg-m")
    M = add_step(steps, "Moment capacity", "M = Mc + Ms'",
                 f"= {M_concrete:.2f} + {M_steel:.2f}", M_concrete + M_steel, "kg-m")

    _, Vc, _, Vs = calculate_wsd_shear(
        fc, fy, width, d, inputs.stirrup_size, inputs.stirrup_spacing, steps
    )
    V = add_step(steps, "Shear capacity", "V = Vc + Vs",
                 f"= {Vc:.2f} + {Vs:.2f}", Vc + Vs, "kg")

    return DoubleWSDResults(
        allowable_concrete_stress=fc_allow,
        allowable_steel_stress=fs_allow,
        modular_ratio=n,
        transformed_ratio=n_prime,
        neutral_axis_depth=kd,
        compression_steel_stress=fs_prime,
        lever_arm=lever_arm,
        moment_concrete=M_concrete,
        moment_compression_steel=M_steel,
        moment_capacity=M,
        concrete_shear_capacity=Vc,
        stirrup_shear_capacity=Vs,
        shear_capacity=V,
        steps=steps,
    )


def compression_steel_strain(c: float, d_prime: float) -> float:
    """Strain in compression steel at neutral axis depth c (0.003 at top fibre)."""
    return CONCRETE_ULTIMATE_STRAIN * (c - d_prime) / c


def compression_steel_stress(c: float, d_prime: float, fy: float) -> float:
    """Elastic-plastic compression steel stress, limited to ±fy."""
    if c <= 0:
        return -fy
    stress = STEEL_MODULUS * compression_steel_strain(c, d_prime)
    return max(-fy, min(fy, stress))


def calculate_double_sdm(
    inputs: DoubleBeamInputs,
    section: DoubleSectionProperties,
) -> DoubleSDMResults:
    """
    Strength design capacity of a doubly reinforced section.

    Nominal moment about the tension steel:
        Mn = (As fy - As' fs') (d - a/2) + As' fs' (d - d')
    which reduces to (As - As') fy (d - a/2) + As' fy (d - d') when the
    compression steel yields.
    """
    steps: List[CalculationStep] = []

    fc = inputs.fc
    fy = get_yield_strength(inputs.steel_grade)
    b = inputs.width
    d = section.effective_depth
    d_prime = section.effective_depth_prime
    As = section.tension_steel_area
    As_prime = section.compression_steel_area

    beta1, rho_b, rho_max = calculate_ratio_limits(fc, fy, steps)
    net_ratio = add_step(steps, "Net tension steel ratio", "ρ - ρ' = (As - As') / (b d)",
                         f"= ({As:.3f} - {As_prime:.3f}) / ({b:g} × {d:.2f})",
                         (As - As_prime) / (b * d))

    # Assume fs' = fy
    a_assumed = add_step(steps, "Block depth assuming fs' = fy",
                         "a = (As - As') fy / (0.85 f'c b)",
                         f"= ({As:.3f} - {As_prime:.3f}) × {fy:g} / (0.85 × {fc:g} × {b:g})",
                         (As - As_prime) * fy / (0.85 * fc * b), "cm")
    c_assumed = add_step(steps, "Neutral axis depth", "c = a / β1",
                         f"= {a_assumed:.2f} / {beta1:.3f}", a_assumed / beta1, "cm")

    eps_y = add_step(steps, "Yield strain", "εy = fy / Es",
                     f"= {fy:g} / 2,040,000", fy / STEEL_MODULUS)
    if c_assumed > 0:
        eps_assumed = add_step(steps, "Compression steel strain", "εs' = 0.003 (c - d') / c",
                               f"= 0.003 × ({c_assumed:.2f} - {d_prime:.2f}) / {c_assumed:.2f}",
                               compression_steel_strain(c_assumed, d_prime))
        yields = eps_assumed >= eps_y
    else:
        # As <= As': no compression left for the concrete at fs' = fy
        eps_assumed = 0.0
        yields = False

    if yields:
        converged = True
        iterations = 0
        c = c_assumed
        a = a_assumed
        fs_prime = fy
        eps_final = eps_assumed
    else:
        def _next_c(c_current: float) -> float:
            fs = compression_steel_stress(c_current, d_prime, fy)
            return (As * fy - As_prime * fs) / (0.85 * fc * b * beta1)

        c_start = c_assumed if c_assumed > 0 else d_prime
        solution = fixed_point(
            _next_c, c_start,
            COMPRESSION_STEEL_TOLERANCE, COMPRESSION_STEEL_MAX_ITERATIONS,
        )
        converged = solution.converged
        iterations = solution.iterations
        if not converged:
            logger.warning(
                "compression steel stress did not converge for b=%g, d=%.2f; using c=%.4f",
                b, d, solution.value,
            )

        c = add_step(steps, "Neutral axis depth by equilibrium",
                     "c = (As fy - As' fs') / (0.85 f'c b β1)",
                     f"{iterations} iterations, fs' = Es εs' ≤ fy",
                     solution.value, "cm")
        eps_final = compression_steel_strain(c, d_prime) if c > 0 else 0.0
        fs_prime = add_step(steps, "Compression steel stress", "fs' = Es εs' ≤ fy",
                            f"= 2,040,000 × {eps_final:.5f}",
                            compression_steel_stress(c, d_prime, fy), "kg/cm²")
        a = add_step(steps, "Compression block depth", "a = β1 c",
                     f"= {beta1:.3f} × {c:.2f}", beta1 * c, "cm")

    Cc_moment = (As * fy - As_prime * fs_prime) * (d - a / 2)
    Cs_moment = As_prime * fs_prime * (d - d_prime)
    Mn = add_step(steps, "Nominal moment",
                  "Mn = (As fy - As' fs') (d - a/2) + As' fs' (d - d')",
                  f"= ({As:.3f}×{fy:g} - {As_prime:.3f}×{fs_prime:.1f}) × ({d:.2f} - {a:.2f}/2)"
                  f" + {As_prime:.3f}×{fs_prime:.1f} × ({d:.2f} - {d_prime:.2f})",
                  kg_cm_to_kg_m(Cc_moment + Cs_moment), "kg-m")
    phi_Mn = add_step(steps, "Design moment", "φMn = 0.90 Mn",
                      f"= 0.90 × {Mn:.2f}", PHI_MOMENT * Mn, "kg-m")

    Vc, _, Vs, Vn, phi_Vn = calculate_sdm_shear(
        fc, fy, b, d, inputs.stirrup_size, inputs.stirrup_spacing, steps
    )

    return DoubleSDMResults(
        beta1=beta1,
        balanced_ratio=rho_b,
        max_ratio=rho_max,
        net_tension_ratio=net_ratio,
        is_under_reinforced=net_ratio <= rho_max,
        assumed_block_depth=a_assumed,
        compression_steel_strain=eps_final,
        yield_strain=eps_y,
        compression_steel_yields=yields,
        converged=converged,
        iterations=iterations,
        neutral_axis_depth=c,
        compression_block_depth=a,
        compression_steel_stress=fs_prime,
        nominal_moment=Mn,
        design_moment=phi_Mn,
        moment_from_comp_steel=kg_cm_to_kg_m(Cs_moment),
        concrete_shear_capacity=Vc,
        steel_shear_capacity=Vs,
        nominal_shear=Vn,
        design_shear=phi_Vn,
        steps=steps,
    )
