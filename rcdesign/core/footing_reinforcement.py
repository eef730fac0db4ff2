"""Reinforcement design of isolated square footings (SDM).

Designs the representative footing of each size group for the factored
column load:

1. **Thickness** -- effective depth grown until punching shear at d/2 from
   the column face is satisfied, then rounded up to 0.05 m.
2. **Flexure** -- cantilever moment at the column face in both directions,
   bottom mat bar count and spacing.
3. **One-way shear** -- at distance d from the column face, per direction.
4. **Punching shear** -- around the column at d/2.

Units convention
----------------
Loads in **Tonf**, moments in **Tonf-m**, plan dimensions and thickness in
**m**, bar size and cover in **mm**, steel areas in **cm²**. Stress-level
formulas run in kg and cm and are converted back with ``/1000``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional

from rcdesign.core.iteration import IterationResult, grow_until
from rcdesign.core.trace import add_step
from rcdesign.models.footing import (
    CalculatedFooting,
    CriticalFooting,
    ReinforcementInputs,
)
from rcdesign.models.outputs import CalculationStep
from rcdesign.utils.constants import (
    BEAM_SHEAR_COEFFICIENT,
    DEAD_LOAD_FACTOR,
    FOOTING_THICKNESS_STEP,
    LIVE_LOAD_FACTOR,
    PHI_MOMENT,
    PHI_SHEAR,
    PUNCHING_SHEAR_COEFFICIENT,
    RHO_MIN_HIGH_STRENGTH,
    RHO_MIN_LOW_STRENGTH,
    THICKNESS_GROWTH_FACTOR,
    THICKNESS_MAX_ITERATIONS,
)
from rcdesign.utils.units import (
    kg_to_tonf, m_to_cm, m_to_mm, mm_to_m, round_up_to, tonf_m_to_kgf_cm
)

logger = logging.getLogger(__name__)

_HIGH_STRENGTH_FY: float = 4000.0
"""Yield strength (kg/cm²) from which the lower minimum steel ratio applies."""


class DemandExceedsCapacityError(ValueError):
    """Factored moment exceeds what a singly reinforced section can carry.

    Raised when ``1 - 2 Rn / (0.85 f'c)`` is negative, i.e. the required
    steel ratio has no real solution.
    """

    def __init__(self, rn: float, limit: float) -> None:
        self.rn = rn
        self.limit = limit
        super().__init__(
            f"Rn = {rn:.2f} kg/cm² exceeds the section limit of {limit:.2f} kg/cm²"
        )


# ---------------------------------------------------------------------------
# Loads and geometry
# ---------------------------------------------------------------------------

def factored_load(dl_sdl: float, ll: float) -> float:
    """Pu = 1.4 (DL + SDL) + 1.7 LL, in Tonf."""
    return DEAD_LOAD_FACTOR * dl_sdl + LIVE_LOAD_FACTOR * ll


def _bar_offset_m(inputs: ReinforcementInputs) -> float:
    """Distance from the bottom face to the mid-depth of the two-way mat."""
    return mm_to_m(inputs.cover + inputs.bar_size + inputs.bar_size / 2)


def punching_perimeter(inputs: ReinforcementInputs, d: float) -> float:
    """Critical perimeter at d/2 from the column faces.

    bo = 2 (c1 + d) + 2 (c2 + d), in m.
    """
    return 2 * (inputs.column_width + d) + 2 * (inputs.column_depth + d)


def punching_capacity(fc: float, bo: float, d: float) -> float:
    """phi Vc = 0.85 x 0.53 sqrt(f'c) bo d, in Tonf (bo and d in m)."""
    return kg_to_tonf(
        PHI_SHEAR * PUNCHING_SHEAR_COEFFICIENT * math.sqrt(fc) * m_to_cm(bo) * m_to_cm(d)
    )


def calculate_minimum_thickness(
    footing: CalculatedFooting,
    inputs: ReinforcementInputs,
    steps: Optional[List[CalculationStep]] = None,
) -> tuple[float, bool]:
    """Footing thickness governed by punching shear.

    Starts from ``d = B/10`` and grows ``d`` by 15 % until the punching
    capacity reaches Pu (at most 10 checks). The search always terminates;
    the returned flag tells whether the check was met. Each trial ``d`` and
    its ``phi Vc`` are appended to ``steps`` when given.

    Returns
    -------
    tuple[float, bool]
        ``(h, converged)`` with ``h`` in m, rounded up to 0.05 m.
    """
    Pu = factored_load(footing.dl_sdl, footing.ll)

    def _punching_ok(d: float) -> bool:
        bo = punching_perimeter(inputs, d)
        phi_Vc = punching_capacity(inputs.fc, bo, d)
        if steps is not None:
            add_step(
                steps, f"Thickness trial d = {d:.3f} m: punching capacity",
                "φVc = 0.85 × 0.53 × √f'c × bo × d",
                f"= 0.85 × 0.53 × √{inputs.fc:g} × {m_to_cm(bo):.1f} × {m_to_cm(d):.1f} / 1000"
                f" {'≥' if phi_Vc >= Pu else '<'} Pu = {Pu:.2f}",
                phi_Vc, "Tonf",
            )
        return phi_Vc >= Pu

    result: IterationResult = grow_until(
        _punching_ok,
        footing.dimension / 10,
        THICKNESS_GROWTH_FACTOR,
        THICKNESS_MAX_ITERATIONS,
    )
    if not result.converged:
        logger.warning(
            "footing %s: punching shear not satisfied after %d thickness iterations",
            footing.unique_name, result.iterations,
        )

    h = round_up_to(result.value + _bar_offset_m(inputs), FOOTING_THICKNESS_STEP)
    return h, result.converged


def calculate_effective_depth(h: float, inputs: ReinforcementInputs) -> float:
    """d = h - cover - bar - bar/2, in m."""
    return h - _bar_offset_m(inputs)


def calculate_moment(
    footing: CalculatedFooting,
    inputs: ReinforcementInputs,
) -> tuple[float, float]:
    """Cantilever moments at the column faces (Mux, Muy) in Tonf-m."""
    B = footing.dimension
    qu = factored_load(footing.dl_sdl, footing.ll) / (B * B)
    lx = (B - inputs.column_width) / 2
    ly = (B - inputs.column_depth) / 2
    return qu * B * lx * lx / 2, qu * B * ly * ly / 2


# ---------------------------------------------------------------------------
# Flexural steel
# ---------------------------------------------------------------------------

def calculate_required_steel(
    Mu: float,
    b: float,
    d: float,
    fc: float,
    fy: float,
) -> float:
    """Tension steel for a factored moment.

    Parameters
    ----------
    Mu : float
        Factored moment in Tonf-m.
    b, d : float
        Width and effective depth in cm.
    fc, fy : float
        Material strengths in kg/cm².

    Returns
    -------
    float
        Required steel area in cm².

    Raises
    ------
    DemandExceedsCapacityError
        If the moment cannot be carried without compression steel.
    """
    rho = required_steel_ratio(calculate_rn(Mu, b, d), fc, fy)
    return rho * b * d


def calculate_rn(Mu: float, b: float, d: float) -> float:
    """Rn = Mu / (phi b d²) in kg/cm² (Mu in Tonf-m, b and d in cm)."""
    return tonf_m_to_kgf_cm(Mu) / (PHI_MOMENT * b * d * d)


def required_steel_ratio(rn: float, fc: float, fy: float) -> float:
    """rho = 0.85 f'c / fy (1 - sqrt(1 - 2 Rn / 0.85 f'c)).

    Raises
    ------
    DemandExceedsCapacityError
        If the square root has no real solution.
    """
    discriminant = 1 - 2 * rn / (0.85 * fc)
    if discriminant < 0:
        raise DemandExceedsCapacityError(rn, 0.425 * fc)
    return (0.85 * fc / fy) * (1 - math.sqrt(discriminant))


def minimum_steel_ratio(fy: float) -> float:
    return RHO_MIN_HIGH_STRENGTH if fy >= _HIGH_STRENGTH_FY else RHO_MIN_LOW_STRENGTH


def calculate_minimum_steel(b: float, h: float, fy: float) -> float:
    """Shrinkage and temperature steel As,min = rho_min b h (cm², b and h in cm)."""
    return minimum_steel_ratio(fy) * b * h


def calculate_bar_spacing(
    area: float,
    bar_size: float,
    width: float,
) -> tuple[int, float]:
    """Bar count and spacing across a footing width.

    Parameters
    ----------
    area : float
        Steel area to provide (cm²).
    bar_size : float
        Bar diameter (mm).
    width : float
        Footing width (m).

    Returns
    -------
    tuple[int, float]
        ``(num_bars, spacing_mm)``.
    """
    bar_area = math.pi * bar_size * bar_size / 4 / 100
    num_bars = math.ceil(area / bar_area)
    return num_bars, m_to_mm(width) / (num_bars + 1)


# ---------------------------------------------------------------------------
# Shear checks
# ---------------------------------------------------------------------------

def check_beam_shear(
    dimension: float,
    column_dimension: float,
    d: float,
    qu: float,
    fc: float,
) -> tuple[float, float, bool]:
    """One-way shear at distance d from the column face.

    Returns
    -------
    tuple[float, float, bool]
        ``(Vu, phi_Vc, ok)`` in Tonf. When the critical section falls
        outside the footing there is no shear to check.
    """
    x = (dimension - column_dimension) / 2 - d
    if x <= 0:
        return 0.0, 0.0, True

    Vu = qu * dimension * x
    phi_Vc = kg_to_tonf(
        PHI_SHEAR * BEAM_SHEAR_COEFFICIENT * math.sqrt(fc) * m_to_cm(dimension) * m_to_cm(d)
    )
    return Vu, phi_Vc, Vu <= phi_Vc


def check_punching_shear(
    Pu: float,
    d: float,
    inputs: ReinforcementInputs,
) -> tuple[float, float, float, bool]:
    """Two-way shear around the column.

    Returns ``(Vu, phi_Vc, bo, ok)`` with forces in Tonf and bo in m.
    """
    bo = punching_perimeter(inputs, d)
    phi_Vc = punching_capacity(inputs.fc, bo, d)
    return Pu, phi_Vc, bo, Pu <= phi_Vc


# ---------------------------------------------------------------------------
# Main design function
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class _DirectionDesign:
    rn: float
    rho: Optional[float]
    as_req: Optional[float]
    as_min: float
    num_bars: int
    spacing: float

    @property
    def over_capacity(self) -> bool:
        return self.rho is None


def _design_direction(
    footing: CalculatedFooting,
    Mu: float,
    b_cm: float,
    d_cm: float,
    h_cm: float,
    inputs: ReinforcementInputs,
    direction: str,
    steps: List[CalculationStep],
) -> _DirectionDesign:
    """Required and minimum steel plus bar layout for one direction."""
    fc, fy = inputs.fc, inputs.fy
    rn = add_step(
        steps, f"Strength coefficient Rn ({direction})",
        "Rn = Mu / (φ × b × d²)",
        f"= {tonf_m_to_kgf_cm(Mu):.0f} / (0.9 × {b_cm:.0f} × {d_cm:.1f}²)",
        calculate_rn(Mu, b_cm, d_cm), "kg/cm²",
    )
    try:
        rho: Optional[float] = add_step(
            steps, f"Required steel ratio ρ ({direction})",
            "ρ = 0.85f'c/fy × (1 - √(1 - 2Rn / 0.85f'c))",
            f"= 0.85×{fc:g}/{fy:g} × (1 - √(1 - 2×{rn:.2f} / (0.85×{fc:g})))",
            required_steel_ratio(rn, fc, fy),
        )
    except DemandExceedsCapacityError as exc:
        logger.warning("footing %s, %s-direction: %s", footing.unique_name, direction, exc)
        rho = None

    as_req = None
    if rho is not None:
        as_req = add_step(
            steps, f"Required steel As ({direction})",
            "As = ρ × b × d",
            f"= {rho:.5f} × {b_cm:.0f} × {d_cm:.1f}",
            rho * b_cm * d_cm, "cm²",
        )
    as_min = add_step(
        steps, f"Minimum steel As,min ({direction})",
        "As,min = ρmin × b × h",
        f"= {minimum_steel_ratio(fy):.4f} × {b_cm:.0f} × {h_cm:.0f}",
        calculate_minimum_steel(b_cm, h_cm, fy), "cm²",
    )

    num_bars, spacing = calculate_bar_spacing(
        max(as_req or 0.0, as_min), inputs.bar_size, footing.dimension
    )
    return _DirectionDesign(rn, rho, as_req, as_min, num_bars, spacing)


def design_footing_reinforcement(
    footing: CalculatedFooting,
    inputs: ReinforcementInputs,
    allowable_bearing_capacity: float,
    thickness: float | None = None,
) -> CriticalFooting:
    """Design thickness, bottom reinforcement and shear checks of a footing.

    Parameters
    ----------
    footing : CalculatedFooting
        Sized footing (normally the critical footing of its size group).
    inputs : ReinforcementInputs
        Materials, bar size, cover and column dimensions.
    allowable_bearing_capacity : float
        Allowable soil bearing capacity in Tonf/m².
    thickness : float, optional
        Footing thickness in m. Used instead of the punching-shear search
        when given and positive.

    Returns
    -------
    CriticalFooting
        The footing extended with every design intermediate and the
        equation trace.

    Raises
    ------
    ValueError
        If the footing has no plan size (non-positive load).
    """
    B = footing.dimension
    if B <= 0:
        raise ValueError(f"footing {footing.unique_name} has no plan size (B = {B:g} m)")
    if footing.total_load / (B * B) > allowable_bearing_capacity:
        logger.warning(
            "footing %s: service bearing pressure %.2f exceeds qa = %.2f Tonf/m²",
            footing.unique_name, footing.total_load / (B * B), allowable_bearing_capacity,
        )

    steps: List[CalculationStep] = []
    Pu = add_step(
        steps, "Factored column load (Pu)",
        "Pu = 1.4 (DL + SDL) + 1.7 LL",
        f"= 1.4 × {footing.dl_sdl:.2f} + 1.7 × {footing.ll:.2f}",
        factored_load(footing.dl_sdl, footing.ll), "Tonf",
    )
    qu = add_step(
        steps, "Factored soil pressure (qu)",
        "qu = Pu / B²",
        f"= {Pu:.2f} / {B:.2f}²",
        Pu / (B * B), "Tonf/m²",
    )

    if thickness is not None and thickness > 0:
        h = thickness
        converged = None
    else:
        h, converged = calculate_minimum_thickness(footing, inputs, steps)
    d = add_step(
        steps, "Effective depth (d)",
        "d = h - cover - db - db/2",
        f"= {h:.2f} - {mm_to_m(inputs.cover):.3f} - {mm_to_m(inputs.bar_size):.3f}"
        f" - {mm_to_m(inputs.bar_size) / 2:.3f}",
        calculate_effective_depth(h, inputs), "m",
    )

    Mux, Muy = calculate_moment(footing, inputs)
    add_step(
        steps, "Moment at column face (Mux)",
        "Mux = qu × B × lx² / 2",
        f"= {qu:.2f} × {B:.2f} × {(B - inputs.column_width) / 2:.3f}² / 2",
        Mux, "Tonf-m",
    )
    add_step(
        steps, "Moment at column face (Muy)",
        "Muy = qu × B × ly² / 2",
        f"= {qu:.2f} × {B:.2f} × {(B - inputs.column_depth) / 2:.3f}² / 2",
        Muy, "Tonf-m",
    )

    b_cm, d_cm, h_cm = m_to_cm(B), m_to_cm(d), m_to_cm(h)
    x = _design_direction(footing, Mux, b_cm, d_cm, h_cm, inputs, "x", steps)
    y = _design_direction(footing, Muy, b_cm, d_cm, h_cm, inputs, "y", steps)

    vx, phi_vx, ok_x = check_beam_shear(B, inputs.column_width, d, qu, inputs.fc)
    vy, phi_vy, ok_y = check_beam_shear(B, inputs.column_depth, d, qu, inputs.fc)
    for label, vu, phi_vc in (("x", vx, phi_vx), ("y", vy, phi_vy)):
        add_step(
            steps, f"One-way shear capacity ({label})",
            "φVc = 0.85 × 0.17 × √f'c × B × d",
            f"= 0.85 × 0.17 × √{inputs.fc:g} × {b_cm:.0f} × {d_cm:.1f} / 1000"
            f" (Vu = {vu:.2f})",
            phi_vc, "Tonf",
        )

    vp, phi_vp, bo, ok_p = check_punching_shear(Pu, d, inputs)
    add_step(
        steps, "Punching perimeter (bo)",
        "bo = 2(c1 + d) + 2(c2 + d)",
        f"= 2({inputs.column_width:g} + {d:.3f}) + 2({inputs.column_depth:g} + {d:.3f})",
        bo, "m",
    )
    add_step(
        steps, "Punching shear capacity (φVc)",
        "φVc = 0.85 × 0.53 × √f'c × bo × d",
        f"= 0.85 × 0.53 × √{inputs.fc:g} × {m_to_cm(bo):.1f} × {d_cm:.1f} / 1000",
        phi_vp, "Tonf",
    )

    return CriticalFooting(
        **footing.model_dump(),
        factored_load=Pu,
        soil_pressure=qu,
        footing_thickness=h,
        thickness_converged=converged,
        effective_depth=d,
        moment_x=Mux,
        moment_y=Muy,
        rn_x=x.rn,
        rn_y=y.rn,
        rho_x=x.rho,
        rho_y=y.rho,
        rho_min=minimum_steel_ratio(inputs.fy),
        as_req_x=x.as_req,
        as_req_y=y.as_req,
        as_min_x=x.as_min,
        as_min_y=y.as_min,
        over_capacity_x=x.over_capacity,
        over_capacity_y=y.over_capacity,
        num_bars_x=x.num_bars,
        num_bars_y=y.num_bars,
        spacing_x=x.spacing,
        spacing_y=y.spacing,
        beam_shear_x=vx,
        beam_shear_y=vy,
        beam_shear_capacity_x=phi_vx,
        beam_shear_capacity_y=phi_vy,
        punching_shear=vp,
        punching_shear_capacity=phi_vp,
        punching_perimeter=bo,
        beam_shear_ok_x=ok_x,
        beam_shear_ok_y=ok_y,
        punching_shear_ok=ok_p,
        steps=steps,
    )


def design_all_footings(
    footings: Iterable[CalculatedFooting],
    inputs: ReinforcementInputs,
    allowable_bearing_capacity: float,
    thickness: float | None = None,
) -> list[CriticalFooting]:
    """Design every footing independently with the same inputs.

    Footings without a plan size (zero or uplift load) are skipped.
    """
    designed: list[CriticalFooting] = []
    for footing in footings:
        if footing.dimension <= 0:
            logger.warning(
                "footing %s: no bearing load (P = %.2f Tonf), reinforcement design skipped",
                footing.unique_name, footing.total_load,
            )
            continue
        designed.append(
            design_footing_reinforcement(footing, inputs, allowable_bearing_capacity, thickness)
        )
    return designed
