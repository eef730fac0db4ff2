"""Console summaries of beam and footing design results.

Each ``summarise_*`` function turns a result model into a multi-line string
for console output; ``format_steps`` renders the equation trace.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from rcdesign.core.footing import utilization_band
from rcdesign.models.footing import CriticalFooting, CalculatedFooting
from rcdesign.models.inputs import CalculationMethod
from rcdesign.models.outputs import (
    CalculationStep,
    DoubleBeamResults,
    SingleBeamResults,
)

_WIDTH = 80


def _ok(flag: bool) -> str:
    return "OK" if flag else "NOT OK"


def _fmt(value: Optional[float], fmt: str) -> str:
    """Right-aligned number, or a marker where the section cannot carry the moment."""
    if value is None:
        return f"{'exceeds section':>12s}"
    return f"{value:>12{fmt}}"


def _header(lines: list[str], title: str) -> None:
    lines.append("=" * _WIDTH)
    lines.append(title)
    lines.append("=" * _WIDTH)


def _section(lines: list[str], title: str) -> None:
    lines.append("")
    lines.append(f"  {title}")
    lines.append("  " + "-" * (_WIDTH - 4))


def _wants(method: Optional[CalculationMethod], target: CalculationMethod) -> bool:
    return method is None or method == target


def format_steps(steps: Iterable[CalculationStep]) -> str:
    """Render an equation trace, one numbered step per block."""
    lines: list[str] = []
    for step in steps:
        unit = f" {step.unit}" if step.unit else ""
        lines.append(f"  {step.step_number:>2d}. {step.description}")
        lines.append(f"      {step.formula}")
        lines.append(f"      {step.substitution}")
        lines.append(f"      = {step.result:.4g}{unit}")
    return "\n".join(lines)


def summarise_single_beam(
    name: str,
    result: Optional[SingleBeamResults],
    method: Optional[CalculationMethod] = None,
    show_steps: bool = False,
) -> str:
    """Return a human-readable summary of a singly reinforced beam.

    Parameters
    ----------
    name : str
        Beam identifier shown in the header.
    result : SingleBeamResults or None
        Output from ``design_single_beam``; None when no bars are defined.
    method : CalculationMethod, optional
        Restrict the summary to one design method.
    show_steps : bool
        Append the equation trace of each method.
    """
    lines: list[str] = []
    _header(lines, f"SINGLY REINFORCED BEAM {name}")
    if result is None:
        lines.append("  No reinforcement defined - no result")
        return "\n".join(lines)

    sec = result.section
    _section(lines, "SECTION")
    lines.append(f"    {'Effective depth d (cm)':35s}  {sec.effective_depth:>12.2f}")
    lines.append(f"    {'Steel area As (cm²)':35s}  {sec.total_steel_area:>12.3f}")
    lines.append(f"    {'Steel ratio ρ':35s}  {sec.steel_ratio:>12.5f}")

    if _wants(method, CalculationMethod.WSD):
        wsd = result.wsd
        _section(lines, "WORKING STRESS DESIGN")
        lines.append(f"    {'Modular ratio n':35s}  {wsd.modular_ratio:>12.3f}")
        lines.append(f"    {'k / j':35s}  {wsd.k:>12.4f}  {wsd.j:>8.4f}")
        lines.append(f"    {'Mc (kg-m)':35s}  {wsd.moment_concrete:>12.2f}")
        lines.append(f"    {'Ms (kg-m)':35s}  {wsd.moment_steel:>12.2f}")
        lines.append(f"    {'Moment capacity M (kg-m)':35s}  {wsd.moment_capacity:>12.2f}  ({wsd.governing})")
        lines.append(f"    {'Shear capacity V (kg)':35s}  {wsd.shear_capacity:>12.2f}")
        if show_steps:
            lines.append(format_steps(wsd.steps))

    if _wants(method, CalculationMethod.SDM):
        sdm = result.sdm
        _section(lines, "STRENGTH DESIGN")
        lines.append(f"    {'β1':35s}  {sdm.beta1:>12.3f}")
        lines.append(f"    {'ρb / ρmax':35s}  {sdm.balanced_ratio:>12.5f}  {sdm.max_ratio:>8.5f}")
        lines.append(f"    {'Under-reinforced (ρ ≤ ρmax)':35s}  {_ok(sdm.is_under_reinforced):>12s}")
        lines.append(f"    {'Block depth a (cm)':35s}  {sdm.compression_block_depth:>12.2f}")
        lines.append(f"    {'φMn (kg-m)':35s}  {sdm.design_moment:>12.2f}")
        lines.append(f"    {'φVn (kg)':35s}  {sdm.design_shear:>12.2f}")
        if show_steps:
            lines.append(format_steps(sdm.steps))

    lines.append("")
    lines.append("=" * _WIDTH)
    lines.append(f"  STATUS : {result.status.value.upper()}")
    lines.append("=" * _WIDTH)
    return "\n".join(lines)


def summarise_double_beam(
    name: str,
    result: Optional[DoubleBeamResults],
    method: Optional[CalculationMethod] = None,
    show_steps: bool = False,
) -> str:
    """Return a human-readable summary of a doubly reinforced beam."""
    lines: list[str] = []
    _header(lines, f"DOUBLY REINFORCED BEAM {name}")
    if result is None:
        lines.append("  Tension and compression reinforcement required - no result")
        return "\n".join(lines)

    sec = result.section
    _section(lines, "SECTION")
    lines.append(f"    {'d / d′ (cm)':35s}  {sec.effective_depth:>12.2f}  {sec.effective_depth_prime:>8.2f}")
    lines.append(f"    {'As / As′ (cm²)':35s}  {sec.tension_steel_area:>12.3f}  {sec.compression_steel_area:>8.3f}")

    if _wants(method, CalculationMethod.WSD):
        wsd = result.wsd
        _section(lines, "WORKING STRESS DESIGN")
        lines.append(f"    {'n / (2n - 1)':35s}  {wsd.modular_ratio:>12.3f}  {wsd.transformed_ratio:>8.3f}")
        lines.append(f"    {'Neutral axis kd (cm)':35s}  {wsd.neutral_axis_depth:>12.2f}")
        lines.append(f"    {'fs′ (kg/cm²)':35s}  {wsd.compression_steel_stress:>12.1f}")
        lines.append(f"    {'Moment capacity M (kg-m)':35s}  {wsd.moment_capacity:>12.2f}")
        lines.append(f"    {'Shear capacity V (kg)':35s}  {wsd.shear_capacity:>12.2f}")
        if show_steps:
            lines.append(format_steps(wsd.steps))

    if _wants(method, CalculationMethod.SDM):
        sdm = result.sdm
        _section(lines, "STRENGTH DESIGN")
        lines.append(f"    {'ρ - ρ′ / ρmax':35s}  {sdm.net_tension_ratio:>12.5f}  {sdm.max_ratio:>8.5f}")
        lines.append(f"    {'Compression steel yields':35s}  {'yes' if sdm.compression_steel_yields else 'no':>12s}")
        lines.append(f"    {'Neutral axis c (cm)':35s}  {sdm.neutral_axis_depth:>12.2f}")
        lines.append(f"    {'fs′ (kg/cm²)':35s}  {sdm.compression_steel_stress:>12.1f}")
        lines.append(f"    {'φMn (kg-m)':35s}  {sdm.design_moment:>12.2f}")
        lines.append(f"    {'φVn (kg)':35s}  {sdm.design_shear:>12.2f}")
        if show_steps:
            lines.append(format_steps(sdm.steps))

    for note in result.notes:
        lines.append(f"  NOTE: {note}")

    lines.append("")
    lines.append("=" * _WIDTH)
    lines.append(f"  STATUS : {result.status.value.upper()}")
    lines.append("=" * _WIDTH)
    return "\n".join(lines)


def summarise_footing_sizes(footings: Sequence[CalculatedFooting]) -> str:
    """Tabulate the plan size and soil utilization of every footing."""
    lines: list[str] = []
    _header(lines, "FOOTING SIZING")
    lines.append(
        f"  {'Joint':>8s}  {'DL+SDL':>8s}  {'LL':>8s}  {'P (T)':>8s}"
        f"  {'A req':>8s}  {'B (m)':>6s}  {'U (%)':>7s}  {'Band':>8s}"
    )
    for f in footings:
        band = utilization_band(f.utilization_ratio).value.upper()
        lines.append(
            f"  {f.unique_name:>8s}  {f.dl_sdl:>8.2f}  {f.ll:>8.2f}  {f.total_load:>8.2f}"
            f"  {f.required_area:>8.3f}  {f.dimension:>6.2f}  {f.utilization_ratio:>7.1f}  {band:>8s}"
        )
    return "\n".join(lines)


def summarise_critical_footing(footing: CriticalFooting, show_steps: bool = False) -> str:
    """Return a human-readable summary of a footing reinforcement design."""
    lines: list[str] = []
    _header(lines, f"FOOTING {footing.unique_name}  ({footing.dimension:.2f} x {footing.dimension:.2f} m)")

    lines.append("")
    lines.append("  GEOMETRY AND LOADS")
    lines.append(f"    Factored load Pu         : {footing.factored_load:>10.2f} Tonf")
    lines.append(f"    Soil pressure qu         : {footing.soil_pressure:>10.2f} Tonf/m²")
    lines.append(f"    Thickness h              : {footing.footing_thickness:>10.2f} m")
    lines.append(f"    Effective depth d        : {footing.effective_depth:>10.3f} m")
    if footing.thickness_converged is False:
        lines.append("    NOTE: punching shear not satisfied within the thickness search")

    _section(lines, "FLEXURE")
    lines.append(f"    {'':35s}  {'X':>12s}  {'Y':>12s}")
    lines.append(f"    {'Mu (Tonf-m)':35s}  {footing.moment_x:>12.2f}  {footing.moment_y:>12.2f}")
    lines.append(f"    {'Rn (kg/cm²)':35s}  {footing.rn_x:>12.2f}  {footing.rn_y:>12.2f}")
    lines.append(f"    {'ρ / ρmin':35s}  {_fmt(footing.rho_x, '.5f')}  {_fmt(footing.rho_y, '.5f')}"
                 f"  {footing.rho_min:>8.4f}")
    lines.append(
        f"    {'As required (cm²)':35s}  {_fmt(footing.as_req_x, '.2f')}  {_fmt(footing.as_req_y, '.2f')}"
    )
    lines.append(f"    {'As minimum (cm²)':35s}  {footing.as_min_x:>12.2f}  {footing.as_min_y:>12.2f}")
    lines.append(f"    {'Bars':35s}  {footing.num_bars_x:>12d}  {footing.num_bars_y:>12d}")
    lines.append(f"    {'Spacing (mm)':35s}  {footing.spacing_x:>12.0f}  {footing.spacing_y:>12.0f}")
    lines.append(
        f"    {'Status':35s}  {_ok(not footing.over_capacity_x):>12s}  {_ok(not footing.over_capacity_y):>12s}"
    )

    _section(lines, "ONE-WAY SHEAR")
    lines.append(f"    {'':35s}  {'X':>12s}  {'Y':>12s}")
    lines.append(f"    {'Vu (Tonf)':35s}  {footing.beam_shear_x:>12.2f}  {footing.beam_shear_y:>12.2f}")
    lines.append(
        f"    {'φVc (Tonf)':35s}  {footing.beam_shear_capacity_x:>12.2f}  {footing.beam_shear_capacity_y:>12.2f}"
    )
    lines.append(
        f"    {'Status':35s}  {_ok(footing.beam_shear_ok_x):>12s}  {_ok(footing.beam_shear_ok_y):>12s}"
    )

    _section(lines, "PUNCHING SHEAR")
    lines.append(f"    {'Perimeter bo (m)':35s}  {footing.punching_perimeter:>12.3f}")
    lines.append(f"    {'Vu (Tonf)':35s}  {footing.punching_shear:>12.2f}")
    lines.append(f"    {'φVc (Tonf)':35s}  {footing.punching_shear_capacity:>12.2f}")
    lines.append(f"    {'Status':35s}  {_ok(footing.punching_shear_ok):>12s}")
    if show_steps:
        _section(lines, "CALCULATION STEPS")
        lines.append(format_steps(footing.steps))

    lines.append("")
    lines.append("=" * _WIDTH)
    lines.append(f"  STATUS : {footing.status.value.upper()}")
    lines.append("=" * _WIDTH)
    return "\n".join(lines)
