"""
Beam design orchestrator.

Coordinates one complete recomputation for an input snapshot:
1. Section properties (d, As, rho)
2. Working stress design
3. Strength design

Returns None when the reinforcement is not defined yet, so callers can show
"no result" instead of an error.
"""

from typing import List, Optional

from rcdesign.core.double_beam import calculate_double_sdm, calculate_double_wsd
from rcdesign.core.sdm import calculate_sdm
from rcdesign.core.section import (
    calculate_double_section_properties, calculate_section_properties
)
from rcdesign.core.wsd import calculate_wsd
from rcdesign.models.inputs import BeamInputs, DoubleBeamInputs
from rcdesign.models.outputs import DoubleBeamResults, SingleBeamResults


def design_single_beam(inputs: BeamInputs) -> Optional[SingleBeamResults]:
    """
    WSD and SDM capacities of a singly reinforced beam.

    Args:
        inputs: Beam geometry, materials and reinforcement

    Returns:
        SingleBeamResults, or None when ``inputs.layers`` is empty
    """
    if not inputs.layers:
        return None

    section = calculate_section_properties(inputs)
    return SingleBeamResults(
        section=section,
        wsd=calculate_wsd(inputs, section),
        sdm=calculate_sdm(inputs, section),
    )


def design_double_beam(inputs: DoubleBeamInputs) -> Optional[DoubleBeamResults]:
    """
    WSD and SDM capacities of a doubly reinforced beam.

    Returns:
        DoubleBeamResults, or None unless both layer lists are non-empty
    """
    if not inputs.tension_layers or not inputs.compression_layers:
        return None

    section = calculate_double_section_properties(inputs)
    wsd = calculate_double_wsd(inputs, section)
    sdm = calculate_double_sdm(inputs, section)

    notes: List[str] = []
    if not sdm.compression_steel_yields:
        notes.append(
            f"Compression steel does not yield (fs' = {sdm.compression_steel_stress:.0f} kg/cm²)"
        )
    if not sdm.converged:
        notes.append(f"Compression steel stress not converged after {sdm.iterations} iterations")
    if not sdm.is_under_reinforced:
        notes.append("Net tension steel ratio exceeds ρmax")

    return DoubleBeamResults(section=section, wsd=wsd, sdm=sdm, notes=notes)
