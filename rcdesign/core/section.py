"""
Section geometry for rectangular RC beams.

Computes steel areas, layer centroids, effective depths (d and d') and
steel ratios. All lengths in cm; bar diameters are tabulated in mm and
converted here.
"""

from typing import List, Sequence

import numpy as np

from rcdesign.core.materials import deformed_bar_data, round_bar_data
from rcdesign.models.inputs import (
    BeamInputs, DoubleBeamInputs, ReinforcementLayer, RoundBar
)
from rcdesign.models.outputs import SectionProperties, DoubleSectionProperties
from rcdesign.utils.constants import LAYER_CLEAR_SPACING
from rcdesign.utils.units import mm_to_cm


def calculate_total_steel_area(layers: Sequence[ReinforcementLayer]) -> float:
    """Total bar area of all layers (cm²)."""
    return sum(deformed_bar_data[layer.bar_size].area * layer.count for layer in layers)


def layer_depths(
    layers: Sequence[ReinforcementLayer],
    first_face_offset: float,
) -> List[float]:
    """
    Distance of each layer's bar centre from the face the layers start at.

    The first layer sits ``first_face_offset`` (cover + stirrup) from the face;
    each following layer is moved inward keeping a 25 mm clear gap.

    Args:
        layers: Layers ordered from the face inward
        first_face_offset: Clear cover plus stirrup diameter (cm)

    Returns:
        Depth of each layer centre from that face (cm)
    """
    depths = []
    edge = first_face_offset  # inner edge of the previous layer
    for layer in layers:
        dia = mm_to_cm(deformed_bar_data[layer.bar_size].diameter)
        depths.append(edge + dia / 2)
        edge += dia + LAYER_CLEAR_SPACING
    return depths


def calculate_centroid_offset(
    layers: Sequence[ReinforcementLayer],
    cover: float,
    stirrup_size: RoundBar,
) -> float:
    """Area-weighted centroid of the layers measured from their own face (cm)."""
    stirrup_dia = mm_to_cm(round_bar_data[stirrup_size].diameter)
    depths = layer_depths(layers, cover + stirrup_dia)
    areas = [deformed_bar_data[layer.bar_size].area * layer.count for layer in layers]
    return float(np.average(depths, weights=areas))


def calculate_effective_depth(
    height: float,
    cover: float,
    stirrup_size: RoundBar,
    layers: Sequence[ReinforcementLayer],
) -> float:
    """
    Effective depth d from the compression face to the tension steel centroid.

    Single layer: d = h - cover - stirrup - bar/2.
    Several layers: area-weighted centroid of all layers.
    No layers: h - cover.
    """
    if not layers:
        return height - cover
    return height - calculate_centroid_offset(layers, cover, stirrup_size)


def calculate_effective_depth_prime(
    cover_top: float,
    stirrup_size: RoundBar,
    layers: Sequence[ReinforcementLayer],
) -> float:
    """Depth d' from the compression face to the compression steel centroid."""
    if not layers:
        return cover_top + mm_to_cm(round_bar_data[stirrup_size].diameter)
    return calculate_centroid_offset(layers, cover_top, stirrup_size)


def calculate_section_properties(inputs: BeamInputs) -> SectionProperties:
    """Section properties of a singly reinforced beam."""
    d = calculate_effective_depth(
        inputs.height, inputs.cover, inputs.stirrup_size, inputs.layers
    )
    As = calculate_total_steel_area(inputs.layers)

    return SectionProperties(
        effective_depth=d,
        total_steel_area=As,
        steel_ratio=As / (inputs.width * d),
        centroid_depth=d,
    )


def calculate_double_section_properties(inputs: DoubleBeamInputs) -> DoubleSectionProperties:
    """Section properties of a doubly reinforced beam."""
    d = calculate_effective_depth(
        inputs.height, inputs.cover, inputs.stirrup_size, inputs.tension_layers
    )
    d_prime = calculate_effective_depth_prime(
        inputs.cover_top, inputs.stirrup_size, inputs.compression_layers
    )
    As = calculate_total_steel_area(inputs.tension_layers)
    As_prime = calculate_total_steel_area(inputs.compression_layers)

    return DoubleSectionProperties(
        effective_depth=d,
        effective_depth_prime=d_prime,
        tension_steel_area=As,
        compression_steel_area=As_prime,
        tension_steel_ratio=As / (inputs.width * d),
        compression_steel_ratio=As_prime / (inputs.width * d),
    )
