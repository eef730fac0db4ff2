"""Isolated square footing sizing from service loads.

Aggregates support reactions into footing loads, sizes each footing for the
allowable soil bearing capacity and picks the critical footing of every size
group for reinforcement design.

Units
-----
Loads in **Tonf**, plan dimensions in **m**, bearing capacity in
**Tonf/m²**, utilization in **%**.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Mapping, Sequence

from rcdesign.models.footing import (
    CalculatedFooting,
    JointReaction,
    PointLocation,
    ProcessedFooting,
    UtilizationBand,
)
from rcdesign.utils.constants import (
    FOOTING_DIMENSION_STEP,
    UTILIZATION_CAUTION,
    UTILIZATION_LIMIT,
)
from rcdesign.utils.units import round_up_to

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Load aggregation
# ---------------------------------------------------------------------------

def aggregate_joint_reactions(
    reactions: Iterable[JointReaction],
) -> dict[str, tuple[float, float]]:
    """Sum reactions per joint into ``(dl_sdl, ll)``.

    Load cases whose name contains ``DL`` or ``SDL`` (case-insensitive) are
    dead loads; otherwise names containing ``LL`` are live loads. Other cases
    are ignored.
    """
    loads: dict[str, tuple[float, float]] = {}
    for reaction in reactions:
        dl_sdl, ll = loads.get(reaction.unique_name, (0.0, 0.0))
        case = reaction.output_case.upper()
        if "DL" in case or "SDL" in case:
            dl_sdl += reaction.fz
        elif "LL" in case:
            ll += reaction.fz
        loads[reaction.unique_name] = (dl_sdl, ll)
    return loads


def merge_footing_data(
    locations: Iterable[PointLocation],
    loads: Mapping[str, tuple[float, float]],
) -> list[ProcessedFooting]:
    """Join locations with aggregated loads; joints without loads are dropped."""
    footings: list[ProcessedFooting] = []
    for location in locations:
        if location.unique_name not in loads:
            continue
        dl_sdl, ll = loads[location.unique_name]
        footings.append(ProcessedFooting(
            unique_name=location.unique_name,
            x=location.x,
            y=location.y,
            dl_sdl=dl_sdl,
            ll=ll,
            total_load=dl_sdl + ll,
        ))
    return footings


def process_footings(
    reactions: Iterable[JointReaction],
    locations: Iterable[PointLocation],
) -> list[ProcessedFooting]:
    """Reactions and locations to :class:`ProcessedFooting` records."""
    return merge_footing_data(locations, aggregate_joint_reactions(reactions))


# ---------------------------------------------------------------------------
# Sizing
# ---------------------------------------------------------------------------

def round_up_to_02m(value: float) -> float:
    """Round a plan dimension up to the next 0.2 m."""
    return round_up_to(value, FOOTING_DIMENSION_STEP)


def calculate_footing_dimensions(
    footing: ProcessedFooting,
    allowable_bearing_capacity: float,
) -> CalculatedFooting:
    """Size a square footing.

    ``A_req = P / qa``, ``B = sqrt(A_req)`` rounded up to 0.2 m and
    ``U = P / (B² qa) × 100``. A footing with no bearing load (zero or net
    uplift) gets ``A_req = B = U = 0``.
    """
    if footing.total_load <= 0:
        logger.warning(
            "footing %s: no bearing load (P = %.2f Tonf), sized as 0 m",
            footing.unique_name, footing.total_load,
        )
        required_area = dimension = utilization = 0.0
    else:
        required_area = footing.total_load / allowable_bearing_capacity
        dimension = round_up_to_02m(math.sqrt(required_area))
        utilization = footing.total_load / (dimension * dimension) / allowable_bearing_capacity * 100

    return CalculatedFooting(
        **footing.model_dump(),
        required_area=required_area,
        dimension=dimension,
        utilization_ratio=utilization,
    )


def calculate_all_footings(
    footings: Iterable[ProcessedFooting],
    allowable_bearing_capacity: float,
) -> list[CalculatedFooting]:
    """Size every footing independently."""
    return [
        calculate_footing_dimensions(footing, allowable_bearing_capacity)
        for footing in footings
    ]


def utilization_band(utilization_ratio: float) -> UtilizationBand:
    """Reporting band for a utilization ratio in %."""
    if utilization_ratio > UTILIZATION_LIMIT:
        return UtilizationBand.OVERLOAD
    if utilization_ratio > UTILIZATION_CAUTION:
        return UtilizationBand.CAUTION
    return UtilizationBand.OK


def select_critical_footings(
    footings: Sequence[CalculatedFooting],
) -> list[CalculatedFooting]:
    """Highest-utilization footing of each size group, smallest size first.

    Footings are grouped by dimension rounded to 2 decimals; on equal
    utilization the first footing of the group is kept. Footings without a
    plan size are left out.
    """
    groups: dict[str, CalculatedFooting] = {}
    for footing in footings:
        if footing.dimension <= 0:
            logger.info("footing %s: zero size, not a critical footing", footing.unique_name)
            continue
        key = f"{footing.dimension:.2f}"
        current = groups.get(key)
        if current is None or footing.utilization_ratio > current.utilization_ratio:
            groups[key] = footing

    return sorted(groups.values(), key=lambda f: f.dimension)
