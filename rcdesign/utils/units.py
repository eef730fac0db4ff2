"""Unit conversion and rounding helpers.

Beam sections work in **cm** and **kg**; footings in **m** and **Tonf**.
"""

from __future__ import annotations

import math

_GRID_TOLERANCE: float = 1e-9


def round_up_to(value: float, step: float) -> float:
    """Round *value* up to the next multiple of *step*.

    Values already on the grid (within floating-point noise) are returned
    unchanged, so the function is idempotent::

        round_up_to(round_up_to(x, 0.2), 0.2) == round_up_to(x, 0.2)
    """
    steps = math.ceil(value / step - _GRID_TOLERANCE)
    return round(steps * step, 10)


def mm_to_cm(mm: float) -> float:
    """Convert millimetres to centimetres."""
    return mm / 10.0


def mm_to_m(mm: float) -> float:
    """Convert millimetres to metres."""
    return mm / 1_000.0


def m_to_cm(m: float) -> float:
    """Convert metres to centimetres."""
    return m * 100.0


def m_to_mm(m: float) -> float:
    """Convert metres to millimetres."""
    return m * 1_000.0


def kg_cm_to_kg_m(moment: float) -> float:
    """Convert a moment in kg-cm to kg-m."""
    return moment / 100.0


def kg_to_tonf(kg: float) -> float:
    """Convert kilograms-force to tonnes-force."""
    return kg / 1_000.0


def tonf_m_to_kgf_cm(moment: float) -> float:
    """Convert a moment in Tonf-m to kgf-cm."""
    return moment * 100_000.0
