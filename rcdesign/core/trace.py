"""Equation trace helper shared by the solvers."""

from typing import List

from rcdesign.models.outputs import CalculationStep


def add_step(
    steps: List[CalculationStep],
    description: str,
    formula: str,
    substitution: str,
    result: float,
    unit: str = "",
) -> float:
    """Append a numbered step and return ``result`` for inline use."""
    steps.append(CalculationStep(
        step_number=len(steps) + 1,
        description=description,
        formula=formula,
        substitution=substitution,
        result=result,
        unit=unit,
    ))
    return result
