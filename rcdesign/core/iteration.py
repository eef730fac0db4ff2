"""Bounded iteration helpers.

Both solvers that need iteration (compression steel stress in doubly
reinforced SDM, footing thickness from punching shear) run a hard-capped loop
and report whether the stopping criterion was met instead of raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IterationResult:
    """Outcome of a bounded iteration.

    Attributes
    ----------
    value : float
        Last computed value (the converged value when ``converged``).
    converged : bool
        True if the stopping criterion was met within the cap.
    iterations : int
        Number of update steps evaluated.
    """

    value: float
    converged: bool
    iterations: int


def fixed_point(
    update: Callable[[float], float],
    x0: float,
    tolerance: float,
    max_iterations: int,
) -> IterationResult:
    """Iterate ``x <- update(x)`` until ``|x_new - x| < tolerance``.

    Parameters
    ----------
    update : callable
        Map from the current estimate to the next one.
    x0 : float
        Starting estimate.
    tolerance : float
        Absolute convergence tolerance on ``x``.
    max_iterations : int
        Hard cap on the number of updates.

    Returns
    -------
    IterationResult
    """
    x = x0
    for i in range(1, max_iterations + 1):
        x_new = update(x)
        logger.debug("fixed point iteration %d: %.6f -> %.6f", i, x, x_new)
        if abs(x_new - x) < tolerance:
            return IterationResult(value=x_new, converged=True, iterations=i)
        x = x_new

    logger.warning(
        "fixed point did not converge in %d iterations (last value %.6f)",
        max_iterations, x,
    )
    return IterationResult(value=x, converged=False, iterations=max_iterations)


def grow_until(
    satisfied: Callable[[float], bool],
    x0: float,
    factor: float,
    max_iterations: int,
) -> IterationResult:
    """Multiply ``x`` by ``factor`` until ``satisfied(x)`` holds.

    The predicate is checked up to ``max_iterations`` times; the value is grown
    after each failed check, so a non-converged result returns
    ``x0 * factor ** max_iterations``.
    """
    x = x0
    for i in range(1, max_iterations + 1):
        if satisfied(x):
            return IterationResult(value=x, converged=True, iterations=i)
        logger.debug("growth iteration %d: %.6f not sufficient", i, x)
        x *= factor

    logger.warning(
        "growth search not satisfied after %d iterations (last value %.6f)",
        max_iterations, x,
    )
    return IterationResult(value=x, converged=False, iterations=max_iterations)
