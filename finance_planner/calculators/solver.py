"""Bisection search for "what input produces this target" questions.

The objective is any single-input function – a closed-form formula or a full
simulation run – that is monotonic over the search interval.  Monotonicity is
the caller's responsibility; ``increasing`` tells the solver which half to
keep.  The search always terminates: when ``max_iterations`` is reached the
midpoint of the remaining interval is returned as the best estimate.

Example
-------

>>> round(bisect(lambda x: x * x, 2.0, 0.0, 2.0, tolerance=1e-9), 6)
1.414214
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from ..errors import InvalidParameterError

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 1e-4
DEFAULT_MAX_ITERATIONS = 100


@dataclass(frozen=True)
class SolveRequest:
    objective: Callable[[float], float]
    target: float
    lower: float
    upper: float
    tolerance: float = DEFAULT_TOLERANCE
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    increasing: bool = True  # does the objective rise with its input?


@dataclass(frozen=True)
class SolveResult:
    value: float
    lower: float
    upper: float
    iterations: int
    converged: bool

    @property
    def width(self) -> float:
        return self.upper - self.lower


def solve(request: SolveRequest) -> SolveResult:
    """Bisect ``request``'s interval until it is narrower than the tolerance."""
    if request.upper < request.lower:
        raise InvalidParameterError(
            f"Search interval is empty: lower {request.lower} > upper {request.upper}."
        )
    if request.tolerance <= 0:
        raise InvalidParameterError("Tolerance must be greater than zero.")

    lo, hi = request.lower, request.upper
    iterations = 0
    while iterations < request.max_iterations and (hi - lo) > request.tolerance:
        mid = (lo + hi) / 2.0
        below = request.objective(mid) < request.target
        if below == request.increasing:
            lo = mid
        else:
            hi = mid
        iterations += 1

    converged = (hi - lo) <= request.tolerance
    if not converged:
        logger.debug(
            "Bisection stopped after %d iterations with interval [%g, %g] wider than %g",
            iterations, lo, hi, request.tolerance,
        )
    return SolveResult((lo + hi) / 2.0, lo, hi, iterations, converged)


def bisect(
    objective: Callable[[float], float],
    target: float,
    lower: float,
    upper: float,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    increasing: bool = True,
) -> float:
    """Return the input in ``[lower, upper]`` at which ``objective`` reaches ``target``."""
    request = SolveRequest(objective, target, lower, upper, tolerance, max_iterations, increasing)
    return solve(request).value


__all__ = ["SolveRequest", "SolveResult", "solve", "bisect"]
