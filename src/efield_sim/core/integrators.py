# MIT License (see LICENSE)
"""
Numerical integrator for field-line tracing.

Field lines solve dx/ds = n(x), where n is the unit field direction and s is
arc length. Because the right-hand side is normalized, every accepted step
advances roughly h along the line regardless of field strength.

Available integrators:
- heun_step: 2nd-order Runge-Kutta, midpoint form, with a zero-field exit.

Reference:
    Runge-Kutta methods: https://en.wikipedia.org/wiki/Runge-Kutta_methods
"""
from __future__ import annotations
from typing import Callable

import numpy as np

DirectionField = Callable[[np.ndarray], np.ndarray]


def heun_step(
    direction: DirectionField,
    x0: np.ndarray,
    h: float,
    sign: float = 1.0,
) -> tuple[np.ndarray, np.ndarray] | None:
    """
    Advance one step along a unit direction field.

    Stages:
        d1 = sign * n(x0)
        xm = x0 + (h/2) d1
        d2 = sign * n(xm)
        x1 = x0 + h d2

    Args:
        direction: Callable returning the unit direction (or zero) at a point.
        x0: Current position.
        h: Step length.
        sign: +1 to follow the field, -1 to walk against it.

    Returns:
        (x1, d2), or None when the direction vanishes at x0 or at the
        midpoint (no field, or exact cancellation).
    """
    d1 = sign * direction(x0)
    if not d1.any():
        return None
    xm = x0 + 0.5 * h * d1
    d2 = sign * direction(xm)
    if not d2.any():
        return None
    return x0 + h * d2, d2
