# MIT License (see LICENSE)
"""
Gauss's law on a circular surface.

The flux is obtained analytically from the enclosed charge, Φ = Q_enc / ε₀,
rather than by integrating the field around the circle.
"""
from __future__ import annotations

from ..constants import EPSILON_0, MICRO
from ..types import GaussianSurface, GaussReading


def enclosed_charge(charges, surface: GaussianSurface) -> float:
    """Sum of magnitudes (µC) of the charges strictly inside surface."""
    return float(sum(c.magnitude for c in charges if surface.contains(c.position)))


def flux(q_enc: float) -> float:
    """Electric flux in N·m²/C for an enclosed charge given in µC."""
    return q_enc * MICRO / EPSILON_0


def gauss_reading(charges, surface: GaussianSurface) -> GaussReading:
    q = enclosed_charge(charges, surface)
    return GaussReading(surface=surface, enclosed_charge=q, flux=flux(q))
