# MIT License (see LICENSE)
"""
Core electrostatics.

This subpackage provides:
    - Field evaluation: superposition, normalized field, arrow grid.
    - Coulomb force magnitude between two charges.
    - Gauss's law: enclosed charge and flux through a circle.
    - Integrators: Heun (RK2) step over a unit direction field.

Typical usage:
    from efield_sim.core import field_at, force_between

    E = field_at(store, (200.0, 100.0))
    F = force_between(store.get(1), store.get(2))
"""
from .field import (
    field_at,
    field_grid,
    normalized_field_at,
    sample_field,
)
from .forces import force_between
from .gauss import enclosed_charge, flux, gauss_reading
from .integrators import heun_step

__all__ = [
    # Field
    "field_at",
    "field_grid",
    "normalized_field_at",
    "sample_field",
    # Force
    "force_between",
    # Gauss
    "enclosed_charge",
    "flux",
    "gauss_reading",
    # Integrators
    "heun_step",
]
