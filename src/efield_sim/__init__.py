# MIT License (see LICENSE)
"""
efield_sim - A 2D electrostatics sandbox engine.

This package computes the electric field of point charges on a plane,
traces field lines, and reports Coulomb forces and Gauss's-law flux for an
interactive front end.

Main entry points:
    - Sandbox: A session holding charges, selection and Gaussian surface.
    - ChargeStore: The ordered set of point charges.
    - Charge, GaussianSurface, Bounds: Data types.
    - TracerConfig: Field-line tracing parameters.

Submodules:
    - core: Field, force, Gauss and integrator functions.
    - streamlines: Field-line tracing and arrowhead placement.
    - commands: Input command records.
    - renderer: Optional visualization adapters.

Example:
    from efield_sim import Sandbox
    from efield_sim.commands import AddCharge

    sandbox = Sandbox()
    sandbox.dispatch(AddCharge((300, 300), 2.0))
    sandbox.dispatch(AddCharge((500, 300), -2.0))
    frame = sandbox.recompute()
"""
from .sandbox import Sandbox, SandboxConfig, Frame
from .store import ChargeStore
from .streamlines import TracerConfig
from .types import Charge, GaussianSurface, Bounds

__all__ = [
    # Session
    "Sandbox",
    "SandboxConfig",
    "Frame",
    # State
    "ChargeStore",
    # Types
    "Charge",
    "GaussianSurface",
    "Bounds",
    # Field lines
    "TracerConfig",
]
