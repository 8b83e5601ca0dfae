# MIT License (see LICENSE)
"""
Physical constants and fixed numeric thresholds used throughout the sandbox.

Physical constants use SI units. Charge magnitudes are entered by the user in
microcoulombs and converted with MICRO before any physics is evaluated.
Distances are in canvas units and treated as metres by the physics.
"""
from __future__ import annotations

# Coulomb's constant (electrostatic constant), k = 1/(4πε₀)
# Value: 8.9875517923 × 10⁹ N·m²/C²
# Reference: https://physics.nist.gov/cgi-bin/cuu/Value?k
K_COULOMB: float = 8.9875517923e9

# Vacuum permittivity ε₀ in F/m, used for Gauss's law Φ = Q_enc / ε₀.
EPSILON_0: float = 8.854e-12

# Microcoulombs -> coulombs.
MICRO: float = 1e-6

# Field contributions from charges closer than sqrt(SINGULARITY_R2) to the
# query point are skipped entirely (not clamped).
SINGULARITY_R2: float = 1.0

# Pairs closer than sqrt(FORCE_MIN_R2) report zero force.
FORCE_MIN_R2: float = 1.0

# Default pick radius of a charge, also its drawn radius.
DEFAULT_HIT_RADIUS: float = 12.0

# Field magnitudes below this (N/C) are not drawn in the arrow grid.
MIN_GRID_FIELD: float = 1.0
