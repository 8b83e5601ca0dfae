# MIT License (see LICENSE)
"""
Coulomb force between point charges.

Only the magnitude is computed: the info panel displays |F| for the two
selected charges, and the direction follows trivially from their signs.
"""
from __future__ import annotations

from ..constants import K_COULOMB, MICRO, FORCE_MIN_R2
from ..types import Charge
from ..util import dist2


def force_between(a: Charge, b: Charge, min_r2: float = FORCE_MIN_R2) -> float:
    """
    Magnitude of the Coulomb force between two charges.

    Implements F = k |qa qb| / r² with charges converted from µC to C.

    Args:
        a: First charge.
        b: Second charge.
        min_r2: Squared separation below which the pair is treated as
                coincident and 0 is returned.

    Returns:
        Force magnitude in newtons, always >= 0.
    """
    r2 = dist2(a.position, b.position)
    if r2 < min_r2:
        return 0.0
    return K_COULOMB * abs(a.magnitude * b.magnitude) * MICRO * MICRO / r2
