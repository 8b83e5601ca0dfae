# MIT License (see LICENSE)
"""
Electric field evaluation by superposition.

Each point charge contributes E = k q / r² along the unit displacement from
the charge to the query point. Contributions closer than the singularity
threshold are dropped rather than clamped, so a query on top of a charge
sees only the other charges.

Functions accept a ChargeStore or any iterable of Charge. The *_arrays
variants take pre-packed numpy arrays and are what the tracer uses in its
inner loop.
"""
from __future__ import annotations

import numpy as np

from ..constants import K_COULOMB, MICRO, SINGULARITY_R2, MIN_GRID_FIELD
from ..store import charge_arrays
from ..types import Bounds, FieldArrow, FieldSample
from ..util import f64, norm, zero2


def field_from_arrays(
    positions: np.ndarray,
    magnitudes: np.ndarray,
    point,
    singularity_r2: float = SINGULARITY_R2,
) -> np.ndarray:
    """
    Net field [Ex, Ey] in N/C at point.

    Args:
        positions: Charge positions [N, 2].
        magnitudes: Charges in µC [N].
        point: Query point [x, y]; any real coordinates.
        singularity_r2: Squared distance below which a charge is skipped.
    """
    if len(magnitudes) == 0:
        return zero2()
    d = f64(point) - positions
    r2 = d[:, 0] * d[:, 0] + d[:, 1] * d[:, 1]
    keep = r2 >= singularity_r2
    if not np.any(keep):
        return zero2()
    r2 = r2[keep]
    # k q / r² along d / r  ->  k q d / r³
    scale = K_COULOMB * magnitudes[keep] * MICRO / (r2 * np.sqrt(r2))
    d = d[keep]
    # Summed per component so equal and opposite contributions cancel exactly.
    return np.array([np.sum(scale * d[:, 0]), np.sum(scale * d[:, 1])])


def field_at(charges, point) -> np.ndarray:
    """
    Electric field vector at point from every charge.

    Returns the zero vector for an empty charge set or when every
    contribution falls inside the singularity threshold.
    """
    positions, magnitudes = charge_arrays(charges)
    return field_from_arrays(positions, magnitudes, point)


def sample_field(charges, point) -> FieldSample:
    """Raw field and its magnitude, for hover readouts."""
    E = field_at(charges, point)
    return FieldSample(vector=E, magnitude=norm(E))


def normalize_field(E: np.ndarray) -> FieldSample:
    """Unit direction and magnitude; zero/zero for a zero-length field."""
    mag = norm(E)
    if mag == 0.0 or not np.isfinite(mag):
        return FieldSample(vector=zero2(), magnitude=0.0)
    return FieldSample(vector=E / mag, magnitude=mag)


def normalized_field_at(charges, point) -> FieldSample:
    """Unit field direction at point plus |E|."""
    return normalize_field(field_at(charges, point))


def field_on_points(positions: np.ndarray, magnitudes: np.ndarray, points: np.ndarray) -> np.ndarray:
    """
    Vectorized field over many query points.

    Args:
        positions: Charge positions [N, 2].
        magnitudes: Charges in µC [N].
        points: Query points [M, 2].

    Returns:
        Field vectors [M, 2].
    """
    points = f64(points).reshape(-1, 2)
    if len(magnitudes) == 0:
        return np.zeros_like(points)
    d = points[:, None, :] - positions[None, :, :]          # [M, N, 2]
    r2 = d[..., 0] * d[..., 0] + d[..., 1] * d[..., 1]         # [M, N]
    keep = r2 >= SINGULARITY_R2
    safe_r2 = np.where(keep, r2, 1.0)
    scale = np.where(keep, K_COULOMB * magnitudes * MICRO / (safe_r2 * np.sqrt(safe_r2)), 0.0)
    return np.stack([np.sum(scale * d[..., 0], axis=1), np.sum(scale * d[..., 1], axis=1)], axis=1)


def field_grid(charges, bounds: Bounds, spacing: float = 40.0) -> list[FieldArrow]:
    """
    Arrow-grid view of the field.

    Grid points sit at cell centres (see Bounds.grid). Points with |E| below
    MIN_GRID_FIELD are skipped. Arrow length and opacity scale with
    log10|E| so that the far field stays visible:
        length = min(5 log10|E|, spacing/2)
        alpha  = min(log10|E| / 8, 0.8)
    """
    positions, magnitudes = charge_arrays(charges)
    points = bounds.grid(spacing)
    if len(magnitudes) == 0 or len(points) == 0:
        return []

    E = field_on_points(positions, magnitudes, points)
    mags = np.hypot(E[:, 0], E[:, 1])

    arrows: list[FieldArrow] = []
    for p, e, mag in zip(points, E, mags):
        if mag < MIN_GRID_FIELD:
            continue
        log_mag = float(np.log10(mag))
        length = min(log_mag * 5.0, spacing / 2)
        alpha = min(log_mag / 8.0, 0.8)
        end = p + (e / mag) * length
        arrows.append(FieldArrow(start=p.copy(), end=end, magnitude=float(mag), alpha=alpha))
    return arrows
