# MIT License (see LICENSE)
"""
Input commands sent by the front end to a Sandbox.

Pointer and keyboard events are translated by the front end into these
small immutable records, so the physics never sees a UI event object.
"""
from __future__ import annotations
import math
from dataclasses import dataclass

from .util import f64


@dataclass(frozen=True)
class AddCharge:
    """Place a charge. magnitude may be raw text from a prompt."""
    position: tuple[float, float]
    magnitude: float | str


@dataclass(frozen=True)
class MoveCharge:
    """Drag an existing charge to a new position."""
    charge_id: int
    position: tuple[float, float]


@dataclass(frozen=True)
class RemoveAt:
    """Delete every charge under the pointer."""
    point: tuple[float, float]


@dataclass(frozen=True)
class QueryPoint:
    """Hover readout of the field at a point."""
    point: tuple[float, float]


@dataclass(frozen=True)
class ClearCharges:
    pass


@dataclass(frozen=True)
class SelectCharge:
    """Toggle a charge in the two-charge Coulomb selection."""
    charge_id: int


@dataclass(frozen=True)
class ToggleGaussSurface:
    pass


@dataclass(frozen=True)
class MoveGaussSurface:
    center: tuple[float, float]


Command = (
    AddCharge | MoveCharge | RemoveAt | QueryPoint | ClearCharges
    | SelectCharge | ToggleGaussSurface | MoveGaussSurface
)


def parse_magnitude(value: float | int | str) -> float:
    """
    Validate a user-supplied charge magnitude in µC.

    Accepts numbers and numeric strings (surrounding whitespace ignored).
    Zero and negative values are valid.

    Raises:
        ValueError: For empty, non-numeric, NaN or infinite input.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a charge magnitude: {value!r}")
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty charge magnitude")
        try:
            q = float(text)
        except ValueError:
            raise ValueError(f"Not a number: {value!r}") from None
    elif isinstance(value, (int, float)):
        q = float(value)
    else:
        raise ValueError(f"Not a charge magnitude: {value!r}")

    if not math.isfinite(q):
        raise ValueError(f"Charge magnitude must be finite, got {value!r}")
    return q


def as_point(p) -> tuple[float, float]:
    """Normalize a point-like to a (x, y) float tuple."""
    v = f64(p)
    if v.shape != (2,):
        raise ValueError(f"Expected a 2D point, got shape {v.shape}")
    return float(v[0]), float(v[1])
