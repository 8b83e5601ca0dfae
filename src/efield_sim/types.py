# MIT License (see LICENSE)
"""
Core type definitions for the 2D electrostatics sandbox.

Defines the fundamental data structures:
- Charge: a point charge placed by the user.
- FieldSample: the result of querying the field at a point.
- StreamlineSegment / Streamline: traced field-line geometry.
- GaussianSurface: a circle used for enclosed-charge analysis.
- Bounds: the rectangular simulation domain.
- FieldArrow / Arrowhead: renderable glyphs produced by the core.

Vectors are float64 numpy arrays of shape (2,).
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from .constants import DEFAULT_HIT_RADIUS
from .util import f64, dist2, norm


# =============================================================================
# Charges
# =============================================================================

@dataclass(eq=False)
class Charge:
    """
    A point charge on the plane.

    Attributes:
        position: Position [x, y] in canvas units. The only field that is
                  mutated after creation (dragging).
        magnitude: Signed charge in microcoulombs (µC). Zero is allowed.
        hit_radius: Pick radius used for hit-testing and seed exclusion.
        id: Unique identifier assigned by ChargeStore.add().
    """
    position: np.ndarray | tuple[float, float]
    magnitude: float
    hit_radius: float = DEFAULT_HIT_RADIUS
    id: int = -1

    def __post_init__(self) -> None:
        """Convert position to a float64 array for consistent numerics."""
        self.position = f64(self.position)
        self.magnitude = float(self.magnitude)

    def contains(self, point) -> bool:
        """True when point lies strictly inside the hit radius."""
        return dist2(point, self.position) < self.hit_radius * self.hit_radius


# =============================================================================
# Field queries
# =============================================================================

@dataclass(frozen=True)
class FieldSample:
    """
    Field value at a point.

    For a raw sample ``vector`` is the field in N/C; for a normalized sample
    it is the unit direction (or zero) and ``magnitude`` keeps |E|.
    """
    vector: np.ndarray
    magnitude: float

    @property
    def is_zero(self) -> bool:
        return self.magnitude == 0.0


@dataclass(frozen=True)
class FieldArrow:
    """One arrow of the vector-grid view: log-scaled length and opacity."""
    start: np.ndarray
    end: np.ndarray
    magnitude: float
    alpha: float


# =============================================================================
# Field lines
# =============================================================================

@dataclass(frozen=True)
class StreamlineSegment:
    """
    One integration step of a field line.

    Attributes:
        start: Segment start point.
        end: Segment end point.
        direction: Unit field direction used for the step, for arrowheads.
    """
    start: np.ndarray
    end: np.ndarray
    direction: np.ndarray

    @property
    def length(self) -> float:
        return norm(self.end - self.start)

    def flipped(self) -> "StreamlineSegment":
        """Same segment walked the other way."""
        return StreamlineSegment(start=self.end, end=self.start, direction=-self.direction)


@dataclass(frozen=True)
class Streamline:
    """
    An ordered, continuous sequence of segments forming one field line.

    Segments are ordered along the field: each segment's end is the next
    segment's start, and every direction points with the field.
    """
    segments: tuple[StreamlineSegment, ...] = ()

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self):
        return iter(self.segments)

    @property
    def start(self) -> np.ndarray:
        return self.segments[0].start

    @property
    def end(self) -> np.ndarray:
        return self.segments[-1].end

    def points(self) -> np.ndarray:
        """Polyline vertices as an [N+1, 2] array (empty for no segments)."""
        if not self.segments:
            return np.zeros((0, 2), dtype=np.float64)
        pts = [self.segments[0].start] + [s.end for s in self.segments]
        return np.vstack(pts)


@dataclass(frozen=True)
class Arrowhead:
    """Arrowhead anchor on a streamline, oriented along the field."""
    position: np.ndarray
    direction: np.ndarray


# =============================================================================
# Regions
# =============================================================================

@dataclass(eq=False)
class GaussianSurface:
    """
    Circular Gaussian surface.

    Attributes:
        center: Circle center [x, y].
        radius: Circle radius; charges strictly inside are enclosed.
    """
    center: np.ndarray | tuple[float, float] = (0.0, 0.0)
    radius: float = 1.0

    def __post_init__(self) -> None:
        self.center = f64(self.center)
        if self.radius < 0:
            raise ValueError(f"Gaussian surface radius must be >= 0, got {self.radius}")

    def contains(self, point) -> bool:
        """True when point lies strictly inside the circle."""
        return dist2(point, self.center) < self.radius * self.radius


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned simulation domain, inclusive on every edge."""
    xmin: float = 0.0
    ymin: float = 0.0
    xmax: float = 800.0
    ymax: float = 600.0

    def __post_init__(self) -> None:
        if self.xmax <= self.xmin or self.ymax <= self.ymin:
            raise ValueError(f"Degenerate bounds: {self}")

    @property
    def center(self) -> np.ndarray:
        return f64(((self.xmin + self.xmax) / 2, (self.ymin + self.ymax) / 2))

    def contains(self, point) -> bool:
        x, y = float(point[0]), float(point[1])
        return self.xmin <= x <= self.xmax and self.ymin <= y <= self.ymax

    def grid(self, spacing: float) -> np.ndarray:
        """
        Cell-centred grid points, [N, 2] in row-major (x outer, y inner) order.

        Points sit at ``min + spacing/2 + i*spacing`` strictly below the max
        edge, matching the arrow-grid and seed layout.
        """
        if spacing <= 0:
            raise ValueError(f"Grid spacing must be > 0, got {spacing}")
        xs = np.arange(self.xmin + spacing / 2, self.xmax, spacing, dtype=np.float64)
        ys = np.arange(self.ymin + spacing / 2, self.ymax, spacing, dtype=np.float64)
        X, Y = np.meshgrid(xs, ys, indexing="ij")
        return np.column_stack([X.ravel(), Y.ravel()])


# Info-panel readings
@dataclass(frozen=True)
class GaussReading:
    """Enclosed charge (µC) and flux (N·m²/C) for one surface."""
    surface: GaussianSurface
    enclosed_charge: float
    flux: float


@dataclass(frozen=True)
class ForceReading:
    """Coulomb force magnitude between two charges, with display indices."""
    a: Charge
    b: Charge
    index_a: int
    index_b: int
    force: float


@dataclass(frozen=True)
class ChargeListing:
    """One row of the charge list: stable 1-based number and label."""
    index: int
    charge: Charge
    label: str = field(default="")
