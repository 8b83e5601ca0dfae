# MIT License (see LICENSE)
"""
Field-line (streamline) tracing.

Field lines are curves tangent to E everywhere. They are traced by
integrating the *normalized* field from a regular grid of seed points:

1. Seeds are laid out at cell centres of the domain with pitch
   ``seed_spacing``. Seeds inside (or just outside) a charge's hit radius
   are discarded.
2. From each seed the line is integrated forward along E and backward
   against E with fixed-length Heun steps (see core.integrators). A
   directed trace stops when the field vanishes, when the next point leaves
   the domain, when the next point comes within ``stop_distance`` of a
   charge, or after ``max_steps`` steps.
3. The backward half is reversed and re-oriented, then joined to the
   forward half, giving one continuous line through the seed.
4. Lines whose coarse endpoint signature was already produced in the same
   pass are dropped. Two seeds on the same physical line usually yield the
   same endpoints; the bucket size trades over-merging against duplicates.
5. Arrowheads are placed at roughly even arc-length intervals.

There is no loop detection. Near weak saddle regions a line may spiral
until the step cap.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field

import numpy as np

from .core.field import field_from_arrays, normalize_field
from .core.integrators import heun_step
from .store import charge_arrays
from .types import Arrowhead, Bounds, Streamline, StreamlineSegment
from .util import f64

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TracerConfig:
    """
    Tracing parameters.

    Attributes:
        bounds: Domain; traces stop when they would leave it.
        seed_spacing: Pitch S of the seed grid.
        step_size: Integration step h (arc length per step).
        max_steps: Step cap N_max per directed trace.
        stop_distance: A trace stops when the next point is closer than
                       this to any charge.
        seed_margin: Extra clearance added to each charge's hit radius when
                     discarding seeds.
        arrow_interval: Arc length between arrowheads.
        dedup_bucket: Endpoint rounding bucket for duplicate detection.
    """
    bounds: Bounds = field(default_factory=Bounds)
    seed_spacing: float = 40.0
    step_size: float = 2.0
    max_steps: int = 600
    stop_distance: float = 6.0
    seed_margin: float = 2.0
    arrow_interval: float = 60.0
    dedup_bucket: float = 8.0

    def __post_init__(self) -> None:
        for name in ("seed_spacing", "step_size", "arrow_interval", "dedup_bucket"):
            value = getattr(self, name)
            if not value > 0:
                raise ValueError(f"{name} must be > 0, got {value}")
        if self.max_steps < 1:
            raise ValueError(f"max_steps must be >= 1, got {self.max_steps}")
        if self.stop_distance < 0 or self.seed_margin < 0:
            raise ValueError("stop_distance and seed_margin must be >= 0")


class _ChargeField:
    """Packed charge snapshot with the queries the tracer needs."""

    def __init__(self, charges) -> None:
        charges = list(charges)
        self.positions, self.magnitudes = charge_arrays(charges)
        self.hit_radii = np.array([c.hit_radius for c in charges], dtype=np.float64)

    def __len__(self) -> int:
        return len(self.magnitudes)

    def direction(self, p: np.ndarray) -> np.ndarray:
        """Unit field direction at p, zero where the field vanishes."""
        return normalize_field(field_from_arrays(self.positions, self.magnitudes, p)).vector

    def within(self, p: np.ndarray, radii) -> bool:
        """True if p is strictly closer than radii to any charge."""
        if len(self) == 0:
            return False
        d = self.positions - p
        r2 = np.einsum("ij,ij->i", d, d)
        return bool(np.any(r2 < np.square(radii)))


def seed_points(charges, config: TracerConfig) -> list[np.ndarray]:
    """Seed grid with points on or near a charge removed."""
    cf = charges if isinstance(charges, _ChargeField) else _ChargeField(charges)
    clearance = cf.hit_radii + config.seed_margin
    return [p for p in config.bounds.grid(config.seed_spacing) if not cf.within(p, clearance)]


def _trace(cf: _ChargeField, seed: np.ndarray, config: TracerConfig, sign: float) -> list[StreamlineSegment]:
    """One directed trace. Segment directions are those used for the step."""
    bounds = config.bounds
    h = config.step_size
    p = f64(seed)
    segments: list[StreamlineSegment] = []
    for _ in range(config.max_steps):
        step = heun_step(cf.direction, p, h, sign)
        if step is None:
            break
        nxt, d = step
        if not bounds.contains(nxt) or cf.within(nxt, config.stop_distance):
            break
        segments.append(StreamlineSegment(start=p, end=nxt, direction=d))
        p = nxt
    return segments


def trace_streamline(charges, seed, config: TracerConfig | None = None) -> Streamline:
    """
    Bidirectional field line through seed.

    The backward trace walks against the field; its segments are reversed
    and flipped so the whole line runs with the field and stays continuous.
    """
    config = config or TracerConfig()
    cf = charges if isinstance(charges, _ChargeField) else _ChargeField(charges)
    if len(cf) == 0:
        return Streamline()
    forward = _trace(cf, seed, config, 1.0)
    backward = _trace(cf, seed, config, -1.0)
    joined = [s.flipped() for s in reversed(backward)] + forward
    return Streamline(segments=tuple(joined))


def streamline_signature(line: Streamline, bucket: float) -> tuple[int, int, int, int]:
    """Coarse key from the rounded first start point and last end point."""
    sx, sy = line.start
    ex, ey = line.end
    return (
        round(float(sx) / bucket),
        round(float(sy) / bucket),
        round(float(ex) / bucket),
        round(float(ey) / bucket),
    )


def trace_field_lines(charges, config: TracerConfig | None = None) -> list[Streamline]:
    """
    Trace every seed and return the deduplicated field lines.

    Output order follows the seed grid order. Empty charge sets give no
    lines, since the normalized field is undefined everywhere.
    """
    config = config or TracerConfig()
    cf = _ChargeField(charges)
    if len(cf) == 0:
        return []

    seen: set[tuple[int, int, int, int]] = set()
    lines: list[Streamline] = []
    seeds = seed_points(cf, config)
    for seed in seeds:
        line = trace_streamline(cf, seed, config)
        if not line.segments:
            continue
        key = streamline_signature(line, config.dedup_bucket)
        if key in seen:
            continue
        seen.add(key)
        lines.append(line)

    logger.debug("Traced %d seeds -> %d field lines", len(seeds), len(lines))
    return lines


def place_arrowheads(line: Streamline, interval: float) -> list[Arrowhead]:
    """
    Arrowheads at roughly even arc-length spacing along a line.

    Segment lengths are accumulated; whenever the running total reaches
    interval an arrowhead is emitted at that segment's end, oriented by the
    segment direction, and the total resets to zero.
    """
    if interval <= 0:
        raise ValueError(f"Arrow interval must be > 0, got {interval}")
    arrows: list[Arrowhead] = []
    acc = 0.0
    for seg in line:
        acc += seg.length
        if acc >= interval:
            arrows.append(Arrowhead(position=seg.end, direction=seg.direction))
            acc = 0.0
    return arrows
