# MIT License (see LICENSE)
"""
Frame-phase timing for the sandbox.

Full field-line recomputation is O(seeds × steps × charges) and runs on
every mutation and every drag frame, so it is useful to see where a frame's
time goes without external tools. Sandbox.recompute() times the whole frame
under FRAME and each phase under its FRAME_PHASES name.

Example:
    profiler = Profiler()
    sandbox = Sandbox(profiler=profiler)
    sandbox.recompute()
    print(profiler.stats.report())
"""
from __future__ import annotations
import time
from contextlib import contextmanager, nullcontext
from dataclasses import dataclass, field

FRAME = "frame"
FRAME_PHASES = ("field_grid", "streamlines", "panel")


@dataclass
class ProfileStats:
    """
    Timing samples (seconds) per phase name.

    A phase that was switched off in a frame simply has no sample for it.
    """
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        self.samples.setdefault(name, []).append(dt)

    def clear(self) -> None:
        self.samples.clear()

    @property
    def frames(self) -> int:
        """Number of timed frames."""
        return len(self.samples.get(FRAME, ()))

    def total_ms(self, name: str = FRAME) -> float:
        return 1e3 * sum(self.samples.get(name, ()))

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-phase statistics.

        Returns:
            Dict mapping phase name to:
            - 'n': sample count
            - 'mean_ms', 'max_ms', 'total_ms': times in milliseconds
            - 'share': fraction of total frame time (0 when no frame was timed)
        """
        frame_ms = self.total_ms(FRAME)
        out = {}
        for name, times in self.samples.items():
            total = 1e3 * sum(times)
            out[name] = {
                "n": len(times),
                "mean_ms": total / len(times),
                "max_ms": 1e3 * max(times),
                "total_ms": total,
                "share": total / frame_ms if frame_ms > 0 else 0.0,
            }
        return out

    def report(self) -> str:
        """Phase table in frame order, one line per phase."""
        summary = self.summary()
        lines = [f"{self.frames} frames, {self.total_ms():.2f} ms"]
        for name in FRAME_PHASES:
            s = summary.get(name)
            if s is None:
                continue
            lines.append(
                f"  {name:<12} mean {s['mean_ms']:8.2f} ms  max {s['max_ms']:8.2f} ms  {100 * s['share']:5.1f}%"
            )
        return "\n".join(lines)


class Profiler:
    """
    Times named sections into a ProfileStats.

    Usage:
        profiler = Profiler()
        with profiler.frame():
            with profiler.section("streamlines"):
                trace_field_lines(store, config)
        print(profiler.stats.summary()["streamlines"]["mean_ms"])
    """

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)

    def frame(self):
        """Time a whole recompute."""
        return self.section(FRAME)


def maybe_section(profiler: Profiler | None, name: str):
    """profiler.section(name), or a no-op context when profiling is off."""
    if profiler is None:
        return nullcontext()
    return profiler.section(name)
