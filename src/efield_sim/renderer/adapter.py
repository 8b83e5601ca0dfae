# MIT License (see LICENSE)
"""
Renderer adapters for sandbox visualization.

This module provides an abstract base class for drawing a Frame and a few
concrete implementations. The core has no rendering dependency; a canvas,
matplotlib or web front end implements RendererAdapter.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO
import sys

from ..types import Arrowhead, ChargeListing, FieldArrow, Streamline

if TYPE_CHECKING:
    from ..sandbox import Frame


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Usage:
        renderer = MyRenderer()
        renderer.render_frame(sandbox.recompute())

    render_frame draws back to front: field arrows, field lines with their
    arrowheads, then charges.
    """

    @abstractmethod
    def begin_frame(self, frame: "Frame") -> None:
        """Start a redraw (clear the canvas)."""
        ...

    @abstractmethod
    def draw_field_arrow(self, arrow: FieldArrow) -> None:
        ...

    @abstractmethod
    def draw_streamline(self, line: Streamline) -> None:
        """Draw a field line as a connected polyline."""
        ...

    @abstractmethod
    def draw_arrowhead(self, head: Arrowhead) -> None:
        ...

    @abstractmethod
    def draw_charge(self, item: ChargeListing) -> None:
        ...

    @abstractmethod
    def end_frame(self) -> None:
        """Finalize the current frame."""
        ...

    def render_frame(self, frame: "Frame") -> None:
        """Convenience method drawing every glyph of a frame."""
        self.begin_frame(frame)
        for arrow in frame.field_arrows:
            self.draw_field_arrow(arrow)
        for line, heads in zip(frame.streamlines, frame.arrowheads):
            self.draw_streamline(line)
            for head in heads:
                self.draw_arrowhead(head)
        for item in frame.charges:
            self.draw_charge(item)
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Console/text renderer for development and testing.

    Example:
        renderer = DebugRenderer()
        renderer.render_frame(sandbox.recompute())

    Output:
        === Frame: 2 charges, 12 field lines ===
        [1] Charge 1 (2.0 µC) @ (100.00, 100.00) r=12.0
        [2] Charge 2 (-1.0 µC) @ (300.00, 100.00) r=12.0
        F(1,2) = 4.49e-07 N
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = False):
        """
        Args:
            output: Output stream (defaults to sys.stdout).
            verbose: If True, also list field lines.
        """
        self.output = output or sys.stdout
        self.verbose = verbose
        self._frame: "Frame | None" = None

    def begin_frame(self, frame: "Frame") -> None:
        self._frame = frame
        self.output.write(
            f"=== Frame: {len(frame.charges)} charges, {len(frame.streamlines)} field lines ===\n"
        )

    def draw_field_arrow(self, arrow: FieldArrow) -> None:
        pass

    def draw_streamline(self, line: Streamline) -> None:
        if not self.verbose or not line.segments:
            return
        s, e = line.start, line.end
        self.output.write(
            f"  line {len(line)} segs ({s[0]:.1f}, {s[1]:.1f}) -> ({e[0]:.1f}, {e[1]:.1f})\n"
        )

    def draw_arrowhead(self, head: Arrowhead) -> None:
        pass

    def draw_charge(self, item: ChargeListing) -> None:
        c = item.charge
        self.output.write(
            f"[{c.id}] {item.label} @ ({c.position[0]:.2f}, {c.position[1]:.2f}) r={c.hit_radius:.1f}\n"
        )

    def end_frame(self) -> None:
        frame = self._frame
        if frame is not None:
            if frame.force is not None:
                f = frame.force
                self.output.write(f"F({f.index_a},{f.index_b}) = {f.force:.2e} N\n")
            if frame.gauss is not None:
                g = frame.gauss
                self.output.write(
                    f"Q_enc = {g.enclosed_charge:.2f} µC, Φ = {g.flux:.2e} N·m²/C\n"
                )
        self.output.write("\n")
        self.output.flush()
        self._frame = None


class NullRenderer(RendererAdapter):
    """No-op renderer, for timing recompute() without drawing overhead."""

    def begin_frame(self, frame: "Frame") -> None:
        pass

    def draw_field_arrow(self, arrow: FieldArrow) -> None:
        pass

    def draw_streamline(self, line: Streamline) -> None:
        pass

    def draw_arrowhead(self, head: Arrowhead) -> None:
        pass

    def draw_charge(self, item: ChargeListing) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Renderer that buffers frame data as plain lists/dicts.

    Useful for recording a drag sequence or handing geometry to a front end
    that wants JSON-like data.
    """

    def __init__(self):
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, frame: "Frame") -> None:
        self._current_frame = {
            "charges": [],
            "arrows": [],
            "lines": [],
            "arrowheads": [],
            "force": None if frame.force is None else frame.force.force,
            "enclosed_charge": None if frame.gauss is None else frame.gauss.enclosed_charge,
            "flux": None if frame.gauss is None else frame.gauss.flux,
        }

    def draw_field_arrow(self, arrow: FieldArrow) -> None:
        if self._current_frame is None:
            return
        self._current_frame["arrows"].append({
            "start": arrow.start.tolist(),
            "end": arrow.end.tolist(),
            "alpha": arrow.alpha,
        })

    def draw_streamline(self, line: Streamline) -> None:
        if self._current_frame is None:
            return
        self._current_frame["lines"].append(line.points().tolist())

    def draw_arrowhead(self, head: Arrowhead) -> None:
        if self._current_frame is None:
            return
        self._current_frame["arrowheads"].append({
            "position": head.position.tolist(),
            "direction": head.direction.tolist(),
        })

    def draw_charge(self, item: ChargeListing) -> None:
        if self._current_frame is None:
            return
        c = item.charge
        self._current_frame["charges"].append({
            "id": c.id,
            "index": item.index,
            "label": item.label,
            "position": c.position.tolist(),
            "magnitude": c.magnitude,
        })

    def end_frame(self) -> None:
        """Finalize and store the buffered frame."""
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        """Clear all buffered frames."""
        self.frames.clear()
