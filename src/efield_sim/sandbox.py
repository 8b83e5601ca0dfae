# MIT License (see LICENSE)
"""
The interactive sandbox session.

The Sandbox ties the pure physics to a front end. It owns:
- The ChargeStore (the only mutable physics state).
- The Coulomb selection: at most two charge ids, oldest evicted first.
- The Gaussian surface and whether it is shown.

Structure:
    - The front end creates a Sandbox.
    - Pointer/keyboard input is translated into commands and passed to
      dispatch().
    - After any command the front end calls recompute() and hands the
      resulting Frame to a renderer.

recompute() always rebuilds everything from the current charges; nothing is
cached between frames.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field

from .commands import (
    AddCharge,
    ClearCharges,
    Command,
    MoveCharge,
    MoveGaussSurface,
    QueryPoint,
    RemoveAt,
    SelectCharge,
    ToggleGaussSurface,
    as_point,
    parse_magnitude,
)
from .constants import DEFAULT_HIT_RADIUS
from .core.field import field_grid, sample_field
from .core.forces import force_between
from .core.gauss import gauss_reading
from .profiler import FRAME, Profiler, maybe_section
from .store import ChargeStore
from .streamlines import TracerConfig, place_arrowheads, trace_field_lines
from .types import (
    Arrowhead,
    Bounds,
    Charge,
    ChargeListing,
    FieldArrow,
    FieldSample,
    ForceReading,
    GaussianSurface,
    GaussReading,
    Streamline,
)

logger = logging.getLogger(__name__)


@dataclass
class SandboxConfig:
    """
    Session settings.

    Attributes:
        bounds: Canvas/domain rectangle.
        hit_radius: Pick radius given to new charges.
        grid_spacing: Pitch of the field arrow grid.
        tracer: Field-line parameters. Defaults to TracerConfig over bounds.
        gauss_radius: Radius of the Gaussian surface.
        gauss_center: Center of the surface. Defaults to the domain center.
        show_gauss: Whether the surface starts visible.
        draw_field_grid: Compute the arrow grid in recompute().
        draw_field_lines: Compute field lines in recompute().
    """
    bounds: Bounds = field(default_factory=Bounds)
    hit_radius: float = DEFAULT_HIT_RADIUS
    grid_spacing: float = 40.0
    tracer: TracerConfig | None = None
    gauss_radius: float = 100.0
    gauss_center: tuple[float, float] | None = None
    show_gauss: bool = False
    draw_field_grid: bool = True
    draw_field_lines: bool = True

    def __post_init__(self) -> None:
        if self.hit_radius <= 0:
            raise ValueError(f"hit_radius must be > 0, got {self.hit_radius}")
        if self.grid_spacing <= 0:
            raise ValueError(f"grid_spacing must be > 0, got {self.grid_spacing}")
        if self.tracer is None:
            self.tracer = TracerConfig(bounds=self.bounds)


@dataclass
class Frame:
    """
    Everything a renderer needs for one redraw.

    Attributes:
        charges: Charge listing in store order with 1-based numbers.
        field_arrows: Arrow-grid glyphs (empty if disabled).
        streamlines: Deduplicated field lines (empty if disabled).
        arrowheads: Arrowheads per streamline, parallel to streamlines.
        selected: Ids of the selected charges, in list order.
        force: Coulomb force between the two selected charges, if two are.
        gauss: Enclosed charge and flux, if the surface is shown.
    """
    charges: list[ChargeListing] = field(default_factory=list)
    field_arrows: list[FieldArrow] = field(default_factory=list)
    streamlines: list[Streamline] = field(default_factory=list)
    arrowheads: list[list[Arrowhead]] = field(default_factory=list)
    selected: tuple[int, ...] = ()
    force: ForceReading | None = None
    gauss: GaussReading | None = None


def charge_label(index: int, charge: Charge) -> str:
    """List label, e.g. 'Charge 2 (-1.5 µC)'."""
    return f"Charge {index} ({charge.magnitude:.1f} µC)"


@dataclass
class Sandbox:
    """
    Electrostatics sandbox session.

    Attributes:
        config: Session settings.
        profiler: Optional Profiler timing each recompute() phase.
        store: The charges.
        selected: Selected charge ids in list order, at most two.
        surface: The Gaussian surface.
        show_gauss: Whether the Gauss reading is computed.
    """
    config: SandboxConfig = field(default_factory=SandboxConfig)
    profiler: Profiler | None = None

    # Internal state
    store: ChargeStore = field(default_factory=ChargeStore)
    selected: list[int] = field(default_factory=list)
    surface: GaussianSurface | None = None
    show_gauss: bool = False

    def __post_init__(self) -> None:
        if self.surface is None:
            center = self.config.gauss_center
            if center is None:
                center = self.config.bounds.center
            self.surface = GaussianSurface(center=center, radius=self.config.gauss_radius)
        self.show_gauss = self.config.show_gauss

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def dispatch(self, command: Command):
        """
        Apply one input command.

        Returns:
            AddCharge: the new Charge, or None if the magnitude was rejected.
            RemoveAt: list of removed charges.
            MoveCharge: the moved Charge.
            QueryPoint: a FieldSample.
            others: None.

        Raises:
            TypeError: For an unknown command type.
            KeyError: MoveCharge/SelectCharge with an unknown id.
        """
        if isinstance(command, AddCharge):
            return self.add_charge(command.position, command.magnitude)
        if isinstance(command, MoveCharge):
            return self.store.move_to(command.charge_id, as_point(command.position))
        if isinstance(command, RemoveAt):
            return self.remove_at(command.point)
        if isinstance(command, QueryPoint):
            return self.query(command.point)
        if isinstance(command, ClearCharges):
            self.clear()
            return None
        if isinstance(command, SelectCharge):
            self.toggle_selection(command.charge_id)
            return None
        if isinstance(command, ToggleGaussSurface):
            self.show_gauss = not self.show_gauss
            return None
        if isinstance(command, MoveGaussSurface):
            self.surface = GaussianSurface(center=as_point(command.center), radius=self.surface.radius)
            return None
        raise TypeError(f"Unknown command: {type(command).__name__}")

    def add_charge(self, position, magnitude) -> Charge | None:
        """
        Place a charge from user input.

        An unparseable magnitude is logged and ignored; nothing changes.
        """
        try:
            q = parse_magnitude(magnitude)
        except ValueError as exc:
            logger.warning("Rejected charge at %s: %s", position, exc)
            return None
        return self.store.add(as_point(position), q, hit_radius=self.config.hit_radius)

    def remove_at(self, point) -> list[Charge]:
        """Delete the charges under point and drop them from the selection."""
        removed = self.store.remove_at(as_point(point))
        if removed:
            gone = {c.id for c in removed}
            self.selected = [i for i in self.selected if i not in gone]
        return removed

    def clear(self) -> None:
        self.store.clear()
        self.selected = []
        logger.info("Cleared all charges")

    def toggle_selection(self, charge_id: int) -> None:
        """
        Toggle charge_id in the selection.

        The selection is kept in list (store) order. With two charges
        already selected, selecting a third evicts the one listed first.
        """
        self.store.get(charge_id)
        if charge_id in self.selected:
            self.selected.remove(charge_id)
            return
        if len(self.selected) >= 2:
            self.selected.pop(0)
        self.selected.append(charge_id)
        self.selected.sort(key=self.store.index_of)

    def query(self, point) -> FieldSample:
        """Field at point, for hover readouts."""
        return sample_field(self.store, as_point(point))

    # ------------------------------------------------------------------
    # Readings
    # ------------------------------------------------------------------

    def listing(self) -> list[ChargeListing]:
        return [
            ChargeListing(index=i, charge=c, label=charge_label(i, c))
            for i, c in enumerate(self.store.all(), start=1)
        ]

    def force_reading(self) -> ForceReading | None:
        """Force between the two selected charges, or None."""
        if len(self.selected) != 2:
            return None
        a = self.store.get(self.selected[0])
        b = self.store.get(self.selected[1])
        return ForceReading(
            a=a,
            b=b,
            index_a=self.store.index_of(a.id),
            index_b=self.store.index_of(b.id),
            force=force_between(a, b),
        )

    def gauss(self) -> GaussReading | None:
        """Enclosed charge and flux when the surface is shown."""
        if not self.show_gauss:
            return None
        return gauss_reading(self.store, self.surface)

    def recompute(self) -> Frame:
        """
        Rebuild the whole frame from the current charges.

        The whole frame is timed as FRAME and each phase under its own
        name when a profiler is set:
            1. field_grid: arrow grid.
            2. streamlines: field lines and arrowheads.
            3. panel: listing, force and Gauss readings.
        """
        cfg = self.config
        prof = self.profiler
        frame = Frame(selected=tuple(self.selected))

        with maybe_section(prof, FRAME):
            if cfg.draw_field_grid:
                with maybe_section(prof, "field_grid"):
                    frame.field_arrows = field_grid(self.store, cfg.bounds, cfg.grid_spacing)

            if cfg.draw_field_lines:
                with maybe_section(prof, "streamlines"):
                    frame.streamlines = trace_field_lines(self.store, cfg.tracer)
                    frame.arrowheads = [
                        place_arrowheads(line, cfg.tracer.arrow_interval)
                        for line in frame.streamlines
                    ]

            with maybe_section(prof, "panel"):
                frame.charges = self.listing()
                frame.force = self.force_reading()
                frame.gauss = self.gauss()

        logger.debug(
            "Frame: %d charges, %d arrows, %d field lines",
            len(frame.charges), len(frame.field_arrows), len(frame.streamlines),
        )
        return frame
