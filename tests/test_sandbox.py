import io
import logging

import numpy as np
import pytest

from efield_sim import Sandbox, SandboxConfig
from efield_sim.commands import (
    AddCharge,
    ClearCharges,
    MoveCharge,
    MoveGaussSurface,
    QueryPoint,
    RemoveAt,
    SelectCharge,
    ToggleGaussSurface,
    parse_magnitude,
)
from efield_sim.constants import EPSILON_0, K_COULOMB
from efield_sim.profiler import FRAME_PHASES, Profiler
from efield_sim.renderer import BufferedRenderer, DebugRenderer, NullRenderer
from efield_sim.types import Bounds


def _small_sandbox(**kw) -> Sandbox:
    """400x300 domain keeps field-line tracing quick."""
    return Sandbox(config=SandboxConfig(bounds=Bounds(0.0, 0.0, 400.0, 300.0), **kw))


@pytest.mark.parametrize("text, expected", [
    ("1.0", 1.0),
    ("  -2.5 ", -2.5),
    ("0", 0.0),
    ("1e-3", 1e-3),
    (3, 3.0),
    (-0.25, -0.25),
])
def test_parse_magnitude_accepts(text, expected):
    assert parse_magnitude(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "1.0uC", "nan", "inf", "-inf", None, True])
def test_parse_magnitude_rejects(text):
    with pytest.raises(ValueError):
        parse_magnitude(text)


def test_invalid_magnitude_leaves_state_unchanged(caplog):
    sandbox = _small_sandbox()
    sandbox.dispatch(AddCharge((100, 100), "1"))

    with caplog.at_level(logging.WARNING, logger="efield_sim"):
        result = sandbox.dispatch(AddCharge((200, 100), "not a number"))

    assert result is None
    assert len(sandbox.store) == 1
    assert "Rejected charge" in caplog.text


def test_add_move_remove():
    sandbox = _small_sandbox()
    c = sandbox.dispatch(AddCharge((100, 100), "2"))
    assert c.magnitude == 2.0
    assert c.hit_radius == sandbox.config.hit_radius

    moved = sandbox.dispatch(MoveCharge(c.id, (150, 120)))
    assert moved is c
    assert c.position.tolist() == [150.0, 120.0]

    assert sandbox.dispatch(RemoveAt((100, 100))) == []
    removed = sandbox.dispatch(RemoveAt((152, 121)))
    assert removed == [c]
    assert len(sandbox.store) == 0


def test_query_point():
    sandbox = _small_sandbox()
    sandbox.dispatch(AddCharge((100, 100), 2.0))
    sample = sandbox.dispatch(QueryPoint((200, 100)))
    assert sample.magnitude == pytest.approx(K_COULOMB * 2e-6 / 100.0**2)
    assert sample.vector[0] > 0

    assert sandbox.dispatch(QueryPoint((100, 100))).magnitude == 0.0


def test_selection_evicts_first_listed():
    """Selection follows list order; a third pick drops the first listed."""
    sandbox = _small_sandbox()
    a = sandbox.dispatch(AddCharge((50, 50), 1.0))
    b = sandbox.dispatch(AddCharge((150, 50), 1.0))
    c = sandbox.dispatch(AddCharge((250, 50), 1.0))

    sandbox.dispatch(SelectCharge(b.id))
    assert sandbox.force_reading() is None
    sandbox.dispatch(SelectCharge(a.id))
    assert sandbox.selected == [a.id, b.id]
    sandbox.dispatch(SelectCharge(c.id))
    assert sandbox.selected == [b.id, c.id]

    # Toggling off
    sandbox.dispatch(SelectCharge(b.id))
    assert sandbox.selected == [c.id]

    with pytest.raises(KeyError):
        sandbox.dispatch(SelectCharge(12345))


def test_force_reading_uses_display_indices():
    sandbox = _small_sandbox()
    sandbox.dispatch(AddCharge((10, 10), 5.0))
    q1 = sandbox.dispatch(AddCharge((0, 150), 1.0))
    q2 = sandbox.dispatch(AddCharge((100, 150), -1.0))
    sandbox.dispatch(SelectCharge(q2.id))
    sandbox.dispatch(SelectCharge(q1.id))

    reading = sandbox.force_reading()
    assert (reading.index_a, reading.index_b) == (2, 3)
    assert (reading.a.id, reading.b.id) == (q1.id, q2.id)
    assert reading.force == pytest.approx(K_COULOMB * 1e-12 / 100.0**2)


def test_removed_charge_leaves_selection():
    sandbox = _small_sandbox()
    a = sandbox.dispatch(AddCharge((50, 50), 1.0))
    b = sandbox.dispatch(AddCharge((150, 50), 1.0))
    sandbox.dispatch(SelectCharge(a.id))
    sandbox.dispatch(SelectCharge(b.id))

    sandbox.dispatch(RemoveAt((50, 50)))
    assert sandbox.selected == [b.id]
    assert sandbox.force_reading() is None

    sandbox.dispatch(ClearCharges())
    assert sandbox.selected == []
    assert len(sandbox.store) == 0


def test_gauss_surface_toggle_and_move():
    sandbox = _small_sandbox(gauss_radius=50.0)
    assert sandbox.surface.center.tolist() == [200.0, 150.0]
    sandbox.dispatch(AddCharge((200, 150), 2.0))
    sandbox.dispatch(AddCharge((20, 20), -1.0))
    assert sandbox.gauss() is None

    sandbox.dispatch(ToggleGaussSurface())
    reading = sandbox.gauss()
    assert reading.enclosed_charge == pytest.approx(2.0)
    assert reading.flux == pytest.approx(2e-6 / EPSILON_0)

    sandbox.dispatch(MoveGaussSurface((30, 30)))
    assert sandbox.gauss().enclosed_charge == pytest.approx(-1.0)
    assert sandbox.surface.radius == 50.0

    sandbox.dispatch(ToggleGaussSurface())
    assert sandbox.gauss() is None


def test_unknown_command():
    with pytest.raises(TypeError):
        _small_sandbox().dispatch("add")


def test_empty_frame():
    frame = _small_sandbox().recompute()
    assert frame.charges == []
    assert frame.field_arrows == []
    assert frame.streamlines == []
    assert frame.force is None
    assert frame.gauss is None


def test_frame_contents():
    prof = Profiler()
    sandbox = Sandbox(
        config=SandboxConfig(bounds=Bounds(0.0, 0.0, 400.0, 300.0), show_gauss=True),
        profiler=prof,
    )
    a = sandbox.dispatch(AddCharge((120, 150), 2.0))
    b = sandbox.dispatch(AddCharge((280, 150), -1.5))
    sandbox.dispatch(SelectCharge(a.id))
    sandbox.dispatch(SelectCharge(b.id))

    frame = sandbox.recompute()
    assert [item.label for item in frame.charges] == ["Charge 1 (2.0 µC)", "Charge 2 (-1.5 µC)"]
    assert [item.index for item in frame.charges] == [1, 2]
    assert frame.selected == (a.id, b.id)
    assert frame.force.force > 0
    assert frame.gauss.enclosed_charge == pytest.approx(0.5)
    assert len(frame.field_arrows) > 0
    assert len(frame.streamlines) > 0
    assert len(frame.arrowheads) == len(frame.streamlines)

    summary = prof.stats.summary()
    assert prof.stats.frames == 1
    for name in FRAME_PHASES:
        assert summary[name]["n"] == 1
        assert 0.0 <= summary[name]["share"] <= 1.0
    assert sum(summary[name]["total_ms"] for name in FRAME_PHASES) <= prof.stats.total_ms()
    assert prof.stats.report().splitlines()[0].startswith("1 frames")


def test_frame_phases_can_be_disabled():
    sandbox = _small_sandbox(draw_field_grid=False, draw_field_lines=False)
    sandbox.dispatch(AddCharge((100, 100), 1.0))
    frame = sandbox.recompute()
    assert frame.field_arrows == []
    assert frame.streamlines == []
    assert len(frame.charges) == 1


def test_renderers():
    sandbox = _small_sandbox(show_gauss=True)
    a = sandbox.dispatch(AddCharge((120, 150), 1.0))
    b = sandbox.dispatch(AddCharge((280, 150), -1.0))
    sandbox.dispatch(SelectCharge(a.id))
    sandbox.dispatch(SelectCharge(b.id))
    frame = sandbox.recompute()

    out = io.StringIO()
    DebugRenderer(output=out, verbose=True).render_frame(frame)
    text = out.getvalue()
    assert "=== Frame: 2 charges" in text
    assert "Charge 1 (1.0 µC)" in text
    assert "F(1,2)" in text
    assert "Q_enc = 0.00" in text
    assert "line " in text

    buffered = BufferedRenderer()
    buffered.render_frame(frame)
    buffered.render_frame(frame)
    assert len(buffered.frames) == 2
    rec = buffered.frames[0]
    assert len(rec["charges"]) == 2
    assert len(rec["lines"]) == len(frame.streamlines)
    assert len(rec["arrowheads"]) == sum(len(h) for h in frame.arrowheads)
    assert rec["force"] == pytest.approx(frame.force.force)
    assert np.allclose(rec["lines"][0][0], frame.streamlines[0].start)
    buffered.clear()
    assert buffered.frames == []

    NullRenderer().render_frame(frame)


def test_invalid_config():
    with pytest.raises(ValueError):
        SandboxConfig(hit_radius=0.0)
    with pytest.raises(ValueError):
        SandboxConfig(grid_spacing=-1.0)
