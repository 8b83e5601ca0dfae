import numpy as np
import pytest

from efield_sim.constants import K_COULOMB
from efield_sim.core.field import (
    field_at,
    field_grid,
    field_on_points,
    normalized_field_at,
    sample_field,
)
from efield_sim.store import ChargeStore
from efield_sim.types import Bounds, Charge


def test_single_charge_field():
    """
    Point charge, Coulomb's law:
      E = k q / r²  pointing away from a positive charge
    q = +2 µC at (100, 100), query point (200, 100): r = 100 along +x.
    """
    store = ChargeStore()
    store.add((100.0, 100.0), 2.0)

    E = field_at(store, (200.0, 100.0))
    expected = K_COULOMB * 2e-6 / 100.0**2
    print("E", E, "expected", expected)

    assert E[0] > 0
    assert E[1] == pytest.approx(0.0, abs=1e-12)
    assert np.linalg.norm(E) == pytest.approx(expected, rel=0.01)


def test_empty_store_gives_zero_field():
    store = ChargeStore()
    assert np.array_equal(field_at(store, (1.0, 2.0)), np.zeros(2))

    n = normalized_field_at(store, (1.0, 2.0))
    assert n.magnitude == 0.0
    assert np.array_equal(n.vector, np.zeros(2))


def test_superposition():
    """E_{A+B}(p) = E_A(p) + E_B(p) away from both singularities."""
    a = Charge((50.0, 80.0), 3.0)
    b = Charge((220.0, 40.0), -1.5)

    for p in [(0.0, 0.0), (130.0, 60.0), (-400.0, 900.0), (221.5, 41.0)]:
        both = field_at([a, b], p)
        summed = field_at([a], p) + field_at([b], p)
        assert both == pytest.approx(summed, rel=1e-12, abs=1e-15)


def test_sign_antisymmetry():
    """Negating q flips the contributed field, same magnitude."""
    pos = Charge((10.0, -20.0), 4.0)
    neg = Charge((10.0, -20.0), -4.0)
    for p in [(0.0, 0.0), (35.0, 5.0), (1e4, -3e3)]:
        Ep = field_at([pos], p)
        En = field_at([neg], p)
        assert En == pytest.approx(-Ep)
        assert np.linalg.norm(En) == pytest.approx(np.linalg.norm(Ep))


def test_dipole_bisector():
    """
    Equal and opposite charges at (-50, 0) and (50, 0).
    On the perpendicular bisector (x = 0) the field is parallel to the
    charge axis, pointing from + to -, with no component along the bisector.
    """
    store = ChargeStore()
    store.add((-50.0, 0.0), 1.0)
    store.add((50.0, 0.0), -1.0)

    for y in [10.0, 50.0, -120.0]:
        E = field_at(store, (0.0, y))
        assert E[0] > 0
        assert abs(E[1]) <= 1e-12 * abs(E[0])


def test_near_charge_contribution_is_skipped():
    """Within the r² < 1 threshold a charge contributes nothing."""
    store = ChargeStore()
    store.add((0.0, 0.0), 5.0)

    assert np.array_equal(field_at(store, (0.5, 0.0)), np.zeros(2))
    assert np.array_equal(field_at(store, (0.0, 0.0)), np.zeros(2))
    # r² == 1 is outside the threshold
    assert field_at(store, (1.0, 0.0))[0] > 0

    # Other charges still count
    store.add((10.0, 0.0), 1.0)
    E = field_at(store, (0.0, 0.0))
    assert E[0] < 0
    assert np.all(np.isfinite(E))


def test_normalized_field():
    store = ChargeStore()
    store.add((0.0, 0.0), -3.0)

    n = normalized_field_at(store, (0.0, 20.0))
    assert np.linalg.norm(n.vector) == pytest.approx(1.0)
    # Negative charge: field points toward it
    assert n.vector == pytest.approx([0.0, -1.0])
    assert n.magnitude == pytest.approx(sample_field(store, (0.0, 20.0)).magnitude)


def test_exact_cancellation_normalizes_to_zero():
    """Two equal charges: the midpoint field cancels exactly."""
    store = ChargeStore()
    store.add((-10.0, 0.0), 1.0)
    store.add((10.0, 0.0), 1.0)

    n = normalized_field_at(store, (0.0, 0.0))
    assert n.magnitude == 0.0
    assert n.is_zero


def test_exact_cancellation_on_grid_points():
    """The vectorized path cancels exactly too, so the midpoint gets no arrow."""
    store = ChargeStore()
    store.add((390.0, 300.0), 1.0)
    store.add((410.0, 300.0), 1.0)
    positions, magnitudes = store.arrays()

    E = field_on_points(positions, magnitudes, [(400.0, 300.0), (400.0, 250.0)])
    assert E[0].tolist() == [0.0, 0.0]
    # On the bisector only the y component survives
    assert E[1][0] == 0.0
    assert E[1][1] < 0.0
    np.testing.assert_allclose(E[1], field_at(store, (400.0, 250.0)))


def test_field_grid_layout_and_scaling():
    """Arrows sit on cell centres, are at most spacing/2 long, and fade with |E|."""
    store = ChargeStore()
    store.add((200.0, 200.0), 1.0)
    bounds = Bounds(0.0, 0.0, 400.0, 400.0)

    arrows = field_grid(store, bounds, spacing=40.0)
    assert 0 < len(arrows) <= 100
    for a in arrows:
        assert (a.start[0] - 20.0) % 40.0 == pytest.approx(0.0)
        assert (a.start[1] - 20.0) % 40.0 == pytest.approx(0.0)
        length = np.linalg.norm(a.end - a.start)
        assert length <= 20.0 + 1e-9
        assert length == pytest.approx(min(5 * np.log10(a.magnitude), 20.0))
        assert a.alpha <= 0.8
        # Radially outward from the positive charge
        assert np.dot(a.end - a.start, a.start - np.array([200.0, 200.0])) > 0


def test_field_grid_skips_weak_field():
    store = ChargeStore()
    store.add((200.0, 200.0), 1e-9)
    assert field_grid(store, Bounds(0.0, 0.0, 400.0, 400.0)) == []
    assert field_grid(ChargeStore(), Bounds(0.0, 0.0, 400.0, 400.0)) == []


def test_field_grid_matches_point_evaluation():
    store = ChargeStore()
    store.add((130.0, 70.0), 2.0)
    store.add((260.0, 210.0), -1.0)

    for a in field_grid(store, Bounds(0.0, 0.0, 400.0, 300.0), spacing=50.0):
        assert a.magnitude == pytest.approx(np.linalg.norm(field_at(store, a.start)), rel=1e-12)
