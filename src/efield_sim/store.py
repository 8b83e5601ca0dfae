# MIT License (see LICENSE)
"""
Charge storage.

ChargeStore owns the ordered set of point charges. Insertion order is kept
so the UI can number charges stably, and hit-testing resolves ties by that
order. Every operation observes and mutates the full state synchronously.
"""
from __future__ import annotations
import logging
from typing import Callable, Iterator

import numpy as np

from .constants import DEFAULT_HIT_RADIUS
from .types import Charge
from .util import f64

logger = logging.getLogger(__name__)


class ChargeStore:
    """
    Ordered collection of charges with id assignment and hit-testing.

    Ids come from a counter starting at 1 and are never reused, even after
    remove() or clear().
    """

    def __init__(self) -> None:
        self._charges: list[Charge] = []
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._charges)

    def __iter__(self) -> Iterator[Charge]:
        return iter(list(self._charges))

    def __contains__(self, charge_id: object) -> bool:
        return any(c.id == charge_id for c in self._charges)

    def add(
        self,
        position: np.ndarray | tuple[float, float],
        magnitude: float,
        hit_radius: float = DEFAULT_HIT_RADIUS,
    ) -> Charge:
        """
        Place a new charge and assign it a fresh id.

        Args:
            position: Position [x, y].
            magnitude: Charge in microcoulombs; any finite real.
            hit_radius: Pick radius for the new charge.

        Returns:
            The stored Charge.
        """
        charge = Charge(position=position, magnitude=magnitude, hit_radius=hit_radius)
        charge.id = self._next_id
        self._next_id += 1
        self._charges.append(charge)
        logger.debug("Added charge %d: %.3g µC at (%.1f, %.1f)",
                     charge.id, charge.magnitude, charge.position[0], charge.position[1])
        return charge

    def remove(self, predicate: Callable[[Charge], bool]) -> list[Charge]:
        """Remove every charge satisfying predicate; return the removed charges."""
        kept: list[Charge] = []
        removed: list[Charge] = []
        for c in self._charges:
            (removed if predicate(c) else kept).append(c)
        self._charges = kept
        if removed:
            logger.debug("Removed charges %s", [c.id for c in removed])
        return removed

    def remove_at(self, point) -> list[Charge]:
        """Remove every charge whose hit radius contains point."""
        return self.remove(lambda c: c.contains(point))

    def move_to(self, charge_id: int, position) -> Charge:
        """
        Reposition a charge.

        Raises:
            KeyError: If no charge has this id.
        """
        charge = self.get(charge_id)
        charge.position = f64(position)
        return charge

    def get(self, charge_id: int) -> Charge:
        """Look up a charge by id. Raises KeyError when absent."""
        for c in self._charges:
            if c.id == charge_id:
                return c
        raise KeyError(f"No charge with id {charge_id}")

    def index_of(self, charge_id: int) -> int:
        """1-based display number of a charge in store order."""
        for i, c in enumerate(self._charges):
            if c.id == charge_id:
                return i + 1
        raise KeyError(f"No charge with id {charge_id}")

    def all(self) -> list[Charge]:
        """Charges in insertion order. The list is a copy."""
        return list(self._charges)

    def find_containing(self, point) -> Charge | None:
        """First charge in store order whose hit radius contains point."""
        for c in self._charges:
            if c.contains(point):
                return c
        return None

    def clear(self) -> None:
        """Remove every charge. The id counter keeps running."""
        self._charges = []

    def arrays(self) -> tuple[np.ndarray, np.ndarray]:
        """Positions [N, 2] and magnitudes [N] for vectorized evaluation."""
        return charge_arrays(self._charges)


def charge_arrays(charges) -> tuple[np.ndarray, np.ndarray]:
    """
    Pack any iterable of charges into (positions [N, 2], magnitudes [N]).

    Magnitudes stay in microcoulombs.
    """
    charges = list(charges)
    if not charges:
        return np.zeros((0, 2), dtype=np.float64), np.zeros(0, dtype=np.float64)
    positions = np.vstack([c.position for c in charges]).astype(np.float64)
    magnitudes = np.array([c.magnitude for c in charges], dtype=np.float64)
    return positions, magnitudes
