# MIT License (see LICENSE)
"""
Utility functions for vector math and numeric operations.

All functions operate on 2D vectors represented as numpy arrays of shape (2,).
Tuples and lists are accepted wherever a vector is read.
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Used throughout the codebase to ensure consistent numeric precision
    and allow tuple/list inputs for positions.
    """
    return np.array(x, dtype=np.float64)


def zero2() -> np.ndarray:
    """A fresh zero 2D vector."""
    return np.zeros(2, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 2D vector. Avoids sqrt for performance."""
    return float(v[0] * v[0] + v[1] * v[1])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 2D vector."""
    return float(np.sqrt(norm2(v)))


def dist2(a, b) -> float:
    """Squared distance between two points."""
    dx = float(a[0]) - float(b[0])
    dy = float(a[1]) - float(b[1])
    return dx * dx + dy * dy
