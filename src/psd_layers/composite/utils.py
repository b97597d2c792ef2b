"""Utility functions for composite operations."""

import numpy as np


def divide(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Safe division for color ops, non-finite results become 0."""
    with np.errstate(divide="ignore", invalid="ignore"):
        c = np.true_divide(a, b)
        c[~np.isfinite(c)] = 0.0
    return c


def intersect(
    a: tuple[int, int, int, int], b: tuple[int, int, int, int]
) -> tuple[int, int, int, int]:
    """Calculate intersection of two bounding boxes."""
    inter = (max(a[0], b[0]), max(a[1], b[1]), min(a[2], b[2]), min(a[3], b[3]))
    if inter[0] >= inter[2] or inter[1] >= inter[3]:
        return (0, 0, 0, 0)
    return inter


def union(backdrop: np.ndarray, source: np.ndarray) -> np.ndarray:
    """Generalized union of shape."""
    return backdrop + source - (backdrop * source)


def clip(x: np.ndarray) -> np.ndarray:
    """Clip between [0, 1]."""
    return np.clip(x, 0.0, 1.0)
