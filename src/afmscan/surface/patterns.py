"""Pattern-to-surface adapter and the per-position max reduction."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from afmscan.grid import round_half_up


def repeat_pattern(pattern: Sequence[float] | np.ndarray, count: int) -> np.ndarray:
    """Concatenate *count* copies of a 1-D *pattern*."""
    return np.tile(np.asarray(pattern, dtype=np.float64), count)


def adjust_length(values: np.ndarray, target: int) -> np.ndarray:
    """Zero-pad at the end, or crop around the centre, to exactly *target* samples.

    A longer sequence is cropped to the window starting at
    ``round(len/2) - round(target/2)`` (clamped at 0).
    """
    values = np.asarray(values, dtype=np.float64)
    n = values.shape[0]
    if n == target:
        return values
    if n < target:
        return np.concatenate([values, np.zeros(target - n)])
    start = max(0, round_half_up(0.5 * n) - round_half_up(0.5 * target))
    return values[start : start + target]


def add_surface_endpoints(x_surf: np.ndarray) -> np.ndarray:
    """Repeat the first and last lateral coordinate at either end."""
    return np.concatenate([x_surf[:1], x_surf, x_surf[-1:]])


def add_surface_y(y_surf: np.ndarray) -> np.ndarray:
    """Embed heights between two zero endpoints."""
    return np.concatenate([[0.0], y_surf, [0.0]])


def compute_max_per_axis(
    x_surf: np.ndarray, y_surf: np.ndarray, axis: np.ndarray, delta_x: float
) -> np.ndarray:
    """Reduce a multi-valued polyline to one height per axis position.

    Lateral coordinates are bucketed by rounding to ``|log10(delta_x)| + 1``
    decimal places (ties rounded up). For each axis position the largest
    height in its bucket is kept; positions with no sample get 0.

    Args:
        x_surf: Lateral coordinates of the polyline, shape (M,).
        y_surf: Heights of the polyline, shape (M,).
        axis: Axis positions to evaluate at, shape (N,).
        delta_x: Axis step, which fixes the rounding precision.

    Returns:
        Heights on *axis*, shape (N,).
    """
    factor = 10.0 ** (abs(math.log10(delta_x)) + 1)
    surf_keys = np.floor(np.asarray(x_surf) * factor + 0.5).astype(np.int64)
    axis_keys = np.floor(np.asarray(axis) * factor + 0.5).astype(np.int64)

    lo = int(axis_keys.min())
    hi = int(axis_keys.max())
    in_range = (surf_keys >= lo) & (surf_keys <= hi)
    slots = surf_keys[in_range] - lo

    best = np.full(hi - lo + 1, -np.inf)
    np.maximum.at(best, slots, np.asarray(y_surf, dtype=np.float64)[in_range])
    found = np.zeros(hi - lo + 1, dtype=bool)
    found[slots] = True

    idx = axis_keys - lo
    return np.where(found[idx], best[idx], 0.0)
