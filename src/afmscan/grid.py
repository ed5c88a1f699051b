"""Uniform 1-D coordinate axes and index lookups shared by all generators."""

from __future__ import annotations

import functools
import math

import numpy as np

from afmscan.config import DEFAULT_CONFIG, AxisConfig, SimulationConfig


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity."""
    return int(math.floor(value + 0.5))


def create_axis(start: float, end: float, step: float) -> np.ndarray:
    """Build an evenly spaced axis from *start* to *end* inclusive.

    The sample count is ``round((end - start) / step) + 1`` and element ``i``
    is ``start + i * step``. The last element is not clamped to *end*, so a
    small float drift at the tail is expected.

    Args:
        start: First coordinate.
        end: Nominal last coordinate.
        step: Spacing between samples.

    Returns:
        Float64 array of shape ``(n,)``.
    """
    n = round_half_up((end - start) / step) + 1
    return start + np.arange(n, dtype=np.float64) * step


@functools.lru_cache(maxsize=8)
def _cached_axis(axis: AxisConfig) -> np.ndarray:
    values = create_axis(axis.x_min, axis.x_max, axis.delta_x)
    values.flags.writeable = False
    return values


def simulation_axis(config: SimulationConfig = DEFAULT_CONFIG) -> np.ndarray:
    """Return the read-only primary simulation axis for *config*.

    The axis is built once per distinct :class:`AxisConfig` and shared.
    """
    return _cached_axis(config.axis)


def points_for_distance(
    distance: float, config: SimulationConfig = DEFAULT_CONFIG
) -> int:
    """Return the grid step count that best spans a physical *distance*.

    Finds the simulation axis sample nearest to ``x_min + distance`` (first
    one on ties) and returns its 1-based index, never less than 2.
    """
    axis = simulation_axis(config)
    target = axis[0] + distance
    best = int(np.argmin(np.abs(axis - target)))
    return max(2, best + 1)


def first_value_greater_than(values: np.ndarray, target: float) -> float | None:
    """Return the first element of *values* strictly above *target*.

    Returns:
        The value, or None if no element qualifies.
    """
    hits = np.flatnonzero(values > target)
    if hits.size == 0:
        return None
    return float(values[hits[0]])


def rounding_digits(delta_x: float) -> float:
    """Decimal digits used to bucket lateral coordinates for a given step."""
    return abs(math.log10(delta_x)) + 1
