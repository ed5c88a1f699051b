"""Straight side ramps joining the apex section to the top of the tip."""

from __future__ import annotations

import numpy as np

from afmscan.config import DEFAULT_CONFIG, SimulationConfig
from afmscan.grid import round_half_up
from afmscan.tip.contamination import contaminate_line


def ramp_points(
    start: tuple[float, float],
    end: tuple[float, float],
    config: SimulationConfig = DEFAULT_CONFIG,
) -> tuple[np.ndarray, np.ndarray]:
    """Sample the straight segment from *start* to *end*.

    If the lateral span is at least one axis step, the segment is sampled
    uniformly at roughly that step, both endpoints included. Otherwise the
    ramp is treated as vertical at ``start[0]`` and sampled with
    ``vertical_ramp_points`` points.

    Returns:
        ``(x, y)`` arrays of equal length.
    """
    start_x, start_y = start
    end_x, end_y = end
    dx = config.axis.delta_x
    if end_x - start_x < dx:
        end_x = start_x

    if start_x < end_x:
        steps = max(1, round_half_up((end_x - start_x) / dx))
        ratio = np.arange(steps + 1, dtype=np.float64) / steps
    else:
        n_pts = config.tip.vertical_ramp_points
        ratio = np.arange(n_pts, dtype=np.float64) / (n_pts - 1)
    x = start_x + ratio * (end_x - start_x)
    y = start_y + ratio * (end_y - start_y)
    return x, y


def tip_line(
    start: tuple[float, float],
    end: tuple[float, float],
    *,
    contaminated: bool = False,
    tip_radius: float = 0.0,
    tip_half_width: float = 0.0,
    random_pair: tuple[float, float] = (0.0, 0.0),
    config: SimulationConfig = DEFAULT_CONFIG,
) -> tuple[np.ndarray, np.ndarray]:
    """Build one side ramp, optionally perturbed by contamination.

    Args:
        start: ``(x, y)`` of the first ramp point.
        end: ``(x, y)`` of the last ramp point.
        contaminated: Apply :func:`contaminate_line` to the heights.
        tip_radius: Effective tip radius, used by the contamination model.
        tip_half_width: Effective tip half-width, used by the contamination
            model.
        random_pair: Contamination blend values.
        config: Simulation config.

    Returns:
        ``(x, y)`` arrays of equal length. Endpoints match *start* and *end*
        (apart from the vertical-ramp snap of ``end[0]``).
    """
    x, y = ramp_points(start, end, config)
    if contaminated:
        y = contaminate_line(x, y, tip_radius, tip_half_width, random_pair, config)
    return x, y
