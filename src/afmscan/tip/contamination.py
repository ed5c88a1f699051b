"""Sinusoidal-envelope contamination of a tip side ramp.

Debris on a tip flank is modelled as a ``sin**2`` dip pattern along the ramp.
The dip wavelength is a fraction of the ramp length; the fraction comes from
an empirical curve through five control points, evaluated with exact
Lagrange interpolation at the tip half-width.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np

from afmscan.config import DEFAULT_CONFIG, SimulationConfig

logger = logging.getLogger(__name__)

# (y at x_min, y at x_max) of the two empirical wavelength-fraction curves.
FRAC_MIN_ENDPOINTS: tuple[float, float] = (0.014, 0.1)
FRAC_MAX_ENDPOINTS: tuple[float, float] = (0.017, 0.25)

# Perturbation amplitude at the narrowest and widest tip.
_AMP_NARROW = 1.0
_AMP_WIDE = 0.5


def lagrange_interpolation(
    x: float, xs: Sequence[float], ys: Sequence[float]
) -> float:
    """Evaluate the Lagrange polynomial through (*xs*, *ys*) at *x*.

    At a node ``x == xs[i]`` the result is exactly ``ys[i]``.
    """
    total = 0.0
    for i, x_i in enumerate(xs):
        term = ys[i]
        for j, x_j in enumerate(xs):
            if i == j:
                continue
            term *= (x - x_j) / (x_i - x_j)
        total += term
    return total


def frac_control_points(
    x_min: float, x_max: float, y_min: float, y_max: float
) -> tuple[list[float], list[float]]:
    """Return the five control points of a wavelength-fraction curve.

    The midpoint sits 10% below *y_max*, the quarter point 20% below the
    midpoint, and the three-quarter point halfway between midpoint and
    *y_max*.
    """
    x3 = (x_min + x_max) / 2
    y3 = y_max - 0.1 * (y_max - y_min)
    x2 = (x_min + x3) / 2
    y2 = y3 - 0.2 * (y3 - y_min)
    x4 = (x3 + x_max) / 2
    y4 = (y3 + y_max) / 2
    return [x_min, x2, x3, x4, x_max], [y_min, y2, y3, y4, y_max]


def frac_function(
    x_min: float, x_max: float, y_min: float, y_max: float, x: float
) -> float:
    """Evaluate the wavelength-fraction curve from (x_min, y_min) to (x_max, y_max)."""
    xs, ys = frac_control_points(x_min, x_max, y_min, y_max)
    return lagrange_interpolation(x, xs, ys)


def total_distance(xline: np.ndarray, yline: np.ndarray) -> float:
    """Arc length of the polyline (*xline*, *yline*)."""
    dx = np.diff(xline)
    dy = np.diff(yline)
    return float(np.sum(np.sqrt(dx * dx + dy * dy)))


def contaminate_line(
    xline: np.ndarray,
    yline: np.ndarray,
    tip_radius: float,
    tip_half_width: float,
    random_pair: tuple[float, float],
    config: SimulationConfig = DEFAULT_CONFIG,
) -> np.ndarray:
    """Perturb the heights of a side ramp with the contamination model.

    Each height is lowered by ``amp * sin(2*pi*(x - anchor)/wavelength)**2``.
    The anchor is the ramp end at the apex: the last point for a falling ramp
    and the first point for a rising one. The random value is picked the same
    way: ``random_pair[0]`` for a falling ramp, ``random_pair[1]`` otherwise.
    The first and last heights are always returned unchanged.

    Args:
        xline: Lateral ramp coordinates, shape (K,).
        yline: Ramp heights, shape (K,).
        tip_radius: Effective tip radius.
        tip_half_width: Effective tip half-width.
        random_pair: Blend values in [0, 1) for the wavelength.
        config: Simulation config supplying ``max_half_width``.

    Returns:
        New array of perturbed heights, or a copy of *yline* when the ramp is
        degenerate (single point, zero length, vertical, flat, or zero
        wavelength).
    """
    xline = np.asarray(xline, dtype=np.float64)
    yline = np.asarray(yline, dtype=np.float64)
    if xline.shape[0] < 2:
        return yline.copy()

    dist = total_distance(xline, yline)
    if dist == 0:
        return yline.copy()

    dx = np.diff(xline)
    dy = np.diff(yline)
    run = dx != 0
    if not np.any(run):
        logger.debug("Contamination skipped: vertical ramp")
        return yline.copy()
    m = float(np.max(dy[run] / dx[run]))
    if m == 0:
        return yline.copy()

    max_half_width = config.tip.max_half_width
    span_args = (tip_radius, max_half_width)
    frac_min = frac_function(*span_args, *FRAC_MIN_ENDPOINTS, tip_half_width)
    frac_max = frac_function(*span_args, *FRAC_MAX_ENDPOINTS, tip_half_width)
    lambda_min = frac_min * dist
    lambda_max = frac_max * dist
    rand = random_pair[0] if m < 0 else random_pair[1]
    wavelength = lambda_min + (lambda_max - lambda_min) * rand
    if wavelength == 0:
        return yline.copy()

    span = (max_half_width - tip_radius) or 1.0
    t = min(max((tip_half_width - tip_radius) / span, 0.0), 1.0)
    amp = _AMP_NARROW + (_AMP_WIDE - _AMP_NARROW) * t

    anchor = xline[-1] if m < 0 else xline[0]
    phase = 2 * math.pi * (xline - anchor) / wavelength
    out = yline - amp * np.sin(phase) ** 2
    out[0] = yline[0]
    out[-1] = yline[-1]
    return out
