"""Parametric 1-D topography profiles over the simulation axis.

Each profile synthesises one unit pattern analytically, tiles it across the
axis and hands it to the pattern-to-surface adapter. The inverted triangle is
the exception: its unit is a self-overlapping polyline built from line
segments, reduced to a height function by keeping the highest sample at each
lateral position.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import numpy as np

from afmscan.config import DEFAULT_CONFIG, SimulationConfig
from afmscan.grid import (
    create_axis,
    first_value_greater_than,
    points_for_distance,
    round_half_up,
    simulation_axis,
)
from afmscan.surface.patterns import (
    add_surface_endpoints,
    add_surface_y,
    adjust_length,
    compute_max_per_axis,
    repeat_pattern,
)
from afmscan.surface.types import SurfaceData, SurfaceProfile

logger = logging.getLogger(__name__)


def _axis_span(axis: np.ndarray) -> float:
    return float(axis[-1] - axis[0])


def _surface_from_pattern(
    pattern: np.ndarray, config: SimulationConfig
) -> SurfaceData:
    """Fit *pattern* to the axis length and close it with zero endpoints."""
    axis = simulation_axis(config)
    heights = add_surface_y(adjust_length(pattern, axis.shape[0]))
    return SurfaceData(
        x_surface=add_surface_endpoints(axis),
        y_surface=heights,
        y_surface_imaging=heights.copy(),
    )


def _plateau_pattern(high: float, low: float, config: SimulationConfig) -> np.ndarray:
    """One high plateau followed by one low plateau, tiled ``unit_count`` times."""
    n_units = config.surface.unit_count
    square_len = _axis_span(simulation_axis(config)) / (2 * n_units)
    n_pts = points_for_distance(square_len, config)
    unit = np.concatenate([np.full(n_pts - 1, high), np.full(n_pts - 1, low)])
    return repeat_pattern(unit, n_units)


# ---------------------------------------------------------------------------
# Profile builders
# ---------------------------------------------------------------------------


def square_surface(config: SimulationConfig = DEFAULT_CONFIG) -> SurfaceData:
    """Square wave whose plateau height equals its width."""
    shift = config.surface.y_shift
    square_len = _axis_span(simulation_axis(config)) / (2 * config.surface.unit_count)
    return _surface_from_pattern(
        _plateau_pattern(square_len + shift, shift, config), config
    )


def rectangle_surface(config: SimulationConfig = DEFAULT_CONFIG) -> SurfaceData:
    """Square wave with plateaus twice as tall as they are wide."""
    shift = config.surface.y_shift
    square_len = _axis_span(simulation_axis(config)) / (2 * config.surface.unit_count)
    return _surface_from_pattern(
        _plateau_pattern(2 * square_len + shift, shift, config), config
    )


def triangle_surface(config: SimulationConfig = DEFAULT_CONFIG) -> SurfaceData:
    """Tent waveform, each tent followed by a short flat gap."""
    cfg = config.surface
    dx = config.axis.delta_x
    half = _axis_span(simulation_axis(config)) / cfg.unit_count / 2
    x_tri = create_axis(-half, half, dx)
    gap = np.zeros(round_half_up(cfg.triangle_gap_fraction * x_tri.shape[0]))
    unit = np.concatenate([-np.abs(x_tri) + half, gap]) + cfg.y_shift
    return _surface_from_pattern(repeat_pattern(unit, cfg.unit_count), config)


def sine_surface(config: SimulationConfig = DEFAULT_CONFIG) -> SurfaceData:
    """One cosine period per unit, lifted so its minimum sits at ``y_shift``."""
    cfg = config.surface
    axis = simulation_axis(config)
    wavelength = _axis_span(axis) / cfg.unit_count
    amp = cfg.sine_amplitude
    y = amp * np.cos(2 * np.pi * axis / wavelength)
    y = y + np.abs(np.minimum(-amp, y)) + cfg.y_shift
    return _surface_from_pattern(y, config)


def semicircle_surface(config: SimulationConfig = DEFAULT_CONFIG) -> SurfaceData:
    """Periodic semicircular pits, inverted so the rims share one baseline."""
    cfg = config.surface
    axis = simulation_axis(config)
    r = cfg.semicircle_radius
    term = (2 * r / np.pi) * np.arccos(np.cos(np.pi * axis / (2 * r))) - r
    y_base = np.sqrt(np.maximum(r**2 - term**2, 0.0))
    y = -y_base + y_base.max() + cfg.y_shift
    return _surface_from_pattern(y, config)


def random_surface(config: SimulationConfig = DEFAULT_CONFIG) -> SurfaceData:
    """Plateaus of irregular height with one triangular break in the middle.

    Heights come from the fixed ``random_heights`` table, so every call
    returns the same surface.
    """
    cfg = config.surface
    n_units = cfg.unit_count
    heights = cfg.random_heights
    square_len = _axis_span(simulation_axis(config)) / (2 * n_units)
    n_pts = points_for_distance(square_len, config)

    def plateau(i: int) -> np.ndarray:
        return np.full(n_pts - 1, heights[i] * square_len + cfg.y_shift)

    half = 0.5 * square_len
    x_tri = create_axis(-half, half, config.axis.delta_x)
    triangle = -np.abs(x_tri) + x_tri.max() + cfg.y_shift + heights[n_units]

    parts = [plateau(i) for i in range(n_units)]
    parts.append(triangle)
    parts.extend(plateau(i) for i in range(n_units + 1, 2 * n_units))
    return _surface_from_pattern(np.concatenate(parts), config)


def inverted_triangle_surface(
    config: SimulationConfig = DEFAULT_CONFIG,
) -> SurfaceData:
    """Undercut trapezoids assembled from line segments.

    One unit is built from five pieces: a bottom-left flat, a left ramp that
    runs back under the top, a top flat, a right ramp and a bottom-right flat.
    Units are chained by starting each one at the first axis value past the
    end of the previous one. The outline overlaps itself, so the imaging
    heights keep the highest sample at each rounded lateral position.
    """
    cfg = config.surface
    dx = config.axis.delta_x
    axis = simulation_axis(config)
    half = _axis_span(axis) / cfg.unit_count / 2

    x_tri = create_axis(-half, half, dx)
    y_tri = np.abs(x_tri)
    y_tri = y_tri - 0.1 * y_tri.max()

    half_idx = int(np.floor(0.5 * y_tri.shape[0]))
    left_x_base = axis[:half_idx]
    right_x_base = axis[half_idx : y_tri.shape[0]]
    left_y_base = y_tri[:half_idx]
    right_y_base = y_tri[half_idx:]

    left_mask = left_y_base >= 0
    right_mask = right_y_base >= 0
    left_x, left_y = left_x_base[left_mask], left_y_base[left_mask]
    right_x, right_y = right_x_base[right_mask], right_y_base[right_mask]

    x_left_line = create_axis(left_x.min(), left_x.max() - dx, dx)
    y_left_line = np.full(x_left_line.shape[0], left_y.min())

    min_right = float(right_x.min())
    right_start = first_value_greater_than(axis, min_right)
    x_right_line = create_axis(
        min_right if right_start is None else right_start,
        right_x.max() + half,
        dx,
    )
    y_right_line = np.full(x_right_line.shape[0], right_y.min())

    x_top = axis[(axis > left_x.min()) & (axis < right_x.max())]
    y_top = np.full(x_top.shape[0], left_y.max())

    unit_x = np.concatenate([x_left_line, left_x, x_top, right_x, x_right_line])
    unit_y = (
        np.concatenate([y_left_line, left_y, y_top, right_y, y_right_line])
        + cfg.y_shift
    )

    chunks = [unit_x]
    for _ in range(1, cfg.unit_count):
        offset = first_value_greater_than(axis, chunks[-1][-1])
        if offset is None:
            break
        chunks.append(unit_x + offset)
    x_surf = np.concatenate(chunks)
    y_surf = repeat_pattern(unit_y, len(chunks))

    outline_x = add_surface_endpoints(x_surf)
    outline_y = add_surface_y(y_surf)
    envelope = add_surface_y(compute_max_per_axis(outline_x, outline_y, axis, dx))
    logger.debug(
        "Inverted triangle: %d units, %d outline samples", len(chunks), x_surf.shape[0]
    )
    return SurfaceData(
        x_surface=add_surface_endpoints(axis),
        y_surface=envelope,
        y_surface_imaging=envelope.copy(),
        outline_x=outline_x,
        outline_y=outline_y,
    )


_BUILDERS: dict[SurfaceProfile, Callable[[SimulationConfig], SurfaceData]] = {
    SurfaceProfile.SQUARE: square_surface,
    SurfaceProfile.RECTANGLE: rectangle_surface,
    SurfaceProfile.TRIANGLE: triangle_surface,
    SurfaceProfile.SINE: sine_surface,
    SurfaceProfile.SEMICIRCLE: semicircle_surface,
    SurfaceProfile.INVERTED_TRIANGLE: inverted_triangle_surface,
    SurfaceProfile.RANDOM: random_surface,
}


def generate_surface(
    profile: SurfaceProfile | str, config: SimulationConfig = DEFAULT_CONFIG
) -> SurfaceData:
    """Generate the named surface profile on the padded simulation axis.

    Args:
        profile: A :class:`SurfaceProfile` or any name accepted by
            :meth:`SurfaceProfile.parse`.
        config: Simulation config.

    Returns:
        Freshly allocated :class:`SurfaceData`.

    Raises:
        ValueError: If *profile* names no known profile.
    """
    resolved = SurfaceProfile.parse(profile)
    surface = _BUILDERS[resolved](config)
    logger.debug(
        "Generated %s surface: %d samples, max height %.4f",
        resolved.value,
        len(surface),
        float(surface.y_surface.max()),
    )
    return surface
