"""Tip outline construction from slider-style parameters.

A tip outline is three pieces joined left to right: a straight ramp down
from the top-left corner, an apex section, and a straight ramp up to the
top-right corner. The apex section depends on the :class:`TipShape`
variant. The ramps may be perturbed by the contamination model. The shared
first and last apex points belong to the ramps, so they are not duplicated.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import numpy as np

from afmscan.config import DEFAULT_CONFIG, SimulationConfig
from afmscan.grid import create_axis
from afmscan.tip.ramp import tip_line
from afmscan.tip.types import TipGeometry, TipShape, TipShapeInput
from afmscan.units import normalized_tip_radius, width_slider_to_half_width

logger = logging.getLogger(__name__)

# (x, y, y_tip_dist) of an apex section.
_Section = tuple[np.ndarray, np.ndarray, float]


def _apex_axis(center_x: float, radius: float, config: SimulationConfig) -> np.ndarray:
    return create_axis(center_x - radius, center_x + radius, config.axis.delta_x)


def arc_section(
    center_x: float, center_y: float, radius: float, config: SimulationConfig
) -> _Section:
    """Lower semicircle of *radius* centred on the tip centre."""
    x = _apex_axis(center_x, radius, config)
    inner = np.maximum(radius**2 - (x - center_x) ** 2, 0.0)
    y = -np.sqrt(inner) + center_y
    return x, y, radius


def slant_section(
    center_x: float, center_y: float, radius: float, config: SimulationConfig
) -> _Section:
    """Straight tilted apex rising from ``-radius/2`` to ``+radius/2``."""
    x = _apex_axis(center_x, radius, config)
    start_y = center_y - 0.5 * radius
    end_y = center_y + 0.5 * radius
    slope = (end_y - start_y) / ((x[-1] - x[0]) or 1.0)
    y = slope * (x - x[0]) + start_y
    return x, y, 0.5 * radius


def quartic_section(
    center_x: float, center_y: float, radius: float, config: SimulationConfig
) -> _Section:
    """Quartic apex ``a*u**4 + b*u**3 + c*u**2`` with ``u`` measured from the centre."""
    a, b, c = config.tip.quartic_coefficients
    x = _apex_axis(center_x, radius, config)
    u = x - center_x
    y = a * u**4 + b * u**3 + c * u**2 + center_y
    return x, y, float(abs(y.min() - center_y))


_SECTION_BUILDERS: dict[
    TipShape, Callable[[float, float, float, SimulationConfig], _Section]
] = {
    TipShape.DEFAULT: arc_section,
    TipShape.SHEARED: slant_section,
    TipShape.MULTIPLE_PEAKS: quartic_section,
}


def effective_tip_size(
    tip_input: TipShapeInput, config: SimulationConfig = DEFAULT_CONFIG
) -> tuple[float, float]:
    """Return the ``(radius, half_width)`` a tip will be built with.

    Raises:
        ValueError: If a slider value is not finite or outside [0, 1].
    """
    tip_radius = normalized_tip_radius(tip_input.radius_slider, config)
    half_width = width_slider_to_half_width(tip_input.width_slider, tip_radius, config)
    if tip_input.shape.uses_preset_size:
        preset = config.tip.preset_slider
        tip_radius = normalized_tip_radius(preset, config)
        half_width = width_slider_to_half_width(preset, tip_radius, config)
    return tip_radius, half_width


def compute_tip_geometry(
    tip_input: TipShapeInput, config: SimulationConfig = DEFAULT_CONFIG
) -> TipGeometry:
    """Build the tip outline described by *tip_input*.

    Slider values map to a normalized radius and a half-width. The sheared
    and multiple-peaks variants replace both with the preset slider value
    before building.

    Args:
        tip_input: Tip parameters.
        config: Simulation config.

    Returns:
        A new :class:`TipGeometry` with ``len(xtip) == len(ytip) >= 2``.

    Raises:
        ValueError: If a slider value is not finite or outside [0, 1].
    """
    shape = tip_input.shape
    tip_radius, half_width = effective_tip_size(tip_input, config)

    cx, cy = tip_input.center_x, tip_input.center_y
    top = cy - tip_radius + config.tip.tip_height
    mid_x, mid_y, y_tip_dist = _SECTION_BUILDERS[shape](cx, cy, tip_radius, config)

    if shape is TipShape.DEFAULT and tip_radius == 0 and half_width == tip_radius:
        # Zero-size tip: a spike from the apex straight up to the top.
        logger.debug("Degenerate tip at (%.4f, %.4f)", cx, cy)
        return TipGeometry(
            xtip=np.concatenate([mid_x, mid_x]),
            ytip=np.concatenate([mid_y, np.full(mid_x.shape[0], top)]),
            y_tip_dist=y_tip_dist,
            tip_radius=tip_radius,
            tip_half_width=half_width,
            shape=shape,
        )

    ramp_kwargs = dict(
        contaminated=tip_input.contaminated,
        tip_radius=tip_radius,
        tip_half_width=half_width,
        random_pair=tip_input.random_pair,
        config=config,
    )
    left_x, left_y = tip_line(
        (cx - half_width, top), (mid_x[0], mid_y[0]), **ramp_kwargs
    )
    right_x, right_y = tip_line(
        (mid_x[-1], mid_y[-1]), (cx + half_width, top), **ramp_kwargs
    )

    xtip = np.concatenate([left_x, mid_x[1:-1], right_x])
    ytip = np.concatenate([left_y, mid_y[1:-1], right_y])
    logger.debug(
        "Built %s tip: radius=%.4f half_width=%.4f points=%d contaminated=%s",
        shape.value,
        tip_radius,
        half_width,
        xtip.shape[0],
        tip_input.contaminated,
    )
    return TipGeometry(
        xtip=xtip,
        ytip=ytip,
        y_tip_dist=float(y_tip_dist),
        tip_radius=tip_radius,
        tip_half_width=half_width,
        shape=shape,
    )
