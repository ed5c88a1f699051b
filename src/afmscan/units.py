"""Pure numeric mappings between slider values, physical units and grid steps."""

from __future__ import annotations

import math

from afmscan.config import DEFAULT_CONFIG, SimulationConfig
from afmscan.grid import round_half_up


def _check_unit_interval(name: str, value: float) -> None:
    if not (math.isfinite(value) and 0.0 <= value <= 1.0):
        raise ValueError(f"{name} must be a finite value in [0, 1], got {value!r}")


def radius_slider_to_radius(
    value: float, config: SimulationConfig = DEFAULT_CONFIG
) -> float:
    """Map a radius slider value to a raw radius, ``(B**v - 1) / (B - 1)``.

    Args:
        value: Slider value in [0, 1].
        config: Simulation config supplying the base ``B``.

    Returns:
        Radius in [0, 1].

    Raises:
        ValueError: If *value* is not finite or outside [0, 1].
    """
    _check_unit_interval("radius slider", value)
    base = config.tip.radius_base
    return (base**value - 1.0) / (base - 1.0)


def max_tip_radius(config: SimulationConfig = DEFAULT_CONFIG) -> float:
    """Radius reached at slider value 1."""
    return radius_slider_to_radius(1.0, config)


def normalized_tip_radius(
    value: float, config: SimulationConfig = DEFAULT_CONFIG
) -> float:
    """Slider radius divided by :func:`max_tip_radius`."""
    return radius_slider_to_radius(value, config) / max_tip_radius(config)


def width_slider_to_half_width(
    value: float, tip_radius: float, config: SimulationConfig = DEFAULT_CONFIG
) -> float:
    """Map a width slider value to a tip half-width.

    Linear from *tip_radius* at 0 to ``max_half_width`` at 1.

    Raises:
        ValueError: If *value* is outside [0, 1] or *tip_radius* is negative
            or not finite.
    """
    _check_unit_interval("width slider", value)
    if not (math.isfinite(tip_radius) and tip_radius >= 0.0):
        raise ValueError(f"tip radius must be finite and >= 0, got {tip_radius!r}")
    return tip_radius + (config.tip.max_half_width - tip_radius) * value


def animation_speed_to_rate(
    value: float, config: SimulationConfig = DEFAULT_CONFIG
) -> float:
    """Map an animation speed slider value to frames per second."""
    _check_unit_interval("animation speed", value)
    slow = config.scan.animation_rate_slow
    fast = config.scan.animation_rate_fast
    return slow + (fast - slow) * value


def microns_to_normalized(
    distance: float, config: SimulationConfig = DEFAULT_CONFIG
) -> float:
    """Convert a distance in microns to normalized simulation units."""
    return distance / (max_tip_radius(config) * config.tip.max_tip_radius_units)


def scale_bar_unitless(config: SimulationConfig = DEFAULT_CONFIG) -> float:
    """Length of the scale bar in normalized simulation units."""
    return microns_to_normalized(config.scan.scale_bar_microns, config)


def normalized_step_to_index(
    step: float, config: SimulationConfig = DEFAULT_CONFIG
) -> int:
    """Convert a normalized lateral step to a whole number of grid samples (>= 1)."""
    return max(1, round_half_up(step / config.axis.delta_x))
