"""Frozen dataclass config hierarchy for the AFM scan simulation.

Loading precedence: defaults -> YAML file -> CLI overrides -> freeze.

Every computational entry point takes an optional ``config`` argument that
defaults to :data:`DEFAULT_CONFIG`.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

# ---------------------------------------------------------------------------
# Section config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AxisConfig:
    """Bounds and sampling of the lateral simulation axis.

    Attributes:
        x_min: First lateral coordinate of the simulation axis.
        x_max: Last lateral coordinate of the simulation axis.
        y_min: Lower bound of the simulation viewport.
        y_max: Upper bound of the simulation viewport.
        delta_x: Lateral sampling step shared by every generator.
    """

    x_min: float = 0.0
    x_max: float = 5.0
    y_min: float = 0.0
    y_max: float = 2.0
    delta_x: float = 0.001

    def __post_init__(self) -> None:
        if not (math.isfinite(self.delta_x) and self.delta_x > 0):
            raise ValueError(f"delta_x must be positive, got {self.delta_x!r}")
        if not self.x_max > self.x_min:
            raise ValueError(
                f"x_max ({self.x_max!r}) must exceed x_min ({self.x_min!r})"
            )


@dataclass(frozen=True)
class SurfaceConfig:
    """Shape parameters for the parametric surface profiles.

    Attributes:
        unit_count: Number of repeated units (squares, waves, triangles).
        y_shift: Vertical offset applied so the lowest level sits above zero.
        sine_amplitude: Amplitude of the cosine profile.
        semicircle_radius: Radius of the semicircular arcs.
        triangle_gap_fraction: Flat gap appended to each triangle, as a
            fraction of the triangle sample count.
        random_heights: Plateau height table for the irregular profile, in
            multiples of the plateau width.
    """

    unit_count: int = 5
    y_shift: float = 0.05
    sine_amplitude: float = 0.25
    semicircle_radius: float = 0.5
    triangle_gap_fraction: float = 0.1
    random_heights: tuple[float, ...] = (
        1.0,
        2.0,
        0.5,
        1.25,
        0.25,
        0.75,
        1.0,
        0.5,
        1.5,
        0.125,
    )

    def __post_init__(self) -> None:
        # YAML gives us lists; keep the frozen instance hashable.
        if not isinstance(self.random_heights, tuple):
            object.__setattr__(
                self, "random_heights", tuple(float(h) for h in self.random_heights)
            )
        if self.unit_count < 1:
            raise ValueError(f"unit_count must be >= 1, got {self.unit_count!r}")
        if len(self.random_heights) < 2 * self.unit_count:
            raise ValueError(
                f"random_heights needs {2 * self.unit_count} entries, "
                f"got {len(self.random_heights)}"
            )


@dataclass(frozen=True)
class TipConfig:
    """Tip construction constants.

    Attributes:
        tip_height: Height of the tip outline above its apex.
        max_half_width: Largest half-width reachable with the width slider.
        radius_base: Base of the exponential radius slider mapping.
        preset_slider: Radius and width slider value forced for the sheared
            and multiple-peaks variants.
        vertical_ramp_points: Sample count of a near-vertical side ramp.
        quartic_coefficients: ``(a, b, c)`` of the multiple-peaks apex curve
            ``a*u**4 + b*u**3 + c*u**2``.
        tip_axes_min: Lower bound of the tip preview axes.
        tip_axes_max: Upper bound of the tip preview axes.
        max_tip_radius_units: Physical units spanned by the largest radius.
        default_pair_narrow: Contamination pair used when not randomised and
            the width slider is at most 0.5.
        default_pair_wide: Contamination pair used when not randomised and
            the width slider is above 0.5.
    """

    tip_height: float = 6.0
    max_half_width: float = 1.5
    radius_base: float = 50.0
    preset_slider: float = 0.5
    vertical_ramp_points: int = 20
    quartic_coefficients: tuple[float, float, float] = (500.0, 20.0, -12.0)
    tip_axes_min: float = -5.0
    tip_axes_max: float = 5.0
    max_tip_radius_units: float = 10.0
    default_pair_narrow: tuple[float, float] = (0.9, 0.2)
    default_pair_wide: tuple[float, float] = (0.9, 0.3)

    def __post_init__(self) -> None:
        for name in ("quartic_coefficients", "default_pair_narrow", "default_pair_wide"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(float(v) for v in value))
        if self.tip_height <= 0:
            raise ValueError(f"tip_height must be positive, got {self.tip_height!r}")
        if self.max_half_width <= 0:
            raise ValueError(
                f"max_half_width must be positive, got {self.max_half_width!r}"
            )
        if self.radius_base <= 1:
            raise ValueError(f"radius_base must exceed 1, got {self.radius_base!r}")
        if self.vertical_ramp_points < 2:
            raise ValueError(
                "vertical_ramp_points must be >= 2, "
                f"got {self.vertical_ramp_points!r}"
            )


@dataclass(frozen=True)
class ScanConfig:
    """Scan placement and playback mapping constants.

    Attributes:
        tip_surface_gap: Clearance between the surface maximum and the tip
            apex at the start of a run.
        scale_bar_microns: Length of the scale bar in microns.
        animation_rate_slow: Frame rate at animation speed 0.
        animation_rate_fast: Frame rate at animation speed 1.
    """

    tip_surface_gap: float = 0.5
    scale_bar_microns: float = 5.0
    animation_rate_slow: float = 80.0
    animation_rate_fast: float = 1000.0


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SimulationConfig:
    """Top-level frozen config for the simulation engine.

    Attributes:
        axis: Lateral axis config.
        surface: Surface profile config.
        tip: Tip construction config.
        scan: Scan placement config.
    """

    axis: AxisConfig = field(default_factory=AxisConfig)
    surface: SurfaceConfig = field(default_factory=SurfaceConfig)
    tip: TipConfig = field(default_factory=TipConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)


DEFAULT_CONFIG = SimulationConfig()

_SECTIONS: dict[str, type] = {
    "axis": AxisConfig,
    "surface": SurfaceConfig,
    "tip": TipConfig,
    "scan": ScanConfig,
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _section_field(section: str, field_name: str, key: str) -> tuple[str, str]:
    """Check that *section* and *field_name* name a real config field.

    Raises:
        ValueError: If the section or the field is unknown.
    """
    if section not in _SECTIONS or not field_name:
        known = ", ".join(sorted(_SECTIONS))
        raise ValueError(
            f"Unknown config key {key!r}. Expected <section>.<field> "
            f"with section one of: {known}"
        )
    valid = {f.name for f in dataclasses.fields(_SECTIONS[section])}
    if field_name not in valid:
        raise ValueError(
            f"Unknown field {field_name!r} in config section {section!r}"
        )
    return section, field_name


def _merge_into_sections(
    sections: dict[str, dict[str, Any]], source: Any, origin: str
) -> None:
    """Write the values of one override source into *sections* in place.

    A source maps either ``"section.field"`` to a value, or a section name to
    a ``{field: value}`` mapping. Later sources overwrite earlier ones field
    by field.

    Args:
        sections: Section name -> {field: value}, updated in place.
        source: Parsed YAML document or CLI override dict.
        origin: Where *source* came from, for error messages.

    Raises:
        ValueError: If *source* is not a mapping or names an unknown key.
    """
    if not isinstance(source, dict):
        raise ValueError(
            f"{origin} must be a mapping of config sections, "
            f"got {type(source).__name__}"
        )
    for key, value in source.items():
        key = str(key)
        if isinstance(value, dict):
            for field_name, field_value in value.items():
                dotted = f"{key}.{field_name}"
                section, name = _section_field(key, str(field_name), dotted)
                sections[section][name] = field_value
        else:
            section, _, field_name = key.partition(".")
            section, name = _section_field(section, field_name, key)
            sections[section][name] = value


# ---------------------------------------------------------------------------
# Public factory
# ---------------------------------------------------------------------------


def load_config(
    yaml_path: str | Path | None = None,
    *,
    cli_overrides: dict[str, Any] | None = None,
) -> SimulationConfig:
    """Construct a frozen :class:`SimulationConfig` using layered overrides.

    Loading precedence (lowest to highest priority):

    1. Dataclass field defaults
    2. YAML file (*yaml_path*)
    3. CLI overrides (*cli_overrides*)
    4. Freeze

    Args:
        yaml_path: Optional path to a YAML config file with one mapping per
            section (``axis``, ``surface``, ``tip``, ``scan``).
        cli_overrides: Optional dict of overrides, dotted or nested.

    Returns:
        Frozen :class:`SimulationConfig` with all overrides applied.

    Raises:
        ValueError: If the YAML document is not a mapping, a key is unknown,
            or a section rejects its values.
    """
    sections: dict[str, dict[str, Any]] = {name: {} for name in _SECTIONS}

    if yaml_path is not None:
        with Path(yaml_path).open() as fh:
            raw = yaml.safe_load(fh)
        if raw is not None:
            _merge_into_sections(sections, raw, f"Config file {str(yaml_path)!r}")

    if cli_overrides is not None:
        _merge_into_sections(sections, cli_overrides, "CLI overrides")

    return SimulationConfig(
        **{name: cls(**sections[name]) for name, cls in _SECTIONS.items()}
    )


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def _plain(value: Any) -> Any:
    """Recursively turn tuples into lists so safe_load can read the dump."""
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def serialize_config(config: SimulationConfig) -> str:
    """Serialize *config* to a YAML string.

    Args:
        config: Frozen simulation config to serialize.

    Returns:
        YAML string that :func:`load_config` reads back to an equal config.
    """
    return yaml.safe_dump(
        _plain(dataclasses.asdict(config)), default_flow_style=False, sort_keys=True
    )
