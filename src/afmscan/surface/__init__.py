"""Parametric surface topography profiles."""

from afmscan.surface.patterns import adjust_length, compute_max_per_axis, repeat_pattern
from afmscan.surface.profiles import generate_surface
from afmscan.surface.types import SurfaceData, SurfaceProfile

__all__ = [
    "SurfaceData",
    "SurfaceProfile",
    "adjust_length",
    "compute_max_per_axis",
    "generate_surface",
    "repeat_pattern",
]
