"""Tip outline construction, contamination model and seeded random pair."""

from afmscan.tip.contamination import (
    contaminate_line,
    frac_function,
    lagrange_interpolation,
)
from afmscan.tip.geometry import compute_tip_geometry
from afmscan.tip.ramp import tip_line
from afmscan.tip.rng import Mulberry32, RandomSource, contamination_random_pair
from afmscan.tip.types import TipGeometry, TipShape, TipShapeInput, translate_tip

__all__ = [
    "Mulberry32",
    "RandomSource",
    "TipGeometry",
    "TipShape",
    "TipShapeInput",
    "compute_tip_geometry",
    "contaminate_line",
    "contamination_random_pair",
    "frac_function",
    "lagrange_interpolation",
    "tip_line",
    "translate_tip",
]
