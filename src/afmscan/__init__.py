"""AFM tip-convolution simulation engine.

Builds parametric surface profiles and tip outlines, then computes the
distorted trace an atomic force microscope reports for that tip.
"""

from afmscan.config import DEFAULT_CONFIG, SimulationConfig, load_config
from afmscan.grid import create_axis, simulation_axis
from afmscan.scan import SimulationResult, compute_surface_response, run_simulation
from afmscan.surface import SurfaceData, SurfaceProfile, generate_surface
from afmscan.tip import TipGeometry, TipShape, TipShapeInput, compute_tip_geometry

__all__ = [
    "DEFAULT_CONFIG",
    "SimulationConfig",
    "SimulationResult",
    "SurfaceData",
    "SurfaceProfile",
    "TipGeometry",
    "TipShape",
    "TipShapeInput",
    "compute_surface_response",
    "compute_tip_geometry",
    "create_axis",
    "generate_surface",
    "load_config",
    "run_simulation",
    "simulation_axis",
]
