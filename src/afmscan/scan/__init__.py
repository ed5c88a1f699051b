"""Tip-surface convolution and simulation runs."""

from afmscan.scan.convolution import (
    SimulationResult,
    compute_surface_response,
    pad_imaging_surface,
)
from afmscan.scan.run import (
    ScanFrame,
    SimulationRun,
    imaged_surface_index,
    initial_simulation_center,
    iter_scan_frames,
    run_simulation,
)

__all__ = [
    "ScanFrame",
    "SimulationResult",
    "SimulationRun",
    "compute_surface_response",
    "imaged_surface_index",
    "initial_simulation_center",
    "iter_scan_frames",
    "pad_imaging_surface",
    "run_simulation",
]
