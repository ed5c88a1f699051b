"""One simulation run: surface, tip placement, convolution and scan frames."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np

from afmscan.config import DEFAULT_CONFIG, SimulationConfig
from afmscan.scan.convolution import (
    SimulationResult,
    compute_surface_response,
    tip_padding,
)
from afmscan.surface import SurfaceData, SurfaceProfile, generate_surface
from afmscan.tip.geometry import compute_tip_geometry, effective_tip_size
from afmscan.tip.types import TipGeometry, TipShapeInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SimulationRun:
    """Everything produced by one "run" action.

    Attributes:
        surface: The generated surface.
        tip: The tip outline, built at (*center_x*, *center_y*).
        result: Convolution output.
        center_x: Lateral tip centre at the start of the scan.
        center_y: Vertical tip centre the tip was built at.
    """

    surface: SurfaceData
    tip: TipGeometry
    result: SimulationResult
    center_x: float
    center_y: float


@dataclass(frozen=True, eq=False)
class ScanFrame:
    """The tip at one scan position during playback.

    Attributes:
        index: Scan position (row of the simulation result).
        tip: Tip outline translated to this position.
        center_y: Tip centre height at this position.
        image_y: Simulated surface height at this position.
    """

    index: int
    tip: TipGeometry
    center_y: float
    image_y: float


def initial_simulation_center(
    tip_radius: float,
    surface_max: float,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> tuple[float, float]:
    """Starting tip centre: axis start, clear of the highest surface point."""
    return (
        config.axis.x_min,
        surface_max + config.scan.tip_surface_gap + tip_radius,
    )


def run_simulation(
    profile: SurfaceProfile | str,
    tip_input: TipShapeInput,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> SimulationRun:
    """Generate a surface, place the tip above it and simulate the scan.

    The tip centre in *tip_input* is replaced by
    :func:`initial_simulation_center`.

    Args:
        profile: Surface profile to image.
        tip_input: Tip parameters.
        config: Simulation config.

    Returns:
        The completed :class:`SimulationRun`.

    Raises:
        ValueError: If the profile is unknown or a slider is out of range.
    """
    surface = generate_surface(profile, config)
    tip_radius, _ = effective_tip_size(tip_input, config)
    center_x, center_y = initial_simulation_center(
        tip_radius, float(surface.y_surface.max()), config
    )
    placed = dataclasses.replace(tip_input, center_x=center_x, center_y=center_y)
    tip = compute_tip_geometry(placed, config)
    result = compute_surface_response(
        tip.ytip, surface.y_surface_imaging, center_y, tip.y_tip_dist
    )
    logger.info(
        "Simulated %s with %s tip: %d scan positions, trace range [%.4f, %.4f]",
        SurfaceProfile.parse(profile).value,
        tip.shape.value,
        len(result),
        float(result.y_surface_image.min()),
        float(result.y_surface_image.max()),
    )
    return SimulationRun(
        surface=surface,
        tip=tip,
        result=result,
        center_x=center_x,
        center_y=center_y,
    )


def imaged_surface_index(run: SimulationRun, index: int) -> int:
    """Index into ``run.surface.x_surface`` of the sample imaged at scan *index*.

    Row ``index`` of the convolution places tip column ``c`` over padded
    surface sample ``index + c``. The apex column, the lowest tip sample,
    therefore sits over surface sample ``index + apex_col - left_pad``. The
    result is clamped to the surface range for rows where the apex hangs
    over the padding.
    """
    apex_col = int(np.argmin(run.tip.ytip))
    left_pad, _ = tip_padding(len(run.tip))
    imaged = index + apex_col - left_pad
    return min(max(imaged, 0), len(run.surface) - 1)


def iter_scan_frames(run: SimulationRun, step: int = 1) -> Iterator[ScanFrame]:
    """Yield the tip at every *step*-th scan position, always ending on the last.

    Frames are pure translations of ``run.tip``. Laterally the apex is moved
    onto the surface sample that the row images (see
    :func:`imaged_surface_index`), vertically onto the simulated centre
    trajectory.

    Raises:
        ValueError: If *step* is less than 1.
    """
    if step < 1:
        raise ValueError(f"step must be >= 1, got {step!r}")
    n_rows = len(run.result)
    indices = list(range(0, n_rows, step))
    if indices[-1] != n_rows - 1:
        indices.append(n_rows - 1)
    apex_x = float(run.tip.xtip[int(np.argmin(run.tip.ytip))])
    x_surface = run.surface.x_surface
    for index in indices:
        center = float(run.result.y_center[index])
        shift_x = float(x_surface[imaged_surface_index(run, index)]) - apex_x
        yield ScanFrame(
            index=index,
            tip=run.tip.translated(shift_x, center - run.center_y),
            center_y=center,
            image_y=float(run.result.y_surface_image[index]),
        )
