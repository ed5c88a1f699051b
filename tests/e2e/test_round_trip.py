"""End-to-end scan of the default square surface with the default tip.

Runs the full-resolution pipeline (surface, tip, convolution) and checks the
simulated trace against the known tip-broadening behaviour: plateau tops are
reproduced exactly while trenches narrower than the tip read shallower and
narrower than they are.
"""

from __future__ import annotations

import numpy as np
import pytest

from afmscan import SurfaceProfile, TipShapeInput, run_simulation
from afmscan.scan import SimulationRun, imaged_surface_index, iter_scan_frames

HIGH = 0.55
LOW = 0.05
PLATEAU = 500  # samples per plateau on the default axis


@pytest.fixture(scope="module")
def square_run() -> SimulationRun:
    return run_simulation(SurfaceProfile.SQUARE, TipShapeInput(0.5, 0.5))


@pytest.mark.slow
@pytest.mark.e2e
def test_trace_shape(square_run: SimulationRun) -> None:
    trace = square_run.result.y_surface_image
    assert len(square_run.result) == len(square_run.surface) == 5003
    assert trace.max() <= HIGH + 1e-9


@pytest.mark.slow
@pytest.mark.e2e
@pytest.mark.parametrize("plateau", [0, 1, 2, 3, 4])
def test_plateau_tops_are_reproduced(square_run: SimulationRun, plateau: int) -> None:
    """With the apex over a high plateau, nothing else on the tip touches."""
    trace = square_run.result.y_surface_image
    # Surface index i sits under the apex at trace row i + 1.
    start = 1 + 2 * plateau * PLATEAU + 1
    interior = trace[start + 130 : start + PLATEAU - 130]
    np.testing.assert_allclose(interior, HIGH, atol=1e-3)


@pytest.mark.slow
@pytest.mark.e2e
@pytest.mark.parametrize("trench", [0, 1, 2, 3])
def test_trench_centres_reach_the_floor(square_run: SimulationRun, trench: int) -> None:
    trace = square_run.result.y_surface_image
    centre = 1 + (2 * trench + 1) * PLATEAU + PLATEAU // 2 + 1
    np.testing.assert_allclose(trace[centre - 40 : centre + 40], LOW, atol=1e-3)


@pytest.mark.slow
@pytest.mark.e2e
def test_trench_floor_is_narrowed_by_the_tip(square_run: SimulationRun) -> None:
    trace = square_run.result.y_surface_image
    first_trench = trace[1 + PLATEAU + 1 : 1 + 2 * PLATEAU + 1]
    floor = np.count_nonzero(first_trench < LOW + 0.01)
    assert 100 < floor < 400


@pytest.mark.slow
@pytest.mark.e2e
def test_plateau_is_centred_under_the_apex(square_run: SimulationRun) -> None:
    """The settled top of the second plateau lines up with the surface."""
    trace = square_run.result.y_surface_image
    lo, hi = 950, 1560
    settled = np.flatnonzero(trace[lo:hi] > HIGH - 1e-3) + lo
    centre = 0.5 * (settled[0] + settled[-1])
    expected = 0.5 * (1001 + 1500) + 1
    assert abs(centre - expected) <= 2


@pytest.mark.slow
@pytest.mark.e2e
def test_frames_follow_the_trace(square_run: SimulationRun) -> None:
    frames = list(iter_scan_frames(square_run, step=250))
    assert frames[-1].index == len(square_run.result) - 1
    x_surface = square_run.surface.x_surface
    for frame in frames:
        apex_col = int(np.argmin(frame.tip.ytip))
        # The translated apex sits at the traced height.
        assert frame.tip.ytip[apex_col] == pytest.approx(frame.image_y, abs=1e-3)
        # ...and over the surface sample that row images.
        imaged = imaged_surface_index(square_run, frame.index)
        assert frame.tip.xtip[apex_col] == pytest.approx(x_surface[imaged], abs=1e-9)
        if frame.index >= 1:
            assert imaged == frame.index - 1
