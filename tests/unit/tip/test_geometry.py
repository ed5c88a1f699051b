"""Unit tests for tip outline construction."""

from __future__ import annotations

import numpy as np
import pytest

from afmscan.config import DEFAULT_CONFIG
from afmscan.tip import (
    TipGeometry,
    TipShape,
    TipShapeInput,
    compute_tip_geometry,
    translate_tip,
)
from afmscan.tip.geometry import effective_tip_size
from afmscan.units import normalized_tip_radius, width_slider_to_half_width

DX = DEFAULT_CONFIG.axis.delta_x

# ---------------------------------------------------------------------------
# Shape flags
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("sheared", "multiple_peaks", "expected"),
    [
        (False, False, TipShape.DEFAULT),
        (True, False, TipShape.SHEARED),
        (False, True, TipShape.MULTIPLE_PEAKS),
        (True, True, TipShape.SHEARED),
    ],
)
def test_shape_from_flags(sheared, multiple_peaks, expected) -> None:
    tip_input = TipShapeInput(0.5, 0.5, sheared=sheared, multiple_peaks=multiple_peaks)
    assert tip_input.shape is expected


# ---------------------------------------------------------------------------
# Outline invariants
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "tip_input",
    [
        TipShapeInput(0.5, 0.5),
        TipShapeInput(0.0, 0.0),
        TipShapeInput(0.0, 0.5),
        TipShapeInput(1.0, 1.0),
        TipShapeInput(0.3, 0.7, contaminated=True),
        TipShapeInput(0.5, 0.5, sheared=True),
        TipShapeInput(0.5, 0.5, multiple_peaks=True),
        TipShapeInput(0.5, 0.5, multiple_peaks=True, contaminated=True),
    ],
    ids=[
        "default",
        "degenerate",
        "zero-radius",
        "widest",
        "contaminated",
        "sheared",
        "multiple-peaks",
        "multiple-peaks-contaminated",
    ],
)
def test_outline_arrays_match(tip_input: TipShapeInput) -> None:
    tip = compute_tip_geometry(tip_input)
    assert tip.xtip.shape == tip.ytip.shape
    assert len(tip) >= 2
    assert np.all(np.isfinite(tip.ytip))


def test_default_tip_corners_and_apex() -> None:
    tip_input = TipShapeInput(0.5, 0.5, center_x=2.0, center_y=1.0)
    tip = compute_tip_geometry(tip_input)

    r = normalized_tip_radius(0.5)
    hw = width_slider_to_half_width(0.5, r)
    top = 1.0 - r + DEFAULT_CONFIG.tip.tip_height

    assert tip.tip_radius == pytest.approx(r)
    assert tip.tip_half_width == pytest.approx(hw)
    assert tip.y_tip_dist == pytest.approx(r)
    assert tip.xtip[0] == 2.0 - hw
    assert tip.ytip[0] == top
    assert tip.xtip[-1] == pytest.approx(2.0 + hw)
    assert tip.ytip[-1] == pytest.approx(top)
    # Apex of the arc sits one radius below the centre, to within a grid step.
    assert tip.ytip.min() == pytest.approx(1.0 - r, abs=DX)


def test_degenerate_tip_is_a_vertical_spike() -> None:
    tip = compute_tip_geometry(TipShapeInput(0.0, 0.0, center_x=1.0, center_y=2.0))
    assert len(tip) == 2
    np.testing.assert_array_equal(tip.xtip, [1.0, 1.0])
    np.testing.assert_array_equal(tip.ytip, [2.0, 2.0 + DEFAULT_CONFIG.tip.tip_height])
    assert tip.tip_radius == 0.0
    assert tip.y_tip_dist == 0.0


def test_zero_radius_with_width_is_a_cone() -> None:
    tip = compute_tip_geometry(TipShapeInput(0.0, 0.5))
    assert tip.tip_radius == 0.0
    assert tip.tip_half_width == pytest.approx(0.75)
    assert tip.ytip.min() == 0.0
    assert tip.xtip[int(np.argmin(tip.ytip))] == pytest.approx(0.0)


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("flag", ["sheared", "multiple_peaks"])
def test_variants_use_preset_size(flag: str) -> None:
    """Sheared and multiple-peaks tips ignore the sliders."""
    narrow = compute_tip_geometry(TipShapeInput(0.1, 0.9, **{flag: True}))
    wide = compute_tip_geometry(TipShapeInput(0.9, 0.1, **{flag: True}))

    preset = DEFAULT_CONFIG.tip.preset_slider
    r = normalized_tip_radius(preset)
    assert narrow.tip_radius == pytest.approx(r)
    assert wide.tip_radius == pytest.approx(r)
    assert narrow.tip_half_width == pytest.approx(width_slider_to_half_width(preset, r))
    np.testing.assert_array_equal(narrow.ytip, wide.ytip)


def test_effective_size_for_default_follows_sliders() -> None:
    r, hw = effective_tip_size(TipShapeInput(0.2, 0.8))
    assert r == pytest.approx(normalized_tip_radius(0.2))
    assert hw == pytest.approx(width_slider_to_half_width(0.8, r))


def test_sheared_apex_offset_is_half_radius() -> None:
    tip = compute_tip_geometry(TipShapeInput(0.5, 0.5, sheared=True))
    assert tip.shape is TipShape.SHEARED
    assert tip.y_tip_dist == pytest.approx(0.5 * tip.tip_radius)
    assert tip.ytip.min() == pytest.approx(-0.5 * tip.tip_radius)


def test_multiple_peaks_apex_offset_is_deepest_point() -> None:
    tip = compute_tip_geometry(TipShapeInput(0.5, 0.5, multiple_peaks=True))
    assert tip.shape is TipShape.MULTIPLE_PEAKS
    assert tip.y_tip_dist > 0.0
    assert tip.ytip.min() == pytest.approx(-tip.y_tip_dist)


def test_multiple_peaks_has_bump_at_centre() -> None:
    """The quartic has a local maximum at the tip centre."""
    tip = compute_tip_geometry(TipShapeInput(0.5, 0.5, multiple_peaks=True))
    centre = int(np.argmin(np.abs(tip.xtip)))
    assert tip.ytip[centre] == pytest.approx(0.0, abs=1e-4)
    assert tip.ytip[centre] > tip.ytip[centre + 20]
    assert tip.ytip[centre] > tip.ytip[centre - 20]


def test_contaminated_tip_keeps_corners() -> None:
    clean = compute_tip_geometry(TipShapeInput(0.3, 0.7))
    dirty = compute_tip_geometry(TipShapeInput(0.3, 0.7, contaminated=True))

    assert len(dirty) == len(clean)
    np.testing.assert_array_equal(dirty.xtip, clean.xtip)
    assert dirty.ytip[0] == clean.ytip[0]
    assert dirty.ytip[-1] == clean.ytip[-1]
    assert np.any(dirty.ytip < clean.ytip)
    assert np.all(dirty.ytip <= clean.ytip)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"radius_slider": 1.5, "width_slider": 0.5},
        {"radius_slider": 0.5, "width_slider": -0.1},
        {"radius_slider": float("nan"), "width_slider": 0.5},
    ],
)
def test_invalid_slider_raises(kwargs: dict) -> None:
    with pytest.raises(ValueError, match="slider"):
        compute_tip_geometry(TipShapeInput(**kwargs))


# ---------------------------------------------------------------------------
# Translation
# ---------------------------------------------------------------------------


def test_translate_tip() -> None:
    tip = compute_tip_geometry(TipShapeInput(0.5, 0.5))
    moved = translate_tip(tip, 0.25, -1.0)

    assert isinstance(moved, TipGeometry)
    np.testing.assert_allclose(moved.xtip, tip.xtip + 0.25)
    np.testing.assert_allclose(moved.ytip, tip.ytip - 1.0)
    assert moved.y_tip_dist == tip.y_tip_dist
    assert moved.tip_radius == tip.tip_radius
    assert moved.shape is tip.shape
    # The source tip is untouched.
    assert tip.ytip.min() == pytest.approx(-tip.tip_radius, abs=DX)
