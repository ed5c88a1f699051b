"""Unit tests for the tip contamination model."""

from __future__ import annotations

import numpy as np
import pytest

from afmscan.tip.contamination import (
    FRAC_MAX_ENDPOINTS,
    FRAC_MIN_ENDPOINTS,
    contaminate_line,
    frac_control_points,
    frac_function,
    lagrange_interpolation,
    total_distance,
)
from afmscan.tip.ramp import ramp_points

# ---------------------------------------------------------------------------
# Interpolation
# ---------------------------------------------------------------------------


def test_lagrange_reproduces_a_polynomial() -> None:
    xs = [0.0, 1.0, 2.0, 3.0]
    ys = [x**3 - 2 * x for x in xs]
    assert lagrange_interpolation(1.5, xs, ys) == pytest.approx(1.5**3 - 3.0)


@pytest.mark.parametrize("endpoints", [FRAC_MIN_ENDPOINTS, FRAC_MAX_ENDPOINTS])
def test_frac_function_is_exact_at_control_points(endpoints) -> None:
    x_min, x_max = 0.1239, 1.5
    xs, ys = frac_control_points(x_min, x_max, *endpoints)
    for x, y in zip(xs, ys):
        assert frac_function(x_min, x_max, *endpoints, x) == y


def test_frac_control_points_layout() -> None:
    xs, ys = frac_control_points(0.0, 1.0, 0.0, 1.0)
    assert xs == [0.0, 0.25, 0.5, 0.75, 1.0]
    assert ys == pytest.approx([0.0, 0.72, 0.9, 0.95, 1.0])


def test_total_distance() -> None:
    assert total_distance(np.array([0.0, 3.0, 3.0]), np.array([0.0, 4.0, 5.0])) == 6.0


# ---------------------------------------------------------------------------
# Ramp perturbation
# ---------------------------------------------------------------------------


def _falling_ramp() -> tuple[np.ndarray, np.ndarray]:
    return ramp_points((-0.8, 5.9), (-0.12, 0.0))


def _rising_ramp() -> tuple[np.ndarray, np.ndarray]:
    return ramp_points((0.12, 0.0), (0.8, 5.9))


@pytest.mark.parametrize("ramp", [_falling_ramp, _rising_ramp])
def test_endpoints_preserved(ramp) -> None:
    x, y = ramp()
    out = contaminate_line(x, y, 0.12, 0.8, (0.9, 0.2))
    assert out.shape == y.shape
    assert out[0] == y[0]
    assert out[-1] == y[-1]
    assert np.all(out <= y)
    assert np.all(out >= y - 1.0)
    assert np.any(out < y)


def test_input_not_mutated() -> None:
    x, y = _falling_ramp()
    before = y.copy()
    contaminate_line(x, y, 0.12, 0.8, (0.9, 0.2))
    np.testing.assert_array_equal(y, before)


def test_falling_ramp_uses_first_random_value() -> None:
    x, y = _falling_ramp()
    a = contaminate_line(x, y, 0.12, 0.8, (0.3, 0.8))
    b = contaminate_line(x, y, 0.12, 0.8, (0.3, 0.1))
    c = contaminate_line(x, y, 0.12, 0.8, (0.6, 0.8))
    np.testing.assert_array_equal(a, b)
    assert not np.array_equal(a, c)


def test_rising_ramp_uses_second_random_value() -> None:
    x, y = _rising_ramp()
    a = contaminate_line(x, y, 0.12, 0.8, (0.3, 0.8))
    b = contaminate_line(x, y, 0.12, 0.8, (0.9, 0.8))
    c = contaminate_line(x, y, 0.12, 0.8, (0.3, 0.4))
    np.testing.assert_array_equal(a, b)
    assert not np.array_equal(a, c)


def test_perturbation_vanishes_at_apex_anchor() -> None:
    """The sin**2 pattern is anchored at the apex end of the ramp."""
    x, y = _falling_ramp()
    out = contaminate_line(x, y, 0.12, 0.8, (0.9, 0.2))
    assert out[-2] == pytest.approx(y[-2], abs=1e-3)


@pytest.mark.parametrize(
    ("x", "y"),
    [
        (np.array([0.5]), np.array([1.0])),
        (np.array([0.5, 0.5]), np.array([1.0, 1.0])),
        (np.zeros(20), np.linspace(6.0, 0.0, 20)),
        (np.linspace(0.0, 1.0, 11), np.full(11, 2.0)),
    ],
    ids=["single-point", "zero-length", "vertical", "flat"],
)
def test_degenerate_ramps_unchanged(x, y) -> None:
    out = contaminate_line(x, y, 0.12, 0.8, (0.9, 0.2))
    np.testing.assert_array_equal(out, y)
    assert out is not y
