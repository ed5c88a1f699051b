"""Tip-surface convolution: the AFM imaging model.

The tip cannot pass through the surface. At each lateral scan position the
reported height is the lowest the tip can go before some part of its
outline touches the surface. With the tip heights ``t`` and the zero-padded
surface ``s``, the clearance at scan row ``r`` is ``min_c(t[c] - s[r + c])``.
The tip centre then rests at ``center_y - clearance``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SimulationResult:
    """Output of one convolution run.

    Attributes:
        y_center: Tip centre height at each scan position, shape (R,).
        y_surface_image: Simulated surface trace (``y_center`` minus the
            centre-to-apex offset), shape (R,).
    """

    y_center: np.ndarray
    y_surface_image: np.ndarray

    def __len__(self) -> int:
        return int(self.y_center.shape[0])


def tip_padding(tip_length: int) -> tuple[int, int]:
    """Zero padding ``(left, right)`` added around the surface for a tip.

    The left side gets the ceiling of half the tip length and the right side
    the remainder, so a single-sample tip pads one zero on the left only.
    """
    left = math.ceil(0.5 * tip_length)
    return left, max(0, tip_length - left - 1)


def pad_imaging_surface(y_surface: np.ndarray, tip_length: int) -> np.ndarray:
    """Zero-pad *y_surface* so a tip of *tip_length* samples can run off both ends."""
    left, right = tip_padding(tip_length)
    return np.concatenate([np.zeros(left), y_surface, np.zeros(right)])


def compute_surface_response(
    y_tip: np.ndarray,
    y_surface_imaging: np.ndarray,
    center_y: float,
    y_tip_dist: float,
) -> SimulationResult:
    """Slide the tip across the surface and record where it comes to rest.

    Args:
        y_tip: Tip outline heights, built with its centre at *center_y*,
            shape (K,).
        y_surface_imaging: Surface heights to image, shape (N,).
        center_y: Vertical tip centre the outline was built at.
        y_tip_dist: Vertical offset from tip centre to apex.

    Returns:
        :class:`SimulationResult` with ``N`` scan positions, which is
        ``len(padded) - K + 1``.

    Raises:
        ValueError: If either input is empty or not one-dimensional.
    """
    y_tip = np.asarray(y_tip, dtype=np.float64)
    surface = np.asarray(y_surface_imaging, dtype=np.float64)
    if y_tip.ndim != 1 or y_tip.shape[0] == 0:
        raise ValueError(f"y_tip must be a non-empty 1-D array, got shape {y_tip.shape}")
    if surface.ndim != 1 or surface.shape[0] == 0:
        raise ValueError(
            f"y_surface_imaging must be a non-empty 1-D array, got shape {surface.shape}"
        )

    tip_length = y_tip.shape[0]
    padded = pad_imaging_surface(surface, tip_length)
    rows = padded.shape[0] - tip_length + 1

    # Loop over the tip, vectorised over scan rows: same minimum, O(K) passes.
    clearance = np.full(rows, np.inf)
    for col in range(tip_length):
        np.minimum(clearance, y_tip[col] - padded[col : col + rows], out=clearance)

    y_center = center_y - clearance
    logger.debug("Convolved %d tip samples over %d scan positions", tip_length, rows)
    return SimulationResult(y_center=y_center, y_surface_image=y_center - y_tip_dist)
