"""Tip shape inputs, shape variants and the built tip outline."""

from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np


class TipShape(enum.Enum):
    """Apex section variant of a tip outline.

    ``DEFAULT`` is a semicircular arc, ``SHEARED`` a slanted straight segment
    and ``MULTIPLE_PEAKS`` a quartic curve with secondary local peaks.
    """

    DEFAULT = "default"
    SHEARED = "sheared"
    MULTIPLE_PEAKS = "multiple_peaks"

    @classmethod
    def from_flags(cls, sheared: bool, multiple_peaks: bool) -> TipShape:
        """Pick the variant from the UI flags; shear wins over multiple peaks."""
        if sheared:
            return cls.SHEARED
        if multiple_peaks:
            return cls.MULTIPLE_PEAKS
        return cls.DEFAULT

    @property
    def uses_preset_size(self) -> bool:
        """Whether this variant ignores the user radius and width sliders."""
        return self is not TipShape.DEFAULT


@dataclass(frozen=True)
class TipShapeInput:
    """Parameter bundle that fully determines a :class:`TipGeometry`.

    Attributes:
        radius_slider: Radius control value in [0, 1].
        width_slider: Width control value in [0, 1].
        center_x: Lateral coordinate of the tip centre.
        center_y: Vertical coordinate of the tip centre.
        contaminated: Perturb the side ramps with the contamination model.
        random_pair: Two values in [0, 1) that select the contamination
            wavelength on the falling and rising ramp respectively.
        sheared: Build the sheared variant.
        multiple_peaks: Build the multiple-peaks variant.
    """

    radius_slider: float
    width_slider: float
    center_x: float = 0.0
    center_y: float = 0.0
    contaminated: bool = False
    random_pair: tuple[float, float] = (0.9, 0.2)
    sheared: bool = False
    multiple_peaks: bool = False

    @property
    def shape(self) -> TipShape:
        return TipShape.from_flags(self.sheared, self.multiple_peaks)


@dataclass(frozen=True, eq=False)
class TipGeometry:
    """A built tip outline.

    Attributes:
        xtip: Lateral coordinates of the outline polyline, shape (K,), K >= 2.
        ytip: Vertical coordinates of the outline polyline, shape (K,).
        y_tip_dist: Vertical offset from the tip centre to its apex.
        tip_radius: Effective tip radius.
        tip_half_width: Effective tip half-width at the top of the outline.
        shape: Apex section variant the outline was built with.
    """

    xtip: np.ndarray
    ytip: np.ndarray
    y_tip_dist: float
    tip_radius: float
    tip_half_width: float
    shape: TipShape = TipShape.DEFAULT

    def __len__(self) -> int:
        return int(self.xtip.shape[0])

    def translated(self, dx: float, dy: float) -> TipGeometry:
        """Return a copy shifted by (*dx*, *dy*); the scalars are unchanged."""
        return TipGeometry(
            xtip=self.xtip + dx,
            ytip=self.ytip + dy,
            y_tip_dist=self.y_tip_dist,
            tip_radius=self.tip_radius,
            tip_half_width=self.tip_half_width,
            shape=self.shape,
        )


def translate_tip(tip: TipGeometry, dx: float, dy: float) -> TipGeometry:
    """Translate *tip* by (*dx*, *dy*) without rebuilding it."""
    return tip.translated(dx, dy)
