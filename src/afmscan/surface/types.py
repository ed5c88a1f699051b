"""Surface profile names and the generated surface data container."""

from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np


class SurfaceProfile(enum.Enum):
    """The seven parametric topography profiles."""

    SQUARE = "Square"
    RECTANGLE = "Rectangle"
    TRIANGLE = "Triangle"
    SINE = "Sine"
    SEMICIRCLE = "Semicircle"
    INVERTED_TRIANGLE = "Inverted triangle"
    RANDOM = "Random surface"

    @classmethod
    def parse(cls, name: str | SurfaceProfile) -> SurfaceProfile:
        """Resolve a display name, member name or short alias to a profile.

        Matching ignores case, and treats spaces, dashes and underscores alike,
        so ``"Inverted-Triangle"``, ``"inverted_triangle"`` and
        ``"Inverted triangle"`` all resolve. ``"Random"`` is accepted for the
        random surface.

        Raises:
            ValueError: If *name* matches no profile.
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower().replace("-", " ").replace("_", " ")
        for member in cls:
            if key in (member.value.lower(), member.name.lower().replace("_", " ")):
                return member
        known = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown surface profile {name!r}. Known profiles: {known}")


@dataclass(frozen=True, eq=False)
class SurfaceData:
    """A generated surface, sampled on the padded simulation axis.

    The three main arrays share index correspondence and all have length
    ``len(axis) + 2``: the simulation axis with its first and last coordinate
    repeated, and zero heights at both ends so the filled surface closes at
    the baseline.

    Attributes:
        x_surface: Lateral positions, shape (N + 2,).
        y_surface: Display heights, shape (N + 2,).
        y_surface_imaging: Heights consumed by the convolution engine,
            shape (N + 2,).
        outline_x: Lateral coordinates of a self-overlapping display outline,
            or None when the profile is a plain height function.
        outline_y: Heights matching *outline_x*, or None.
    """

    x_surface: np.ndarray
    y_surface: np.ndarray
    y_surface_imaging: np.ndarray
    outline_x: np.ndarray | None = None
    outline_y: np.ndarray | None = None

    def __len__(self) -> int:
        return int(self.x_surface.shape[0])
