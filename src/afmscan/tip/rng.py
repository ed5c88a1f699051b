"""Seeded random source for the contamination wavelength pair."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from afmscan.config import DEFAULT_CONFIG, SimulationConfig

_MASK32 = 0xFFFFFFFF


@runtime_checkable
class RandomSource(Protocol):
    """Anything with a ``random()`` method returning floats in [0, 1).

    :class:`Mulberry32` and :class:`numpy.random.Generator` both qualify.
    """

    def random(self) -> float: ...


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


class Mulberry32:
    """Mulberry32 32-bit generator.

    Produces the same sequence as the common JavaScript implementation for
    the same integer seed.

    Args:
        seed: Integer seed; only the low 32 bits are used.
    """

    def __init__(self, seed: int) -> None:
        self._state = int(seed) & _MASK32

    def next_uint32(self) -> int:
        self._state = (self._state + 0x6D2B79F5) & _MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return (t ^ (t >> 14)) & _MASK32

    def random(self) -> float:
        """Return the next float in [0, 1)."""
        return self.next_uint32() / 4294967296.0


def contamination_random_pair(
    width_slider: float,
    randomize: bool,
    seed: int,
    rng_factory: Callable[[int], RandomSource] = Mulberry32,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> tuple[float, float]:
    """Return the pair of blend values used by the contamination model.

    Args:
        width_slider: Width slider value; selects the fixed pair when
            *randomize* is False.
        randomize: Draw the pair from a seeded generator instead.
        seed: Seed passed to *rng_factory*.
        rng_factory: Builds a :class:`RandomSource` from a seed.
        config: Simulation config supplying the fixed pairs.

    Returns:
        ``(falling_ramp_value, rising_ramp_value)``.
    """
    if not randomize:
        if width_slider <= 0.5:
            return config.tip.default_pair_narrow
        return config.tip.default_pair_wide
    rng = rng_factory(seed)
    first = float(rng.random())
    second = float(rng.random())
    return (first, second)
