"""
Seeded pseudo-random stream.

Every stochastic decision in skeleton generation draws from a SeededRNG so
that identical seeds produce bit-identical skeletons. The generator is the
32-bit mulberry32 mixer: a Weyl-sequence increment followed by two
multiply/xorshift rounds.
"""

import math

_MASK32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


class SeededRNG:
    """
    Deterministic float stream in [0, 1) from an integer seed.

    Parameters
    ----------
    seed : int
        Any integer; it is reduced modulo 2^32.
    """

    def __init__(self, seed: int = 0):
        self.seed = int(seed)
        self._state = self.seed & _MASK32

    @property
    def state(self) -> int:
        return self._state

    def random(self) -> float:
        """Return the next float in [0, 1)."""
        self._state = (self._state + _INCREMENT) & _MASK32
        s = self._state
        t = _imul(s ^ (s >> 15), 1 | s)
        t = ((t + _imul(t ^ (t >> 7), 61 | t)) & _MASK32) ^ t
        return ((t ^ (t >> 14)) & _MASK32) / _TWO_POW_32

    def uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self.random()

    def angle(self) -> float:
        """Uniform angle in [0, 2*pi)."""
        return self.random() * 2.0 * math.pi

    def integer(self, low: int, count: int) -> int:
        """Uniform integer in [low, low + count)."""
        return low + int(math.floor(self.random() * count))

    def choice_count(self, probability: float, a: int, b: int) -> int:
        """Return `a` with the given probability, otherwise `b` (one draw)."""
        return a if self.random() < probability else b

    def __repr__(self) -> str:
        return f"SeededRNG(seed={self.seed}, state={self._state:#010x})"


__all__ = ["SeededRNG"]
