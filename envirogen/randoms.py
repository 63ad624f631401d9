"""Buffered pseudo-random number source used by the environment generators."""

from __future__ import annotations

import numpy as np

_POOL_SIZE = 65536


class _Pool:
    """A block of pre-drawn values, refilled each time the cursor wraps round."""

    def __init__(self, generator: np.random.Generator, mask: int) -> None:
        self._generator = generator
        self._mask = np.uint64(mask)
        self._values: list[int] = []
        self._next = 0

    def draw(self) -> int:
        if self._next == 0:
            raw = self._generator.bit_generator.random_raw(_POOL_SIZE)
            self._values = (raw & self._mask).tolist()
        value = self._values[self._next]
        self._next = (self._next + 1) % _POOL_SIZE
        return value


class Randoms:
    """Random numbers of 8, 16, 32 and 64 bits, doubles and bounded integers.

    Values of fixed width are drawn in blocks of 65536 and handed out in turn.
    Passing a seed makes the whole sequence reproducible.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.generator = np.random.default_rng(seed)
        self._pool8 = _Pool(self.generator, 0xFF)
        self._pool16 = _Pool(self.generator, 0xFFFF)
        self._pool32 = _Pool(self.generator, 0xFFFFFFFF)
        self._pool64 = _Pool(self.generator, 0xFFFFFFFFFFFFFFFF)

    def rand8(self) -> int:
        """Return a random integer in [0, 255]."""
        return self._pool8.draw()

    def rand16(self) -> int:
        """Return a random integer in [0, 65535]."""
        return self._pool16.draw()

    def rand32(self) -> int:
        """Return a random integer in [0, 2**32 - 1]."""
        return self._pool32.draw()

    def rand64(self) -> int:
        """Return a random integer in [0, 2**64 - 1]."""
        return self._pool64.draw()

    def rand_double(self) -> float:
        """Return a random float in [0, 1)."""
        return float(self.generator.random())

    def bounded(self, low: int, high: int) -> int:
        """Return a random integer in [low, high)."""
        if low >= high:
            raise ValueError(f"empty range: low ({low}) must be less than high ({high})")
        return int(self.generator.integers(low, high))