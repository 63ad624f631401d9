"""Environment of uniform random noise."""

from __future__ import annotations

import numpy as np

from .environment import Environment, GenerationError
from .randoms import Randoms
from .settings import EnvironmentSettings


class NoiseEnvironment(Environment):
    """Sets every channel of every pixel to a value drawn from [n_min, n_max)."""

    def __init__(self, settings: EnvironmentSettings, randoms: Randoms | None = None) -> None:
        super().__init__(settings, randoms)
        self.n_min = settings.noise.n_min
        self.n_max = settings.noise.n_max
        if self.n_min >= self.n_max:
            raise GenerationError("Min is greater than Max - please change this before proceeding.")
        if self.n_min < 0 or self.n_max > 256:
            raise GenerationError(
                f"noise range must lie within 0 and 256, got {self.n_min} to {self.n_max}"
            )

    def regenerate(self) -> None:
        """Draw a fresh frame of noise."""
        self.environment[:] = self.randoms.generator.integers(
            self.n_min, self.n_max, size=self.environment.shape, dtype=np.int64
        ).astype(np.uint8)