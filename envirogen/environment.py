"""Base class shared by every environment generator."""

from __future__ import annotations

import numpy as np

from .randoms import Randoms
from .settings import EnvironmentSettings

_INITIAL_FILL = (0, 110, 200)


class GenerationError(Exception):
    """Raised when an environment cannot be set up or generated."""


class Environment:
    """An x by y grid of RGB values, indexed as environment[n, m, channel].

    Subclasses change the grid each time regenerate() is called.
    """

    def __init__(self, settings: EnvironmentSettings, randoms: Randoms | None = None) -> None:
        try:
            settings.validate()
        except ValueError as exc:
            raise GenerationError(str(exc)) from exc
        self.settings = settings
        self.x = settings.x
        self.y = settings.y
        self.save_path = settings.save_path
        self.batch = settings.batch
        self.randoms = randoms if randoms is not None else Randoms()
        self.environment = np.empty((self.x, self.y, 3), dtype=np.uint8)
        self.environment[:, :] = _INITIAL_FILL

    def regenerate(self) -> None:
        """Advance the environment one frame; the base grid stays as it is."""

    def pixel(self, n: int, m: int) -> tuple[int, int, int]:
        """Return the (red, green, blue) value at column n, row m."""
        if not (0 <= n < self.x and 0 <= m < self.y):
            raise IndexError(f"pixel ({n}, {m}) is outside a {self.x}x{self.y} environment")
        red, green, blue = self.environment[n, m].tolist()
        return red, green, blue