"""Environment of a single flat colour."""

from __future__ import annotations

from .environment import Environment, GenerationError
from .randoms import Randoms
from .settings import EnvironmentSettings


class ColourEnvironment(Environment):
    """Fills every pixel with the colour from the settings."""

    def __init__(self, settings: EnvironmentSettings, randoms: Randoms | None = None) -> None:
        super().__init__(settings, randoms)
        colour = settings.colour
        self.rgb = (colour.red, colour.green, colour.blue)
        if not all(0 <= channel <= 255 for channel in self.rgb):
            raise GenerationError(f"colour channels must be between 0 and 255, got {self.rgb}")

    def regenerate(self) -> None:
        """Paint the whole grid in the chosen colour."""
        self.environment[:, :] = self.rgb