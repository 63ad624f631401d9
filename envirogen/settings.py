"""Settings for every kind of generated environment."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

MAX_DIMENSION = 1000
MAX_OBJECTS = 1000
MAX_SEEDS = 1000


@dataclass
class RussellSettings:
    """Settings for the seeded Laplacian-smoothed environment."""

    n_seed: int = 8
    buffer: int = 5
    max_size: int = 60
    size_velocity: int = 1
    maximum_velocity: float = 2.0
    periodic: bool = False
    blur: bool = False
    converge: float = 0.1
    factor: float = 1.0
    max_acceleration: int = 1
    max_colour_velocity: int = 0


@dataclass
class MarkSettings:
    """Settings for the moving coloured light-object environment."""

    object_count: int = 10
    max_size: float = 100.0
    min_size: float = 10.0
    maximum_velocity: float = 1.0
    max_size_velocity: float = 1.0
    max_colour_velocity: float = 1.0
    max_tight_velocity: float = 0.1
    max_tight: float = 2.0
    min_tight: float = 0.5
    speed_factor: float = 1.0
    velocity_tweak: float = 0.5
    size_tweak: float = 0.5
    colour_tweak: float = 0.5
    tight_tweak: float = 0.05
    iter_reset: int = 20
    toroidal: bool = False


@dataclass
class NoiseSettings:
    """Range of the uniform noise, lower bound inclusive and upper exclusive."""

    n_min: int = 0
    n_max: int = 255


@dataclass
class ColourSettings:
    """A single flat colour."""

    red: int = 127
    green: int = 127
    blue: int = 127


@dataclass
class MakeStackSettings:
    """Image file that every frame of the stack is copied from."""

    file_name: str = ""


@dataclass
class CombineSettings:
    """Two image stacks and how they are blended."""

    stack_one: str = ""
    stack_two: str = ""
    start: int = 0
    percent_start: int = 100
    percent_end: int = 0


def _default_save_path() -> str:
    return str(Path.home() / "Desktop")


@dataclass
class EnvironmentSettings:
    """Everything a generator needs, independent of any user interface."""

    x: int = 100
    y: int = 100
    generations: int = 500
    save_path: str = field(default_factory=_default_save_path)
    batch: bool = False
    russell: RussellSettings = field(default_factory=RussellSettings)
    mark: MarkSettings = field(default_factory=MarkSettings)
    noise: NoiseSettings = field(default_factory=NoiseSettings)
    colour: ColourSettings = field(default_factory=ColourSettings)
    make_stack: MakeStackSettings = field(default_factory=MakeStackSettings)
    combine: CombineSettings = field(default_factory=CombineSettings)

    def validate(self) -> None:
        """Raise ValueError if the settings break the generators' hard limits."""
        for name, value in (("x", self.x), ("y", self.y)):
            if not 1 <= value <= MAX_DIMENSION:
                raise ValueError(f"{name} must be between 1 and {MAX_DIMENSION}, got {value}")
        if self.generations < 0:
            raise ValueError(f"generations must not be negative, got {self.generations}")
        if not 0 <= self.mark.object_count <= MAX_OBJECTS:
            raise ValueError(
                f"object count must be between 0 and {MAX_OBJECTS}, got {self.mark.object_count}"
            )
        if not 0 <= self.russell.n_seed <= MAX_SEEDS:
            raise ValueError(
                f"seed count must be between 0 and {MAX_SEEDS}, got {self.russell.n_seed}"
            )