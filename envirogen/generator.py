"""Running an environment generator for a number of frames, singly or in batches."""

from __future__ import annotations

import copy
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path

from .colour import ColourEnvironment
from .environment import Environment, GenerationError
from .mark import MarkEnvironment
from .noise import NoiseEnvironment
from .output import save_frame, setup_save_directory
from .randoms import Randoms
from .russell import RussellEnvironment
from .settings import EnvironmentSettings
from .stack import CombineStacks, StackFromImage

MAX_BATCH_RUNS = 999


class EnvironmentType(IntEnum):
    """The kinds of environment that can be generated."""

    DYNAMIC_ONE = 0
    DYNAMIC_TWO = 1
    NOISE = 2
    COMBINE = 3
    COLOUR = 4
    STACK_FROM_IMAGE = 5


_CLASSES: dict[EnvironmentType, type[Environment]] = {
    EnvironmentType.DYNAMIC_ONE: RussellEnvironment,
    EnvironmentType.DYNAMIC_TWO: MarkEnvironment,
    EnvironmentType.NOISE: NoiseEnvironment,
    EnvironmentType.COMBINE: CombineStacks,
    EnvironmentType.COLOUR: ColourEnvironment,
    EnvironmentType.STACK_FROM_IMAGE: StackFromImage,
}


@dataclass
class GenerationResult:
    """What one generation run produced."""

    kind: EnvironmentType
    generations: int
    frames: int
    cancelled: bool
    save_path: str
    saved: list[Path] = field(default_factory=list)


def _kind(kind: int | EnvironmentType) -> EnvironmentType:
    try:
        return EnvironmentType(kind)
    except ValueError as exc:
        raise GenerationError("Environment number not recognised.") from exc


def create_environment(
    kind: int | EnvironmentType,
    settings: EnvironmentSettings,
    randoms: Randoms | None = None,
) -> Environment:
    """Build the environment object of the given kind."""
    return _CLASSES[_kind(kind)](settings, randoms)


ProgressCallback = Callable[[int, int], "bool | None"]


def generate(
    kind: int | EnvironmentType,
    settings: EnvironmentSettings,
    save_images: bool = True,
    randoms: Randoms | None = None,
    progress: ProgressCallback | None = None,
) -> GenerationResult:
    """Generate settings.generations frames, saving each into settings.save_path.

    progress is called after every frame with (index, total); returning False stops the run.
    """
    kind = _kind(kind)
    environment = create_environment(kind, settings, randoms)
    generations = settings.generations
    if isinstance(environment, CombineStacks):
        generations = settings.combine.start + environment.stack_two_size

    saved: list[Path] = []
    frames = 0
    cancelled = False
    for index in range(generations):
        environment.regenerate()
        frames += 1
        if save_images:
            saved.append(save_frame(environment, settings.save_path, index))
        if progress is not None and progress(index, generations) is False:
            cancelled = True
            break

    return GenerationResult(
        kind=kind,
        generations=generations,
        frames=frames,
        cancelled=cancelled,
        save_path=str(settings.save_path),
        saved=saved,
    )


def run_batch(
    kind: int | EnvironmentType,
    settings: EnvironmentSettings,
    runs: int,
    save_images: bool = True,
    workers: int | None = None,
) -> list[GenerationResult]:
    """Generate independent replicates in parallel, each in its own numbered folder."""
    kind = _kind(kind)
    if kind > EnvironmentType.COMBINE:
        raise GenerationError(
            "Batch runs are not currently available for your chosen environment type."
        )
    if not 1 <= runs <= MAX_BATCH_RUNS:
        raise ValueError(f"runs must be between 1 and {MAX_BATCH_RUNS}, got {runs}")

    base_path = settings.save_path

    def one_run(run: int) -> GenerationResult:
        local = copy.deepcopy(settings)
        local.batch = True
        local.save_path = str(setup_save_directory(base_path, run))
        return generate(kind, local, save_images=save_images, randoms=Randoms())

    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(one_run, range(runs)))