"""Environments built from image files: a single image repeated, or two stacks blended."""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

from .environment import Environment, GenerationError
from .randoms import Randoms
from .settings import EnvironmentSettings

IMAGE_SUFFIXES = (".bmp", ".jpg", ".jpeg", ".png")


def list_stack_images(directory: str | Path) -> list[Path]:
    """Return the image files in a directory, sorted by name."""
    return sorted(
        (
            path
            for path in Path(directory).iterdir()
            if path.is_file() and path.suffix.lower() in IMAGE_SUFFIXES
        ),
        key=lambda path: path.name,
    )


def _load_image(path: str | Path) -> Image.Image:
    try:
        with Image.open(path) as image:
            return image.convert("RGB")
    except OSError as exc:
        raise GenerationError(f"Image failed to load: {path}") from exc


def _environment_layout(image, width: int, height: int) -> np.ndarray:
    """Rearrange an image as a width x height x 3 grid; pixels off the image are black."""
    if isinstance(image, Image.Image):
        image = image.convert("RGB")
    pixels = np.asarray(image, dtype=np.float64)
    if pixels.ndim != 3 or pixels.shape[2] < 3:
        raise ValueError("image must have rows, columns and at least three channels")
    grid = np.zeros((width, height, 3), dtype=np.float64)
    cols = min(width, pixels.shape[1])
    rows = min(height, pixels.shape[0])
    grid[:cols, :rows] = pixels[:rows, :cols, :3].transpose(1, 0, 2)
    return grid


def blend_images(first, weight: float, second, width: int, height: int) -> np.ndarray:
    """Blend two images as weight * first + (1 - weight) * second.

    Returns a width x height x 3 array of uint8 indexed [n, m, channel].
    """
    one = _environment_layout(first, width, height)
    two = _environment_layout(second, width, height)
    blended = np.trunc(one * weight + two * (1.0 - weight))
    return np.clip(blended, 0, 255).astype(np.uint8)


class StackFromImage(Environment):
    """Copies the same image into every frame."""

    def __init__(self, settings: EnvironmentSettings, randoms: Randoms | None = None) -> None:
        super().__init__(settings, randoms)
        self.file_name = settings.make_stack.file_name
        if len(self.file_name) < 5:
            raise GenerationError("Image failed to load.")
        self.image = _load_image(self.file_name)

    def regenerate(self) -> None:
        """Copy the image into the grid."""
        self.environment[:] = _environment_layout(self.image, self.x, self.y).astype(np.uint8)


class CombineStacks(Environment):
    """Blends two stacks of images, frame by frame, between two percentages."""

    def __init__(self, settings: EnvironmentSettings, randoms: Randoms | None = None) -> None:
        super().__init__(settings, randoms)
        combine = settings.combine
        self.stack_one = Path(combine.stack_one)
        self.stack_two = Path(combine.stack_two)
        self.start = combine.start
        self.percent_start = combine.percent_start
        self.percent_end = combine.percent_end
        self.generation = 0

        if not (combine.stack_one and combine.stack_two) or not (
            self.stack_one.is_dir() and self.stack_two.is_dir()
        ):
            raise GenerationError("Either stack one or two has failed to load.")

        first_list = list_stack_images(self.stack_one)
        second_list = list_stack_images(self.stack_two)
        if not first_list or not second_list:
            raise GenerationError("No image files in one of the stack folders.")
        self.stack_one_size = len(first_list)
        self.stack_two_size = len(second_list)

        if _load_image(first_list[0]).size != _load_image(second_list[0]).size:
            raise GenerationError(
                "Stack images are of a different size, which cannot be combined."
            )

    def _current_weight(self, end: int) -> float:
        position = self.generation - self.start
        span = end - self.start - 1
        fraction = position / span if span else 0.0
        percent = self.percent_start + fraction * (self.percent_end - self.percent_start)
        return percent / 100.0

    def regenerate(self) -> None:
        """Build the frame for the current generation, then move to the next."""
        self.environment[:] = 0
        first_list = list_stack_images(self.stack_one)
        second_list = list_stack_images(self.stack_two)
        generation = self.generation

        first = _load_image(first_list[generation]) if generation < len(first_list) else None
        offset = generation - self.start
        second = (
            _load_image(second_list[offset])
            if generation >= self.start and offset < len(second_list)
            else None
        )

        if first is not None and second is not None:
            weight = self._current_weight(len(first_list))
            self.environment[:] = blend_images(first, weight, second, self.x, self.y)
        elif first is not None:
            self.environment[:] = blend_images(first, 1.0, first, self.x, self.y)
        elif second is not None:
            self.environment[:] = blend_images(second, 1.0, second, self.x, self.y)

        self.generation += 1