"""Where generated frames are written and how they are named."""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from .environment import Environment, GenerationError

PRODUCT_NAME = "EnviroGen"


def setup_save_directory(base_path: str | Path, run: int) -> Path:
    """Create and return the output folder for one run inside base_path."""
    if run < 0:
        raise ValueError(f"run number must not be negative, got {run}")
    directory = Path(base_path) / f"{PRODUCT_NAME}_output_{run:03d}"
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise GenerationError("Cant save images. Permissions issue?") from exc
    return directory


def frame_path(directory: str | Path, index: int) -> Path:
    """Return the file path of frame number index, padded to four digits."""
    if index < 0:
        raise ValueError(f"frame index must not be negative, got {index}")
    return Path(directory) / f"{index:04d}.png"


def save_frame(environment: Environment, directory: str | Path, index: int) -> Path:
    """Write the environment's current grid as a PNG and return its path."""
    path = frame_path(directory, index)
    path.parent.mkdir(parents=True, exist_ok=True)
    # The grid is indexed [column, row]; images are stored row first.
    pixels = environment.environment.transpose(1, 0, 2).copy()
    image = Image.fromarray(pixels, mode="RGB")
    try:
        image.save(path, format="PNG")
    except OSError as exc:
        raise GenerationError(f"Cant save image {path}") from exc
    return path