"""Environment of moving, resizing, colour-shifting light objects."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from .environment import Environment, GenerationError
from .randoms import Randoms
from .settings import EnvironmentSettings

PI = 3.141592654
_BACKGROUND = 127
_COLOUR_MAX = 128.0
_COLOUR_MIN = -127.0


def add_and_limit(
    old_value: int, colour: int, dist: float, max_dist: float, tightness: float
) -> int:
    """Add a colour to a channel with a cosine fall-off over distance, clamped to 0..255."""
    angle = PI * 0.5 * dist / max_dist
    value = old_value + int(math.pow(math.cos(angle), tightness) * colour)
    return max(0, min(255, value))


@dataclass
class _LightObject:
    x_pos: float
    y_pos: float
    x_vel: float
    y_vel: float
    size: float
    size_velocity: float
    colour: list[float] = field(default_factory=list)
    colour_velocity: list[float] = field(default_factory=list)
    tightness: float = 1.0
    tight_velocity: float = 0.0


class MarkEnvironment(Environment):
    """Coloured lights drifting over a grey background, each with its own fall-off."""

    def __init__(self, settings: EnvironmentSettings, randoms: Randoms | None = None) -> None:
        super().__init__(settings, randoms)
        mark = settings.mark
        if mark.iter_reset < 1:
            raise GenerationError(
                f"iterations between accelerations must be at least 1, got {mark.iter_reset}"
            )
        self.object_count = mark.object_count
        self.max_size = mark.max_size
        self.min_size = mark.min_size
        self.maximum_velocity = mark.maximum_velocity
        self.max_size_velocity = mark.max_size_velocity
        self.max_colour_velocity = mark.max_colour_velocity
        self.max_tight_velocity = mark.max_tight_velocity
        self.max_tight = mark.max_tight
        self.min_tight = mark.min_tight
        self.speed_factor = mark.speed_factor
        self.tight_tweak = mark.tight_tweak
        self.colour_tweak = mark.colour_tweak
        self.velocity_tweak = mark.velocity_tweak
        self.size_tweak = mark.size_tweak
        self.iter_reset = mark.iter_reset
        self.toroidal = mark.toroidal

        self.objects = [self._new_object() for _ in range(self.object_count)]
        self.iter_to_accel = self.iter_reset

    def _spread(self, limit: float) -> float:
        return self.randoms.rand_double() * limit * 2 - limit

    def _new_object(self) -> _LightObject:
        rand = self.randoms.rand_double
        x_pos = rand() * self.x
        y_pos = rand() * self.y
        x_vel = self._spread(self.maximum_velocity)
        y_vel = self._spread(self.maximum_velocity)
        size = rand() * (self.max_size - self.min_size) + self.min_size
        size_velocity = self._spread(self.max_size_velocity)
        colour = [float(self.randoms.rand8() - 127) for _ in range(3)]
        colour_velocity = [self._spread(self.max_colour_velocity) for _ in range(3)]
        tightness = rand() * (self.max_tight - self.min_tight) + self.min_tight
        tight_velocity = self._spread(self.max_tight_velocity)
        return _LightObject(
            x_pos, y_pos, x_vel, y_vel, size, size_velocity,
            colour, colour_velocity, tightness, tight_velocity,
        )

    def _move(self, obj: _LightObject) -> None:
        obj.x_pos += obj.x_vel * self.speed_factor
        obj.y_pos += obj.y_vel * self.speed_factor

        if self.toroidal:
            if obj.x_pos < 0:
                obj.x_pos += self.x
            if obj.y_pos < 0:
                obj.y_pos += self.y
            if obj.x_pos >= self.x:
                obj.x_pos -= self.x
            if obj.y_pos >= self.y:
                obj.y_pos -= self.y
            return

        if obj.x_pos < 0:
            obj.x_pos = -obj.x_pos
            obj.x_vel = -obj.x_vel
        if obj.y_pos < 0:
            obj.y_pos = -obj.y_pos
            obj.y_vel = -obj.y_vel
        if obj.x_pos > self.x - 1:
            obj.x_pos = 2 * (self.x - 1) - obj.x_pos
            obj.x_vel = -obj.x_vel
        if obj.y_pos > self.y - 1:
            obj.y_pos = 2 * (self.y - 1) - obj.y_pos
            obj.y_vel = -obj.y_vel

    def _evolve(self, obj: _LightObject) -> None:
        obj.size += obj.size_velocity * self.speed_factor
        if obj.size > self.max_size:
            obj.size = self.max_size
            obj.size_velocity = 0.0
        if obj.size < self.min_size:
            obj.size = self.min_size
            obj.size_velocity = 0.0

        for channel in range(3):
            obj.colour[channel] += obj.colour_velocity[channel] * self.speed_factor
            if obj.colour[channel] > _COLOUR_MAX:
                obj.colour[channel] = _COLOUR_MAX
                obj.colour_velocity[channel] = 0.0
            if obj.colour[channel] < _COLOUR_MIN:
                obj.colour[channel] = _COLOUR_MIN
                obj.colour_velocity[channel] = 0.0

        obj.tightness += obj.tight_velocity * self.speed_factor
        if obj.tightness > self.max_tight:
            obj.tightness = self.max_tight
            obj.tight_velocity = 0.0
        if obj.tightness < self.min_tight:
            obj.tightness = self.min_tight
            obj.tight_velocity = 0.0

    def _accelerate(self, obj: _LightObject) -> None:
        self.iter_to_accel -= 1
        if self.iter_to_accel <= 0:
            scale = self.speed_factor / float(self.iter_reset)
            obj.x_vel += self._spread(self.velocity_tweak) * scale
            obj.y_vel += self._spread(self.velocity_tweak) * scale
            obj.size_velocity += self._spread(self.size_tweak) * scale
            obj.tight_velocity += self._spread(self.tight_tweak) * scale
            for channel in range(3):
                obj.colour_velocity[channel] += self._spread(self.colour_tweak) * scale
            self.iter_to_accel = self.iter_reset

        limit = self.maximum_velocity
        obj.x_vel = min(max(obj.x_vel, -limit), limit)
        obj.y_vel = min(max(obj.y_vel, -limit), limit)
        size_limit = self.max_size_velocity
        obj.size_velocity = min(max(obj.size_velocity, -size_limit), size_limit)
        colour_limit = self.max_colour_velocity
        obj.colour_velocity = [
            min(max(velocity, -colour_limit), colour_limit) for velocity in obj.colour_velocity
        ]

    def _distances(self, obj: _LightObject) -> np.ndarray:
        n = np.arange(self.x, dtype=np.float64)[:, None]
        m = np.arange(self.y, dtype=np.float64)[None, :]
        if self.toroidal:
            xd = np.minimum(
                np.minimum(np.abs(n - obj.x_pos), np.abs(n - self.x - obj.x_pos)),
                np.abs(n + self.x - obj.x_pos),
            )
            yd = np.minimum(
                np.minimum(np.abs(m - obj.y_pos), np.abs(m - self.y - obj.y_pos)),
                np.abs(m + self.y - obj.y_pos),
            )
            return np.sqrt(xd * xd + yd * yd)
        return np.sqrt((n - obj.x_pos) ** 2 + (m - obj.y_pos) ** 2)

    def _paint(self, obj: _LightObject) -> None:
        dist = self._distances(obj)
        inside = dist < obj.size
        if not inside.any():
            return
        falloff = np.cos(PI * 0.5 * dist[inside] / obj.size) ** obj.tightness
        for channel in range(3):
            plane = self.environment[..., channel]
            added = np.trunc(falloff * float(int(obj.colour[channel]))).astype(np.int64)
            values = plane[inside].astype(np.int64) + added
            plane[inside] = np.clip(values, 0, 255).astype(np.uint8)

    def regenerate(self) -> None:
        """Move every light one step and redraw the grid."""
        self.environment[:] = _BACKGROUND
        for obj in self.objects:
            self._move(obj)
            self._evolve(obj)
            self._accelerate(obj)
            self._paint(obj)