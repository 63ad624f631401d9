"""Environment of drifting coloured seeds blended by Laplacian relaxation."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

import numpy as np

from .environment import Environment, GenerationError
from .randoms import Randoms
from .settings import EnvironmentSettings

PI = 3.141592654
_ANGLE_STEP = 0.01
_RELAXATION = 1.2
_SOFT_LIMIT_STRENGTH = 5.0
_REPORT_EVERY = 1000

logger = logging.getLogger(__name__)


def _circle_angles() -> list[float]:
    angles = []
    z = -PI
    while True:
        angles.append(z)
        z += _ANGLE_STEP
        if not z < PI:
            return angles


_ANGLES = _circle_angles()


@dataclass
class Seed:
    """A coloured spot with a position, a velocity and a radius."""

    n: float = 0.0
    m: float = 0.0
    colour: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    size: float = 0.0
    nv: float = 0.0
    mv: float = 0.0
    initialised: bool = False


class RussellEnvironment(Environment):
    """Seeds wander over the grid; the space between them is smoothed until it converges."""

    def __init__(self, settings: EnvironmentSettings, randoms: Randoms | None = None) -> None:
        super().__init__(settings, randoms)
        russell = settings.russell
        if self.x < 2 or self.y < 2:
            raise GenerationError("the grid must be at least 2 by 2 for smoothing")
        if russell.converge <= 0:
            raise GenerationError(f"convergence must be positive, got {russell.converge}")
        if russell.buffer < 0:
            raise GenerationError(f"buffer must not be negative, got {russell.buffer}")

        self.n_seed = russell.n_seed
        self.buffer = russell.buffer
        self.max_size = russell.max_size
        self.size_velocity = russell.size_velocity
        self.maximum_velocity = russell.maximum_velocity
        self.periodic = russell.periodic
        self.blur = russell.blur
        self.converge = russell.converge
        self.factor = russell.factor
        self.max_acceleration = russell.max_acceleration
        self.max_colour_velocity = russell.max_colour_velocity

        # Initial vertical placement is scaled by the grid width, as the seeds are first laid out.
        self.seeds = [self._new_seed(self.x) for _ in range(self.n_seed)]

        self.colour_map = self.environment.astype(np.float64)
        self.laplace = np.zeros((self.x, self.y), dtype=np.int64)
        self._prepare_stencil()

    def _new_seed(self, m_extent: int) -> Seed:
        seed = Seed()
        self._place_seed(seed, m_extent)
        return seed

    def _place_seed(self, seed: Seed, m_extent: int) -> None:
        rand8 = self.randoms.rand8
        seed.colour = [float(rand8()) for _ in range(3)]
        seed.n = float(rand8()) * (self.x / 256.0)
        seed.m = float(rand8()) * (m_extent / 256.0)
        seed.nv = 0.0
        seed.mv = 0.0
        seed.size = (float(rand8()) * float(self.max_size)) / 256.0
        seed.initialised = True

    def _prepare_stencil(self) -> None:
        n = np.arange(self.x)
        m = np.arange(self.y)
        self._parity = [((n[:, None] + m[None, :]) % 2) == p for p in (0, 1)]
        if self.periodic:
            self._right = (n + 1) % (self.x - 1)
            self._left = (n - 1 + (self.x - 1)) % (self.x - 1)
            self._down = (m + 1) % (self.y - 1)
            self._up = (m - 1 + (self.y - 1)) % (self.y - 1)
            col_special = ((self._right - n) % 2 == 0) | ((self._left - n) % 2 == 0)
            row_special = ((self._down - m) % 2 == 0) | ((self._up - m) % 2 == 0)
            self._special = col_special[:, None] | row_special[None, :]
        else:
            counts = np.full((self.x, self.y), 4.0)
            counts[0, :] -= 1
            counts[-1, :] -= 1
            counts[:, 0] -= 1
            counts[:, -1] -= 1
            self._counts = counts[..., None]
            self._special = np.zeros((self.x, self.y), dtype=bool)

    def _soft_limited(self, velocity: float, acceleration: float) -> float:
        if abs(velocity) > self.maximum_velocity and velocity * acceleration > 0:
            acceleration *= 1.0 / (
                (abs(velocity) - self.maximum_velocity + 1) * _SOFT_LIMIT_STRENGTH
            )
        return acceleration

    def _move_seed(self, seed: Seed) -> None:
        rand8 = self.randoms.rand8
        if not seed.initialised:
            self._place_seed(seed, self.y)

        accel_scale = float(self.max_acceleration) / 128.0
        na = (float(rand8()) - 128.0) * accel_scale * self.factor
        na = self._soft_limited(seed.nv, na)
        ma = (float(rand8()) - 128.0) * accel_scale * self.factor
        ma = self._soft_limited(seed.mv, ma)

        seed.nv += na
        seed.mv += ma
        seed.n += seed.nv * self.factor
        seed.m += seed.mv * self.factor

        colour_scale = float(self.max_colour_velocity) / 128.0
        for channel in range(3):
            seed.colour[channel] += self.factor * ((float(rand8()) - 128.0) * colour_scale)
        for channel in range(3):
            if math.trunc(seed.colour[channel]) > 255:
                seed.colour[channel] = 255.0
            if math.trunc(seed.colour[channel]) <= 0:
                seed.colour[channel] = 0.0

        seed.size += self.factor * ((rand8() - 128) * (float(self.size_velocity) / 128.0))

        seed.n = self._bound(seed.n, self.x)
        seed.m = self._bound(seed.m, self.y)

        if seed.size > self.max_size:
            seed.size = float(self.max_size)
        if seed.size < 1:
            seed.size = 1.0

    def _bound(self, position: float, extent: int) -> float:
        top = extent - 0.1
        if self.periodic:
            if position > top:
                position = 0.0
            if position < 0:
                position = top
        else:
            if position > top:
                position = top
            if position < 0:
                position = 0.0
        return position

    def regenerate(self) -> None:
        """Move every seed one step, then smooth the grid between them."""
        for seed in self.seeds:
            self._move_seed(seed)
        self._do_laplace()

    def _seed_mask(self, seed: Seed) -> np.ndarray:
        """Cells covered by a seed's disc, swept as horizontal chords round its circle."""
        x, y = self.x, self.y
        cols: list[np.ndarray] = []
        rows: list[np.ndarray] = []
        for z in _ANGLES:
            local_x = seed.n + seed.size * math.cos(z)
            local_y = seed.m + seed.size * math.sin(z)
            if self.periodic:
                if local_y > y - 1:
                    local_y -= y - 1
                if local_y < 0:
                    local_y += y - 1

            radius = math.trunc(seed.n - local_x)
            span = seed.n + radius - local_x
            count = max(1, math.ceil(span))
            new_x = local_x + np.arange(count, dtype=np.float64)
            whole_x = np.trunc(new_x).astype(np.int64)
            row = math.trunc(local_y)

            over = new_x > x - 1
            under = new_x < 0
            middle = ~(over | under)
            ix = np.empty_like(whole_x)
            ix[over] = whole_x[over] - (x - 1)
            ix[under] = whole_x[under] + (x - 1)
            ix[middle] = whole_x[middle]

            keep = middle if 0 < local_y < y else np.zeros_like(middle)
            if self.periodic:
                keep = keep | over | under
                if not 0 <= row < y:
                    keep = keep & ~(over | under)
            keep = keep & (ix >= 0) & (ix < x)
            if keep.any():
                cols.append(ix[keep])
                rows.append(np.full(int(keep.sum()), row, dtype=np.int64))

        mask = np.zeros((x, y), dtype=bool)
        if cols:
            mask[np.concatenate(cols), np.concatenate(rows)] = True
        return mask

    def _dilate(self) -> None:
        laplace = self.laplace
        b = self.buffer
        if b <= 0:
            return
        for n, m in np.argwhere(laplace > 1):
            if laplace[n, m] > 1:
                rows = np.arange(n - b, n + b) % self.x
                cols = np.arange(m - b, m + b) % self.y
                laplace[np.ix_(rows, cols)] = -1

    def _residual(self, cmap: np.ndarray) -> np.ndarray:
        if self.periodic:
            return (
                cmap[self._right, :, :]
                + cmap[self._left, :, :]
                + cmap[:, self._down, :]
                + cmap[:, self._up, :]
                - 4.0 * cmap
            )
        neighbours = np.zeros_like(cmap)
        neighbours[:-1] += cmap[1:]
        neighbours[1:] += cmap[:-1]
        neighbours[:, :-1] += cmap[:, 1:]
        neighbours[:, 1:] += cmap[:, :-1]
        return neighbours - self._counts * cmap

    def _smooth_pass(self, parity: int) -> float:
        cmap = self.colour_map
        active = self._parity[parity] & (self.laplace != 1)
        special = active & self._special
        regular = active & ~special

        old = cmap.copy() if special.any() else cmap
        residual = self._residual(cmap)
        cmap[regular] += _RELAXATION * residual[regular] / 4.0
        total = float(np.abs(residual[regular]).sum())

        y = self.y
        for n, m in np.argwhere(special):
            own = n * y + m

            def value(a: int, b: int) -> np.ndarray:
                return cmap[a, b] if a * y + b < own else old[a, b]

            e = (
                value(self._right[n], m)
                + value(self._left[n], m)
                + value(n, self._down[m])
                + value(n, self._up[m])
                - 4.0 * cmap[n, m]
            )
            cmap[n, m] += _RELAXATION * e / 4.0
            total += float(np.abs(e).sum())
        return total

    def _do_laplace(self) -> None:
        self.laplace[:] = 0
        self.colour_map[:] = self.environment

        for seed in self.seeds:
            mask = self._seed_mask(seed)
            self.colour_map[mask] = seed.colour
            self.laplace += mask
            if self.buffer == 0:
                np.minimum(self.laplace, 1, out=self.laplace)
            if self.blur:
                self.laplace[:] = 0

        self._dilate()

        count = 0
        cells = 3.0 * float(self.x) * float(self.y)
        while True:
            e_total = self._smooth_pass(count % 2) / cells
            count += 1
            if count % _REPORT_EVERY == 0 and not self.batch:
                logger.info("Residual is currently %s", e_total)
            if not e_total > self.converge:
                break

        self.environment[:] = np.clip(self.colour_map, 0, 255).astype(np.uint8)