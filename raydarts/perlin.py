"""Gradient (Perlin) noise and turbulence."""

from __future__ import annotations

import itertools
import math
import random
from typing import Optional, Sequence

_POINT_COUNT = 256


def _random_unit_vector(rng: random.Random) -> tuple[float, float, float]:
    while True:
        v = tuple(rng.uniform(-1.0, 1.0) for _ in range(3))
        length = math.sqrt(sum(c * c for c in v))
        if length > 0:
            return (v[0] / length, v[1] / length, v[2] / length)


def _permutation(rng: random.Random) -> tuple[int, ...]:
    perm = list(range(_POINT_COUNT))
    rng.shuffle(perm)
    return tuple(perm)


def _fade(x: float) -> float:
    return x * x * (3 - 2 * x)


class Perlin:
    """Three-dimensional gradient noise over random unit gradients."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        rng = rng if rng is not None else random.Random()
        self._ranvec = tuple(_random_unit_vector(rng) for _ in range(_POINT_COUNT))
        self._perm_x = _permutation(rng)
        self._perm_y = _permutation(rng)
        self._perm_z = _permutation(rng)

    def noise(self, p: Sequence[float]) -> float:
        """Noise value at point ``p``; zero at every lattice point."""
        fx, fy, fz = (math.floor(c) for c in p)
        u, v, w = p[0] - fx, p[1] - fy, p[2] - fz
        i, j, k = int(fx), int(fy), int(fz)
        uu, vv, ww = _fade(u), _fade(v), _fade(w)

        accum = 0.0
        for di, dj, dk in itertools.product((0, 1), repeat=3):
            g = self._ranvec[
                self._perm_x[(i + di) & 255]
                ^ self._perm_y[(j + dj) & 255]
                ^ self._perm_z[(k + dk) & 255]
            ]
            weight = (
                (di * uu + (1 - di) * (1 - uu))
                * (dj * vv + (1 - dj) * (1 - vv))
                * (dk * ww + (1 - dk) * (1 - ww))
            )
            accum += weight * (g[0] * (u - di) + g[1] * (v - dj) + g[2] * (w - dk))
        return accum

    def turb(self, p: Sequence[float], depth: int = 7) -> float:
        """Absolute sum of ``depth`` octaves of noise."""
        accum = 0.0
        weight = 1.0
        point = tuple(p)
        for _ in range(depth):
            accum += weight * self.noise(point)
            weight *= 0.5
            point = tuple(2 * c for c in point)
        return abs(accum)