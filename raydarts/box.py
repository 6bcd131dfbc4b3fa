"""An N-dimensional axis-aligned bounding box."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Sequence, Union

Vec = tuple[float, ...]

_FLOAT_MAX = sys.float_info.max


@dataclass
class Box:
    """An axis-aligned box given by its ``min`` and ``max`` corners."""

    min: Vec
    max: Vec

    def __post_init__(self) -> None:
        self.min = tuple(float(c) for c in self.min)
        self.max = tuple(float(c) for c in self.max)
        if len(self.min) != len(self.max):
            raise ValueError("box corners must have the same dimension")

    @classmethod
    def empty(cls, dimensions: int = 3) -> "Box":
        """An empty box that any enclosed point will grow."""
        return cls((_FLOAT_MAX,) * dimensions, (-_FLOAT_MAX,) * dimensions)

    @classmethod
    def from_point(cls, point: Sequence[float]) -> "Box":
        """A box holding a single point."""
        return cls(tuple(point), tuple(point))

    @property
    def dimensions(self) -> int:
        return len(self.min)

    def is_empty(self) -> bool:
        return any(lo > hi for lo, hi in zip(self.min, self.max))

    def enclose(self, other: Union["Box", Sequence[float]]) -> None:
        """Grow the box to contain another box or a point."""
        if isinstance(other, Box):
            lo, hi = other.min, other.max
        else:
            lo = hi = tuple(other)
        self.min = tuple(min(a, b) for a, b in zip(self.min, lo))
        self.max = tuple(max(a, b) for a, b in zip(self.max, hi))

    def contains(self, point: Sequence[float], proper: bool = False) -> bool:
        """Whether ``point`` lies in the box; strictly inside if ``proper``."""
        if proper:
            return all(lo < p < hi for p, lo, hi in zip(point, self.min, self.max))
        return all(lo <= p <= hi for p, lo, hi in zip(point, self.min, self.max))

    def is_finite(self) -> bool:
        return not any(c == math.inf for c in self.min + self.max)

    def center(self) -> Vec:
        if not self.is_finite():
            return (0.0,) * self.dimensions
        return tuple((lo + hi) / 2 for lo, hi in zip(self.min, self.max))

    def diagonal(self) -> Vec:
        return tuple(hi - lo for lo, hi in zip(self.min, self.max))

    def volume(self) -> float:
        """The N-dimensional volume."""
        return math.prod(self.diagonal())

    def area(self) -> float:
        """The (N-1)-dimensional measure of the boundary."""
        d = self.diagonal()
        total = sum(
            math.prod(v for j, v in enumerate(d) if j != i) for i in range(len(d))
        )
        return 2 * total

    def offset(self, pos: Sequence[float]) -> Vec:
        """Position of ``pos`` relative to the box, 0 at ``min`` and 1 at ``max``."""
        return tuple(
            (p - lo) / (hi - lo) if hi > lo else p - lo
            for p, lo, hi in zip(pos, self.min, self.max)
        )

    def intersect(
        self,
        origin: Sequence[float],
        direction: Sequence[float],
        mint: float = 0.0,
        maxt: float = math.inf,
    ) -> tuple[float, float] | None:
        """Clip the ray segment [mint, maxt] to the box.

        Returns the entry and exit parameters, or ``None`` on a miss.
        """
        for lo, hi, o, d in zip(self.min, self.max, origin, direction):
            inv_d = 1.0 / d if d != 0 else math.copysign(math.inf, d)
            t0 = (lo - o) * inv_d
            t1 = (hi - o) * inv_d
            if inv_d < 0:
                t0, t1 = t1, t0
            mint = t0 if t0 > mint else mint
            maxt = t1 if t1 < maxt else maxt
            if maxt < mint:
                return None
        return (mint, maxt)