"""Orthonormal bases for local shading frames."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

Vec3 = tuple[float, float, float]


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def coordinate_system(n: Sequence[float]) -> tuple[Vec3, Vec3]:
    """Two unit vectors completing a right-handed orthonormal frame around unit ``n``."""
    x, y, z = n
    sign = math.copysign(1.0, z)
    a = -1.0 / (sign + z)
    b = x * y * a
    s = (1.0 + sign * x * x * a, sign * b, -sign * x)
    t = (b, sign + y * y * a, -y)
    return s, t


@dataclass(frozen=True)
class ONB:
    """Tangent ``s``, bitangent ``t`` and normal ``n`` of a local frame."""

    s: Vec3
    t: Vec3
    n: Vec3

    @classmethod
    def from_normal(cls, n: Sequence[float]) -> "ONB":
        """Build a frame around the unit normal ``n``."""
        normal = tuple(float(c) for c in n)
        s, t = coordinate_system(normal)
        return cls(s, t, normal)

    @classmethod
    def from_tangent_normal(cls, s: Sequence[float], n: Sequence[float]) -> "ONB":
        """Build a frame from a surface tangent and normal."""
        tangent = tuple(float(c) for c in s)
        normal = tuple(float(c) for c in n)
        return cls(tangent, _cross(normal, tangent), normal)

    def to_local(self, v: Sequence[float]) -> Vec3:
        """Express world-space ``v`` in this frame."""
        return (_dot(self.s, v), _dot(self.t, v), _dot(self.n, v))

    def to_world(self, v: Sequence[float]) -> Vec3:
        """Express local ``v`` in world space."""
        return tuple(
            self.s[i] * v[0] + self.t[i] * v[1] + self.n[i] * v[2] for i in range(3)
        )