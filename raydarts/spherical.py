"""Spherical coordinates, angles and equirectangular mappings."""

from __future__ import annotations

import math
from typing import Sequence

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]

_EQUIRECT_RANGE = (-2.0 * math.pi, math.pi, -math.pi, math.pi)


def _clamp(v: float, lo: float, hi: float) -> float:
    # NaN passes through unchanged, as with std::clamp
    return lo if v < lo else hi if hi < v else v


def _div(a: float, b: float) -> float:
    """Floating-point division with IEEE results for a zero divisor."""
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def rad2deg(value: float) -> float:
    """Convert radians to degrees."""
    return value * (180.0 / math.pi)


def deg2rad(value: float) -> float:
    """Convert degrees to radians."""
    return value * (math.pi / 180.0)


def sincos(arg: float) -> tuple[float, float]:
    """Return the sine and cosine of ``arg``."""
    return (math.sin(arg), math.cos(arg))


def theta(v: Sequence[float]) -> float:
    """The polar angle of a unit direction."""
    return math.acos(_clamp(v[2], -1.0, 1.0))


def cos_theta(v: Sequence[float]) -> float:
    return v[2]


def sin_theta2(v: Sequence[float]) -> float:
    return 1.0 - v[2] * v[2]


def sin_theta(v: Sequence[float]) -> float:
    temp = sin_theta2(v)
    if temp <= 0.0:
        return 0.0
    return math.sqrt(temp)


def tan_theta(v: Sequence[float]) -> float:
    temp = 1.0 - v[2] * v[2]
    if temp <= 0.0:
        return 0.0
    return _div(math.sqrt(temp), v[2])


def phi(v: Sequence[float]) -> float:
    """The azimuthal angle in [0, 2*pi]; ``v`` need not be unit length."""
    return math.atan2(-v[1], -v[0]) + math.pi


def sin_phi(v: Sequence[float]) -> float:
    st = sin_theta(v)
    if st == 0.0:
        return 1.0
    return _clamp(v[1] / st, -1.0, 1.0)


def cos_phi(v: Sequence[float]) -> float:
    st = sin_theta(v)
    if st == 0.0:
        return 1.0
    return _clamp(v[0] / st, -1.0, 1.0)


def sin_phi2(v: Sequence[float]) -> float:
    return _clamp(_div(v[1] * v[1], sin_theta2(v)), 0.0, 1.0)


def cos_phi2(v: Sequence[float]) -> float:
    return _clamp(_div(v[0] * v[0], sin_theta2(v)), 0.0, 1.0)


def spherical_coordinates_to_direction(phi_theta: Sequence[float]) -> Vec3:
    """Convert (phi, theta) angles to a unit direction."""
    s_theta, c_theta = sincos(phi_theta[1])
    s_phi, c_phi = sincos(phi_theta[0])
    return (s_theta * c_phi, s_theta * s_phi, c_theta)


def direction_to_spherical_coordinates(v: Sequence[float]) -> Vec2:
    """Convert a unit direction to (phi, theta) angles."""
    return (phi(v), theta(v))


def direction_to_equirectangular_range(
    direction: Sequence[float], angle_range: Sequence[float]
) -> Vec2:
    """Map a direction to uv coordinates over an angular range (scale/offset pairs)."""
    if all(c == 0 for c in direction):
        return (0.0, 0.0)
    return (
        (math.atan2(direction[1], direction[0]) - angle_range[1]) / angle_range[0],
        (theta(direction) - angle_range[3]) / angle_range[2],
    )


def equirectangular_range_to_direction(
    uv: Sequence[float], angle_range: Sequence[float]
) -> Vec3:
    """Map uv coordinates over an angular range back to a unit direction."""
    s_theta, c_theta = sincos(angle_range[2] * uv[1] + angle_range[3])
    s_phi, c_phi = sincos(angle_range[0] * uv[0] + angle_range[1])
    return (s_theta * c_phi, s_theta * s_phi, c_theta)


def direction_to_equirectangular(direction: Sequence[float]) -> Vec2:
    return direction_to_equirectangular_range(direction, _EQUIRECT_RANGE)


def equirectangular_to_direction(uv: Sequence[float]) -> Vec3:
    return equirectangular_range_to_direction(uv, _EQUIRECT_RANGE)