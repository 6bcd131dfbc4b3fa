"""Surface hit records and the basic light-scattering materials."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from raydarts.onb import ONB
from raydarts.parsing import SceneError, parse_vec

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]
Color = tuple[float, float, float]

RAY_EPSILON = 1e-4
"""Tolerance used when deciding whether a direction lies below a surface."""

_BLACK: Color = (0.0, 0.0, 0.0)
_WHITE: Color = (1.0, 1.0, 1.0)
_default_rng = random.Random()


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _add(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _sub(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _scale(v: Sequence[float], s: float) -> Vec3:
    return (v[0] * s, v[1] * s, v[2] * s)


def _neg(v: Sequence[float]) -> Vec3:
    return (-v[0], -v[1], -v[2])


def _normalize(v: Sequence[float]) -> Vec3:
    length = math.sqrt(_dot(v, v))
    if length == 0:
        return (float(v[0]), float(v[1]), float(v[2]))
    return (v[0] / length, v[1] / length, v[2] / length)


@dataclass
class HitInfo:
    """Information about a ray-surface intersection."""

    t: float = math.inf
    p: Vec3 = (0.0, 0.0, 0.0)
    gn: Vec3 = (0.0, 0.0, 1.0)
    sn: Vec3 = (0.0, 0.0, 1.0)
    uv: Vec2 = (0.0, 0.0)
    mat: Optional["Material"] = None


@dataclass
class ScatterRecord:
    """The outcome of sampling a material."""

    attenuation: Color = _BLACK
    wo: Vec3 = (0.0, 0.0, 0.0)
    is_specular: bool = False


def fresnel_dielectric(cos_theta_i: float, eta_i: float, eta_t: float) -> float:
    """Unpolarised Fresnel reflectance at a smooth dielectric interface."""
    if eta_t == eta_i:
        return 0.0
    if not cos_theta_i > 0.0:
        eta_i, eta_t = eta_t, eta_i
        cos_theta_i = -cos_theta_i

    eta = eta_i / eta_t
    sin_theta_t2 = eta * eta * (1.0 - cos_theta_i * cos_theta_i)
    if sin_theta_t2 > 1.0:
        return 1.0

    cos_theta_t = math.sqrt(1.0 - sin_theta_t2)
    rs = (eta_i * cos_theta_i - eta_t * cos_theta_t) / (eta_i * cos_theta_i + eta_t * cos_theta_t)
    rp = (eta_t * cos_theta_i - eta_i * cos_theta_t) / (eta_t * cos_theta_i + eta_i * cos_theta_t)
    return 0.5 * (rs * rs + rp * rp)


def reflect(v: Sequence[float], n: Sequence[float]) -> Vec3:
    """Mirror ``v`` about the normal ``n``."""
    return _sub(v, _scale(n, 2.0 * _dot(v, n)))


def refract(v: Sequence[float], n: Sequence[float], eta: float) -> Optional[Vec3]:
    """Refract ``v`` through a surface with normal ``n``; ``None`` on total internal reflection."""
    v = _normalize(v)
    dt = _dot(v, n)
    discrim = 1.0 - eta * eta * (1.0 - dt * dt)
    if discrim > 0:
        return _sub(_scale(_sub(v, _scale(n, dt)), eta), _scale(n, math.sqrt(discrim)))
    return None


def refract_direction(v: Sequence[float], n: Sequence[float], eta: float) -> Vec3:
    """Refract unit ``v`` through normal ``n`` without checking for total internal reflection."""
    cos_theta = _dot(_neg(v), n)
    perp = _scale(_add(v, _scale(n, cos_theta)), eta)
    parallel = _scale(n, -math.sqrt(abs(1.0 - _dot(perp, perp))))
    return _add(perp, parallel)


def random_in_unit_sphere(rng: Optional[random.Random] = None) -> Vec3:
    """A uniformly distributed point strictly inside the unit ball."""
    rng = rng if rng is not None else _default_rng
    while True:
        p = (rng.uniform(-1.0, 1.0), rng.uniform(-1.0, 1.0), rng.uniform(-1.0, 1.0))
        if _dot(p, p) < 1.0:
            return p


def sample_hemisphere_cosine(rv: Sequence[float]) -> Vec3:
    """Map two uniform numbers to a cosine-distributed direction about +z."""
    r = math.sqrt(rv[0])
    angle = 2.0 * math.pi * rv[1]
    return (r * math.cos(angle), r * math.sin(angle), math.sqrt(max(0.0, 1.0 - rv[0])))


def _albedo(spec: dict) -> Color:
    if "albedo" not in spec:
        raise SceneError(f"Missing 'albedo' on material specification: {spec!r}")
    value = spec["albedo"]
    if isinstance(value, dict):
        if value.get("type", "constant") != "constant" or "color" not in value:
            raise SceneError(f"Unsupported albedo texture: {value!r}")
        value = value["color"]
    r, g, b = parse_vec(value, 3)
    return (r, g, b)


class Material:
    """Base class for materials; scatters nothing and emits nothing."""

    def __init__(self, spec: Optional[dict[str, Any]] = None) -> None:
        self.spec = dict(spec or {})

    def emitted(self, direction: Sequence[float], hit: HitInfo) -> Color:
        """Light emitted towards the viewer along ``direction``."""
        return _BLACK

    def scatter(
        self, direction: Sequence[float], hit: HitInfo, rng: Optional[random.Random] = None
    ) -> Optional[tuple[Color, Vec3]]:
        """Scatter an incoming ray; returns ``(attenuation, direction)`` or ``None``."""
        return None

    def sample(
        self,
        wi: Sequence[float],
        hit: HitInfo,
        rv: Sequence[float],
        rv1: float,
        rng: Optional[random.Random] = None,
    ) -> Optional[ScatterRecord]:
        """Sample an outgoing direction; ``None`` if sampling fails."""
        return None

    def eval(self, wi: Sequence[float], scattered: Sequence[float], hit: HitInfo) -> Color:
        """The scattering function times the cosine term."""
        return _BLACK

    def pdf(self, wi: Sequence[float], scattered: Sequence[float], hit: HitInfo) -> float:
        """Density of :meth:`sample` generating ``scattered``."""
        return 0.0

    def is_emissive(self) -> bool:
        return False


class Lambertian(Material):
    """A perfectly diffuse material."""

    def __init__(self, spec: Optional[dict[str, Any]] = None) -> None:
        super().__init__(spec)
        self.albedo = _albedo(self.spec)

    def scatter(self, direction, hit, rng=None):
        unit = _normalize(random_in_unit_sphere(rng))
        out = _add(hit.sn, unit)
        if _dot(_normalize(out), hit.sn) < -RAY_EPSILON:
            out = _neg(out)
        return self.albedo, out

    def sample(self, wi, hit, rv, rv1, rng=None):
        onb = ONB.from_normal(hit.sn)
        wo = onb.to_world(sample_hemisphere_cosine(rv))
        return ScatterRecord(attenuation=self.albedo, wo=wo, is_specular=False)

    def eval(self, wi, scattered, hit):
        f = max(0.0, _dot(scattered, hit.sn)) / math.pi
        return _scale(self.albedo, f)

    def pdf(self, wi, scattered, hit):
        return max(0.0, _dot(scattered, hit.sn)) / math.pi


class Metal(Material):
    """A metal reflecting into a (possibly rough) mirror direction."""

    def __init__(self, spec: Optional[dict[str, Any]] = None) -> None:
        super().__init__(spec)
        self.albedo = _albedo(self.spec)
        self.roughness = min(max(float(self.spec.get("roughness", 0.0)), 0.0), 1.0)

    def _direction(self, wi, hit, rng) -> Vec3:
        reflected = reflect(_normalize(wi), hit.sn)
        return _add(reflected, _scale(_normalize(random_in_unit_sphere(rng)), self.roughness))

    def scatter(self, direction, hit, rng=None):
        out = self._direction(direction, hit, rng)
        if _dot(out, hit.sn) > 0:
            return self.albedo, out
        return None

    def sample(self, wi, hit, rv, rv1, rng=None):
        wo = self._direction(wi, hit, rng)
        if _dot(wo, hit.sn) > 0:
            return ScatterRecord(attenuation=self.albedo, wo=wo, is_specular=True)
        return None


class Dielectric(Material):
    """A smooth dielectric that reflects or refracts by its index of refraction."""

    def __init__(self, spec: Optional[dict[str, Any]] = None) -> None:
        super().__init__(spec)
        self.ior = float(self.spec.get("ior", 1.5))

    def _direction(self, wi, hit, rng) -> Vec3:
        rng = rng if rng is not None else _default_rng
        cos_theta_i = _dot(_normalize(_neg(wi)), hit.sn)
        entering = cos_theta_i > 0.0
        sn = hit.sn if entering else _neg(hit.sn)
        ratio = 1.0 / self.ior if entering else self.ior
        fr = fresnel_dielectric(cos_theta_i, 1.0, self.ior)

        refracted = None if fr > rng.random() else refract(wi, sn, ratio)
        if refracted is None:
            return _normalize(reflect(_normalize(wi), sn))
        return _normalize(refracted)

    def scatter(self, direction, hit, rng=None):
        return _WHITE, self._direction(direction, hit, rng)

    def sample(self, wi, hit, rv, rv1, rng=None):
        return ScatterRecord(attenuation=_WHITE, wo=self._direction(wi, hit, rng), is_specular=True)