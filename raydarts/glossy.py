"""Emissive and glossy materials, and a material factory."""

from __future__ import annotations

import math
import random
from typing import Any, Callable, Optional, Sequence

from raydarts.materials import (
    Color,
    Dielectric,
    HitInfo,
    Lambertian,
    Material,
    Metal,
    ScatterRecord,
    Vec3,
    _albedo,
    _dot,
    _neg,
    _normalize,
    _scale,
    _add,
    reflect,
)
from raydarts.onb import ONB
from raydarts.parsing import SceneError, parse_vec

_BLACK: Color = (0.0, 0.0, 0.0)


def _sample_hemisphere_cosine_power(exponent: float, rv: Sequence[float]) -> Vec3:
    """Map two uniform numbers to a direction about +z with density proportional to cos^exponent."""
    cos_theta = rv[1] ** (1.0 / (exponent + 1.0))
    sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
    angle = 2.0 * math.pi * rv[0]
    return (sin_theta * math.cos(angle), sin_theta * math.sin(angle), cos_theta)


class DiffuseLight(Material):
    """Emits a constant colour from the front side of a surface."""

    def __init__(self, spec: Optional[dict[str, Any]] = None) -> None:
        super().__init__(spec)
        r, g, b = parse_vec(self.spec.get("emit", (0.0, 0.0, 0.0)), 3)
        self.emit: Color = (r, g, b)

    def emitted(self, direction: Sequence[float], hit: HitInfo) -> Color:
        if _dot(direction, hit.sn) > 0:
            return _BLACK
        return self.emit

    def is_emissive(self) -> bool:
        return True


class Phong(Material):
    """A glossy lobe of cosine-power shape around the mirror direction."""

    def __init__(self, spec: Optional[dict[str, Any]] = None) -> None:
        super().__init__(spec)
        self.albedo = _albedo(self.spec)
        self.exponent = float(self.spec.get("exponent", 0.0))

    def sample(self, wi, hit, rv, rv1, rng: Optional[random.Random] = None):
        mirror = _normalize(reflect(wi, hit.sn))
        onb = ONB.from_normal(mirror)
        wo = onb.to_world(_sample_hemisphere_cosine_power(self.exponent, rv))
        if _dot(wo, hit.sn) > 0:
            return ScatterRecord(attenuation=self.albedo, wo=wo, is_specular=False)
        return None

    def eval(self, wi, scattered, hit):
        return _scale(self.albedo, self.pdf(wi, scattered, hit))

    def pdf(self, wi, scattered, hit):
        mirror = _normalize(reflect(wi, hit.sn))
        cosine = max(_dot(_normalize(scattered), mirror), 0.0)
        constant = (self.exponent + 1.0) / (2.0 * math.pi)
        return constant * cosine ** self.exponent


class BlinnPhong(Material):
    """A glossy material whose microfacet normals follow a cosine-power lobe."""

    def __init__(self, spec: Optional[dict[str, Any]] = None) -> None:
        super().__init__(spec)
        self.albedo = _albedo(self.spec)
        self.exponent = float(self.spec.get("exponent", 0.0))

    def sample(self, wi, hit, rv, rv1, rng: Optional[random.Random] = None):
        onb = ONB.from_normal(hit.sn)
        normal = onb.to_world(_sample_hemisphere_cosine_power(self.exponent, rv))
        wo = _normalize(reflect(wi, normal))
        if _dot(wo, hit.sn) > 0:
            return ScatterRecord(attenuation=self.albedo, wo=wo, is_specular=False)
        return None

    def eval(self, wi, scattered, hit):
        return _scale(self.albedo, self.pdf(wi, scattered, hit))

    def pdf(self, wi, scattered, hit):
        to_viewer = _neg(_normalize(wi))
        half = _normalize(_add(to_viewer, scattered))
        cosine = max(_dot(half, hit.sn), 0.0)
        normal_pdf = (self.exponent + 1.0) / (2.0 * math.pi) * cosine ** self.exponent
        denominator = 4.0 * _dot(to_viewer, half)
        if denominator == 0:
            return 0.0
        return normal_pdf / denominator


_MATERIALS: dict[str, Callable[[dict[str, Any]], Material]] = {
    "lambertian": Lambertian,
    "metal": Metal,
    "dielectric": Dielectric,
    "diffuse_light": DiffuseLight,
    "phong": Phong,
    "blinn-phong": BlinnPhong,
}


def create_material(spec: dict[str, Any]) -> Material:
    """Create a material from its JSON specification, chosen by its ``type``."""
    if not isinstance(spec, dict) or "type" not in spec:
        raise SceneError(f"Missing 'type' on material specification: {spec!r}")
    kind = spec["type"]
    try:
        factory = _MATERIALS[kind]
    except (KeyError, TypeError):
        raise SceneError(f"Unknown material type '{kind}'") from None
    return factory(spec)