"""Participating media: transmittance evaluation and free-flight sampling."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Mapping, Optional, Protocol, Sequence

from raydarts.glossy import create_material
from raydarts.materials import Color, HitInfo, Material
from raydarts.parsing import SceneError, parse_vec

logger = logging.getLogger(__name__)

_ONE: Color = (1.0, 1.0, 1.0)
_ZERO: Color = (0.0, 0.0, 0.0)

FreeFlight = tuple[bool, HitInfo, Color, Color]
"""``(scattered, hit, f, p)``: whether a medium event was sampled, where, and the
factors by which the path contribution and its density are multiplied."""


class _Sampler(Protocol):
    def next1f(self) -> float: ...


def _color(value: Any) -> Color:
    r, g, b = parse_vec(value, 3)
    return (r, g, b)


def _find_phase_function(
    spec: Mapping[str, Any], materials: Optional[Mapping[str, Material]]
) -> Optional[Material]:
    value = spec.get("phase function")
    if value is None:
        return None
    if isinstance(value, str):
        if materials is None or value not in materials:
            raise SceneError(f"Cannot find a material named '{value}'")
        return materials[value]
    return create_material(value)


class Medium(ABC):
    """A participating medium with an associated phase function."""

    def __init__(
        self,
        spec: Optional[dict[str, Any]] = None,
        materials: Optional[Mapping[str, Material]] = None,
    ) -> None:
        self.spec = dict(spec or {})
        self.phase_function = _find_phase_function(self.spec, materials)

    def coeffs(self, p: Sequence[float]) -> tuple[Color, Color, Color]:
        """Absorption, scattering and null coefficients at ``p``."""
        return (_ZERO, _ZERO, _ZERO)

    @abstractmethod
    def sample_free_flight(self, ray: Any, channel: int, sampler: _Sampler) -> FreeFlight:
        """Sample the distance to the next medium interaction along ``ray``."""

    def total_transmittance(self, ray: Any, sampler: _Sampler) -> Color:
        """Track-length estimate of the transmittance along ``ray``."""
        channel = min(int(sampler.next1f() * 3), 2)
        scattered, _, f, p = self.sample_free_flight(ray, channel, sampler)
        if scattered:
            return _ZERO
        return (f[0] / p[0], f[1] / p[1], f[2] / p[2])


class HomogeneousMedium(Medium):
    """A medium with the same coefficients everywhere."""

    def __init__(
        self,
        spec: Optional[dict[str, Any]] = None,
        materials: Optional[Mapping[str, Material]] = None,
    ) -> None:
        super().__init__(spec, materials)
        self.albedo: Color = (0.8, 0.8, 0.8)
        self.total: Color = (1.0, 1.0, 1.0)
        self.real_fraction: Color = (1.0, 1.0, 1.0)
        try:
            if "albedo" in self.spec:
                self.albedo = _color(self.spec["albedo"])
            if "total" in self.spec:
                self.total = _color(self.spec["total"])
            if "real fraction" in self.spec:
                self.real_fraction = _color(self.spec["real fraction"])
        except SceneError as e:
            logger.error('Cannot parse Homogeneous medium specification: "%s"', e)

    def coeffs(self, p: Sequence[float]) -> tuple[Color, Color, Color]:
        absorption = tuple(t * (1.0 - a) * r for t, a, r in zip(self.total, self.albedo, self.real_fraction))
        scattering = tuple(t * a * r for t, a, r in zip(self.total, self.albedo, self.real_fraction))
        null = tuple(t * (1.0 - r) for t, r in zip(self.total, self.real_fraction))
        return (absorption, scattering, null)  # type: ignore[return-value]

    def sample_free_flight(self, ray: Any, channel: int, sampler: _Sampler) -> FreeFlight:
        return (False, HitInfo(), _ONE, _ONE)

    def total_transmittance(self, ray: Any, sampler: _Sampler) -> Color:
        return _ONE


class VacuumMedium(Medium):
    """An empty medium that never scatters."""

    def sample_free_flight(self, ray: Any, channel: int, sampler: _Sampler) -> FreeFlight:
        return (False, HitInfo(), _ONE, _ONE)

    def total_transmittance(self, ray: Any, sampler: _Sampler) -> Color:
        return _ONE


_MEDIA: dict[str, Callable[..., Medium]] = {
    "homogeneous": HomogeneousMedium,
    "vacuum": VacuumMedium,
}


def create_medium(spec: dict[str, Any]) -> Medium:
    """Create a medium from its JSON specification, chosen by its ``type``."""
    if not isinstance(spec, dict) or "type" not in spec:
        raise SceneError(f"Missing 'type' on medium specification: {spec!r}")
    kind = spec["type"]
    try:
        factory = _MEDIA[kind]
    except (KeyError, TypeError):
        raise SceneError(f"Unknown medium type '{kind}'") from None
    return factory(spec)