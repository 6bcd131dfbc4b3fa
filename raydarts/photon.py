"""A compact photon record with quantised direction and RGBE power."""

from __future__ import annotations

import logging
import math
from typing import Sequence

logger = logging.getLogger(__name__)

_ANGLES = [i * (math.pi / 256.0) for i in range(256)]
_COS_THETA = tuple(math.cos(a) for a in _ANGLES)
_SIN_THETA = tuple(math.sin(a) for a in _ANGLES)
_COS_PHI = tuple(math.cos(2.0 * a) for a in _ANGLES)
_SIN_PHI = tuple(math.sin(2.0 * a) for a in _ANGLES)
_EXP_TABLE = (0.0,) + tuple(math.ldexp(1.0, i - (128 + 8)) for i in range(1, 256))


class Photon:
    """A photon storing its incident direction in two bytes and its power in Ward's RGBE format."""

    __slots__ = ("theta", "phi", "rgbe", "axis")

    def __init__(self, direction: Sequence[float], power: Sequence[float]) -> None:
        if not all(math.isfinite(c) and c >= 0 for c in power):
            logger.warning("Creating an invalid photon with power: %s", tuple(power))

        dz = max(-1.0, min(1.0, direction[2]))
        self.theta = min(255, int(math.acos(dz) * (256.0 / math.pi)))

        tmp = min(255, int(math.atan2(direction[1], direction[0]) * (256.0 / (2.0 * math.pi))))
        self.phi = tmp + 256 if tmp < 0 else tmp

        largest = max(power)
        if not largest >= 1e-32:
            self.rgbe = (0, 0, 0, 0)
        else:
            fraction, exponent = math.frexp(largest)
            scale = fraction * 256.0 / largest
            r, g, b = (max(0, min(255, int(c * scale))) for c in power)
            self.rgbe = (r, g, b, (exponent + 128) & 0xFF)

        self.axis = 0

    def power(self) -> tuple[float, float, float]:
        """Decode the stored power."""
        f = _EXP_TABLE[self.rgbe[3]]
        return (self.rgbe[0] * f, self.rgbe[1] * f, self.rgbe[2] * f)

    def direction(self) -> tuple[float, float, float]:
        """Decode the stored (quantised) direction."""
        st = _SIN_THETA[self.theta]
        return (st * _COS_PHI[self.phi], st * _SIN_PHI[self.phi], _COS_THETA[self.theta])

    def __repr__(self) -> str:
        return f"Photon(theta={self.theta}, phi={self.phi}, rgbe={self.rgbe})"