import logging
import math

import pytest

from raydarts.photon import Photon


def _unit(v):
    n = math.sqrt(sum(c * c for c in v))
    return tuple(c / n for c in v)


def test_zero_power_encodes_to_zero():
    p = Photon((0.0, 0.0, 1.0), (0.0, 0.0, 0.0))
    assert p.rgbe == (0, 0, 0, 0)
    assert p.power() == (0.0, 0.0, 0.0)


def test_unit_power_exact():
    p = Photon((0.0, 0.0, 1.0), (1.0, 1.0, 1.0))
    assert p.rgbe == (128, 128, 128, 129)
    assert p.power() == (1.0, 1.0, 1.0)


@pytest.mark.parametrize(
    "power", [(0.3, 0.2, 0.1), (5.0, 17.0, 2.5), (1e-4, 2e-4, 3e-5), (0.0, 0.7, 0.0)]
)
def test_power_round_trip_within_quantisation(power):
    decoded = Photon((1.0, 0.0, 0.0), power).power()
    largest = max(power)
    for orig, got in zip(power, decoded):
        assert got <= orig
        assert orig - got <= largest / 128


@pytest.mark.parametrize(
    "direction", [(1, 2, 3), (-1, 0.5, 0.2), (0.3, -0.7, -0.6), (-2, -2, 1), (0, -1, 0.1)]
)
def test_direction_round_trip(direction):
    d = _unit(direction)
    decoded = Photon(d, (1.0, 1.0, 1.0)).direction()
    assert sum(a * a for a in decoded) == pytest.approx(1.0)
    assert sum(a * b for a, b in zip(d, decoded)) > 0.99


def test_direction_bytes_in_range():
    p = Photon((0.0, 0.0, -1.0), (1.0, 1.0, 1.0))
    assert p.theta == 255
    assert 0 <= p.phi <= 255


def test_invalid_power_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="raydarts.photon"):
        Photon((0.0, 0.0, 1.0), (-1.0, 0.5, 0.5))
    assert any("invalid photon" in r.getMessage() for r in caplog.records)