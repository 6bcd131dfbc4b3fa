import math
import random

import pytest

from raydarts.perlin import Perlin

POINTS = [(0.3, 0.7, 0.1), (-1.25, 2.5, 3.75), (10.1, -4.4, 0.9), (0.5, 0.5, 0.5)]


def _make(seed=7):
    return Perlin(random.Random(seed))


def test_same_seed_is_deterministic():
    a, b = _make(3), _make(3)
    assert [a.noise(p) for p in POINTS] == [b.noise(p) for p in POINTS]
    assert a.turb(POINTS[0]) == b.turb(POINTS[0])


@pytest.mark.parametrize("p", [(0, 0, 0), (1, 2, 3), (-4, 7, -1), (255, 0, 12)])
def test_noise_vanishes_on_lattice(p):
    assert _make().noise(p) == pytest.approx(0.0, abs=1e-12)


@pytest.mark.parametrize("p", POINTS)
def test_noise_is_bounded(p):
    assert abs(_make().noise(p)) <= math.sqrt(3)


@pytest.mark.parametrize("p", POINTS)
def test_noise_is_periodic(p):
    perlin = _make()
    shifted = (p[0] + 256, p[1] - 256, p[2] + 512)
    assert perlin.noise(shifted) == pytest.approx(perlin.noise(p), abs=1e-9)


@pytest.mark.parametrize("p", POINTS)
def test_turbulence_single_octave_is_abs_noise(p):
    perlin = _make()
    assert perlin.turb(p, 1) == pytest.approx(abs(perlin.noise(p)))
    assert perlin.turb(p, 0) == 0.0


@pytest.mark.parametrize("p", POINTS)
def test_turbulence_is_non_negative_and_bounded(p):
    value = _make().turb(p, 7)
    assert 0.0 <= value <= 2 * math.sqrt(3)


def test_two_octaves_combine_scaled_noise():
    perlin = _make()
    p = POINTS[1]
    double = tuple(2 * c for c in p)
    assert perlin.turb(p, 2) == pytest.approx(abs(perlin.noise(p) + 0.5 * perlin.noise(double)))