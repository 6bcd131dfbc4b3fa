import pytest

from raydarts.colormap import inferno, magma, plasma, viridis


def test_viridis_at_zero_is_constant_term():
    assert viridis(0.0) == pytest.approx(
        (0.2777273272234177, 0.005407344544966578, 0.3340998053353061)
    )


def test_inferno_at_zero_is_constant_term():
    assert inferno(0.0) == pytest.approx(
        (0.0002189403691192265, 0.001651004631001012, -0.01948089843709184)
    )


def test_magma_at_zero_is_constant_term():
    assert magma(0.0) == pytest.approx(
        (-0.002136485053939582, -0.000749655052795221, -0.005386127855323933)
    )


def test_plasma_at_zero_is_constant_term():
    assert plasma(0.0) == pytest.approx(
        (0.05873234392399702, 0.02333670892565664, 0.5433401826748754)
    )


@pytest.mark.parametrize("t", [i / 20 for i in range(21)])
def test_values_stay_near_unit_range(t):
    for color in (viridis(t), inferno(t), magma(t), plasma(t)):
        assert len(color) == 3
        assert all(-0.05 <= c <= 1.05 for c in color)


def test_inferno_dark_to_bright():
    assert sum(inferno(0.0)) < sum(inferno(0.5)) < sum(inferno(1.0))


def test_magma_dark_to_bright():
    assert sum(magma(0.0)) < sum(magma(0.5)) < sum(magma(1.0))


def test_viridis_end_matches_reference_colormap():
    assert viridis(1.0) == pytest.approx((0.993248, 0.906157, 0.143936), abs=0.02)


def test_inferno_end_matches_reference_colormap():
    assert inferno(1.0) == pytest.approx((0.988362, 0.998364, 0.644924), abs=0.02)