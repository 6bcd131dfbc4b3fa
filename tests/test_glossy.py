import math

import pytest

from raydarts.glossy import BlinnPhong, DiffuseLight, Phong, create_material
from raydarts.materials import Dielectric, HitInfo, Lambertian, Metal
from raydarts.parsing import SceneError

UP = (0.0, 0.0, 1.0)


def _hit():
    return HitInfo(t=1.0, p=(0.0, 0.0, 0.0), gn=UP, sn=UP, uv=(0.5, 0.5))


def _unit(v):
    n = math.sqrt(sum(c * c for c in v))
    return tuple(c / n for c in v)


def test_diffuse_light_emits_only_from_front():
    light = DiffuseLight({"emit": [2.0, 3.0, 4.0]})
    assert light.emitted((0.0, 0.0, -1.0), _hit()) == (2.0, 3.0, 4.0)
    assert light.emitted((0.0, 0.0, 1.0), _hit()) == (0.0, 0.0, 0.0)


def test_diffuse_light_is_emissive_and_defaults_black():
    light = DiffuseLight({})
    assert light.is_emissive() is True
    assert light.emit == (0.0, 0.0, 0.0)


def test_phong_sample_at_lobe_peak_is_mirror_direction():
    phong = Phong({"albedo": 0.5, "exponent": 10})
    wi = _unit((1.0, 0.0, -1.0))
    rec = phong.sample(wi, _hit(), (0.3, 1.0), 0.5)
    expected = _unit((1.0, 0.0, 1.0))
    assert rec is not None
    assert rec.wo == pytest.approx(expected, abs=1e-9)
    assert rec.is_specular is False
    assert rec.attenuation == (0.5, 0.5, 0.5)


def test_phong_pdf_peaks_at_mirror():
    phong = Phong({"albedo": 0.5, "exponent": 20})
    wi = _unit((1.0, 0.0, -1.0))
    mirror = _unit((1.0, 0.0, 1.0))
    off = _unit((0.5, 0.0, 1.0))
    assert phong.pdf(wi, mirror, _hit()) > phong.pdf(wi, off, _hit())


def test_phong_eval_is_albedo_times_pdf():
    phong = Phong({"albedo": [0.2, 0.4, 0.6], "exponent": 5})
    wi = _unit((1.0, 0.0, -1.0))
    wo = _unit((0.7, 0.1, 1.0))
    pdf = phong.pdf(wi, wo, _hit())
    assert phong.eval(wi, wo, _hit()) == pytest.approx((0.2 * pdf, 0.4 * pdf, 0.6 * pdf))


def test_phong_samples_lie_above_surface():
    phong = Phong({"albedo": 0.5, "exponent": 3})
    wi = _unit((1.0, 0.0, -1.0))
    for i in range(1, 10):
        for j in range(1, 10):
            rec = phong.sample(wi, _hit(), (i / 10, j / 10), 0.5)
            if rec is not None:
                assert rec.wo[2] > 0
                assert phong.pdf(wi, rec.wo, _hit()) > 0


def test_blinn_phong_sample_at_peak_is_mirror_direction():
    material = BlinnPhong({"albedo": 0.8, "exponent": 50})
    wi = _unit((0.0, 1.0, -1.0))
    rec = material.sample(wi, _hit(), (0.0, 1.0), 0.5)
    assert rec is not None
    assert rec.wo == pytest.approx(_unit((0.0, 1.0, 1.0)), abs=1e-9)


def test_blinn_phong_pdf_positive_at_mirror_and_eval_scales():
    material = BlinnPhong({"albedo": [1.0, 0.5, 0.25], "exponent": 10})
    wi = _unit((0.0, 1.0, -1.0))
    mirror = _unit((0.0, 1.0, 1.0))
    pdf = material.pdf(wi, mirror, _hit())
    assert pdf > 0
    assert material.eval(wi, mirror, _hit()) == pytest.approx((pdf, 0.5 * pdf, 0.25 * pdf))
    assert pdf > material.pdf(wi, _unit((0.0, -0.5, 1.0)), _hit())


def test_glossy_materials_require_albedo():
    with pytest.raises(SceneError):
        Phong({"exponent": 2})
    with pytest.raises(SceneError):
        BlinnPhong({})


@pytest.mark.parametrize(
    "spec, cls",
    [
        ({"type": "lambertian", "albedo": 0.5}, Lambertian),
        ({"type": "metal", "albedo": 0.5}, Metal),
        ({"type": "dielectric", "ior": 1.5}, Dielectric),
        ({"type": "diffuse_light", "emit": 1.0}, DiffuseLight),
        ({"type": "phong", "albedo": 0.5}, Phong),
        ({"type": "blinn-phong", "albedo": 0.5}, BlinnPhong),
    ],
)
def test_create_material_dispatches_on_type(spec, cls):
    assert type(create_material(spec)) is cls


def test_create_material_errors():
    with pytest.raises(SceneError):
        create_material({"albedo": 0.5})
    with pytest.raises(SceneError):
        create_material({"type": "velvet"})