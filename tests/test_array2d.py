import pytest

from raydarts.array2d import (
    Array2d,
    Image,
    generate_graymap,
    generate_heatmap,
    upsample,
)
from raydarts.colormap import inferno


def _ramp(width, height):
    arr = Array2d(width, height)
    for y in range(height):
        for x in range(width):
            arr[x, y] = float(10 * y + x)
    return arr


def test_construction_fills_value():
    arr = Array2d(3, 2, 7.0)
    assert len(arr) == 6
    assert arr.size == (3, 2)
    assert list(arr) == [7.0] * 6


def test_default_is_empty():
    arr = Array2d()
    assert len(arr) == 0
    assert list(arr) == []


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        Array2d(-1, 2)


def test_index_round_trip():
    arr = Array2d(4, 3)
    for i in range(len(arr)):
        x, y = arr.index_2d(i)
        assert arr.index_1d(x, y) == i
        assert 0 <= x < 4 and 0 <= y < 3


def test_item_access_2d_and_linear_agree():
    arr = _ramp(4, 3)
    assert arr[2, 1] == 12.0
    assert arr[arr.index_1d(2, 1)] == 12.0
    arr[5] = -1.0
    assert arr[1, 1] == -1.0


def test_at_checks_bounds():
    arr = _ramp(2, 2)
    assert arr.at(1, 1) == 11.0
    assert arr.at(3) == 11.0
    with pytest.raises(IndexError):
        arr.at(4)
    with pytest.raises(IndexError):
        arr.at(0, 2)
    with pytest.raises(IndexError):
        arr.at(-1)
    with pytest.raises(TypeError):
        arr.at(0, 0, 0)


def test_row_is_copy_of_row():
    arr = _ramp(3, 2)
    row = arr.row(1)
    assert row == [10.0, 11.0, 12.0]
    row[0] = 99.0
    assert arr[0, 1] == 10.0


def test_resize_same_size_keeps_data():
    arr = _ramp(2, 2)
    arr.resize(2, 2)
    assert list(arr) == [0.0, 1.0, 10.0, 11.0]


def test_resize_grows_and_pads():
    arr = Array2d(2, 1, 5.0)
    arr.resize(3, 2)
    assert arr.size == (3, 2)
    assert len(list(arr)) == 6
    assert list(arr) == [5.0] * 6


def test_resize_shrinks():
    arr = _ramp(3, 3)
    arr.resize(2, 1)
    assert len(arr) == 2
    assert list(arr) == [0.0, 1.0]


def test_reset():
    arr = _ramp(3, 3)
    arr.reset(2.5)
    assert set(arr) == {2.5}
    arr.reset()
    assert set(arr) == {0.0}


def test_image_default_is_black():
    img = Image(2, 2)
    assert list(img) == [(0.0, 0.0, 0.0)] * 4


def test_image_formats():
    assert "png" in Image.loadable_formats()
    assert "exr" in Image.loadable_formats()
    assert Image.savable_formats() == {"bmp", "exr", "hdr", "jpg", "png", "tga"}


def test_upsample_replicates_pixels():
    src = _ramp(2, 3)
    up = upsample(src, 3)
    assert up.size == (6, 9)
    for y in range(up.height):
        for x in range(up.width):
            assert up[x, y] == src[x // 3, y // 3]


def test_upsample_factor_one_is_copy():
    src = _ramp(3, 2)
    up = upsample(src, 1)
    assert list(up) == list(src)


def test_heatmap_uses_inferno():
    density = _ramp(3, 2)
    heat = generate_heatmap(density, 0.01)
    assert isinstance(heat, Image)
    assert heat.size == density.size
    assert heat[2, 1] == pytest.approx(inferno(density[2, 1] * 0.01))


def test_graymap_scales_values():
    density = _ramp(2, 2)
    gray = generate_graymap(density, 2.0)
    assert gray.size == (2, 2)
    for y in range(2):
        for x in range(2):
            v = density[x, y]
            assert gray[x, y] == (v * 2.0, v * 2.0, v * 2.0)


def test_graymap_default_scale():
    density = _ramp(2, 1)
    gray = generate_graymap(density)
    assert gray[1, 0] == (1.0, 1.0, 1.0)