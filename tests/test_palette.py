import pytest

from nesemu.graphics.frame import Pixel
from nesemu.graphics.palette import pixel_from_color


def test_known_colors():
    assert pixel_from_color(0x00) == Pixel.from_rgb_bytes(84, 84, 84)
    assert pixel_from_color(0x01) == Pixel.from_rgb_bytes(0, 30, 116)
    assert pixel_from_color(0x3D) == Pixel.from_rgb_bytes(160, 162, 160)


@pytest.mark.parametrize("color", [0x0D, 0x0E, 0x0F, 0x1D, 0x1E, 0x1F, 0x2E, 0x2F, 0x3E, 0x3F])
def test_black_entries(color):
    assert pixel_from_color(color) == Pixel.BLACK


@pytest.mark.parametrize("color", range(0x40))
def test_upper_bits_ignored(color):
    assert pixel_from_color(color | 0x40) == pixel_from_color(color)
    assert pixel_from_color(color | 0xC0) == pixel_from_color(color)


@pytest.mark.parametrize("color", range(0x40))
def test_components_in_unit_range(color):
    pixel = pixel_from_color(color)
    assert 0.0 <= pixel.red <= 1.0
    assert 0.0 <= pixel.green <= 1.0
    assert 0.0 <= pixel.blue <= 1.0


def test_light_whites_match():
    assert pixel_from_color(0x20) == pixel_from_color(0x30)