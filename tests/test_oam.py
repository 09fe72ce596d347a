import pytest

from nesemu.graphics.oam import Oam, OamSprite


def test_size():
    assert Oam().size() == 64 * 4


def test_read_sprite_byte_order():
    oam = Oam()
    base = 5 * 4
    oam.write(base, 10)
    oam.write(base + 1, 20)
    oam.write(base + 2, 30)
    oam.write(base + 3, 40)
    assert oam.read_sprite(5) == OamSprite(x=40, y=10, tile=20, attributes=30)


def test_read_write_roundtrip():
    oam = Oam()
    oam.write(255, 0xAB)
    assert oam.read(255) == 0xAB


@pytest.mark.parametrize("sprite", [64, 100, -1])
def test_read_sprite_out_of_range(sprite):
    with pytest.raises(ValueError):
        Oam().read_sprite(sprite)


def test_iterates_all_sprites():
    oam = Oam()
    oam.write(63 * 4 + 3, 7)
    sprites = list(oam)
    assert len(sprites) == 64
    assert sprites[63].x == 7


def test_str_has_a_line_per_sprite():
    assert len(str(Oam()).splitlines()) == 64


def test_try_read_out_of_bounds():
    with pytest.raises(IndexError):
        Oam().try_read(0x1000)