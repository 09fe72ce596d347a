from nesemu.graphics.pattern_table import PatternTableAddress


def test_pattern_table_selection():
    assert int(PatternTableAddress(0)) == 0
    assert int(PatternTableAddress(1)) == PatternTableAddress.PATTERN_TABLE


def test_tile_number_field():
    addr = PatternTableAddress(0)
    addr.set(PatternTableAddress.TILE_NUMBER, 0xFF)
    assert int(addr) == PatternTableAddress.TILE_NUMBER


def test_fields_do_not_overlap():
    addr = PatternTableAddress(1)
    addr.set(PatternTableAddress.TILE_NUMBER, 0xFF)
    addr.set(PatternTableAddress.BIT_PLANE, 1)
    addr.set(PatternTableAddress.FINE_Y_OFFSET, 7)
    assert int(addr) == (
        PatternTableAddress.PATTERN_TABLE
        | PatternTableAddress.TILE_NUMBER
        | PatternTableAddress.BIT_PLANE
        | PatternTableAddress.FINE_Y_OFFSET
    )


def test_set_overwrites_field():
    addr = PatternTableAddress(0)
    addr.set(PatternTableAddress.FINE_Y_OFFSET, 7)
    addr.set(PatternTableAddress.FINE_Y_OFFSET, 0)
    assert int(addr) & PatternTableAddress.FINE_Y_OFFSET == 0


def test_bit_plane_toggle_keeps_other_fields():
    addr = PatternTableAddress(1)
    addr.set(PatternTableAddress.TILE_NUMBER, 0x42)
    addr.set(PatternTableAddress.BIT_PLANE, 0)
    low = int(addr)
    addr.set(PatternTableAddress.BIT_PLANE, 1)
    assert int(addr) == low | PatternTableAddress.BIT_PLANE


def test_worked_example():
    addr = PatternTableAddress(0)
    addr.set(PatternTableAddress.TILE_NUMBER, 1)
    addr.set(PatternTableAddress.BIT_PLANE, 1)
    assert int(addr) == 0x0018