import pytest

from zxpico.scanline import (
    ATTR_BYTES,
    FRAME_LINES,
    LINE_WORDS,
    SCREEN_BYTES,
    prepare_rgb444_scanline,
    prepare_vga332_scanline,
    rgb444_frame,
)


def memory(pixel=0, attr=0):
    return bytearray([pixel] * SCREEN_BYTES), bytearray([attr] * ATTR_BYTES)


def vga_border(colour):
    screen, attrs = memory()
    return prepare_vga332_scanline(0, 0, screen, attrs, colour)[0]


def rgb_border(colour):
    screen, attrs = memory()
    return prepare_rgb444_scanline(0, 0, screen, attrs, colour)[0]


def test_vga_black_border_is_zero():
    screen, attrs = memory()
    assert prepare_vga332_scanline(0, 0, screen, attrs, 0) == [0] * LINE_WORDS


def test_vga_bright_white_is_all_ones():
    assert vga_border(15) == 0xFFFFFFFF


def test_rgb444_bright_white():
    assert rgb_border(15) == 0xFFFFFF00


@pytest.mark.parametrize("y", [0, 23, 216, 239])
def test_border_lines_are_uniform(y):
    screen, attrs = memory(0xFF, 0x3A)
    vga = prepare_vga332_scanline(y, 0, screen, attrs, 2)
    rgb = prepare_rgb444_scanline(y, 0, screen, attrs, 2)
    assert vga == [vga_border(2)] * LINE_WORDS
    assert rgb == [rgb_border(2)] * LINE_WORDS


def test_screen_line_has_side_borders():
    screen, attrs = memory(0, 0x38)
    vga = prepare_vga332_scanline(100, 0, screen, attrs, 1)
    rgb = prepare_rgb444_scanline(100, 0, screen, attrs, 1)
    assert len(vga) == LINE_WORDS
    assert len(rgb) == LINE_WORDS
    assert vga[:16] == [vga_border(1)] * 16
    assert vga[-16:] == [vga_border(1)] * 16
    assert rgb[:16] == [rgb_border(1)] * 16
    assert rgb[-16:] == [rgb_border(1)] * 16


def test_paper_and_ink_colours():
    attr = (5 << 3) | 2  # paper cyan, ink red
    blank = memory(0, attr)
    full = memory(0xFF, attr)
    assert set(prepare_vga332_scanline(30, 0, *blank, 0)[16:-16]) == {vga_border(5)}
    assert set(prepare_vga332_scanline(30, 0, *full, 0)[16:-16]) == {vga_border(2)}
    assert set(prepare_rgb444_scanline(30, 0, *blank, 0)[16:-16]) == {rgb_border(5)}
    assert set(prepare_rgb444_scanline(30, 0, *full, 0)[16:-16]) == {rgb_border(2)}


def test_bright_applies_to_ink():
    attr = 0x40 | (0 << 3) | 4  # bright, paper black, ink green
    screen, attrs = memory(0xFF, attr)
    assert set(prepare_vga332_scanline(30, 0, screen, attrs, 0)[16:-16]) == {vga_border(12)}
    assert set(prepare_rgb444_scanline(30, 0, screen, attrs, 0)[16:-16]) == {rgb_border(12)}


def test_flash_inverts_on_alternate_phase():
    attr = 0x80 | (1 << 3) | 6
    blank, attrs = memory(0, attr)
    full, _ = memory(0xFF, attr)
    assert prepare_vga332_scanline(50, 32, blank, attrs, 0) == prepare_vga332_scanline(
        50, 0, full, attrs, 0
    )
    assert prepare_vga332_scanline(50, 0, blank, attrs, 0) == prepare_vga332_scanline(
        50, 32, full, attrs, 0
    )
    assert prepare_rgb444_scanline(50, 32, blank, attrs, 0) == prepare_rgb444_scanline(
        50, 0, full, attrs, 0
    )
    assert prepare_rgb444_scanline(50, 0, blank, attrs, 0) == prepare_rgb444_scanline(
        50, 32, full, attrs, 0
    )


def test_no_flash_without_attribute_bit():
    screen, attrs = memory(0x0F, (1 << 3) | 6)
    assert prepare_vga332_scanline(50, 32, screen, attrs, 0) == prepare_vga332_scanline(
        50, 0, screen, attrs, 0
    )
    assert prepare_rgb444_scanline(50, 32, screen, attrs, 0) == prepare_rgb444_scanline(
        50, 0, screen, attrs, 0
    )


def test_rgb444_pixel_pair_halves():
    attr = (1 << 3) | 7
    screen, attrs = memory(0x40, attr)
    word = prepare_rgb444_scanline(24, 0, screen, attrs, 0)[16]
    ink = rgb_border(7)
    paper = rgb_border(1)
    assert word & 0x000FFF00 == ink & 0x000FFF00
    assert word & 0xFFF00000 == paper & 0xFFF00000


@pytest.mark.parametrize("v, offset", [(0, 0), (1, 256), (8, 32), (64, 2048), (191, 6144 - 32)])
def test_screen_address_layout(v, offset):
    screen, attrs = memory(0, 0x07)
    screen[offset] = 0xFF
    vga = prepare_vga332_scanline(24 + v, 0, screen, attrs, 0)
    rgb = prepare_rgb444_scanline(24 + v, 0, screen, attrs, 0)
    assert vga[16:20] == [vga_border(7)] * 4
    assert set(vga[20:-16]) == {vga_border(0)}
    assert rgb[16:20] == [rgb_border(7)] * 4
    assert set(rgb[20:-16]) == {rgb_border(0)}


def test_attribute_row_follows_character_row():
    screen, attrs = memory(0xFF, 0)
    attrs[32] = 0x03
    assert prepare_vga332_scanline(24 + 8, 0, screen, attrs, 0)[16] == vga_border(3)
    assert prepare_vga332_scanline(24 + 7, 0, screen, attrs, 0)[16] == vga_border(0)
    assert prepare_rgb444_scanline(24 + 8, 0, screen, attrs, 0)[16] == rgb_border(3)
    assert prepare_rgb444_scanline(24 + 7, 0, screen, attrs, 0)[16] == rgb_border(0)


def test_rgb444_frame_matches_scanlines():
    screen, attrs = memory(0x55, (2 << 3) | 5)
    frame = rgb444_frame(0, screen, attrs, 4)
    assert len(frame) == FRAME_LINES
    for y in (0, 24, 120, 215, 239):
        assert frame[y] == prepare_rgb444_scanline(y, 0, screen, attrs, 4)


def test_vga_short_screen_rejected():
    with pytest.raises(ValueError):
        prepare_vga332_scanline(30, 0, bytearray(100), bytearray(ATTR_BYTES), 0)


def test_rgb444_short_screen_rejected():
    with pytest.raises(ValueError):
        prepare_rgb444_scanline(30, 0, bytearray(100), bytearray(ATTR_BYTES), 0)


def test_vga_short_attributes_rejected():
    with pytest.raises(ValueError):
        prepare_vga332_scanline(30, 0, bytearray(SCREEN_BYTES), bytearray(10), 0)


def test_rgb444_short_attributes_rejected():
    with pytest.raises(ValueError):
        prepare_rgb444_scanline(30, 0, bytearray(SCREEN_BYTES), bytearray(10), 0)


@pytest.mark.parametrize("colour", [-1, 16])
def test_vga_bad_border_rejected(colour):
    screen, attrs = memory()
    with pytest.raises(ValueError):
        prepare_vga332_scanline(0, 0, screen, attrs, colour)


@pytest.mark.parametrize("colour", [-1, 16])
def test_rgb444_bad_border_rejected(colour):
    screen, attrs = memory()
    with pytest.raises(ValueError):
        prepare_rgb444_scanline(0, 0, screen, attrs, colour)