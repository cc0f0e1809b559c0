"""Rendering of ZX Spectrum screen memory into VGA 332 and RGB 444 scanlines."""

from __future__ import annotations

from typing import List, Sequence

__all__ = [
    "prepare_vga332_scanline",
    "prepare_rgb444_scanline",
    "rgb444_frame",
    "LINE_WORDS",
    "FRAME_LINES",
    "SCREEN_BYTES",
    "ATTR_BYTES",
]

LINE_WORDS = 160
BORDER_WORDS = 16
FRAME_LINES = 240
BORDER_TOP = 24
SCREEN_LINES = 192
SCREEN_BYTES = 6144
ATTR_BYTES = 768
_WORD = 0xFFFFFFFF

# Normal then bright levels for red, green, blue.
_LEVELS = ((0, 0), (1, 1))


def _rgb332(r: int, g: int, b: int) -> int:
    return (r << 5) | (g << 2) | b


def _rgb444(r: int, g: int, b: int) -> int:
    return (r << 8) | (g << 4) | b


def _palette(levels_rgb: tuple, pack, widen) -> tuple:
    """Sixteen colour words in Spectrum order: GRB bits, then bright."""
    words = []
    for bright in (0, 1):
        red_on, green_on, blue_on = levels_rgb[bright]
        for index in range(8):
            r = red_on if index & 2 else 0
            g = green_on if index & 4 else 0
            b = blue_on if index & 1 else 0
            words.append(widen(pack(r, g, b)) & _WORD)
    return tuple(words)


_VGA332_PALETTE = _palette(
    ((5, 5, 2), (7, 7, 3)),
    _rgb332,
    lambda a: a | (a << 8) | (a << 16) | (a << 24),
)
_VGA332_MASKS = (0x00000000, 0xFFFF0000, 0x0000FFFF, 0xFFFFFFFF)

_RGB444_PALETTE = _palette(
    ((0xB, 0xB, 0xB), (0xF, 0xF, 0xF)),
    _rgb444,
    lambda a: (a << 20) | (a << 8),
)
_RGB444_MASKS = (0x00000000, 0x000FFF00, 0xFFF00000, 0xFFFFFF00)


def _check(screen: Sequence[int], attrs: Sequence[int], border_colour: int) -> None:
    if len(screen) < SCREEN_BYTES:
        raise ValueError(f"screen memory must hold {SCREEN_BYTES} bytes")
    if len(attrs) < ATTR_BYTES:
        raise ValueError(f"attribute memory must hold {ATTR_BYTES} bytes")
    if not 0 <= border_colour < 16:
        raise ValueError("border colour must be in 0..15")


def _scanline(
    palette: tuple,
    masks: tuple,
    y: int,
    frame: int,
    screen: Sequence[int],
    attrs: Sequence[int],
    border_colour: int,
) -> List[int]:
    _check(screen, attrs, border_colour)
    border = palette[border_colour]
    if y < BORDER_TOP or y >= BORDER_TOP + SCREEN_LINES:
        return [border] * LINE_WORDS

    line = [border] * BORDER_WORDS
    v = y - BORDER_TOP
    pixel_base = ((v & 0x07) << 8) + ((v & 0x38) << 2) + ((v & 0xC0) << 5)
    attr_base = (v >> 3) << 5
    flash_phase = (frame >> 5) & 1

    for column in range(32):
        attr = attrs[attr_base + column]
        pixels = screen[pixel_base + column]
        if (attr >> 7) & flash_phase:
            pixels ^= 0xFF
        paper_index = (attr >> 3) & 0x0F
        ink_index = (attr & 0x07) | (paper_index & 0x08)
        paper = palette[paper_index]
        ink = palette[ink_index]
        for shift in (6, 4, 2, 0):
            ink_mask = masks[(pixels >> shift) & 3]
            line.append(((ink_mask & ink) | (~ink_mask & paper)) & _WORD)

    line.extend([border] * BORDER_WORDS)
    return line


def prepare_vga332_scanline(
    y: int, frame: int, screen: Sequence[int], attrs: Sequence[int], border_colour: int
) -> List[int]:
    """One 640-pixel line as 160 words of four VGA 332 bytes."""
    return _scanline(_VGA332_PALETTE, _VGA332_MASKS, y, frame, screen, attrs, border_colour)


def prepare_rgb444_scanline(
    y: int, frame: int, screen: Sequence[int], attrs: Sequence[int], border_colour: int
) -> List[int]:
    """One 320-pixel line as 160 words, each holding two RGB 444 pixels."""
    return _scanline(_RGB444_PALETTE, _RGB444_MASKS, y, frame, screen, attrs, border_colour)


def rgb444_frame(
    frame: int, screen: Sequence[int], attrs: Sequence[int], border_colour: int
) -> List[List[int]]:
    """All 240 RGB 444 scanlines of a frame."""
    return [
        prepare_rgb444_scanline(y, frame, screen, attrs, border_colour)
        for y in range(FRAME_LINES)
    ]