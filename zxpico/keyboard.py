"""ZX Spectrum keyboard matrix and its mapping from USB HID boot reports."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import Optional, Sequence

from .joystick import Joystick

__all__ = [
    "HidKey",
    "Modifier",
    "KeyboardReport",
    "SpectrumModel",
    "find_key",
    "Keyboard",
    "HidKeyboard",
]

KEY_A = 0x04
KEY_1 = 0x1E
KEY_0 = 0x27
KEY_ENTER = 0x28
KEY_ESCAPE = 0x29
KEY_BACKSPACE = 0x2A
KEY_SPACE = 0x2C
KEY_F1 = 0x3A
KEY_ARROW_RIGHT = 0x4F
KEY_ARROW_LEFT = 0x50
KEY_ARROW_DOWN = 0x51
KEY_ARROW_UP = 0x52
KEY_SHIFT_LEFT = 0xE1
KEY_SHIFT_RIGHT = 0xE5
KEY_ALT_RIGHT = 0xE6

REPORT_KEYS = 6
_ROLLOVER = 1


def _letter(c: str) -> int:
    return KEY_A + ord(c) - ord("A")


def _digit(d: str) -> int:
    return KEY_0 if d == "0" else KEY_1 + int(d) - 1


class Modifier(IntFlag):
    """HID boot keyboard modifier bits."""

    LEFT_CTRL = 0x01
    LEFT_SHIFT = 0x02
    LEFT_ALT = 0x04
    LEFT_GUI = 0x08
    RIGHT_CTRL = 0x10
    RIGHT_SHIFT = 0x20
    RIGHT_ALT = 0x40
    RIGHT_GUI = 0x80


class SpectrumModel(Enum):
    ZX48K = "48k"
    ZX128K = "128k"


@dataclass(frozen=True)
class HidKey:
    """A HID keycode and the Spectrum matrix contacts (line, key) it closes."""

    keycode: int
    contacts: tuple


@dataclass(frozen=True)
class KeyboardReport:
    """A HID boot keyboard report: modifier byte and up to six keycodes."""

    modifier: int = 0
    keycodes: tuple = (0,) * REPORT_KEYS

    def __post_init__(self) -> None:
        codes = tuple(self.keycodes)
        if len(codes) > REPORT_KEYS:
            raise ValueError(f"a report holds at most {REPORT_KEYS} keycodes")
        object.__setattr__(self, "keycodes", codes + (0,) * (REPORT_KEYS - len(codes)))


def _row(line: int, keycodes: Sequence[int]) -> list:
    return [HidKey(code, ((line, key),)) for key, code in enumerate(keycodes)]


_KEYS = [
    HidKey(KEY_SHIFT_LEFT, ((0, 0),)),
    *_row(0, [KEY_SHIFT_RIGHT] + [_letter(c) for c in "ZXCV"]),
    *_row(1, [_letter(c) for c in "ASDFG"]),
    *_row(2, [_letter(c) for c in "QWERT"]),
    *_row(3, [_digit(d) for d in "12345"]),
    *_row(4, [_digit(d) for d in "09876"]),
    *_row(5, [_letter(c) for c in "POIUY"]),
    *_row(6, [KEY_ENTER] + [_letter(c) for c in "LKJH"]),
    *_row(7, [KEY_SPACE, KEY_ALT_RIGHT] + [_letter(c) for c in "MNB"]),
    HidKey(KEY_BACKSPACE, ((0, 0), (4, 0))),
    HidKey(KEY_ARROW_LEFT, ((0, 0), (3, 4))),
    HidKey(KEY_ARROW_DOWN, ((0, 0), (4, 4))),
    HidKey(KEY_ARROW_UP, ((0, 0), (4, 3))),
    HidKey(KEY_ARROW_RIGHT, ((0, 0), (4, 2))),
]

_KEY_MAP = {key.keycode: key for key in _KEYS}


def find_key(keycode: int) -> Optional[HidKey]:
    """Return the mapping for a HID keycode, or None if it has none."""
    if keycode <= 1:
        return None
    return _KEY_MAP.get(keycode)


class Keyboard:
    """The Spectrum's 8 x 5 key matrix, with optional Sinclair joystick overlay."""

    LINES = 8

    def __init__(self, joystick: Optional[Joystick] = None) -> None:
        self._joystick = joystick
        self._lines = [0x1F] * self.LINES
        self.reset()

    def reset(self) -> None:
        """Release every key."""
        self._lines = [0x1F] * self.LINES

    def press(self, line: int, key: int) -> None:
        self._lines[line] &= ~(1 << key) & 0xFF

    def release(self, line: int, key: int) -> None:
        self._lines[line] |= 1 << key

    def read(self, address: int) -> int:
        """Value read from port ``address``; high byte selects the lines."""
        selector = address >> 8
        value = 0xFF
        if self._joystick is not None:
            if address == 0xF7FE:
                value = self._joystick.get_sinclair_l()
            if address == 0xEFFE:
                value = self._joystick.get_sinclair_r()
        for i, bits in enumerate(self._lines):
            if ~selector & (1 << i):
                value &= bits
        return value & 0xFF

    def is_mounted(self) -> bool:
        return False


class HidKeyboard(Keyboard):
    """A USB keyboard driving the matrix, function keys and quick saves."""

    def __init__(self, quick_save, joystick=None, snap_list=None, tape_list=None) -> None:
        super().__init__(joystick)
        self._quick_save = quick_save
        self._snap_list = snap_list
        self._tape_list = tape_list
        self.spectrum = None
        self.kiosk = False
        self._mounted = 0

    def mount(self) -> None:
        self._mounted += 1

    def unmount(self) -> None:
        self._mounted -= 1

    def is_mounted(self) -> bool:
        return self._mounted > 0

    def process_hid_report(self, report: KeyboardReport, prev_report: Optional[KeyboardReport]) -> bool:
        """Apply a report to the matrix and act on function keys.

        Returns True when the menu should be toggled.
        """
        toggle_menu = False
        self.reset()
        if report.keycodes[0] == _ROLLOVER:
            return toggle_menu
        modifier = report.modifier
        if modifier & (Modifier.LEFT_SHIFT | Modifier.RIGHT_SHIFT):
            self.press(0, 0)
        if modifier & Modifier.RIGHT_ALT:
            self.press(7, 1)

        previous = set(prev_report.keycodes) if prev_report is not None else set()
        pressed_fkeys: list = []
        for code in report.keycodes:
            fk = code - KEY_F1
            if 0 <= fk < 12 and code not in previous:
                pressed_fkeys.append(fk)
            key = find_key(code)
            if key is not None:
                for line, bit in key.contacts:
                    self.press(line, bit)
        pressed = set(pressed_fkeys)

        if modifier & Modifier.LEFT_CTRL and not self.kiosk:
            for slot in sorted(pressed):
                if self._quick_save is not None:
                    self._quick_save.save(self.spectrum, slot)
        elif modifier & Modifier.LEFT_ALT:
            for slot in sorted(pressed):
                if self._quick_save is not None:
                    self._quick_save.load(self.spectrum, slot)
        else:
            if 0 in pressed and not self.kiosk:
                toggle_menu = True
            if 2 in pressed:
                self.spectrum.toggle_mute()
            if 10 in pressed:
                self.spectrum.reset(SpectrumModel.ZX48K)
            if 11 in pressed:
                self.spectrum.reset(SpectrumModel.ZX128K)
            if 3 in pressed:
                self.spectrum.toggle_moderate()
            if self._snap_list is not None:
                if 7 in pressed:
                    self._snap_list.curr(self.spectrum)
                if 8 in pressed:
                    self._snap_list.prev(self.spectrum)
                if 9 in pressed:
                    self._snap_list.next(self.spectrum)
            if self._tape_list is not None:
                if 4 in pressed:
                    self._tape_list.curr(self.spectrum)
                if 5 in pressed:
                    self._tape_list.prev(self.spectrum)
                if 6 in pressed:
                    self._tape_list.next(self.spectrum)
        return toggle_menu