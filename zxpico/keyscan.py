"""Scanning of the built-in 6 x 6 key matrix into HID boot keyboard reports."""

from __future__ import annotations

from functools import reduce
from operator import and_, or_
from typing import Tuple

from .keyboard import (
    KEY_0,
    KEY_1,
    KEY_A,
    KEY_ALT_RIGHT,
    KEY_ARROW_DOWN,
    KEY_ARROW_LEFT,
    KEY_ARROW_RIGHT,
    KEY_ARROW_UP,
    KEY_BACKSPACE,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_F1,
    KEY_SPACE,
    REPORT_KEYS,
    KeyboardReport,
    Modifier,
)

__all__ = ["KeyScanner", "SAMPLES", "ROWS"]

SAMPLES = 4
ROWS = 6
_COLUMN_MASK = 0x3F
_ROLLOVER = 1

_KEY_MINUS = 0x2D
_KEY_EQUAL = 0x2E
_KEY_BRACKET_LEFT = 0x2F
_KEY_BRACKET_RIGHT = 0x30
_KEY_BACKSLASH = 0x31
_KEY_SEMICOLON = 0x33
_KEY_APOSTROPHE = 0x34
_KEY_GRAVE = 0x35
_KEY_COMMA = 0x36
_KEY_PERIOD = 0x37
_KEY_SLASH = 0x38

# (row, bit) of the keys with special meaning.
_ALT = (5, 0x20)
_ESC = (4, 0x20)
_UP = (2, 0x20)
_DOWN = (0, 0x20)
_LEFT = (1, 0x20)
_RIGHT = (3, 0x20)
_CURSOR_MODE_BIT = 1 << 3
_JOYSTICK_MODE_BIT = 1 << 4

_ALT_LAYOUT = 4


def _letters(text: str) -> list:
    return [KEY_A + ord(c) - ord("A") for c in text]


def _digits(text: str) -> list:
    return [KEY_0 if d == "0" else KEY_1 + int(d) - 1 for d in text]


def _fkey(n: int) -> int:
    return KEY_F1 + n - 1


def _alpha_rows(arrows: bool) -> tuple:
    def extra(code: int) -> int:
        return code if arrows else 0

    return (
        tuple([KEY_SPACE, KEY_ALT_RIGHT, *_letters("MNB"), extra(KEY_ARROW_DOWN)]),
        tuple([KEY_ENTER, *_letters("LKJH"), extra(KEY_ARROW_LEFT)]),
        tuple([*_letters("POIUY"), extra(KEY_ARROW_UP)]),
        tuple([KEY_BACKSPACE, *_letters("ZXCV"), extra(KEY_ARROW_RIGHT)]),
        tuple([*_letters("ASDFG"), KEY_ESCAPE]),
        tuple([*_letters("QWERT"), 0]),
    )


def _numeric_rows(arrows: bool) -> tuple:
    def extra(code: int) -> int:
        return code if arrows else 0

    return (
        (KEY_SPACE, KEY_ALT_RIGHT, _KEY_SEMICOLON, _KEY_MINUS, _KEY_EQUAL, extra(KEY_ARROW_DOWN)),
        (KEY_ENTER, _KEY_BRACKET_RIGHT, _KEY_BRACKET_LEFT, _KEY_GRAVE, _KEY_BACKSLASH, extra(KEY_ARROW_LEFT)),
        tuple([*_digits("09876"), extra(KEY_ARROW_UP)]),
        (KEY_BACKSPACE, _KEY_COMMA, _KEY_PERIOD, _KEY_SLASH, _KEY_APOSTROPHE, extra(KEY_ARROW_RIGHT)),
        tuple([*_letters("ASDFG"), KEY_ESCAPE]),
        tuple([*_digits("12345"), 0]),
    )


_ALT_ROWS = (
    (0, 0, 0, _fkey(12), _fkey(11), 0),
    (_fkey(10), _fkey(9), _fkey(8), _fkey(7), _fkey(6), 0),
    (_fkey(5), _fkey(4), _fkey(3), _fkey(2), _fkey(1), 0),
    (0, 0, 0, 0, 0, 0),
    (_fkey(8), _fkey(9), _fkey(10), 0, 0, 0),
    (_fkey(1), _fkey(2), _fkey(3), _fkey(4), 0, 0),
)

# Layouts: alpha + cursor keys, alpha (Kempston), numeric (Kempston
# arrows off), numeric + arrows, and the Alt layer.
_LAYOUTS = (
    _alpha_rows(arrows=True),
    _alpha_rows(arrows=False),
    _numeric_rows(arrows=False),
    _numeric_rows(arrows=True),
    _ALT_ROWS,
)


class KeyScanner:
    """Debounces a row-by-row scan of the key matrix and builds HID reports.

    Rows are scanned in turn; each call to :meth:`scan_row` supplies the
    active-high column bits read while :attr:`current_row` was driven.
    """

    def __init__(self) -> None:
        self._samples = [[0] * SAMPLES for _ in range(ROWS)]
        self._debounced = [0] * ROWS
        self._row = 0
        self._sample = 0
        self._layout = 0
        self._joystick = 0
        self._modifier = 0
        self._previous = KeyboardReport()

    @property
    def current_row(self) -> int:
        """The row whose columns the next :meth:`scan_row` call reports."""
        return self._row

    @property
    def debounced(self) -> Tuple[int, ...]:
        """The debounced column bits of every row."""
        return tuple(self._debounced)

    @property
    def kempston_mode(self) -> bool:
        """True when the arrow keys act as a Kempston joystick."""
        return bool(self._joystick)

    @property
    def numeric(self) -> bool:
        """True when the numeric layout is selected."""
        return self._layout >= 2

    def scan_row(self, columns: int) -> None:
        """Record the columns of the current row, then move to the next row."""
        self._samples[self._row][self._sample] = columns & _COLUMN_MASK
        self._row += 1
        if self._row >= ROWS:
            self._row = 0
            self._sample = (self._sample + 1) % SAMPLES
        samples = self._samples[self._row]
        any_on = reduce(or_, samples, 0)
        all_on = reduce(and_, samples, _COLUMN_MASK)
        # A key changes state only when every sample agrees.
        self._debounced[self._row] = (all_on | self._debounced[self._row]) & any_on

    def _held(self, key: tuple) -> bool:
        row, bit = key
        return bool(self._debounced[row] & bit)

    def _clear(self, key: tuple) -> None:
        row, bit = key
        self._debounced[row] &= ~bit

    def kempston(self) -> int:
        """Kempston port value from the arrow keys and Escape (fire)."""
        if not self._joystick:
            return 0
        rdb = self._debounced
        return (
            ((rdb[_ESC[0]] & _ESC[1]) >> 1)
            | ((rdb[_UP[0]] & _UP[1]) >> 2)
            | ((rdb[_DOWN[0]] & _DOWN[1]) >> 3)
            | ((rdb[_LEFT[0]] & _LEFT[1]) >> 4)
            | ((rdb[_RIGHT[0]] & _RIGHT[1]) >> 5)
        )

    def _apply_alt_commands(self) -> None:
        if self._held(_UP):
            self._modifier |= Modifier.LEFT_SHIFT
        elif self._held(_DOWN):
            self._modifier &= ~Modifier.LEFT_SHIFT
        if self._held(_RIGHT):
            self._layout = 2 + self._joystick
        elif self._held(_LEFT):
            self._layout = self._joystick
        if self._debounced[3] & _CURSOR_MODE_BIT:
            self._joystick = 0
            self._layout &= ~1
        elif self._debounced[3] & _JOYSTICK_MODE_BIT:
            self._joystick = 1
            self._layout |= 1
        for key in (_UP, _DOWN, _RIGHT, _LEFT):
            self._clear(key)
        self._debounced[3] &= ~(_CURSOR_MODE_BIT | _JOYSTICK_MODE_BIT)

    def hid_reports(self) -> Tuple[KeyboardReport, KeyboardReport]:
        """Build a report from the held keys; return it with the previous one."""
        alt_down = self._held(_ALT)
        if alt_down:
            self._apply_alt_commands()

        rdb = self._debounced
        modifier = int(self._modifier)
        if alt_down and (rdb[0] | rdb[1] | rdb[2]) & 31:
            modifier |= Modifier.LEFT_CTRL

        table = _LAYOUTS[_ALT_LAYOUT if alt_down else self._layout]
        codes: list = []
        overflow = False
        for row, bits in enumerate(rdb):
            for col in range(ROWS):
                if not bits >> col & 1:
                    continue
                if len(codes) >= REPORT_KEYS:
                    overflow = True
                    break
                code = table[row][col]
                if code:
                    codes.append(code)
        if overflow:
            codes = [_ROLLOVER] * REPORT_KEYS

        current = KeyboardReport(modifier=int(modifier), keycodes=tuple(codes))
        previous = self._previous
        self._previous = current
        return current, previous