"""Joystick emulation: Kempston and Sinclair interfaces fed from HID or key-scan sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence

__all__ = [
    "JoystickMode",
    "Joystick",
    "AxisRange",
    "HidJoystickState",
    "HidJoystick",
    "PicomputerJoystick",
]


class JoystickMode(Enum):
    """Which interface the emulated joystick presents to the Spectrum."""

    KEMPSTON = "kempston"
    SINCLAIR = "sinclair"


class Joystick:
    """A joystick with no input; subclasses supply the readings."""

    def __init__(self) -> None:
        self.mode = JoystickMode.KEMPSTON

    def kempston(self) -> int:
        """Kempston port value, active high (000FUDLR)."""
        return 0

    def sinclair_l(self) -> int:
        """Left Sinclair port value, active low."""
        return 0xFF

    def sinclair_r(self) -> int:
        """Right Sinclair port value, active low."""
        return 0xFF

    def is_connected_l(self) -> bool:
        return False

    def is_connected_r(self) -> bool:
        return False

    def get_kempston(self) -> int:
        """Kempston reading if in Kempston mode, else no buttons."""
        return self.kempston() if self.mode is JoystickMode.KEMPSTON else 0

    def get_sinclair_l(self) -> int:
        """Left Sinclair reading if in Sinclair mode, else nothing pressed."""
        return self.sinclair_l() if self.mode is JoystickMode.SINCLAIR else 0xFF

    def get_sinclair_r(self) -> int:
        """Right Sinclair port; reads the left stick, as the hardware build does."""
        return self.sinclair_l() if self.mode is JoystickMode.SINCLAIR else 0xFF


@dataclass(frozen=True)
class AxisRange:
    """Logical range reported by a HID axis."""

    logical_min: int = 0
    logical_max: int = 255


@dataclass
class HidJoystickState:
    """Snapshot of a simple HID joystick."""

    updated: int = 0
    x1: int = 128
    y1: int = 128
    x2: int = 128
    y2: int = 128
    buttons: int = 0
    axis_x1: AxisRange = field(default_factory=AxisRange)
    axis_y1: AxisRange = field(default_factory=AxisRange)
    axis_x2: AxisRange = field(default_factory=AxisRange)
    axis_y2: AxisRange = field(default_factory=AxisRange)

    def right(self) -> bool:
        return self.x1 == self.axis_x1.logical_max or self.x2 == self.axis_x2.logical_max

    def left(self) -> bool:
        return self.x1 == self.axis_x1.logical_min or self.x2 == self.axis_x2.logical_min

    def down(self) -> bool:
        return self.y1 == self.axis_y1.logical_max or self.y2 == self.axis_y2.logical_max

    def up(self) -> bool:
        return self.y1 == self.axis_y1.logical_min or self.y2 == self.axis_y2.logical_min

    def fire(self) -> bool:
        return bool(self.buttons & 7)


class HidJoystick(Joystick):
    """Maps up to two HID joysticks onto Kempston and Sinclair ports.

    ``source`` is a callable returning the currently connected joysticks.
    """

    def __init__(self, source: Callable[[], Sequence[HidJoystickState]]) -> None:
        super().__init__()
        self._source = source
        self._updated_l: Optional[int] = None
        self._updated_r: Optional[int] = None
        self._kempston = 0
        self._sinclair_l = 0xFF
        self._sinclair_r = 0xFF

    def _joysticks(self) -> list:
        return list(self._source())[:2]

    def is_connected_l(self) -> bool:
        return len(self._joysticks()) > 0

    def is_connected_r(self) -> bool:
        return len(self._joysticks()) > 1

    def decode(self) -> None:
        """Refresh the port values from any joystick whose state has changed."""
        sticks = self._joysticks()
        if sticks and sticks[0].updated != self._updated_l:
            stick = sticks[0]
            kempston = 0
            sinclair = 0xFF
            if stick.right():
                kempston |= 1 << 0
                sinclair &= ~(1 << 1)
            if stick.left():
                kempston |= 1 << 1
                sinclair &= ~(1 << 0)
            if stick.down():
                kempston |= 1 << 2
                sinclair &= ~(1 << 2)
            if stick.up():
                kempston |= 1 << 3
                sinclair &= ~(1 << 3)
            if stick.fire():
                kempston |= 1 << 4
                sinclair &= ~(1 << 4)
            self._kempston = kempston
            self._sinclair_l = sinclair & 0xFF
            self._updated_l = stick.updated
        if len(sticks) > 1 and sticks[1].updated != self._updated_r:
            stick = sticks[1]
            sinclair = 0xFF
            if stick.right():
                sinclair &= ~(1 << 3)
            if stick.left():
                sinclair &= ~(1 << 4)
            if stick.down():
                sinclair &= ~(1 << 2)
            if stick.up():
                sinclair &= ~(1 << 1)
            if stick.fire():
                sinclair &= ~(1 << 0)
            self._sinclair_r = sinclair & 0xFF
            self._updated_r = stick.updated

    def kempston(self) -> int:
        self.decode()
        return self._kempston

    def sinclair_l(self) -> int:
        self.decode()
        return self._sinclair_l

    def sinclair_r(self) -> int:
        self.decode()
        return self._sinclair_r


class PicomputerJoystick(Joystick):
    """Kempston joystick driven by the built-in keyboard matrix."""

    def __init__(self, kempston_source: Callable[[], int]) -> None:
        super().__init__()
        self._kempston_source = kempston_source
        self.enabled = True

    def kempston(self) -> int:
        return self._kempston_source() if self.enabled else 0

    def sinclair_l(self) -> int:
        return 0xFF

    def sinclair_r(self) -> int:
        return 0xFF

    def is_connected_l(self) -> bool:
        return True

    def is_connected_r(self) -> bool:
        return False