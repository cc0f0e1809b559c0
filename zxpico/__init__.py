"""ZX Spectrum emulator front end: joysticks, keyboard matrix, file loops, keypad scanning, scanline rendering and save files."""

__version__ = "0.2.0"
__all__ = ["joystick", "keyboard", "fileloop", "keyscan", "scanline", "saves"]