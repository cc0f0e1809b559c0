"""Circular lists of snapshot and tape files, and the kiosk-mode marker."""

from __future__ import annotations

import os
from typing import BinaryIO, Optional

__all__ = [
    "file_extension",
    "FileLoop",
    "DirectoryFileLoop",
    "Kiosk",
    "DirectoryKiosk",
]


def file_extension(filename: str) -> str:
    """Text after the last dot, or "" if there is none or it leads the name."""
    dot = filename.rfind(".")
    if dot <= 0:
        return ""
    return filename[dot + 1:]


class FileLoop:
    """A ring of file names with a current position."""

    def __init__(self) -> None:
        self._names: list = []
        self._index: Optional[int] = None

    @property
    def current(self) -> Optional[str]:
        """Name at the current position, or None if the ring is empty."""
        return None if self._index is None else self._names[self._index]

    def add(self, name: str) -> None:
        """Insert a name after the current one and make it current."""
        position = 0 if self._index is None else self._index + 1
        self._names.insert(position, name)
        self._index = position

    def names(self) -> list:
        """All names in ring order."""
        return list(self._names)

    def next(self, spectrum) -> None:
        if self._index is not None:
            self._index = (self._index + 1) % len(self._names)
            self.load(spectrum)

    def prev(self, spectrum) -> None:
        if self._index is not None:
            self._index = (self._index - 1) % len(self._names)
            self.load(spectrum)

    def curr(self, spectrum) -> None:
        if self._index is not None:
            self.load(spectrum)

    def load(self, spectrum) -> None:
        """Load the current file into the machine; nothing by default."""


class DirectoryFileLoop(FileLoop):
    """A ring of the files in a folder; .z80 snapshots and .tap tapes load."""

    def __init__(self, folder) -> None:
        super().__init__()
        self._folder = os.fspath(folder)
        self._stream: Optional[BinaryIO] = None

    def reload(self) -> None:
        """Add every entry in the folder to the ring."""
        try:
            entries = sorted(os.listdir(self._folder))
        except OSError:
            return
        for name in entries:
            self.add(name)

    def load(self, spectrum) -> None:
        name = self.current
        if name is None:
            return
        if self._stream is not None:
            spectrum.load_tap(None)
            self._close_stream()
        path = os.path.join(self._folder, name)
        ext = file_extension(name)
        if ext == "z80":
            with open(path, "rb") as stream:
                spectrum.load_z80(stream)
        elif ext == "tap":
            self._stream = open(path, "rb")
            spectrum.load_tap(self._stream)

    def _close_stream(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def close(self) -> None:
        """Close any tape left open."""
        self._close_stream()

    def __enter__(self) -> "DirectoryFileLoop":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class Kiosk:
    """Kiosk mode switch; off unless a subclass says otherwise."""

    def is_kiosk(self) -> bool:
        return False


class DirectoryKiosk(Kiosk):
    """Kiosk mode is on when ``kiosk.txt`` exists in the folder."""

    def __init__(self, folder) -> None:
        self._folder = os.fspath(folder)

    def is_kiosk(self) -> bool:
        return os.path.exists(os.path.join(self._folder, "kiosk.txt"))