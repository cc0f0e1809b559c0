"""Snapshot, tape and quick-save files kept on the card's file system."""

from __future__ import annotations

import os
import string
from pathlib import Path
from typing import Iterable, List, Union

__all__ = [
    "SNAPS_DIR",
    "QUICK_DIR",
    "TAPES_DIR",
    "sort_names",
    "SaveStore",
]

SNAPS_DIR = "/zxspectrum/snapshots"
QUICK_DIR = "/zxspectrum/quicksaves"
TAPES_DIR = "/zxspectrum/tapes"

_SNAP_SUFFIXES = (".z80", ".Z80")
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _fold(name: str) -> str:
    return name.translate(_ASCII_LOWER)


def sort_names(names: Iterable[str]) -> List[str]:
    """Sort names ignoring ASCII case; a name sorts before any longer name it prefixes."""
    return sorted(names, key=_fold)


class SaveStore:
    """File operations on a card whose root directory is ``root``.

    Paths given to and returned by the store are card paths such as
    ``/zxspectrum/snapshots/game.z80``; they are resolved below ``root``.
    """

    def __init__(self, root: Union[str, os.PathLike]) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, path: str) -> Path:
        return self._root / path.lstrip("/")

    def snap_path(self, name: str) -> str:
        """Card path of the snapshot ``name``, adding ``.z80`` if it lacks one."""
        path = f"{SNAPS_DIR}/{name}"
        if len(name) < 4 or not name.endswith(_SNAP_SUFFIXES):
            path += ".z80"
        return path

    def exists(self, path: str) -> bool:
        """True if a file or folder exists at the card path."""
        return self._resolve(path).exists()

    def delete(self, folder: str, name: str) -> bool:
        """Remove ``name`` from ``folder``; True if it was removed."""
        try:
            self._resolve(f"{folder}/{name}").unlink()
        except OSError:
            return False
        return True

    def rename(self, old: str, new: str) -> bool:
        """Rename a file; fails, returning False, if ``new`` already exists."""
        source = self._resolve(old)
        target = self._resolve(new)
        if target.exists() or not source.exists():
            return False
        try:
            source.rename(target)
        except OSError:
            return False
        return True

    def list_alphabetical(self, folder: str) -> List[str]:
        """Names of the entries in ``folder`` in case-insensitive order."""
        try:
            entries = os.listdir(self._resolve(folder))
        except OSError:
            return []
        return sort_names(entries)