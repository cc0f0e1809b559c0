import pytest

from zxpico.fileloop import (
    DirectoryFileLoop,
    DirectoryKiosk,
    FileLoop,
    Kiosk,
    file_extension,
)


@pytest.mark.parametrize(
    "name,ext",
    [("game.z80", "z80"), ("a.b.tap", "tap"), (".hidden", ""), ("noext", "")],
)
def test_file_extension(name, ext):
    assert file_extension(name) == ext


class _Spectrum:
    def __init__(self):
        self.calls = []

    def load_z80(self, stream):
        self.calls.append(("z80", stream.read()))

    def load_tap(self, stream):
        self.calls.append(("tap", None if stream is None else stream.read()))


def _ring(*names):
    loop = FileLoop()
    for name in names:
        loop.add(name)
    return loop


def test_empty_loop_does_nothing():
    loop = FileLoop()
    loop.next(None)
    loop.prev(None)
    loop.curr(None)
    assert loop.current is None
    assert loop.names() == []


def test_add_makes_current_and_keeps_ring_order():
    loop = _ring("a", "b", "c")
    assert loop.current == "c"
    assert loop.names() == ["a", "b", "c"]


def test_next_and_prev_wrap():
    loop = _ring("a", "b", "c")
    loop.next(None)
    assert loop.current == "a"
    loop.prev(None)
    assert loop.current == "c"
    loop.prev(None)
    assert loop.current == "b"


def test_add_inserts_after_current():
    loop = _ring("a", "b", "c")
    loop.next(None)
    loop.add("d")
    assert loop.names() == ["a", "d", "b", "c"]
    loop.curr(None)
    assert loop.current == "d"


def test_single_entry_ring_loops_on_itself():
    loop = _ring("only")
    loop.next(None)
    assert loop.current == "only"
    loop.prev(None)
    assert loop.current == "only"


@pytest.fixture
def folder(tmp_path):
    (tmp_path / "a.z80").write_bytes(b"snap")
    (tmp_path / "b.tap").write_bytes(b"tape")
    (tmp_path / "c.txt").write_bytes(b"text")
    return tmp_path


def test_reload_lists_folder(folder):
    loop = DirectoryFileLoop(folder)
    loop.reload()
    assert sorted(loop.names()) == ["a.z80", "b.tap", "c.txt"]


def test_reload_missing_folder_is_empty(tmp_path):
    loop = DirectoryFileLoop(tmp_path / "missing")
    loop.reload()
    assert loop.names() == []


def test_load_snapshot_and_tape(folder):
    spectrum = _Spectrum()
    with DirectoryFileLoop(folder) as loop:
        loop.reload()
        assert loop.current == "c.txt"
        loop.curr(spectrum)
        assert spectrum.calls == []
        loop.next(spectrum)
        assert spectrum.calls == [("z80", b"snap")]
        loop.next(spectrum)
        assert spectrum.calls[-1] == ("tap", b"tape")
        loop.next(spectrum)
        assert spectrum.calls[-1] == ("tap", None)


def test_close_closes_open_tape(folder):
    streams = []

    class _Keep(_Spectrum):
        def load_tap(self, stream):
            streams.append(stream)

    loop = DirectoryFileLoop(folder)
    loop.add("b.tap")
    loop.curr(_Keep())
    assert loop.current == "b.tap"
    assert len(streams) == 1
    assert streams[0].closed is False
    loop.close()
    assert streams[0].closed is True


def test_kiosk(tmp_path):
    assert Kiosk().is_kiosk() is False
    assert DirectoryKiosk(tmp_path).is_kiosk() is False
    (tmp_path / "kiosk.txt").write_text("")
    assert DirectoryKiosk(tmp_path).is_kiosk() is True