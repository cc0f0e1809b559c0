# zxpico

The input, file and display logic around a ZX Spectrum 48K/128K emulator,
in plain Python with no third-party dependencies.

## Modules

### `zxpico.joystick`

- `Joystick` is the base class. Its `mode` is a `JoystickMode`: `KEMPSTON`
  (the default) or `SINCLAIR`.
  - `get_kempston()` returns the Kempston value in Kempston mode and 0
    otherwise.
  - `get_sinclair_l()` and `get_sinclair_r()` return the Sinclair value in
    Sinclair mode and 0xFF otherwise. `get_sinclair_r()` also reads the left
    stick.
- `HidJoystick(source)` takes a callable that returns up to two
  `HidJoystickState`s. Each state has axis values, an `AxisRange` for each
  axis, buttons and an `updated` counter.
  - An axis at its logical minimum or maximum counts as a direction.
  - Buttons 0–2 are fire.
  - The first stick drives the Kempston port and the left Sinclair port. The
    second stick drives the right Sinclair port.
  - A stick is decoded again only when its `updated` value changes.
- `PicomputerJoystick(kempston_source)` returns the value from
  `kempston_source` while `enabled` is true, and 0 otherwise.

### `zxpico.keyboard`

- `Keyboard(joystick)` models the Spectrum's 8×5 key matrix.
  - `press`, `release` and `reset` change the matrix.
  - `read(address)` returns the port value for the lines selected by the high
    byte of the address.
  - Reads of 0xF7FE and 0xEFFE also take in the joystick's Sinclair values.
- `HidKeyboard(quick_save, joystick, snap_list, tape_list)` applies a
  `KeyboardReport` (a modifier byte and six keycodes) to the matrix.
  - Either Shift maps to CAPS SHIFT, and right Alt maps to SYMBOL SHIFT.
  - `find_key` gives the matrix contacts for a HID keycode.
  - Arrow keys and Backspace press two keys at once.
  - A report whose first keycode is 1 (rollover) releases every key.
- A function key counts only on the report in which it first appears. With no
  modifier, the function keys call the object in `spectrum`:

  | Key     | Action                                                                      |
  |---------|-----------------------------------------------------------------------------|
  | F1      | `process_hid_report` returns `True` to open the menu (not in kiosk mode)    |
  | F3      | `toggle_mute()`                                                             |
  | F4      | `toggle_moderate()`                                                         |
  | F5–F7   | current, previous and next tape from `tape_list`                            |
  | F8–F10  | current, previous and next snapshot from `snap_list`                        |
  | F11     | `reset(SpectrumModel.ZX48K)`                                                |
  | F12     | `reset(SpectrumModel.ZX128K)`                                               |

  - Left Ctrl+F*n* calls `quick_save.save(spectrum, n - 1)`. It is ignored in
    kiosk mode.
  - Left Alt+F*n* calls `quick_save.load(spectrum, n - 1)`.
- `mount()` and `unmount()` keep a count of attached keyboards.
  `is_mounted()` reports whether the count is above zero.

### `zxpico.fileloop`

- `FileLoop` is a ring of file names. `add`, `next`, `prev` and `curr` move
  through it and call `load` on the current name.
- `DirectoryFileLoop(folder)` fills the ring from a folder with `reload()`.
  - `.z80` files go to `spectrum.load_z80(stream)`.
  - `.tap` files stay open and go to `spectrum.load_tap(stream)`.
  - Loading another file first calls `load_tap(None)` and closes the open
    tape.
  - The object is a context manager, and `close()` closes any tape left open.
- `file_extension` returns the text after the last dot of a name.
- `Kiosk` and `DirectoryKiosk(folder)` report kiosk mode. `DirectoryKiosk`
  turns it on when `kiosk.txt` exists in the folder.

### `zxpico.keyscan`

`KeyScanner` debounces a 6×6 key matrix over four samples per row.

- Call `scan_row(columns)` once per row, with the active-high column bits of
  `current_row`.
- `hid_reports()` returns `(current, previous)` `KeyboardReport`s.
  - There are alphabetic and numeric layouts.
  - The arrow keys act as cursor keys, or as a joystick in Kempston mode.
  - An Alt layer gives function keys and sets Ctrl for quick saves.
  - More than six keys held produces a rollover report.
- `kempston()` gives the joystick byte in Kempston mode.

### `zxpico.scanline`

These functions render one scanline from screen memory (6144 bytes) and
attribute memory (768 bytes). They draw the border and use the frame number
for FLASH.

- `prepare_vga332_scanline` returns 160 words of four RGB332 bytes: 640 pixels,
  with each Spectrum pixel doubled.
- `prepare_rgb444_scanline` returns 160 words of two RGB444 pixels each:
  320 pixels.
- `rgb444_frame` returns all 240 RGB444 lines.

Short memory or a border colour outside 0–15 raises `ValueError`.

### `zxpico.saves`

`SaveStore(root)` works on card paths such as
`/zxspectrum/snapshots/game.z80`, found below `root`.

- `snap_path` names a snapshot and adds `.z80` when the name lacks it.
- `exists` checks for a file.
- `delete` removes a file.
- `rename` refuses to overwrite an existing file.
- `list_alphabetical` lists a folder, sorted without regard to ASCII case by
  `sort_names`.

## What it does not do

The package has no Z80 or Spectrum machine of its own, no menu screen, no
video or sound output and no command to run.

- The `spectrum` and `quick_save` objects passed to the keyboard and file
  loops must be supplied by the caller, with the methods named above.
- Joystick and key-matrix input come from callables and values the caller
  provides. The package does not read them from devices itself.

## Install

```
pip install .
```

## Example

```python
from zxpico.keyboard import Keyboard

kb = Keyboard(None)
kb.press(0, 1)               # Z on matrix line 0
print(hex(kb.read(0xfefe)))  # 0x1d
```

## Tests

```
pip install ".[test]"
pytest
```