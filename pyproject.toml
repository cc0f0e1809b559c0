[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zxpico"
version = "0.2.0"
description = "Input devices, file loops, keypad scanning and scanline rendering for a ZX Spectrum 48K/128K emulator front end"
requires-python = ">=3.10"
dependencies = []
keywords = ["zx-spectrum", "emulator", "joystick", "keyboard", "scanline", "hid"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zxpico"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
