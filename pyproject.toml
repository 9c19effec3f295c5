[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dmgcore"
version = "0.1.0"
description = "Hardware components of a monochrome handheld game console emulator: CPU registers, memory map, bank controllers, timer, joypad and PPU."
requires-python = ">=3.10"
dependencies = []
keywords = ["emulator", "dmg", "ppu", "mmu", "mbc", "cpu-registers"]
classifiers = [
    "Development Status :: 3 - Alpha",
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
packages = ["dmgcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
