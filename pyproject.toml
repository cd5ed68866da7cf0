[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "felixcore"
version = "0.1.0"
description = "Building blocks of a handheld console emulator: image loaders, timers, EEPROM, sprite math, sprite decoding and debugging traps"
requires-python = ">=3.10"
dependencies = []
keywords = ["emulator", "65c02", "eeprom", "cartridge", "sprites"]
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
packages = ["felixcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
