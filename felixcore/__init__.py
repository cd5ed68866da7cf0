"""Building blocks for emulating a 65C02-based handheld console: image loaders, timers, EEPROM, sprite math and decoding, and debugging traps."""

__version__ = "0.1.0"