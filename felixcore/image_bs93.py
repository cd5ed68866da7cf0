"""Homebrew BS93 executables loaded straight into RAM."""

from __future__ import annotations

import struct

_HEADER = struct.Struct(">HBBBB4s")
HEADER_SIZE = _HEADER.size
MAGIC = b"BS93"


class ImageBS93:
    """A BS93 program image, header included."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)

    @classmethod
    def from_bytes(cls, data: bytes) -> ImageBS93 | None:
        """Return an image if ``data`` carries the BS93 magic, else None."""
        if len(data) < HEADER_SIZE:
            return None
        if bytes(data[6:10]) != MAGIC:
            return None
        return cls(data)

    @property
    def load_address(self) -> int:
        return (self.data[2] << 8) | self.data[3]

    @property
    def size(self) -> int:
        return (self.data[4] << 8) | self.data[5]

    def load(self, memory: bytearray) -> int | None:
        """Copy the image into ``memory``; return where it starts or None if it does not fit."""
        load_address = self.load_address
        real_load_address = (load_address - HEADER_SIZE) & 0xFFFF
        if real_load_address >= load_address:
            return None
        real_size = min(self.size, len(self.data))
        if real_load_address + real_size > len(memory):
            return None
        memory[real_load_address : real_load_address + real_size] = self.data[:real_size]
        return real_load_address